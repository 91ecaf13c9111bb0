"""In-memory readings for one observation period.

A TimeSeriesStore holds the daily energy (kWh) and interval power (kW)
readings of a single period. It is created empty, filled once by an
ingestion collaborator, then handed to ``statistics.analyze``.
"""

from datetime import date, time
from typing import Optional

import numpy as np
import pandas as pd


DATE_COL = "Date"
TIME_COL = "Time"
ENERGY_COL = "Energy (kWh)"
POWER_COL = "Power (kW)"


def _as_reading(value) -> Optional[float]:
    if value is None or pd.isna(value) or np.isinf(value):
        return None
    return value


class TimeSeriesStore:
    """Daily energy and interval power readings, keyed by calendar date.

    Values are ``Optional[float]``: ``None`` marks a missing reading and
    is skipped by the aggregations; NaN and infinite readings are stored
    as ``None``. Writing an existing key replaces the previous value.
    Iteration follows insertion order.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._daily_energy: dict[date, Optional[float]] = {}
        self._interval_power: dict[date, dict[time, Optional[float]]] = {}

    def __repr__(self) -> str:
        return (f"TimeSeriesStore(name={self.name!r}, "
                f"days={len(self._daily_energy)}, "
                f"power_days={len(self._interval_power)})")

    def set_daily_energy(self, day: date, value: Optional[float]):
        self._daily_energy[day] = _as_reading(value)

    def set_interval_power(self, day: date, time_of_day: time,
                           value: Optional[float]):
        self._interval_power.setdefault(day, {})[time_of_day] = _as_reading(value)

    def daily_energy(self) -> dict[date, Optional[float]]:
        return self._daily_energy

    def interval_power(self) -> dict[date, dict[time, Optional[float]]]:
        return self._interval_power

    def is_empty(self) -> bool:
        return not self._daily_energy and not self._interval_power

    def energy_series(self) -> pd.Series:
        """Daily energy as a float Series indexed by date (missing -> NaN)."""
        values = [np.nan if v is None else float(v)
                  for v in self._daily_energy.values()]
        return pd.Series(values, index=list(self._daily_energy.keys()),
                         dtype=float, name=ENERGY_COL)

    def power_frame(self) -> pd.DataFrame:
        """Interval power as a long DataFrame: Date, Time, Power (kW)."""
        rows = []
        for day, by_time in self._interval_power.items():
            for time_of_day, value in by_time.items():
                rows.append({
                    DATE_COL: day,
                    TIME_COL: time_of_day,
                    POWER_COL: np.nan if value is None else float(value),
                })
        return pd.DataFrame(rows, columns=[DATE_COL, TIME_COL, POWER_COL])
