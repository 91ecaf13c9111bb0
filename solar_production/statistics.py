"""Statistical analysis for one observation period.

Pure-function module. ``analyze`` turns a populated TimeSeriesStore into
a ReportModel: totals, maxima, averages and the per-day sunny ratio.
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from solar_production.errors import EmptySeries, ZeroBaseline
from solar_production.timeseries import TimeSeriesStore


@dataclass(frozen=True)
class ReportModel:
    """Derived metrics of one observation period. Immutable once built."""
    name: str
    total_production: float                   # kWh
    max_daily_production: float               # kWh
    max_daily_production_date: Optional[date]
    average_production: float                 # kWh / day
    max_power: float                          # kW
    max_power_date: Optional[date]
    sunny_ratio: Mapping[date, float] = field(default_factory=dict)
    average_sunny_ratio: float = 0.0
    day_count: int = 0
    missing_days: int = 0

    def __post_init__(self):
        object.__setattr__(self, "sunny_ratio",
                           MappingProxyType(dict(self.sunny_ratio)))

    @property
    def cloudiness_percent(self) -> float:
        """Average cloudiness: 100% minus the average sunny ratio."""
        return round((1 - self.average_sunny_ratio) * 100, 2)


def _running_max(readings: Iterable[tuple[date, Optional[float]]]) -> tuple[float, Optional[date]]:
    """Return (max, date) over readings, starting from 0.

    Missing readings are skipped. Only a strictly greater value moves the
    maximum, so the first date wins on ties and a series with no positive
    value reports (0, None).
    """
    max_value = 0.0
    max_date = None
    for day, value in readings:
        if value is None:
            continue
        if value > max_value:
            max_value = value
            max_date = day
    return max_value, max_date


def max_energy(store: TimeSeriesStore) -> tuple[float, Optional[date]]:
    """Largest daily energy value and the date it occurred on."""
    return _running_max(store.daily_energy().items())


def max_power(store: TimeSeriesStore) -> tuple[float, Optional[date]]:
    """Largest interval power value and the date (not time) it occurred on.

    Returns (0, None) when the store holds no power readings.
    """
    def _readings():
        for day, by_time in store.interval_power().items():
            for value in by_time.values():
                yield day, value

    return _running_max(_readings())


def total_energy(store: TimeSeriesStore) -> float:
    """Sum of all present daily energy values."""
    return float(sum(v for v in store.daily_energy().values() if v is not None))


def compute_sunny_ratio(store: TimeSeriesStore,
                        max_daily_production: float) -> dict[date, float]:
    """Each day's energy relative to the period's best day.

    Days with a missing reading have no ratio.
    """
    if max_daily_production == 0:
        raise ZeroBaseline(
            f"Cannot derive sunny ratio for '{store.name}': "
            f"max daily production is 0")

    return {
        day: value / max_daily_production
        for day, value in store.daily_energy().items()
        if value is not None
    }


def analyze(store: TimeSeriesStore) -> ReportModel:
    """Compute the ReportModel of a fully populated store.

    Raises:
        EmptySeries: the store has no daily energy entries.
        ZeroBaseline: no day produced more than 0 kWh.
    """
    daily = store.daily_energy()
    if not daily:
        raise EmptySeries(f"No daily energy readings for '{store.name}'")

    total = total_energy(store)
    max_daily, max_daily_date = max_energy(store)
    average = total / len(daily)

    sunny_ratio = compute_sunny_ratio(store, max_daily)
    if not sunny_ratio:
        raise EmptySeries(f"No sunny ratio values for '{store.name}'")
    average_sunny_ratio = sum(sunny_ratio.values()) / len(sunny_ratio)

    peak_power, peak_power_date = max_power(store)

    return ReportModel(
        name=store.name,
        total_production=total,
        max_daily_production=max_daily,
        max_daily_production_date=max_daily_date,
        average_production=average,
        max_power=peak_power,
        max_power_date=peak_power_date,
        sunny_ratio=sunny_ratio,
        average_sunny_ratio=average_sunny_ratio,
        day_count=len(daily),
        missing_days=sum(1 for v in daily.values() if v is None),
    )
