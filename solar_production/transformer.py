import re
from datetime import date, time
from typing import Optional

import pandas as pd


def parse_energy_value(value) -> Optional[float]:
    """Parse a reading into a float, or None when the reading is missing.

    Handles:
      - Already numeric values (NaN -> None)
      - Quoted strings: "12.5" -> 12.5
      - European: 1.234,56 -> 1234.56
      - European decimal only: 1234,56 -> 1234.56
      - US: 1,234.56 -> 1234.56
      - Space / non-breaking space thousands separators
      - Trailing units: 12.5 kWh -> 12.5
      - Empty/blank/null -> None
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        if pd.isna(value):
            return None
        return float(value)

    value = str(value).strip().strip('"').strip("'").strip()
    if not value or value.lower() in ("null", "none", "nan"):
        return None

    value = value.replace("\xa0", "").replace("\u202f", "").replace(" ", "")
    value = re.sub(r'[a-zA-Z%]+$', '', value).strip()
    if not value:
        return None

    if "," in value and "." in value:
        if value.rfind(",") > value.rfind("."):
            # European: 1.234,56
            value = value.replace(".", "").replace(",", ".")
        else:
            # US: 1,234.56
            value = value.replace(",", "")
    elif "," in value:
        value = value.replace(",", ".")

    try:
        return float(value)
    except ValueError:
        return None


def parse_reading_timestamp(value: str) -> tuple[date, time]:
    """Split an API timestamp ("2023-06-01 13:15:00") into (date, time).

    A bare date yields midnight.
    """
    ts = pd.Timestamp(str(value).strip())
    if pd.isna(ts):
        raise ValueError(f"Missing timestamp: {value!r}")
    return ts.date(), ts.time()


def standardize_dates(series: pd.Series) -> pd.Series:
    """Parse a column of date strings to calendar dates (time part dropped).

    Unparseable entries become None.
    """
    cleaned = series.astype(str).str.strip().str.strip('"')
    dates = pd.to_datetime(cleaned, errors="coerce", format="mixed")
    return pd.Series([d.date() if pd.notna(d) else None for d in dates],
                     index=series.index, dtype=object)
