"""Shared utility functions for the solar production tool."""

import re
from datetime import date, timedelta
from typing import Optional


def build_output_filename(period: str, suffix: str, ext: str,
                          today: Optional[date] = None) -> str:
    """File name of an exported analysis, ``<YYYYMMDD>_<period>_<suffix>.<ext>``.

    Whitespace inside the period label becomes ``_``. Any other character
    that is not a word character or ``-`` is dropped.
    """
    stamp = (today or date.today()).strftime("%Y%m%d")
    label = "_".join(re.sub(r"[^\w-]", "", part) for part in period.split())
    return f"{stamp}_{label}_{suffix}.{ext.lstrip('.')}"


def month_start_end(year: int, month: int) -> tuple[str, str]:
    """First and last day of a month as YYYY-MM-DD strings."""
    start = date(year, month, 1)
    end_of_month = _next_month(start) - timedelta(days=1)
    return start.isoformat(), end_of_month.isoformat()


def month_start_end_time(year: int, month: int) -> tuple[str, str]:
    """Midnight at the start of the month and of the following month."""
    start = date(year, month, 1)
    midnight = " 00:00:00"
    return start.isoformat() + midnight, _next_month(start).isoformat() + midnight


def _next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def period_name(year: int, month: int) -> str:
    """Label of a monthly period, e.g. "2023_6"."""
    return f"{year}_{month}"
