"""Tests for solar_production.transformer module."""

from datetime import date, time

import numpy as np
import pandas as pd
import pytest

from solar_production.transformer import (
    parse_energy_value,
    parse_reading_timestamp,
    standardize_dates,
)


class TestParseEnergyValue:
    @pytest.mark.parametrize("raw, expected", [
        ("12.5", 12.5),
        ('"12.5"', 12.5),
        ("1.234,56", 1234.56),
        ("1234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("1 234,5", 1234.5),
        ("12.5 kWh", 12.5),
        (7, 7.0),
        (3.25, 3.25),
    ])
    def test_parses(self, raw, expected):
        assert parse_energy_value(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, "", "   ", "null", "NaN", "abc", np.nan])
    def test_missing(self, raw):
        assert parse_energy_value(raw) is None

    def test_negative_kept(self):
        assert parse_energy_value("-2.5") == -2.5


class TestParseReadingTimestamp:
    def test_api_timestamp(self):
        assert parse_reading_timestamp("2023-06-01 13:15:00") == (date(2023, 6, 1), time(13, 15))

    def test_bare_date_is_midnight(self):
        assert parse_reading_timestamp("2023-06-01") == (date(2023, 6, 1), time(0, 0))

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_reading_timestamp("not a date")


class TestStandardizeDates:
    def test_drops_time_part(self):
        result = standardize_dates(pd.Series(["2023-06-01 00:00:00", '"2023-06-02"']))
        assert list(result) == [date(2023, 6, 1), date(2023, 6, 2)]

    def test_unparseable_is_none(self):
        result = standardize_dates(pd.Series(["2023-06-01", "garbage"]))
        assert result.iloc[0] == date(2023, 6, 1)
        assert result.iloc[1] is None
