"""Tests for solar_production.comparison module."""

from datetime import date

import pytest

from solar_production.comparison import (
    COMPARED_METRICS,
    ENERGY_METRICS,
    compare,
    percent_difference,
)
from solar_production.errors import ZeroBaseline
from solar_production.statistics import ReportModel


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_report(name="2022_6", total=100.0, max_daily=10.0, max_power=5.0):
    return ReportModel(
        name=name,
        total_production=total,
        max_daily_production=max_daily,
        max_daily_production_date=date(2022, 6, 10),
        average_production=total / 30,
        max_power=max_power,
        max_power_date=date(2022, 6, 11),
        average_sunny_ratio=0.5,
    )


# ---------------------------------------------------------------------------
# TestPercentDifference
# ---------------------------------------------------------------------------

class TestPercentDifference:
    @pytest.mark.parametrize("baseline, other, expected", [
        (100.0, 80.0, 20.0),
        (100.0, 120.0, -20.0),
        (100.0, 100.0, 0.0),
        (100.0, 0.0, 100.0),
        (3.0, 1.0, 66.67),
    ])
    def test_values(self, baseline, other, expected):
        assert percent_difference(baseline, other) == expected

    def test_zero_baseline_raises(self):
        with pytest.raises(ZeroBaseline):
            percent_difference(0.0, 10.0)


# ---------------------------------------------------------------------------
# TestCompare
# ---------------------------------------------------------------------------

class TestCompare:
    def test_other_lower(self):
        result = compare(_make_report(total=100.0),
                         _make_report("2023_6", total=80.0))
        m = result.get("total production")
        assert m.percent_difference == 20.0
        assert m.direction == "lower"
        assert m.magnitude == 20.0

    def test_other_higher(self):
        result = compare(_make_report(total=100.0),
                         _make_report("2023_6", total=120.0))
        m = result.get("total production")
        assert m.percent_difference == -20.0
        assert m.direction == "higher"
        assert m.magnitude == 20.0

    def test_equal(self):
        result = compare(_make_report(), _make_report("2023_6"))
        assert all(m.direction == "equal" for m in result.metrics)

    def test_names_carried(self):
        result = compare(_make_report("2022_6"), _make_report("2023_6"))
        assert result.baseline_name == "2022_6"
        assert result.other_name == "2023_6"
        assert all(m.baseline_name == "2022_6" for m in result.metrics)

    def test_all_metrics_present(self):
        result = compare(_make_report(), _make_report("2023_6"))
        assert [m.metric for m in result.metrics] == [label for label, _ in COMPARED_METRICS]

    def test_max_daily_uses_daily_production_not_power(self):
        # Max power and max daily production move in opposite directions;
        # each comparison must follow its own metric.
        baseline = _make_report(max_daily=10.0, max_power=5.0)
        other = _make_report("2023_6", max_daily=8.0, max_power=6.0)
        result = compare(baseline, other)
        assert result.get("max daily production").percent_difference == 20.0
        assert result.get("max power").percent_difference == -20.0

    def test_zero_total_baseline_raises(self):
        with pytest.raises(ZeroBaseline):
            compare(_make_report(total=0.0), _make_report("2023_6"))

    def test_zero_power_baseline_raises(self):
        with pytest.raises(ZeroBaseline):
            compare(_make_report(max_power=0.0), _make_report("2023_6"))

    def test_zero_baseline_message_names_metric_and_period(self):
        with pytest.raises(ZeroBaseline, match="max power: baseline '2022_6' is 0") as exc_info:
            compare(_make_report(max_power=0.0), _make_report("2023_6"))
        assert isinstance(exc_info.value.__cause__, ZeroBaseline)

    def test_energy_metrics_skip_power(self):
        result = compare(_make_report(max_power=0.0),
                         _make_report("2023_6", max_power=0.0),
                         ENERGY_METRICS)
        assert [m.metric for m in result.metrics] == ["total production", "max daily production"]

    def test_unknown_metric_lookup(self):
        result = compare(_make_report(), _make_report("2023_6"))
        with pytest.raises(KeyError):
            result.get("average cloudiness")

    def test_metrics_are_immutable(self):
        result = compare(_make_report(), _make_report("2023_6"))
        assert isinstance(result.metrics, tuple)
        with pytest.raises(AttributeError):
            result.metrics.append(result.metrics[0])
        assert len(result.metrics) == len(COMPARED_METRICS)
