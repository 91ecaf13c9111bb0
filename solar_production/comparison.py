"""Period-over-period comparison of analyzed reports."""

from dataclasses import dataclass

from solar_production.errors import ZeroBaseline
from solar_production.statistics import ReportModel


# (label, ReportModel attribute)
COMPARED_METRICS = [
    ("total production", "total_production"),
    ("max power", "max_power"),
    ("max daily production", "max_daily_production"),
]

# Metrics available without interval power data (CSV exports)
ENERGY_METRICS = [m for m in COMPARED_METRICS if m[1] != "max_power"]


@dataclass(frozen=True)
class MetricComparison:
    """How much `other` differs from `baseline` on one metric.

    ``percent_difference`` is positive when `other` is lower than the
    baseline, negative when it is higher.
    """
    metric: str
    baseline_name: str
    other_name: str
    baseline_value: float
    other_value: float
    percent_difference: float

    @property
    def direction(self) -> str:
        if self.percent_difference > 0:
            return "lower"
        if self.percent_difference < 0:
            return "higher"
        return "equal"

    @property
    def magnitude(self) -> float:
        return abs(self.percent_difference)


@dataclass(frozen=True)
class ComparisonResult:
    baseline_name: str
    other_name: str
    metrics: tuple[MetricComparison, ...]

    def __post_init__(self):
        object.__setattr__(self, "metrics", tuple(self.metrics))

    def get(self, metric: str) -> MetricComparison:
        for m in self.metrics:
            if m.metric == metric:
                return m
        raise KeyError(metric)


def percent_difference(baseline_value: float, other_value: float) -> float:
    """(1 - other / baseline) * 100, rounded to 2 decimals."""
    if baseline_value == 0:
        raise ZeroBaseline("Baseline value is 0, cannot compute relative difference")
    ratio = other_value / baseline_value
    return round((1 - ratio) * 100, 2)


def compare(baseline: ReportModel, other: ReportModel,
            metrics: list[tuple[str, str]] | None = None) -> ComparisonResult:
    """Compare `other` against `baseline` on each (label, attribute) metric.

    Defaults to COMPARED_METRICS.

    Raises:
        ZeroBaseline: a baseline metric is 0.
    """
    if metrics is None:
        metrics = COMPARED_METRICS

    results = []
    for label, attr in metrics:
        baseline_value = getattr(baseline, attr)
        other_value = getattr(other, attr)
        try:
            pct = percent_difference(baseline_value, other_value)
        except ZeroBaseline as e:
            raise ZeroBaseline(
                f"Cannot compare {label}: baseline '{baseline.name}' is 0") from e
        results.append(MetricComparison(
            metric=label,
            baseline_name=baseline.name,
            other_name=other.name,
            baseline_value=baseline_value,
            other_value=other_value,
            percent_difference=pct,
        ))

    return ComparisonResult(
        baseline_name=baseline.name,
        other_name=other.name,
        metrics=results,
    )
