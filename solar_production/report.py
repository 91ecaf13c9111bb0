"""Console rendering of analyzed periods and comparisons (rich tables)."""

from rich.console import Console
from rich.table import Table

from solar_production.comparison import ComparisonResult, MetricComparison
from solar_production.statistics import ReportModel

console = Console()

DIRECTION_COLORS = {"lower": "bold red", "higher": "bold green", "equal": "dim"}


def _fmt_date(day) -> str:
    return day.isoformat() if day is not None else "N/A"


def report_rows(report: ReportModel) -> list[tuple[str, str]]:
    """(label, value) rows of a period report, in display order."""
    return [
        ("Total production", f"{report.total_production:.2f} kWh"),
        ("Max daily production",
         f"{report.max_daily_production:.2f} kWh on {_fmt_date(report.max_daily_production_date)}"),
        ("Max power", f"{report.max_power:.2f} kW on {_fmt_date(report.max_power_date)}"),
        ("Average production", f"{report.average_production:.2f} kWh"),
        ("Average cloudiness", f"{report.cloudiness_percent:.2f}%"),
    ]


def display_report(report: ReportModel):
    """Print the summary table of one period."""
    table = Table(title=f"Solar production {report.name}", show_lines=True)
    table.add_column("Metric", style="bold", width=24)
    table.add_column("Value", width=34)

    for label, value in report_rows(report):
        table.add_row(label, value)

    console.print(table)
    if report.missing_days:
        console.print(f"  [yellow]{report.missing_days} of {report.day_count} day(s) "
                      f"had no energy reading[/yellow]")


def format_comparison_line(metric: MetricComparison) -> str:
    """Sentence such as "total production for 2023_6 is 20.0% lower than 2022_6"."""
    if metric.direction == "equal":
        return f"{metric.metric} for {metric.other_name} is equal to {metric.baseline_name}"
    return (f"{metric.metric} for {metric.other_name} is "
            f"{metric.magnitude:.2f}% {metric.direction} than {metric.baseline_name}")


def display_comparison(result: ComparisonResult):
    """Print one row per compared metric."""
    console.print(f"\n[bold cyan]Comparing {result.baseline_name} with {result.other_name}[/bold cyan]")

    table = Table(show_lines=True)
    table.add_column("Metric", style="bold", width=22)
    table.add_column(result.baseline_name, justify="right", width=12)
    table.add_column(result.other_name, justify="right", width=12)
    table.add_column("Difference", width=48)

    for m in result.metrics:
        color = DIRECTION_COLORS[m.direction]
        table.add_row(
            m.metric,
            f"{m.baseline_value:.2f}",
            f"{m.other_value:.2f}",
            f"[{color}]{format_comparison_line(m)}[/{color}]",
        )

    console.print(table)
