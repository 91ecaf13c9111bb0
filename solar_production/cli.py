import os
import sys
from typing import Callable

from rich.console import Console

from solar_production.comparison import COMPARED_METRICS, ENERGY_METRICS, compare
from solar_production.config import SiteConfig
from solar_production.errors import SolarProductionError
from solar_production.exporter import save_analysis_xlsx
from solar_production.file_reader import load_daily_energy_csv
from solar_production.report import display_comparison, display_report
from solar_production.solaredge import load_month
from solar_production.statistics import analyze
from solar_production.timeseries import TimeSeriesStore
from solar_production.utils import build_output_filename

console = Console()

USAGE = (
    "usage: solar-production <month> <year> <other-year[:<other-year>...]> [--export DIR]\n"
    "       solar-production --csv <target.csv> <other.csv> [...] [--export DIR]"
)


class UsageError(SolarProductionError):
    pass


def parse_args(argv: list[str]) -> dict:
    """Parse the command line into a dict of options.

    Returns {"mode": "api", "month", "year", "other_years", "export_dir"}
    or {"mode": "csv", "files", "export_dir"}.
    """
    args = list(argv)
    export_dir = None
    if "--export" in args:
        idx = args.index("--export")
        if idx + 1 >= len(args):
            raise UsageError("--export requires a directory")
        export_dir = args[idx + 1]
        del args[idx:idx + 2]

    if args and args[0] == "--csv":
        files = args[1:]
        if len(files) < 2:
            raise UsageError("--csv requires a target file and at least one file to compare")
        return {"mode": "csv", "files": files, "export_dir": export_dir}

    if len(args) != 3:
        raise UsageError(f"expected 3 arguments, got {len(args)}")

    try:
        month = int(args[0])
        year = int(args[1])
        other_years = [int(yr) for yr in args[2].split(":") if yr]
    except ValueError:
        raise UsageError("month and years must be integers")

    if not 1 <= month <= 12:
        raise UsageError(f"month must be between 1 and 12, got {month}")
    if not other_years:
        raise UsageError("at least one comparison year is required")

    return {
        "mode": "api",
        "month": month,
        "year": year,
        "other_years": other_years,
        "export_dir": export_dir,
    }


def compare_periods(load_target: Callable[[], TimeSeriesStore],
                    load_others: list[Callable[[], TimeSeriesStore]],
                    export_dir: str | None = None,
                    metrics=COMPARED_METRICS) -> list:
    """Ingest, analyze and report the target, then every other period.

    Each other period is the baseline its comparison is measured against.
    Returns the list of ComparisonResult.
    """
    target_store = load_target()
    target = analyze(target_store)
    display_report(target)

    periods = [(target_store, target)]
    comparisons = []
    for load_other in load_others:
        other_store = load_other()
        other = analyze(other_store)
        display_report(other)

        result = compare(other, target, metrics)
        display_comparison(result)
        periods.append((other_store, other))
        comparisons.append(result)

    if export_dir:
        os.makedirs(export_dir, exist_ok=True)
        filename = build_output_filename(target.name, "SolarProduction", "xlsx")
        save_analysis_xlsx(os.path.join(export_dir, filename), periods, comparisons)

    return comparisons


def run(argv: list[str] | None = None):
    """Main orchestrator: parse, ingest, analyze, compare, report."""
    argv = sys.argv[1:] if argv is None else argv
    try:
        options = parse_args(argv)
    except UsageError as e:
        console.print(f"[red]{e}[/red]")
        console.print(USAGE)
        sys.exit(1)

    try:
        if options["mode"] == "csv":
            target_file, *other_files = options["files"]
            console.print(f"comparing {target_file} with {', '.join(other_files)}")
            compare_periods(
                lambda: load_daily_energy_csv(target_file),
                [lambda f=f: load_daily_energy_csv(f) for f in other_files],
                options["export_dir"],
                ENERGY_METRICS,
            )
        else:
            config = SiteConfig.from_env()
            month, year = options["month"], options["year"]
            console.print(f"comparing {month} {year} with {options['other_years']}")
            compare_periods(
                lambda: load_month(config, year, month),
                [lambda y=y: load_month(config, y, month) for y in options["other_years"]],
                options["export_dir"],
            )
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        sys.exit(0)
    except SolarProductionError as e:
        console.print(f"\n[bold red]Error: {e}[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]Error: {e}[/bold red]")
        console.print_exception(show_locals=False)
        sys.exit(1)


def main():
    run()

