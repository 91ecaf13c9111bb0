import os

import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter
from rich.console import Console

from solar_production.comparison import ComparisonResult
from solar_production.statistics import ReportModel
from solar_production.timeseries import DATE_COL, ENERGY_COL, TIME_COL, TimeSeriesStore

console = Console()


def summary_frame(reports: list[ReportModel]) -> pd.DataFrame:
    """One row per analyzed period."""
    rows = []
    for r in reports:
        rows.append({
            "Period": r.name,
            "Total Production (kWh)": round(r.total_production, 2),
            "Max Daily Production (kWh)": round(r.max_daily_production, 2),
            "Max Daily Production Date": r.max_daily_production_date.isoformat()
            if r.max_daily_production_date else "",
            "Average Production (kWh)": round(r.average_production, 2),
            "Max Power (kW)": round(r.max_power, 2),
            "Max Power Date": r.max_power_date.isoformat() if r.max_power_date else "",
            "Average Sunny Ratio": round(r.average_sunny_ratio, 4),
            "Cloudiness (%)": r.cloudiness_percent,
            "Days": r.day_count,
            "Missing Days": r.missing_days,
        })
    return pd.DataFrame(rows)


def daily_frame(store: TimeSeriesStore, report: ReportModel) -> pd.DataFrame:
    """Date, energy and sunny ratio of every day in one period."""
    energy = store.energy_series()
    return pd.DataFrame({
        "Period": report.name,
        "Date": [d.isoformat() for d in energy.index],
        ENERGY_COL: energy.values,
        "Sunny Ratio": [report.sunny_ratio.get(d) for d in energy.index],
    })


def power_frame(store: TimeSeriesStore) -> pd.DataFrame:
    """Interval power readings of one period, dates and times as text."""
    df = store.power_frame()
    df[DATE_COL] = [d.isoformat() for d in df[DATE_COL]]
    df[TIME_COL] = [t.strftime("%H:%M") for t in df[TIME_COL]]
    df.insert(0, "Period", store.name)
    return df


def comparison_frame(comparisons: list[ComparisonResult]) -> pd.DataFrame:
    rows = []
    for result in comparisons:
        for m in result.metrics:
            rows.append({
                "Baseline": m.baseline_name,
                "Other": m.other_name,
                "Metric": m.metric,
                "Baseline Value": round(m.baseline_value, 2),
                "Other Value": round(m.other_value, 2),
                "Difference (%)": m.magnitude,
                "Direction": m.direction,
            })
    return pd.DataFrame(rows)


def save_analysis_xlsx(output_path: str,
                       periods: list[tuple[TimeSeriesStore, ReportModel]],
                       comparisons: list[ComparisonResult] | None = None):
    """Save analyzed periods (and their comparisons) to a formatted XLSX file.

    Args:
        output_path: Full path for the output file
        periods: (store, report) pairs, target period first
        comparisons: Optional comparison results
    """
    console.print(f"\n  Saving analysis XLSX: [bold]{os.path.basename(output_path)}[/bold]")

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        summary_frame([report for _, report in periods]).to_excel(
            writer, sheet_name="Summary", index=False)

        daily = [daily_frame(store, report) for store, report in periods]
        if daily:
            pd.concat(daily, ignore_index=True).to_excel(
                writer, sheet_name="Daily", index=False)

        power = [power_frame(store) for store, _ in periods if store.interval_power()]
        if power:
            pd.concat(power, ignore_index=True).to_excel(
                writer, sheet_name="Power", index=False)

        if comparisons:
            comparison_frame(comparisons).to_excel(
                writer, sheet_name="Comparison", index=False)

    # Format with openpyxl
    wb = load_workbook(output_path)
    header_font = Font(bold=True, size=11)
    for ws in wb.worksheets:
        for col_idx in range(1, ws.max_column + 1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = header_font
            cell.alignment = Alignment(horizontal="center")
            col_letter = get_column_letter(col_idx)
            header = str(cell.value or "")
            ws.column_dimensions[col_letter].width = 28 if "Date" in header else 18

    wb.save(output_path)
    console.print(f"  [green]Saved: {output_path}[/green]")
