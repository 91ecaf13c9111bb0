"""SolarEdge monitoring API client.

Fetches daily energy and 15-minute power readings for one site and
loads them into a TimeSeriesStore. Any retrieval problem raises
IngestionFailure before a store is handed to the analysis.
"""

from typing import Iterator, Optional

import requests
from rich.console import Console

from solar_production.config import SiteConfig
from solar_production.errors import IngestionFailure
from solar_production.timeseries import TimeSeriesStore
from solar_production.transformer import parse_energy_value, parse_reading_timestamp
from solar_production.utils import month_start_end, month_start_end_time, period_name

console = Console()


def _get_json(config: SiteConfig, path: str, params: dict, session=None) -> dict:
    """GET an API endpoint and decode its JSON body."""
    http = session if session is not None else requests
    url = f"{config.base_url}/site/{config.site_id}/{path}"
    query = dict(params, api_key=config.api_key)

    try:
        response = http.get(url, params=query, timeout=config.timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise IngestionFailure(f"HTTP request to /{path} failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise IngestionFailure(f"Invalid JSON from /{path}: {e}") from e


def _values(payload: dict, key: str) -> list:
    try:
        values = payload[key]["values"]
    except (KeyError, TypeError) as e:
        raise IngestionFailure(f"Unexpected response, missing '{key}.values'") from e
    if not isinstance(values, list):
        raise IngestionFailure(f"Unexpected response, '{key}.values' is not a list")
    return values


def _split_entry(entry: dict, key: str):
    try:
        day, time_of_day = parse_reading_timestamp(entry["date"])
    except (KeyError, TypeError, ValueError) as e:
        raise IngestionFailure(f"Malformed {key} entry: {entry!r}") from e
    return day, time_of_day, parse_energy_value(entry.get("value"))


def fetch_daily_energy(config: SiteConfig, start_date: str, end_date: str,
                       session=None) -> Iterator[tuple]:
    """Yield (date, kWh) pairs from the energy endpoint (timeUnit=DAY)."""
    payload = _get_json(config, "energy", {
        "timeUnit": "DAY",
        "startDate": start_date,
        "endDate": end_date,
    }, session)
    for entry in _values(payload, "energy"):
        day, _, value = _split_entry(entry, "energy")
        yield day, value


def fetch_interval_power(config: SiteConfig, start_time: str, end_time: str,
                         session=None) -> Iterator[tuple]:
    """Yield (date, time, kW) triples from the power endpoint (15 min)."""
    payload = _get_json(config, "power", {
        "startTime": start_time,
        "endTime": end_time,
    }, session)
    for entry in _values(payload, "power"):
        yield _split_entry(entry, "power")


def load_month(config: SiteConfig, year: int, month: int,
               session=None, name: Optional[str] = None) -> TimeSeriesStore:
    """Fetch one calendar month of energy and power into a fresh store.

    The power endpoint's end bound is the first instant of the next
    month, so readings dated outside (year, month) are dropped.
    """
    store = TimeSeriesStore(name or period_name(year, month))
    console.print(f"\n[bold cyan]Fetching {store.name}[/bold cyan] (site {config.site_id})")

    skipped = 0
    start_date, end_date = month_start_end(year, month)
    energy = 0
    for day, value in fetch_daily_energy(config, start_date, end_date, session):
        if (day.year, day.month) != (year, month):
            skipped += 1
            continue
        store.set_daily_energy(day, value)
        energy += 1
    console.print(f"  Daily energy readings: [bold]{energy}[/bold]")

    start_time, end_time = month_start_end_time(year, month)
    power = 0
    for day, time_of_day, value in fetch_interval_power(config, start_time, end_time, session):
        if (day.year, day.month) != (year, month):
            skipped += 1
            continue
        store.set_interval_power(day, time_of_day, value)
        power += 1
    console.print(f"  Power readings: [bold]{power}[/bold]")

    if skipped:
        console.print(f"  [yellow]Skipped {skipped} reading(s) outside {store.name}[/yellow]")
    if store.is_empty():
        console.print(f"  [yellow]No readings returned for {store.name}[/yellow]")

    return store
