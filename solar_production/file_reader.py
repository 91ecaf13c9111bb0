import os
from itertools import islice
from typing import Optional

import chardet
import pandas as pd
from rich.console import Console

from solar_production.errors import IngestionFailure
from solar_production.timeseries import TimeSeriesStore
from solar_production.transformer import parse_energy_value, standardize_dates

console = Console()

SUPPORTED_EXTENSIONS = (".csv", ".txt", ".tsv")

# Bytes read for encoding detection and lines read for separator detection
ENCODING_SAMPLE_BYTES = 64_000
DELIMITER_SAMPLE_LINES = 20

# Candidate field separators, in order of preference on ties
DELIMITER_NAMES = {",": "comma", ";": "semicolon", "\t": "tab", "|": "pipe"}


def clean_path(path: str) -> str:
    """Normalise a path given on the command line.

    Surrounding quotes and whitespace are removed and ``~`` is expanded.
    """
    return os.path.expanduser(path.strip().strip('"').strip("'"))


def detect_encoding(file_path: str) -> str:
    """Guess the text encoding of a production export.

    A sample that is plain ASCII, or that chardet cannot place, is read
    as UTF-8.
    """
    with open(file_path, "rb") as f:
        sample = f.read(ENCODING_SAMPLE_BYTES)
    guess = chardet.detect(sample)
    encoding = guess["encoding"]
    if encoding is None or encoding.lower() == "ascii":
        encoding = "utf-8"
    console.print(f"  Encoding of {os.path.basename(file_path)}: [bold]{encoding}[/bold] "
                  f"({(guess['confidence'] or 0.0):.0%} sure)")
    return encoding


def detect_delimiter(file_path: str, encoding: str) -> str:
    """Guess the field separator of a production export.

    A separator must occur on every sampled line. Among those, one that
    splits every line into the same number of fields wins, then the one
    occurring most often.
    """
    with open(file_path, "r", encoding=encoding, errors="replace") as f:
        sample = [line for line in islice(f, DELIMITER_SAMPLE_LINES) if line.strip()]

    found = {}
    for delim in DELIMITER_NAMES:
        counts = {line.count(delim) for line in sample}
        if sample and min(counts) > 0:
            found[delim] = (len(counts) == 1, max(counts))

    if not found:
        console.print("  [yellow]No field separator found, assuming comma[/yellow]")
        return ","

    best = max(found, key=found.get)
    console.print(f"  Field separator: [bold]{DELIMITER_NAMES[best]}[/bold]")
    return best


def read_daily_energy_frame(file_path: str) -> pd.DataFrame:
    """Read a monthly production export into a raw string DataFrame.

    The file has a header row; column 0 holds the date, column 1 the
    energy value in kWh.
    """
    file_path = clean_path(file_path)

    if not os.path.isfile(file_path):
        raise IngestionFailure(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise IngestionFailure(f"Unsupported file format: {ext}")

    encoding = detect_encoding(file_path)
    delimiter = detect_delimiter(file_path, encoding)

    try:
        df = pd.read_csv(
            file_path,
            sep=delimiter,
            encoding=encoding,
            header=0,
            dtype=str,
            keep_default_na=False,
        )
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestionFailure(f"Could not parse {os.path.basename(file_path)}: {e}") from e

    if len(df.columns) < 2:
        raise IngestionFailure(
            f"Expected a date and an energy column in {os.path.basename(file_path)}, "
            f"found {len(df.columns)} column(s)")

    df.columns = [str(c) for c in df.columns]
    return df


def load_daily_energy_csv(file_path: str, name: Optional[str] = None) -> TimeSeriesStore:
    """Load a monthly production CSV into a fresh TimeSeriesStore.

    Blank values are kept as missing readings. Rows whose date cannot be
    parsed abort the load.
    """
    file_path = clean_path(file_path)
    console.print(f"\n[bold cyan]Reading monthly production file[/bold cyan] {os.path.basename(file_path)}")

    try:
        df = read_daily_energy_frame(file_path)
    except pd.errors.EmptyDataError as e:
        raise IngestionFailure(f"Empty file: {file_path}") from e

    dates = standardize_dates(df.iloc[:, 0])
    bad_rows = [i for i, d in enumerate(dates) if d is None]
    if bad_rows:
        raise IngestionFailure(
            f"Unparseable date in {os.path.basename(file_path)} "
            f"at data row(s) {', '.join(str(i + 1) for i in bad_rows[:5])}")

    if name is None:
        name = os.path.splitext(os.path.basename(file_path))[0]
    store = TimeSeriesStore(name)
    for day, raw in zip(dates, df.iloc[:, 1]):
        store.set_daily_energy(day, parse_energy_value(raw))

    missing = sum(1 for v in store.daily_energy().values() if v is None)
    console.print(f"  Days: [bold]{len(store.daily_energy())}[/bold], Missing values: [bold]{missing}[/bold]")
    if missing:
        console.print(f"  [yellow]{missing} day(s) without an energy value will be skipped[/yellow]")

    return store
