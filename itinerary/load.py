import io
import os
import re
import sys
from types import MappingProxyType
from typing import List, Mapping

import pandas as pd

from itinerary.errors import AirportLookupError, LookupMalformedError, LookupNotFoundError
from itinerary.schema import AirportRecord

FIELD_COUNT = 6
NAME_COL = 0
ICAO_COL = 3
IATA_COL = 4

# A quoted field may hold commas, newlines and doubled quotes; an unquoted
# field may not contain a quote at all.
CSV_FIELD = re.compile(r'"(?:[^"]|"")*"|[^",\r\n]*')


def read_lookup_text(source) -> str:
    """Reads the whole lookup source as UTF-8 text."""
    try:
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as stream:
                raw = stream.read()
        else:
            raw = source.read()
    except OSError as e:
        raise LookupNotFoundError() from e

    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LookupMalformedError() from e


def count_records(text: str) -> int:
    """
    Checks the quoting of every record and that all records are as wide as
    the first one.

    Empty lines are not records. A line of blanks is a one-field record.

    Returns:
        The number of records in the text.

    Raises:
        LookupMalformedError: a stray quote, or a record of the wrong width.
    """
    widths = []
    pos, end = 0, len(text)
    while pos < end:
        line_start = pos
        width = 0
        while True:
            match = CSV_FIELD.match(text, pos)
            pos = match.end()
            width += 1
            if not text.startswith(",", pos):
                break
            pos += 1

        if text.startswith("\r\n", pos):
            pos += 2
        elif text.startswith("\n", pos):
            pos += 1
        elif pos < end:
            raise LookupMalformedError()

        if width == 1 and match.end() == line_start:
            continue
        if widths and width != widths[0]:
            raise LookupMalformedError()
        widths.append(width)
    return len(widths)


def read_airport_table(source) -> pd.DataFrame:
    """
    Reads the raw airport reference CSV into a DataFrame of strings.

    Every cell is kept as text, empty cells stay as empty strings and the
    header row is kept as row 0 so that its width can be checked along with
    the data rows.

    Args:
        source: A file path or an open file-like object holding the CSV.

    Returns:
        A DataFrame with one row per CSV record.
    """
    text = read_lookup_text(source)
    record_count = count_records(text)
    if record_count == 0:
        return pd.DataFrame()

    try:
        table = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
        )
    except ValueError as e:
        raise LookupMalformedError() from e

    # pandas drops lines of blanks that count_records keeps as records
    if len(table) != record_count:
        raise LookupMalformedError()
    return table


def read_airport_records(table: pd.DataFrame) -> List[AirportRecord]:
    """
    Validates the table shape and converts each data row to an AirportRecord.

    The header row is skipped but still has to be exactly FIELD_COUNT wide.
    A single bad row fails the whole table.
    """
    if len(table) <= 1:
        return []

    if table.shape[1] != FIELD_COUNT or table.isna().any(axis=None):
        raise LookupMalformedError()

    data = table.iloc[1:]
    required = data[[NAME_COL, ICAO_COL, IATA_COL]]
    if (required == "").any(axis=None):
        raise LookupMalformedError()

    return [
        AirportRecord(name=name, icao_code=icao, iata_code=iata)
        for name, icao, iata in zip(data[NAME_COL], data[ICAO_COL], data[IATA_COL])
    ]


def build_lookup(records: List[AirportRecord]) -> Mapping[str, str]:
    """
    Maps '#' + IATA and '##' + ICAO to the airport name.

    Records are applied in order, so a later record wins when two share a
    code.
    """
    lookup = {}
    for record in records:
        for token in record.tokens():
            lookup[token] = record.name
    return MappingProxyType(lookup)


def load_airport_lookup(source) -> Mapping[str, str]:
    """
    Loads the airport reference CSV and builds the code lookup from it.

    Args:
        source: A file path or an open file-like object holding the CSV.

    Returns:
        A read-only mapping from prefixed airport code to airport name.

    Raises:
        LookupNotFoundError: the source cannot be opened.
        LookupMalformedError: the CSV cannot be parsed or a row is invalid.
    """
    table = read_airport_table(source)
    return build_lookup(read_airport_records(table))


if __name__ == '__main__':
    if len(sys.argv) != 2:
        print("Usage: python -m itinerary.load <airport-lookup.csv>")
        sys.exit(1)

    lookup_path = sys.argv[1]
    try:
        airport_lookup = load_airport_lookup(lookup_path)
    except AirportLookupError as e:
        print(f"Error: {e} at {lookup_path}")
        sys.exit(1)

    for token, name in airport_lookup.items():
        print(f"{token:>8}  {name}")
