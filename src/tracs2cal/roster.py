"""Reading TRACS Enterprise CSV exports into typed roster rows."""

from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass
from datetime import date, time
from typing import List, Sequence

from .errors import CsvParseError, InputFormatError, RowParseError

HEADER_LABELS = ("Date", "On", "Off")

# e.g. "27/03 Th27/03/2025 Th": short day/month, then the full date
_DATE_PATTERN = re.compile(r"(\d{2}/\d{2}).*?(\d{2}/\d{2}/\d{4})")


@dataclass(frozen=True)
class RosterRow:
    date_text: str
    start_text: str
    end_text: str
    shift_code: str


def read_rows(text: str) -> List[List[str]]:
    """Split CSV text into rows of stripped cells, skipping blank lines."""
    rows: List[List[str]] = []
    try:
        for raw in csv.reader(io.StringIO(text)):
            cells = [cell.strip() for cell in raw]
            if any(cells):
                rows.append(cells)
    except csv.Error as exc:
        raise CsvParseError(f"Please ensure it is a valid CSV file ({exc}).") from exc
    return rows


def find_header(rows: Sequence[Sequence[str]]) -> int:
    for index, row in enumerate(rows):
        if all(label in row for label in HEADER_LABELS):
            return index
    raise InputFormatError(
        "Could not find header row in CSV. Please ensure this is a valid TRACS Enterprise export file."
    )


def data_rows(rows: Sequence[Sequence[str]]) -> List[RosterRow]:
    """Return every row after the header whose date cell looks like a date."""
    header_index = find_header(rows)
    result: List[RosterRow] = []
    for row in rows[header_index + 1 :]:
        cells = list(row) + [""] * (4 - len(row))
        if not cells[0] or "/" not in cells[0]:
            continue
        result.append(RosterRow(*cells[:4]))
    return result


def parse_roster_date(text: str) -> date:
    match = _DATE_PATTERN.search(text)
    if not match:
        raise RowParseError(f"No DD/MM/YYYY date in {text!r}")
    day, month, year = (int(part) for part in match.group(2).split("/"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise RowParseError(f"Invalid calendar date in {text!r}: {exc}") from exc


def format_date(value: date) -> str:
    """Canonical MM/DD/YYYY rendering used in previews and JSON dumps."""
    return value.strftime("%m/%d/%Y")


def parse_clock(text: str) -> time:
    parts = text.split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise RowParseError(f"Invalid time format: {text!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        raise RowParseError(f"Time out of range: {text!r}")
    return time(hour, minute)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def one_minute_after(value: time) -> time:
    """Add a minute; 23:59 wraps to 00:00 on the same date."""
    hour, minute = value.hour, value.minute + 1
    if minute >= 60:
        hour = (hour + 1) % 24
        minute = minute % 60
    return time(hour, minute)
