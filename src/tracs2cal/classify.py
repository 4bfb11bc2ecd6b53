"""Turning roster rows into calendar events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .errors import RowParseError
from .roster import (
    RosterRow,
    data_rows,
    format_date,
    minutes_of_day,
    one_minute_after,
    parse_clock,
    parse_roster_date,
    read_rows,
)

logger = logging.getLogger(__name__)

NON_SHIFT_CODES = {"RD", "AL", "STUD"}
REST_CODES = {"", "RD"}
LEAVE_CODES = {"AL", "A/L"}
STUDY_CODE = "STUD"

STUDY_START = time(9, 0)
STUDY_END = time(17, 0)
DAY_END = time(23, 59)

MIDNIGHT_WARNING = " - WARNING: FINISHED AFTER MIDNIGHT ASK BEFORE PLANNING ANYTHING EARLY"

OvernightIndex = Dict[date, time]


class EventKind(str, Enum):
    REST_DAY = "rest_day"
    ANNUAL_LEAVE = "annual_leave"
    STUDY_DAY = "study_day"
    WORK_SHIFT = "work_shift"

    @property
    def is_day_off(self) -> bool:
        return self in (EventKind.REST_DAY, EventKind.ANNUAL_LEAVE)


@dataclass(frozen=True)
class CalendarEvent:
    kind: EventKind
    subject: str
    start_date: date
    end_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    all_day: bool = False
    description: str = ""
    location: str = ""

    def __post_init__(self) -> None:
        if self.start_date is None or self.end_date is None:
            raise ValueError(f"{self.subject}: events need a start and an end date")
        if self.end_date < self.start_date:
            raise ValueError(f"{self.subject}: end date {self.end_date} before start date {self.start_date}")
        if self.all_day and (self.start_time is not None or self.end_time is not None):
            raise ValueError(f"{self.subject}: all-day events carry no clock times")
        if not self.all_day and (self.start_time is None or self.end_time is None):
            raise ValueError(f"{self.subject}: timed events need both a start and an end time")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "subject": self.subject,
            "start_date": format_date(self.start_date),
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else "",
            "end_date": format_date(self.end_date),
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else "",
            "all_day": self.all_day,
            "description": self.description,
            "location": self.location,
        }


@dataclass
class ConversionResult:
    events: List[CalendarEvent] = field(default_factory=list)
    skipped_rows: int = 0


def _is_timed_shift(row: RosterRow) -> bool:
    return bool(row.start_text and row.end_text) and row.start_text not in NON_SHIFT_CODES


def build_overnight_index(rows: Iterable[RosterRow]) -> OvernightIndex:
    """Map each date to the end time of a shift that ran into it from the day before."""
    overnight: OvernightIndex = {}
    for row in rows:
        if not _is_timed_shift(row):
            continue
        try:
            shift_date = parse_roster_date(row.date_text)
            start = parse_clock(row.start_text)
            end = parse_clock(row.end_text)
        except RowParseError as exc:
            logger.info("Overnight scan skipped %r: %s", row.date_text, exc)
            continue
        if minutes_of_day(end) < minutes_of_day(start):
            overnight[shift_date + timedelta(days=1)] = end
    return overnight


def _day_off_event(
    kind: EventKind, subject: str, label: str, row: RosterRow, day: date, carried_end: Optional[time]
) -> CalendarEvent:
    description = f"{label} ({row.date_text})"
    if carried_end is None:
        return CalendarEvent(kind, subject, day, day, all_day=True, description=description)
    return CalendarEvent(
        kind,
        subject,
        day,
        day,
        start_time=one_minute_after(carried_end),
        end_time=DAY_END,
        all_day=False,
        description=description + MIDNIGHT_WARNING,
    )


def classify_row(row: RosterRow, overnight: OvernightIndex) -> CalendarEvent:
    """Classify one row; raises RowParseError when its date or shift times are unreadable."""
    day = parse_roster_date(row.date_text)
    carried_end = overnight.get(day)
    start_text = row.start_text

    if start_text in REST_CODES:
        return _day_off_event(EventKind.REST_DAY, "RD", "Rest Day", row, day, carried_end)

    if start_text in LEAVE_CODES:
        return _day_off_event(EventKind.ANNUAL_LEAVE, "A/L", "Annual Leave", row, day, carried_end)

    if start_text == STUDY_CODE:
        start = STUDY_START
        if carried_end is not None:
            adjusted = one_minute_after(carried_end)
            if minutes_of_day(adjusted) > minutes_of_day(STUDY_START):
                start = adjusted
        return CalendarEvent(
            EventKind.STUDY_DAY,
            "STUD Day",
            day,
            day,
            start_time=start,
            end_time=STUDY_END,
            description=f"Study Day ({row.date_text})",
        )

    start = parse_clock(start_text)
    end = parse_clock(row.end_text)
    end_date = day
    if minutes_of_day(end) < minutes_of_day(start):
        end_date = day + timedelta(days=1)
    return CalendarEvent(
        EventKind.WORK_SHIFT,
        row.shift_code or "Work Shift",
        day,
        end_date,
        start_time=start,
        end_time=end,
        description=f"Work Shift ({row.date_text})",
    )


def classify_rows(rows: List[RosterRow]) -> ConversionResult:
    overnight = build_overnight_index(rows)
    result = ConversionResult()
    for row in rows:
        try:
            result.events.append(classify_row(row, overnight))
        except RowParseError as exc:
            logger.warning("Skipping roster row %r: %s", row.date_text, exc)
            result.skipped_rows += 1
    return result


def convert(text: str) -> ConversionResult:
    """Run the whole CSV -> events pipeline; InputFormatError if the header is missing."""
    return classify_rows(data_rows(read_rows(text)))
