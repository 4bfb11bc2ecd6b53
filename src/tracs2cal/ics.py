"""Event-to-ICS conversion utilities."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional

from .classify import CalendarEvent
from .config import CALENDAR_NAME
from .errors import EmptyResultError

logger = logging.getLogger(__name__)


def _format_dt_for_ics(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _format_local(day: date, clock: time) -> str:
    return f"{_format_date(day)}T{clock.strftime('%H%M')}00"


def _escape_ics_text(text: str | None) -> str:
    if text is None:
        return ""
    text = text.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return text.replace("\n", "\\n")


def _event_to_ics(event: CalendarEvent, dtstamp: str) -> Optional[str]:
    if not event.subject:
        logger.debug("Skipping event without subject: %r", event)
        return None

    lines: List[str] = ["BEGIN:VEVENT", f"UID:{uuid.uuid4()}"]

    if event.all_day:
        # DTEND is exclusive for all-day events
        end_date = event.end_date + timedelta(days=1)
        lines.append(f"DTSTART;VALUE=DATE:{_format_date(event.start_date)}")
        lines.append(f"DTEND;VALUE=DATE:{_format_date(end_date)}")
    else:
        lines.append(f"DTSTART:{_format_local(event.start_date, event.start_time)}")
        lines.append(f"DTEND:{_format_local(event.end_date, event.end_time)}")

    lines.append(f"SUMMARY:{_escape_ics_text(event.subject)}")
    if event.description:
        lines.append(f"DESCRIPTION:{_escape_ics_text(event.description)}")
    if event.location:
        lines.append(f"LOCATION:{_escape_ics_text(event.location)}")
    lines.append(f"DTSTAMP:{dtstamp}")
    lines.append("END:VEVENT")
    return "\r\n".join(lines)


def events_to_ics(
    events: Iterable[CalendarEvent],
    *,
    calendar_name: str = CALENDAR_NAME,
) -> str:
    """Render events as a VCALENDAR document with CRLF line endings."""
    events = list(events)
    if not events:
        raise EmptyResultError("No events to export. Please upload a file first.")

    dtstamp = _format_dt_for_ics(datetime.now(timezone.utc))
    header = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:-//{calendar_name}//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    body = [vevent for vevent in (_event_to_ics(event, dtstamp) for event in events) if vevent]
    footer = ["END:VCALENDAR"]
    return "\r\n".join(header + body + footer)
