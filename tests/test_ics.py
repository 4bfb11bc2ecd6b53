import re
from datetime import date

import pytest

from tracs2cal.classify import CalendarEvent, EventKind
from tracs2cal.errors import EmptyResultError
from tracs2cal.ics import events_to_ics


def vevents(ics_text):
    return re.findall(r"BEGIN:VEVENT\r\n(.*?)\r\nEND:VEVENT", ics_text, flags=re.S)


def test_calendar_envelope_uses_crlf(sample_events):
    ics_text = events_to_ics(sample_events, calendar_name="Roster")
    lines = ics_text.split("\r\n")
    assert lines[:5] == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Roster//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    assert lines[-1] == "END:VCALENDAR"
    assert "\n" not in ics_text.replace("\r\n", "")
    assert len(vevents(ics_text)) == 4


def test_all_day_event_has_exclusive_end():
    event = CalendarEvent(EventKind.REST_DAY, "RD", date(2025, 4, 1), date(2025, 4, 1), all_day=True)
    body = vevents(events_to_ics([event]))[0]
    assert "DTSTART;VALUE=DATE:20250401" in body
    assert "DTEND;VALUE=DATE:20250402" in body


def test_timed_overnight_event(sample_events):
    body = vevents(events_to_ics(sample_events[:1]))[0]
    assert "DTSTART:20250327T220000" in body.split("\r\n")
    assert "DTEND:20250328T060000" in body.split("\r\n")
    assert "SUMMARY:N1" in body


def test_uid_and_dtstamp_on_every_event(sample_events):
    bodies = vevents(events_to_ics(sample_events))
    uids = [re.search(r"^UID:(.+)$", body, flags=re.M).group(1) for body in bodies]
    assert len(set(uids)) == len(uids)
    for body in bodies:
        assert re.search(r"^DTSTAMP:\d{8}T\d{6}Z$", body, flags=re.M)


def test_text_fields_are_escaped():
    event = CalendarEvent(
        EventKind.REST_DAY,
        "RD; early, late",
        date(2025, 4, 1),
        date(2025, 4, 1),
        all_day=True,
        description="C:\\roster;a,b\nnext",
        location="Depot, Platform 2",
    )
    body = vevents(events_to_ics([event]))[0]
    assert "SUMMARY:RD\\; early\\, late" in body
    assert "DESCRIPTION:C:\\\\roster\\;a\\,b\\nnext" in body
    assert "LOCATION:Depot\\, Platform 2" in body


def test_empty_description_and_location_are_omitted(sample_events):
    body = vevents(events_to_ics(sample_events[1:2]))[0]
    assert "DESCRIPTION:" not in body
    assert "LOCATION:" not in body


def test_event_without_subject_is_skipped(sample_events):
    nameless = CalendarEvent(EventKind.REST_DAY, "", date(2025, 4, 1), date(2025, 4, 1), all_day=True)
    assert len(vevents(events_to_ics([nameless] + sample_events))) == 4


def test_no_events_raises():
    with pytest.raises(EmptyResultError):
        events_to_ics([])
