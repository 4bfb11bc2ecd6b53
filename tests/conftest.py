"""
Pytest configuration and shared fixtures.
"""

from datetime import date, time

import pytest

from tracs2cal.classify import CalendarEvent, EventKind


@pytest.fixture
def roster_csv():
    """A small TRACS export with preamble, blank line and trailing totals row."""
    return "\n".join(
        [
            "TRACS Enterprise Roster Export",
            "Employee,J Smith",
            "",
            "Date,On,Off,Code",
            "27/03 Th27/03/2025 Th,22:00,06:00,N1",
            "28/03 Fr28/03/2025 Fr,RD,,",
            "29/03 Sa29/03/2025 Sa,AL,,",
            "30/03 Su30/03/2025 Su,07:00,15:00,E2",
            "31/03 Mo31/03/2025 Mo,STUD,,",
            "Total,,,",
        ]
    )


@pytest.fixture
def sample_events():
    """One event of every kind."""
    return [
        CalendarEvent(
            EventKind.WORK_SHIFT,
            "N1",
            date(2025, 3, 27),
            date(2025, 3, 28),
            start_time=time(22, 0),
            end_time=time(6, 0),
            description="Work Shift (27/03 Th27/03/2025 Th)",
        ),
        CalendarEvent(EventKind.REST_DAY, "RD", date(2025, 3, 29), date(2025, 3, 29), all_day=True),
        CalendarEvent(EventKind.ANNUAL_LEAVE, "A/L", date(2025, 3, 30), date(2025, 3, 30), all_day=True),
        CalendarEvent(
            EventKind.STUDY_DAY,
            "STUD Day",
            date(2025, 3, 31),
            date(2025, 3, 31),
            start_time=time(9, 0),
            end_time=time(17, 0),
        ),
    ]
