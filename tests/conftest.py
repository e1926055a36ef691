"""Shared ICS fixtures."""
import pytest

WELL_FORMED_LINES = [
    'BEGIN:VCALENDAR',
    'VERSION:2.0',
    'PRODID:-//Upstream//Timetable//EN',
    'METHOD:PUBLISH',
    'BEGIN:VEVENT',
    'UID:evt-1@timetable.example.com',
    'CLASS:PUBLIC',
    'DTSTAMP:20240110T090000Z',
    'DTSTART:20240115T090000Z',
    'DTEND:20240115T100000Z',
    'LOCATION:Lecture Theatre 1',
    'SEQUENCE:0',
    'SUMMARY:MEDU3300 (Lec',
    ' ture)',
    'END:VEVENT',
    'BEGIN:VEVENT',
    'UID:evt-2@timetable.example.com',
    'CLASS:PUBLIC',
    'DTSTAMP:20240110T090000Z',
    'DTSTART:20240116T160000Z',
    'DTEND:20240116T160000Z',
    'LOCATION:Anatomy Lab',
    'SEQUENCE:1',
    'SUMMARY:SUR3-ORTHO (Dissection of upper limb)',
    'END:VEVENT',
    'END:VCALENDAR',
]


@pytest.fixture
def well_formed_ics():
    """Feed with correctly folded lines and CRLF endings."""
    return '\r\n'.join(WELL_FORMED_LINES) + '\r\n'


@pytest.fixture
def malformed_ics():
    """Same feed with the SUMMARY continuation missing its fold and LF endings."""
    lines = ['ture)' if line == ' ture)' else line for line in WELL_FORMED_LINES]
    return '\n'.join(lines) + '\n'
