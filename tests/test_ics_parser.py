"""Unit tests for the ICS parser adapter."""
import logging
from datetime import datetime, timezone

from processor.ics_parser import parse_calendar
from processor.line_repair import repair_line_folding


class TestParseCalendar:
    """Test cases for parse_calendar."""
    
    def test_calendar_metadata(self, well_formed_ics):
        parsed = parse_calendar(well_formed_ics)
        
        assert parsed.method == 'PUBLISH'
        assert parsed.product_id == '-//Upstream//Timetable//EN'
    
    def test_event_fields(self, well_formed_ics):
        """Test that event properties are decoded into ParsedEvent fields."""
        parsed = parse_calendar(well_formed_ics)
        
        assert len(parsed.events) == 2
        event = parsed.events[0]
        
        assert event.uid == 'evt-1@timetable.example.com'
        assert event.event_class == 'PUBLIC'
        assert event.dtstamp == datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)
        assert event.start == datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert event.end == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        assert event.location == 'Lecture Theatre 1'
        assert event.summary == 'MEDU3300 (Lecture)'
        assert event.sequence == 0
        assert parsed.events[1].sequence == 1
    
    def test_missing_optional_fields(self):
        text = (
            'BEGIN:VCALENDAR\r\n'
            'BEGIN:VEVENT\r\n'
            'DTSTART:20240115T090000Z\r\n'
            'END:VEVENT\r\n'
            'END:VCALENDAR\r\n'
        )
        
        event = parse_calendar(text).events[0]
        
        assert event.uid is None
        assert event.end is None
        assert event.summary == ''
        assert event.sequence is None
    
    def test_invalid_sequence_ignored(self, caplog):
        """Test that a broken SEQUENCE does not fail the whole feed."""
        text = (
            'BEGIN:VCALENDAR\r\n'
            'BEGIN:VEVENT\r\n'
            'UID:bad-seq@timetable.example.com\r\n'
            'SEQUENCE:abc\r\n'
            'SUMMARY:MEDU3300 (Lecture)\r\n'
            'END:VEVENT\r\n'
            'BEGIN:VEVENT\r\n'
            'UID:good-seq@timetable.example.com\r\n'
            'SEQUENCE:3\r\n'
            'END:VEVENT\r\n'
            'END:VCALENDAR\r\n'
        )
        
        with caplog.at_level(logging.WARNING):
            parsed = parse_calendar(text)
        
        assert [event.sequence for event in parsed.events] == [None, 3]
        assert parsed.events[0].summary == 'MEDU3300 (Lecture)'
        assert any('Ignoring invalid SEQUENCE' in record.message for record in caplog.records)
    
    def test_no_calendar_component(self):
        """Test that a bare VEVENT still yields events with default metadata."""
        text = (
            'BEGIN:VEVENT\r\n'
            'UID:bare@timetable.example.com\r\n'
            'SUMMARY:MED3-EVT\r\n'
            'END:VEVENT\r\n'
        )
        
        parsed = parse_calendar(text)
        
        assert parsed.method is None
        assert parsed.product_id is None
        assert [event.uid for event in parsed.events] == ['bare@timetable.example.com']
    
    def test_other_components_ignored(self):
        text = (
            'BEGIN:VCALENDAR\r\n'
            'BEGIN:VTODO\r\n'
            'UID:todo-1\r\n'
            'SUMMARY:Not an event\r\n'
            'END:VTODO\r\n'
            'END:VCALENDAR\r\n'
        )
        
        assert parse_calendar(text).events == []
    
    def test_empty_text(self):
        parsed = parse_calendar('')
        
        assert parsed.events == []
        assert parsed.method is None


class TestRepairThenParse:
    """End-to-end repair and parse of a malformed feed."""
    
    def test_malformed_feed_matches_reference(self, malformed_ics, well_formed_ics):
        """Test that the repaired feed parses to exactly the reference events."""
        repaired = parse_calendar(repair_line_folding(malformed_ics))
        reference = parse_calendar(well_formed_ics)
        
        assert len(repaired.events) == 2
        assert repaired.events == reference.events
        assert repaired.events[0].summary == 'MEDU3300 (Lecture)'
