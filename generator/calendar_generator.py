"""Serialization of processed events back to ICS text."""
import logging
from datetime import datetime, timezone
from typing import List

from icalendar import Calendar, Event

from processor.models import OutputEvent, ParsedCalendar

logger = logging.getLogger(__name__)


class CalendarGenerator:
    """Generator building the corrected calendar feed."""

    DEFAULT_METHOD = 'PUBLISH'
    DEFAULT_PRODUCT_ID = '//Lysine//MfpoIcalProcessor//EN'
    CALENDAR_NAME = 'MFPO Timetable'
    CALENDAR_DESCRIPTION = 'MFPO timetable with readable course and session titles'

    def generate(self, parsed: ParsedCalendar, events: List[OutputEvent]) -> str:
        """
        Serialize events into a single VCALENDAR.

        Args:
            parsed: Parsed upstream calendar supplying method and product id
            events: Events to emit, in order

        Returns:
            ICS text
        """
        calendar = Calendar()
        calendar.add('prodid', self.product_id(parsed.product_id))
        calendar.add('version', '2.0')
        calendar.add('method', self.method(parsed.method))
        calendar.add('x-wr-calname', self.CALENDAR_NAME)
        calendar.add('x-wr-caldesc', self.CALENDAR_DESCRIPTION)

        for event in events:
            calendar.add_component(self._to_ical_event(event))

        logger.info(f"Generated calendar with {len(events)} events")
        return calendar.to_ical().decode('utf-8')

    def method(self, upstream_method) -> str:
        method = (upstream_method or '').strip()
        return method or self.DEFAULT_METHOD

    def product_id(self, upstream_product_id) -> str:
        """Trimmed upstream PRODID without a leading '-', or the default."""
        product_id = (upstream_product_id or '').strip()
        if not product_id:
            return self.DEFAULT_PRODUCT_ID
        if product_id.startswith('-'):
            product_id = product_id[1:]
        return product_id

    def _to_ical_event(self, event: OutputEvent) -> Event:
        ical_event = Event()

        optional_fields = (
            ('uid', event.uid),
            ('class', event.event_class),
            ('dtstamp', self._as_utc(event.dtstamp)),
            ('dtstart', self._as_utc(event.start)),
            ('dtend', self._as_utc(event.end)),
            ('location', event.location),
            ('sequence', event.sequence),
        )
        for name, value in optional_fields:
            if value is not None:
                ical_event.add(name, value)

        ical_event.add('summary', event.summary)
        ical_event.add('description', event.description)
        return ical_event

    def _as_utc(self, value):
        """Aware datetimes in UTC; dates and floating times unchanged."""
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value
