"""Adapter turning ICS text into ParsedCalendar records via icalendar."""
import logging
from typing import Optional

from icalendar import Calendar, Component

from processor.models import ParsedCalendar, ParsedEvent

logger = logging.getLogger(__name__)


def _text(component: Component, name: str) -> Optional[str]:
    value = component.get(name)
    return str(value) if value is not None else None


def _dt(component: Component, name: str):
    value = component.get(name)
    return getattr(value, 'dt', None)


def _sequence(component: Component) -> Optional[int]:
    value = component.get('sequence')
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(
            f"Ignoring invalid SEQUENCE '{value}' for event "
            f"'{_text(component, 'uid')}'"
        )
        return None


def _to_parsed_event(component: Component) -> ParsedEvent:
    return ParsedEvent(
        uid=_text(component, 'uid'),
        event_class=_text(component, 'class'),
        dtstamp=_dt(component, 'dtstamp'),
        start=_dt(component, 'dtstart'),
        end=_dt(component, 'dtend'),
        location=_text(component, 'location'),
        summary=_text(component, 'summary') or '',
        sequence=_sequence(component)
    )


def parse_calendar(text: str) -> ParsedCalendar:
    """
    Parse ICS text into a calendar record and its events.
    
    Only the first VCALENDAR component supplies calendar-level metadata.
    Events are collected from every top-level component; other component
    kinds are ignored.
    
    Raises:
        ValueError: If icalendar cannot parse the content
    """
    components = Calendar.from_ical(text, multiple=True)
    
    vcalendar = next((c for c in components if c.name == 'VCALENDAR'), None)
    events = [
        _to_parsed_event(vevent)
        for component in components
        for vevent in component.walk('VEVENT')
    ]
    
    if vcalendar is None:
        logger.warning("Feed contains no VCALENDAR component, using defaults")
        return ParsedCalendar(events=events)
    
    return ParsedCalendar(
        method=_text(vcalendar, 'method'),
        product_id=_text(vcalendar, 'prodid'),
        events=events
    )
