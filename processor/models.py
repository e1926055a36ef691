"""Data models for calendar processing."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class ParsedEvent:
    """Event as decoded from the upstream feed."""
    uid: Optional[str]
    event_class: Optional[str]
    dtstamp: Optional[date]
    start: Optional[date]
    end: Optional[date]
    location: Optional[str]
    summary: str
    sequence: Optional[int]


@dataclass
class ParsedCalendar:
    """Calendar-level record (if any) plus every event found in the feed."""
    method: Optional[str] = None
    product_id: Optional[str] = None
    events: List[ParsedEvent] = field(default_factory=list)


@dataclass(frozen=True)
class DerivedTitle:
    """Course code and session type recovered from a raw summary."""
    course_code: str
    session_type: Optional[str]
    display_summary: str


@dataclass
class OutputEvent:
    """Event ready for serialization."""
    uid: Optional[str]
    event_class: Optional[str]
    dtstamp: Optional[date]
    start: Optional[date]
    end: Optional[date]
    location: Optional[str]
    sequence: Optional[int]
    summary: str
    description: str
