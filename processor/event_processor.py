"""Event processor for normalizing titles, filtering and fixing all-day events."""
import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import List, Mapping, Optional

from processor.course_codes import COURSE_CODE_MAP
from processor.errors import InvalidFilterError
from processor.models import OutputEvent, ParsedEvent
from processor.title_normalizer import normalize

logger = logging.getLogger(__name__)


class EventProcessor:
    """Processor turning parsed feed events into output events."""

    # Upstream encodes all-day events as 16:00 UTC on both ends
    ALL_DAY_UTC_HOUR = 16

    def __init__(
        self,
        filter_pattern: Optional[str] = None,
        code_table: Mapping[str, str] = COURSE_CODE_MAP
    ):
        """
        Initialize the processor.

        Args:
            filter_pattern: Optional case-insensitive regular expression; only
                events whose course code matches are kept
            code_table: Mapping of course code to display name

        Raises:
            InvalidFilterError: If filter_pattern is not a valid expression
        """
        self.code_table = code_table
        self.filter = self.compile_filter(filter_pattern)

    @staticmethod
    def compile_filter(pattern: Optional[str]) -> Optional[re.Pattern]:
        """
        Compile the caller's filter expression.

        Args:
            pattern: Regular expression source or None

        Returns:
            Compiled case-insensitive pattern, or None when no filter is given
        """
        if pattern is None:
            return None
        try:
            return re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise InvalidFilterError(pattern, str(e)) from e

    def process_events(self, events: List[ParsedEvent]) -> List[OutputEvent]:
        """
        Normalize, filter and adjust parsed events.

        Args:
            events: Events decoded from the upstream feed

        Returns:
            OutputEvent objects for every event that passed the filter
        """
        output_events = []

        for event in events:
            title = normalize(event.summary, self.code_table)

            if not self.matches_filter(title.course_code):
                logger.debug(
                    f"Dropping event '{event.summary}' with course code "
                    f"{title.course_code}"
                )
                continue

            output_events.append(OutputEvent(
                uid=event.uid,
                event_class=event.event_class.strip() if event.event_class else None,
                dtstamp=event.dtstamp,
                start=event.start,
                end=self.adjust_all_day_end(event.start, event.end),
                location=event.location,
                sequence=event.sequence,
                summary=title.display_summary,
                description=event.summary
            ))

        logger.info(
            f"Kept {len(output_events)} events out of {len(events)} total events"
        )
        return output_events

    def matches_filter(self, course_code: str) -> bool:
        if self.filter is None:
            return True
        return self.filter.search(course_code) is not None

    def adjust_all_day_end(
        self,
        start: Optional[date],
        end: Optional[date]
    ) -> Optional[date]:
        """
        Make the end of an upstream all-day event exclusive.

        When both start and end fall on ALL_DAY_UTC_HOUR in UTC, the end is
        moved forward by one calendar day. Time of day and timezone are kept.

        Args:
            start: Event start
            end: Event end

        Returns:
            The adjusted end, or end unchanged
        """
        if not isinstance(start, datetime) or not isinstance(end, datetime):
            return end

        if (self._utc_hour(start) == self.ALL_DAY_UTC_HOUR
                and self._utc_hour(end) == self.ALL_DAY_UTC_HOUR):
            return end + timedelta(days=1)
        return end

    def _utc_hour(self, value: datetime) -> int:
        if value.tzinfo is None:
            return value.hour
        return value.astimezone(timezone.utc).hour
