"""AWS Lambda handler for the timetable calendar feed fixer."""
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fetcher.feed_fetcher import FeedFetcher
from generator.calendar_generator import CalendarGenerator
from processor.errors import BadRequestError, CalendarRequestError
from processor.event_processor import EventProcessor
from processor.ics_parser import parse_calendar
from processor.line_repair import repair_line_folding

# Attributes present on every LogRecord; anything else came in via extra=
RESERVED_LOG_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any extra fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in vars(record).items():
            if key not in RESERVED_LOG_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_query_parameter(event: Dict[str, Any], name: str) -> Any:
    """
    Read a query parameter from an API Gateway proxy event.

    A parameter given more than once is returned as the list of its values.
    """
    multi_values = (event.get('multiValueQueryStringParameters') or {}).get(name)
    if multi_values and len(multi_values) > 1:
        return multi_values
    return (event.get('queryStringParameters') or {}).get(name)


def read_link(event: Dict[str, Any]) -> str:
    link = get_query_parameter(event, 'link')
    if link is None:
        raise BadRequestError('Bad request: link query parameter is required')
    if not isinstance(link, str):
        raise BadRequestError('Bad request: link is not a string')
    return link


def read_filter(event: Dict[str, Any]) -> Optional[str]:
    filter_pattern = get_query_parameter(event, 'filter')
    if filter_pattern is not None and not isinstance(filter_pattern, str):
        raise BadRequestError('Bad request: filter is not a string')
    return filter_pattern


def text_response(status_code: int, body: str, content_type: str = 'text/plain') -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': content_type},
        'body': body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler: fetch, repair, normalize and re-emit a calendar feed.

    Args:
        event: API Gateway proxy event with `link` and optional `filter`
            query parameters
        context: Lambda context object

    Returns:
        Proxy response with the corrected calendar, or a 400/500 error
    """
    log_level = os.environ.get('LOG_LEVEL', 'INFO')

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()

    try:
        link = read_link(event)
        filter_pattern = read_filter(event)

        logger.info(
            "Calendar request started",
            extra={'link': link, 'filter': filter_pattern}
        )

        # Compile the filter before fetching so a bad pattern fails fast
        processor = EventProcessor(filter_pattern=filter_pattern)
        fetcher = FeedFetcher()
        generator = CalendarGenerator()

        raw_text = fetcher.fetch(link)

        logger.info("Repairing line folding")
        repaired_text = repair_line_folding(raw_text)

        parsed = parse_calendar(repaired_text)
        logger.info(f"Parsed {len(parsed.events)} events from feed")

        output_events = processor.process_events(parsed.events)
        body = generator.generate(parsed, output_events)

        duration = time.time() - start_time
        logger.info(
            "Calendar request completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_parsed': len(parsed.events),
                'events_returned': len(output_events)
            }
        )
        return text_response(200, body, content_type='text/calendar')

    except CalendarRequestError as e:
        logger.warning(
            f"Rejected calendar request: {e}",
            extra={'error_type': type(e).__name__}
        )
        return text_response(e.status_code, str(e))

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Calendar processing failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return {
            'statusCode': 500,
            'headers': {'Content-Type': 'application/json'},
            'body': json.dumps({
                'message': 'Calendar processing failed',
                'error': str(e),
                'error_type': type(e).__name__,
                'duration_seconds': round(duration, 2)
            })
        }
