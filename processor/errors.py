"""Request-terminating errors raised by the calendar pipeline."""


class CalendarRequestError(Exception):
    """Base class for errors reported back to the caller as HTTP 400."""
    
    status_code = 400


class BadRequestError(CalendarRequestError):
    """Query parameters are missing or malformed."""


class FetchError(CalendarRequestError):
    """Upstream feed could not be retrieved or returned no content."""
    
    def __init__(self, status_text: str):
        self.status_text = status_text
        super().__init__(f"No data. Error: {status_text}")


class InvalidFilterError(CalendarRequestError):
    """Caller-supplied filter is not a valid regular expression."""
    
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Bad request: invalid filter '{pattern}': {reason}")
