"""Repair of improperly folded ICS content lines."""
import re
from typing import List

# Identifier, optional ;-delimited parameter block, then ':' or '='
PROPERTY_START = re.compile(r'^[A-Za-z]+(?:;[^:=]+)?[:=]')
LINE_BREAK = re.compile(r'\r\n|\r|\n')
CRLF = '\r\n'


def is_property_start(line: str) -> bool:
    """Return True if the line begins a new ICS property."""
    return PROPERTY_START.match(line) is not None


def is_continuation(line: str) -> bool:
    """Return True if the line is already folded onto its predecessor."""
    return line[:1] in (' ', '\t')


def repair_line_folding(text: str) -> str:
    """
    Turn every line that does not start a property into a folded continuation.
    
    Lines that neither start a property nor already carry a leading space or
    tab are prefixed with a single space, so an ICS parser unfolds them onto
    the preceding property. The first non-empty line is always kept as a
    property start. Empty lines carry no content and are dropped.
    
    Args:
        text: Raw feed text using any mix of CR, LF and CRLF line endings
        
    Returns:
        Feed text with CRLF line endings, or an empty string for empty input
    """
    repaired: List[str] = []
    
    for line in LINE_BREAK.split(text):
        if not line:
            continue
        if not repaired or is_property_start(line) or is_continuation(line):
            repaired.append(line)
        else:
            repaired.append(' ' + line)
    
    if not repaired:
        return ''
    return CRLF.join(repaired) + CRLF
