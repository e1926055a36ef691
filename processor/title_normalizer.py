"""Derive course code and session type from raw event summaries."""
import re
from typing import Callable, Mapping, Optional, Tuple

from processor.course_codes import COURSE_CODE_MAP
from processor.models import DerivedTitle

UNKNOWN = 'UNKNOWN'

COURSE_CODE_GRAMMAR = r'[A-Za-z]{4}\d{4}|MED3-EVT(?![A-Z&])|(?:MED|SUR)\d-[A-Z&]{1,5}'

# Ordered: first pattern that matches wins. Group 1 is the course code,
# group 2 (when present) the session type.
COURSE_CODE_RULES = (
    re.compile(rf'^({COURSE_CODE_GRAMMAR}) \(([\w\- ()]+?)\)'),
    re.compile(rf'^({COURSE_CODE_GRAMMAR})'),
)

# Scanned against the lower-cased summary, first marker found wins.
SESSION_TYPE_MARKERS = (
    ('(assessment)', 'Assessment'),
    ('(e-lecture', 'E-lecture'),
    ('(self study)', 'Self study'),
    ('(self-learning', 'Self learning'),
    ('(visit)', 'Visit'),
    ('(lecture)', 'Lecture'),
    ('(ward rounds)', 'Ward rounds'),
    ('(attachment)', 'Attachment'),
)

# Free-text session types collapsed onto a canonical label by prefix.
SESSION_TYPE_CANONICAL = (
    ('dissection', 'Dissection'),
    ('flipped classroom', 'Flipped classroom'),
)

TWO_PART_CODE = re.compile(r'^(MED|SUR)\d-([A-Z&]{1,5})$')


def match_course_code(summary: str) -> Tuple[Optional[str], Optional[str]]:
    """Return (course_code, session_type) from the first matching rule."""
    for rule in COURSE_CODE_RULES:
        match = rule.match(summary)
        if match:
            groups = match.groups()
            return groups[0], groups[1] if len(groups) > 1 else None
    return None, None


def scan_session_type(summary: str) -> Optional[str]:
    """Look for a known parenthetical session marker anywhere in the summary."""
    lowered = summary.lower()
    for marker, label in SESSION_TYPE_MARKERS:
        if marker in lowered:
            return label
    return None


def canonicalize_session_type(session_type: str) -> str:
    lowered = session_type.lower()
    for prefix, label in SESSION_TYPE_CANONICAL:
        if lowered.startswith(prefix):
            return label
    return session_type


def _from_table(course_code: str, code_table: Mapping[str, str]) -> Optional[str]:
    return code_table.get(course_code)


def _from_two_part_code(course_code: str, code_table: Mapping[str, str]) -> Optional[str]:
    match = TWO_PART_CODE.match(course_code)
    if not match:
        return None
    school, letters = match.groups()
    return f"{letters} {school.capitalize()}"


NAME_RESOLVERS: Tuple[Callable[[str, Mapping[str, str]], Optional[str]], ...] = (
    _from_table,
    _from_two_part_code,
)


def resolve_display_name(
    course_code: str,
    code_table: Mapping[str, str] = COURSE_CODE_MAP
) -> str:
    """
    Resolve the human-readable name for a course code.
    
    Tries the lookup table, then the MED/SUR two-part code decomposition
    (e.g. "MED2-ENT" becomes "ENT Med"), and finally falls back to the raw code.
    """
    for resolver in NAME_RESOLVERS:
        name = resolver(course_code, code_table)
        if name:
            return name
    return course_code


def normalize(
    raw_summary: Optional[str],
    code_table: Mapping[str, str] = COURSE_CODE_MAP
) -> DerivedTitle:
    """
    Derive a display summary for an event.
    
    Args:
        raw_summary: Summary text from the upstream feed, may be empty or None
        code_table: Mapping of course code to display name
        
    Returns:
        DerivedTitle; course_code is UNKNOWN when no code could be found
    """
    summary = raw_summary or ''
    course_code, session_type = match_course_code(summary)
    
    if session_type is None:
        session_type = scan_session_type(summary)
    
    if session_type:
        session_type = canonicalize_session_type(session_type)
    
    if course_code is None:
        return DerivedTitle(
            course_code=UNKNOWN,
            session_type=session_type,
            display_summary=f"{UNKNOWN} - {summary}"
        )
    
    name = resolve_display_name(course_code, code_table)
    return DerivedTitle(
        course_code=course_code,
        session_type=session_type,
        display_summary=f"{name} - {session_type or UNKNOWN}"
    )
