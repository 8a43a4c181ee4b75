"""
Parsing (raw course data -> structured values).

- Turns a free-text meeting descriptor such as 'MWF 9:00-9:50' into a Meeting
- Turns a database snapshot into a course map keyed by 'term-number'

Important rules (DO NOT CHANGE):
- Unparseable meeting text is the same as no meeting at all (None)
- parse_meeting never raises, whatever it is given
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple

from courseplan.model import Course, Meeting


# ---------------------------------------------------------------------------
# Day tokens
# ---------------------------------------------------------------------------

# Two-letter tokens must be tried before single letters ("Tu" is not "T" + "u")
TWO_LETTER_DAYS = ("Tu", "Th", "Sa", "Su")
ONE_LETTER_DAYS = ("M", "W", "F")

TIME_RANGE_RE = re.compile(r"(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})", re.ASCII)


def split_days(text: str) -> Optional[Tuple[str, ...]]:
    """
    Split a day string like 'MWF' or 'TuTh' into day tokens.

    Returns None if any characters are left over or a day appears twice.
    """
    days: list[str] = []
    i = 0
    while i < len(text):
        pair = text[i : i + 2]
        if pair in TWO_LETTER_DAYS:
            token = pair
        elif text[i] in ONE_LETTER_DAYS:
            token = text[i]
        else:
            return None

        if token in days:
            return None
        days.append(token)
        i += len(token)

    if not days:
        return None
    return tuple(days)


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------


def _to_minutes(hours: str, minutes: str) -> Optional[int]:
    h = int(hours)
    m = int(minutes)
    if not (0 <= h <= 23 and 0 <= m <= 59):
        return None
    return h * 60 + m


def parse_time_range(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse 'H:MM-H:MM' (24-hour) into (start, end) minutes since midnight.

    The order of start and end is not checked here.
    """
    m = TIME_RANGE_RE.fullmatch(text)
    if not m:
        return None

    start = _to_minutes(m.group(1), m.group(2))
    end = _to_minutes(m.group(3), m.group(4))
    if start is None or end is None:
        return None
    return start, end


# ---------------------------------------------------------------------------
# Meeting parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_meeting(meets: Any) -> Optional[Meeting]:
    """
    Parse a meeting descriptor ('MWF 9:00-9:50', 'TuTh 14:00-15:20', '').

    Returns None for empty text and for anything malformed, including a
    time range whose end is not after its start.
    """
    if not isinstance(meets, str):
        return None

    parts = meets.split()
    # exactly one day segment and one time segment
    if len(parts) != 2:
        return None

    day_part, time_part = parts

    days = split_days(day_part)
    if days is None:
        return None

    times = parse_time_range(time_part)
    if times is None:
        return None

    start, end = times
    if end <= start:
        return None

    return Meeting(days=days, start=start, end=end)


# ---------------------------------------------------------------------------
# Snapshot -> course map
# ---------------------------------------------------------------------------


def schedule_title(snapshot: Any) -> str:
    if not isinstance(snapshot, dict):
        return ""
    title = snapshot.get("title")
    return title.strip() if isinstance(title, str) else ""


def build_course_map(snapshot: Any) -> Dict[str, Course]:
    """
    Build {'Fall-213': Course, ...} from a database snapshot.

    The snapshot looks like {"title": ..., "courses": {...}}; 'courses' may be
    a mapping (database keys are ignored) or a list. Records without a term
    or number cannot be keyed and are skipped.
    """
    if not isinstance(snapshot, dict):
        return {}

    raw = snapshot.get("courses")
    if isinstance(raw, dict):
        records = list(raw.values())
    elif isinstance(raw, list):
        records = raw
    else:
        return {}

    course_map: Dict[str, Course] = {}
    for record in records:
        if not isinstance(record, dict):
            continue
        course = Course.from_dict(record)
        if not course.term or not course.number:
            continue
        course_map[course.key] = course

    return course_map
