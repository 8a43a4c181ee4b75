"""
Conflict detection.

Two courses conflict if they are in the same term, both have a parseable
meeting, they share at least one day and their times overlap.
Overlap rule (half-open, touching endpoints do not conflict):
    start < other_end AND other_start < end
"""

from __future__ import annotations

from typing import Mapping, Sequence

from courseplan.model import Course, Meeting
from courseplan.parse import parse_meeting


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def meetings_conflict(a: Meeting | None, b: Meeting | None) -> bool:
    if a is None or b is None:
        return False
    if not set(a.days) & set(b.days):
        return False
    # one time range applies to every day of a meeting
    return _overlaps(a.start, a.end, b.start, b.end)


def courses_conflict(a: Course, b: Course) -> bool:
    """
    Symmetric pairwise check. Different terms never conflict.
    """
    if a.term != b.term:
        return False
    return meetings_conflict(parse_meeting(a.meets), parse_meeting(b.meets))


def is_overlapping(course_map: Mapping[str, Course], selected: Sequence[str], candidate: str) -> bool:
    """
    Would `candidate` clash with any other selected course?

    The candidate itself is skipped in `selected`, so a course that is already
    selected does not conflict with itself. Unknown candidates never conflict.
    """
    target = course_map.get(candidate)
    if target is None:
        return False

    for cid in selected:
        if cid == candidate:
            continue
        other = course_map.get(cid)
        if other is not None and courses_conflict(target, other):
            return True

    return False


def find_conflicts(course_map: Mapping[str, Course], selected: Sequence[str]) -> list[tuple[str, str]]:
    """
    Find conflicting id pairs (A,B) among the selection, each pair once (i<j).
    Ids that are unknown or selected twice are only looked at once.
    """
    ids: list[str] = []
    for cid in selected:
        if cid in course_map and cid not in ids:
            ids.append(cid)

    conflicts: list[tuple[str, str]] = []
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            if courses_conflict(course_map[ids[i]], course_map[ids[j]]):
                conflicts.append((ids[i], ids[j]))

    return conflicts


def selection_status(course_map: Mapping[str, Course], selected: Sequence[str], course_id: str) -> str:
    """
    'selected', 'conflict' (not selected and would clash) or 'available'.
    """
    if course_id in selected:
        return "selected"
    if is_overlapping(course_map, selected, course_id):
        return "conflict"
    return "available"
