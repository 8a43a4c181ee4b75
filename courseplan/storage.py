"""
Persistent local storage.

This module manages two files in the data directory:

    selected_courses.json   the user's course plan
    schedule.json           the last downloaded course database snapshot

Keeping the plan separate from the snapshot means re-downloading the course
data never throws away the user's selection.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Iterable, Optional

from courseplan.config import schedule_path, selected_path
from courseplan.model import Course


def _normalize_ids(ids: Iterable[Any]) -> list[str]:
    # keep first occurrence order; ids are case-sensitive ('Fall-213')
    out: list[str] = []
    for x in ids:
        if not isinstance(x, str):
            continue
        cid = x.strip()
        if cid and cid not in out:
            out.append(cid)
    return out


def load_selected_course_ids(path: str | Path | None = None) -> list[str]:
    """
    Load selected course ids from selected_courses.json.

    Returns an empty list if the file does not exist or is invalid.
    """
    p = Path(path) if path is not None else selected_path()

    # First run: nothing selected yet
    if not p.exists():
        return []

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
        ids = data.get("selected_course_ids", [])
        if not isinstance(ids, list):
            return []
        return _normalize_ids(ids)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return []


def save_selected_course_ids(ids: Iterable[str], path: str | Path | None = None) -> None:
    """
    Save selected course ids, creating parent directories if needed.
    """
    p = Path(path) if path is not None else selected_path()
    p.parent.mkdir(parents=True, exist_ok=True)

    payload = {"selected_course_ids": _normalize_ids(ids)}
    p.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def load_schedule(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the cached course snapshot. Missing or broken file -> {}.
    """
    p = Path(path) if path is not None else schedule_path()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_schedule(snapshot: dict[str, Any], path: str | Path | None = None) -> None:
    p = Path(path) if path is not None else schedule_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")


def update_course(snapshot: dict[str, Any], old_key: Optional[str], course: Course) -> dict[str, Any]:
    """
    Return a copy of `snapshot` with `course` stored in place of the record
    whose term-number key is `old_key`. If no such record exists the course is
    added under its own key. The input snapshot is left untouched.
    """
    new = copy.deepcopy(snapshot) if isinstance(snapshot, dict) else {}
    courses = new.get("courses")

    if isinstance(courses, list):
        for i, record in enumerate(courses):
            if isinstance(record, dict) and Course.from_dict(record).key == old_key:
                courses[i] = course.to_dict()
                return new
        courses.append(course.to_dict())
        return new

    if not isinstance(courses, dict):
        courses = {}
        new["courses"] = courses

    for db_key, record in courses.items():
        if isinstance(record, dict) and Course.from_dict(record).key == old_key:
            courses[db_key] = course.to_dict()
            return new

    courses[course.key] = course.to_dict()
    return new
