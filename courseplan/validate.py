"""
Course form validation (strict).

This is the check run before an edited course is saved. Unlike the meeting
parser, which quietly treats bad meeting text as "no meeting", the form
rejects it with a message the user can act on. In particular a meeting whose
end time is not after its start time is an error here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from courseplan.config import TERMS
from courseplan.model import Course
from courseplan.parse import parse_time_range, split_days


NUMBER_RE = re.compile(r"\d+(?:-\d+)?", re.ASCII)

TITLE_MSG = "Title must be at least 2 characters (e.g., 'AI')."
TERM_MSG = "Term must be one of: Fall, Winter, Spring, Summer."
NUMBER_MSG = "Course number must be digits with optional '-section', e.g., '213' or '213-2'."
MEETS_FORMAT_MSG = "Must contain days and start-end times, e.g., 'MWF 12:00-13:20'. Days: M Tu W Th F Sa Su."
MEETS_ORDER_MSG = "End time must be after start time."


class CourseForm(BaseModel):
    title: str
    term: str
    number: str
    meets: str = ""

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise PydanticCustomError("title_too_short", TITLE_MSG)
        return v

    @field_validator("term")
    @classmethod
    def _check_term(cls, v: str) -> str:
        if v not in TERMS:
            raise PydanticCustomError("term_unknown", TERM_MSG)
        return v

    @field_validator("number")
    @classmethod
    def _check_number(cls, v: str) -> str:
        v = v.strip()
        if not NUMBER_RE.fullmatch(v):
            raise PydanticCustomError("number_format", NUMBER_MSG)
        return v

    @field_validator("meets")
    @classmethod
    def _check_meets(cls, v: str) -> str:
        v = v.strip()
        # empty = meeting time not known yet
        if not v:
            return ""

        parts = v.split()
        if len(parts) != 2 or split_days(parts[0]) is None:
            raise PydanticCustomError("meets_format", MEETS_FORMAT_MSG)

        times = parse_time_range(parts[1])
        if times is None:
            raise PydanticCustomError("meets_format", MEETS_FORMAT_MSG)

        start, end = times
        if end <= start:
            raise PydanticCustomError("meets_order", MEETS_ORDER_MSG)

        return f"{parts[0]} {parts[1]}"


@dataclass
class ValidationResult:
    valid: bool
    values: Optional[Course] = None
    errors: Dict[str, str] = field(default_factory=dict)


def _field_text(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    return "" if value is None else str(value)


def validate_course_data(data: Mapping[str, Any]) -> ValidationResult:
    """
    Validate title/term/number/meets of a course form.

    Never raises. On failure, errors maps each field to its first message;
    problems not tied to a field are stored under '_global'.
    """
    try:
        form = CourseForm(
            title=_field_text(data, "title"),
            term=_field_text(data, "term"),
            number=_field_text(data, "number"),
            meets=_field_text(data, "meets"),
        )
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for issue in exc.errors():
            loc = issue.get("loc") or ()
            key = str(loc[0]) if loc else "_global"
            errors.setdefault(key, issue.get("msg") or "Invalid value")
        return ValidationResult(valid=False, errors=errors)

    course = Course(term=form.term, number=form.number, title=form.title, meets=form.meets)
    return ValidationResult(valid=True, values=course)
