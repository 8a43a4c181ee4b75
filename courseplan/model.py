"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and Meeting objects so that:
- all modules share the same field names
- course keys are built in exactly one place
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x)


def course_key(term: str, number: str) -> str:
    """
    Identity of a course: term and number joined by a hyphen, e.g. 'Fall-213'.
    """
    return f"{term}-{number}"


@dataclass(frozen=True)
class Course:
    """
    Represents one course record as stored in the course database.
    """

    term: str
    number: str
    title: str = ""
    meets: str = ""

    @property
    def key(self) -> str:
        return course_key(self.term, self.number)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Course":
        """
        Build a Course from a loosely-typed JSON record.

        Missing or null fields become empty strings; nothing is validated here.
        """
        return cls(
            term=_safe_str(data.get("term")).strip(),
            number=_safe_str(data.get("number")).strip(),
            title=_safe_str(data.get("title")).strip(),
            meets=_safe_str(data.get("meets")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "term": self.term,
            "number": self.number,
            "title": self.title,
            "meets": self.meets,
        }


@dataclass(frozen=True)
class Meeting:
    """
    Weekly meeting time derived from a course's 'meets' text.

    days keeps the order in which the tokens were written.
    start/end are minutes since midnight with start < end.
    """

    days: Tuple[str, ...]
    start: int
    end: int
