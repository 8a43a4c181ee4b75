"""
Unit tests for local storage.

Storage contract:
- Missing/invalid file -> empty value
- Selected ids keep their order, blanks and duplicates are dropped
- JSON schema: {"selected_course_ids": [ ... ]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from courseplan.model import Course
from courseplan.storage import (
    load_schedule,
    load_selected_course_ids,
    save_schedule,
    save_selected_course_ids,
    update_course,
)


class TestSelectedStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertEqual(load_selected_course_ids(Path(d) / "missing.json"), [])

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "selected_courses.json"
            save_selected_course_ids(["Fall-214", " Fall-213 ", "", "Fall-214"], p)
            self.assertEqual(load_selected_course_ids(p), ["Fall-214", "Fall-213"])

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data, {"selected_course_ids": ["Fall-214", "Fall-213"]})

    def test_corrupt_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "selected_courses.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_selected_course_ids(p), [])
            p.write_text('["Fall-213"]', encoding="utf-8")
            self.assertEqual(load_selected_course_ids(p), [])


class TestScheduleStorage(unittest.TestCase):
    def test_schedule_roundtrip_and_missing(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "schedule.json"
            self.assertEqual(load_schedule(p), {})
            snapshot = {"title": "CS Courses", "courses": {"F213": {"term": "Fall", "number": "213"}}}
            save_schedule(snapshot, p)
            self.assertEqual(load_schedule(p), snapshot)

    def test_update_course_replaces_record_in_place(self) -> None:
        snapshot = {"courses": {"F213": {"term": "Fall", "number": "213", "title": "Old", "meets": ""}}}
        edited = Course("Fall", "213", "Data Structures", "MWF 9:00-9:50")

        new = update_course(snapshot, "Fall-213", edited)

        self.assertEqual(new["courses"], {"F213": edited.to_dict()})
        self.assertEqual(snapshot["courses"]["F213"]["title"], "Old")

    def test_update_course_adds_unknown(self) -> None:
        new = update_course({}, None, Course("Winter", "110", "Intro", ""))
        self.assertEqual(new["courses"]["Winter-110"]["title"], "Intro")

    def test_update_course_in_list(self) -> None:
        snapshot = {"courses": [{"term": "Fall", "number": "213", "title": "Old"}]}
        new = update_course(snapshot, "Fall-213", Course("Fall", "213-2", "New", ""))
        self.assertEqual(new["courses"], [{"term": "Fall", "number": "213-2", "title": "New", "meets": ""}])


if __name__ == "__main__":
    unittest.main()
