"""
Unit tests for conflict detection.

Definition used here:
- Two courses conflict if they share a term, share a day and their times overlap.
- Touching endpoints (end == start) is NOT a conflict.
- A course never conflicts with itself; unknown ids never conflict.
"""

import unittest

from courseplan.conflicts import courses_conflict, find_conflicts, is_overlapping, selection_status
from courseplan.model import Course


def _course(term: str, number: str, meets: str) -> Course:
    return Course(term=term, number=number, title=f"CS{number}", meets=meets)


def _course_map(*courses: Course) -> dict[str, Course]:
    return {c.key: c for c in courses}


class TestIsOverlapping(unittest.TestCase):
    def test_overlap_same_days_same_term(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Fall", "214", "MWF 9:30-10:20"))
        self.assertTrue(is_overlapping(m, ["Fall-213"], "Fall-214"))

    def test_touching_end_is_no_conflict(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Fall", "214", "MWF 9:50-10:40"))
        self.assertFalse(is_overlapping(m, ["Fall-213"], "Fall-214"))

    def test_different_term_is_no_conflict(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Winter", "213", "MWF 9:00-9:50"))
        self.assertFalse(is_overlapping(m, ["Fall-213"], "Winter-213"))

    def test_disjoint_days_is_no_conflict(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Fall", "214", "TuTh 9:00-9:50"))
        self.assertFalse(is_overlapping(m, ["Fall-213"], "Fall-214"))

    def test_one_shared_day_is_enough(self) -> None:
        m = _course_map(_course("Fall", "213", "MW 9:00-9:50"), _course("Fall", "214", "WF 9:15-10:05"))
        self.assertTrue(is_overlapping(m, ["Fall-213"], "Fall-214"))

    def test_unknown_candidate(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"))
        self.assertFalse(is_overlapping(m, ["Fall-213"], "Fall-999"))

    def test_self_is_excluded(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"))
        self.assertFalse(is_overlapping(m, ["Fall-213", "Fall-213"], "Fall-213"))

    def test_selected_course_still_reports_other_conflicts(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Fall", "214", "MWF 9:30-10:20"))
        self.assertTrue(is_overlapping(m, ["Fall-213", "Fall-214"], "Fall-213"))

    def test_unparseable_meeting_never_conflicts(self) -> None:
        m = _course_map(
            _course("Fall", "213", "MWF 9:00-9:50"),
            _course("Fall", "214", ""),
            _course("Fall", "215", "MWF 9:50-9:00"),
            _course("Fall", "216", "whenever"),
        )
        for cid in ("Fall-214", "Fall-215", "Fall-216"):
            self.assertFalse(is_overlapping(m, ["Fall-213"], cid))
            self.assertFalse(is_overlapping(m, [cid], "Fall-213"))

    def test_unknown_selected_ids_are_ignored(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"))
        self.assertFalse(is_overlapping(m, ["Spring-1", "nonsense"], "Fall-213"))

    def test_same_answer_twice_and_inputs_untouched(self) -> None:
        m = _course_map(_course("Fall", "213", "MWF 9:00-9:50"), _course("Fall", "214", "MWF 9:30-10:20"))
        selected = ["Fall-213"]
        first = is_overlapping(m, selected, "Fall-214")
        second = is_overlapping(m, selected, "Fall-214")
        self.assertEqual(first, second)
        self.assertEqual(selected, ["Fall-213"])
        self.assertEqual(len(m), 2)

    def test_symmetric(self) -> None:
        m = _course_map(_course("Spring", "110", "TuTh 14:00-15:20"), _course("Spring", "111", "Th 15:00-16:00"))
        self.assertTrue(is_overlapping(m, ["Spring-110", "Spring-111"], "Spring-110"))
        self.assertTrue(is_overlapping(m, ["Spring-110", "Spring-111"], "Spring-111"))
        self.assertEqual(courses_conflict(m["Spring-110"], m["Spring-111"]), courses_conflict(m["Spring-111"], m["Spring-110"]))


class TestFindConflicts(unittest.TestCase):
    def test_pairs_once_in_selection_order(self) -> None:
        m = _course_map(
            _course("Fall", "1", "MWF 9:00-9:50"),
            _course("Fall", "2", "MWF 9:30-10:20"),
            _course("Fall", "3", "M 9:45-11:00"),
            _course("Fall", "4", "TuTh 9:00-9:50"),
        )
        confs = find_conflicts(m, ["Fall-1", "Fall-2", "Fall-3", "Fall-4", "Fall-1", "Fall-99"])
        self.assertEqual(confs, [("Fall-1", "Fall-2"), ("Fall-1", "Fall-3"), ("Fall-2", "Fall-3")])

    def test_no_conflicts(self) -> None:
        m = _course_map(_course("Fall", "1", "MWF 9:00-9:50"))
        self.assertEqual(find_conflicts(m, ["Fall-1"]), [])


class TestSelectionStatus(unittest.TestCase):
    def test_statuses(self) -> None:
        m = _course_map(
            _course("Fall", "213", "MWF 9:00-9:50"),
            _course("Fall", "214", "MWF 9:30-10:20"),
            _course("Fall", "215", "TuTh 9:00-9:50"),
        )
        selected = ["Fall-213"]
        self.assertEqual(selection_status(m, selected, "Fall-213"), "selected")
        self.assertEqual(selection_status(m, selected, "Fall-214"), "conflict")
        self.assertEqual(selection_status(m, selected, "Fall-215"), "available")


if __name__ == "__main__":
    unittest.main()
