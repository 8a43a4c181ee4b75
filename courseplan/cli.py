"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    courseplan list --term Fall
    courseplan add Fall-213
    courseplan remove Fall-213
    courseplan plan
    courseplan conflicts
    courseplan check Fall-214
    courseplan validate --title "AI" --term Fall --number 349 --meets "TuTh 14:00-15:20"
    courseplan fetch
    courseplan interactive

Note:
- The interactive menu lives in courseplan/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

import requests

from courseplan.config import DATA_PATH, DATABASE_URL, DEFAULT_TERM, TERMS, schedule_path, selected_path
from courseplan.conflicts import courses_conflict, find_conflicts, is_overlapping, selection_status
from courseplan.model import Course
from courseplan.parse import build_course_map
from courseplan.remote import RemoteDataError, update_schedule
from courseplan.storage import load_schedule, load_selected_course_ids, save_selected_course_ids
from courseplan.validate import validate_course_data


STATUS_LABELS = {"selected": "[selected]", "conflict": "[time conflict]", "available": ""}


def _load_course_map(data_dir: Optional[Path]) -> dict[str, Course]:
    """
    Course map from the cached snapshot. Missing data -> empty map, so
    commands can still run before the first fetch.
    """
    return build_course_map(load_schedule(schedule_path(data_dir)))


def _course_line(course: Course) -> str:
    meets = course.meets.strip() or "(no meeting time)"
    title = course.title or "(no title)"
    return f"{course.key} | CS{course.number} | {title} | {meets}"


def _cmd_list(args: argparse.Namespace, course_map: dict[str, Course]) -> int:
    term = (args.term or "").strip()
    selected = load_selected_course_ids(selected_path(args.data_dir))

    courses = [c for c in course_map.values() if c.term == term]
    if not courses:
        print(f"No courses for term {term}.")
        return 0

    for c in courses:
        label = STATUS_LABELS[selection_status(course_map, selected, c.key)]
        line = _course_line(c)
        print(f"{line} {label}" if label else line)
    return 0


def _cmd_add(args: argparse.Namespace, course_map: dict[str, Course]) -> int:
    """
    Add a course to the plan unless it clashes with the current selection.
    """
    cid = (args.course_id or "").strip()
    if not cid:
        print("Please provide a course id.")
        return 1

    path = selected_path(args.data_dir)
    selected = load_selected_course_ids(path)
    if cid in selected:
        print(f"Already selected: {cid}")
        return 0

    if cid not in course_map:
        print(f"Warning: course '{cid}' not found in course data (adding anyway).")
    elif is_overlapping(course_map, selected, cid):
        clashes = [o for o in selected if o in course_map and courses_conflict(course_map[cid], course_map[o])]
        print(f"Time conflict: {cid} overlaps {', '.join(clashes) or 'a selected course'}. Not added.")
        return 1

    selected.append(cid)
    save_selected_course_ids(selected, path)
    print(f"Added: {cid} (selected: {len(selected)})")
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    cid = (args.course_id or "").strip()
    if not cid:
        print("Please provide a course id.")
        return 1

    path = selected_path(args.data_dir)
    selected = load_selected_course_ids(path)
    if cid not in selected:
        print(f"Not selected: {cid}")
        return 0

    selected.remove(cid)
    save_selected_course_ids(selected, path)
    print(f"Removed: {cid} (selected: {len(selected)})")
    return 0


def _cmd_plan(args: argparse.Namespace, course_map: dict[str, Course]) -> int:
    selected = load_selected_course_ids(selected_path(args.data_dir))
    if not selected:
        print("No courses selected yet.")
        return 0

    print(f"Course plan ({len(selected)} selected):")
    for cid in selected:
        c = course_map.get(cid)
        if c:
            print(f"- {c.term} CS{c.number}: {c.title} | {c.meets.strip() or '(no meeting time)'}")
        else:
            print(f"- {cid} | (not found in course data)")
    return 0


def _cmd_conflicts(args: argparse.Namespace, course_map: dict[str, Course]) -> int:
    selected = load_selected_course_ids(selected_path(args.data_dir))

    confs = find_conflicts(course_map, selected)
    if not confs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        ca, cb = course_map[a], course_map[b]
        print(f"- {a} {ca.meets.strip()}  <->  {b} {cb.meets.strip()}")
    return 0


def _cmd_check(args: argparse.Namespace, course_map: dict[str, Course]) -> int:
    cid = (args.course_id or "").strip()
    selected = load_selected_course_ids(selected_path(args.data_dir))

    if cid not in course_map:
        print(f"Unknown course: {cid} (no conflict)")
        return 0

    if is_overlapping(course_map, selected, cid):
        print(f"{cid}: time conflict")
    else:
        print(f"{cid}: no conflict")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    result = validate_course_data(
        {"title": args.title, "term": args.term, "number": args.number, "meets": args.meets}
    )
    if result.valid and result.values is not None:
        print(f"Valid: {_course_line(result.values)}")
        return 0

    for name, message in result.errors.items():
        print(f"{name}: {message}")
    return 1


def _cmd_fetch(args: argparse.Namespace) -> int:
    try:
        update_schedule(args.database_url, args.path, data_dir=args.data_dir)
    except (requests.RequestException, RemoteDataError) as exc:
        print(f"Error loading course data: {exc}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseplan", description="Course plan CLI")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for plan and cached course data")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List courses of a term")
    p_list.add_argument("--term", "-t", type=str, default=DEFAULT_TERM, help="Term (e.g. Fall)")

    p_add = sub.add_parser("add", help="Add course to the plan")
    p_add.add_argument("course_id", type=str, help="Course id (e.g. Fall-213)")

    p_remove = sub.add_parser("remove", help="Remove course from the plan")
    p_remove.add_argument("course_id", type=str, help="Course id (e.g. Fall-213)")

    sub.add_parser("plan", help="Show the selected courses")
    sub.add_parser("conflicts", help="Show time conflicts among selected courses")

    p_check = sub.add_parser("check", help="Check whether a course clashes with the plan")
    p_check.add_argument("course_id", type=str, help="Course id (e.g. Fall-214)")

    p_validate = sub.add_parser("validate", help="Validate course form values")
    p_validate.add_argument("--title", type=str, default="")
    p_validate.add_argument("--term", type=str, default=DEFAULT_TERM, help=f"One of {', '.join(TERMS)}")
    p_validate.add_argument("--number", type=str, default="")
    p_validate.add_argument("--meets", type=str, default="", help="e.g. 'MWF 9:00-9:50'")

    p_fetch = sub.add_parser("fetch", help="Download course data from the database")
    p_fetch.add_argument("--database-url", type=str, default=DATABASE_URL)
    p_fetch.add_argument("--path", type=str, default=DATA_PATH)

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate":
        raise SystemExit(_cmd_validate(args))
    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))
    if args.command == "remove":
        raise SystemExit(_cmd_remove(args))

    course_map = _load_course_map(args.data_dir)

    if args.command == "list":
        raise SystemExit(_cmd_list(args, course_map))
    if args.command == "add":
        raise SystemExit(_cmd_add(args, course_map))
    if args.command == "plan":
        raise SystemExit(_cmd_plan(args, course_map))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, course_map))
    if args.command == "check":
        raise SystemExit(_cmd_check(args, course_map))

    if args.command == "interactive":
        from courseplan.interactive import run_interactive

        run_interactive(data_dir=args.data_dir)
        raise SystemExit(0)

    raise SystemExit(2)
