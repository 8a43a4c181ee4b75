from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import requests
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from courseplan.config import DATA_PATH, DATABASE_URL, DEFAULT_TERM, FILTER_TERMS, TERMS, schedule_path, selected_path
from courseplan.conflicts import find_conflicts, selection_status
from courseplan.model import Course
from courseplan.parse import build_course_map, schedule_title
from courseplan.remote import RemoteDataError, update_schedule
from courseplan.storage import load_schedule, load_selected_course_ids, save_schedule, save_selected_course_ids, update_course
from courseplan.validate import ValidationResult, validate_course_data


console = Console()


@dataclass
class Session:
    data_dir: Optional[Path]
    term: str = DEFAULT_TERM
    snapshot: dict = field(default_factory=dict)
    course_map: dict[str, Course] = field(default_factory=dict)
    selected: list[str] = field(default_factory=list)

    def reload(self) -> None:
        self.snapshot = load_schedule(schedule_path(self.data_dir))
        self.course_map = build_course_map(self.snapshot)
        self.selected = load_selected_course_ids(selected_path(self.data_dir))

    def save_selection(self) -> None:
        save_selected_course_ids(self.selected, selected_path(self.data_dir))

    def term_courses(self) -> list[Course]:
        return [c for c in self.course_map.values() if c.term == self.term]


def _prompt(msg: str) -> str:
    return console.input(msg, markup=False)


def run_interactive(data_dir: Optional[Path] = None) -> None:
    """
    Interactive menu loop.
    """
    session = Session(data_dir=data_dir)
    session.reload()

    while True:
        _print_header(session)

        choice = _prompt(
            "\n[1] Choose term\n"
            "[2] Browse courses (select / unselect)\n"
            "[3] Course plan\n"
            "[4] Show conflicts\n"
            "[5] Edit course\n"
            "[6] Update data (download course database)\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            console.print("Bye.")
            return

        if choice == "1":
            _flow_choose_term(session)
        elif choice == "2":
            _flow_browse(session)
        elif choice == "3":
            _flow_plan(session)
        elif choice == "4":
            _flow_conflicts(session)
        elif choice == "5":
            _flow_edit(session)
        elif choice == "6":
            _flow_update_data(session)
        else:
            console.print("Invalid choice.")


def _print_header(session: Session) -> None:
    title = schedule_title(session.snapshot) or "Course plan"
    console.print(f"\n=== {escape(title)} ===")
    if not session.course_map:
        console.print("No course data found – run [6] Update data once.")
    console.print(f"Term: {escape(session.term)} | {len(session.selected)} selected")


def _status_cell(status: str) -> str:
    if status == "selected":
        return "[bold blue]selected[/]"
    if status == "conflict":
        return "[bold red]time conflict[/]"
    return ""


def _course_table(title: str, courses: list[Course], session: Session) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Course")
    table.add_column("Title")
    table.add_column("Meets")
    table.add_column("")
    for i, c in enumerate(courses, start=1):
        status = selection_status(session.course_map, session.selected, c.key)
        table.add_row(
            str(i),
            f"[bold cyan]{escape(c.term)} CS{escape(c.number)}[/]",
            escape(c.title),
            escape(c.meets.strip()),
            _status_cell(status),
        )
    return table


def _pick(courses: list[Course], msg: str) -> Optional[Course]:
    pick = _prompt(msg).strip()
    if not pick:
        return None
    if not pick.isdigit():
        console.print("Not a number.")
        return None
    i = int(pick)
    if not (1 <= i <= len(courses)):
        console.print("Out of range.")
        return None
    return courses[i - 1]


def _browse_terms(session: Session) -> list[str]:
    """
    The usual terms, plus any other term that actually has courses
    (e.g. Summer after a course was moved there).
    """
    terms = list(FILTER_TERMS)
    extra = sorted({c.term for c in session.course_map.values()} - set(terms))
    return terms + extra


def _flow_choose_term(session: Session) -> None:
    terms = _browse_terms(session)
    for i, t in enumerate(terms, start=1):
        console.print(f"{i}) {escape(t)}")
    pick = _prompt(f"Choose term [blank = {session.term}]: ").strip()
    if pick.isdigit() and 1 <= int(pick) <= len(terms):
        session.term = terms[int(pick) - 1]


def _flow_browse(session: Session) -> None:
    """
    Course list of the current term. Picking a course toggles it; courses
    that would clash with the plan cannot be picked.
    """
    while True:
        courses = session.term_courses()
        if not courses:
            console.print(f"No courses for term {escape(session.term)}.")
            return

        console.print(_course_table(f"{escape(session.term)} courses", courses, session))

        course = _pick(courses, "Enter number to select/unselect [blank = back]: ")
        if course is None:
            return

        status = selection_status(session.course_map, session.selected, course.key)
        if status == "selected":
            session.selected.remove(course.key)
            session.save_selection()
            console.print(f"Removed: {escape(course.key)}")
        elif status == "conflict":
            console.print(f"[red]{escape(course.key)} has a time conflict with your plan.[/]")
        else:
            session.selected.append(course.key)
            session.save_selection()
            console.print(f"Added: {escape(course.key)}")


def _flow_plan(session: Session) -> None:
    if not session.selected:
        console.print("No courses selected yet.")
        console.print("To add courses to your plan, browse the courses of a term and pick one.")
        return

    table = Table(title="Course Plan", box=box.SIMPLE)
    table.add_column("Course")
    table.add_column("Meets")
    for cid in session.selected:
        c = session.course_map.get(cid)
        if c:
            table.add_row(f"[bold cyan]{escape(c.term)} CS{escape(c.number)}[/]: {escape(c.title)}", escape(c.meets.strip()))
        else:
            table.add_row(f"[bold cyan]{escape(cid)}[/] (not found in course data)", "")
    console.print(table)


def _flow_conflicts(session: Session) -> None:
    confs = find_conflicts(session.course_map, session.selected)
    if not confs:
        console.print("No conflicts found.")
        return

    table = Table(title=f"Conflicts ({len(confs)})", box=box.SIMPLE)
    table.add_column("Course")
    table.add_column("")
    table.add_column("Course")
    for a, b in confs:
        ca, cb = session.course_map[a], session.course_map[b]
        table.add_row(escape(f"{a} {ca.meets.strip()}"), "↔", escape(f"{b} {cb.meets.strip()}"))
    console.print(table)


def _ask(label: str, current: str) -> str:
    value = _prompt(f"{label} [{current}]: ")
    return current if value == "" else value


def _flow_edit(session: Session) -> None:
    """
    Edit form for one course of the current term. Values are validated
    strictly and the edit is written into the cached course data.
    """
    courses = session.term_courses()
    if not courses:
        console.print(f"No courses for term {escape(session.term)}.")
        return

    console.print(_course_table(f"Edit course ({escape(session.term)})", courses, session))
    course = _pick(courses, "Enter number to edit [blank = back]: ")
    if course is None:
        return

    values = {
        "title": course.title,
        "term": course.term,
        "number": course.number,
        "meets": course.meets,
    }
    console.print("Leave 'Meets' as '-' if the meeting time is not known.")

    while True:
        values["title"] = _ask("Title", values["title"])
        values["term"] = _ask(f"Term ({', '.join(TERMS)})", values["term"])
        values["number"] = _ask("Course number (e.g. 213 or 213-2)", values["number"])
        meets = _ask("Meets (e.g. MWF 9:00-9:50)", values["meets"])
        values["meets"] = "" if meets.strip() == "-" else meets

        result = validate_course_data(values)
        if result.valid and result.values is not None:
            new_key = result.values.key
            # term-number must stay unique across the course data
            if new_key == course.key or new_key not in session.course_map:
                break
            result = ValidationResult(valid=False, errors={"number": f"Course {new_key} already exists."})

        for name, message in result.errors.items():
            console.print(f"[red]{name}: {escape(message)}[/]")
        again = _prompt("Try again? [Y/n]: ").strip().lower()
        if again == "n":
            console.print("Cancelled.")
            return

    new_course = result.values
    session.snapshot = update_course(session.snapshot, course.key, new_course)
    save_schedule(session.snapshot, schedule_path(session.data_dir))

    # keep the plan pointing at the edited course
    if new_course.key != course.key and course.key in session.selected:
        if new_course.key in session.selected:
            session.selected.remove(course.key)
        else:
            i = session.selected.index(course.key)
            session.selected[i] = new_course.key
        session.save_selection()

    session.course_map = build_course_map(session.snapshot)
    console.print(f"Saved: {escape(new_course.key)}")


def _flow_update_data(session: Session) -> None:
    url = _prompt(f"Database URL [{DATABASE_URL}]: ").strip() or DATABASE_URL
    path = _prompt(f"Data path [{DATA_PATH}]: ").strip() or DATA_PATH

    try:
        with console.status("Downloading course data..."):
            update_schedule(url, path, data_dir=session.data_dir)
    except (requests.RequestException, RemoteDataError) as exc:
        console.print(f"[red]Error loading course data: {escape(str(exc))}[/]")
        return

    session.reload()
    console.print("Data reloaded into interactive session.")
