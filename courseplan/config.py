"""
Paths and defaults shared by the CLI, the interactive menu and storage.

All user state lives next to the package in data/ unless a different
directory is passed explicitly (e.g. via --data-dir).
"""

from __future__ import annotations

from pathlib import Path


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

SELECTED_FILE = "selected_courses.json"
SCHEDULE_FILE = "schedule.json"


# ---------------------------------------------------------------------------
# Remote database
# ---------------------------------------------------------------------------

DATABASE_URL = "https://class-scheduler-56b32-default-rtdb.firebaseio.com"
DATA_PATH = "/cs-courses"
REQUEST_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------

# Terms accepted by the course form
TERMS = ("Fall", "Winter", "Spring", "Summer")

# Terms offered when browsing
FILTER_TERMS = ("Fall", "Winter", "Spring")

DEFAULT_TERM = "Fall"


def selected_path(data_dir: str | Path | None = None) -> Path:
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    return base / SELECTED_FILE


def schedule_path(data_dir: str | Path | None = None) -> Path:
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    return base / SCHEDULE_FILE
