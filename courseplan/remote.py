from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import requests

from courseplan.config import DATABASE_URL, DATA_PATH, REQUEST_TIMEOUT, schedule_path
from courseplan.parse import build_course_map
from courseplan.storage import save_schedule


class RemoteDataError(ValueError):
    """The database answered, but not with a course snapshot."""


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def snapshot_url(database_url: str, path: str = DATA_PATH) -> str:
    """
    REST address of a database node, e.g.
    https://example.firebaseio.com/cs-courses.json
    """
    node = path.strip().strip("/")
    return f"{database_url.rstrip('/')}/{node}.json"


def fetch_schedule(
    database_url: str = DATABASE_URL,
    path: str = DATA_PATH,
    timeout: float = REQUEST_TIMEOUT,
) -> dict[str, Any]:
    """
    Download one snapshot of the course data node.

    Raises requests.RequestException on network/HTTP errors and
    RemoteDataError if the node is empty or not a JSON object.
    """
    resp = requests.get(snapshot_url(database_url, path), timeout=timeout)
    resp.raise_for_status()

    try:
        data = resp.json()
    except ValueError as exc:
        raise RemoteDataError(f"Response from {path} is not JSON") from exc

    if not isinstance(data, dict):
        raise RemoteDataError(f"No course data found at {path}")
    return data


def update_schedule(
    database_url: str = DATABASE_URL,
    path: str = DATA_PATH,
    data_dir: str | Path | None = None,
) -> int:
    """
    Fetch the snapshot, cache it as schedule.json and return the course count.
    """
    print(f"Fetching {snapshot_url(database_url, path)}")
    snapshot = fetch_schedule(database_url, path)

    count = len(build_course_map(snapshot))
    print(f"Found {count} courses")

    out = schedule_path(data_dir)
    save_schedule(snapshot, out)
    print(f"Saved to {out}")
    return count


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="courseplan.remote", description="Download course data from the database")
    p.add_argument("--database-url", type=str, default=DATABASE_URL, help="Realtime database base URL")
    p.add_argument("--path", type=str, default=DATA_PATH, help="Node holding the course data")
    p.add_argument("--data-dir", type=str, default=None, help="Directory for cached data")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    update_schedule(args.database_url, args.path, data_dir=args.data_dir)


if __name__ == "__main__":
    main()
