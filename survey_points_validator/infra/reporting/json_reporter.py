"""
Work directory helpers.

A run keeps a copy of what it passes between stages (query, downloaded
CSV, discrepancies and report) in its work directory, next to the log
file, so a failed run can be inspected afterwards.  Nothing reads these
files back.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional

QUERY_FILE = "query.txt"
SURVEY_POINTS_FILE = "survey_points.csv"
DISCREPANCIES_FILE = "discrepancies.json"
REPORT_FILE = "report.txt"
LOG_FILE = "check.log"

INTERMEDIATE_FILES = (QUERY_FILE, SURVEY_POINTS_FILE, DISCREPANCIES_FILE, REPORT_FILE)


def ensure_dir(directory: str) -> None:
    """Ensure a directory exists, creating it recursively if necessary."""
    logging.debug("[jsonReporter] ensure_dir", extra={"dir": directory})
    Path(directory).mkdir(parents=True, exist_ok=True)


def create_work_dir(directory: Optional[str] = None) -> str:
    """Return the run directory, creating a fresh temp one when not given."""
    if directory:
        ensure_dir(directory)
        return directory
    return tempfile.mkdtemp(prefix="check_")


def write_json(file_path: str, data: Any) -> None:
    """Write an object to a JSON file, ensuring the directory exists."""
    ensure_dir(os.path.dirname(file_path) or ".")
    logging.debug("[jsonReporter] write_json", extra={"file": file_path})
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_text(file_path: str, text: str) -> None:
    ensure_dir(os.path.dirname(file_path) or ".")
    logging.debug("[jsonReporter] write_text", extra={"file": file_path})
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(text)


def clean_files(directory: str, names: Iterable[str] = INTERMEDIATE_FILES) -> None:
    """Delete the given files from ``directory``; missing files are ignored."""
    logging.info("[jsonReporter] Cleaning intermediate files", extra={"dir": directory})
    for name in names:
        Path(directory, name).unlink(missing_ok=True)
