"""
Persistent storage for extraction results.

This module writes and reads the JSON file produced by `syllabuscal extract --out`:

    {
      "course_title": "...",
      "outcome": "events",
      "tables_found": 1,
      "events": [ {summary, description, startTime, endTime, metadata}, ... ],
      "diagnostics": [ {table, row, reason}, ... ]
    }

The events in this file are what `syllabuscal export` turns into an .ics file
and what a calendar-service client submits one at a time.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from syllabuscal.model import ExtractionResult
from syllabuscal.parse import result_to_dict


def save_result(result: ExtractionResult, path: str | Path) -> Path:
    """
    Save an extraction result as JSON.

    Creates parent directories if needed.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    out_path.write_text(
        json.dumps(result_to_dict(result), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return out_path


def load_events(path: str | Path) -> list[dict[str, Any]]:
    """
    Load the event dicts from a saved result file.

    Returns an empty list if the file does not exist or is invalid.
    Entries that are not JSON objects are dropped.
    """
    events_path = Path(path)

    if not events_path.exists():
        return []

    try:
        data = json.loads(events_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return []

    # A bare list of events is accepted too
    events = data.get("events", []) if isinstance(data, dict) else data
    if not isinstance(events, list):
        return []

    return [ev for ev in events if isinstance(ev, dict)]
