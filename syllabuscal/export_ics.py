"""
iCalendar (.ics) export.

We convert extracted events (the dicts from CalendarEvent.to_dict()) into a
calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_utc(iso_timestamp: str) -> str:
    """
    Convert an ISO-8601 timestamp with offset to ICS UTC form 'YYYYMMDDTHHMMSSZ'.
    Raises ValueError for naive or malformed timestamps.
    """
    dt = datetime.fromisoformat(iso_timestamp)
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp without offset: {iso_timestamp!r}")
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _uid(summary: str, dtstart: str) -> str:
    digest = hashlib.sha1(f"{summary}|{dtstart}".encode("utf-8")).hexdigest()[:16]
    return f"{digest}@syllabuscal"


def export_events_to_ics(
    events: list[dict[str, Any]],
    out_path: str | Path,
    now: Optional[datetime] = None,
) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    stamp_at = now if now is not None else datetime.now(timezone.utc)
    dtstamp = stamp_at.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//syllabuscal//EN")
    lines.append("CALSCALE:GREGORIAN")

    count = 0
    for ev in events:
        summary = str(ev.get("summary", "") or "").strip()
        description = str(ev.get("description", "") or "")
        start = str(ev.get("startTime", "") or "").strip()
        end = str(ev.get("endTime", "") or "").strip()

        if not (start and end):
            continue

        try:
            dtstart = _dt_utc(start)
            dtend = _dt_utc(end)
        except ValueError:
            continue

        # if end <= start, treat as invalid / skip
        if dtend <= dtstart:
            continue

        if not summary:
            summary = "Syllabus Event"

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_uid(summary, dtstart)}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(summary)}")
        if description.strip():
            lines.append(f"DESCRIPTION:{_ics_escape(description)}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
