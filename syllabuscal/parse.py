"""
Parsing (syllabus text dump -> calendar events).

- Reads the course title from the <title> marker
- Finds every <table> region and splits it into rows and fields
- Turns EACH valid data row into exactly ONE calendar event
- Records a diagnostic for every table or row that had to be skipped

Important rules (DO NOT CHANGE):
- 1 data row = 1 event
- A bad row or table never stops the rest of the document
- The reference year is always passed in, never read from the clock
"""

from __future__ import annotations

import logging
import re
from datetime import tzinfo
from typing import List

from syllabuscal.dates import resolve_date_range
from syllabuscal.events import DEFAULT_START_HOUR, build_event
from syllabuscal.model import (
    CalendarEvent,
    Diagnostic,
    ExtractionResult,
    Outcome,
    Skip,
)
from syllabuscal.rows import parse_table
from syllabuscal.tables import locate_tables, split_rows


logger = logging.getLogger(__name__)

NO_TITLE = "No Course Title Found"

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.DOTALL)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def extract_course_title(text: str) -> str:
    """
    Returns the trimmed text of the first <title> marker pair.
    """
    m = _TITLE_RE.search(text)
    if not m:
        return NO_TITLE
    title = m.group(1).strip()
    return title if title else NO_TITLE


def _outcome(tables_found: int, events: List[CalendarEvent]) -> Outcome:
    if tables_found == 0:
        return Outcome.NO_TABLES
    if not events:
        return Outcome.NO_EVENTS
    return Outcome.EVENTS


# ---------------------------------------------------------------------------
# Orchestration (CORE LOGIC)
# ---------------------------------------------------------------------------


def extract_events(
    text: str,
    reference_year: int,
    tz: tzinfo,
    start_hour: int = DEFAULT_START_HOUR,
) -> ExtractionResult:
    """
    Runs the whole pipeline over one document.

    Skipped tables and rows end up in result.diagnostics; the caller decides
    what a NO_TABLES / NO_EVENTS / EMPTY_DOCUMENT outcome means.
    """
    if not isinstance(text, str):
        raise TypeError(f"document text must be str, not {type(text).__name__}")

    if not text.strip():
        return ExtractionResult(
            course_title=NO_TITLE,
            events=(),
            diagnostics=(),
            tables_found=0,
            outcome=Outcome.EMPTY_DOCUMENT,
        )

    course_title = extract_course_title(text)
    logger.debug("Course title: %s", course_title)

    events: List[CalendarEvent] = []
    diagnostics: List[Diagnostic] = []
    tables_found = 0

    for region in locate_tables(text):
        tables_found += 1
        rows = split_rows(region)

        parsed = parse_table(rows)
        if isinstance(parsed, Skip):
            logger.debug("Table %d skipped: %s", region.index, parsed.reason)
            diagnostics.append(Diagnostic(region.index, -1, parsed.reason))
            continue

        for raw, row in parsed:
            if isinstance(row, Skip):
                logger.debug("Table %d row %d skipped: %s", region.index, raw.index, row.reason)
                diagnostics.append(Diagnostic(region.index, raw.index, row.reason))
                continue

            date_range = resolve_date_range(row.date_expression, reference_year)
            if isinstance(date_range, Skip):
                logger.debug("Table %d row %d skipped: %s", region.index, raw.index, date_range.reason)
                diagnostics.append(Diagnostic(region.index, raw.index, date_range.reason))
                continue

            event = build_event(date_range, row, course_title, tz, start_hour)
            if isinstance(event, Skip):
                logger.debug("Table %d row %d skipped: %s", region.index, raw.index, event.reason)
                diagnostics.append(Diagnostic(region.index, raw.index, event.reason))
                continue

            events.append(event)

    outcome = _outcome(tables_found, events)
    logger.info(
        "Extracted %d event(s) from %d table(s), %d skipped (%s)",
        len(events),
        tables_found,
        len(diagnostics),
        outcome.value,
    )

    return ExtractionResult(
        course_title=course_title,
        events=tuple(events),
        diagnostics=tuple(diagnostics),
        tables_found=tables_found,
        outcome=outcome,
    )


def result_to_dict(result: ExtractionResult) -> dict:
    """
    JSON-friendly form of an extraction result.
    """
    return {
        "course_title": result.course_title,
        "outcome": result.outcome.value,
        "tables_found": result.tables_found,
        "events": [ev.to_dict() for ev in result.events],
        "diagnostics": [d.to_dict() for d in result.diagnostics],
    }

