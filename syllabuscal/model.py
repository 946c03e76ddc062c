"""
Central data model definitions used across the project.

This module defines the canonical structure of every value that flows
through the extraction pipeline so that:
- all stages share the same field names
- nothing is mutated after construction (all dataclasses are frozen)
- a rejected row or table is an ordinary value (Skip), not an exception
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Union


@dataclass(frozen=True)
class TableRegion:
    """
    One <table>...</table> block found in the source text.
    """

    index: int
    text: str


@dataclass(frozen=True)
class RawRow:
    """
    One row of a table region, split into trimmed field strings.

    Row 0 of a region is the header candidate.
    """

    index: int
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class ModuleRow:
    """
    A validated data row (seven fixed columns).
    """

    module: str
    date_expression: str
    activities: str
    technology: str
    is_onsite: bool
    is_async: bool
    hours: float = 1.0


@dataclass(frozen=True)
class DateRange:
    """
    Resolved civil start/end dates of a week expression.
    """

    start_date: date
    end_date: date
    week_label: str


@dataclass(frozen=True)
class Skip:
    """
    Tagged "rejected" result returned by a pipeline stage.
    """

    reason: str


@dataclass(frozen=True)
class Diagnostic:
    """
    Why a table or row was left out of the result.

    row_index is -1 when the whole table was skipped.
    """

    table_index: int
    row_index: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"table": self.table_index, "row": self.row_index, "reason": self.reason}


@dataclass(frozen=True)
class CalendarEvent:
    """
    Final output unit, ready to be handed to a calendar service.
    """

    summary: str
    description: str
    start_time: datetime
    end_time: datetime
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only copy, so the event stays unchanged after construction
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-friendly payload with ISO-8601 timestamps.
        """
        return {
            "summary": self.summary,
            "description": self.description,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "metadata": dict(self.metadata),
        }

    def to_calendar_body(self, timezone: str) -> Dict[str, Any]:
        """
        Request body for a calendar-service event insert/update.

        Private extended properties only accept strings, so every
        metadata value is stringified here.
        """
        meta = self.metadata
        return {
            "summary": self.summary,
            "description": self.description,
            "start": {"dateTime": self.start_time.isoformat(), "timeZone": timezone},
            "end": {"dateTime": self.end_time.isoformat(), "timeZone": timezone},
            "extendedProperties": {
                "private": {
                    "isOnsite": str(bool(meta.get("is_onsite"))).lower(),
                    "isAsync": str(bool(meta.get("is_async"))).lower(),
                    "hours": str(meta.get("hours", 1.0)),
                    "courseTitle": str(meta.get("course_title", "")),
                    "weekInfo": str(meta.get("week_info", "")),
                    "dateRange": json.dumps(
                        {
                            "start": meta.get("range_start", self.start_time.isoformat()),
                            "end": meta.get("range_end", self.end_time.isoformat()),
                        }
                    ),
                }
            },
        }


class Outcome(Enum):
    """
    Whole-document result of one extraction run.
    """

    EVENTS = "events"
    NO_TABLES = "no_tables"
    NO_EVENTS = "no_events"
    EMPTY_DOCUMENT = "empty_document"


@dataclass(frozen=True)
class ExtractionResult:
    course_title: str
    events: Tuple[CalendarEvent, ...]
    diagnostics: Tuple[Diagnostic, ...]
    tables_found: int
    outcome: Outcome

    @property
    def has_data(self) -> bool:
        return self.outcome is Outcome.EVENTS


RowResult = Union[ModuleRow, Skip]
RangeResult = Union[DateRange, Skip]
