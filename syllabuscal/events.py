"""
Event synthesis (DateRange + ModuleRow + course title -> CalendarEvent).
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Union

from syllabuscal.model import CalendarEvent, DateRange, ModuleRow, Skip


DEFAULT_START_HOUR = 9


def _at(day: date, hour: int, tz: tzinfo) -> datetime:
    return datetime.combine(day, time(hour=hour), tzinfo=tz)


def _after(start: datetime, duration: timedelta, tz: tzinfo) -> datetime:
    # Elapsed time, not wall-clock time: a DST change does not stretch the session
    return (start.astimezone(timezone.utc) + duration).astimezone(tz)


def format_mode(is_onsite: bool, is_async: bool) -> str:
    place = "Onsite" if is_onsite else "Online"
    pace = "(Asynchronous)" if is_async else "(Synchronous)"
    return f"{place} {pace}"


def format_description(row: ModuleRow, week_label: str, course_title: str) -> str:
    lines = [
        course_title,
        "=" * len(course_title),
        "",
        f"Module: {row.module}",
        "",
        week_label,
        "Activities and Assessment:",
        row.activities,
        "",
        f"Technology: {row.technology}",
        f"Mode: {format_mode(row.is_onsite, row.is_async)}",
    ]
    return "\n".join(lines)


def build_event(
    date_range: DateRange,
    row: ModuleRow,
    course_title: str,
    tz: tzinfo,
    start_hour: int = DEFAULT_START_HOUR,
) -> Union[CalendarEvent, Skip]:
    """
    Build the calendar event for one resolved row.

    The event is a single session of row.hours starting at start_hour on
    the first day of the range. The full range (first day start to last
    day start + hours) is kept in the metadata.

    Returns Skip when the end time cannot be represented (huge hours or
    a range at the very end of the calendar).
    """
    start_time = _at(date_range.start_date, start_hour, tz)
    try:
        duration = timedelta(hours=row.hours)
        end_time = _after(start_time, duration, tz)
        range_end = _after(_at(date_range.end_date, start_hour, tz), duration, tz)
    except OverflowError:
        return Skip(f"event end is out of range ({row.hours} hours from {start_time.isoformat()})")

    metadata = {
        "module": row.module,
        "date": row.date_expression,
        "activities_and_assessment": row.activities,
        "technology": row.technology,
        "is_onsite": row.is_onsite,
        "is_async": row.is_async,
        "hours": row.hours,
        "course_title": course_title,
        "week_info": date_range.week_label,
        "range_start": start_time.isoformat(),
        "range_end": range_end.isoformat(),
    }

    return CalendarEvent(
        summary=f"{course_title} | {date_range.week_label}",
        description=format_description(row, date_range.week_label, course_title),
        start_time=start_time,
        end_time=end_time,
        metadata=metadata,
    )
