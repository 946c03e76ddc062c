"""
Week expressions (free text -> DateRange).

Handles expressions such as:

    Week 12 (Nov. 18-30)             same month
    Week 13 (Nov. 28-Dec. 2)         month change
    Week 14 (Dec. 28-Jan. 3)         year change
    Weeks 9 and 10 (Oct. 30-Nov. 5)  double week label

All shapes go through the same steps: week label -> range text ->
split on '-' -> (month, day) per side -> calendar dates.

The year is always supplied by the caller. Only one rollover rule exists:
if the end month is smaller than the start month, the end date moves into
the next year.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Tuple, Union

from syllabuscal.model import DateRange, RangeResult, Skip


# Case-sensitive on purpose; 'Sept' is the only alternate spelling accepted
MONTHS = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Sept": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}

_WEEK_RE = re.compile(r"Week\s+(\d+)(?:\s+and\s+(\d+))?")
_RANGE_RE = re.compile(r"\(([^()]*)\)")
_TOKEN_SPLIT_RE = re.compile(r"[\s.]+")


def parse_month(token: str) -> Optional[int]:
    """
    Month number for an abbreviation like 'Nov' or 'Nov.', else None.
    """
    return MONTHS.get(token.strip().rstrip("."))


def week_label(expression: str) -> Optional[str]:
    """
    'Week N' or 'Weeks N and M', or None if no week number is present.
    """
    m = _WEEK_RE.search(expression)
    if not m:
        return None
    return _label_from_match(m)


def _label_from_match(m: re.Match) -> str:
    if m.group(2):
        return f"Weeks {m.group(1)} and {m.group(2)}"
    return f"Week {m.group(1)}"


def _split_side(side: str) -> list[str]:
    return [t for t in _TOKEN_SPLIT_RE.split(side) if t]


def _month_day(
    tokens: list[str], default_month: Optional[int], label: str
) -> Union[Tuple[int, int], Skip]:
    """
    Resolve one side of the range into (month, day).

    A bare day is only allowed when default_month is given.
    """
    if len(tokens) == 2:
        month = parse_month(tokens[0])
        if month is None:
            return Skip(f"unknown month {tokens[0]!r} in {label} date")
        day_token = tokens[1]
    elif len(tokens) == 1 and default_month is not None:
        month = default_month
        day_token = tokens[0]
    else:
        return Skip(f"cannot read {label} date from {' '.join(tokens)!r}")

    if not day_token.isdigit():
        return Skip(f"non-numeric day {day_token!r} in {label} date")

    return month, int(day_token)


def resolve_date_range(expression: str, reference_year: int) -> RangeResult:
    """
    Resolve a week expression into a DateRange, or a Skip with the reason.
    """
    week_match = _WEEK_RE.search(expression)
    if not week_match:
        return Skip(f"no week number in {expression!r}")
    label = _label_from_match(week_match)

    # The range has to follow the week label
    range_match = _RANGE_RE.search(expression, week_match.end())
    if not range_match:
        return Skip(f"no parenthesized date range in {expression!r}")

    range_text = range_match.group(1).strip()
    sides = range_text.split("-")
    if len(sides) != 2:
        return Skip(f"date range {range_text!r} is not of the form 'start-end'")

    start = _month_day(_split_side(sides[0]), None, "start")
    if isinstance(start, Skip):
        return start
    start_month, start_day = start

    end = _month_day(_split_side(sides[1]), start_month, "end")
    if isinstance(end, Skip):
        return end
    end_month, end_day = end

    end_year = reference_year + 1 if end_month < start_month else reference_year

    try:
        start_date = date(reference_year, start_month, start_day)
        end_date = date(end_year, end_month, end_day)
    except ValueError:
        return Skip(f"date range {range_text!r} is not a valid calendar date in {reference_year}")

    if end_date < start_date:
        return Skip(f"date range {range_text!r} ends before it starts")

    return DateRange(start_date=start_date, end_date=end_date, week_label=label)
