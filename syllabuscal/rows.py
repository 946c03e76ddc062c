"""
Module rows (raw fields -> typed ModuleRow).

Column order is fixed:

    module $ date expression $ activities/assessment $ technology $ onsite $ async $ hours
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

from syllabuscal.model import ModuleRow, RawRow, RowResult, Skip


MIN_ROWS = 2
MIN_FIELDS = 7
DEFAULT_HOURS = 1.0


def parse_flag(value: str) -> bool:
    """
    'true' in any letter case is True, everything else is False.
    """
    return value.strip().lower() == "true"


def parse_hours(value: str) -> float:
    """
    Parse an hours column, falling back to DEFAULT_HOURS.

    Unparseable, infinite, NaN and non-positive values all fall back.
    """
    try:
        hours = float(value.strip())
    except ValueError:
        return DEFAULT_HOURS
    if not math.isfinite(hours) or hours <= 0:
        return DEFAULT_HOURS
    return hours


def parse_module_row(row: RawRow) -> RowResult:
    fields = row.fields
    if len(fields) < MIN_FIELDS:
        return Skip(f"expected at least {MIN_FIELDS} fields, got {len(fields)}")

    return ModuleRow(
        module=fields[0],
        date_expression=fields[1],
        activities=fields[2],
        technology=fields[3],
        is_onsite=parse_flag(fields[4]),
        is_async=parse_flag(fields[5]),
        hours=parse_hours(fields[6]),
    )


def parse_table(rows: Sequence[RawRow]) -> Union[List[Tuple[RawRow, RowResult]], Skip]:
    """
    Validate a tokenized table and parse every data row.

    Returns Skip for a table without a header and at least one data row.
    Otherwise returns (raw row, ModuleRow | Skip) pairs for the data rows,
    in table order; the header row is not interpreted.
    """
    if len(rows) < MIN_ROWS:
        return Skip(f"table has {len(rows)} row(s), need a header and at least one data row")

    return [(row, parse_module_row(row)) for row in rows[1:]]
