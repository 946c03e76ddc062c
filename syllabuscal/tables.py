"""
Table regions (text -> tables -> rows -> fields).

The text dump marks every table with <table> ... </table>. Inside a table:
- '@' separates rows
- '$' separates fields

There is no escaping: a value that itself contains '@' or '$' cannot be
represented and will be split. This is a limitation of the input format.
"""

from __future__ import annotations

import re
from typing import Iterator, List

from syllabuscal.model import RawRow, TableRegion


TABLE_OPEN = "<table>"
TABLE_CLOSE = "</table>"
ROW_SEPARATOR = "@"
FIELD_SEPARATOR = "$"

# Non-greedy: each region ends at the first closing marker after its opening one
_TABLE_RE = re.compile(re.escape(TABLE_OPEN) + r"(.*?)" + re.escape(TABLE_CLOSE), re.DOTALL)


def locate_tables(text: str) -> Iterator[TableRegion]:
    """
    Yield every table region in document order.

    Regions are non-overlapping and never nested. Blank regions are
    not yielded, and an opening marker without a closing one is ignored.
    """
    index = 0
    for match in _TABLE_RE.finditer(text):
        content = match.group(1).strip()
        if not content:
            continue
        yield TableRegion(index=index, text=content)
        index += 1


def split_rows(region: TableRegion) -> List[RawRow]:
    """
    Split a table region into trimmed rows and fields.

    Empty rows are dropped; short rows are kept and rejected later.
    """
    rows: List[RawRow] = []

    raw_rows = [r.strip() for r in region.text.split(ROW_SEPARATOR)]
    for raw in raw_rows:
        if not raw:
            continue
        fields = tuple(f.strip() for f in raw.split(FIELD_SEPARATOR))
        rows.append(RawRow(index=len(rows), fields=fields))

    return rows
