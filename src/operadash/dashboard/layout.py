"""
Column layout for the content table.

Turns the visible column definitions of a table into concrete columns for a
given terminal width, and keeps row data aligned with those columns.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from operadash.configuration import ColumnDef
from operadash.constants import EDITABLE_MARKER, MIN_COLUMN_WIDTH

EMPTY_TITLE = 'EMPTY'
FALLBACK_WIDTH = 20

Row = List[str]


@dataclass(frozen=True)
class Column:
    """A rendered table column."""

    title: str
    width: int
    key: str = ''  # record field the cells come from
    editable: bool = False
    input_type: str = ''


def column_title(column_def: ColumnDef) -> str:
    title = column_def.name.upper()
    if column_def.editable:
        title += EDITABLE_MARKER
    return title


def _percentages(visible_defs: Sequence[ColumnDef]) -> List[int]:
    percents = [c.percent or 0 for c in visible_defs]
    specified_total = sum(percents)
    unspecified = sum(1 for c in visible_defs if c.percent is None)

    if specified_total > 100:
        percents = [p * 100 // specified_total for p in percents]
        specified_total = sum(percents)

    remaining = 100 - specified_total
    if unspecified:
        per = remaining // unspecified
        percents = [p if c.percent is not None else per for p, c in zip(percents, visible_defs)]
    return percents


def _shave_excess(widths: List[int], limit: int) -> List[int]:
    """Take width back from the widest columns until the total fits into limit."""
    widths = list(widths)
    excess = sum(widths) - limit
    while excess > 0:
        widest = max(range(len(widths)), key=lambda i: widths[i])
        if widths[widest] <= MIN_COLUMN_WIDTH:
            break
        widths[widest] -= 1
        excess -= 1
    return widths


def build_columns(visible_defs: Sequence[ColumnDef], total_width: int) -> List[Column]:
    """Compute concrete columns for the visible column definitions.

    Widths come from the declared percentages (scaled down when they add up to
    more than 100), the rest is split evenly over columns without a width.
    Every column gets at least MIN_COLUMN_WIDTH. Columns whose title does not
    fit are dropped and the leftover width goes to the last surviving column,
    so the widths of a non-empty result add up to the content width.
    """
    n = len(visible_defs)
    if n == 0:
        return [Column(title=EMPTY_TITLE, width=FALLBACK_WIDTH)]

    content_width = max(total_width, n * MIN_COLUMN_WIDTH)
    percents = _percentages(visible_defs)
    widths = [max(MIN_COLUMN_WIDTH, content_width * p // 100) for p in percents]
    widths = _shave_excess(widths, content_width)

    columns = []
    used = 0
    for column_def, width in zip(visible_defs, widths):
        title = column_title(column_def)
        if len(title) > width:
            continue
        used += width
        columns.append(
            Column(
                title=title,
                width=width,
                key=column_def.name,
                editable=column_def.editable,
                input_type=column_def.input_type,
            )
        )

    if columns and used < content_width:
        last = columns[-1]
        columns[-1] = Column(last.title, last.width + content_width - used, last.key, last.editable, last.input_type)
    return columns


def auto_columns(names: Sequence[str], total_width: int) -> List[Column]:
    """Columns for record fields without a table definition."""
    return build_columns([ColumnDef(name=name) for name in names], total_width)


def default_columns(n: int, total_width: int) -> List[Column]:
    """N equal-width placeholder columns titled COL1..COLn."""
    n = max(n, 1)
    if total_width <= 0:
        return [Column(title=f'COL{i + 1}', width=FALLBACK_WIDTH) for i in range(n)]

    total_width = max(total_width, n * MIN_COLUMN_WIDTH)
    per = max(total_width // n, MIN_COLUMN_WIDTH)
    widths = [per] * n
    widths[-1] += total_width - per * n
    return [Column(title=f'COL{i + 1}', width=w) for i, w in enumerate(widths)]


def normalize_rows(rows: Optional[Sequence[Sequence[str]]], n: int) -> List[Row]:
    """Pad or truncate every row to n cells; no rows becomes one all-empty row."""
    rows = list(rows or [])
    if n <= 0:
        return [list(r) for r in rows]
    if not rows:
        return [[''] * n]
    return [(list(r) + [''] * n)[:n] for r in rows]
