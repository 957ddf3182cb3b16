from dataclasses import dataclass
from typing import Optional, Sequence

from operadash.configuration import DrillDownDef, DrillTargetKind, TableDef
from operadash.constants import (
    DEFAULT_DEFINITION_COLUMN,
    DEFAULT_DEFINITION_PARAM,
    DEFAULT_DRILL_COLUMN,
    RESOURCE_PROCESS_INSTANCES,
    RESOURCE_PROCESS_VARIABLES,
)
from operadash.dashboard.state import ViewMode


@dataclass(frozen=True)
class Drilldown:
    """Where a drill goes and what it carries along."""

    target: str
    kind: DrillTargetKind
    param: str
    value: str


def column_index(visible_columns: Sequence[str], name: str) -> int:
    """Case-insensitive position of name among the rendered column keys, -1 when absent."""
    wanted = name.lower()
    for i, key in enumerate(visible_columns):
        if key.lower() == wanted:
            return i
    return -1


def _cell(row: Sequence[str], visible_columns: Sequence[str], column: str) -> str:
    idx = column_index(visible_columns, column)
    if 0 <= idx < len(row):
        return row[idx]
    return row[0] if row else ''


class DrilldownResolver:
    """Pick the drill target for a selected row from the table's drilldown rules."""

    def resolve(self, table_def: TableDef, row: Sequence[str], visible_columns: Sequence[str]) -> Optional[Drilldown]:
        """First rule whose source column is in the row wins, otherwise the first rule.

        Returns None when the table declares no rules.
        """
        if not table_def.drilldown:
            return None

        chosen: DrillDownDef = table_def.drilldown[0]
        for rule in table_def.drilldown:
            idx = column_index(visible_columns, rule.column or DEFAULT_DRILL_COLUMN)
            if 0 <= idx < len(row):
                chosen = rule
                break

        return Drilldown(
            target=chosen.target,
            kind=chosen.kind,
            param=chosen.param,
            value=_cell(row, visible_columns, chosen.column or DEFAULT_DRILL_COLUMN),
        )

    def default_for(self, view_mode: ViewMode, row: Sequence[str], visible_columns: Sequence[str]) -> Optional[Drilldown]:
        """Two-level fallback: definitions drill into instances, instances into variables."""
        if view_mode is ViewMode.DEFINITIONS:
            return Drilldown(
                target=RESOURCE_PROCESS_INSTANCES,
                kind=DrillTargetKind.INSTANCES,
                param=DEFAULT_DEFINITION_PARAM,
                value=_cell(row, visible_columns, DEFAULT_DEFINITION_COLUMN),
            )
        if view_mode is ViewMode.INSTANCES:
            return Drilldown(
                target=RESOURCE_PROCESS_VARIABLES,
                kind=DrillTargetKind.VARIABLES,
                param='',
                value=_cell(row, visible_columns, DEFAULT_DRILL_COLUMN),
            )
        return None
