from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from operadash.constants import (
    DEFINITION_ALIASES,
    INSTANCE_ALIASES,
    RESOURCE_PROCESS_DEFINITIONS,
    RESOURCE_PROCESS_INSTANCES,
    RESOURCE_PROCESS_VARIABLES,
    VARIABLE_ALIASES,
)
from operadash.dashboard.layout import Column, Row, normalize_rows


class ViewMode(Enum):
    """Kind of table shown in the content area."""

    DEFINITIONS = 'definitions'
    INSTANCES = 'instances'
    VARIABLES = 'variables'
    GENERIC = 'generic'

    @classmethod
    def for_resource(cls, resource: str) -> 'ViewMode':
        if resource in DEFINITION_ALIASES:
            return cls.DEFINITIONS
        if resource in INSTANCE_ALIASES:
            return cls.INSTANCES
        if resource in VARIABLE_ALIASES:
            return cls.VARIABLES
        return cls.GENERIC


def canonical_resource(resource: str) -> str:
    """Breadcrumb key of a resource; well-known resources use their plural spelling."""
    mode = ViewMode.for_resource(resource)
    if mode is ViewMode.DEFINITIONS:
        return RESOURCE_PROCESS_DEFINITIONS
    if mode is ViewMode.INSTANCES:
        return RESOURCE_PROCESS_INSTANCES
    if mode is ViewMode.VARIABLES:
        return RESOURCE_PROCESS_VARIABLES
    return resource


@dataclass
class TableModel:
    """The live content table: columns, rows and the cursor."""

    columns: List[Column] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    cursor: int = 0

    def set_columns(self, columns: Sequence[Column]) -> None:
        self.columns = list(columns)

    def set_rows(self, rows: Sequence[Sequence[str]]) -> None:
        self.rows = normalize_rows(rows, len(self.columns))
        self.set_cursor(self.cursor)

    def set_cursor(self, cursor: int) -> None:
        self.cursor = max(0, min(cursor, len(self.rows) - 1)) if self.rows else 0

    def move_cursor(self, delta: int) -> None:
        self.set_cursor(self.cursor + delta)

    @property
    def column_keys(self) -> List[str]:
        return [c.key for c in self.columns]

    @property
    def selected_row(self) -> Optional[Row]:
        if not self.rows or not 0 <= self.cursor < len(self.rows):
            return None
        return self.rows[self.cursor]

    def cell(self, row: Sequence[str], key: str) -> str:
        wanted = key.lower()
        for i, column in enumerate(self.columns):
            if column.key.lower() == wanted and i < len(row):
                return row[i]
        return ''


@dataclass(frozen=True)
class ViewState:
    """Snapshot of one view, pushed on the navigation stack before drilling."""

    view_mode: ViewMode
    breadcrumb: Tuple[str, ...]
    content_header: str
    selected_definition_key: str = ''
    instance_filter_param: str = ''
    selected_instance_id: str = ''
    columns: Tuple[Column, ...] = ()
    rows: Tuple[Tuple[str, ...], ...] = ()
    records: Tuple[Dict[str, Any], ...] = ()
    cursor: int = 0

    @classmethod
    def snapshot(
        cls,
        view_mode: ViewMode,
        breadcrumb: Sequence[str],
        content_header: str,
        table: TableModel,
        selected_definition_key: str = '',
        instance_filter_param: str = '',
        selected_instance_id: str = '',
        records: Sequence[Mapping[str, Any]] = (),
    ) -> 'ViewState':
        """Freeze the current view; rows are normalized to the column count."""
        rows = normalize_rows(table.rows, len(table.columns))
        return cls(
            view_mode=view_mode,
            breadcrumb=tuple(breadcrumb),
            content_header=content_header,
            selected_definition_key=selected_definition_key,
            instance_filter_param=instance_filter_param,
            selected_instance_id=selected_instance_id,
            columns=tuple(table.columns),
            rows=tuple(tuple(r) for r in rows),
            records=tuple(dict(r) for r in records),
            cursor=table.cursor,
        )


class NavigationStack:
    """LIFO history of views."""

    def __init__(self) -> None:
        self._states: List[ViewState] = []

    def push(self, state: ViewState) -> None:
        self._states.append(state)

    def pop(self) -> Optional[ViewState]:
        if not self._states:
            return None
        return self._states.pop()

    def truncate(self, depth: int) -> None:
        del self._states[max(0, depth):]

    def clear(self) -> None:
        self._states.clear()

    def __len__(self) -> int:
        return len(self._states)
