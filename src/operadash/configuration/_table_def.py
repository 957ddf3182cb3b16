import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

from operadash.constants import DEFAULT_DRILL_COLUMN, INSTANCE_ALIASES, VARIABLE_ALIASES

_PERCENT_PATTERN = re.compile(r'^\s*(\d+)\s*%\s*$')


class DrillTargetKind(Enum):
    """Views a drilldown rule can lead to."""

    INSTANCES = 'instances'
    VARIABLES = 'variables'
    UNSUPPORTED = 'unsupported'

    @classmethod
    def from_target(cls, target: str) -> 'DrillTargetKind':
        name = (target or '').strip().lower()
        if name in INSTANCE_ALIASES:
            return cls.INSTANCES
        if name in VARIABLE_ALIASES:
            return cls.VARIABLES
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class ColumnDef:
    """A table column as declared in the application configuration."""

    name: str
    visible: bool = True
    width: str = ''  # percentage like "25%", empty for auto
    align: str = 'left'  # informational
    editable: bool = False
    input_type: str = ''  # text/int/number/bool/json/auto

    @property
    def percent(self) -> Optional[int]:
        """Width percentage, or None when the width is automatic or unparsable."""
        match = _PERCENT_PATTERN.match(self.width or '')
        if not match:
            return None
        return int(match.group(1))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ColumnDef':
        return cls(
            name=str(data.get('name', '')),
            visible=bool(data.get('visible', True)),
            width=str(data.get('width') or ''),
            align=str(data.get('align') or 'left'),
            editable=bool(data.get('editable', False)),
            input_type=str(data.get('input_type') or ''),
        )


@dataclass(frozen=True)
class DrillDownDef:
    """Drill-down rule: target collection, query parameter and source column."""

    target: str
    param: str = ''
    column: str = DEFAULT_DRILL_COLUMN
    kind: DrillTargetKind = field(init=False)

    def __post_init__(self):
        if not self.column:
            object.__setattr__(self, 'column', DEFAULT_DRILL_COLUMN)
        object.__setattr__(self, 'kind', DrillTargetKind.from_target(self.target))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DrillDownDef':
        return cls(
            target=str(data.get('target', '')),
            param=str(data.get('param') or ''),
            column=str(data.get('column') or DEFAULT_DRILL_COLUMN),
        )


@dataclass(frozen=True)
class TableDef:
    """Named table with its columns and drill-down rules."""

    name: str
    columns: Tuple[ColumnDef, ...] = ()
    drilldown: Tuple[DrillDownDef, ...] = ()

    @property
    def visible_columns(self) -> List[ColumnDef]:
        return [c for c in self.columns if c.visible]

    @property
    def unsupported_targets(self) -> List[str]:
        return [d.target for d in self.drilldown if d.kind is DrillTargetKind.UNSUPPORTED]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'TableDef':
        return cls(
            name=str(data.get('name', '')),
            columns=tuple(ColumnDef.from_dict(c) for c in data.get('columns') or []),
            drilldown=tuple(DrillDownDef.from_dict(d) for d in data.get('drilldown') or []),
        )
