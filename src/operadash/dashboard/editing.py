from dataclasses import dataclass, field
from typing import List, Optional

from operadash.contentassist import suggest_users
from operadash.dashboard.layout import Column
from operadash.validation import USER_TYPE, InputValidationError, parse_input


@dataclass
class EditableColumn:
    index: int  # position in the rendered row
    column: Column
    input_type: str  # effective input type after resolving 'auto'
    variable_type: str = ''


@dataclass
class EditSession:
    """State of the edit modal for one row."""

    columns: List[EditableColumn]
    row: List[str]
    position: int = 0
    value: str = ''
    error: str = ''
    name: str = ''  # variable name the edit applies to
    original: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.original = list(self.row)
        self._load()

    @property
    def current(self) -> Optional[EditableColumn]:
        if not self.columns:
            return None
        return self.columns[self.position % len(self.columns)]

    def _load(self) -> None:
        current = self.current
        self.value = self.row[current.index] if current and current.index < len(self.row) else ''
        self.error = ''

    def next(self) -> None:
        if self.columns:
            self.position = (self.position + 1) % len(self.columns)
            self._load()

    def prev(self) -> None:
        if self.columns:
            self.position = (self.position - 1) % len(self.columns)
            self._load()

    def insert(self, text: str) -> None:
        self.value += text
        self.error = ''

    def backspace(self) -> None:
        self.value = self.value[:-1]
        self.error = ''

    @property
    def is_bool(self) -> bool:
        current = self.current
        return current is not None and current.input_type == 'bool'

    def toggle_bool(self) -> None:
        self.value = 'false' if self.value.strip().lower() == 'true' else 'true'
        self.error = ''

    @property
    def input_error(self) -> str:
        """Validation error of the value being typed; empty when it can be saved."""
        current = self.current
        if current is None:
            return ''
        try:
            parse_input(self.value, current.input_type)
        except InputValidationError as e:
            return str(e)
        return ''

    @property
    def can_save(self) -> bool:
        return self.current is not None and not self.input_error

    @property
    def suggestions(self) -> List[str]:
        current = self.current
        if current is None or current.input_type != USER_TYPE:
            return []
        return suggest_users(self.value)
