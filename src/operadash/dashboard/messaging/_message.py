from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Message:
    """Base class of everything a task posts on the bus."""


@dataclass(frozen=True)
class DataLoaded(Message):
    """Records of one page of a resource, with the count when it is known."""

    resource: str
    records: List[Dict[str, Any]] = field(default_factory=list)
    count: int = -1
    generation: int = 0


@dataclass(frozen=True)
class InstanceDeleted(Message):
    instance_id: str


@dataclass(frozen=True)
class EditSaved(Message):
    """A variable write the engine accepted; applied to the row showing that variable."""

    instance_id: str
    name: str
    column_key: str
    value: str


@dataclass(frozen=True)
class ErrorOccurred(Message):
    """A failed task; shown in the footer for duration seconds."""

    error: str
    duration: Optional[float] = None
    generation: Optional[int] = None


@dataclass(frozen=True)
class RefreshDue(Message):
    """Re-arms auto-refresh only while token is the controller's current refresh token."""

    token: int = 0


@dataclass(frozen=True)
class ClearFooter(Message):
    """Clears the footer only when it still shows the message with this token."""

    token: int
