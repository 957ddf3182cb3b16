from ._message import (
    ClearFooter,
    DataLoaded,
    EditSaved,
    ErrorOccurred,
    InstanceDeleted,
    Message,
    RefreshDue,
)
from ._message_bus import MessageBus
from ._task_runner import TaskRunner

__all__ = [
    "MessageBus",
    "Message",
    "DataLoaded",
    "InstanceDeleted",
    "EditSaved",
    "ErrorOccurred",
    "RefreshDue",
    "ClearFooter",
    "TaskRunner",
]
