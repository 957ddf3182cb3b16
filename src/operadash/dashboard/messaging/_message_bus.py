import queue
from typing import List, Optional

from operadash.dashboard.messaging._message import Message


class MessageBus:
    """Queue between background tasks and the control loop."""

    def __init__(self) -> None:
        self._queue: "queue.Queue[Message]" = queue.Queue()

    def put(self, message: Message, block: bool = True, timeout: Optional[float] = None) -> None:
        self._queue.put(message, block=block, timeout=timeout)

    def get(self, *, block: bool = True, timeout: Optional[float] = None) -> Message:
        """Get the next message; raises queue.Empty when none arrives in time."""
        return self._queue.get(block=block, timeout=timeout)

    def drain(self) -> List[Message]:
        """All messages currently queued, without waiting."""
        messages = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages

    def empty(self) -> bool:
        return self._queue.empty()
