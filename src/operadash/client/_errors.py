from typing import Optional


class EngineError(Exception):
    """A failed engine request: transport error, timeout, non-2xx status or undecodable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
