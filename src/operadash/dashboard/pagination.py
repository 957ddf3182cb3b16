from dataclasses import dataclass
from typing import Dict, Optional

from operadash.constants import DEFAULT_PAGE_SIZE, UNKNOWN_TOTAL


@dataclass
class PageState:
    offset: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = UNKNOWN_TOTAL  # -1 while the count is unknown


class PaginationManager:
    """
    Paging bookkeeping per resource.

    Each resource gets its own PageState on first use. Paging operations also
    remember the caller's cursor so it can be restored, once, when the rows of
    the new page arrive.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._page_size = max(1, page_size)
        self._states: Dict[str, PageState] = {}
        self._pending_cursor: Optional[int] = None

    @property
    def page_size(self) -> int:
        return self._page_size

    def resize(self, page_size: int) -> None:
        """Follow the viewport row capacity."""
        self._page_size = max(1, page_size)
        for page in self._states.values():
            page.page_size = self._page_size

    def state(self, resource: str) -> PageState:
        page = self._states.get(resource)
        if page is None:
            page = PageState(page_size=self._page_size)
            self._states[resource] = page
        return page

    def offset(self, resource: str) -> int:
        return self.state(resource).offset

    def total(self, resource: str) -> int:
        return self.state(resource).total

    def page_forward(self, resource: str, cursor: Optional[int] = None) -> int:
        page = self.state(resource)
        page.offset += page.page_size
        if page.total >= 0 and page.offset >= page.total:
            page.offset = max(0, page.total - page.page_size)
        self.request_cursor(cursor)
        return page.offset

    def page_back(self, resource: str, cursor: Optional[int] = None) -> int:
        page = self.state(resource)
        page.offset = max(0, page.offset - page.page_size)
        self.request_cursor(cursor)
        return page.offset

    def set_total(self, resource: str, total: int) -> None:
        self.state(resource).total = total if total >= 0 else UNKNOWN_TOTAL

    def reset(self, resource: str) -> None:
        self.state(resource).offset = 0

    def reset_all(self) -> None:
        for page in self._states.values():
            page.offset = 0

    def request_cursor(self, cursor: Optional[int]) -> None:
        self._pending_cursor = cursor

    @property
    def pending_cursor(self) -> Optional[int]:
        return self._pending_cursor

    def consume_cursor(self, row_count: int) -> Optional[int]:
        """Return the pending cursor clamped to the new rows, then forget it."""
        cursor = self._pending_cursor
        self._pending_cursor = None
        if cursor is None:
            return None
        if row_count <= 0:
            return 0
        return max(0, min(cursor, row_count - 1))

    def clear_cursor(self) -> None:
        self._pending_cursor = None
