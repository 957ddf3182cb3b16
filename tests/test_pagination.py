"""
Tests for per-resource paging state and the pending cursor.
"""

from operadash.dashboard.pagination import PageState, PaginationManager


class TestPaginationManager:
    """Test suite for PaginationManager."""

    def test_state_created_lazily_with_defaults(self):
        pages = PaginationManager(page_size=15)

        assert pages.state('job') == PageState(offset=0, page_size=15, total=-1)

    def test_forward_then_back_round_trip(self):
        pages = PaginationManager(page_size=10)

        assert pages.page_forward('job') == 10
        assert pages.page_forward('job') == 20
        assert pages.page_back('job') == 10
        assert pages.page_back('job') == 0

    def test_back_never_below_zero(self):
        pages = PaginationManager(page_size=10)

        assert pages.page_back('job') == 0

    def test_forward_clamps_to_last_page_when_total_known(self):
        pages = PaginationManager(page_size=10)
        pages.set_total('job', 25)
        pages.page_forward('job')
        pages.page_forward('job')

        assert pages.page_forward('job') == 15

    def test_forward_with_small_total_stays_on_first_page(self):
        pages = PaginationManager(page_size=10)
        pages.set_total('job', 4)

        assert pages.page_forward('job') == 0

    def test_unknown_total_skips_clamping(self):
        pages = PaginationManager(page_size=10)
        pages.set_total('job', -7)

        assert pages.total('job') == -1
        assert pages.page_forward('job') == 10

    def test_resources_are_independent(self):
        pages = PaginationManager(page_size=10)
        pages.page_forward('job')

        assert pages.offset('job') == 10
        assert pages.offset('task') == 0

    def test_reset_and_reset_all(self):
        pages = PaginationManager(page_size=10)
        pages.page_forward('job')
        pages.page_forward('task')

        pages.reset('job')
        assert pages.offset('job') == 0
        assert pages.offset('task') == 10

        pages.reset_all()
        assert pages.offset('task') == 0

    def test_resize_applies_to_existing_states(self):
        pages = PaginationManager(page_size=10)
        pages.state('job')

        pages.resize(7)

        assert pages.page_size == 7
        assert pages.state('job').page_size == 7
        assert pages.page_forward('job') == 7


class TestPendingCursor:
    """Test suite for the one-shot cursor restoration."""

    def test_cursor_preserved_when_rows_suffice(self):
        pages = PaginationManager(page_size=10)
        pages.page_forward('job', cursor=7)

        assert pages.consume_cursor(10) == 7

    def test_cursor_clamped_to_last_row(self):
        pages = PaginationManager(page_size=10)
        pages.page_forward('job', cursor=7)

        assert pages.consume_cursor(5) == 4

    def test_cursor_consumed_exactly_once(self):
        pages = PaginationManager(page_size=10)
        pages.page_back('job', cursor=3)

        assert pages.consume_cursor(10) == 3
        assert pages.consume_cursor(10) is None

    def test_clear_cursor(self):
        pages = PaginationManager()
        pages.request_cursor(2)

        pages.clear_cursor()

        assert pages.pending_cursor is None
        assert pages.consume_cursor(10) is None
