"""
Tests for view snapshots, the navigation stack and the table model.
"""

from operadash.dashboard.layout import Column
from operadash.dashboard.state import NavigationStack, TableModel, ViewMode, ViewState, canonical_resource


def make_table(rows, cursor=0):
    table = TableModel()
    table.set_columns([Column('KEY', 10, 'key'), Column('NAME', 10, 'name')])
    table.set_rows(rows)
    table.set_cursor(cursor)
    return table


def snapshot(table, crumbs=('process-definitions',)):
    return ViewState.snapshot(ViewMode.DEFINITIONS, crumbs, crumbs[-1], table)


class TestViewMode:
    """Test suite for resource to view mode mapping."""

    def test_well_known_resources(self):
        assert ViewMode.for_resource('process-definition') is ViewMode.DEFINITIONS
        assert ViewMode.for_resource('process-instances') is ViewMode.INSTANCES
        assert ViewMode.for_resource('variable-instance') is ViewMode.VARIABLES
        assert ViewMode.for_resource('job') is ViewMode.GENERIC

    def test_canonical_resource(self):
        assert canonical_resource('process-instance') == 'process-instances'
        assert canonical_resource('variables') == 'process-variables'
        assert canonical_resource('task') == 'task'


class TestTableModel:
    """Test suite for TableModel."""

    def test_rows_normalized_to_column_count(self):
        table = make_table([['k1'], ['k2', 'n2', 'extra']])

        assert table.rows == [['k1', ''], ['k2', 'n2']]

    def test_cursor_clamped(self):
        table = make_table([['k1', 'a'], ['k2', 'b']], cursor=5)

        assert table.cursor == 1
        table.move_cursor(-10)
        assert table.cursor == 0

    def test_selected_row_and_cell(self):
        table = make_table([['k1', 'a'], ['k2', 'b']], cursor=1)

        assert table.selected_row == ['k2', 'b']
        assert table.cell(table.selected_row, 'NAME') == 'b'
        assert table.cell(table.selected_row, 'missing') == ''


class TestViewState:
    """Test suite for ViewState snapshots."""

    def test_snapshot_freezes_columns_rows_and_cursor(self):
        table = make_table([['k1', 'a'], ['k2', 'b']], cursor=1)

        state = snapshot(table)
        table.set_rows([['changed', 'x']])

        assert state.rows == (('k1', 'a'), ('k2', 'b'))
        assert [c.key for c in state.columns] == ['key', 'name']
        assert state.cursor == 1

    def test_snapshot_rows_match_column_count(self):
        table = make_table([['k1', 'a']])
        table.rows = [['k1'], ['k2', 'b', 'c']]

        state = snapshot(table)

        assert all(len(row) == len(state.columns) for row in state.rows)


class TestNavigationStack:
    """Test suite for NavigationStack."""

    def test_push_pop_round_trip(self):
        stack = NavigationStack()
        table = make_table([['k1', 'a'], ['k2', 'b']], cursor=1)
        state = snapshot(table)

        stack.push(state)
        restored = stack.pop()

        assert (restored.columns, restored.rows, restored.cursor) == (state.columns, state.rows, state.cursor)
        assert len(stack) == 0

    def test_pop_empty_returns_none(self):
        assert NavigationStack().pop() is None

    def test_truncate_and_clear(self):
        stack = NavigationStack()
        table = make_table([])
        for depth in range(1, 4):
            stack.push(snapshot(table, tuple(f'r{i}' for i in range(depth))))

        stack.truncate(1)
        assert len(stack) == 1
        assert stack.pop().breadcrumb == ('r0',)

        stack.clear()
        assert len(stack) == 0
