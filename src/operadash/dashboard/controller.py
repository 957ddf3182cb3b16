import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ruamel.yaml import YAMLError

from operadash import labels
from operadash.client import EngineClient, EngineError
from operadash.configuration import ConfigProvider, DrillTargetKind, Environment
from operadash.constants import (
    DEFAULT_DEFINITION_PARAM,
    DEFAULT_DRILL_COLUMN,
    DRILL_ERROR_DISPLAY_TIME,
    ERROR_DISPLAY_TIME,
    NOTICE_DISPLAY_TIME,
    REFRESH_INTERVAL,
    RESOURCE_PROCESS_DEFINITIONS,
    RESOURCE_PROCESS_INSTANCES,
    VARIABLE_ALIASES,
)
from operadash.dashboard.drilldown import DrilldownResolver
from operadash.dashboard.editing import EditableColumn, EditSession
from operadash.dashboard.fetcher import FetchRequest, GenericFetcher
from operadash.dashboard.layout import normalize_rows
from operadash.dashboard.messaging import (
    ClearFooter,
    DataLoaded,
    EditSaved,
    ErrorOccurred,
    InstanceDeleted,
    Message,
    RefreshDue,
    TaskRunner,
)
from operadash.dashboard.pagination import PaginationManager
from operadash.dashboard.state import NavigationStack, TableModel, ViewMode, ViewState, canonical_resource
from operadash.logger import null_logger
from operadash.validation import InputValidationError, parse_input, resolve_input_type, type_name_for_input_type

ClientFactory = Callable[[Environment], EngineClient]


def fetch_task(fetcher: GenericFetcher, client: EngineClient, request: FetchRequest) -> Message:
    try:
        return fetcher.fetch(client, request)
    except EngineError as e:
        return ErrorOccurred(error=str(e), generation=request.generation)


def delete_task(client: EngineClient, instance_id: str) -> Message:
    client.delete_instance(instance_id)
    return InstanceDeleted(instance_id=instance_id)


def set_variable_task(
    client: EngineClient, instance_id: str, name: str, value: Any, type_name: str, column_key: str, display: str
) -> Message:
    client.set_variable(instance_id, name, value, type_name)
    return EditSaved(instance_id=instance_id, name=name, column_key=column_key, value=display)


class NavigationController:
    """
    State machine behind the dashboard.

    Owns the current view (breadcrumb, selections, table), the history of
    previous views and the paging state. Key handlers call the public
    operations; background results come back as messages through apply().
    Nothing here blocks on the network.
    """

    def __init__(
        self,
        config: ConfigProvider,
        runner: TaskRunner,
        client_factory: ClientFactory = EngineClient,
        log: Optional[logging.Logger] = None,
        env_name: str = '',
    ) -> None:
        self.config = config
        self.runner = runner
        self.client_factory = client_factory
        self.log = log or null_logger()

        self.fetcher = GenericFetcher(config)
        self.resolver = DrilldownResolver()
        self.pagination = PaginationManager()
        self.stack = NavigationStack()
        self.table = TableModel()

        self.breadcrumb: List[str] = [RESOURCE_PROCESS_DEFINITIONS]
        self.view_mode = ViewMode.DEFINITIONS
        self.content_header = RESOURCE_PROCESS_DEFINITIONS
        self.selected_definition_key = ''
        self.instance_filter_param = ''
        self.selected_instance_id = ''
        self.records: List[Dict[str, Any]] = []
        self.definition_ids: Dict[str, str] = {}

        self.generation = 0
        self.table_width = 80
        self.footer = ''
        self._footer_token = 0
        self.auto_refresh = False
        self._refresh_token = 0

        self.pending_delete_id = ''
        self.edit: Optional[EditSession] = None

        self.env_name = env_name or config.initial_environment()
        self.client: Optional[EngineClient] = None
        self._connect()

    # -- properties ---------------------------------------------------------

    @property
    def current_resource(self) -> str:
        return self.breadcrumb[-1]

    @property
    def environment(self) -> Optional[Environment]:
        return self.config.environment(self.env_name)

    @property
    def busy(self) -> bool:
        return self.runner.busy

    def root_contexts(self) -> List[str]:
        return self.config.root_contexts()

    # -- lifecycle ----------------------------------------------------------

    def _connect(self) -> None:
        env = self.environment
        self.client = self.client_factory(env) if env is not None else None

    def start(self) -> None:
        self._preseed(self.current_resource)
        self._fetch()

    def resize(self, table_width: int, page_rows: int) -> None:
        """Adopt new viewport dimensions; columns are rebuilt with the next result."""
        self.table_width = max(1, table_width)
        self.pagination.resize(page_rows)

    def move_cursor(self, delta: int) -> None:
        self.table.move_cursor(delta)

    # -- footer -------------------------------------------------------------

    def show_footer(self, text: str, duration: float = ERROR_DISPLAY_TIME) -> None:
        self._footer_token += 1
        self.footer = text
        self.runner.schedule(duration, ClearFooter(token=self._footer_token))

    # -- fetching -----------------------------------------------------------

    def _current_filter(self) -> Tuple[str, str]:
        if self.view_mode is ViewMode.INSTANCES and self.selected_definition_key:
            return self.instance_filter_param or DEFAULT_DEFINITION_PARAM, self.selected_definition_key
        if self.view_mode is ViewMode.VARIABLES:
            return '', self.selected_instance_id
        return '', ''

    def _fetch(self) -> None:
        """Dispatch a fetch of the breadcrumb tail with the current filter."""
        if self.client is None:
            self.show_footer(labels.MSG_NO_ENVIRONMENT)
            return
        if self.view_mode is ViewMode.VARIABLES and not self.selected_instance_id:
            self.show_footer(labels.MSG_VARIABLES_NEED_INSTANCE, DRILL_ERROR_DISPLAY_TIME)
            return

        resource = self.current_resource
        param, value = self._current_filter()
        self.generation += 1
        request = FetchRequest(
            resource=resource,
            offset=self.pagination.offset(resource),
            limit=self.pagination.page_size,
            filter_param=param,
            filter_value=value,
            generation=self.generation,
            definition_ids=tuple(self.definition_ids.items()),
        )
        self.log.debug(labels.LOG_FETCH.format(resource, request.offset, request.limit, param, value, self.generation))
        self.runner.submit(fetch_task, self.fetcher, self.client, request)

    def _preseed(self, resource: str) -> None:
        """Show the resource's columns with a single empty row until its data arrives."""
        self.table.set_columns(self.fetcher.columns_for(resource, [], self.table_width))
        self.table.set_rows([])
        self.table.set_cursor(0)
        self.records = []

    def refresh(self) -> None:
        self.pagination.request_cursor(self.table.cursor)
        self._fetch()

    # -- navigation ---------------------------------------------------------

    def _snapshot(self) -> ViewState:
        return ViewState.snapshot(
            self.view_mode,
            self.breadcrumb,
            self.content_header,
            self.table,
            selected_definition_key=self.selected_definition_key,
            instance_filter_param=self.instance_filter_param,
            selected_instance_id=self.selected_instance_id,
            records=self.records,
        )

    def drill_in(self) -> None:
        row = self.table.selected_row
        if row is None or not any(row):
            return

        keys = self.table.column_keys
        table_def = self.config.find_table_def(self.current_resource)
        if table_def is not None and table_def.drilldown:
            drill = self.resolver.resolve(table_def, row, keys)
        else:
            drill = self.resolver.default_for(self.view_mode, row, keys)
        if drill is None:
            return
        if drill.kind is DrillTargetKind.UNSUPPORTED:
            self.show_footer(labels.MSG_DRILL_UNSUPPORTED.format(drill.target), DRILL_ERROR_DISPLAY_TIME)
            return

        self.stack.push(self._snapshot())
        target = canonical_resource(drill.target)
        self.breadcrumb.append(target)
        self.table.set_cursor(0)
        self.pagination.reset(target)
        self.pagination.clear_cursor()

        if drill.kind is DrillTargetKind.INSTANCES:
            self.view_mode = ViewMode.INSTANCES
            self.selected_definition_key = drill.value
            self.instance_filter_param = drill.param or DEFAULT_DEFINITION_PARAM
            self.selected_instance_id = ''
            self.content_header = f'{self.breadcrumb[0]}({drill.value})'
        else:
            self.view_mode = ViewMode.VARIABLES
            self.selected_instance_id = drill.value
            self.content_header = f'{RESOURCE_PROCESS_INSTANCES}({drill.value})'
            self._preseed(target)
        self._fetch()

    def back(self) -> None:
        state = self.stack.pop()
        if state is None:
            return
        # whatever is still in flight belongs to the view being left
        self.generation += 1
        self.pagination.clear_cursor()

        self.view_mode = state.view_mode
        self.breadcrumb = list(state.breadcrumb)
        self.content_header = state.content_header
        self.selected_definition_key = state.selected_definition_key
        self.instance_filter_param = state.instance_filter_param
        self.selected_instance_id = state.selected_instance_id

        self.table.set_columns(state.columns)
        self.table.rows = normalize_rows(state.rows, len(self.table.columns))
        self.table.set_cursor(state.cursor)
        self.records = [dict(r) for r in state.records]

    def jump_to_breadcrumb(self, index: int) -> None:
        if not 0 <= index < len(self.breadcrumb):
            self.show_footer(labels.MSG_INVALID_BREADCRUMB, DRILL_ERROR_DISPLAY_TIME)
            return

        resource = self.breadcrumb[index]
        mode = ViewMode.for_resource(resource)
        if index > 0:
            if mode is ViewMode.INSTANCES and not self.selected_definition_key:
                self.show_footer(labels.MSG_NO_DEFINITION_SELECTED, DRILL_ERROR_DISPLAY_TIME)
                return
            if mode is ViewMode.VARIABLES and not self.selected_instance_id:
                self.show_footer(labels.MSG_NO_INSTANCE_SELECTED, DRILL_ERROR_DISPLAY_TIME)
                return

        del self.breadcrumb[index + 1:]
        self.stack.truncate(index)
        self.pagination.clear_cursor()
        self.view_mode = mode
        self.table.set_cursor(0)

        if index == 0:
            self.selected_definition_key = ''
            self.instance_filter_param = ''
            self.selected_instance_id = ''
            self.content_header = resource
        elif mode is ViewMode.INSTANCES:
            self.selected_instance_id = ''
            self.content_header = f'{self.breadcrumb[0]}({self.selected_definition_key})'
        elif mode is ViewMode.VARIABLES:
            self.content_header = f'{RESOURCE_PROCESS_INSTANCES}({self.selected_instance_id})'
        else:
            self.content_header = resource
        self._fetch()

    def switch_root(self, name: str) -> None:
        name = name.strip()
        if name not in self.root_contexts():
            self.show_footer(labels.MSG_UNKNOWN_ROOT.format(name), DRILL_ERROR_DISPLAY_TIME)
            return

        resource = canonical_resource(name)
        if ViewMode.for_resource(resource) is ViewMode.VARIABLES:
            # variables are only reachable from a selected instance
            self.show_footer(labels.MSG_VARIABLES_NEED_INSTANCE, DRILL_ERROR_DISPLAY_TIME)
            return

        self.generation += 1
        self.breadcrumb = [resource]
        self.stack.clear()
        self.view_mode = ViewMode.for_resource(resource)
        self.content_header = resource
        self.selected_definition_key = ''
        self.instance_filter_param = ''
        self.selected_instance_id = ''
        self.footer = ''
        self.pagination.reset(resource)
        self.pagination.clear_cursor()
        self._preseed(resource)
        self._fetch()

    def page_forward(self) -> None:
        self.pagination.page_forward(self.current_resource, self.table.cursor)
        self._fetch()

    def page_back(self) -> None:
        self.pagination.page_back(self.current_resource, self.table.cursor)
        self._fetch()

    # -- environment and refresh ---------------------------------------------

    def switch_environment(self) -> None:
        names = self.config.environment_names
        if not names:
            self.show_footer(labels.MSG_NO_ENVIRONMENT)
            return
        idx = names.index(self.env_name) if self.env_name in names else -1
        self.env_name = names[(idx + 1) % len(names)]
        try:
            self.config.save_active_environment(self.env_name)
        except (OSError, YAMLError) as e:
            self.log.warning(labels.LOG_SAVE_ENV_FAILED.format(e))
        self._connect()

        root = self.breadcrumb[0]
        self.generation += 1
        self.pagination.reset_all()
        self.pagination.clear_cursor()
        self.stack.clear()
        self.definition_ids = {}
        self.breadcrumb = [root]
        self.view_mode = ViewMode.for_resource(root)
        self.content_header = root
        self.selected_definition_key = ''
        self.instance_filter_param = ''
        self.selected_instance_id = ''
        self._preseed(root)
        self._fetch()

    def toggle_auto_refresh(self) -> None:
        self.auto_refresh = not self.auto_refresh
        # a timer armed before this toggle must not start a second chain
        self._refresh_token += 1
        if self.auto_refresh:
            self.refresh()
            self.runner.schedule(REFRESH_INTERVAL, RefreshDue(token=self._refresh_token))

    # -- delete -------------------------------------------------------------

    def request_delete(self) -> bool:
        """Remember the selected instance for deletion; True when a confirmation is needed."""
        if self.view_mode is not ViewMode.INSTANCES:
            return False
        row = self.table.selected_row
        if row is None or not any(row):
            self.show_footer(labels.MSG_NO_ROW_SELECTED, NOTICE_DISPLAY_TIME)
            return False
        instance_id = self.table.cell(row, DEFAULT_DRILL_COLUMN) or row[0]
        if not instance_id:
            return False
        self.pending_delete_id = instance_id
        return True

    def confirm_delete(self) -> None:
        instance_id, self.pending_delete_id = self.pending_delete_id, ''
        if instance_id and self.client is not None:
            self.runner.submit(delete_task, self.client, instance_id)

    def cancel_delete(self) -> None:
        self.pending_delete_id = ''
        self.show_footer(labels.MSG_CANCELLED, NOTICE_DISPLAY_TIME)

    # -- edit ---------------------------------------------------------------

    @property
    def is_variable_table(self) -> bool:
        return self.view_mode is ViewMode.VARIABLES or self.current_resource in VARIABLE_ALIASES

    def _variable_type(self, row_index: int) -> str:
        if not self.is_variable_table or not 0 <= row_index < len(self.records):
            return ''
        return str(self.records[row_index].get('type') or '')

    def start_edit(self) -> bool:
        """Open an edit session on the selected row; True when the modal should show."""
        editable = [(i, c) for i, c in enumerate(self.table.columns) if c.editable]
        if not editable:
            self.show_footer(labels.MSG_NO_EDITABLE_COLUMNS, NOTICE_DISPLAY_TIME)
            return False
        row = self.table.selected_row
        if row is None:
            self.show_footer(labels.MSG_NO_ROW_SELECTED, NOTICE_DISPLAY_TIME)
            return False

        variable_type = self._variable_type(self.table.cursor)
        columns = [
            EditableColumn(
                index=i,
                column=c,
                input_type=resolve_input_type(c.input_type, variable_type),
                variable_type=variable_type,
            )
            for i, c in editable
        ]
        self.edit = EditSession(
            columns=columns,
            row=list(row),
            name=self.table.cell(row, 'name'),
        )
        return True

    def cancel_edit(self) -> None:
        self.edit = None

    def submit_edit(self) -> bool:
        """Validate and send the edited value; False keeps the modal open with an error."""
        session = self.edit
        if session is None:
            return True
        current = session.current
        if current is None:
            session.error = labels.EDIT_NO_SELECTION
            return False
        if not self.is_variable_table:
            session.error = labels.EDIT_NOT_SUPPORTED
            return False
        if not session.name:
            session.error = labels.EDIT_VARIABLE_NOT_FOUND
            return False
        try:
            value = parse_input(session.value, current.input_type)
        except InputValidationError as e:
            session.error = str(e)
            return False

        self.edit = None
        if not self.selected_instance_id:
            self.show_footer(labels.EDIT_MISSING_TARGET)
            return True
        if self.client is None:
            self.show_footer(labels.MSG_NO_ENVIRONMENT)
            return True
        self.runner.submit(
            set_variable_task,
            self.client,
            self.selected_instance_id,
            session.name,
            value,
            type_name_for_input_type(current.input_type, current.variable_type),
            current.column.key,
            session.value,
        )
        return True

    # -- results ------------------------------------------------------------

    def pump(self) -> int:
        """Apply every queued message; returns how many were applied."""
        messages = self.runner.bus.drain()
        for message in messages:
            self.apply(message)
        return len(messages)

    def apply(self, message: Message) -> None:
        if isinstance(message, DataLoaded):
            if message.generation != self.generation:
                self.log.debug(labels.LOG_STALE_RESULT.format(message.resource, message.generation, self.generation))
                return
            self._populate(message)
        elif isinstance(message, ErrorOccurred):
            if message.generation is not None and message.generation != self.generation:
                self.log.debug(labels.LOG_STALE_RESULT.format('error', message.generation, self.generation))
                return
            self.log.error(message.error)
            self.show_footer(message.error, message.duration or ERROR_DISPLAY_TIME)
        elif isinstance(message, InstanceDeleted):
            self._remove_instance(message.instance_id)
        elif isinstance(message, EditSaved):
            self._apply_edit(message)
        elif isinstance(message, RefreshDue):
            if self.auto_refresh and message.token == self._refresh_token:
                self.refresh()
                self.runner.schedule(REFRESH_INTERVAL, RefreshDue(token=self._refresh_token))
        elif isinstance(message, ClearFooter):
            if message.token == self._footer_token:
                self.footer = ''

    def _populate(self, message: DataLoaded) -> None:
        resource = message.resource
        try:
            records = list(message.records)
            columns = self.fetcher.columns_for(resource, records, self.table_width)
            rows = self.fetcher.rows_for(columns, records)
            self.table.set_columns(columns)
            self.table.set_rows(rows)
            self.log.debug(labels.LOG_NORMALIZED_ROWS.format(len(columns), len(rows), len(self.table.rows)))
            self.records = records
            self.pagination.set_total(resource, message.count)

            cursor = self.pagination.consume_cursor(len(self.table.rows))
            if cursor is not None:
                self.table.set_cursor(cursor)
            if ViewMode.for_resource(resource) is ViewMode.DEFINITIONS:
                self.definition_ids = {str(r.get('key')): str(r.get('id')) for r in records if r.get('key')}
        except Exception as e:  # pylint: disable=broad-except
            self.log.exception(labels.LOG_RENDER_FAILED.format(resource))
            self.table.set_rows(normalize_rows(self.table.rows, len(self.table.columns)))
            self.show_footer(labels.MSG_RENDER_ERROR.format(resource, e))

    def _remove_instance(self, instance_id: str) -> None:
        keep_rows, keep_records = [], []
        removed = False
        for i, row in enumerate(self.table.rows):
            if (self.table.cell(row, DEFAULT_DRILL_COLUMN) or (row[0] if row else '')) == instance_id:
                removed = True
                continue
            keep_rows.append(row)
            if i < len(self.records):
                keep_records.append(self.records[i])
        if removed:
            self.table.set_rows(keep_rows)
            self.records = keep_records
            page = self.pagination.state(self.current_resource)
            if page.total > 0:
                page.total -= 1
        self.show_footer(labels.MSG_DELETED.format(instance_id), NOTICE_DISPLAY_TIME)

    def _apply_edit(self, message: EditSaved) -> None:
        self.show_footer(labels.MSG_SAVED, NOTICE_DISPLAY_TIME)
        if not self.is_variable_table or self.selected_instance_id != message.instance_id:
            return
        col = next((i for i, c in enumerate(self.table.columns) if c.key == message.column_key), None)
        # rows may have been reloaded while the write was in flight
        for i, row in enumerate(self.table.rows):
            if self.table.cell(row, 'name') != message.name:
                continue
            if col is not None:
                row[col] = message.value
            if i < len(self.records):
                self.records[i][message.column_key] = message.value
