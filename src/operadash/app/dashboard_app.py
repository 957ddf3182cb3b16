"""
DashboardApp - curses front end of the navigation controller.

This module owns the terminal:
- Polls the keyboard with a short timeout and maps keys to controller operations.
- Drains the message bus on every tick so background results show up promptly.
- Draws the header, breadcrumb, content table, footer and the modals
  (help, delete confirmation, edit) plus the ':' context popup.
"""

import curses
import os
from enum import Enum
from typing import List, Optional, Union

from operadash import labels
from operadash.constants import (
    CONTEXT_LINES,
    FOOTER_LINES,
    HEADER_LINES,
    INPUT_POLL_MS,
    MIN_CONTENT_HEIGHT,
    MIN_TABLE_WIDTH,
    TABLE_FRAME_WIDTH,
    UNKNOWN_TOTAL,
)
from operadash.dashboard.controller import NavigationController
from operadash.logger import Logger
from operadash.ui import theme as THEME
from operadash.ui.ui_utils import CursesUIHelper

log = Logger().setup_logger('DashboardApp')

Key = Union[str, int]

ESC = '\x1b'
TAB = '\t'
ENTER_KEYS = ('\n', '\r', curses.KEY_ENTER)
BACKSPACE_KEYS = ('\x7f', '\b', curses.KEY_BACKSPACE)
CTRL_B = '\x02'
CTRL_C = '\x03'
CTRL_D = '\x04'
CTRL_E = '\x05'
CTRL_F = '\x06'
CTRL_R = '\x12'


class Modal(Enum):
    NONE = "none"
    HELP = "help"
    DELETE = "delete"
    EDIT = "edit"


class DashboardApp:
    """
    Curses loop around a NavigationController.

    Attributes:
        controller (NavigationController): State machine the keys drive.
        modal (Modal): Modal currently shown on top of the table.
        popup_input (str | None): Text of the ':' context popup while it is open.
        scroll_offset (int): First table row drawn in the viewport.
    """

    def __init__(self, controller: NavigationController) -> None:
        self.controller = controller
        self.modal = Modal.NONE
        self.popup_input: Optional[str] = None
        self.scroll_offset = 0
        self._size = (0, 0)

    # -------------------------------------------------------------------------
    # Main Execution Loop
    # -------------------------------------------------------------------------
    def run(self) -> None:
        """Start the curses rendering loop; returns when the user quits."""
        os.environ.setdefault('ESCDELAY', '25')
        log.info(labels.APP_STARTING)
        try:
            curses.wrapper(self._main_loop)
        except KeyboardInterrupt:
            pass
        finally:
            self.controller.runner.shutdown()
            log.info(labels.APP_TERMINATED)

    def _main_loop(self, stdscr) -> None:
        curses.curs_set(0)
        stdscr.keypad(True)
        stdscr.timeout(INPUT_POLL_MS)
        CursesUIHelper.init_colors()
        self._apply_environment_color()

        self._check_resize(stdscr)
        self.controller.start()

        while True:
            self.controller.pump()
            self._check_resize(stdscr)
            self._draw(stdscr)
            try:
                key = stdscr.get_wch()
            except curses.error:
                continue  # no key within the poll interval
            if not self._handle_key(key):
                break

    def _apply_environment_color(self) -> None:
        env = self.controller.environment
        CursesUIHelper.set_frame_color(env.ui_color if env else "")

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------
    @staticmethod
    def _table_box(h: int, w: int):
        """(start_y, height, width) of the table frame."""
        start_y = HEADER_LINES + CONTEXT_LINES
        height = max(MIN_CONTENT_HEIGHT, h - start_y - FOOTER_LINES)
        return start_y, height, w

    def _check_resize(self, stdscr) -> None:
        h, w = stdscr.getmaxyx()
        if (h, w) == self._size:
            return
        self._size = (h, w)
        _, box_height, box_width = self._table_box(h, w)
        # frame top and bottom plus the column header line
        page_rows = max(1, box_height - 3)
        self.controller.resize(max(MIN_TABLE_WIDTH, box_width - TABLE_FRAME_WIDTH), page_rows)

    # -------------------------------------------------------------------------
    # Key Handling
    # -------------------------------------------------------------------------
    def _handle_key(self, key: Key) -> bool:
        """Dispatch one key press; False ends the loop."""
        if key == CTRL_C:
            return False
        if key == curses.KEY_RESIZE:
            self._size = (0, 0)
            return True

        if self.modal is Modal.HELP:
            self.modal = Modal.NONE
            return True
        if self.modal is Modal.DELETE:
            self.modal = Modal.NONE
            if key == CTRL_D:
                self.controller.confirm_delete()
            else:
                self.controller.cancel_delete()
            return True
        if self.modal is Modal.EDIT:
            self._handle_edit_key(key)
            return True
        if self.popup_input is not None:
            self._handle_popup_key(key)
            return True

        self._handle_table_key(key)
        return True

    def _handle_table_key(self, key: Key) -> None:
        controller = self.controller
        if key in (curses.KEY_UP, 'k'):
            controller.move_cursor(-1)
        elif key in (curses.KEY_DOWN, 'j'):
            controller.move_cursor(1)
        elif key in ENTER_KEYS:
            controller.drill_in()
            self.scroll_offset = 0
        elif key in (ESC, 'b', 'B'):
            controller.back()
        elif key in (curses.KEY_NPAGE, CTRL_F):
            controller.page_forward()
        elif key in (curses.KEY_PPAGE, CTRL_B):
            controller.page_back()
        elif isinstance(key, str) and '1' <= key <= '9':
            controller.jump_to_breadcrumb(int(key) - 1)
        elif key == ':':
            self.popup_input = ''
        elif key == CTRL_E:
            controller.switch_environment()
            self._apply_environment_color()
        elif key in ('r', CTRL_R):
            controller.toggle_auto_refresh()
        elif key == CTRL_D:
            if controller.request_delete():
                self.modal = Modal.DELETE
        elif key == 'e':
            if controller.start_edit():
                self.modal = Modal.EDIT
        elif key == '?':
            self.modal = Modal.HELP
        # no 'q' binding, Ctrl+C quits

    def _handle_popup_key(self, key: Key) -> None:
        if key == ESC or key == ':':
            self.popup_input = None
        elif key in ENTER_KEYS:
            name, self.popup_input = self.popup_input, None
            if name:
                self.controller.switch_root(name)
                self.scroll_offset = 0
        elif key == TAB:
            self.popup_input = self._complete(self.popup_input or '')
        elif key in BACKSPACE_KEYS:
            self.popup_input = (self.popup_input or '')[:-1]
        elif isinstance(key, str) and key.isprintable():
            self.popup_input = (self.popup_input or '') + key

    def _popup_matches(self, prefix: str) -> List[str]:
        return [name for name in self.controller.root_contexts() if name.startswith(prefix)]

    def _complete(self, prefix: str) -> str:
        """Extend prefix to the longest common prefix of the matching contexts."""
        matches = self._popup_matches(prefix)
        if not matches:
            return prefix
        return os.path.commonprefix(matches)

    def _handle_edit_key(self, key: Key) -> None:
        session = self.controller.edit
        if session is None:
            self.modal = Modal.NONE
            return
        if key == ESC:
            self.controller.cancel_edit()
            self.modal = Modal.NONE
        elif key == TAB:
            session.next()
        elif key == curses.KEY_BTAB:
            session.prev()
        elif key in ENTER_KEYS:
            if session.input_error:
                session.error = session.input_error
            elif self.controller.submit_edit():
                self.modal = Modal.NONE
        elif key == ' ' and session.is_bool:
            session.toggle_bool()
        elif key in BACKSPACE_KEYS:
            session.backspace()
        elif isinstance(key, str) and key.isprintable():
            session.insert(key)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------
    def _draw(self, stdscr) -> None:
        h, w = stdscr.getmaxyx()
        stdscr.bkgd(' ', curses.color_pair(THEME.BACKGROUND))
        stdscr.erase()

        valid, message = CursesUIHelper.validate_terminal_size(h, w)
        if not valid:
            CursesUIHelper.draw_text(stdscr, h // 2, 0, message)
            CursesUIHelper.draw_text(stdscr, h // 2 + 1, 0, labels.MSG_RESIZE_CONTINUE)
            stdscr.refresh()
            return

        self._draw_header(stdscr, w)
        self._draw_context_line(stdscr, w)
        self._draw_table(stdscr, h, w)
        self._draw_footer(stdscr, h, w)

        if self.popup_input is not None:
            self._draw_popup(stdscr)
        if self.modal is Modal.HELP:
            CursesUIHelper.draw_modal(stdscr, labels.HELP_TITLE, labels.HELP_LINES, labels.HELP_DISMISS)
        elif self.modal is Modal.DELETE:
            CursesUIHelper.draw_modal(
                stdscr,
                labels.DELETE_TITLE,
                [labels.DELETE_QUESTION.format(self.controller.pending_delete_id)],
                labels.DELETE_CONFIRM,
            )
        elif self.modal is Modal.EDIT:
            self._draw_edit_modal(stdscr)
        stdscr.refresh()

    def _draw_header(self, stdscr, w: int) -> None:
        controller = self.controller
        refresh = labels.HDR_AUTO_REFRESH_ON if controller.auto_refresh else labels.HDR_AUTO_REFRESH_OFF
        line = f"{labels.APP_TITLE}  {labels.HDR_ENVIRONMENT.format(controller.env_name or '-')}  {refresh}"
        CursesUIHelper.draw_text(stdscr, 0, 1, line, w - 4, THEME.HEADER, curses.A_BOLD)
        if controller.busy:
            CursesUIHelper.draw_text(stdscr, 0, w - 3, labels.HDR_ACTIVITY, 1, THEME.ACTIVITY, curses.A_BOLD)

        crumbs = labels.HDR_BREADCRUMB_SEPARATOR.join(
            labels.HDR_BREADCRUMB_ITEM.format(i + 1, name) for i, name in enumerate(controller.breadcrumb)
        )
        CursesUIHelper.draw_text(stdscr, 1, 1, crumbs, w - 2)

        hints = "  ".join(f"<{k}> {d}" for k, d in labels.KEY_HINTS)
        CursesUIHelper.draw_text(stdscr, 2, 1, hints, w - 2, THEME.REGULAR_ROW, curses.A_DIM)

    def _draw_context_line(self, stdscr, w: int) -> None:
        controller = self.controller
        page = controller.pagination.state(controller.current_resource)
        rows = len(controller.records)
        first = page.offset + 1 if rows else 0
        last = page.offset + rows
        if page.total != UNKNOWN_TOTAL:
            info = labels.HDR_PAGE_INFO.format(first, last, page.total)
        else:
            info = labels.HDR_PAGE_INFO_UNKNOWN.format(first, last)
        CursesUIHelper.draw_text(stdscr, HEADER_LINES, 1, controller.content_header, w - len(info) - 4, THEME.HEADER)
        CursesUIHelper.draw_text(stdscr, HEADER_LINES, max(1, w - len(info) - 2), info)

    def _adjust_scroll_offset(self, visible_rows: int) -> None:
        """Keep the cursor row inside the viewport."""
        cursor = self.controller.table.cursor
        if cursor >= self.scroll_offset + visible_rows:
            self.scroll_offset = cursor - visible_rows + 1
        if cursor < self.scroll_offset:
            self.scroll_offset = cursor

    def _draw_table(self, stdscr, h: int, w: int) -> None:
        table = self.controller.table
        start_y, box_height, box_width = self._table_box(h, w)
        box_height = min(box_height, h - start_y - FOOTER_LINES)
        CursesUIHelper.draw_borders(stdscr, start_y, 0, box_width, box_height, self.controller.current_resource, THEME.FRAME)

        x = TABLE_FRAME_WIDTH // 2
        inner_width = box_width - TABLE_FRAME_WIDTH
        header = "".join(c.title[: c.width - 1].ljust(c.width) for c in table.columns)
        CursesUIHelper.draw_text(stdscr, start_y + 1, x, header, inner_width, THEME.HEADER, curses.A_BOLD)

        visible_rows = max(0, box_height - 3)
        self._adjust_scroll_offset(visible_rows)
        if self.scroll_offset > 0:
            CursesUIHelper.draw_text(stdscr, start_y + 1, box_width - 2, THEME.SCROLL_UP, 1, THEME.FRAME)
        if self.scroll_offset + visible_rows < len(table.rows):
            CursesUIHelper.draw_text(stdscr, start_y + box_height - 2, box_width - 2, THEME.SCROLL_DOWN, 1, THEME.FRAME)

        for i, row in enumerate(table.rows[self.scroll_offset:self.scroll_offset + visible_rows]):
            text = "".join(str(cell)[: c.width - 1].ljust(c.width) for cell, c in zip(row, table.columns))
            y = start_y + 2 + i
            if self.scroll_offset + i == table.cursor:
                CursesUIHelper.draw_highlighted_text(stdscr, y, x, text, inner_width)
            else:
                CursesUIHelper.draw_text(stdscr, y, x, text, inner_width)

    def _draw_footer(self, stdscr, h: int, w: int) -> None:
        footer = self.controller.footer
        if footer:
            CursesUIHelper.draw_text(stdscr, h - 1, 0, f" {footer} ".ljust(w), w, THEME.FOOTER_ERROR)

    def _draw_popup(self, stdscr) -> None:
        text = self.popup_input or ''
        matches = self._popup_matches(text)
        y, x = CursesUIHelper.draw_modal(stdscr, labels.POPUP_PROMPT, [f"{labels.POPUP_PROMPT}{text}_"] + matches[:8])
        CursesUIHelper.draw_text(stdscr, y, x, f"{labels.POPUP_PROMPT}{text}_", None, THEME.HEADER, curses.A_BOLD)

    def _draw_edit_modal(self, stdscr) -> None:
        session = self.controller.edit
        if session is None:
            return
        lines = []
        for pos, column in enumerate(session.columns):
            marker = ">" if pos == session.position % len(session.columns) else " "
            field = labels.EDIT_FIELD.format(column.column.title, column.input_type)
            value = session.value + "_" if marker == ">" else session.row[column.index]
            lines.append(f"{marker} {field}: {value}")
        lines.append("")
        error = session.error or session.input_error
        if error:
            lines.append(error)
        if session.suggestions:
            lines.append(labels.EDIT_SUGGESTIONS.format(", ".join(session.suggestions)))
        if session.is_bool:
            lines.append(labels.EDIT_BOOL_HELP)
        title = labels.EDIT_TITLE.format(session.name or self.controller.current_resource)
        help_line = labels.EDIT_HELP if session.can_save else labels.EDIT_HELP_SAVE_DISABLED
        CursesUIHelper.draw_modal(stdscr, title, lines, help_line)
