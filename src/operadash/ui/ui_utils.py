"""
Drawing helpers for the curses dashboard.

All functions clip to the screen and swallow curses.error, so a terminal
that shrinks between frames never crashes a redraw.
"""

import curses
from typing import Sequence, Tuple

from operadash import labels

from . import theme as THEME


class CursesUIHelper:
    """Helper class for common curses UI operations."""

    @staticmethod
    def draw_borders(
        stdscr, start_y: int, start_x: int, box_width: int, box_height: int, title: str = "", color_pair: int = THEME.REGULAR_ROW
    ) -> None:
        """Draw a frame, with an optional title embedded in the top border."""
        h, w = stdscr.getmaxyx()
        if start_y + box_height > h or start_x + box_width > w or start_y < 0 or start_x < 0 or box_width < 2:
            return

        attr = curses.color_pair(color_pair)
        top = THEME.HOR * (box_width - 2)
        if title:
            caption = f" {title} "[: max(0, box_width - 4)]
            top = THEME.HOR + caption + THEME.HOR * max(0, box_width - 3 - len(caption))
        try:
            stdscr.addstr(start_y, start_x, THEME.TL + top + THEME.TR, attr)
            for y in range(start_y + 1, start_y + box_height - 1):
                stdscr.addstr(y, start_x, THEME.VERT, attr)
                stdscr.addstr(y, start_x + box_width - 1, THEME.VERT, attr)
            # writing the bottom-right corner cell raises once the cursor runs off screen
            stdscr.addstr(start_y + box_height - 1, start_x, THEME.BL + THEME.HOR * (box_width - 2), attr)
            stdscr.insstr(start_y + box_height - 1, start_x + box_width - 1, THEME.BR, attr)
        except curses.error:
            pass

    @staticmethod
    def _fill(stdscr, y: int, x: int, width: int, color_pair: int) -> None:
        h, w = stdscr.getmaxyx()
        width = min(width, w - x - (1 if y == h - 1 else 0))
        if 0 <= y < h and 0 <= x < w and width > 0:
            try:
                stdscr.addstr(y, x, " " * width, curses.color_pair(color_pair))
            except curses.error:
                pass

    @staticmethod
    def draw_box_frame(
        stdscr, start_y: int, start_x: int, box_width: int, box_height: int, title: str = "", color_pair: int = THEME.REGULAR_ROW
    ) -> None:
        """Draw a cleared box with a drop shadow two columns wide on the right and one row below."""
        for y in range(start_y + 1, start_y + box_height):
            CursesUIHelper._fill(stdscr, y, start_x + box_width, 2, THEME.SHADOW)
        CursesUIHelper._fill(stdscr, start_y + box_height, start_x + 2, box_width, THEME.SHADOW)
        for y in range(start_y + 1, start_y + box_height - 1):
            CursesUIHelper._fill(stdscr, y, start_x + 1, box_width - 2, THEME.REGULAR_ROW)
        CursesUIHelper.draw_borders(stdscr, start_y, start_x, box_width, box_height, title, color_pair)

    @staticmethod
    def draw_text(
        stdscr,
        y: int,
        x: int,
        text: str,
        max_width: int | None = None,
        color_pair: int = THEME.REGULAR_ROW,
        attrs: int = 0,
    ) -> None:
        """Draw text safely with optional truncation and attributes."""
        try:
            h, w = stdscr.getmaxyx()
            if y < 0 or y >= h or x < 0 or x >= w:
                return

            width_to_use: int = max_width if max_width is not None else (w - x)
            width_to_use = max(0, min(width_to_use, w - x - (1 if y == h - 1 else 0)))
            stdscr.addstr(y, x, text[:width_to_use], curses.color_pair(color_pair) | attrs)
        except curses.error:
            pass

    @staticmethod
    def draw_highlighted_text(stdscr, y: int, x: int, text: str, max_width: int | None = None, attrs: int = 0) -> None:
        """Draw highlighted (selected) text over a full-width bar."""
        try:
            h, w = stdscr.getmaxyx()
            if y < 0 or y >= h or x < 0 or x >= w:
                return

            width_to_use: int = max_width if max_width is not None else (w - x)
            width_to_use = max(0, min(width_to_use, w - x))

            stdscr.addstr(y, x, " " * width_to_use, curses.color_pair(THEME.HIGHLIGHTED_ROW))
            stdscr.addstr(y, x, text[:width_to_use], curses.color_pair(THEME.HIGHLIGHTED_ROW) | attrs)
        except curses.error:
            pass

    @staticmethod
    def draw_modal(stdscr, title: str, lines: Sequence[str], footer: str = "", box_max_width: int = 72) -> Tuple[int, int]:
        """Draw a centered modal with a title and text lines; returns the (y, x) of the first line."""
        h, w = stdscr.getmaxyx()
        content_width = max([len(title)] + [len(line) for line in lines] + [len(footer)])
        box_width = max(10, min(content_width + 6, box_max_width, w - 2))
        box_height = min(len(lines) + (4 if footer else 3) + 1, h - 2)
        start_y = max(0, (h - box_height) // 2)
        start_x = max(0, (w - box_width) // 2)

        CursesUIHelper.draw_box_frame(stdscr, start_y, start_x, box_width, box_height, title, THEME.FRAME)
        for i, line in enumerate(lines[: max(0, box_height - 3)]):
            CursesUIHelper.draw_text(stdscr, start_y + 2 + i, start_x + 3, line, box_width - 6)
        if footer:
            CursesUIHelper.draw_text(
                stdscr, start_y + box_height - 2, start_x + 3, footer, box_width - 6, THEME.REGULAR_ROW, curses.A_DIM
            )
        return start_y + 2, start_x + 3

    @staticmethod
    def init_colors(color_theme: dict | None = None) -> None:
        """Initialize color pairs from a theme dictionary or use DEFAULT_THEME."""
        if color_theme is None:
            color_theme = THEME.DEFAULT_THEME

        for pair_id, (fg, bg) in color_theme.items():
            try:
                curses.init_pair(pair_id, fg, bg)
            except curses.error:
                pass  # terminal without color support

    @staticmethod
    def set_frame_color(ui_color: str) -> None:
        """Recolor the frame pair for the active environment."""
        try:
            curses.init_pair(THEME.FRAME, THEME.color_for(ui_color), curses.COLOR_BLACK)
        except curses.error:
            pass

    @staticmethod
    def validate_terminal_size(h: int, w: int, min_height: int = 12, min_width: int = 40) -> Tuple[bool, str]:
        """
        Validate terminal size.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if h < min_height or w < min_width:
            return False, f"{labels.MSG_TERMINAL_TOO_SMALL} Requires at least {min_height}x{min_width}, got {h}x{w}"
        return True, ""
