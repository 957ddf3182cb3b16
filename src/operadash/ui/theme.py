"""Theme definitions for the operadash terminal dashboard.

Central place for color pair ids, default color assignments and the
box-drawing characters used by the table frame and the modals.
"""

import curses
from typing import Dict, Tuple

# Named color-pair ids
REGULAR_ROW: int = 1
HIGHLIGHTED_ROW: int = 2
BACKGROUND: int = 3
SHADOW: int = 4
HEADER: int = 5
FOOTER_ERROR: int = 6
FRAME: int = 7  # follows the environment's ui_color
ACTIVITY: int = 8

# Default theme: mapping of curses color pair id -> (fg_color, bg_color)
DEFAULT_THEME: Dict[int, Tuple[int, int]] = {
    REGULAR_ROW: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    HIGHLIGHTED_ROW: (curses.COLOR_BLACK, curses.COLOR_CYAN),
    BACKGROUND: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    SHADOW: (curses.COLOR_BLACK, curses.COLOR_BLACK),
    HEADER: (curses.COLOR_CYAN, curses.COLOR_BLACK),
    FOOTER_ERROR: (curses.COLOR_WHITE, curses.COLOR_RED),
    FRAME: (curses.COLOR_CYAN, curses.COLOR_BLACK),
    ACTIVITY: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
}

# The eight basic curses colors with their RGB values, for ui_color lookup
NAMED_COLORS: Dict[str, Tuple[int, Tuple[int, int, int]]] = {
    "black": (curses.COLOR_BLACK, (0, 0, 0)),
    "red": (curses.COLOR_RED, (205, 0, 0)),
    "green": (curses.COLOR_GREEN, (0, 205, 0)),
    "yellow": (curses.COLOR_YELLOW, (205, 205, 0)),
    "blue": (curses.COLOR_BLUE, (0, 0, 238)),
    "magenta": (curses.COLOR_MAGENTA, (205, 0, 205)),
    "cyan": (curses.COLOR_CYAN, (0, 205, 205)),
    "white": (curses.COLOR_WHITE, (229, 229, 229)),
}


def color_for(ui_color: str, default: int = curses.COLOR_CYAN) -> int:
    """Map a color name or #RRGGBB value to the nearest basic curses color."""
    value = (ui_color or "").strip().lower()
    if value in NAMED_COLORS:
        return NAMED_COLORS[value][0]
    if len(value) == 7 and value.startswith("#"):
        try:
            rgb = tuple(int(value[i:i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            return default
        return min(
            NAMED_COLORS.values(),
            key=lambda entry: sum((a - b) ** 2 for a, b in zip(entry[1], rgb)),
        )[0]
    return default


__all__ = [
    "REGULAR_ROW",
    "HIGHLIGHTED_ROW",
    "BACKGROUND",
    "SHADOW",
    "HEADER",
    "FOOTER_ERROR",
    "FRAME",
    "ACTIVITY",
    "DEFAULT_THEME",
    "NAMED_COLORS",
    "color_for",
]

# Box-drawing characters for borders (exported so callers can reuse)
TL = "┌"  # top-left
TR = "┐"  # top-right
BL = "└"  # bottom-left
BR = "┘"  # bottom-right
HOR = "─"
VERT = "│"

# Scroll indicators
SCROLL_UP = "▲"
SCROLL_DOWN = "▼"

__all__.extend(["TL", "TR", "BL", "BR", "HOR", "VERT", "SCROLL_UP", "SCROLL_DOWN"])
