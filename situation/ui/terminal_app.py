"""
Curses Terminal

Paints one frame of the session from the pane builders and turns curses key
codes into ``KeyEvent`` values. Raw mode, colour setup and restoring the
terminal on exit are left to ``curses.wrapper``.
"""

import curses
import logging
from typing import Dict, Optional, Union

from ..core.constants import DROPDOWN_LIST_WIDTH, SCHEMA_LIST_PERCENT
from ..models.enums import KeyCode
from .components import (
    ChangeSetDropdown,
    ContentArea,
    InputLine,
    Line,
    LogPanel,
    Pane,
    SchemaList,
    Span,
    Style,
    TopBar,
)
from .components.pane import truncate, window_start
from .core.keys import KeyEvent
from .core.session_state import SessionState

logger = logging.getLogger(__name__)

ESC = "\x1b"
# Keeps Esc responsive while still telling Alt+<key> apart
ESC_DELAY_MS = 25

_SPECIAL_KEYS = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_LEFT: KeyCode.LEFT,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    curses.KEY_ENTER: KeyCode.ENTER,
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
}

_CONTROL_CHARS = {
    "\t": KeyCode.TAB,
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\b": KeyCode.BACKSPACE,
    ESC: KeyCode.ESC,
}


def translate_key(key: Union[str, int]) -> KeyEvent:
    """Map one ``get_wch`` result to a key event."""
    if isinstance(key, int):
        return KeyEvent(_SPECIAL_KEYS.get(key, KeyCode.OTHER))
    if key in _CONTROL_CHARS:
        return KeyEvent(_CONTROL_CHARS[key])
    if key.isprintable():
        return KeyEvent.of(key)
    return KeyEvent(KeyCode.OTHER)


def init_palette() -> Dict[Style, int]:
    palette = {style: curses.A_NORMAL for style in Style}
    palette[Style.BOLD] = curses.A_BOLD
    palette[Style.UNDERLINE] = curses.A_UNDERLINE
    palette[Style.SELECTED] = curses.A_REVERSE | curses.A_BOLD
    palette[Style.TRIGGER] = curses.A_REVERSE
    palette[Style.MUTED] = curses.A_DIM

    if not curses.has_colors():
        return palette

    try:
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_CYAN, -1)
        curses.init_pair(2, curses.COLOR_GREEN, -1)
        curses.init_pair(3, curses.COLOR_YELLOW, -1)
        curses.init_pair(4, curses.COLOR_RED, -1)
        curses.init_pair(5, curses.COLOR_WHITE, curses.COLOR_BLUE)

        palette[Style.ACCENT] = curses.color_pair(1)
        palette[Style.SUCCESS] = curses.color_pair(2)
        palette[Style.NAME] = curses.color_pair(3)
        palette[Style.WARNING] = curses.color_pair(3)
        palette[Style.ERROR] = curses.color_pair(4)
        palette[Style.TRIGGER] = curses.color_pair(5)
    except curses.error:
        logger.debug("Terminal refused colour setup, using monochrome palette")

    return palette


class CursesTerminal:
    """Renderer and key source for one curses screen."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        curses.set_escdelay(ESC_DELAY_MS)
        curses.curs_set(0)
        self.palette = init_palette()
        self._cursor_visible = False

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def poll(self, timeout_ms: int) -> Optional[KeyEvent]:
        """
        Wait up to ``timeout_ms`` for one key.

        Returns:
            The key event, or None if no key arrived in time
        """
        self.stdscr.timeout(timeout_ms)
        try:
            key = self.stdscr.get_wch()
        except curses.error:
            return None

        if key != ESC:
            return translate_key(key)

        # Alt+<key> arrives as Esc immediately followed by the key
        self.stdscr.timeout(0)
        try:
            follow = self.stdscr.get_wch()
        except curses.error:
            return KeyEvent(KeyCode.ESC)
        if isinstance(follow, str) and follow.isprintable():
            return KeyEvent.of(follow, alt=True)
        return KeyEvent(KeyCode.ESC)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def draw(self, state: SessionState) -> None:
        """Paint one frame. The state is only read."""
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        input_line = InputLine.render(state)
        input_rows = 1 if input_line else 0
        log_rows = state.log_height + 2
        main_rows = max(0, height - 1 - log_rows - input_rows)
        schema_width = width * SCHEMA_LIST_PERCENT // 100

        self._draw_top_bar(state, width)
        self._draw_pane(SchemaList.render(state), 1, 0, main_rows, schema_width)
        self._draw_pane(ContentArea.render(state), 1, schema_width, main_rows, width - schema_width)
        self._draw_pane(LogPanel.render(state), 1 + main_rows, 0, min(log_rows, height - 1), width)

        if input_line and height > 1:
            self._draw_line(height - 1, 0, input_line, width - 1)

        dropdown = ChangeSetDropdown.render(state)
        if dropdown:
            x = TopBar.column_widths(width)[0]
            rows = min(ChangeSetDropdown.height(dropdown), height - 1)
            self._draw_pane(dropdown, 1, x, rows, min(DROPDOWN_LIST_WIDTH, width - x), clear=True)

        self._place_cursor(state, input_line is not None, height, width)
        self.stdscr.refresh()

    def _draw_top_bar(self, state: SessionState, width: int) -> None:
        workspace_width, change_set_width, email_width = TopBar.column_widths(width)

        spans, focused = TopBar.workspace_trigger(state)
        self._draw_line(0, 0, spans, workspace_width, Style.TRIGGER if focused else None)

        spans, focused = TopBar.change_set_trigger(state)
        self._draw_line(0, workspace_width, spans, change_set_width, Style.TRIGGER if focused else None)

        email = truncate(TopBar.email(state), email_width - 1).rjust(email_width - 1)
        self._put(0, workspace_width + change_set_width, email, curses.A_NORMAL)

    def _draw_pane(self, pane: Pane, y: int, x: int, height: int, width: int, clear: bool = False) -> None:
        if height < 2 or width < 4:
            return

        window = self.stdscr.derwin(height, width, y, x)
        if clear:
            window.erase()
        border = self.palette[Style.ACCENT] if pane.focused else curses.A_DIM
        window.attrset(border)
        window.box()
        window.attrset(curses.A_NORMAL)
        window.addnstr(0, 1, f" {pane.title} ", width - 2, border | curses.A_BOLD)

        rows = height - 2
        start = window_start(len(pane.lines), rows, pane.cursor)
        for offset, spans in enumerate(pane.lines[start:start + rows]):
            index = start + offset
            if pane.cursor is None:
                self._draw_line(y + 1 + offset, x + 1, spans, width - 2)
            elif index == pane.cursor:
                self._draw_line(y + 1 + offset, x + 1, [Span("> ", Style.SELECTED)] + spans, width - 2, Style.SELECTED)
            else:
                self._draw_line(y + 1 + offset, x + 1, [Span("  ")] + spans, width - 2)

    def _draw_line(self, y: int, x: int, spans: Line, width: int, override: Optional[Style] = None) -> None:
        """Draw styled spans left to right, clipped to ``width`` columns."""
        if override is not None:
            self._put(y, x, " " * width, self.palette[override])
        column = 0
        for text, style in spans:
            if column >= width:
                break
            attr = self.palette[override] if override is not None else self.palette[style]
            self._put(y, x + column, text[: width - column], attr)
            column += len(text)

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        height, width = self.stdscr.getmaxyx()
        if not text or y >= height or x >= width - 1:
            return
        self.stdscr.addnstr(y, x, text, width - 1 - x, attr)

    def _place_cursor(self, state: SessionState, show: bool, height: int, width: int) -> None:
        if show != self._cursor_visible:
            curses.curs_set(1 if show else 0)
            self._cursor_visible = show
        if show:
            self.stdscr.move(height - 1, min(InputLine.cursor_column(state), width - 1))
