"""
Pane Primitives

Styled text and the bordered pane description shared by every pane builder.
Builders produce these from a session snapshot; only the terminal layer turns
them into curses calls.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

from ...models.enums import ChangeSetStatus


class Style(str, Enum):
    """Display styles understood by the terminal palette."""
    NORMAL = "normal"
    BOLD = "bold"
    UNDERLINE = "underline"
    ACCENT = "accent"
    NAME = "name"
    TRIGGER = "trigger"
    SELECTED = "selected"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    MUTED = "muted"


class Span(NamedTuple):
    text: str
    style: Style = Style.NORMAL


Line = List[Span]


def line(text: str, style: Style = Style.NORMAL) -> Line:
    """Build a single-span line."""
    return [Span(text, style)]


def line_text(spans: Line) -> str:
    return "".join(span.text for span in spans)


@dataclass
class Pane:
    """A bordered region: title, body lines and an optional highlighted row."""
    title: str
    lines: List[Line] = field(default_factory=list)
    focused: bool = False
    cursor: Optional[int] = None


def status_style(status: str) -> Style:
    """Colour for a change set status. Unknown statuses are unstyled."""
    return {
        ChangeSetStatus.COMPLETED.value: Style.SUCCESS,
        ChangeSetStatus.FAILED.value: Style.ERROR,
        ChangeSetStatus.IN_PROGRESS.value: Style.WARNING,
        ChangeSetStatus.ABANDONED.value: Style.MUTED,
    }.get(status, Style.NORMAL)


def window_start(total: int, height: int, cursor: Optional[int]) -> int:
    """
    First row to show so that ``cursor`` stays inside a viewport of ``height`` rows.

    Args:
        total: Number of rows available
        height: Visible rows
        cursor: Highlighted row, if any

    Returns:
        Index of the first visible row
    """
    if height <= 0 or total <= height or cursor is None:
        return 0
    return min(max(0, cursor - height + 1), total - height)


def truncate(text: str, width: int) -> str:
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width <= 3:
        return text[:width]
    return text[: width - 3] + "..."
