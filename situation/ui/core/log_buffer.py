"""
Log Buffer

User-facing activity log shown in the log panel, with a scroll offset kept
inside ``[0, max(0, len - viewport_height)]``.
"""

from typing import List


class LogBuffer:
    """Ordered log lines plus a scroll offset."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.offset: int = 0

    def __len__(self) -> int:
        return len(self.lines)

    def max_offset(self, viewport_height: int) -> int:
        return max(0, len(self.lines) - viewport_height)

    def append_auto_scroll(self, line: str, viewport_height: int) -> None:
        """
        Append a line and snap the view to the bottom.

        The snap happens even if the user scrolled up manually, so the latest
        activity is always visible.
        """
        self.lines.append(line)
        self.offset = self.max_offset(viewport_height)

    def extend_auto_scroll(self, lines: List[str], viewport_height: int) -> None:
        for line in lines:
            self.append_auto_scroll(line, viewport_height)

    def scroll_up(self) -> None:
        self.offset = max(0, self.offset - 1)

    def scroll_down(self, viewport_height: int) -> None:
        self.offset = min(self.offset + 1, self.max_offset(viewport_height))

    def visible(self, viewport_height: int) -> List[str]:
        """Return the lines currently inside the viewport."""
        return self.lines[self.offset:self.offset + viewport_height]
