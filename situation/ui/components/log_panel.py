"""
Log Panel Component

Activity log window. Its title carries the in-progress action indicator.
"""

from ...models.enums import Focus
from ..core.session_state import SessionState
from .pane import Pane, line


class LogPanel:
    """Log panel pane builder."""

    TITLE = "Logs (j/k: Scroll)"

    @staticmethod
    def title(state: SessionState) -> str:
        if state.current_action:
            return f"{LogPanel.TITLE} - [{state.current_action}]"
        return LogPanel.TITLE

    @staticmethod
    def render(state: SessionState) -> Pane:
        """Only the lines inside the scroll viewport are included."""
        return Pane(
            title=LogPanel.title(state),
            lines=[line(text) for text in state.log.visible(state.log_height)],
            focused=state.focus == Focus.LOG_PANEL,
        )
