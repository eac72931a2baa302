"""
Input Line Component

Prompt shown under the log panel while a change set name is being typed.
"""

from typing import Optional

from ...core.constants import INPUT_PROMPT
from ...models.enums import Mode
from ..core.session_state import SessionState
from .pane import Line, Span, Style


class InputLine:
    """Name entry prompt builder."""

    @staticmethod
    def render(state: SessionState) -> Optional[Line]:
        """Return the prompt line, or None outside name entry mode."""
        if state.mode != Mode.ENTERING_CHANGE_SET_NAME:
            return None
        return [
            Span(INPUT_PROMPT, Style.BOLD),
            Span(" "),
            Span(state.input_buffer, Style.NAME),
        ]

    @staticmethod
    def cursor_column(state: SessionState) -> int:
        """Screen column just after the typed text."""
        return len(INPUT_PROMPT) + 1 + len(state.input_buffer)
