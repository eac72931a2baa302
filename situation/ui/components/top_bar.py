"""
Top Bar Component

One-line bar holding the workspace trigger, the change set trigger and the
signed-in user's email.
"""

from typing import Tuple

from ...core.constants import (
    DROPDOWN_CLOSED_INDICATOR,
    DROPDOWN_OPEN_INDICATOR,
    TOP_BAR_CHANGE_SET_PERCENT,
    TOP_BAR_WORKSPACE_PERCENT,
)
from ...models.enums import DropdownFocus, Focus, Mode
from ..core.session_state import SessionState
from .pane import Line, Span, Style


class TopBar:
    """Top bar text builders."""

    @staticmethod
    def column_widths(width: int) -> Tuple[int, int, int]:
        """Split the screen width 30/40/30 between the three cells."""
        workspace = width * TOP_BAR_WORKSPACE_PERCENT // 100
        change_set = width * TOP_BAR_CHANGE_SET_PERCENT // 100
        return workspace, change_set, width - workspace - change_set

    @staticmethod
    def _trigger_focused(state: SessionState, target: DropdownFocus) -> bool:
        if state.mode != Mode.NORMAL or state.dropdown_focus != target:
            return False
        return state.focus in (Focus.TOP_BAR, Focus.CHANGE_SET_DROPDOWN)

    @staticmethod
    def workspace_trigger(state: SessionState) -> Tuple[Line, bool]:
        """
        Build the workspace trigger.

        Returns:
            The trigger line and whether it holds the top bar focus
        """
        workspace = state.workspace_id or "Loading..."
        spans = [
            Span(" Workspace: "),
            Span(workspace, Style.ACCENT),
            Span(" "),
        ]
        return spans, TopBar._trigger_focused(state, DropdownFocus.WORKSPACE)

    @staticmethod
    def change_set_trigger(state: SessionState) -> Tuple[Line, bool]:
        """Build the change set trigger with its open/closed indicator."""
        summary = state.get_selected_summary()
        if summary:
            name, status = summary.name, f" ({summary.status})"
        else:
            name, status = "Select Change Set", ""
        indicator = DROPDOWN_OPEN_INDICATOR if state.dropdown_open else DROPDOWN_CLOSED_INDICATOR
        spans = [
            Span(" Change Set: "),
            Span(name, Style.NAME),
            Span(status),
            Span(f" {indicator} "),
        ]
        return spans, TopBar._trigger_focused(state, DropdownFocus.CHANGE_SET)

    @staticmethod
    def email(state: SessionState) -> str:
        return state.identity.user_email if state.identity else ""
