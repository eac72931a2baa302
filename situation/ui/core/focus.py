"""
Focus State Machine

Owns every transition of ``Focus``, ``Mode`` and the top bar sub-focus so the
dispatcher never assigns them directly.
"""

from typing import Optional

from ...models.enums import DropdownFocus, Focus, Mode
from .session_state import SessionState

TAB_CYCLE = {
    Focus.TOP_BAR: Focus.SCHEMA_LIST,
    Focus.SCHEMA_LIST: Focus.CONTENT_AREA,
    Focus.CONTENT_AREA: Focus.LOG_PANEL,
    Focus.LOG_PANEL: Focus.TOP_BAR,
    Focus.CHANGE_SET_DROPDOWN: Focus.TOP_BAR,
    Focus.INPUT: Focus.TOP_BAR,
}


class FocusStateMachine:
    """Transitions between focus targets for one session."""

    def __init__(self, state: SessionState):
        self.state = state

    @property
    def focus(self) -> Focus:
        return self.state.focus

    def cycle(self) -> Focus:
        """Move focus to the next pane in tab order."""
        self.state.focus = TAB_CYCLE[self.state.focus]
        return self.state.focus

    def jump(self, target: Focus, sub_focus: Optional[DropdownFocus] = None) -> None:
        """Focus a pane directly. An open dropdown is closed without committing."""
        if self.state.dropdown_open:
            self._close_dropdown()
        self.state.focus = target
        if sub_focus is not None:
            self.state.dropdown_focus = sub_focus

    def toggle_sub_focus(self) -> DropdownFocus:
        if self.state.dropdown_focus == DropdownFocus.WORKSPACE:
            self.state.dropdown_focus = DropdownFocus.CHANGE_SET
        else:
            self.state.dropdown_focus = DropdownFocus.WORKSPACE
        return self.state.dropdown_focus

    # ------------------------------------------------------------------
    # Change set dropdown
    # ------------------------------------------------------------------

    def open_dropdown(self) -> bool:
        """
        Open the change set dropdown with the highlight on the current selection.

        Returns:
            False if there is nothing to choose from
        """
        if not self.state.change_sets:
            return False
        self.state.dropdown_open = True
        self.state.focus = Focus.CHANGE_SET_DROPDOWN
        index = self.state.selected_index
        self.state.dropdown_index = index if index is not None else 0
        return True

    def commit_dropdown(self) -> Optional[int]:
        """Close the dropdown and return the highlighted index to select."""
        index = self.state.dropdown_index
        self._close_dropdown()
        self.state.focus = Focus.TOP_BAR
        return index

    def cancel_dropdown(self) -> None:
        self._close_dropdown()
        self.state.focus = Focus.TOP_BAR

    def _close_dropdown(self) -> None:
        self.state.dropdown_open = False
        self.state.dropdown_index = None

    # ------------------------------------------------------------------
    # Name input
    # ------------------------------------------------------------------

    def enter_input(self) -> None:
        self.state.mode = Mode.ENTERING_CHANGE_SET_NAME
        self.state.focus = Focus.INPUT
        self.state.input_buffer = ""

    def leave_input(self) -> None:
        self.state.mode = Mode.NORMAL
        self.state.focus = Focus.TOP_BAR
        self.state.input_buffer = ""
