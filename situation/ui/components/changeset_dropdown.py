"""
Change Set Dropdown Component

Overlay list opened from the change set trigger. The highlighted row is the
dropdown highlight, not the committed selection.
"""

from typing import Optional

from ...core.constants import DROPDOWN_MAX_ITEMS
from ..core.session_state import SessionState
from .pane import Pane, line, status_style


class ChangeSetDropdown:
    """Change set dropdown pane builder."""

    TITLE = "Select Change Set (Enter/Esc)"

    @staticmethod
    def render(state: SessionState) -> Optional[Pane]:
        """Return the overlay pane, or None while the dropdown is closed."""
        if not state.dropdown_open:
            return None

        if state.change_sets is None:
            lines = [line("Loading...")]
        elif not state.change_sets:
            lines = [line("No change sets found.")]
        else:
            lines = [
                line(f"{cs.name} ({cs.status}) - {cs.id}", status_style(cs.status))
                for cs in state.change_sets
            ]
        return Pane(
            title=ChangeSetDropdown.TITLE,
            lines=lines,
            focused=True,
            cursor=state.dropdown_index,
        )

    @staticmethod
    def height(pane: Pane) -> int:
        """Rows needed for the overlay including its border."""
        return min(len(pane.lines), DROPDOWN_MAX_ITEMS) + 2
