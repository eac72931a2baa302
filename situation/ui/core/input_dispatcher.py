"""
Input Dispatcher

Maps one key event to state mutations and remote call sequences. Legality is
resolved mode first, then global keys, then the pane holding focus.
"""

import logging
from typing import Awaitable, Callable, Dict

from ...core.constants import (
    MSG_CREATE_CANCELLED,
    MSG_EMPTY_NAME,
    MSG_NO_CHANGE_SETS,
    MSG_NO_COMPONENT_SELECTED,
    MSG_NO_SELECTION_APPLY,
    MSG_NO_SELECTION_COMPONENTS,
    MSG_NO_SELECTION_DELETE,
    MSG_NO_WORKSPACE_CREATE,
    MSG_WORKSPACE_NOT_IMPLEMENTED,
)
from ...models.enums import DropdownFocus, Focus, KeyCode, Mode
from ...services.refresh_orchestrator import RefreshOrchestrator
from .focus import FocusStateMachine
from .keys import KeyEvent
from .session_state import SessionState

logger = logging.getLogger(__name__)

# Alt+<char> jumps straight to a pane
DIRECT_FOCUS_KEYS = {
    "w": (Focus.TOP_BAR, DropdownFocus.WORKSPACE),
    "c": (Focus.TOP_BAR, DropdownFocus.CHANGE_SET),
    "s": (Focus.SCHEMA_LIST, None),
    "l": (Focus.LOG_PANEL, None),
}


class InputDispatcher:
    """Routes key events for one session."""

    def __init__(
        self,
        state: SessionState,
        orchestrator: RefreshOrchestrator,
        focus: FocusStateMachine,
    ):
        self.state = state
        self.orchestrator = orchestrator
        self.focus = focus
        self._pane_handlers: Dict[Focus, Callable[[KeyEvent], Awaitable[None]]] = {
            Focus.TOP_BAR: self._handle_top_bar,
            Focus.SCHEMA_LIST: self._handle_schema_list,
            Focus.CONTENT_AREA: self._handle_content_area,
            Focus.LOG_PANEL: self._handle_log_panel,
            Focus.CHANGE_SET_DROPDOWN: self._handle_dropdown,
            Focus.INPUT: self._handle_stray_input_focus,
        }

    async def dispatch(self, key: KeyEvent) -> bool:
        """
        Handle one key event, including any cascade it triggers.

        Args:
            key: The key pressed

        Returns:
            True if the session should terminate
        """
        try:
            if self.state.mode == Mode.ENTERING_CHANGE_SET_NAME:
                await self._handle_name_input(key)
                return False

            if key.is_char("q"):
                return True
            if key.is_char("k"):
                self.state.scroll_logs_up()
                return False
            if key.is_char("j"):
                self.state.scroll_logs_down()
                return False

            if key.alt and key.code == KeyCode.CHAR:
                target = DIRECT_FOCUS_KEYS.get(key.char or "")
                if target:
                    self.focus.jump(*target)
                return False

            if key.code == KeyCode.TAB and not self.state.dropdown_open:
                self.focus.cycle()
                return False

            await self._pane_handlers[self.state.focus](key)
            return False
        finally:
            self.orchestrator.end_action()

    # ------------------------------------------------------------------
    # Panes
    # ------------------------------------------------------------------

    async def _handle_top_bar(self, key: KeyEvent) -> None:
        if key.code in (KeyCode.LEFT, KeyCode.RIGHT):
            self.focus.toggle_sub_focus()
        elif key.code == KeyCode.ENTER or key.is_char(" "):
            self._activate_trigger()
        elif key.is_char("c"):
            if self.state.workspace_id is None:
                self.state.add_log(MSG_NO_WORKSPACE_CREATE)
            else:
                self.focus.enter_input()
        elif key.is_char("d"):
            change_set_id = self.state.selected_change_set_id
            if change_set_id is None or self.state.workspace_id is None:
                self.state.add_log(MSG_NO_SELECTION_DELETE)
            else:
                await self.orchestrator.abandon_change_set(change_set_id)
        elif key.is_char("f"):
            change_set_id = self.state.selected_change_set_id
            if change_set_id is None or self.state.workspace_id is None:
                self.state.add_log(MSG_NO_SELECTION_APPLY)
            else:
                await self.orchestrator.force_apply(change_set_id)

    def _activate_trigger(self) -> None:
        if self.state.dropdown_focus == DropdownFocus.WORKSPACE:
            self.state.add_log(MSG_WORKSPACE_NOT_IMPLEMENTED)
        elif not self.focus.open_dropdown():
            self.state.add_log(MSG_NO_CHANGE_SETS)

    async def _handle_schema_list(self, key: KeyEvent) -> None:
        if key.code in (KeyCode.UP, KeyCode.DOWN):
            if key.code == KeyCode.UP:
                self.state.schema_previous()
            else:
                self.state.schema_next()
            schema = self.state.get_selected_schema()
            if schema:
                self.state.add_log(f"Selected schema: {schema.schema_name} (id: {schema.schema_id})")
        elif key.code == KeyCode.ENTER:
            change_set_id = self.state.selected_change_set_id
            if change_set_id is None or self.state.workspace_id is None:
                self.state.add_log(MSG_NO_SELECTION_COMPONENTS)
            else:
                await self.orchestrator.fetch_components(change_set_id)

    async def _handle_content_area(self, key: KeyEvent) -> None:
        if not self.state.components_listed():
            # Components fetched without a detail are not on screen
            if key.code == KeyCode.ENTER or key.is_char("x"):
                self.state.add_log(MSG_NO_COMPONENT_SELECTED)
            return

        if key.code == KeyCode.UP:
            self.state.component_previous()
        elif key.code == KeyCode.DOWN:
            self.state.component_next()
        elif key.code == KeyCode.ENTER or key.is_char("x"):
            change_set_id = self.state.selected_change_set_id
            component = self.state.get_selected_component()
            if change_set_id is None or component is None:
                self.state.add_log(MSG_NO_COMPONENT_SELECTED)
            elif key.code == KeyCode.ENTER:
                await self.orchestrator.fetch_component_detail(change_set_id, component.id)
            else:
                await self.orchestrator.delete_component(change_set_id, component.id)

    async def _handle_log_panel(self, key: KeyEvent) -> None:
        if key.code == KeyCode.UP:
            self.state.scroll_logs_up()
        elif key.code == KeyCode.DOWN:
            self.state.scroll_logs_down()

    async def _handle_dropdown(self, key: KeyEvent) -> None:
        if key.code == KeyCode.UP:
            self.state.dropdown_previous()
        elif key.code == KeyCode.DOWN:
            self.state.dropdown_next()
        elif key.code == KeyCode.ENTER:
            index = self.focus.commit_dropdown()
            if index is None:
                return
            self.orchestrator.begin_action("Fetching details, schemas & components...")
            await self.orchestrator.select_change_set(index)
        elif key.code in (KeyCode.ESC, KeyCode.TAB):
            self.focus.cancel_dropdown()

    async def _handle_stray_input_focus(self, key: KeyEvent) -> None:
        # Input focus outside name entry mode is not reachable through the
        # focus machine; recover by returning to the top bar.
        logger.debug(f"Ignoring {key} with input focus in normal mode")
        self.state.focus = Focus.TOP_BAR

    # ------------------------------------------------------------------
    # Name entry mode
    # ------------------------------------------------------------------

    async def _handle_name_input(self, key: KeyEvent) -> None:
        if key.code == KeyCode.ENTER:
            name = self.state.input_buffer.strip()
            self.focus.leave_input()
            if not name:
                self.state.add_log(MSG_EMPTY_NAME)
            elif self.state.workspace_id is None:
                self.state.add_log(MSG_NO_WORKSPACE_CREATE)
            else:
                await self.orchestrator.create_change_set(name)
        elif key.code == KeyCode.ESC:
            self.focus.leave_input()
            self.state.add_log(MSG_CREATE_CANCELLED)
        elif key.code == KeyCode.BACKSPACE:
            self.state.input_buffer = self.state.input_buffer[:-1]
        elif key.code == KeyCode.CHAR and not key.alt and key.char:
            self.state.input_buffer += key.char
