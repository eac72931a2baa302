"""
Session State Management

Everything the terminal UI needs for one session: identity, the change set
list and its selection, data fetched for the selection, the activity log and
the interaction state. The controller loop is the only writer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...core.constants import LOG_VIEW_HEIGHT
from ...models.enums import DropdownFocus, Focus, Mode
from ...models.schemas import (
    ChangeSet,
    ChangeSetSummary,
    ComponentSummary,
    MergeStatusResponse,
    SchemaSummary,
    WhoamiResponse,
)
from .log_buffer import LogBuffer


def _wrap_next(index: Optional[int], length: int) -> Optional[int]:
    if length == 0:
        return None
    if index is None or index >= length - 1:
        return 0
    return index + 1


def _wrap_previous(index: Optional[int], length: int) -> Optional[int]:
    if length == 0:
        return None
    if index is None or index == 0:
        return length - 1
    return index - 1


@dataclass
class SessionState:
    """Mutable state of one interactive session."""

    identity: Optional[WhoamiResponse] = None

    # Change sets
    change_sets: Optional[List[ChangeSetSummary]] = None
    selected_index: Optional[int] = None
    change_set_detail: Optional[ChangeSet] = None
    merge_status: Optional[MergeStatusResponse] = None
    components: Optional[List[ComponentSummary]] = None
    component_index: Optional[int] = None

    # Schemas
    schemas: List[SchemaSummary] = field(default_factory=list)
    schema_index: Optional[int] = None

    # Interaction
    mode: Mode = Mode.NORMAL
    focus: Focus = Focus.TOP_BAR
    dropdown_focus: DropdownFocus = DropdownFocus.WORKSPACE
    dropdown_open: bool = False
    dropdown_index: Optional[int] = None
    input_buffer: str = ""
    current_action: Optional[str] = None

    # Log
    log: LogBuffer = field(default_factory=LogBuffer)
    log_height: int = LOG_VIEW_HEIGHT

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def add_log(self, message: str) -> None:
        """Append to the activity log, snapping the view to the bottom."""
        self.log.append_auto_scroll(message, self.log_height)

    def add_logs(self, messages: List[str]) -> None:
        self.log.extend_auto_scroll(messages, self.log_height)

    def scroll_logs_up(self) -> None:
        self.log.scroll_up()

    def scroll_logs_down(self) -> None:
        self.log.scroll_down(self.log_height)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def workspace_id(self) -> Optional[str]:
        return self.identity.workspace_id if self.identity else None

    # ------------------------------------------------------------------
    # Change set selection
    # ------------------------------------------------------------------

    def get_selected_summary(self) -> Optional[ChangeSetSummary]:
        """Get the summary under the selection cursor, if any."""
        if self.selected_index is None or not self.change_sets:
            return None
        if 0 <= self.selected_index < len(self.change_sets):
            return self.change_sets[self.selected_index]
        return None

    @property
    def selected_change_set_id(self) -> Optional[str]:
        summary = self.get_selected_summary()
        return summary.id if summary else None

    def clear_selection_data(self) -> None:
        """Drop detail, merge status and components together."""
        self.change_set_detail = None
        self.merge_status = None
        self.components = None
        self.component_index = None

    def clear_schemas(self) -> None:
        self.schemas = []
        self.schema_index = None

    def select_index(self, index: Optional[int]) -> None:
        """Move the selection cursor. Dependent data is cleared when it changes."""
        if index != self.selected_index:
            self.clear_selection_data()
        self.selected_index = index

    def select_change_set_by_id(self, change_set_id: str) -> bool:
        """
        Select the change set with the given id.

        Returns:
            True if the id was found; the selection is unchanged otherwise
        """
        for index, summary in enumerate(self.change_sets or []):
            if summary.id == change_set_id:
                self.clear_selection_data()
                self.selected_index = index
                return True
        return False

    def apply_change_set_list(self, change_sets: List[ChangeSetSummary]) -> None:
        """
        Replace the change set list, keeping the selected index when possible.

        An index still in range is kept, an index past the end is clamped to
        the last entry, an empty list selects nothing and a list without a
        previous selection selects the first entry.
        """
        previous = self.selected_index
        new_len = len(change_sets)
        if new_len == 0:
            index = None
        elif previous is None:
            index = 0
        elif previous >= new_len:
            index = new_len - 1
        else:
            index = previous
        self.change_sets = change_sets
        self.selected_index = index
        self.clear_selection_data()

    # ------------------------------------------------------------------
    # Dropdown highlight
    # ------------------------------------------------------------------

    def dropdown_next(self) -> None:
        self.dropdown_index = _wrap_next(self.dropdown_index, len(self.change_sets or []))

    def dropdown_previous(self) -> None:
        self.dropdown_index = _wrap_previous(self.dropdown_index, len(self.change_sets or []))

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------

    def set_schemas(self, schemas: List[SchemaSummary]) -> None:
        """Store schemas sorted by (category, name) and reset the cursor."""
        self.schemas = sorted(schemas, key=lambda s: (s.category, s.schema_name))
        self.schema_index = 0 if self.schemas else None

    def get_selected_schema(self) -> Optional[SchemaSummary]:
        if self.schema_index is None or self.schema_index >= len(self.schemas):
            return None
        return self.schemas[self.schema_index]

    def schema_next(self) -> None:
        self.schema_index = _wrap_next(self.schema_index, len(self.schemas))

    def schema_previous(self) -> None:
        self.schema_index = _wrap_previous(self.schema_index, len(self.schemas))

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def set_components(self, component_ids: List[str]) -> None:
        """Build summaries from listed ids, keeping details already known for an id."""
        known = {c.id: c for c in self.components or []}
        self.components = [known.get(cid) or ComponentSummary(id=cid) for cid in component_ids]
        self.component_index = 0 if self.components else None

    def components_listed(self) -> bool:
        """Whether the details pane lists components. It shows only the help without a detail."""
        return self.change_set_detail is not None

    def get_selected_component(self) -> Optional[ComponentSummary]:
        if not self.components or self.component_index is None:
            return None
        if self.component_index >= len(self.components):
            return None
        return self.components[self.component_index]

    def component_next(self) -> None:
        self.component_index = _wrap_next(self.component_index, len(self.components or []))

    def component_previous(self) -> None:
        self.component_index = _wrap_previous(self.component_index, len(self.components or []))
