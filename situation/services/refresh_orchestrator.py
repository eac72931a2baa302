"""
Data Refresh Orchestrator

Runs the cascading fetch sequences that keep session state consistent with
the change-management service. Every remote call is awaited before the next
one starts; a failed call is logged and the cascade moves on.
"""

import logging
from typing import Callable, Optional

from ..core.exceptions import ServiceError
from ..core.constants import MSG_NO_IDENTITY
from ..ui.core.session_state import SessionState
from .api_client import ServiceClient

logger = logging.getLogger(__name__)


class RefreshOrchestrator:
    """
    Cascading fetches for one session.

    Each step marks the action in progress and asks for a redraw before it
    suspends on the network, so the user sees what the loop is waiting for.
    """

    def __init__(
        self,
        client: ServiceClient,
        state: SessionState,
        redraw: Optional[Callable[[], None]] = None,
    ):
        self.client = client
        self.state = state
        self._redraw = redraw or (lambda: None)

    def begin_action(self, description: str) -> None:
        """Show the in-progress indicator and paint it before a blocking call."""
        self.state.current_action = description
        self._redraw()

    def end_action(self) -> None:
        self.state.current_action = None

    def _log_failure(self, message: str, error: ServiceError) -> None:
        self.state.add_log(f"{message}: {error}")
        for line in error.diagnostics:
            logger.debug(line)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def startup(self) -> None:
        """Fetch identity, the change set list and everything for the first selection."""
        self.state.add_log("Fetching initial /whoami data...")
        self.begin_action("Fetching identity...")
        try:
            identity, logs = await self.client.whoami()
        except ServiceError as e:
            self._log_failure("Error fetching initial data", e)
            self.end_action()
            return
        self.state.identity = identity
        self.state.add_logs(logs)
        self.state.add_log("/whoami call successful.")
        logger.info(f"Session started for {identity.user_email} in workspace {identity.workspace_id}")

        await self.refresh_change_sets()
        await self.run_selection_cascade()
        self.end_action()

    # ------------------------------------------------------------------
    # Change set list
    # ------------------------------------------------------------------

    async def refresh_change_sets(self) -> None:
        """Re-fetch the change set list, preserving the selected index where possible."""
        workspace_id = self.state.workspace_id
        if workspace_id is None:
            self.state.add_log(MSG_NO_IDENTITY)
            return

        self.state.clear_selection_data()
        self.state.add_log(f"Refreshing change sets for workspace {workspace_id}...")
        self.begin_action("Refreshing change sets...")
        try:
            response, logs = await self.client.list_change_sets(workspace_id)
        except ServiceError as e:
            self.state.select_index(None)
            self._log_failure("Error refreshing change sets", e)
            return
        self.state.apply_change_set_list(response.change_sets)
        self.state.add_logs(logs)
        self.state.add_log("Change set list refreshed.")

    async def run_selection_cascade(self) -> None:
        """Fetch detail, merge status, schemas and components for the current selection."""
        self.state.clear_selection_data()
        change_set_id = self.state.selected_change_set_id
        if change_set_id is None or self.state.workspace_id is None:
            self.state.clear_schemas()
            return

        await self.fetch_details_and_status(change_set_id)
        await self.fetch_schemas(change_set_id)
        await self.fetch_components(change_set_id)

    async def refresh_and_cascade(self) -> None:
        await self.refresh_change_sets()
        await self.run_selection_cascade()

    async def select_change_set(self, index: Optional[int]) -> None:
        """Commit a new selection and load its data."""
        self.state.select_index(index)
        await self.run_selection_cascade()

    # ------------------------------------------------------------------
    # Selection data
    # ------------------------------------------------------------------

    async def fetch_details_and_status(self, change_set_id: str) -> None:
        """Fetch detail and merge status. Either may fail without affecting the other."""
        workspace_id = self.state.workspace_id

        self.begin_action(f"Fetching details for {change_set_id}...")
        try:
            response, logs = await self.client.get_change_set(workspace_id, change_set_id)
        except ServiceError as e:
            self.state.change_set_detail = None
            self._log_failure(f"Error fetching details for {change_set_id}", e)
        else:
            self.state.change_set_detail = response.change_set
            self.state.add_logs(logs)
            self.state.add_log(f"Details fetched for {change_set_id}")

        self.begin_action(f"Fetching merge status for {change_set_id}...")
        try:
            merge_status, logs = await self.client.get_merge_status(workspace_id, change_set_id)
        except ServiceError as e:
            self.state.merge_status = None
            self._log_failure(f"Error fetching merge status for {change_set_id}", e)
        else:
            self.state.merge_status = merge_status
            self.state.add_logs(logs)
            self.state.add_log(f"Merge status fetched for {change_set_id}")

    async def fetch_schemas(self, change_set_id: str) -> None:
        self.state.add_log(f"Fetching schemas for change set {change_set_id}...")
        self.begin_action("Fetching schemas...")
        try:
            response, logs = await self.client.list_schemas(self.state.workspace_id, change_set_id)
        except ServiceError as e:
            self.state.clear_schemas()
            self._log_failure("Error fetching schemas", e)
            return
        self.state.add_logs(logs)
        self.state.set_schemas(response.schemas)
        self.state.add_log(f"Successfully fetched {len(self.state.schemas)} schemas.")

    async def fetch_components(self, change_set_id: str) -> None:
        self.state.add_log(f"Fetching components for change set {change_set_id}...")
        self.begin_action("Fetching components...")
        try:
            response, logs = await self.client.list_components(self.state.workspace_id, change_set_id)
        except ServiceError as e:
            self.state.components = None
            self.state.component_index = None
            self._log_failure("Error fetching components", e)
            return
        self.state.add_logs(logs)
        self.state.set_components(response.components)
        self.state.add_log(f"Successfully processed {len(response.components)} component IDs.")

    # ------------------------------------------------------------------
    # Change set actions
    # ------------------------------------------------------------------

    async def create_change_set(self, name: str) -> Optional[str]:
        """
        Create a change set and select it once the list is refreshed.

        Returns:
            The new change set id, or None if creation failed
        """
        self.begin_action(f"Creating '{name}'...")
        try:
            response, logs = await self.client.create_change_set(self.state.workspace_id, name)
        except ServiceError as e:
            self._log_failure("Error creating changeset", e)
            await self.refresh_and_cascade()
            return None

        created = response.change_set
        self.state.add_logs(logs)
        self.state.add_log(f"Created changeset '{created.name}' ({created.id})")
        await self.refresh_change_sets()
        if not self.state.select_change_set_by_id(created.id):
            logger.warning(f"Created change set {created.id} missing from refreshed list")
        await self.run_selection_cascade()
        return created.id

    async def abandon_change_set(self, change_set_id: str) -> None:
        """Abandon a change set, then refresh the list and reload the selection."""
        self.begin_action(f"Deleting {change_set_id}...")
        try:
            response, logs = await self.client.abandon_change_set(self.state.workspace_id, change_set_id)
        except ServiceError as e:
            self._log_failure(f"Error abandoning changeset {change_set_id}", e)
        else:
            self.state.add_logs(logs)
            self.state.add_log(f"Abandoned changeset {change_set_id} (Success: {response.success})")
        self.state.change_set_detail = None
        self.state.merge_status = None
        await self.refresh_and_cascade()

    async def force_apply(self, change_set_id: str) -> None:
        """Force-apply a change set, then refresh the list and reload the selection."""
        self.begin_action(f"Applying {change_set_id}...")
        try:
            _, logs = await self.client.force_apply(self.state.workspace_id, change_set_id)
        except ServiceError as e:
            self._log_failure(f"Error applying changeset {change_set_id}", e)
        else:
            self.state.add_logs(logs)
            self.state.add_log(f"Apply initiated for changeset {change_set_id}")
        self.state.change_set_detail = None
        self.state.merge_status = None
        await self.refresh_and_cascade()

    # ------------------------------------------------------------------
    # Component actions
    # ------------------------------------------------------------------

    async def fetch_component_detail(self, change_set_id: str, component_id: str) -> None:
        """Fetch one component and record its name, schema and domain on its summary."""
        self.begin_action(f"Fetching component {component_id}...")
        try:
            response, logs = await self.client.get_component(
                self.state.workspace_id, change_set_id, component_id
            )
        except ServiceError as e:
            self._log_failure(f"Error fetching component {component_id}", e)
            return
        self.state.add_logs(logs)

        for summary in self.state.components or []:
            if summary.id == component_id:
                summary.name = response.component.get("name") or summary.name
                summary.schema_id = response.component.get("schemaId") or summary.schema_id
                summary.domain = response.domain
                break
        self.state.add_log(f"Component details fetched for {component_id}")

    async def delete_component(self, change_set_id: str, component_id: str) -> None:
        """Delete a component, then re-list the components of the change set."""
        self.begin_action(f"Deleting component {component_id}...")
        try:
            _, logs = await self.client.delete_component(
                self.state.workspace_id, change_set_id, component_id
            )
        except ServiceError as e:
            self._log_failure(f"Error deleting component {component_id}", e)
        else:
            self.state.add_logs(logs)
            self.state.add_log(f"Deleted component {component_id}")
        await self.fetch_components(change_set_id)
