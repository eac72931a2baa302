"""
Situation - Test Helpers

Scripted stand-in for the remote service client and builders for sample
service responses.
"""

from collections import defaultdict
from typing import Any, Dict, List

from situation.core.exceptions import ResponseError, TransportError
from situation.models.schemas import (
    ChangeSet,
    ChangeSetSummary,
    GetChangeSetResponse,
    GetComponentResponse,
    ListChangeSetResponse,
    ListComponentsResponse,
    ListSchemaResponse,
    MergeStatusAction,
    MergeStatusResponse,
    SchemaSummary,
    WhoamiResponse,
)

_UNSET = object()


class FakeServiceClient:
    """
    Scripted replacement for ``ServiceClient``.

    Each operation answers from its queue of scripted results first, then
    from its default. A result may be a value, an exception to raise, or a
    callable receiving the call arguments. Every call is recorded in
    ``calls`` as ``(operation, *args)``.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.queued: Dict[str, List[Any]] = defaultdict(list)
        self.defaults: Dict[str, Any] = {}

    def script(self, operation: str, *results: Any) -> None:
        self.queued[operation].extend(results)

    def operations(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def _respond(self, operation: str, *args: Any):
        self.calls.append((operation,) + args)
        if self.queued[operation]:
            result = self.queued[operation].pop(0)
        else:
            result = self.defaults.get(operation, _UNSET)
        if result is _UNSET:
            raise AssertionError(f"Unscripted call to {operation}")
        if isinstance(result, Exception):
            raise result
        if callable(result):
            result = result(*args)
        return result, [f"Calling API: {operation}"]

    async def whoami(self):
        return await self._respond("whoami")

    async def list_change_sets(self, workspace_id):
        return await self._respond("list_change_sets", workspace_id)

    async def create_change_set(self, workspace_id, name):
        return await self._respond("create_change_set", workspace_id, name)

    async def get_change_set(self, workspace_id, change_set_id):
        return await self._respond("get_change_set", workspace_id, change_set_id)

    async def abandon_change_set(self, workspace_id, change_set_id):
        return await self._respond("abandon_change_set", workspace_id, change_set_id)

    async def get_merge_status(self, workspace_id, change_set_id):
        return await self._respond("get_merge_status", workspace_id, change_set_id)

    async def force_apply(self, workspace_id, change_set_id):
        return await self._respond("force_apply", workspace_id, change_set_id)

    async def list_schemas(self, workspace_id, change_set_id):
        return await self._respond("list_schemas", workspace_id, change_set_id)

    async def list_components(self, workspace_id, change_set_id):
        return await self._respond("list_components", workspace_id, change_set_id)

    async def get_component(self, workspace_id, change_set_id, component_id):
        return await self._respond("get_component", workspace_id, change_set_id, component_id)

    async def delete_component(self, workspace_id, change_set_id, component_id):
        return await self._respond("delete_component", workspace_id, change_set_id, component_id)

    async def aclose(self):
        pass


# ============================================================================
# Sample Data Helpers
# ============================================================================

WORKSPACE_ID = "ws-1"


def make_identity(workspace_id: str = WORKSPACE_ID) -> WhoamiResponse:
    return WhoamiResponse.model_validate({
        "userId": "user-1",
        "userEmail": "dev@example.com",
        "workspaceId": workspace_id,
        "token": {"iat": 1700000000, "sub": "user-1", "user_pk": "pk-user", "workspace_pk": "pk-ws"},
    })


def make_summaries(*entries: str) -> List[ChangeSetSummary]:
    """Build summaries from ``"id"`` or ``"id:Status"`` entries."""
    summaries = []
    for entry in entries:
        cs_id, _, status = entry.partition(":")
        summaries.append(ChangeSetSummary(id=cs_id, name=f"{cs_id}-name", status=status or "Draft"))
    return summaries


def list_response(*entries: str) -> ListChangeSetResponse:
    return ListChangeSetResponse(change_sets=make_summaries(*entries))


def detail_response(workspace_id: str, change_set_id: str) -> GetChangeSetResponse:
    return GetChangeSetResponse(
        change_set=ChangeSet(id=change_set_id, name=f"{change_set_id}-name", status="Draft")
    )


def merge_status_response(workspace_id: str, change_set_id: str) -> MergeStatusResponse:
    return MergeStatusResponse(
        change_set=ChangeSet(id=change_set_id, name=f"{change_set_id}-name", status="Draft"),
        actions=[MergeStatusAction(id="act-1", state="Queued", kind="Create", name="create server")],
    )


def schemas_response(workspace_id: str, change_set_id: str) -> ListSchemaResponse:
    return ListSchemaResponse(schemas=[
        SchemaSummary(schema_id="s-2", schema_name="Region", category="AWS", installed=True),
        SchemaSummary(schema_id="s-1", schema_name="EC2 Instance", category="AWS", installed=True),
        SchemaSummary(schema_id="s-3", schema_name="Docker Image", category="Docker"),
    ])


def components_response(workspace_id: str, change_set_id: str) -> ListComponentsResponse:
    return ListComponentsResponse(components=["comp-1", "comp-2"])


def component_response(workspace_id: str, change_set_id: str, component_id: str) -> GetComponentResponse:
    return GetComponentResponse(
        component={"id": component_id, "name": f"{component_id}-name", "schemaId": "s-1"},
        domain={"region": "us-east-1"},
    )


def service_failure(message: str = "boom", status_code: int = 500) -> ResponseError:
    return ResponseError(
        f"API request failed with status {status_code}: {message}",
        status_code=status_code,
        diagnostics=["Calling API: GET http://test.local/failing", f"API Error Body: {message}"],
    )


def transport_failure() -> TransportError:
    return TransportError("Request to http://test.local failed: connection refused")
