"""
Situation - API Schemas

Pydantic models for the change-management service. Wire keys are camelCase;
unknown keys are ignored so additive service changes do not break decoding.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase wire keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Identity
# ============================================================================

class TokenDetails(ApiModel):
    """Decoded token claims returned alongside the identity."""

    iat: int
    sub: str
    user_pk: str = Field(alias="user_pk")
    workspace_pk: str = Field(alias="workspace_pk")


class WhoamiResponse(ApiModel):
    """Identity of the authenticated user."""

    user_id: str
    user_email: str
    workspace_id: str
    token: Optional[TokenDetails] = None


class ApiError(ApiModel):
    """Structured error body returned by the service on failure."""

    code: Optional[int] = None
    message: str
    status_code: int


# ============================================================================
# Change Sets
# ============================================================================

class ChangeSetSummary(ApiModel):
    """One entry of the change set list."""

    id: str
    name: str
    status: str


class ChangeSet(ApiModel):
    """Change set detail fetched for the current selection."""

    id: str
    name: str
    status: str


class ListChangeSetResponse(ApiModel):
    change_sets: list[ChangeSetSummary] = Field(default_factory=list)


class CreateChangeSetRequest(ApiModel):
    change_set_name: str = Field(..., min_length=1)


class CreateChangeSetResponse(ApiModel):
    change_set: ChangeSet


class GetChangeSetResponse(ApiModel):
    change_set: ChangeSet


class DeleteChangeSetResponse(ApiModel):
    success: bool


# ============================================================================
# Merge Status
# ============================================================================

class ActionComponent(ApiModel):
    """Component an action applies to."""

    id: str
    name: str


class MergeStatusAction(ApiModel):
    """A pending action the change set would apply."""

    id: str
    state: str
    kind: str
    name: str
    component: Optional[ActionComponent] = None


class MergeStatusResponse(ApiModel):
    change_set: ChangeSet
    actions: list[MergeStatusAction] = Field(default_factory=list)


# ============================================================================
# Schemas
# ============================================================================

class SchemaSummary(ApiModel):
    """A template components are instantiated from."""

    schema_id: str
    schema_name: str
    category: str = ""
    installed: bool = False


class ListSchemaResponse(ApiModel):
    schemas: list[SchemaSummary] = Field(default_factory=list)


# ============================================================================
# Components
# ============================================================================

class ListComponentsResponse(ApiModel):
    """The list endpoint only returns component ids."""

    components: list[str] = Field(default_factory=list)


class ComponentSummary(ApiModel):
    """
    A component of the selected change set.

    Only the id is known after listing; ``schema_id`` and ``name`` are filled
    in once the component detail has been fetched.
    """

    id: str
    name: Optional[str] = None
    schema_id: Optional[str] = None
    domain: dict[str, Any] = Field(default_factory=dict)

    def display_name(self, schemas: list[SchemaSummary]) -> str:
        """Resolve a display label, falling back to the component id."""
        schema_name = None
        if self.schema_id:
            for schema in schemas:
                if schema.schema_id == self.schema_id:
                    schema_name = schema.schema_name
                    break
        label = self.name or self.id
        if schema_name:
            return f"{label} [{schema_name}]"
        return label


class CreateComponentRequest(ApiModel):
    domain: dict[str, Any] = Field(default_factory=dict)
    name: str = Field(..., min_length=1)
    schema_name: str = Field(..., min_length=1)
    connections: list[Any] = Field(default_factory=list)
    view_name: Optional[str] = None


class CreateComponentResponse(ApiModel):
    component_id: str


class GetComponentResponse(ApiModel):
    component: dict[str, Any] = Field(default_factory=dict)
    domain: dict[str, Any] = Field(default_factory=dict)


class UpdateComponentRequest(ApiModel):
    domain: dict[str, Any] = Field(default_factory=dict)
    name: Optional[str] = None


class UpdateComponentResponse(ApiModel):
    model_config = ConfigDict(extra="allow")


class DeleteComponentResponse(ApiModel):
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
