"""
Situation - Remote Service Client

This module wraps the change-management HTTP API. Every operation returns the
decoded response together with the ordered diagnostic lines gathered while
performing the call, or raises a ``ServiceError`` subclass.
"""

import json
import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import ServiceSettings
from ..core.constants import (
    CHANGE_SET_PATH,
    CHANGE_SETS_PATH,
    COMPONENT_PATH,
    COMPONENTS_PATH,
    FORCE_APPLY_PATH,
    MERGE_STATUS_PATH,
    SCHEMAS_PATH,
    WHOAMI_PATH,
)
from ..core.exceptions import DecodeError, ResponseError, TransportError
from ..models.schemas import (
    ApiError,
    CreateChangeSetRequest,
    CreateChangeSetResponse,
    CreateComponentRequest,
    CreateComponentResponse,
    DeleteChangeSetResponse,
    DeleteComponentResponse,
    GetChangeSetResponse,
    GetComponentResponse,
    ListChangeSetResponse,
    ListComponentsResponse,
    ListSchemaResponse,
    MergeStatusResponse,
    UpdateComponentRequest,
    UpdateComponentResponse,
    WhoamiResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ApiResult = tuple[Any, list[str]]


class ServiceClient:
    """
    Async client for the change-management service.

    The client owns a single ``httpx.AsyncClient`` carrying the bearer token as
    a default header. Use it as an async context manager or call ``aclose``.
    """

    def __init__(
        self,
        settings: ServiceSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Service URL, credential and timeout
            transport: Optional transport override (used by tests)
        """
        self.base_url = settings.api_url
        headers = {
            "Authorization": f"Bearer {settings.jwt_token.get_secret_value()}",
            "Accept": "application/json",
        }
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    async def whoami(self) -> tuple[WhoamiResponse, list[str]]:
        return await self._call("whoami", "GET", WHOAMI_PATH, WhoamiResponse)

    # ------------------------------------------------------------------
    # Change sets
    # ------------------------------------------------------------------

    async def list_change_sets(self, workspace_id: str) -> tuple[ListChangeSetResponse, list[str]]:
        path = CHANGE_SETS_PATH.format(workspace_id=workspace_id)
        return await self._call("list change sets", "GET", path, ListChangeSetResponse)

    async def create_change_set(
        self, workspace_id: str, name: str
    ) -> tuple[CreateChangeSetResponse, list[str]]:
        path = CHANGE_SETS_PATH.format(workspace_id=workspace_id)
        request = CreateChangeSetRequest(change_set_name=name)
        return await self._call(
            "create change set", "POST", path, CreateChangeSetResponse, payload=request
        )

    async def get_change_set(
        self, workspace_id: str, change_set_id: str
    ) -> tuple[GetChangeSetResponse, list[str]]:
        path = CHANGE_SET_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("get change set", "GET", path, GetChangeSetResponse)

    async def abandon_change_set(
        self, workspace_id: str, change_set_id: str
    ) -> tuple[DeleteChangeSetResponse, list[str]]:
        path = CHANGE_SET_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("abandon change set", "DELETE", path, DeleteChangeSetResponse)

    async def get_merge_status(
        self, workspace_id: str, change_set_id: str
    ) -> tuple[MergeStatusResponse, list[str]]:
        path = MERGE_STATUS_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("get merge status", "GET", path, MergeStatusResponse)

    async def force_apply(self, workspace_id: str, change_set_id: str) -> tuple[None, list[str]]:
        """Request an apply. The service answers with an empty body."""
        path = FORCE_APPLY_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("force apply", "POST", path, None)

    # ------------------------------------------------------------------
    # Schemas and components
    # ------------------------------------------------------------------

    async def list_schemas(
        self, workspace_id: str, change_set_id: str
    ) -> tuple[ListSchemaResponse, list[str]]:
        path = SCHEMAS_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("list schemas", "GET", path, ListSchemaResponse)

    async def list_components(
        self, workspace_id: str, change_set_id: str
    ) -> tuple[ListComponentsResponse, list[str]]:
        path = COMPONENTS_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call("list components", "GET", path, ListComponentsResponse)

    async def create_component(
        self, workspace_id: str, change_set_id: str, request: CreateComponentRequest
    ) -> tuple[CreateComponentResponse, list[str]]:
        path = COMPONENTS_PATH.format(workspace_id=workspace_id, change_set_id=change_set_id)
        return await self._call(
            "create component", "POST", path, CreateComponentResponse, payload=request
        )

    async def get_component(
        self, workspace_id: str, change_set_id: str, component_id: str
    ) -> tuple[GetComponentResponse, list[str]]:
        path = COMPONENT_PATH.format(
            workspace_id=workspace_id, change_set_id=change_set_id, component_id=component_id
        )
        return await self._call("get component", "GET", path, GetComponentResponse)

    async def update_component(
        self,
        workspace_id: str,
        change_set_id: str,
        component_id: str,
        request: UpdateComponentRequest,
    ) -> tuple[UpdateComponentResponse, list[str]]:
        path = COMPONENT_PATH.format(
            workspace_id=workspace_id, change_set_id=change_set_id, component_id=component_id
        )
        return await self._call(
            "update component", "PUT", path, UpdateComponentResponse, payload=request
        )

    async def delete_component(
        self, workspace_id: str, change_set_id: str, component_id: str
    ) -> tuple[DeleteComponentResponse, list[str]]:
        path = COMPONENT_PATH.format(
            workspace_id=workspace_id, change_set_id=change_set_id, component_id=component_id
        )
        return await self._call("delete component", "DELETE", path, DeleteComponentResponse)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        response_model: Optional[type[ModelT]],
        payload: Optional[BaseModel] = None,
    ) -> ApiResult:
        """
        Perform one request and decode the response.

        Args:
            operation: Human readable operation name used in error messages
            method: HTTP method
            path: Path relative to the service base URL
            response_model: Model to decode a success body into, or None to ignore the body
            payload: Optional request body

        Returns:
            Tuple of (decoded response, diagnostic lines)

        Raises:
            TransportError: If no response was received
            ResponseError: If the service answered with a non-success status
            DecodeError: If the success body could not be decoded
        """
        logs: list[str] = []
        url = f"{self.base_url}{path}"
        logs.append(f"Calling API: {method} {url}")

        body = None
        if payload is not None:
            body = payload.model_dump(by_alias=True, exclude_none=True)
            logs.append(f"Request Body: {json.dumps(body)}")

        try:
            response = await self._client.request(method, path, json=body)
        except httpx.RequestError as e:
            logger.error(f"Transport error during {operation}: {e}")
            raise TransportError(
                f"Request to {url} failed: {e}",
                operation=operation,
                endpoint=url,
                diagnostics=logs,
                cause=e,
            )

        logs.append(f"API Response Status: {response.status_code} {response.reason_phrase}".rstrip())
        text = response.text

        if not response.is_success:
            logs.append(f"API Error Body: {text}")
            api_error = self._parse_api_error(text)
            if api_error is not None:
                message = (
                    f"API request failed with status {response.status_code} {response.reason_phrase}: "
                    f"Code {api_error.code}, Message: {api_error.message}"
                )
            else:
                message = f"API request failed with status {response.status_code} {response.reason_phrase}: {text}"
            logger.warning(f"{operation} failed: {message}")
            raise ResponseError(
                message,
                status_code=response.status_code,
                body=text,
                api_error=api_error,
                operation=operation,
                endpoint=url,
                diagnostics=logs,
            )

        logs.append(f"API Success Body: {text}")
        if response_model is None:
            return None, logs

        try:
            decoded = response_model.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Could not decode {operation} response: {e}")
            raise DecodeError(
                f"Failed to deserialize {operation} response: {e.error_count()} error(s) - Body: {text}",
                body=text,
                operation=operation,
                endpoint=url,
                diagnostics=logs,
                cause=e,
            )
        return decoded, logs

    @staticmethod
    def _parse_api_error(text: str) -> Optional[ApiError]:
        try:
            return ApiError.model_validate_json(text)
        except ValidationError:
            return None
