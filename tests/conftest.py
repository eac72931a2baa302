"""
Situation - Pytest Configuration and Fixtures

This module provides common test configuration and fixtures wired to the
scripted service client from ``tests.helpers``.
"""

import logging
from typing import List, Optional

import pytest

from situation.core.config import ServiceSettings, Settings
from situation.models.schemas import DeleteChangeSetResponse, DeleteComponentResponse
from situation.services.refresh_orchestrator import RefreshOrchestrator
from situation.ui.core.focus import FocusStateMachine
from situation.ui.core.input_dispatcher import InputDispatcher
from situation.ui.core.session_state import SessionState
from tests.helpers import (
    FakeServiceClient,
    component_response,
    components_response,
    detail_response,
    list_response,
    make_identity,
    make_summaries,
    merge_status_response,
    schemas_response,
)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def service_settings() -> ServiceSettings:
    """Service settings pointing at a fake host."""
    return ServiceSettings(api_url="http://test.local", jwt_token="test-token")


@pytest.fixture
def test_settings(service_settings: ServiceSettings) -> Settings:
    return Settings(service=service_settings, environment="testing")


@pytest.fixture
def fake_client() -> FakeServiceClient:
    """A client whose read operations succeed with two change sets a and b."""
    client = FakeServiceClient()
    client.defaults.update({
        "whoami": make_identity(),
        "list_change_sets": list_response("a:Draft", "b:Applied"),
        "get_change_set": detail_response,
        "get_merge_status": merge_status_response,
        "list_schemas": schemas_response,
        "list_components": components_response,
        "get_component": component_response,
        "abandon_change_set": DeleteChangeSetResponse(success=True),
        "force_apply": None,
        "delete_component": DeleteComponentResponse(status="ok"),
    })
    return client


@pytest.fixture
def session_state() -> SessionState:
    return SessionState()


@pytest.fixture
def loaded_state(session_state: SessionState) -> SessionState:
    """State with identity and change sets a and b, nothing selected."""
    session_state.identity = make_identity()
    session_state.apply_change_set_list(make_summaries("a:Draft", "b:Applied"))
    return session_state


class RedrawCounter:
    def __init__(self, state: SessionState):
        self.state = state
        self.actions: List[Optional[str]] = []

    def __call__(self) -> None:
        self.actions.append(self.state.current_action)


@pytest.fixture
def redraws(session_state: SessionState) -> RedrawCounter:
    """Records the in-progress action visible at every redraw."""
    return RedrawCounter(session_state)


@pytest.fixture
def orchestrator(fake_client, session_state, redraws) -> RefreshOrchestrator:
    return RefreshOrchestrator(fake_client, session_state, redraw=redraws)


@pytest.fixture
def focus_machine(session_state: SessionState) -> FocusStateMachine:
    return FocusStateMachine(session_state)


@pytest.fixture
def dispatcher(session_state, orchestrator, focus_machine) -> InputDispatcher:
    return InputDispatcher(session_state, orchestrator, focus_machine)


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by ``configure_logging``."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
