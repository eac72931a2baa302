"""
Session Controller

The cooperative loop of one interactive session: startup cascade, then
poll for a key, dispatch it and redraw until the user quits.
"""

import logging
from typing import Optional

from ...core.config import Settings
from ...services.api_client import ServiceClient
from ...services.refresh_orchestrator import RefreshOrchestrator
from .focus import FocusStateMachine
from .input_dispatcher import InputDispatcher
from .session_state import SessionState

logger = logging.getLogger(__name__)


class SessionController:
    """
    Owns the session state and is its only writer.

    The terminal must provide ``draw(state)`` and ``poll(timeout_ms)``; the
    latter returns a ``KeyEvent`` or None when the timeout expires.
    """

    def __init__(
        self,
        settings: Settings,
        client: ServiceClient,
        terminal,
        state: Optional[SessionState] = None,
    ):
        self.settings = settings
        self.terminal = terminal
        self.state = state or SessionState(log_height=settings.ui.log_height)
        self.focus = FocusStateMachine(self.state)
        self.orchestrator = RefreshOrchestrator(client, self.state, redraw=self.draw)
        self.dispatcher = InputDispatcher(self.state, self.orchestrator, self.focus)

    def draw(self) -> None:
        self.terminal.draw(self.state)

    async def run(self) -> None:
        """Load the initial data, then process keys until quit."""
        logger.info(f"Starting {self.settings.app_name} {self.settings.app_version} session")
        self.draw()
        await self.orchestrator.startup()

        poll_interval = self.settings.ui.poll_interval_ms
        while True:
            self.draw()
            key = self.terminal.poll(poll_interval)
            if key is None:
                continue
            if await self.dispatcher.dispatch(key):
                break

        logger.info("Session ended by user")
