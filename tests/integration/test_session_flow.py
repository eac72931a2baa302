"""
Situation - Session Flow Tests

End-to-end tests driving the session controller with a scripted terminal and
service client, plus the command line entry point.
"""

import os
from typing import List, Optional
from unittest.mock import patch

import pytest

from situation.__main__ import main
from situation.models.enums import Focus, KeyCode, Mode
from situation.ui.components import ContentArea, LogPanel, TopBar
from situation.ui.components.pane import line_text
from situation.ui.core.keys import KeyEvent
from situation.ui.core.session_controller import SessionController
from situation.ui.core.session_state import SessionState
from tests.helpers import list_response, transport_failure


class ScriptedTerminal:
    """Replays keys, with None standing for a poll timeout, and records frames."""

    def __init__(self, keys: List[Optional[KeyEvent]]):
        self.keys = list(keys)
        self.frames: List[dict] = []
        self.poll_timeouts: List[int] = []

    def draw(self, state: SessionState) -> None:
        self.frames.append({
            "change_set": line_text(TopBar.change_set_trigger(state)[0]),
            "log_title": LogPanel.title(state),
            "details": [line_text(spans) for spans in ContentArea.render(state).lines][:1],
            "focus": state.focus,
        })

    def poll(self, timeout_ms: int) -> Optional[KeyEvent]:
        self.poll_timeouts.append(timeout_ms)
        if not self.keys:
            return KeyEvent.of("q")
        return self.keys.pop(0)


def keys(*names) -> List[Optional[KeyEvent]]:
    mapping = {
        "<enter>": KeyEvent(KeyCode.ENTER),
        "<esc>": KeyEvent(KeyCode.ESC),
        "<tab>": KeyEvent(KeyCode.TAB),
        "<up>": KeyEvent(KeyCode.UP),
        "<down>": KeyEvent(KeyCode.DOWN),
        "<left>": KeyEvent(KeyCode.LEFT),
        "<timeout>": None,
    }
    return [mapping[item] if item in mapping else KeyEvent.of(item) for item in names]


class TestSessionController:
    """Test complete sessions."""

    @pytest.mark.asyncio
    async def test_startup_then_quit(self, test_settings, fake_client):
        """Test the first frames show loading progress and the loaded selection."""
        terminal = ScriptedTerminal(keys("<timeout>", "q"))
        controller = SessionController(test_settings, fake_client, terminal)

        await controller.run()

        assert terminal.frames[0]["change_set"] == " Change Set: Select Change Set ▶ "
        assert terminal.frames[1]["log_title"] == "Logs (j/k: Scroll) - [Fetching identity...]"
        assert terminal.frames[-1]["change_set"] == " Change Set: a-name (Draft) ▶ "
        assert terminal.frames[-1]["details"] == ["Change Set: a-name (a)"]
        assert terminal.frames[-1]["log_title"] == "Logs (j/k: Scroll)"
        assert terminal.poll_timeouts == [100, 100]

    @pytest.mark.asyncio
    async def test_select_then_abandon(self, test_settings, fake_client):
        """Test selecting b from the dropdown, abandoning it and landing on a."""
        terminal = ScriptedTerminal(keys("<left>", "<enter>", "<down>", "<enter>", "d", "q"))
        fake_client.script(
            "list_change_sets",
            list_response("a:Draft", "b:Applied"),
            list_response("a:Draft"),
        )
        controller = SessionController(test_settings, fake_client, terminal)

        await controller.run()

        state = controller.state
        assert ("abandon_change_set", "ws-1", "b") in fake_client.calls
        assert state.selected_change_set_id == "a"
        assert state.change_set_detail.id == "a"
        assert state.merge_status.change_set.id == "a"
        assert any(frame["change_set"].startswith(" Change Set: b-name") for frame in terminal.frames)

    @pytest.mark.asyncio
    async def test_create_with_blank_name(self, test_settings, fake_client):
        """Test a blank name is rejected without calling the service."""
        terminal = ScriptedTerminal(keys("c", " ", " ", "<enter>", "q"))
        controller = SessionController(test_settings, fake_client, terminal)

        await controller.run()

        assert "create_change_set" not in fake_client.operations()
        assert controller.state.mode == Mode.NORMAL
        assert controller.state.log.lines[-1] == "Change set name cannot be empty."

    @pytest.mark.asyncio
    async def test_q_types_into_name(self, test_settings, fake_client):
        """Test q is text while typing a name and quits afterwards."""
        terminal = ScriptedTerminal(keys("c", "q", "<esc>", "<tab>", "q"))
        controller = SessionController(test_settings, fake_client, terminal)

        await controller.run()

        assert terminal.keys == []
        assert controller.state.focus == Focus.SCHEMA_LIST
        assert "Change set creation cancelled." in controller.state.log.lines

    @pytest.mark.asyncio
    async def test_identity_failure_keeps_running(self, test_settings, fake_client):
        """Test the loop still runs after the startup cascade fails."""
        fake_client.script("whoami", transport_failure())
        terminal = ScriptedTerminal(keys("d", "q"))
        controller = SessionController(test_settings, fake_client, terminal)

        await controller.run()

        assert fake_client.operations() == ["whoami"]
        assert controller.state.log.lines[-1] == "Cannot delete: No change set selected."


class TestEntryPoint:
    """Test the command line entry point."""

    def test_missing_configuration_exits_with_error(self, tmp_path, capsys):
        """Test missing credentials exit with status 1 before the terminal is used."""
        with patch.dict(os.environ, {}, clear=True):
            with patch("situation.__main__.curses.wrapper") as wrapper:
                status = main(["--env-file", str(tmp_path / "missing.env")])

        assert status == 1
        wrapper.assert_not_called()
        assert "SI_API" in capsys.readouterr().err

    def test_runs_session_in_curses(self, tmp_path, restore_root_logger):
        """Test valid configuration hands the session to curses."""
        env_file = tmp_path / "session.env"
        env_file.write_text("SI_API=http://localhost:5156\nJWT_TOKEN=token\n")

        with patch.dict(os.environ, {}, clear=True):
            with patch("situation.__main__.curses.wrapper") as wrapper:
                status = main(["--env-file", str(env_file), "--log-level", "DEBUG"])

        assert status == 0
        wrapper.assert_called_once()
        settings = wrapper.call_args.args[1]
        assert settings.service.api_url == "http://localhost:5156"
        assert settings.logging.level.value == "DEBUG"
