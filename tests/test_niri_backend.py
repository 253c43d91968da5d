from unittest.mock import AsyncMock, Mock

import pytest

from niri_app_hotkey.adapters.niri import NiriBackend, niri_window_to_info, niri_workspace_to_info
from niri_app_hotkey.models import CompositorError, WindowInfo, WorkspaceInfo

NIRI_WINDOW = {
    "id": 12,
    "title": "~ - fish",
    "app_id": "Alacritty",
    "pid": 4242,
    "workspace_id": 3,
    "is_focused": True,
    "is_floating": False,
    "is_urgent": False,
}

NIRI_WORKSPACE = {
    "id": 3,
    "idx": 1,
    "name": None,
    "output": "eDP-1",
    "is_urgent": False,
    "is_active": True,
    "is_focused": True,
    "is_hidden": False,
    "active_window_id": 12,
}


@pytest.fixture
def connection():
    conn = Mock()
    conn.request = AsyncMock(return_value="Handled")
    return conn


@pytest.fixture
def backend(connection):
    return NiriBackend(connection)


def test_window_mapping():
    assert niri_window_to_info(NIRI_WINDOW) == WindowInfo(
        id=12, pid=4242, app_id="Alacritty", title="~ - fish", workspace_id=3, focused=True
    )


def test_window_mapping_nulls():
    info = niri_window_to_info({"id": 1, "pid": None, "app_id": None, "title": None, "workspace_id": None, "is_focused": False})
    assert info == WindowInfo(id=1)


def test_workspace_mapping():
    assert niri_workspace_to_info(NIRI_WORKSPACE) == WorkspaceInfo(id=3, hidden=False, focused=True, idx=1, output="eDP-1")


def test_workspace_mapping_without_hidden_flag():
    assert not niri_workspace_to_info({"id": 4, "is_focused": False}).hidden


class TestQueries:
    """Windows and WorkspacesWithHidden requests."""

    @pytest.mark.asyncio
    async def test_list_windows(self, backend, connection, test_logger):
        connection.request.return_value = {"Windows": [NIRI_WINDOW, {**NIRI_WINDOW, "id": 13, "is_focused": False}]}
        windows = await backend.list_windows(log=test_logger)
        connection.request.assert_awaited_once_with("Windows")
        assert [w.id for w in windows] == [12, 13]

    @pytest.mark.asyncio
    async def test_list_workspaces(self, backend, connection, test_logger):
        hidden = {**NIRI_WORKSPACE, "id": 9, "idx": 2, "name": "hidden", "is_focused": False, "is_hidden": True}
        connection.request.return_value = {"Workspaces": [NIRI_WORKSPACE, hidden]}
        spaces = await backend.list_workspaces(log=test_logger)
        connection.request.assert_awaited_once_with("WorkspacesWithHidden")
        assert [(ws.id, ws.hidden) for ws in spaces] == [(3, False), (9, True)]

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, backend, connection, test_logger):
        connection.request.return_value = "Handled"
        with pytest.raises(CompositorError, match="unexpected reply"):
            await backend.list_windows(log=test_logger)

    @pytest.mark.asyncio
    async def test_malformed_window(self, backend, connection, test_logger):
        connection.request.return_value = {"Windows": [{"title": "no id"}]}
        with pytest.raises(CompositorError, match="malformed window"):
            await backend.list_windows(log=test_logger)

    @pytest.mark.asyncio
    async def test_malformed_workspace(self, backend, connection, test_logger):
        connection.request.return_value = {"Workspaces": ["oops"]}
        with pytest.raises(CompositorError, match="malformed workspace"):
            await backend.list_workspaces(log=test_logger)

    @pytest.mark.asyncio
    async def test_error_propagates(self, backend, connection, test_logger):
        connection.request.side_effect = CompositorError("Windows: niri closed the connection")
        with pytest.raises(CompositorError, match="closed"):
            await backend.list_windows(log=test_logger)


class TestActions:
    """Action payloads sent to niri."""

    @pytest.mark.asyncio
    async def test_focus(self, backend, connection, test_logger):
        await backend.focus(12, log=test_logger)
        connection.request.assert_awaited_once_with({"Action": {"FocusWindow": {"id": 12}}})

    @pytest.mark.asyncio
    async def test_move(self, backend, connection, test_logger):
        await backend.move_to_workspace(12, 9, log=test_logger)
        connection.request.assert_awaited_once_with(
            {"Action": {"MoveWindowToWorkspace": {"window_id": 12, "reference": {"Id": 9}, "focus": False}}}
        )

    @pytest.mark.asyncio
    async def test_move_and_follow(self, backend, connection, test_logger):
        await backend.move_to_workspace(12, 3, focus=True, log=test_logger)
        payload = connection.request.call_args.args[0]
        assert payload["Action"]["MoveWindowToWorkspace"]["focus"] is True

    @pytest.mark.asyncio
    async def test_spawn(self, backend, connection, test_logger):
        await backend.spawn(("alacritty", "--class", "dropdown"), log=test_logger)
        connection.request.assert_awaited_once_with({"Action": {"Spawn": {"command": ["alacritty", "--class", "dropdown"]}}})

    @pytest.mark.asyncio
    async def test_spawn_shell(self, backend, connection, test_logger):
        await backend.spawn_shell("firefox --new-window && notify-send done", log=test_logger)
        connection.request.assert_awaited_once_with(
            {"Action": {"Spawn": {"command": ["sh", "-c", "firefox --new-window && notify-send done"]}}}
        )

    @pytest.mark.asyncio
    async def test_action_error(self, backend, connection, test_logger):
        connection.request.side_effect = CompositorError("Action FocusWindow: niri replied with an error: no window")
        with pytest.raises(CompositorError):
            await backend.focus(99, log=test_logger)
