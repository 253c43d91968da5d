"""Niri adapter."""

from collections.abc import Sequence
from logging import Logger
from typing import Any, cast

from ..constants import REQUEST_WINDOWS, REQUEST_WORKSPACES, SHELL
from ..ipc import NiriSocket
from ..models import CompositorError, WindowInfo, WorkspaceInfo
from .backend import CompositorBackend


def niri_window_to_info(data: dict[str, Any]) -> WindowInfo:
    """Convert a niri window to WindowInfo.

    Args:
        data: Niri window data dictionary
    """
    return WindowInfo(
        id=data["id"],
        pid=data.get("pid"),
        app_id=data.get("app_id"),
        title=data.get("title"),
        workspace_id=data.get("workspace_id"),
        focused=bool(data.get("is_focused", False)),
    )


def niri_workspace_to_info(data: dict[str, Any]) -> WorkspaceInfo:
    """Convert a niri workspace to WorkspaceInfo.

    `is_hidden` is only reported by `WorkspacesWithHidden`, missing means not hidden.

    Args:
        data: Niri workspace data dictionary
    """
    return WorkspaceInfo(
        id=data["id"],
        hidden=bool(data.get("is_hidden", False)),
        focused=bool(data.get("is_focused", False)),
        name=data.get("name"),
        idx=data.get("idx"),
        output=data.get("output"),
    )


class NiriBackend(CompositorBackend):
    """Niri backend implementation, bound to one open connection."""

    def __init__(self, connection: NiriSocket) -> None:
        """Initialize the backend.

        Args:
            connection: open niri socket, see `niri_connection`
        """
        self.connection = connection

    async def _query(self, request: str, *, log: Logger) -> list[dict[str, Any]]:
        """Run a query and return the list it holds.

        Replies look like `{"Ok": {"Windows": [...]}}`, the variant name may differ from the request.
        """
        log.debug("query %s", request)
        reply = await self.connection.request(request)
        if isinstance(reply, dict) and len(reply) == 1:
            items = next(iter(reply.values()))
            if isinstance(items, list):
                return cast("list[dict[str, Any]]", items)
        msg = f"{request}: unexpected reply from niri: {reply!r}"
        raise CompositorError(msg)

    async def _action(self, name: str, params: dict[str, Any], *, log: Logger) -> None:
        """Run an action, niri answers `Handled` on success."""
        log.debug("action %s %s", name, params)
        await self.connection.request({"Action": {name: params}})

    async def list_windows(self, *, log: Logger) -> list[WindowInfo]:
        """Return every window.

        Args:
            log: Logger to use for this operation
        """
        try:
            return [niri_window_to_info(window) for window in await self._query(REQUEST_WINDOWS, log=log)]
        except (KeyError, TypeError) as e:
            msg = f"{REQUEST_WINDOWS}: malformed window in niri reply: {e!r}"
            raise CompositorError(msg) from e

    async def list_workspaces(self, *, log: Logger) -> list[WorkspaceInfo]:
        """Return every workspace, hidden ones included.

        Args:
            log: Logger to use for this operation
        """
        try:
            return [niri_workspace_to_info(workspace) for workspace in await self._query(REQUEST_WORKSPACES, log=log)]
        except (KeyError, TypeError) as e:
            msg = f"{REQUEST_WORKSPACES}: malformed workspace in niri reply: {e!r}"
            raise CompositorError(msg) from e

    async def focus(self, window_id: int, *, log: Logger) -> None:
        """Focus a window by ID.

        Args:
            window_id: Window ID
            log: Logger to use for this operation
        """
        await self._action("FocusWindow", {"id": window_id}, log=log)

    async def move_to_workspace(self, window_id: int, workspace_id: int, *, focus: bool = False, log: Logger) -> None:
        """Move a window to a workspace, referenced by its ID.

        Args:
            window_id: Window ID
            workspace_id: Target workspace ID
            focus: Whether niri follows the window
            log: Logger to use for this operation
        """
        await self._action(
            "MoveWindowToWorkspace",
            {"window_id": window_id, "reference": {"Id": workspace_id}, "focus": focus},
            log=log,
        )

    async def spawn(self, argv: Sequence[str], *, log: Logger) -> None:
        """Have niri run a program.

        Args:
            argv: Program and its arguments
            log: Logger to use for this operation
        """
        await self._action("Spawn", {"command": list(argv)}, log=log)

    async def spawn_shell(self, command: str, *, log: Logger) -> None:
        """Have niri run a command line through `sh -c`.

        Args:
            command: The command line
            log: Logger to use for this operation
        """
        await self.spawn([*SHELL, command], log=log)
