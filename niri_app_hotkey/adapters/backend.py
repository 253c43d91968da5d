"""Backend adapter interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from logging import Logger

from ..models import WindowInfo, WorkspaceInfo


class CompositorBackend(ABC):
    """Abstract base class for compositor backends.

    Queries are read-only, actions are single-shot: any failure raises
    `CompositorError` and nothing is retried.
    All methods require a `log` parameter, letting the caller choose the logger.
    """

    @abstractmethod
    async def list_windows(self, *, log: Logger) -> list[WindowInfo]:
        """Return every window, in the order reported by the compositor.

        Args:
            log: Logger to use for this operation
        """

    @abstractmethod
    async def list_workspaces(self, *, log: Logger) -> list[WorkspaceInfo]:
        """Return every workspace, hidden ones included.

        Args:
            log: Logger to use for this operation
        """

    @abstractmethod
    async def focus(self, window_id: int, *, log: Logger) -> None:
        """Focus a window.

        Args:
            window_id: Window ID
            log: Logger to use for this operation
        """

    @abstractmethod
    async def move_to_workspace(self, window_id: int, workspace_id: int, *, focus: bool = False, log: Logger) -> None:
        """Move a window to a workspace.

        Args:
            window_id: Window ID
            workspace_id: Target workspace ID
            focus: Whether to follow the window
            log: Logger to use for this operation
        """

    @abstractmethod
    async def spawn(self, argv: Sequence[str], *, log: Logger) -> None:
        """Run a program without a shell.

        Args:
            argv: Program and its arguments
            log: Logger to use for this operation
        """

    @abstractmethod
    async def spawn_shell(self, command: str, *, log: Logger) -> None:
        """Run a command line through a shell.

        Args:
            command: The command line
            log: Logger to use for this operation
        """
