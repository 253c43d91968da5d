"""Visibility classification of candidate windows."""

__all__ = ["classify", "classify_all", "find_active_workspace", "find_hidden_workspace"]

from collections.abc import Iterable, Sequence

from .models import Candidate, Visibility, WindowInfo, WorkspaceInfo


def classify(window: WindowInfo, workspaces: Iterable[WorkspaceInfo]) -> Visibility:
    """Return the visibility of `window`.

    A window on a hidden workspace is hidden, even if niri reports it focused.
    An unknown workspace counts as a regular one, and its windows as unfocused.
    """
    workspace = next((ws for ws in workspaces if ws.id == window.workspace_id), None)
    if workspace is None:
        return Visibility.VISIBLE_UNFOCUSED
    if workspace.hidden:
        return Visibility.HIDDEN
    return Visibility.VISIBLE_FOCUSED if window.focused else Visibility.VISIBLE_UNFOCUSED


def classify_all(windows: Iterable[WindowInfo], workspaces: Sequence[WorkspaceInfo]) -> list[Candidate]:
    """Tag each window with its visibility, keeping the order."""
    return [Candidate(window, classify(window, workspaces)) for window in windows]


def find_hidden_workspace(workspaces: Iterable[WorkspaceInfo]) -> WorkspaceInfo | None:
    """Return the first hidden workspace."""
    return next((ws for ws in workspaces if ws.hidden), None)


def find_active_workspace(workspaces: Iterable[WorkspaceInfo]) -> WorkspaceInfo | None:
    """Return the focused workspace, unless it is a hidden one."""
    return next((ws for ws in workspaces if ws.focused and not ws.hidden), None)
