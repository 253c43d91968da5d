"""Action orchestrator: from a command and the candidates to compositor actions.

`plan()` is pure: it only looks at the classified candidates and workspaces.
`execute()` issues the planned actions one by one, stopping at the first failure.
`run_command()` chains a fresh query, matching, classification, planning and execution.

Toggle picks a single behavior for the whole candidate set, by priority:

- no candidate: launch
- any visible & focused: hide the focused ones
- any hidden: show the hidden ones
- otherwise: activate
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from .matching import filter_windows
from .models import Action, ActionKind, ActionPlan, Candidate, CompositorError, HotkeyCommand, PreconditionError, Visibility, WorkspaceInfo
from .visibility import classify_all, find_active_workspace, find_hidden_workspace

if TYPE_CHECKING:
    from logging import Logger

    from .adapters.backend import CompositorBackend
    from .config import ApplicationConfig

__all__ = ["execute", "plan", "run_command"]


def _expand_home(argv: Sequence[str]) -> tuple[str, ...]:
    """Expand `~` in the program path."""
    if not argv:
        return ()
    return (os.path.expanduser(argv[0]), *argv[1:])


def _plan_launch(app: ApplicationConfig, _candidates: Sequence[Candidate], _workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    if app.spawn is not None:
        action = Action(ActionKind.SPAWN, argv=_expand_home(app.spawn))
    elif app.spawn_sh is not None:
        action = Action(ActionKind.SPAWN_SH, shell_command=app.spawn_sh)
    else:
        msg = f"No spawn or spawn-sh command specified for application {app.name}"
        raise PreconditionError(msg)
    return ActionPlan(HotkeyCommand.LAUNCH, (action,))


def _plan_show(app: ApplicationConfig, candidates: Sequence[Candidate], workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    hidden = [c for c in candidates if c.visibility is Visibility.HIDDEN]
    if not hidden:
        return ActionPlan(HotkeyCommand.SHOW)
    active = find_active_workspace(workspaces)
    if active is None:
        msg = f"Can't show {app.name}: no focused workspace to bring it to"
        raise PreconditionError(msg)
    actions: list[Action] = []
    for candidate in hidden:
        actions.append(Action(ActionKind.MOVE, window_id=candidate.id, workspace_id=active.id, focus=True))
        actions.append(Action(ActionKind.FOCUS, window_id=candidate.id))
    return ActionPlan(HotkeyCommand.SHOW, tuple(actions))


def _hide(app: ApplicationConfig, targets: Sequence[Candidate], workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    hidden_workspace = find_hidden_workspace(workspaces)
    if hidden_workspace is None:
        msg = f"Can't hide {app.name}: no hidden workspace. Flag one workspace as hidden in the niri configuration"
        raise PreconditionError(msg)
    return ActionPlan(
        HotkeyCommand.HIDE,
        tuple(Action(ActionKind.MOVE, window_id=c.id, workspace_id=hidden_workspace.id) for c in targets),
    )


def _plan_hide(app: ApplicationConfig, candidates: Sequence[Candidate], workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    return _hide(app, [c for c in candidates if c.visibility.visible], workspaces)


def _plan_activate(_app: ApplicationConfig, candidates: Sequence[Candidate], _workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    return ActionPlan(
        HotkeyCommand.ACTIVATE,
        tuple(Action(ActionKind.FOCUS, window_id=c.id) for c in candidates if c.visibility.visible),
    )


def _plan_toggle(app: ApplicationConfig, candidates: Sequence[Candidate], workspaces: Sequence[WorkspaceInfo]) -> ActionPlan:
    if not candidates:
        return _plan_launch(app, candidates, workspaces)
    focused = [c for c in candidates if c.visibility is Visibility.VISIBLE_FOCUSED]
    if focused:
        return _hide(app, focused, workspaces)
    if any(c.visibility is Visibility.HIDDEN for c in candidates):
        return _plan_show(app, candidates, workspaces)
    return _plan_activate(app, candidates, workspaces)


_PLANNERS: dict[HotkeyCommand, Callable[[ApplicationConfig, Sequence[Candidate], Sequence[WorkspaceInfo]], ActionPlan]] = {
    HotkeyCommand.LAUNCH: _plan_launch,
    HotkeyCommand.SHOW: _plan_show,
    HotkeyCommand.HIDE: _plan_hide,
    HotkeyCommand.ACTIVATE: _plan_activate,
    HotkeyCommand.TOGGLE: _plan_toggle,
}


def plan(
    command: HotkeyCommand,
    app: ApplicationConfig,
    candidates: Sequence[Candidate],
    workspaces: Sequence[WorkspaceInfo],
) -> ActionPlan:
    """Compute the actions for `command`.

    Args:
        command: the requested command
        app: the target application
        candidates: filtered candidates with their visibility, in pid order
        workspaces: every workspace, in compositor order

    Raises:
        PreconditionError: hiding without a hidden workspace, or showing without a focused one
    """
    return _PLANNERS[command](app, candidates, workspaces)


async def _issue(action: Action, backend: CompositorBackend, log: Logger) -> None:
    match action.kind:
        case ActionKind.SPAWN:
            await backend.spawn(action.argv, log=log)
        case ActionKind.SPAWN_SH:
            await backend.spawn_shell(action.shell_command, log=log)
        case ActionKind.FOCUS:
            assert action.window_id is not None
            await backend.focus(action.window_id, log=log)
        case ActionKind.MOVE:
            assert action.window_id is not None and action.workspace_id is not None
            await backend.move_to_workspace(action.window_id, action.workspace_id, focus=action.focus, log=log)


async def execute(action_plan: ActionPlan, backend: CompositorBackend, log: Logger) -> None:
    """Issue the actions in order, without retry.

    Raises:
        CompositorError: at the first failing action, later ones are not issued
    """
    total = len(action_plan)
    for done, action in enumerate(action_plan.actions):
        log.info("%s", action)
        try:
            await _issue(action, backend, log)
        except CompositorError:
            if done:
                log.error("%s failed after %d of %d action(s) were applied", action_plan.decision, done, total)
            raise


async def run_command(command: HotkeyCommand, app: ApplicationConfig, backend: CompositorBackend, log: Logger) -> ActionPlan:
    """Run one decision cycle for `app` and return the executed plan.

    Launch doesn't look at the windows, every other command queries them once.
    """
    if command is HotkeyCommand.LAUNCH:
        candidates: list[Candidate] = []
        workspaces: list[WorkspaceInfo] = []
    else:
        windows = await backend.list_windows(log=log)
        workspaces = await backend.list_workspaces(log=log)
        candidates = classify_all(filter_windows(windows, app, log), workspaces)
        hidden_workspace = find_hidden_workspace(workspaces)
        active_workspace = find_active_workspace(workspaces)
        log.debug(
            "hidden workspace: %s, focused workspace: %s",
            hidden_workspace.label if hidden_workspace else "none",
            active_workspace.label if active_workspace else "none",
        )
        for candidate in candidates:
            log.debug("candidate %s (pid %s, %s): %s", candidate.id, candidate.window.pid, candidate.window.app_id, candidate.visibility.value)

    action_plan = plan(command, app, candidates, workspaces)
    if command is not action_plan.decision:
        log.info("%s %s resolved to %s", command, app.name, action_plan.decision)
    if not action_plan:
        log.info("%s %s: nothing to do", action_plan.decision, app.name)
        return action_plan
    await execute(action_plan, backend, log)
    return action_plan
