"""Common types: compositor data shapes, plans and errors."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, StrEnum

__all__ = [
    "Action",
    "ActionKind",
    "ActionPlan",
    "ApplicationNotFoundError",
    "Candidate",
    "CompositorError",
    "ConfigError",
    "ExitCode",
    "HotkeyCommand",
    "HotkeyError",
    "PreconditionError",
    "Visibility",
    "WindowInfo",
    "WorkspaceInfo",
]


@dataclass(frozen=True)
class WindowInfo:
    """Window information as returned by niri."""

    id: int
    pid: int | None = None
    app_id: str | None = None
    title: str | None = None
    workspace_id: int | None = None
    focused: bool = False


@dataclass(frozen=True)
class WorkspaceInfo:
    """Workspace information as returned by niri."""

    id: int
    hidden: bool = False
    focused: bool = False
    name: str | None = None
    idx: int | None = None
    output: str | None = None

    @property
    def label(self) -> str:
        """Return a human readable name for log messages."""
        return self.name or str(self.idx if self.idx is not None else self.id)


class Visibility(Enum):
    """Visibility state of a candidate window."""

    HIDDEN = "hidden"
    VISIBLE_UNFOCUSED = "visible-unfocused"
    VISIBLE_FOCUSED = "visible-focused"

    @property
    def visible(self) -> bool:
        """True for both visible states."""
        return self is not Visibility.HIDDEN


@dataclass(frozen=True)
class Candidate:
    """A window which survived filtering, tagged with its visibility."""

    window: WindowInfo
    visibility: Visibility

    @property
    def id(self) -> int:
        """Shortcut to the window id."""
        return self.window.id


class HotkeyCommand(StrEnum):
    """Commands operating on an application."""

    LAUNCH = "launch"
    SHOW = "show"
    HIDE = "hide"
    ACTIVATE = "activate"
    TOGGLE = "toggle"


class ActionKind(StrEnum):
    """Compositor verbs issued by a plan."""

    SPAWN = "spawn"
    SPAWN_SH = "spawn_sh"
    FOCUS = "focus"
    MOVE = "move"


@dataclass(frozen=True)
class Action:
    """A single compositor action."""

    kind: ActionKind
    window_id: int | None = None
    workspace_id: int | None = None
    argv: tuple[str, ...] = ()
    shell_command: str = ""
    focus: bool = False

    def __str__(self) -> str:
        match self.kind:
            case ActionKind.SPAWN:
                return f"spawn {' '.join(self.argv)}"
            case ActionKind.SPAWN_SH:
                return f"spawn-sh {self.shell_command}"
            case ActionKind.FOCUS:
                return f"focus window {self.window_id}"
            case _:
                return f"move window {self.window_id} to workspace {self.workspace_id}"


@dataclass(frozen=True)
class ActionPlan:
    """Resolved actions for one invocation.

    `decision` is the command actually applied: `toggle` resolves to one of the others.
    """

    decision: HotkeyCommand
    actions: tuple[Action, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.actions)

    def __len__(self) -> int:
        return len(self.actions)


# Exit codes for the CLI
class ExitCode(IntEnum):
    """Standard exit codes for niri-app-hotkey."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Invalid arguments
    CONFIG_ERROR = 2  # Missing, unparsable or invalid configuration
    LOOKUP_ERROR = 3  # Unknown application name
    PRECONDITION_ERROR = 4  # No hidden (or active) workspace
    COMPOSITOR_ERROR = 5  # Cannot talk to niri or an action failed


class HotkeyError(Exception):
    """Base class for errors reported to the user."""

    exit_code: ExitCode = ExitCode.USAGE_ERROR


class ConfigError(HotkeyError):
    """The configuration file is missing, unparsable or invalid."""

    exit_code = ExitCode.CONFIG_ERROR

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        if self.errors:
            message = "\n".join([message, *(f"  {error}" for error in self.errors)])
        super().__init__(message)


class ApplicationNotFoundError(HotkeyError):
    """The application name is not configured."""

    exit_code = ExitCode.LOOKUP_ERROR


class PreconditionError(HotkeyError):
    """The compositor state does not allow the requested command."""

    exit_code = ExitCode.PRECONDITION_ERROR


class CompositorError(HotkeyError):
    """Connection, protocol or action failure when talking to niri."""

    exit_code = ExitCode.COMPOSITOR_ERROR
