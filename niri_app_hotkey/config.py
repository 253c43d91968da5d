"""Configuration model: applications and their window rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .models import ApplicationNotFoundError, ConfigError
from .validation import validate_config

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

__all__ = ["ApplicationConfig", "Configuration", "ExcludeRule", "MatchRule", "WindowRule"]


@dataclass(frozen=True)
class WindowRule:
    """Patterns a window must satisfy, all of them when several are set."""

    app_id: re.Pattern[str] | None = None
    title: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        if self.app_id is None and self.title is None:
            msg = "A window rule needs an app-id or a title pattern"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> WindowRule:  # noqa: ANN401
        """Build a rule from validated raw data, compiling the patterns."""
        app_id = data.get("app-id")
        title = data.get("title")
        return cls(
            app_id=re.compile(app_id) if app_id is not None else None,
            title=re.compile(title) if title is not None else None,
            **kwargs,
        )

    def __str__(self) -> str:
        parts = []
        if self.app_id is not None:
            parts.append(f"app-id={self.app_id.pattern!r}")
        if self.title is not None:
            parts.append(f"title={self.title.pattern!r}")
        return " ".join(parts)


@dataclass(frozen=True)
class MatchRule(WindowRule):
    """Rule selecting windows; `index` narrows the final candidate list."""

    index: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> MatchRule:  # noqa: ANN401
        return super().from_dict(data, index=data.get("index"), **kwargs)  # type: ignore[return-value]


@dataclass(frozen=True)
class ExcludeRule(WindowRule):
    """Rule removing windows from the selection."""


@dataclass(frozen=True)
class ApplicationConfig:
    """An application: how to start it and how to find its windows."""

    name: str
    match_rules: tuple[MatchRule, ...]
    exclude_rules: tuple[ExcludeRule, ...] = ()
    spawn: tuple[str, ...] | None = None
    spawn_sh: str | None = None

    @property
    def index(self) -> int | None:
        """The index set on a match rule, if any."""
        return next((rule.index for rule in self.match_rules if rule.index is not None), None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApplicationConfig:
        """Build an application from validated raw data."""
        spawn = data.get("spawn")
        return cls(
            name=data["name"],
            match_rules=tuple(MatchRule.from_dict(rule) for rule in data["match"]),
            exclude_rules=tuple(ExcludeRule.from_dict(rule) for rule in data.get("exclude") or ()),
            spawn=tuple(spawn) if spawn is not None else None,
            spawn_sh=data.get("spawn-sh"),
        )


class Configuration:
    """Validated configuration, indexed by application name."""

    def __init__(self, applications: Iterable[ApplicationConfig] = ()) -> None:
        self._applications: dict[str, ApplicationConfig] = {}
        for app in applications:
            self._applications[app.name] = app

    @classmethod
    def from_dict(cls, data: dict[str, Any], log: logging.Logger, source: str = "configuration") -> Configuration:
        """Validate raw data and build the configuration.

        Args:
            data: raw configuration (see `validation`)
            log: Logger receiving warnings
            source: where the data comes from, for the error message

        Raises:
            ConfigError: listing every validation error
        """
        errors, _warnings = validate_config(data, log)
        if errors:
            msg = f"Invalid {source}"
            raise ConfigError(msg, errors)
        return cls(ApplicationConfig.from_dict(app) for app in data.get("applications", []))

    def find_application(self, name: str) -> ApplicationConfig:
        """Return the application called `name` (case-sensitive).

        Raises:
            ApplicationNotFoundError: if no such application is configured
        """
        try:
            return self._applications[name]
        except KeyError:
            msg = f"Application with name '{name}' not found in configuration."
            raise ApplicationNotFoundError(msg) from None

    @property
    def names(self) -> list[str]:
        """Configured application names, in declaration order."""
        return list(self._applications)

    def __len__(self) -> int:
        return len(self._applications)
