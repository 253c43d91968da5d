"""Configuration validation framework with schema definitions.

Provides declarative schema definitions (ConfigField, ConfigItems) for
validating the raw configuration data before it becomes a `Configuration`.
Supports type checking, required fields, custom validators and fuzzy
matching for typo detection.

The raw data shape is::

    {"applications": [
        {"name": "terminal",
         "spawn": ["alacritty"],          # or "spawn-sh": "alacritty -e tmux"
         "match": [{"app-id": "^Alacritty$", "index": 0}],
         "exclude": [{"title": "ssh"}]},
    ]}

Used by:
- Configuration.from_dict() when loading the config for a command
- `niri-app-hotkey validate` for static configuration checking
"""

import difflib
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = [
    "APPLICATION_SCHEMA",
    "EXCLUDE_RULE_SCHEMA",
    "MATCH_RULE_SCHEMA",
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "find_duplicate_names",
    "format_config_error",
    "validate_application",
    "validate_config",
]


@dataclass
class ConfigField:
    """Describes an expected configuration field for validation.

    Attributes:
        name: The configuration key name, as written in the config file
        field_type: Expected type (str, int, list)
        required: Whether the field is required
        description: Human-readable description for error messages
        example: How the field is written in the config file, used in suggestions
        validator: Custom validator function returning list of error messages
    """

    name: str
    field_type: type = str
    required: bool = False
    description: str = ""
    example: str = ""
    validator: Callable[[Any], list[str]] | None = None


class ConfigItems(list):
    """A list of ConfigField items with lookup by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def get(self, name: str) -> ConfigField | None:
        """Get a ConfigField by name.

        Args:
            name: The field name to look up
        """
        for prop in self:
            if prop.name == name:
                return prop
        return None

    @property
    def names(self) -> list[str]:
        """Names of every field."""
        return [prop.name for prop in self]


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Find a similar key using fuzzy matching.

    Args:
        unknown_key: The unknown key to find a match for
        known_keys: List of valid keys to search

    Returns:
        The closest matching key, or None if no close match found
    """
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Application name (or other section) holding the error
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


def _check_regex(value: str) -> list[str]:
    try:
        re.compile(value)
    except re.error as e:
        return [f"Invalid regular expression {value!r}: {e}"]
    return []


def _check_index(value: int) -> list[str]:
    if value < 0:
        return [f"Index must be zero or positive, got {value}"]
    return []


def _check_argv(value: list) -> list[str]:
    if not value:
        return ["Spawn command is empty"]
    if not all(isinstance(arg, str) for arg in value):
        return ["Spawn arguments must all be strings"]
    return []


_APP_ID = ConfigField(
    "app-id",
    str,
    description="Regex searched in the window's app-id",
    example='app-id="^firefox$"',
    validator=_check_regex,
)
_TITLE = ConfigField(
    "title",
    str,
    description="Regex searched in the window's title",
    example='title="Mozilla Firefox$"',
    validator=_check_regex,
)

MATCH_RULE_SCHEMA = ConfigItems(
    _APP_ID,
    _TITLE,
    ConfigField(
        "index",
        int,
        description="Keep only the n-th matching window, in pid order",
        example="index=0 (without quotes)",
        validator=_check_index,
    ),
)

EXCLUDE_RULE_SCHEMA = ConfigItems(_APP_ID, _TITLE)

APPLICATION_SCHEMA = ConfigItems(
    ConfigField("name", str, required=True, description="Name used on the command line", example='application "name" { ... }'),
    ConfigField(
        "spawn",
        list,
        description="Program and arguments to run",
        example='spawn "alacritty" "--class" "dropdown"',
        validator=_check_argv,
    ),
    ConfigField("spawn-sh", str, description="Command line passed to a shell", example='spawn-sh "alacritty -e tmux"'),
    ConfigField("match", list, required=True, description="Rules selecting the application windows", example='match app-id="^Alacritty$"'),
    ConfigField("exclude", list, description="Rules removing windows from the selection", example='exclude title="ssh"'),
)


class ConfigValidator:
    """Validates one configuration section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The configuration dictionary to validate
            section: Name of the section for error messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate configuration against schema.

        Args:
            schema: List of ConfigField definitions

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)

            if value is None:
                if field_def.required:
                    errors.append(
                        format_config_error(
                            self.section,
                            field_def.name,
                            "Missing required field",
                            f"Add {field_def.example}" if field_def.example else "",
                        )
                    )
                continue

            type_error = self._check_type(field_def, value)
            if type_error:
                errors.append(type_error)
                continue

            if field_def.validator:
                errors.extend(
                    format_config_error(self.section, field_def.name, validation_error) for validation_error in field_def.validator(value)
                )

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:  # noqa: ANN401
        """Check if value matches expected type.

        Returns:
            Error message if type mismatch, None otherwise
        """
        expected = field_def.field_type
        # bool is a subclass of int
        if isinstance(value, expected) and not (expected is int and isinstance(value, bool)):
            return None
        return format_config_error(
            self.section,
            field_def.name,
            f"Expected {expected.__name__}, got {type(value).__name__}",
            f"Use {field_def.example}" if field_def.example else "",
        )

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = schema.names

        for key in self.config:
            if key in known_keys:
                continue

            similar = _find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings


def _validate_rules(app_name: str, kind: str, rules: list, schema: ConfigItems, log: logging.Logger) -> tuple[list[str], list[str]]:
    """Validate each rule of a `match` or `exclude` list."""
    errors: list[str] = []
    warnings: list[str] = []
    for position, rule in enumerate(rules):
        label = f"{kind}[{position}]"
        if not isinstance(rule, dict):
            errors.append(format_config_error(app_name, label, f"Expected a rule, got {type(rule).__name__}"))
            continue
        validator = ConfigValidator(rule, f"{app_name}.{label}", log)
        errors.extend(validator.validate(schema))
        warnings.extend(validator.warn_unknown_keys(schema))
        if rule.get("app-id") is None and rule.get("title") is None:
            errors.append(
                format_config_error(app_name, label, "Rule has no pattern and would match every window", "Set app-id and/or title")
            )
    return errors, warnings


def validate_application(app: dict, log: logging.Logger) -> tuple[list[str], list[str]]:
    """Validate a single application entry.

    Args:
        app: raw application data
        log: Logger receiving warnings

    Returns:
        Tuple of (errors, warnings)
    """
    name = app.get("name")
    section = name if isinstance(name, str) and name else "application"
    validator = ConfigValidator(app, section, log)
    errors = validator.validate(APPLICATION_SCHEMA)
    warnings = validator.warn_unknown_keys(APPLICATION_SCHEMA)

    if name == "":
        errors.append(format_config_error(section, "name", "Application name is empty"))

    has_spawn = app.get("spawn") is not None
    has_spawn_sh = app.get("spawn-sh") is not None
    if has_spawn and has_spawn_sh:
        errors.append(format_config_error(section, "spawn", "Both spawn and spawn-sh are set", "Keep only one of them"))
    elif not (has_spawn or has_spawn_sh):
        errors.append(format_config_error(section, "spawn", "No spawn or spawn-sh command", "Add one of them"))

    matches = app.get("match")
    if isinstance(matches, list):
        if not matches:
            errors.append(format_config_error(section, "match", "At least one match rule is required"))
        rule_errors, rule_warnings = _validate_rules(section, "match", matches, MATCH_RULE_SCHEMA, log)
        errors.extend(rule_errors)
        warnings.extend(rule_warnings)
        indexed = [pos for pos, rule in enumerate(matches) if isinstance(rule, dict) and rule.get("index") is not None]
        if len(indexed) > 1:
            errors.append(
                format_config_error(
                    section,
                    "match",
                    f"Several match rules set an index (rules {', '.join(map(str, indexed))})",
                    "Set index on a single match rule",
                )
            )

    excludes = app.get("exclude")
    if isinstance(excludes, list):
        rule_errors, rule_warnings = _validate_rules(section, "exclude", excludes, EXCLUDE_RULE_SCHEMA, log)
        errors.extend(rule_errors)
        warnings.extend(rule_warnings)

    return errors, warnings


def find_duplicate_names(applications: list) -> list[str]:
    """Return an error for each application name used more than once."""
    errors = []
    seen: set[str] = set()
    for app in applications:
        name = app.get("name") if isinstance(app, dict) else None
        if not isinstance(name, str) or not name:
            continue
        if name in seen:
            errors.append(format_config_error(name, "name", "Duplicate application name", "Names must be unique"))
        seen.add(name)
    return errors


def validate_config(config: dict, log: logging.Logger) -> tuple[list[str], list[str]]:
    """Validate the whole raw configuration.

    Args:
        config: raw configuration, see module documentation
        log: Logger receiving warnings

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []
    applications = config.get("applications", [])
    if not isinstance(applications, list):
        return [format_config_error("config", "applications", f"Expected list, got {type(applications).__name__}")], []

    for app in applications:
        if not isinstance(app, dict):
            errors.append(format_config_error("config", "application", f"Expected a section, got {type(app).__name__}"))
            continue
        app_errors, app_warnings = validate_application(app, log)
        errors.extend(app_errors)
        warnings.extend(app_warnings)
    errors.extend(find_duplicate_names(applications))
    return errors, warnings
