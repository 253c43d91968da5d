"""CLI validation entry point for niri-app-hotkey configuration."""

import logging

from .config_loader import ConfigLoader, resolve_config_path
from .models import ExitCode
from .validation import find_duplicate_names, format_config_error, validate_application

__all__ = ["run_validate"]


def _silent_logger() -> logging.Logger:
    """Logger swallowing the validator warnings, which are printed instead."""
    silent_logger = logging.getLogger("niri_app_hotkey.validate.silent")
    silent_logger.handlers.clear()
    silent_logger.addHandler(logging.NullHandler())
    silent_logger.propagate = False
    return silent_logger


def _validate_entry(position: int, app: object, log: logging.Logger) -> tuple[int, int]:
    """Validate and report a single application.

    Returns:
        Tuple of (error_count, warning_count)
    """
    if not isinstance(app, dict):
        print(f"  ERROR: {format_config_error('config', f'application #{position}', 'Expected a section')}")
        return (1, 0)

    errors, warnings = validate_application(app, log)
    label = app.get("name") or f"application #{position}"
    if errors or warnings:
        print(f"  [{label}]")
        for error in errors:
            print(f"  ERROR: {error}")
        for warning in warnings:
            print(f"  WARNING: {warning}")
    else:
        print(f"✅ [{label}]")
    return (len(errors), len(warnings))


async def run_validate(config_filename: str, log: logging.Logger) -> ExitCode:
    """Validate the configuration file without contacting niri.

    Args:
        config_filename: path given with `--config`, empty for the default one
        log: Logger instance

    Returns:
        SUCCESS if the configuration is usable, CONFIG_ERROR otherwise
    """
    silent = _silent_logger()
    raw = await ConfigLoader(silent).load_raw(config_filename)
    applications = raw["applications"]
    log.info("Loaded config from %s", resolve_config_path(config_filename))

    print(f"Validating configuration for {len(applications)} application(s)...\n")

    total_errors = 0
    total_warnings = 0
    for position, app in enumerate(applications):
        errors, warnings = _validate_entry(position, app, silent)
        total_errors += errors
        total_warnings += warnings

    for duplicate in find_duplicate_names(applications):
        print(f"  ERROR: {duplicate}")
        total_errors += 1

    print()
    if total_errors:
        print(f"Found {total_errors} error(s) and {total_warnings} warning(s)")
        return ExitCode.CONFIG_ERROR
    if total_warnings:
        print(f"Found {total_warnings} warning(s)")
    else:
        print("Configuration is valid!")
    return ExitCode.SUCCESS
