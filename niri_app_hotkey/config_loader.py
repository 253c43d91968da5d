"""Configuration file loading utilities.

This module reads the KDL configuration file and turns it into the raw
dictionary checked by `validation`, then into a `Configuration`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles
import kdl

from . import constants
from .config import Configuration
from .models import ConfigError
from .validation import _find_similar_key

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "kdl_to_dict", "resolve_config_path"]

APPLICATION_NODE = "application"

# child node name -> how its arguments / properties are stored
_SINGLE_ARG_NODES = frozenset({"spawn-sh"})
_ARGS_NODES = frozenset({"spawn"})
_RULE_NODES = frozenset({"match", "exclude"})


def resolve_config_path(config_filename: str = "") -> Path:
    """Return the path of the configuration file.

    Args:
        config_filename: explicit path (from `--config`), defaults to CONFIG_FILE
    """
    if config_filename:
        return Path(os.path.expandvars(config_filename)).expanduser()
    return constants.CONFIG_FILE


def _rule_props(node: kdl.Node) -> dict[str, Any]:
    """Return the properties of a rule node, integral numbers as `int`."""
    # kdl-py parses every number as float
    return {key: int(value) if isinstance(value, float) and value.is_integer() else value for key, value in node.props.items()}


def _application_to_dict(node: kdl.Node, log: logging.Logger) -> dict[str, Any]:
    """Convert an `application` node."""
    app: dict[str, Any] = {"name": node.args[0] if node.args else None, "match": [], "exclude": []}
    label = app["name"] if isinstance(app["name"], str) else APPLICATION_NODE
    for child in node.nodes:
        name = child.name
        if name in _RULE_NODES:
            app[name].append(_rule_props(child))
            continue
        if name in app and name != "name":
            log.warning("[%s] '%s' is set more than once, using the last one", label, name)
        if name in _ARGS_NODES:
            app[name] = list(child.args)
        elif name in _SINGLE_ARG_NODES:
            # several arguments are kept as a list, rejected by the validator
            app[name] = child.args[0] if len(child.args) == 1 else list(child.args)
        else:
            # unknown node, reported by the validator
            app[name] = list(child.args) or dict(child.props) or True
    return app


def kdl_to_dict(document: kdl.Document, log: logging.Logger) -> dict[str, Any]:
    """Convert a parsed KDL document into the raw configuration dictionary.

    Args:
        document: parsed KDL document
        log: Logger receiving warnings about unknown nodes
    """
    applications = []
    for node in document.nodes:
        if node.name == APPLICATION_NODE:
            applications.append(_application_to_dict(node, log))
            continue
        similar = _find_similar_key(node.name, [APPLICATION_NODE])
        if similar:
            log.warning("Unknown node '%s' (did you mean '%s'?)", node.name, similar)
        else:
            log.warning("Unknown node '%s' - will be ignored", node.name)
    return {"applications": applications}


class ConfigLoader:
    """Handles loading the configuration file."""

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log

    async def load_raw(self, config_filename: str = "") -> dict[str, Any]:
        """Read and parse the file, without validating it.

        Args:
            config_filename: Optional path, defaults to CONFIG_FILE

        Raises:
            ConfigError: If the file can't be read or has syntax errors.
        """
        fname = resolve_config_path(config_filename)
        self.log.info("Loading %s", fname)
        try:
            async with aiofiles.open(fname, encoding="utf-8") as f:
                text = await f.read()
        except FileNotFoundError as e:
            msg = f"Config file not found! Please create {fname}"
            raise ConfigError(msg) from e
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read config file at {fname}: {e}"
            raise ConfigError(msg) from e

        try:
            document = kdl.parse(text)
        except kdl.ParseError as e:
            msg = f"Failed to parse config file at {fname}: {e}"
            raise ConfigError(msg) from e
        return kdl_to_dict(document, self.log)

    async def load(self, config_filename: str = "") -> Configuration:
        """Load, validate and build the configuration.

        Args:
            config_filename: Optional path, defaults to CONFIG_FILE

        Raises:
            ConfigError: If the file can't be loaded or is invalid.
        """
        raw = await self.load_raw(config_filename)
        config = Configuration.from_dict(raw, self.log, source=f"config file {resolve_config_path(config_filename)}")
        self.log.debug("%d application(s) configured: %s", len(config), ", ".join(config.names))
        return config
