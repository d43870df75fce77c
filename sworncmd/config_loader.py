"""Configuration file loading.

Reads the TOML file, validates the `[sworncmd]` section against its schema
and wraps it in a `Configuration`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from . import constants
from .config import Configuration
from .models import ConfigError
from .schema import SWORNCMD_CONFIG_SCHEMA
from .validation import ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["default_configuration", "load_configuration"]


def default_configuration(log: logging.Logger) -> Configuration:
    """Return a configuration holding only the schema defaults."""
    return Configuration(logger=log, schema=SWORNCMD_CONFIG_SCHEMA)


def _read_toml(fname: Path, log: logging.Logger) -> dict[str, Any]:
    log.info("Loading %s", fname)
    try:
        with fname.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        log.critical("Problem reading %s: %s", fname, e)
        msg = f"Invalid TOML in {fname}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Can't read {fname}: {e}"
        raise ConfigError(msg) from e


def load_configuration(log: logging.Logger, config_filename: str = "") -> Configuration:
    """Load and validate the configuration.

    Args:
        log: Logger for status and validation messages
        config_filename: Optional path; the default location is used when empty

    Returns:
        The `[sworncmd]` section, with schema defaults

    Raises:
        ConfigError: an explicit file is missing, unreadable or invalid
    """
    if config_filename:
        fname = Path(os.path.expandvars(config_filename)).expanduser()
        if not fname.exists():
            msg = f"Config file not found: {fname}"
            raise ConfigError(msg)
    else:
        fname = constants.CONFIG_FILE
        if not fname.exists():
            log.debug("No configuration at %s, using defaults", fname)
            return default_configuration(log)

    section = _read_toml(fname, log).get(constants.CONFIG_SECTION, {})
    if not isinstance(section, dict):
        msg = f"[{constants.CONFIG_SECTION}] must be a table in {fname}"
        raise ConfigError(msg)

    validator = ConfigValidator(section, constants.CONFIG_SECTION, log)
    errors = validator.validate(SWORNCMD_CONFIG_SCHEMA)
    validator.warn_unknown_keys(SWORNCMD_CONFIG_SCHEMA)
    if errors:
        for error in errors:
            log.error(error)
        raise ConfigError("\n".join(errors))

    return Configuration(section, logger=log, schema=SWORNCMD_CONFIG_SCHEMA)
