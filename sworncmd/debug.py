"""Process-wide debug switch."""

import os

__all__ = ["is_debug", "set_debug"]

_ENV_VARS = ("SWORNCMD_DEBUG", "DEBUG")


class _DebugState:
    """Holds the flag, so it can change without a global statement."""

    enabled: bool = any(os.environ.get(var) for var in _ENV_VARS)


def is_debug() -> bool:
    """Return True when debug logging is on."""
    return _DebugState.enabled


def set_debug(value: bool) -> None:
    """Switch debug logging on or off."""
    _DebugState.enabled = value
