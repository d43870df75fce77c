"""Shared enums and the error taxonomy."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .commands.models import Argument, Syntax

__all__ = [
    "CommandError",
    "ConfigError",
    "ExecutionFault",
    "ExitCode",
    "PermissionDenied",
    "RegistrationError",
    "SenderKind",
    "SenderKindError",
    "SworncmdError",
    "UsageError",
    "Visibility",
]


class Visibility(Enum):
    """Who may see and use a command."""

    ALL = "all"
    PERMISSION = "permission"
    OPS = "ops"
    NONE = "none"


class SenderKind(Enum):
    """Kind of actor invoking a command, used for guards and display naming."""

    PLAYER = "player"
    CONSOLE = "console"
    SCRIPTED = "scripted"


class ExitCode(IntEnum):
    """Exit codes for the console host."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Bad command line
    CONFIG_ERROR = 2  # Unreadable or invalid configuration


class SworncmdError(Exception):
    """Base class for every error raised by sworncmd."""


class RegistrationError(SworncmdError, ValueError):
    """A command tree was declared incorrectly (duplicate identifiers, empty names...)."""


class ConfigError(SworncmdError):
    """The configuration file can't be read or doesn't validate."""


class CommandError(SworncmdError):
    """A rejection replied to the sender instead of running the command.

    `message` holds the reply text, in inline markup, without the error header.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(CommandError):
    """The supplied arguments match no declared syntax."""

    def __init__(self, message: str, syntax: Syntax, missing: list[Argument]) -> None:
        super().__init__(message)
        self.syntax = syntax
        self.missing = missing


class PermissionDenied(CommandError):
    """The command gate denied the sender."""

    def __init__(self, message: str, permission_string: str | None = None) -> None:
        super().__init__(message)
        self.permission_string = permission_string


class SenderKindError(CommandError):
    """A player-only command was run by another kind of sender."""


class ExecutionFault(CommandError):
    """The command logic raised; wraps the original exception."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(message)
        self.cause = cause
