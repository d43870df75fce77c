"""sworncmd - declarative, hierarchical chat command dispatch.

Hosts declare commands (name, aliases, permission, visibility, argument
syntaxes, sub-commands) and feed typed command lines to a `CommandHandler`;
routing, argument count checks, permission gating, fault containment and
usage help come for free.
"""

from .commands import Argument, CallContext, Command, Syntax, command
from .handler import CommandHandler
from .models import SenderKind, Visibility

__all__ = [
    "Argument",
    "CallContext",
    "Command",
    "CommandHandler",
    "SenderKind",
    "Syntax",
    "Visibility",
    "command",
]
