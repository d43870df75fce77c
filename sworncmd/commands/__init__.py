"""Command handling for sworncmd.

This package provides:
- models: Argument and Syntax data structures
- builder: fluent declaration of syntax alternatives
- parsing: docstring, label and argument value parsing
- node: the Command node and the `command` decorator
- context: per-invocation CallContext
- dispatch: the Dispatcher (routing, validation, fault containment)
- usage: usage lines and rich help payloads
- tree: tree walking and lookups
"""

from .builder import SyntaxBuilder
from .context import CallContext
from .dispatch import CONTINUE, Dispatcher, Outcome
from .models import Argument, Syntax, closest_syntax
from .node import Command, FunctionCommand, command

__all__ = [
    "CONTINUE",
    "Argument",
    "CallContext",
    "Command",
    "Dispatcher",
    "FunctionCommand",
    "Outcome",
    "Syntax",
    "SyntaxBuilder",
    "closest_syntax",
    "command",
]
