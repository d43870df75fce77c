"""Command handler: the registry a host feeds with typed command lines."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .chat import MessageFormatter
from .commands.dispatch import Dispatcher
from .commands.parsing import normalize_command_name
from .commands.tree import find_root
from .config_loader import default_configuration
from .help import HelpCommand
from .logging_setup import get_logger
from .models import RegistrationError
from .permissions import NodePermissionPolicy

if TYPE_CHECKING:
    from .commands.node import Command
    from .config import Configuration
    from .permissions import PermissionPolicy
    from .senders import Sender

__all__ = ["CommandHandler"]

UNKNOWN_COMMAND = 'Unknown command "{0}". Try "{1}" for a list of commands.'


class CommandHandler:
    """Registers root commands and dispatches typed command lines.

    When the configuration sets a global `prefix`, commands using it are
    reached as `/<prefix> <command>`; the others stay top-level labels.
    """

    def __init__(
        self,
        config: Configuration | None = None,
        policy: PermissionPolicy | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.log = log or get_logger("sworncmd.handler")
        self.config = config if config is not None else default_configuration(self.log)
        self.policy: PermissionPolicy = policy or NodePermissionPolicy(self.config.get_str("permission_prefix"))
        self.formatter = MessageFormatter(self.config.get_str("message_prefix"))
        self.dispatcher = Dispatcher(self.policy, self.formatter, get_logger("sworncmd.dispatch"))
        self.commands: list[Command] = []
        self.prefixed_commands: list[Command] = []
        self.help_command: HelpCommand | None = None

    @property
    def command_prefix(self) -> str:
        return self.config.get_str("prefix").strip()

    @property
    def uses_command_prefix(self) -> bool:
        return bool(self.command_prefix)

    @property
    def registered_commands(self) -> list[Command]:
        """Every root command, top-level ones first."""
        return self.commands + self.prefixed_commands

    def register(self, command: Command) -> Command:
        """Register a root command.

        Raises:
            RegistrationError: the command is a sub-command, or a label is taken
        """
        if not command.is_root:
            msg = f"{command!r} is a sub-command, register its root instead"
            raise RegistrationError(msg)
        prefixed = self.uses_command_prefix and command.uses_prefix
        scope = self.prefixed_commands if prefixed else self.commands
        taken = {label for other in scope for label in other.identifiers}
        if not prefixed and self.uses_command_prefix:
            taken.add(normalize_command_name(self.command_prefix))
        clashes = taken.intersection(command.identifiers)
        if clashes:
            msg = f"Command label already registered: {', '.join(sorted(clashes))}"
            raise RegistrationError(msg)

        command.dispatcher = self.dispatcher
        command.prefix = self.command_prefix if prefixed else ""
        scope.append(command)
        self.log.debug("Registered command %s%s", f"{command.prefix} " if prefixed else "", command.name)
        return command

    def register_help(self) -> HelpCommand:
        """Register the built-in help command."""
        self.help_command = HelpCommand(self)
        self.register(self.help_command)
        return self.help_command

    def get_command(self, label: str) -> Command | None:
        """Find a registered root command by name or alias."""
        return find_root(self.registered_commands, label)

    def help_hint(self) -> str:
        """Command line to suggest for the command list."""
        prefix = self.help_command.prefix if self.help_command else ""
        return f"/{prefix} help" if prefix else "/help"

    def dispatch(self, sender: Sender, label: str, args: Sequence[str] = ()) -> bool:
        """Dispatch a command typed by `sender`.

        Args:
            sender: Who typed the command
            label: The first word, without the slash
            args: The following words

        Returns:
            True if a command was found for the label
        """
        args = list(args)
        if self.uses_command_prefix and normalize_command_name(label) == normalize_command_name(self.command_prefix):
            if not args:
                if self.help_command is None:
                    self._unknown(sender, label)
                    return False
                self.help_command.execute(sender, [])
                return True
            command = find_root(self.prefixed_commands, args[0])
            if command is None:
                self._unknown(sender, f"{label} {args[0]}")
                return False
            command.execute(sender, args[1:])
            return True

        command = find_root(self.commands, label)
        if command is None:
            self._unknown(sender, label)
            return False
        command.execute(sender, args)
        return True

    def dispatch_line(self, sender: Sender, line: str) -> bool:
        """Tokenize a full command line (quotes group words) and dispatch it."""
        try:
            tokens = shlex.split(line.strip().removeprefix("/"))
        except ValueError as e:
            sender.send_message(self.formatter.error("Can't parse command: &c{0}", e))
            return False
        if not tokens:
            return False
        return self.dispatch(sender, tokens[0], tokens[1:])

    def _unknown(self, sender: Sender, label: str) -> None:
        self.log.debug("Unknown command: %s", label)
        sender.send_message(self.formatter.error(UNKNOWN_COMMAND, label, self.help_hint()))
