"""Command dispatch: routing, validation stages and fault containment.

`Dispatcher.execute` runs, in order, stopping at the first rejection:

1. routing to the sub-command named by the first argument(s)
2. the sender kind guard (player-only commands)
3. syntax validation (argument count)
4. the permission gate
5. the command logic, inside the only fault boundary

Each stage returns an `Outcome`; rejections are replied to the sender.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING

from ..chat import MessageFormatter, fill_placeholders
from ..logging_setup import get_logger
from ..models import CommandError, ExecutionFault, SenderKind, SenderKindError, UsageError
from ..permissions import NodePermissionPolicy
from .context import CallContext
from .models import closest_syntax
from .tree import descend
from .usage import format_missing, usage_line

if TYPE_CHECKING:
    from ..permissions import PermissionPolicy
    from ..senders import Sender
    from .node import Command

__all__ = ["CONTINUE", "Dispatcher", "Outcome", "default_dispatcher", "rejected"]

PLAYER_ONLY = "You must be a player to perform this command!"
INVALID_ARGUMENTS = "Invalid arguments! Missing: {0}. Try: {1}"
EXECUTION_FAULT = "Encountered an exception executing this command: &c{0}&4: &c{1}"


@dataclass(frozen=True)
class Outcome:
    """Result of a dispatch stage: continue, or rejected with an error."""

    error: CommandError | None = None

    @property
    def rejected(self) -> bool:
        return self.error is not None


CONTINUE = Outcome()


def rejected(error: CommandError) -> Outcome:
    """Build a rejection outcome."""
    return Outcome(error)


class Dispatcher:
    """Runs commands for senders.

    Args:
        policy: Resolves permission tokens (dotted nodes by default)
        formatter: Formats replies
        log: Receives one record per command fault
    """

    def __init__(
        self,
        policy: PermissionPolicy | None = None,
        formatter: MessageFormatter | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.policy: PermissionPolicy = policy or NodePermissionPolicy()
        self.formatter = formatter or MessageFormatter()
        self.log = log or get_logger("sworncmd.dispatch")

    # Stages

    def route(self, command: Command, args: Sequence[str]) -> tuple[Command, tuple[str, ...]]:
        """Select the command the arguments are meant for."""
        target, remaining = descend(command, args)
        if target is not command:
            self.log.debug("Routed %s to %s with %s", command.name, " ".join(target.path), remaining)
        return target, remaining

    def check_sender(self, command: Command, sender: Sender) -> Outcome:
        """Reject non-player senders of player-only commands."""
        if command.player_only and sender.kind != SenderKind.PLAYER:
            return rejected(SenderKindError(PLAYER_ONLY))
        return CONTINUE

    def check_syntax(self, command: Command, args: Sequence[str]) -> Outcome:
        """Accept the call if any syntax is satisfied by the argument count.

        Otherwise report the required arguments missing from the closest syntax.
        """
        count = len(args)
        syntaxes = command.syntaxes
        if any(syntax.accepts(count) for syntax in syntaxes):
            return CONTINUE
        syntax = closest_syntax(syntaxes, count)
        missing = syntax.missing(count)
        message = fill_placeholders(INVALID_ARGUMENTS, format_missing(missing), usage_line(command, syntax))
        return rejected(UsageError(message, syntax, missing))

    def check_gate(self, command: Command, sender: Sender) -> Outcome:
        """Reject senders the command is not visible to."""
        if command.is_visible_to(sender, self.policy):
            return CONTINUE
        return rejected(command.gate.denial(self.policy))

    def invoke(self, ctx: CallContext) -> Outcome:
        """Run the command logic; any exception it raises stops here."""
        try:
            ctx.command.perform(ctx)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.log.exception("Error executing command %s:", " ".join(ctx.command.path))
            message = fill_placeholders(EXECUTION_FAULT, type(e).__name__, e)
            return rejected(ExecutionFault(message, e))
        return CONTINUE

    # Entry point

    def execute(self, command: Command, sender: Sender, args: Sequence[str]) -> Outcome:
        """Run `command` for `sender`.

        Args:
            command: The command the sender typed
            sender: Who runs it; gets every reply
            args: Already tokenized arguments

        Returns:
            CONTINUE when the command logic ran to completion, the rejection otherwise
        """
        target, remaining = self.route(command, args)
        outcome = self.check_sender(target, sender)
        if not outcome.rejected:
            outcome = self.check_syntax(target, remaining)
        if not outcome.rejected:
            outcome = self.check_gate(target, sender)
        if not outcome.rejected:
            outcome = self.invoke(CallContext(target, sender, remaining, self))
        if outcome.error is not None:
            self.reply_error(sender, outcome.error)
        return outcome

    def reply_error(self, sender: Sender, error: CommandError) -> None:
        """Send `error` as one error line."""
        sender.send_message(self.formatter.error(error.message))


@cache
def default_dispatcher() -> Dispatcher:
    """Dispatcher used by commands that were never registered to a handler."""
    return Dispatcher()
