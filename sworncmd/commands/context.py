"""Per-invocation state handed to command logic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..models import SenderKind
from .parsing import to_bool, to_float, to_int

if TYPE_CHECKING:
    from ..chat import MessageFormatter, TextComponent
    from ..permissions import PermissionPolicy
    from ..senders import Sender
    from .dispatch import Dispatcher
    from .node import Command

__all__ = ["CallContext"]


@dataclass(frozen=True)
class CallContext:
    """One command invocation: who runs which command with what arguments.

    Built by the dispatcher once routing has selected the target command, so
    `args` never includes the sub-command labels.
    """

    command: Command
    sender: Sender
    args: tuple[str, ...]
    dispatcher: Dispatcher

    @property
    def is_player(self) -> bool:
        return self.sender.kind == SenderKind.PLAYER

    @property
    def player(self) -> Sender | None:
        """The sender when it is a player, None otherwise."""
        return self.sender if self.is_player else None

    @property
    def formatter(self) -> MessageFormatter:
        return self.dispatcher.formatter

    @property
    def policy(self) -> PermissionPolicy:
        return self.dispatcher.policy

    # Messaging

    def reply(self, message: str, *args: Any) -> None:  # noqa: ANN401
        """Send a regular message to the sender."""
        self.sender.send_message(self.formatter.info(message, *args))

    def reply_prefixed(self, message: str, *args: Any) -> None:  # noqa: ANN401
        """Send a regular message, preceded by the configured prefix."""
        self.sender.send_message(self.formatter.prefixed(message, *args))

    def err(self, message: str, *args: Any) -> None:  # noqa: ANN401
        """Send an error message to the sender."""
        self.sender.send_message(self.formatter.error(message, *args))

    def send_components(self, components: list[TextComponent]) -> None:
        """Send rich text to the sender."""
        self.sender.send_structured_message(components)

    # Arguments

    def arg(self, index: int, default: str | None = None) -> str | None:
        """Return the argument at `index`, or `default` when not supplied."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return default

    def arg_as_int(self, index: int, notify: bool = True) -> int | None:
        """Return the argument at `index` as an integer.

        Args:
            index: Argument position
            notify: Tell the sender when the argument isn't a number

        Returns:
            The number, or None if missing or invalid
        """
        return self._arg_as_number(index, to_int, notify)

    def arg_as_float(self, index: int, notify: bool = True) -> float | None:
        """Return the argument at `index` as a decimal number (see `arg_as_int`)."""
        return self._arg_as_number(index, to_float, notify)

    def _arg_as_number(self, index: int, convert: Any, notify: bool) -> Any:  # noqa: ANN401
        value = self.arg(index)
        if value is None:
            return None
        number = convert(value)
        if number is None and notify:
            self.err("&c{0} &4is not a number.", value)
        return number

    def arg_as_bool(self, index: int) -> bool:
        """Return the argument at `index` as a boolean, False if missing."""
        value = self.arg(index)
        return value is not None and to_bool(value)

    def final_arg(self, start: int) -> str:
        """Join the arguments from `start` to the end, e.g. for free-text reasons."""
        return " ".join(self.args[start:])

    @staticmethod
    def arg_matches_alias(arg: str, *aliases: str) -> bool:
        """Return True if `arg` equals one of `aliases`, ignoring case."""
        label = arg.lower()
        return any(label == alias.lower() for alias in aliases)

    # Permissions

    def has_permission(self, token: Any) -> bool:  # noqa: ANN401
        """Check an extra permission token for the sender."""
        return self.policy.resolve(self.sender, token)

    def permission_string(self, token: Any) -> str:  # noqa: ANN401
        return self.policy.describe(token)
