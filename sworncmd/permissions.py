"""Permission gate: decides who may see and use a command.

The permission token attached to a command is opaque to the dispatcher: a
`PermissionPolicy` resolves it for a sender and describes it for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from .chat import fill_placeholders
from .models import PermissionDenied, Visibility

if TYPE_CHECKING:
    from .senders import Sender

__all__ = [
    "GENERIC_DENIAL",
    "PERMISSION_DENIAL",
    "Gate",
    "NodePermissionPolicy",
    "PermissionPolicy",
]

PERMISSION_DENIAL = 'You must have the permission "&c{0}&4" to perform this command!'
GENERIC_DENIAL = "You do not have permission to perform this command!"


class PermissionPolicy(Protocol):
    """Resolves opaque permission tokens."""

    def resolve(self, sender: Sender, token: Any) -> bool:  # noqa: ANN401
        """Return True if `sender` holds `token`."""

    def describe(self, token: Any) -> str:  # noqa: ANN401
        """Return the display string of `token`."""


class NodePermissionPolicy:
    """Maps tokens to dotted permission nodes checked on the sender.

    Tokens may be strings or enum members (their value is used). With
    `prefix="sworn"`, the token `"cmd.kick"` becomes `sworn.cmd.kick`.
    """

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def describe(self, token: Any) -> str:  # noqa: ANN401
        value = token.value if isinstance(token, Enum) else token
        node = str(value).lower()
        if self.prefix:
            return f"{self.prefix.lower()}.{node}"
        return node

    def resolve(self, sender: Sender, token: Any) -> bool:  # noqa: ANN401
        if token is None:
            return True
        return sender.has_permission(self.describe(token))


@dataclass(frozen=True)
class Gate:
    """Visibility policy of a command, plus an optional permission token."""

    visibility: Visibility = Visibility.ALL
    permission: Any = None

    @classmethod
    def for_permission(cls, permission: Any = None, visibility: Visibility | None = None) -> Gate:  # noqa: ANN401
        """Build a gate, defaulting to PERMISSION when a token is given and ALL otherwise."""
        if visibility is None:
            visibility = Visibility.ALL if permission is None else Visibility.PERMISSION
        return cls(visibility, permission)

    def is_visible_to(self, sender: Sender, policy: PermissionPolicy) -> bool:
        """Return True if `sender` may see and use the command.

        Free of side effects, so listings can call it for every node.
        """
        match self.visibility:
            case Visibility.ALL:
                return True
            case Visibility.PERMISSION:
                if self.permission is None:
                    return True
                return policy.resolve(sender, self.permission)
            case Visibility.OPS:
                return sender.is_operator()
            case _:
                return False

    def denial(self, policy: PermissionPolicy) -> PermissionDenied:
        """Build the error replied when the gate refuses a sender."""
        if self.visibility == Visibility.PERMISSION and self.permission is not None:
            permission_string = policy.describe(self.permission)
            return PermissionDenied(fill_placeholders(PERMISSION_DENIAL, permission_string), permission_string)
        return PermissionDenied(GENERIC_DENIAL)
