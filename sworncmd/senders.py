"""Command senders: who runs a command and where replies go.

Hosts usually provide their own senders; any object following the `Sender`
protocol works. The classes here cover an interactive console, in-memory
players (handy for tests and bridges) and scripted sources.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

from .ansi import should_colorize
from .chat import components_to_text, strip_markup, to_ansi
from .models import SenderKind

if TYPE_CHECKING:
    from .chat import TextComponent

__all__ = [
    "BaseSender",
    "ConsoleSender",
    "PlayerSender",
    "ScriptedSender",
    "Sender",
    "display_name",
    "permission_matches",
]


@runtime_checkable
class Sender(Protocol):
    """Capabilities required from whoever invokes a command."""

    name: str
    kind: SenderKind

    def send_message(self, text: str) -> None:
        """Send a formatted line."""

    def send_structured_message(self, components: list[TextComponent]) -> None:
        """Send rich components (hover / click aware)."""

    def is_operator(self) -> bool:
        """Return True for server operators."""

    def has_permission(self, node: str) -> bool:
        """Return True if the permission `node` is granted."""


def permission_matches(granted: str, node: str) -> bool:
    """Check a granted permission against a requested node.

    `*` grants everything, `a.b.*` grants `a.b` and anything below it.
    """
    granted = granted.lower()
    node = node.lower()
    if granted in {"*", node}:
        return True
    if granted.endswith(".*"):
        base = granted[:-2]
        return node == base or node.startswith(base + ".")
    return False


@dataclass
class BaseSender:
    """Permission bookkeeping shared by the bundled senders."""

    name: str
    operator: bool = False
    permissions: set[str] = field(default_factory=set)
    kind: SenderKind = SenderKind.PLAYER

    def is_operator(self) -> bool:
        return self.operator

    def has_permission(self, node: str) -> bool:
        if self.operator:
            return True
        return any(permission_matches(granted, node) for granted in self.permissions)

    def grant(self, *nodes: str) -> None:
        """Grant permission nodes."""
        self.permissions.update(nodes)

    def revoke(self, *nodes: str) -> None:
        """Revoke permission nodes."""
        self.permissions.difference_update(nodes)

    def send_message(self, text: str) -> None:
        raise NotImplementedError

    def send_structured_message(self, components: list[TextComponent]) -> None:
        self.send_message(components_to_text(components))


@dataclass
class PlayerSender(BaseSender):
    """An interactive player whose replies are kept in memory."""

    messages: list[str] = field(default_factory=list)
    structured: list[list[TextComponent]] = field(default_factory=list)

    def send_message(self, text: str) -> None:
        self.messages.append(text)

    def send_structured_message(self, components: list[TextComponent]) -> None:
        self.structured.append(components)

    @property
    def plain_messages(self) -> list[str]:
        """Received lines without color codes."""
        return [strip_markup(m) for m in self.messages]


@dataclass
class ConsoleSender(BaseSender):
    """The server console, printing replies to a stream."""

    name: str = "CONSOLE"
    operator: bool = True
    kind: SenderKind = SenderKind.CONSOLE
    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def send_message(self, text: str) -> None:
        line = to_ansi(text) if should_colorize(self.stream) else strip_markup(text)
        print(line, file=self.stream)


@dataclass
class ScriptedSender(BaseSender):
    """A scripted source, such as a command block, at a fixed location."""

    name: str = "@"
    kind: SenderKind = SenderKind.SCRIPTED
    location: tuple[int, int, int] = (0, 0, 0)
    messages: list[str] = field(default_factory=list)

    def send_message(self, text: str) -> None:
        self.messages.append(text)


def display_name(sender: Sender) -> str:
    """Return a human readable name for `sender`."""
    if sender.kind == SenderKind.CONSOLE:
        return "Console"
    if sender.kind == SenderKind.SCRIPTED:
        x, y, z = getattr(sender, "location", (0, 0, 0))
        return f"CommandBlock ({x}, {y}, {z})"
    return sender.name
