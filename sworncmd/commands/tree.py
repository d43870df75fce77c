"""Command tree walking and lookup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from .parsing import normalize_command_name

if TYPE_CHECKING:
    from ..permissions import PermissionPolicy
    from ..senders import Sender
    from .node import Command

__all__ = ["descend", "find_command", "find_root", "iter_tree", "visible_commands"]


def descend(node: Command, args: Sequence[str]) -> tuple[Command, tuple[str, ...]]:
    """Follow sub-command labels from `node`.

    Peels one argument per level while it names a child of the current
    command; stops at the first argument that doesn't.

    Args:
        node: Starting command
        args: Raw arguments

    Returns:
        The reached command and the arguments left for it
    """
    remaining = tuple(args)
    while node.children and remaining:
        child = node.find_child(remaining[0])
        if child is None:
            break
        node, remaining = child, remaining[1:]
    return node, remaining


def find_root(roots: Iterable[Command], label: str) -> Command | None:
    """Return the first command of `roots` answering to `label`.

    A typed top-level label may keep its leading slash; sub-command labels
    never do.
    """
    label = normalize_command_name(label)
    for root in roots:
        if root.matches(label):
            return root
    return None


def find_command(roots: Iterable[Command], path: Sequence[str]) -> Command | None:
    """Resolve a full path such as ["perm", "add"] to a command.

    Returns None unless every label matched.
    """
    if not path:
        return None
    root = find_root(roots, path[0])
    if root is None:
        return None
    node, remaining = descend(root, path[1:])
    return None if remaining else node


def iter_tree(node: Command) -> Iterator[Command]:
    """Walk `node` and its descendants, parents before children."""
    yield node
    for child in node.children:
        yield from iter_tree(child)


def visible_commands(roots: Iterable[Command], sender: Sender, policy: PermissionPolicy) -> list[Command]:
    """Every command of the trees that `sender` may see.

    Each command is checked on its own gate, so a visible sub-command is
    listed even when its parent is hidden.
    """
    return [node for root in roots for node in iter_tree(root) if node.is_visible_to(sender, policy)]
