"""Usage lines and help payloads for commands.

Everything here is pure: it can render commands that were never executed,
for any sender.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..chat import ClickAction, ClickEvent, ComponentBuilder, HoverAction, HoverEvent, format_message, strip_markup
from ..permissions import NodePermissionPolicy

if TYPE_CHECKING:
    from ..chat import TextComponent
    from ..permissions import PermissionPolicy
    from .models import Argument, Syntax
    from .node import Command

__all__ = [
    "click_text",
    "fancy_usage",
    "fancy_usage_lines",
    "format_missing",
    "hover_text",
    "usage_line",
    "usage_lines",
]


def _head(command: Command, prefix: str | None) -> str:
    if prefix is None:
        prefix = command.command_prefix
    tokens = [prefix] if prefix else []
    tokens.extend(command.path)
    return "&b/" + " ".join(tokens)


def usage_line(
    command: Command,
    syntax: Syntax | None = None,
    *,
    prefix: str | None = None,
    description: bool = False,
) -> str:
    """Render one usage line, in inline markup.

    Example: `&b/kick &3<player> &3[reason] &eKick a player`

    Args:
        command: The command to render
        syntax: Which alternative, the first one by default
        prefix: Global prefix token; defaults to the one the command is reached with
        description: Append the first description line

    Returns:
        The usage line
    """
    if syntax is None:
        syntax = command.syntaxes[0]
    line = _head(command, prefix)
    for arg in syntax:
        line += f" &3{arg.render()}"
    lines = command.description_lines()
    if description and lines:
        line += f" &e{lines[0]}"
    return line


def usage_lines(command: Command, *, prefix: str | None = None) -> list[str]:
    """One usage line per syntax alternative; only the first carries the description."""
    return [
        usage_line(command, syntax, prefix=prefix, description=index == 0)
        for index, syntax in enumerate(command.syntaxes)
    ]


def format_missing(arguments: list[Argument]) -> str:
    """Render missing arguments, with their explanation when they have one."""
    parts = []
    for arg in arguments:
        if arg.explanation:
            parts.append(f"{arg.render()} ({arg.explanation})")
        else:
            parts.append(arg.render())
    return ", ".join(parts)


def hover_text(command: Command, syntax: Syntax, policy: PermissionPolicy, *, prefix: str | None = None) -> str:
    """Build the text shown when hovering a usage line."""
    lines = [usage_line(command, syntax, prefix=prefix) + ":"]
    lines.extend(f"&3{arg.render()}&r: {arg.explanation}" for arg in syntax if arg.explanation)
    lines.extend(f"&e{line}" for line in command.description_lines())
    permission = command.gate.permission
    if permission is not None:
        lines.append("")
        lines.append("&4Permission:")
        lines.append("&r" + policy.describe(permission))
    return format_message("\n".join(lines))


def click_text(command: Command, syntax: Syntax | None = None, *, prefix: str | None = None) -> str:
    """Plain usage line suggested to the sender on click."""
    return strip_markup(usage_line(command, syntax, prefix=prefix))


def fancy_usage(
    command: Command,
    syntax: Syntax | None = None,
    policy: PermissionPolicy | None = None,
    *,
    prefix: str | None = None,
    list_item: bool = False,
) -> list[TextComponent]:
    """Usage line as rich text, with hover help and click-to-suggest.

    Args:
        command: The command to render
        syntax: Which alternative, the first one by default
        policy: Describes the permission token in the hover text
        prefix: Global prefix token; defaults to the one the command is reached with
        list_item: Precede the line with a bullet, for listings

    Returns:
        The components to send
    """
    if syntax is None:
        syntax = command.syntaxes[0]
    if policy is None:
        policy = NodePermissionPolicy()
    bullet = "&b- " if list_item else ""
    text = format_message(bullet + usage_line(command, syntax, prefix=prefix))
    builder = ComponentBuilder(text)
    builder.event(HoverEvent(HoverAction.SHOW_TEXT, hover_text(command, syntax, policy, prefix=prefix)))
    builder.event(ClickEvent(ClickAction.SUGGEST_COMMAND, click_text(command, syntax, prefix=prefix)))
    return builder.create()


def fancy_usage_lines(
    command: Command,
    policy: PermissionPolicy | None = None,
    *,
    prefix: str | None = None,
    list_item: bool = False,
) -> list[list[TextComponent]]:
    """`fancy_usage` for every syntax alternative."""
    return [fancy_usage(command, syntax, policy, prefix=prefix, list_item=list_item) for syntax in command.syntaxes]

