"""Chat text formatting: placeholders, inline markup and rich components.

Messages are written with `{0}`-style placeholders and `&` inline markup
(`&c` red, `&l` bold, `&r` reset...). Formatting translates the markup to
section-sign codes (`\\u00a7c`), the form senders receive. Console senders
turn those codes into ANSI escapes or strip them.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .ansi import (
    BLACK,
    BLUE,
    BOLD,
    BRIGHT,
    CYAN,
    GREEN,
    ITALIC,
    MAGENTA,
    RED,
    RESET,
    STRIKE,
    UNDERLINE,
    WHITE,
    YELLOW,
    escape,
)

__all__ = [
    "COLOR_CHAR",
    "MARKUP_CHAR",
    "ClickAction",
    "ClickEvent",
    "ComponentBuilder",
    "HoverAction",
    "HoverEvent",
    "MessageFormatter",
    "TextComponent",
    "components_to_json",
    "components_to_text",
    "fill_placeholders",
    "format_message",
    "strip_markup",
    "to_ansi",
    "translate_markup",
]

MARKUP_CHAR = "&"
COLOR_CHAR = "§"

_CODES = "0123456789abcdefklmnor"
_MARKUP_RE = re.compile(f"{MARKUP_CHAR}([{_CODES}{_CODES.upper()}])")
_COLOR_RE = re.compile(f"[{COLOR_CHAR}{MARKUP_CHAR}][{_CODES}{_CODES.upper()}]")
_PLACEHOLDER_RE = re.compile(r"\{(\d+)\}")


def _bright(code: str) -> str:
    return str(int(code) + BRIGHT)


# Minecraft legacy color codes mapped to the closest ANSI attributes
_ANSI_CODES: dict[str, tuple[str, ...]] = {
    "0": (BLACK,),
    "1": (BLUE,),
    "2": (GREEN,),
    "3": (CYAN,),
    "4": (RED,),
    "5": (MAGENTA,),
    "6": (YELLOW,),
    "7": (WHITE,),
    "8": (_bright(BLACK),),
    "9": (_bright(BLUE),),
    "a": (_bright(GREEN),),
    "b": (_bright(CYAN),),
    "c": (_bright(RED),),
    "d": (_bright(MAGENTA),),
    "e": (_bright(YELLOW),),
    "f": (_bright(WHITE),),
    "k": (),
    "l": (BOLD,),
    "m": (STRIKE,),
    "n": (UNDERLINE,),
    "o": (ITALIC,),
}


def translate_markup(text: str) -> str:
    """Replace `&x` markup by the matching section-sign color codes."""
    return _MARKUP_RE.sub(lambda m: COLOR_CHAR + m.group(1).lower(), text)


def strip_markup(text: str) -> str:
    """Remove every color code, translated or not."""
    return _COLOR_RE.sub("", text)


def fill_placeholders(template: str, *args: Any) -> str:  # noqa: ANN401
    """Substitute `{n}` placeholders by `args[n]` in a single pass.

    Inserted values are never scanned again; placeholders without a matching
    argument are left untouched.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(args):
            return str(args[index])
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


def format_message(template: str, *args: Any) -> str:  # noqa: ANN401
    """Substitute `{n}` placeholders by `args[n]` then translate the markup.

    Args:
        template: The message template
        *args: Values for the placeholders

    Returns:
        The formatted message
    """
    return translate_markup(fill_placeholders(template, *args))


def to_ansi(text: str) -> str:
    """Convert color codes to ANSI escape sequences for terminals."""
    text = translate_markup(text)
    if COLOR_CHAR not in text:
        return text
    out: list[str] = []
    pos = 0
    while True:
        idx = text.find(COLOR_CHAR, pos)
        if idx == -1 or idx + 1 >= len(text):
            out.append(text[pos:])
            break
        out.append(text[pos:idx])
        code = text[idx + 1]
        if code == "r":
            out.append(RESET)
        elif code in _ANSI_CODES:
            codes = _ANSI_CODES[code]
            if codes:
                out.append(escape(*codes))
        pos = idx + 2
    out.append(RESET)
    return "".join(out)


class HoverAction(StrEnum):
    """What happens when a component is hovered."""

    SHOW_TEXT = "show_text"


class ClickAction(StrEnum):
    """What happens when a component is clicked."""

    SUGGEST_COMMAND = "suggest_command"
    RUN_COMMAND = "run_command"
    OPEN_URL = "open_url"


@dataclass(frozen=True)
class HoverEvent:
    """Hover behavior attached to a component."""

    action: HoverAction
    value: str


@dataclass(frozen=True)
class ClickEvent:
    """Click behavior attached to a component."""

    action: ClickAction
    value: str


@dataclass
class TextComponent:
    """A piece of rich chat text."""

    text: str
    hover: HoverEvent | None = None
    click: ClickEvent | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-friendly representation used by chat clients."""
        data: dict[str, Any] = {"text": self.text}
        if self.hover:
            data["hoverEvent"] = {"action": str(self.hover.action), "value": self.hover.value}
        if self.click:
            data["clickEvent"] = {"action": str(self.click.action), "value": self.click.value}
        return data


@dataclass
class ComponentBuilder:
    """Accumulates components; events apply to the current (last) one."""

    text: str = ""
    parts: list[TextComponent] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.parts.append(TextComponent(self.text))

    def append(self, text: str) -> ComponentBuilder:
        """Start a new component."""
        self.parts.append(TextComponent(text))
        return self

    def event(self, event: HoverEvent | ClickEvent) -> ComponentBuilder:
        """Attach `event` to the current component."""
        current = self.parts[-1]
        if isinstance(event, HoverEvent):
            current.hover = event
        else:
            current.click = event
        return self

    def create(self) -> list[TextComponent]:
        """Return the built components."""
        return list(self.parts)


def components_to_json(components: list[TextComponent]) -> str:
    """Serialize components the way chat clients expect them."""
    return json.dumps([c.to_dict() for c in components], ensure_ascii=False)


def components_to_text(components: list[TextComponent]) -> str:
    """Flatten components to their visible text."""
    return "".join(c.text for c in components)


class MessageFormatter:
    """Formats replies for senders.

    Args:
        prefix: Markup prepended by `prefixed`
    """

    ERROR_HEADER = "&cError: &4"
    DEFAULT_COLOR = "&e"

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def format(self, template: str, *args: Any) -> str:  # noqa: ANN401
        """Format `template` with `args`."""
        return format_message(template, *args)

    def info(self, template: str, *args: Any) -> str:  # noqa: ANN401
        """Format a regular reply."""
        return format_message(self.DEFAULT_COLOR + template, *args)

    def prefixed(self, template: str, *args: Any) -> str:  # noqa: ANN401
        """Format a regular reply with the configured prefix."""
        return format_message(self.prefix + self.DEFAULT_COLOR + template, *args)

    def error(self, template: str, *args: Any) -> str:  # noqa: ANN401
        """Format an error reply."""
        return format_message(self.ERROR_HEADER + template, *args)
