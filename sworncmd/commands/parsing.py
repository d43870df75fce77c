"""Docstring, command name and argument value parsing utilities."""

from __future__ import annotations

import re

from ..config import BOOL_TRUE_STRINGS
from .models import Argument, Syntax

__all__ = [
    "normalize_command_name",
    "parse_docstring",
    "parse_syntax",
    "to_bool",
    "to_float",
    "to_int",
]

# Regex pattern to match args: <required> or [optional]
_ARG_PATTERN = re.compile(r"([<\[])([^>\]]+)([>\]])")


def normalize_command_name(cmd: str) -> str:
    """Normalize a command label for lookups.

    Lowercases and drops a leading slash.
    E.g., "/Kick" -> "kick"

    Args:
        cmd: User-typed command label

    Returns:
        Normalized command label
    """
    return cmd.removeprefix("/").lower()


def _split_arguments_block(lines: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate an "Args:" block from the rest of the description.

    Each "name: explanation" line of the block documents the argument `name`;
    the block ends at the first blank line.
    """
    body: list[str] = []
    explanations: dict[str, str] = {}
    in_block = False
    for raw in lines:
        line = raw.strip()
        if line in {"Args:", "Arguments:"}:
            in_block = True
            continue
        if in_block:
            name, sep, text = line.partition(":")
            if line and sep:
                explanations[name.strip()] = text.strip()
                continue
            in_block = False
        body.append(line)
    return body, explanations


def parse_docstring(docstring: str) -> tuple[list[Argument], str, str]:
    """Parse a docstring to extract arguments and descriptions.

    The first line may contain arguments like:
    "<arg> Short description" or "[optional_arg] Short description"

    Args:
        docstring: The raw docstring to parse

    Returns:
        Tuple of (args, short_description, full_description)
        - args: List of Argument objects
        - short_description: Text after arguments on first line
        - full_description: Remaining lines, "Args:" block excluded
    """
    if not docstring:
        return [], "No description available.", ""

    lines = docstring.strip().split("\n")
    first_line = lines[0].strip()
    body, explanations = _split_arguments_block(lines[1:])
    full_description = "\n".join(body).strip()

    args: list[Argument] = []
    last_end = 0

    # Find all args at the start of the line
    for match in _ARG_PATTERN.finditer(first_line):
        # Check if this match is at the expected position (start or after whitespace)
        if match.start() != last_end and first_line[last_end : match.start()].strip():
            # There's non-whitespace before this match, stop parsing args
            break

        required = match.group(1) == "<"
        name = match.group(2)
        args.append(Argument(name, explanations.get(name), required=required))
        last_end = match.end()

        # Skip any whitespace after the arg
        while last_end < len(first_line) and first_line[last_end] == " ":
            last_end += 1

    # The short description is what comes after the args
    short_description = first_line[last_end:].strip() if args else first_line
    return args, short_description, full_description


def parse_syntax(text: str) -> Syntax:
    """Parse a bare usage string such as "<player> [reason]"."""
    args, _, _ = parse_docstring(text)
    return Syntax(args)


def to_int(value: str) -> int | None:
    """Return `value` as an integer, None if it isn't one."""
    try:
        return int(value.strip())
    except ValueError:
        return None


def to_float(value: str) -> float | None:
    """Return `value` as a decimal number, None if it isn't one."""
    try:
        return float(value.strip().replace(",", "."))
    except ValueError:
        return None


def to_bool(value: str) -> bool:
    """Return True for "true", "yes", "on", "1" and "enabled" (any case)."""
    return value.strip().lower() in BOOL_TRUE_STRINGS
