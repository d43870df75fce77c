"""Schema-driven validation of configuration sections.

A schema is a `ConfigItems` list of `ConfigField`. `ConfigValidator` checks
a section against it and reports every problem at once, each with a hint on
how to fix it. Unknown keys only warn, suggesting the closest known key.
"""

import difflib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One expected key of a configuration section.

    Attributes:
        name: Key name
        field_type: Expected type, or a tuple of accepted types
        required: Report an error when the key is absent
        default: Value used when the key is absent
        description: What the key does
        choices: Accepted values, for enum-like keys
        validator: Extra check returning error messages
    """

    name: str
    field_type: type | tuple[type, ...] = str
    required: bool = False
    default: Any = None
    description: str = ""
    choices: list | None = None
    validator: Callable[[Any], list[str]] | None = None

    @property
    def types(self) -> tuple[type, ...]:
        if isinstance(self.field_type, tuple):
            return self.field_type
        return (self.field_type,)

    @property
    def type_name(self) -> str:
        """Readable type, e.g. "int or str"."""
        return " or ".join(typ.__name__ for typ in self.types)


class ConfigItems(list):
    """Ordered list of `ConfigField`, also looked up by key name."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)
        self._by_name = {item.name: item for item in fields}

    def get(self, name: str) -> ConfigField | None:
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        return [item.name for item in self]


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Configuration section name
        field: Key with the error
        message: What is wrong
        suggestion: How to fix it, if known

    Returns:
        The message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS)


def _converts_to(kind: type) -> Callable[[Any], bool]:
    def _check(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int | float):
            return True
        try:
            kind(value)
        except (TypeError, ValueError):
            return False
        return True

    return _check


# type -> (accepts value, fix hint)
_TYPE_CHECKS: dict[type, tuple[Callable[[Any], bool], str]] = {
    bool: (_is_bool, "Use true/false (without quotes)"),
    int: (_converts_to(int), "Use {name} = 42 (without quotes)"),
    float: (_converts_to(float), "Use {name} = 4.2 (without quotes)"),
    str: (lambda value: isinstance(value, str), 'Use {name} = "value"'),
    list: (lambda value: isinstance(value, list), 'Use {name} = ["item1", "item2"]'),
}


class ConfigValidator:
    """Checks one configuration section against a schema.

    Args:
        config: The section's values
        section: Section name, used in messages
        logger: Receives the unknown key warnings
    """

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger

    def error(self, field_def: ConfigField, message: str, suggestion: str = "") -> str:
        return format_config_error(self.section, field_def.name, message, suggestion)

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return every error found in the section, empty when it is valid."""
        errors: list[str] = []
        for field_def in schema:
            value = self.config.get(field_def.name)
            if value is None:
                if field_def.required:
                    errors.append(self.error(field_def, "Missing required field"))
                continue

            type_error = self.check_type(field_def, value)
            if type_error:
                errors.append(type_error)
                continue

            if field_def.choices is not None and value not in field_def.choices:
                choices = ", ".join(repr(choice) for choice in field_def.choices)
                errors.append(self.error(field_def, f"Invalid value {value!r}", f"Valid options: {choices}"))
            if field_def.validator:
                errors.extend(self.error(field_def, message) for message in field_def.validator(value))
        return errors

    def check_type(self, field_def: ConfigField, value: Any) -> str | None:
        """Return an error when `value` matches none of the field's types.

        Types without a known check accept anything.
        """
        if any(typ not in _TYPE_CHECKS for typ in field_def.types):
            return None
        checks = [_TYPE_CHECKS[typ] for typ in field_def.types]
        if any(accepts(value) for accepts, _ in checks):
            return None
        hint = checks[0][1].format(name=field_def.name) if len(checks) == 1 else ""
        return self.error(field_def, f"Expected {field_def.type_name}, got {type(value).__name__}", hint)

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Warn about keys the schema doesn't know.

        Returns:
            The warning messages
        """
        warnings = []
        for key in self.config:
            if schema.get(key) is not None:
                continue
            close = difflib.get_close_matches(key, schema.names, n=1)
            if close:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{close[0]}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
