"""Typed access to a configuration section."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_STRINGS", "BOOL_TRUE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValue = float | bool | str | list | dict

# Also used to read boolean command arguments
BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS


def coerce_to_bool(value: ConfigValue | None, default: bool = False) -> bool:
    """Read a loosely typed boolean.

    None gives `default`. Strings are False when blank or one of
    `BOOL_FALSE_STRINGS` ("off", "no"...), True otherwise. Other values use
    their truth value.
    """
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        return bool(text) and text not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """A configuration section.

    Keys missing from the file answer with their schema default.

    Args:
        *args: Initial values, as for `dict`
        logger: Warned about values that can't be converted
        schema: Provides the defaults
        **kwargs: Initial values, as for `dict`
    """

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        super().__init__(*args, **kwargs)
        self.log = logger
        self.defaults: dict[str, ConfigValue] = {}
        if schema:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Take the defaults from `schema`."""
        self.defaults = {item.name: item.default for item in schema if item.default is not None}

    def get(self, name: str, default: ConfigValue | None = None) -> ConfigValue | None:  # type: ignore[override]
        """Return the value of `name`, else its schema default, else `default`."""
        if name in self:
            return self[name]
        return self.defaults.get(name, default)

    def has_explicit(self, name: str) -> bool:
        """Return True if `name` comes from the file rather than the schema."""
        return name in self

    def get_bool(self, name: str, default: bool = False) -> bool:
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        """Return `name` as an integer.

        Missing values give `default`; so do invalid ones, with a warning.
        """
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            self.log.warning("Invalid integer value for %s: %s", name, value)
            return default

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else str(value)
