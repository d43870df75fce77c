"""Schema of the `[sworncmd]` configuration section."""

from .validation import ConfigField, ConfigItems

__all__ = ["SWORNCMD_CONFIG_SCHEMA"]


def _validate_prefix(value: str) -> list[str]:
    if " " in value.strip():
        return ["The command prefix must be a single word"]
    return []


SWORNCMD_CONFIG_SCHEMA = ConfigItems(
    ConfigField(
        "prefix",
        str,
        default="",
        description="Global command prefix: `/<prefix> <command>` (empty to disable)",
        validator=_validate_prefix,
    ),
    ConfigField("message_prefix", str, default="&6[Sworn] ", description="Markup prepended to prefixed replies"),
    ConfigField("permission_prefix", str, default="", description="Prefix of permission nodes, e.g. `sworn`"),
    ConfigField("help_page_size", int, default=8, description="Number of commands per help page"),
    ConfigField("debug", bool, default=False, description="Enable debug logging"),
    ConfigField("log_file", str, default="", description="Also write logs to this file"),
)
