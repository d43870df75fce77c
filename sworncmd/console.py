"""Interactive console host: type commands, read the replies."""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from typing import TYPE_CHECKING

import questionary

from .commands.node import Command, FunctionCommand
from .commands.tree import visible_commands
from .config_loader import load_configuration
from .handler import CommandHandler
from .logging_setup import get_logger, init_logger
from .models import ConfigError, ExitCode
from .senders import ConsoleSender, display_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .commands.context import CallContext

__all__ = ["build_handler", "command_labels", "demo_commands", "main", "prompt_lines", "run_console"]

EXIT_WORDS = frozenset({"exit", "quit", "stop"})


def echo(ctx: CallContext) -> None:
    """<message> Repeat a message

    Args:
        message: Text to repeat; quote it or type several words
    """
    ctx.reply_prefixed(ctx.final_arg(0))


def sum_(ctx: CallContext) -> None:
    """<a> <b> Add two numbers

    Args:
        a: First number
        b: Second number
    """
    a = ctx.arg_as_float(0)
    b = ctx.arg_as_float(1)
    if a is None or b is None:
        return
    ctx.reply("{0} + {1} = &b{2}", ctx.arg(0), ctx.arg(1), f"{a + b:g}")


def whoami(ctx: CallContext) -> None:
    """Show who is running commands"""
    operator = "yes" if ctx.sender.is_operator() else "no"
    ctx.reply("You are &b{0}&e (operator: {1})", display_name(ctx.sender), operator)


def demo_commands() -> list[Command]:
    """Fresh instances of the demo commands."""
    return [FunctionCommand(echo), FunctionCommand(sum_, aliases=["add"]), FunctionCommand(whoami)]


def build_handler(handler: CommandHandler, extra: Iterable[Command] = ()) -> CommandHandler:
    """Register the built-in and demo commands on `handler`."""
    handler.register_help()
    for cmd in (*demo_commands(), *extra):
        handler.register(cmd)
    return handler


def run_console(handler: CommandHandler, lines: Iterable[str], sender: ConsoleSender | None = None) -> None:
    """Dispatch each line as the console until an exit word or the end of input."""
    sender = sender or ConsoleSender()
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break
        handler.dispatch_line(sender, line)


def command_labels(handler: CommandHandler, sender: ConsoleSender) -> list[str]:
    """Full command lines (prefix and sub-commands included) visible to `sender`."""
    labels = []
    for cmd in visible_commands(handler.registered_commands, sender, handler.policy):
        tokens = [cmd.command_prefix, *cmd.path] if cmd.command_prefix else cmd.path
        labels.append(" ".join(tokens))
    return labels


def prompt_lines(handler: CommandHandler, sender: ConsoleSender) -> Iterator[str]:
    """Yield lines typed at an interactive prompt completing command labels."""
    labels = command_labels(handler, sender)
    while True:
        line = questionary.autocomplete("/", choices=labels, qmark="").ask()
        if line is None:  # Ctrl-C or Ctrl-D
            return
        yield line


def main(argv: list[str] | None = None) -> None:
    """Entry point of the `sworncmd` console."""
    parser = argparse.ArgumentParser(prog="sworncmd", description="Interactive command console")
    parser.add_argument("--config", default="", help="Configuration file (TOML)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    try:
        config = load_configuration(logging.getLogger("sworncmd.config"), args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(ExitCode.CONFIG_ERROR)

    init_logger(config.get_str("log_file") or None, force_debug=args.debug or config.get_bool("debug"))
    log = get_logger()

    handler = build_handler(CommandHandler(config, log=get_logger("sworncmd.handler")))
    sender = ConsoleSender()
    log.debug("Console ready, %d root commands", len(handler.registered_commands))
    with contextlib.suppress(KeyboardInterrupt):
        if sys.stdin.isatty():
            questionary.print("sworncmd console: type help, or exit to leave", style="bold fg:cyan")
            run_console(handler, prompt_lines(handler, sender), sender)
        else:
            run_console(handler, sys.stdin, sender)
    sys.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
