"""Built-in help command: paginated command list and per-command details."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .commands.node import Command
from .commands.parsing import to_int
from .commands.tree import find_command, visible_commands
from .commands.usage import fancy_usage, fancy_usage_lines, usage_line, usage_lines

if TYPE_CHECKING:
    from .commands.context import CallContext
    from .commands.models import Syntax
    from .handler import CommandHandler

__all__ = ["HelpCommand"]


class HelpCommand(Command):
    """Lists the commands a sender may use, or describes one of them."""

    name = "help"
    aliases = ("?",)
    description = "Show the available commands\nGive a command name for its details and sub-commands."

    def __init__(self, handler: CommandHandler) -> None:
        super().__init__()
        self.handler = handler
        self.optional("page|command", "Page number, or the command to describe")

    def perform(self, ctx: CallContext) -> None:
        if not ctx.args:
            self.show_page(ctx, 1)
            return
        page = to_int(ctx.args[0]) if len(ctx.args) == 1 else None
        if page is not None:
            self.show_page(ctx, page)
        else:
            self.show_command(ctx, list(ctx.args))

    def entries(self, ctx: CallContext) -> list[tuple[Command, Syntax, bool]]:
        """(command, syntax, is first syntax) for every usage line the sender may see."""
        return [
            (command, syntax, index == 0)
            for command in visible_commands(self.handler.registered_commands, ctx.sender, ctx.policy)
            for index, syntax in enumerate(command.syntaxes)
        ]

    def show_page(self, ctx: CallContext, page: int) -> None:
        entries = self.entries(ctx)
        size = max(1, self.handler.config.get_int("help_page_size", 8))
        pages = max(1, math.ceil(len(entries) / size))
        if not 1 <= page <= pages:
            ctx.err("Page &c{0} &4does not exist (1-{1}).", page, pages)
            return

        ctx.reply("&3====[ &eHelp &3(&e{0}&3/&e{1}&3) ]====", page, pages)
        for command, syntax, first in entries[(page - 1) * size : page * size]:
            if ctx.is_player:
                ctx.send_components(fancy_usage(command, syntax, ctx.policy, list_item=True))
            else:
                ctx.reply(usage_line(command, syntax, description=first))
        if page < pages:
            ctx.reply("Type &b{0} {1} &eto read the next page.", self.handler.help_hint(), page + 1)

    def show_command(self, ctx: CallContext, path: list[str]) -> None:
        command = find_command(self.handler.registered_commands, path)
        if command is None or not command.is_visible_to(ctx.sender, ctx.policy):
            ctx.err("Unknown command: &c{0}", " ".join(path))
            return

        ctx.reply("&3====[ &e{0} &3]====", " ".join(command.path))
        if ctx.is_player:
            for components in fancy_usage_lines(command, ctx.policy):
                ctx.send_components(components)
        else:
            for line in usage_lines(command):
                ctx.reply(line)
        for line in command.description_lines()[1:]:
            ctx.reply(line)
        if command.aliases:
            ctx.reply("Aliases: &b{0}", ", ".join(command.aliases))

        children = [child for child in command.children if child.is_visible_to(ctx.sender, ctx.policy)]
        if children:
            ctx.reply("Sub-commands:")
            for child in children:
                ctx.reply(usage_line(child, description=True))
