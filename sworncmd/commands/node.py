"""Command nodes: the unit of dispatch.

A command is declared either by subclassing `Command` and implementing
`perform`, or by decorating a function with `command()`:

    @command(permission="kick")
    def kick(ctx):
        '''<player> [reason] Kick a player

        Args:
            player: The player to kick
        '''

Commands form a tree: `add_child` attaches sub-commands, reached by their
name or alias as the first argument.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any

from ..models import RegistrationError, Visibility
from ..permissions import Gate
from .builder import SyntaxBuilder
from .dispatch import default_dispatcher
from .parsing import parse_docstring

if TYPE_CHECKING:
    from ..permissions import PermissionPolicy
    from ..senders import Sender
    from .context import CallContext
    from .dispatch import Dispatcher, Outcome
    from .models import Argument, Syntax

__all__ = ["Command", "FunctionCommand", "command"]


class Command:
    """A command node.

    Class attributes give the defaults, constructor keywords override them.
    Nothing about a running invocation is stored here: `perform` receives a
    fresh `CallContext` on every call.
    """

    name: str = ""
    aliases: Sequence[str] = ()
    description: str = ""
    permission: Any = None
    visibility: Visibility | None = None
    player_only: bool = False
    uses_prefix: bool = True

    def __init__(  # noqa: PLR0913
        self,
        name: str | None = None,
        *,
        aliases: Iterable[str] | None = None,
        description: str | None = None,
        permission: Any = None,  # noqa: ANN401
        visibility: Visibility | None = None,
        player_only: bool | None = None,
        uses_prefix: bool | None = None,
    ) -> None:
        self.name = (name or self.name).strip()
        if not self.name or " " in self.name:
            msg = f"Invalid command name: {self.name!r}"
            raise RegistrationError(msg)
        self.aliases = list(self.aliases if aliases is None else aliases)
        self.description = self.description if description is None else description
        self.player_only = self.player_only if player_only is None else player_only
        self.uses_prefix = self.uses_prefix if uses_prefix is None else uses_prefix
        self.gate = Gate.for_permission(
            self.permission if permission is None else permission,
            self.visibility if visibility is None else visibility,
        )
        self.children: list[Command] = []
        self.parent: Command | None = None  # not owned
        self.dispatcher: Dispatcher | None = None
        self.prefix = ""  # global prefix token, set by the handler
        self._syntax = SyntaxBuilder()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {' '.join(self.path)}>"

    # Syntax declaration

    @property
    def syntaxes(self) -> list[Syntax]:
        """Declared syntax alternatives (at least one)."""
        return self._syntax.build()

    def required(self, name: str, explanation: str | None = None) -> Command:
        """Add a required argument to the current syntax alternative."""
        self._syntax.required(name, explanation)
        return self

    def optional(self, name: str, explanation: str | None = None) -> Command:
        """Add an optional argument to the current syntax alternative."""
        self._syntax.optional(name, explanation)
        return self

    def argument(self, argument: Argument) -> Command:
        """Add a ready-made argument to the current syntax alternative."""
        self._syntax.argument(argument)
        return self

    def alternative(self) -> Command:
        """Start a new syntax alternative."""
        self._syntax.alternative()
        return self

    # Tree structure

    @property
    def identifiers(self) -> list[str]:
        """Name and aliases, lowercased."""
        return [label.lower() for label in (self.name, *self.aliases)]

    def matches(self, label: str) -> bool:
        """Return True if `label` is this command's name or one of its aliases (any case)."""
        return label.lower() in self.identifiers

    def find_child(self, label: str) -> Command | None:
        """Return the first child, in registration order, answering to `label`."""
        for child in self.children:
            if child.matches(label):
                return child
        return None

    def add_child(self, child: Command) -> Command:
        """Attach a sub-command.

        Raises:
            RegistrationError: the child already has a parent, or one of its
                identifiers is taken by a sibling
        """
        if child.parent is not None:
            msg = f"{child!r} is already a sub-command of {child.parent!r}"
            raise RegistrationError(msg)
        if child is self or child in self.lineage:
            msg = f"{child!r} can't be its own sub-command"
            raise RegistrationError(msg)
        taken = {label for sibling in self.children for label in sibling.identifiers}
        clashes = taken.intersection(child.identifiers)
        if clashes:
            msg = f"{self!r} already has a sub-command named {', '.join(sorted(clashes))}"
            raise RegistrationError(msg)
        child.parent = self
        self.children.append(child)
        return child

    def subcommand(self, name: str | None = None, **kwargs: Any) -> Callable[[Callable[[CallContext], Any]], FunctionCommand]:  # noqa: ANN401
        """Decorator variant of `add_child` for function commands."""

        def _decorator(func: Callable[[CallContext], Any]) -> FunctionCommand:
            child = FunctionCommand(func, name, **kwargs)
            self.add_child(child)
            return child

        return _decorator

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def lineage(self) -> list[Command]:
        """Commands from the root down to this one."""
        chain: list[Command] = []
        node: Command | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain[::-1]

    @property
    def root(self) -> Command:
        return self.lineage[0]

    @property
    def path(self) -> list[str]:
        """Names from the root down to this command."""
        return [node.name for node in self.lineage]

    @property
    def command_prefix(self) -> str:
        """Global prefix token used to reach this command, if any."""
        return self.root.prefix

    @property
    def bound_dispatcher(self) -> Dispatcher | None:
        """Dispatcher of this command or of its closest ancestor."""
        for node in reversed(self.lineage):
            if node.dispatcher is not None:
                return node.dispatcher
        return None

    # Help

    def description_lines(self) -> list[str]:
        """The description split in lines."""
        return [line for line in self.description.splitlines() if line.strip()]

    def is_visible_to(self, sender: Sender, policy: PermissionPolicy) -> bool:
        """Return True if `sender` may see and use this command."""
        return self.gate.is_visible_to(sender, policy)

    # Execution

    def execute(self, sender: Sender, args: Sequence[str]) -> Outcome:
        """Run this command (or the sub-command `args` routes to) for `sender`.

        The sender always gets the reply; the returned outcome is informative.
        """
        dispatcher = self.bound_dispatcher
        if dispatcher is None:
            dispatcher = default_dispatcher()
        return dispatcher.execute(self, sender, args)

    def perform(self, ctx: CallContext) -> Any:  # noqa: ANN401
        """Business logic of the command."""
        raise NotImplementedError


class FunctionCommand(Command):
    """A command whose logic is a plain function taking the call context.

    The argument syntax and description come from the function docstring:
    the first line holds `<required>` / `[optional]` arguments then a short
    description; an "Args:" block explains the arguments.
    """

    def __init__(self, func: Callable[[CallContext], Any], name: str | None = None, **kwargs: Any) -> None:  # noqa: ANN401
        docstring = inspect.getdoc(func) or ""
        args, short_description, full_description = parse_docstring(docstring)
        if "description" not in kwargs and docstring:
            kwargs["description"] = "\n".join(part for part in (short_description, full_description) if part)
        super().__init__(name or func.__name__.strip("_").replace("_", "-"), **kwargs)
        for arg in args:
            self.argument(arg)
        self.func = func

    def perform(self, ctx: CallContext) -> Any:  # noqa: ANN401
        return self.func(ctx)


def command(name: str | None = None, **kwargs: Any) -> Callable[[Callable[[CallContext], Any]], FunctionCommand]:  # noqa: ANN401
    """Decorator turning a function into a `FunctionCommand`.

    Args:
        name: Command name, defaults to the function name
        **kwargs: Any `Command` keyword (aliases, permission, visibility...)
    """

    def _decorator(func: Callable[[CallContext], Any]) -> FunctionCommand:
        return FunctionCommand(func, name, **kwargs)

    return _decorator
