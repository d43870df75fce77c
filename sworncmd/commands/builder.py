"""Fluent construction of syntax alternatives."""

from __future__ import annotations

from .models import Argument, Syntax

__all__ = ["SyntaxBuilder"]


class SyntaxBuilder:
    """Accumulates one or more syntax alternatives.

    The builder starts with a single empty alternative; argument-adding
    calls always target the most recently started one.

    Example: `SyntaxBuilder().required("player").optional("reason").alternative().required("uuid")`
    declares `<player> [reason]` and `<uuid>`.
    """

    def __init__(self) -> None:
        self._syntaxes: list[Syntax] = [Syntax()]

    @property
    def current(self) -> Syntax:
        """The alternative receiving new arguments."""
        return self._syntaxes[-1]

    def argument(self, argument: Argument) -> SyntaxBuilder:
        """Append a ready-made argument."""
        self.current.add(argument)
        return self

    def required(self, name: str, explanation: str | None = None) -> SyntaxBuilder:
        """Append a required argument."""
        return self.argument(Argument(name, explanation, required=True))

    def optional(self, name: str, explanation: str | None = None) -> SyntaxBuilder:
        """Append an optional argument."""
        return self.argument(Argument(name, explanation, required=False))

    def alternative(self) -> SyntaxBuilder:
        """Start a new syntax alternative."""
        self._syntaxes.append(Syntax())
        return self

    def build(self) -> list[Syntax]:
        """Return the alternatives declared so far."""
        return list(self._syntaxes)
