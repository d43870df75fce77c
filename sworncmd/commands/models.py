"""Data models for command arguments."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

__all__ = ["Argument", "Syntax", "closest_syntax"]


@dataclass(frozen=True)
class Argument:
    """A named parameter slot of a syntax."""

    name: str  # e.g., "player" or "next|pause|clear"
    explanation: str | None = None
    required: bool = True  # True for <arg>, False for [arg]

    def render(self) -> str:
        """Return `<name>` for required arguments, `[name]` otherwise."""
        if self.required:
            return f"<{self.name}>"
        return f"[{self.name}]"


@dataclass
class Syntax:
    """One accepted shape of a command's arguments.

    Required and optional arguments may be interleaved; the declaration order
    is kept for rendering.
    """

    arguments: list[Argument] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self.arguments)

    def size(self) -> int:
        """Total number of arguments."""
        return len(self.arguments)

    def add(self, argument: Argument) -> None:
        """Append an argument."""
        self.arguments.append(argument)

    def required_size(self) -> int:
        """Number of required arguments, wherever they are declared."""
        return sum(1 for arg in self.arguments if arg.required)

    def accepts(self, count: int) -> bool:
        """Return True if `count` supplied arguments satisfy this syntax."""
        return self.required_size() <= count

    def filtered(self, required: bool) -> list[Argument]:
        """Arguments whose required flag equals `required`, in declaration order."""
        return [arg for arg in self.arguments if arg.required is required]

    def get(self, index: int, required: bool) -> Argument:
        """Return the `index`-th argument whose required flag equals `required`.

        Raises:
            IndexError: no such argument
        """
        if index < 0:
            raise IndexError(index)
        return self.filtered(required)[index]

    def missing(self, supplied: int) -> list[Argument]:
        """Required arguments left unfilled when `supplied` arguments are given."""
        return [self.get(index, True) for index in range(supplied, self.required_size())]


def closest_syntax(syntaxes: Sequence[Syntax], count: int) -> Syntax:
    """Select the syntax whose size is the closest to `count`.

    The first declared syntax wins ties, and is used outright when it is the
    only one or when nothing was supplied.

    Args:
        syntaxes: The declared syntaxes (at least one)
        count: Number of supplied arguments

    Returns:
        The closest syntax
    """
    if len(syntaxes) == 1 or count == 0:
        return syntaxes[0]
    best = syntaxes[0]
    best_delta = abs(best.size() - count)
    for syntax in syntaxes:
        delta = abs(syntax.size() - count)
        if delta == 0:
            return syntax
        if delta < best_delta:
            best, best_delta = syntax, delta
    return best
