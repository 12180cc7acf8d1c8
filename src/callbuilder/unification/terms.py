"""Term algebra for unification.

Types are encoded as terms before they are unified:

    java.lang.String         -> Sequence((Atom "java.lang.String",))
    java.util.Map<K, V>      -> Sequence((Atom "java.util.Map", K, V))
    int                      -> Atom "int"
    T (a method's own T)     -> Variable

Atoms and variables compare by identity. Each carries a small integer
handle assigned by the registry that allocated it, which is only used
to print it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, eq=False)
class Atom:
    """An opaque constant standing for one concrete type name."""

    handle: int
    label: str = ""

    def __repr__(self) -> str:
        if self.label:
            return f"Atom(#{self.handle} {self.label!r})"
        return f"Atom(#{self.handle})"


@dataclass(frozen=True, eq=False)
class Variable:
    """A placeholder for a type that is not known yet."""

    handle: int
    hint: str = ""

    def __repr__(self) -> str:
        return f"Variable({self})"

    def __str__(self) -> str:
        return f"?{self.hint}{self.handle}"


@dataclass(frozen=True)
class Sequence:
    """An ordered composite term.

    The first item is the head (the base type) and the rest are type
    arguments. The solver also uses sequences to bundle independent
    equations, one per position.
    """

    items: tuple[Term, ...]

    @property
    def head(self) -> Term:
        return self.items[0]

    @property
    def arguments(self) -> tuple[Term, ...]:
        return self.items[1:]

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Sequence({describe_term(self)})"


Term: TypeAlias = Atom | Variable | Sequence
"""Union type for terms."""


def seq(*items: Term) -> Sequence:
    """Build a sequence from its items."""
    return Sequence(items)


def free_variables(term: Term) -> set[Variable]:
    """Collect every variable occurring in a term."""
    match term:
        case Variable():
            return {term}
        case Sequence(items=items):
            found: set[Variable] = set()
            for item in items:
                found |= free_variables(item)
            return found
        case _:
            return set()


def describe_term(term: Term) -> str:
    """Convert a term to a compact debugging string.

    Atoms print their label (or ``#handle``), variables print as ``?T3``
    and sequences as bracketed lists.
    """
    match term:
        case Atom(handle=handle, label=label):
            return label or f"#{handle}"
        case Variable():
            return str(term)
        case Sequence(items=items):
            return "[" + ", ".join(describe_term(item) for item in items) + "]"
