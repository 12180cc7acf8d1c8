"""Unification solver and substitution resolution.

``unify`` finds a substitution that makes two terms equal, or returns a
``UnificationFailure`` describing the first pair that could not be made
equal. Mismatches are ordinary results here; nothing in this module
raises for them.

There is no occurs check. A variable may be bound to a sequence that
contains it, and ``Substitution.resolve`` reports such a cycle with
``CyclicSubstitutionError`` instead of looping.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from callbuilder.errors import CyclicSubstitutionError
from callbuilder.unification.terms import (
    Atom,
    Sequence,
    Term,
    Variable,
    describe_term,
)


@dataclass(frozen=True)
class Substitution:
    """An immutable mapping from variables to terms.

    Values may mention variables bound by other entries; ``resolve``
    follows those chains, ``apply`` does a single pass.
    """

    bindings: Mapping[Variable, Term] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bindings", MappingProxyType(dict(self.bindings)))

    def __contains__(self, var: object) -> bool:
        return var in self.bindings

    def __getitem__(self, var: Variable) -> Term:
        return self.bindings[var]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __bool__(self) -> bool:
        # An empty substitution is still a successful unification.
        return True

    def __repr__(self) -> str:
        items = ", ".join(
            f"{var}: {describe_term(term)}" for var, term in self.bindings.items()
        )
        return f"Substitution({{{items}}})"

    def get(self, var: Variable, default: Term | None = None) -> Term | None:
        return self.bindings.get(var, default)

    def apply(self, term: Term) -> Term:
        """Replace every bound variable in ``term`` by its value, once.

        Values substituted in are not themselves rewritten; see
        ``resolve`` for that.
        """
        match term:
            case Variable():
                return self.bindings.get(term, term)
            case Sequence(items=items):
                return Sequence(tuple(self.apply(item) for item in items))
            case _:
                return term

    def union(self, other: Substitution) -> Substitution:
        """Combine two substitutions, entries of ``other`` winning on collision."""
        if not other.bindings:
            return self
        merged = dict(self.bindings)
        merged.update(other.bindings)
        return Substitution(merged)

    def resolve(self, term: Term) -> Term:
        """Apply the substitution repeatedly until nothing changes.

        An acyclic substitution with n bindings reaches its fixpoint in at
        most n + 1 passes, so anything longer is a cycle.

        Args:
            term: The term to resolve

        Returns:
            The most concrete form of ``term``

        Raises:
            CyclicSubstitutionError: If a binding refers back to itself

        """
        limit = len(self.bindings) + 1
        current = term
        for _ in range(limit):
            previous, current = current, self.apply(current)
            if current == previous:
                return current
        raise CyclicSubstitutionError(term=term, passes=limit)


EMPTY = Substitution()


@dataclass(frozen=True)
class UnificationFailure:
    """Two terms could not be unified.

    Attributes:
        left: The left-hand term of the innermost mismatch
        right: The right-hand term of the innermost mismatch
        reason: Why the pair does not unify

    """

    left: Term
    right: Term
    reason: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return (
            f"cannot unify {describe_term(self.left)} "
            f"with {describe_term(self.right)}: {self.reason}"
        )


def unify(lhs: Term, rhs: Term) -> Substitution | UnificationFailure:
    """Unify two terms.

    Args:
        lhs: The left-hand term
        rhs: The right-hand term

    Returns:
        A Substitution making the terms equal, or a UnificationFailure.

    Examples:
        >>> x = Variable(0)
        >>> a = Atom(1, "a")
        >>> unify(x, a)
        Substitution({?0: a})

    """
    match (lhs, rhs):
        case (Variable(), Variable()) if lhs is rhs:
            return EMPTY
        case (Variable(), _):
            return Substitution({lhs: rhs})
        case (_, Variable()):
            return Substitution({rhs: lhs})
        case (Atom(), Atom()):
            if lhs is rhs:
                return EMPTY
            return UnificationFailure(lhs, rhs, "distinct atoms")
        case (Sequence(items=left_items), Sequence(items=right_items)):
            return _unify_items(lhs, rhs, left_items, right_items)
        case _:
            return UnificationFailure(lhs, rhs, "atom and sequence")


def _unify_items(
    lhs: Sequence,
    rhs: Sequence,
    left_items: tuple[Term, ...],
    right_items: tuple[Term, ...],
) -> Substitution | UnificationFailure:
    """Unify two sequences position by position.

    The substitution found for each position is applied to the remaining
    positions of both sides before they are unified in turn.
    """
    if len(left_items) != len(right_items):
        return UnificationFailure(
            lhs,
            rhs,
            f"length {len(left_items)} does not match length {len(right_items)}",
        )

    result = EMPTY
    while left_items:
        step = unify(left_items[0], right_items[0])
        if isinstance(step, UnificationFailure):
            return step
        left_items = tuple(step.apply(item) for item in left_items[1:])
        right_items = tuple(step.apply(item) for item in right_items[1:])
        result = result.union(step)
    return result
