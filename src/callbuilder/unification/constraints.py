"""Equations relating the operations of an accumulator style.

Each equation says two terms must be equal. A system of equations is
solved in one call by bundling the left and right sides into two
sequences of the same length, one position per equation.
"""

from __future__ import annotations

from dataclasses import dataclass

from callbuilder.unification.solver import UnificationFailure, unify
from callbuilder.unification.terms import Sequence, Term, describe_term


@dataclass(frozen=True)
class Equation:
    """Two terms that must unify.

    Attributes:
        left: Left-hand term
        right: Right-hand term
        reason: Which relationship between operations this encodes

    """

    left: Term
    right: Term
    reason: str

    def __str__(self) -> str:
        return f"{describe_term(self.left)} = {describe_term(self.right)}"


def bundle(equations: list[Equation]) -> tuple[Sequence, Sequence]:
    """Pack equations into a pair of equal-length sequences."""
    lhs = Sequence(tuple(eq.left for eq in equations))
    rhs = Sequence(tuple(eq.right for eq in equations))
    return lhs, rhs


def first_conflict(equations: list[Equation]) -> Equation | None:
    """Find the first equation that cannot be added to the ones before it.

    Returns None when the whole system is satisfiable.
    """
    for count in range(1, len(equations) + 1):
        if isinstance(unify(*bundle(equations[:count])), UnificationFailure):
            return equations[count - 1]
    return None
