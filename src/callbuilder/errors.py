"""Error types raised by the inference engine.

Unification mismatches are not errors: they are reported as
``UnificationFailure`` values by the solver and as ``Indeterminate``
results by the inference layer. The exceptions here cover the cases
where a builder cannot be generated at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from callbuilder.unification.terms import Term, Variable


class InferenceError(Exception):
    """Base class for errors raised by callbuilder."""


@dataclass
class UnsupportedTypeDescription(InferenceError):
    """A type description of a kind the encoder cannot represent.

    Wildcards and intersections have no term encoding. The error is fatal
    for the field being inferred only.
    """

    description: object
    context: str = ""

    def __str__(self) -> str:
        from callbuilder.descriptions import canonical_text  # noqa: PLC0415

        try:
            shown = canonical_text(self.description)  # type: ignore[arg-type]
        except TypeError:
            shown = repr(self.description)
        where = f" in {self.context}" if self.context else ""
        return f"type is not supported for use in a builder{where}: {shown}"


@dataclass
class MalformedStyleDefinition(InferenceError):
    """An accumulator style is missing operations or declares them wrongly."""

    style: str
    problem: str

    def __str__(self) -> str:
        return f"malformed style {self.style}: {self.problem}"


@dataclass
class CyclicSubstitutionError(InferenceError):
    """Resolving a term did not reach a fixpoint.

    Raised when a substitution binds a variable to a term that contains
    it, directly or through other bindings.
    """

    term: Term
    passes: int

    def __str__(self) -> str:
        from callbuilder.unification.terms import describe_term  # noqa: PLC0415

        return (
            f"cyclic substitution: {describe_term(self.term)} "
            f"did not resolve after {self.passes} passes"
        )


@dataclass
class UnresolvedTypeVariable(InferenceError):
    """A term still containing a unification variable was rendered as text."""

    variable: Variable

    def __str__(self) -> str:
        return f"cannot render unresolved type variable {self.variable}"


@dataclass
class TypeSyntaxError(InferenceError):
    """Textual type or signature syntax could not be parsed."""

    text: str
    position: int
    message: str

    def __str__(self) -> str:
        pointer = " " * self.position + "^"
        return f"{self.message} at column {self.position}\n  {self.text}\n  {pointer}"

