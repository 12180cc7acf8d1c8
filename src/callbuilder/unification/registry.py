"""Encoding of type descriptions as terms, and rendering back to text.

A ``TermRegistry`` is the arena for one inference attempt. It interns
atoms so that the same type name always maps to the same atom instance,
hands out fresh variables, and remembers the text of every atom so a
resolved term can be rendered as a type reference again.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger

from callbuilder.descriptions import (
    ArrayType,
    DeclaredType,
    PrimitiveType,
    TypeVariableRef,
    canonical_text,
)
from callbuilder.errors import (
    InferenceError,
    UnresolvedTypeVariable,
    UnsupportedTypeDescription,
)
from callbuilder.unification.terms import Atom, Sequence, Term, Variable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from callbuilder.descriptions import Signature, TypeDescription


class TermRegistry:
    """Bijection between atoms and the text of the types they stand for.

    Allocation is serialized, so modifiers of one field may be inferred
    from several threads against the same registry.
    """

    def __init__(self) -> None:
        self._atoms: list[Atom] = []
        self._text_of: dict[Atom, str] = {}
        self._atom_of: dict[str, Atom] = {}
        self._next_variable = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._atoms)

    def atom(self, text: str) -> Atom:
        """Return the atom for ``text``, allocating it on first use."""
        with self._lock:
            found = self._atom_of.get(text)
            if found is None:
                found = Atom(len(self._atoms), text)
                self._atoms.append(found)
                self._atom_of[text] = found
                self._text_of[found] = text
            return found

    def fresh_variable(self, hint: str = "") -> Variable:
        """Allocate a variable no other term refers to yet."""
        with self._lock:
            var = Variable(self._next_variable, hint)
            self._next_variable += 1
        return var

    def type_parameters(self, signature: Signature) -> dict[str, Variable]:
        """Fresh variables for the operation's own generic parameters.

        Each call allocates new variables, so two operations that both
        declare ``T`` never share one.
        """
        return {name: self.fresh_variable(name) for name in signature.type_parameters}

    def encode(
        self,
        description: TypeDescription,
        overrides: Mapping[str, Variable] | None = None,
    ) -> Term:
        """Encode a type description as a term.

        Args:
            description: The type to encode
            overrides: Generic parameter names that become variables.
                Every other type variable is treated as a constant.

        Returns:
            A Sequence for declared types, a Variable for overridden
            type parameters, and an Atom otherwise.

        Raises:
            UnsupportedTypeDescription: For wildcards, intersections and
                anything that is not a type description

        """
        overrides = overrides or {}
        match description:
            case TypeVariableRef(name=name) if name in overrides:
                return overrides[name]
            case DeclaredType(name=name, arguments=arguments):
                head = self.atom(name)
                args = tuple(self.encode(arg, overrides) for arg in arguments)
                return Sequence((head, *args))
            case PrimitiveType() | ArrayType() | TypeVariableRef():
                return self.atom(canonical_text(description))
            case _:
                logger.debug("registry.encode.unsupported description={!r}", description)
                raise UnsupportedTypeDescription(description)

    def render(self, term: Term) -> str:
        """Render a resolved term as a type reference.

        This is the inverse of ``encode`` for terms without variables:
        a sequence renders as its head followed by ``<arg1, arg2>`` when
        it has arguments.

        Raises:
            UnresolvedTypeVariable: If the term still contains a variable
            InferenceError: If an atom was allocated by another registry

        """
        match term:
            case Atom():
                text = self._text_of.get(term)
                if text is None:
                    msg = f"{term!r} was not allocated by this registry"
                    raise InferenceError(msg)
                return text
            case Variable():
                raise UnresolvedTypeVariable(term)
            case Sequence(items=(head, *arguments)):
                rendered = self.render(head)
                if arguments:
                    args_str = ", ".join(self.render(arg) for arg in arguments)
                    rendered += f"<{args_str}>"
                return rendered
            case _:
                msg = f"Cannot render term: {term!r}"
                raise InferenceError(msg)


def render_type(term: Term, registry: TermRegistry) -> str:
    """Render a term through the registry that encoded it."""
    return registry.render(term)
