"""Host type descriptions consumed by the inference engine.

These are the opaque inputs a type-reflection facility hands to the
engine: a description of a type (primitive, array, declared, type
variable reference, ...) and the signature of an operation built from
those descriptions. The engine never resolves names itself; a
``DeclaredType`` already carries its canonical base name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

PRIMITIVE_NAMES = frozenset(
    {"boolean", "byte", "char", "double", "float", "int", "long", "short"},
)


@dataclass(frozen=True)
class PrimitiveType:
    """A primitive type such as ``int`` or ``boolean``."""

    name: str


@dataclass(frozen=True)
class ArrayType:
    """An array of some component type, e.g. ``String[]``."""

    component: TypeDescription


@dataclass(frozen=True)
class DeclaredType:
    """A class or interface type with optional type arguments.

    Examples:
        java.lang.String         -> DeclaredType("java.lang.String")
        java.util.List<T>        -> DeclaredType("java.util.List", (TypeVariableRef("T"),))

    """

    name: str
    arguments: tuple[TypeDescription, ...] = ()


@dataclass(frozen=True)
class TypeVariableRef:
    """A reference to a declared generic parameter by name."""

    name: str


@dataclass(frozen=True)
class WildcardType:
    """A wildcard type argument: ``?``, ``? extends X`` or ``? super X``."""

    bound: TypeDescription | None = None
    kind: Literal["extends", "super"] = "extends"


@dataclass(frozen=True)
class IntersectionType:
    """An intersection of bounds, e.g. ``Number & Comparable<T>``."""

    bounds: tuple[TypeDescription, ...]


TypeDescription: TypeAlias = (
    PrimitiveType
    | ArrayType
    | DeclaredType
    | TypeVariableRef
    | WildcardType
    | IntersectionType
)
"""Union of every kind of type description."""


@dataclass(frozen=True)
class Parameter:
    """A named parameter of an operation."""

    name: str
    type: TypeDescription


@dataclass(frozen=True)
class Signature:
    """The signature of a method or constructor.

    Attributes:
        name: Simple name of the operation
        type_parameters: Names of the operation's own generic parameters
        parameters: Ordered parameters
        return_type: Declared return type

    """

    name: str
    type_parameters: tuple[str, ...]
    parameters: tuple[Parameter, ...]
    return_type: TypeDescription

    def __str__(self) -> str:
        prefix = ""
        if self.type_parameters:
            prefix = "<" + ", ".join(self.type_parameters) + "> "
        params = ", ".join(
            f"{canonical_text(p.type)} {p.name}" for p in self.parameters
        )
        return f"{prefix}{canonical_text(self.return_type)} {self.name}({params})"


def canonical_text(description: TypeDescription) -> str:
    """Render a type description in its canonical textual form.

    Args:
        description: The type description to render

    Returns:
        Java-style text such as ``java.util.Map<K, V>`` or ``int[]``

    """
    match description:
        case PrimitiveType(name=name) | TypeVariableRef(name=name):
            return name
        case ArrayType(component=component):
            return f"{canonical_text(component)}[]"
        case DeclaredType(name=name, arguments=()):
            return name
        case DeclaredType(name=name, arguments=arguments):
            args_str = ", ".join(canonical_text(a) for a in arguments)
            return f"{name}<{args_str}>"
        case WildcardType(bound=None):
            return "?"
        case WildcardType(bound=bound, kind=kind):
            return f"? {kind} {canonical_text(bound)}"
        case IntersectionType(bounds=bounds):
            return " & ".join(canonical_text(b) for b in bounds)
    msg = f"Not a type description: {description!r}"
    raise TypeError(msg)
