"""Accumulator styles.

A style is a set of operations that together fill one builder field:

    start()                   creates the accumulator
    <modifier>(field, ...)    returns the updated accumulator
    finish(field)             produces the value the annotated method expects

Any operation not named ``start`` or ``finish`` is a modifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from callbuilder.errors import MalformedStyleDefinition
from callbuilder.formats.text import parse_signature
from callbuilder.unification.inference import check_style_pair

if TYPE_CHECKING:
    from collections.abc import Iterable

    from callbuilder.descriptions import Signature


@dataclass(frozen=True)
class FieldStyle:
    """The operations of one accumulator style.

    Attributes:
        name: Name of the style, e.g. ``ArrayListAdding``
        start: Operation creating the accumulator
        finish: Operation converting the accumulator to the final value
        modifiers: Operations updating the accumulator, in declaration order

    """

    name: str
    start: Signature
    finish: Signature
    modifiers: tuple[Signature, ...] = ()

    @classmethod
    def from_operations(cls, name: str, operations: Iterable[Signature]) -> FieldStyle:
        """Sort a style's operations into start, finish and modifiers.

        Raises:
            MalformedStyleDefinition: If ``start`` or ``finish`` is missing,
                ``finish`` does not take exactly one parameter, or a
                modifier takes no parameters

        """
        start: Signature | None = None
        finish: Signature | None = None
        modifiers: list[Signature] = []
        for operation in operations:
            if operation.name == "start":
                start = operation
            elif operation.name == "finish":
                finish = operation
            else:
                if not operation.parameters:
                    raise MalformedStyleDefinition(
                        name,
                        f"modifier {operation.name}() must take the builder "
                        f"field as its first parameter",
                    )
                modifiers.append(operation)

        start, finish = check_style_pair(start, finish, name)
        return cls(name, start, finish, tuple(modifiers))

    @classmethod
    def parse(
        cls,
        name: str,
        *signatures: str,
        type_variables: Iterable[str] = (),
    ) -> FieldStyle:
        """Build a style from signature text, see ``parse_signature``."""
        variables = tuple(type_variables)
        return cls.from_operations(
            name,
            (parse_signature(text, variables) for text in signatures),
        )

    def operations(self) -> tuple[Signature, ...]:
        return (self.start, self.finish, *self.modifiers)


ARRAY_LIST_ADDING = FieldStyle.parse(
    "ArrayListAdding",
    "<T> java.util.ArrayList<T> start()",
    "<T> java.util.ArrayList<T> finish(java.util.ArrayList<T> list)",
    "<T> java.util.ArrayList<T> addTo(java.util.ArrayList<T> to, T item)",
    "<T, E> java.util.ArrayList<T> addAllTo("
    "java.util.ArrayList<T> to, java.lang.Iterable<T> items)",
)

IMMUTABLE_LIST_ADDING = FieldStyle.parse(
    "ImmutableListAdding",
    "<E> com.google.common.collect.ImmutableList.Builder<E> start()",
    "<E> com.google.common.collect.ImmutableList<E> finish("
    "com.google.common.collect.ImmutableList.Builder<E> from)",
    "<E> com.google.common.collect.ImmutableList.Builder<E> addTo("
    "com.google.common.collect.ImmutableList.Builder<E> start, E item)",
    "<E> com.google.common.collect.ImmutableList.Builder<E> addAllTo("
    "com.google.common.collect.ImmutableList.Builder<E> start, "
    "java.lang.Iterable<E> items)",
)

OPTIONAL_SETTING = FieldStyle.parse(
    "OptionalSetting",
    "<E> com.google.common.base.Optional<E> start()",
    "<E> com.google.common.base.Optional<E> finish("
    "com.google.common.base.Optional<E> from)",
    "<E> com.google.common.base.Optional<E> set("
    "com.google.common.base.Optional<E> start, E value)",
)

STRING_APPENDING = FieldStyle.parse(
    "StringAppending",
    "java.lang.StringBuilder start()",
    "java.lang.String finish(java.lang.StringBuilder from)",
    "java.lang.StringBuilder appendTo(java.lang.StringBuilder start, "
    "java.lang.String value)",
)

BUILTIN_STYLES: dict[str, FieldStyle] = {
    style.name: style
    for style in (
        ARRAY_LIST_ADDING,
        IMMUTABLE_LIST_ADDING,
        OPTIONAL_SETTING,
        STRING_APPENDING,
    )
}
