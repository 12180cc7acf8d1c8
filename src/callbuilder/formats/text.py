"""Java-like text syntax for type descriptions and signatures.

    parse_type("java.util.Map<K, java.util.List<V>>", type_variables=("K", "V"))
    parse_signature("<T> java.util.ArrayList<T> addTo(java.util.ArrayList<T> to, T item)")

Names are taken as written; nothing is resolved against imports. A
name listed in ``type_variables`` (or declared by the signature itself)
becomes a ``TypeVariableRef``, a primitive keyword becomes a
``PrimitiveType`` and anything else a ``DeclaredType``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from callbuilder.descriptions import (
    PRIMITIVE_NAMES,
    ArrayType,
    DeclaredType,
    Parameter,
    PrimitiveType,
    Signature,
    TypeDescription,
    TypeVariableRef,
    WildcardType,
)
from callbuilder.errors import TypeSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterable

_TOKEN = re.compile(r"\s*(?:([A-Za-z_$][\w$]*)|(\S))")


def _tokenize(text: str) -> list[tuple[str, int]]:
    tokens: list[tuple[str, int]] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            break
        token = match.group(1) or match.group(2)
        tokens.append((token, match.start(1) if match.group(1) else match.start(2)))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str, type_variables: Iterable[str]) -> None:
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0
        self.type_variables = set(type_variables)

    def peek(self) -> str | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index][0]
        return None

    def error(self, message: str) -> TypeSyntaxError:
        if self.index < len(self.tokens):
            position = self.tokens[self.index][1]
        else:
            position = len(self.text)
        return TypeSyntaxError(self.text, position, message)

    def take(self) -> str:
        token = self.peek()
        if token is None:
            raise self.error("unexpected end of input")
        self.index += 1
        return token

    def expect(self, expected: str) -> None:
        token = self.peek()
        if token != expected:
            raise self.error(f"expected {expected!r}, found {token!r}")
        self.index += 1

    def accept(self, expected: str) -> bool:
        if self.peek() == expected:
            self.index += 1
            return True
        return False

    def identifier(self) -> str:
        token = self.peek()
        if token is None or not (token[0].isalpha() or token[0] in "_$"):
            raise self.error(f"expected an identifier, found {token!r}")
        self.index += 1
        return token

    def end(self) -> None:
        if self.peek() is not None:
            raise self.error(f"unexpected {self.peek()!r}")

    def type_parameters(self) -> tuple[str, ...]:
        if not self.accept("<"):
            return ()
        names = [self.identifier()]
        while self.accept(","):
            names.append(self.identifier())
        if self.peek() == "extends":
            raise self.error("bounded type parameters are not supported")
        self.expect(">")
        self.type_variables.update(names)
        return tuple(names)

    def type(self) -> TypeDescription:
        if self.accept("?"):
            if self.peek() in ("extends", "super"):
                kind = self.take()
                return WildcardType(self.type(), kind)  # type: ignore[arg-type]
            return WildcardType()

        name = self.identifier()
        while self.accept("."):
            name += "." + self.identifier()

        result: TypeDescription
        if name in PRIMITIVE_NAMES:
            result = PrimitiveType(name)
        elif name in self.type_variables:
            result = TypeVariableRef(name)
        else:
            arguments: list[TypeDescription] = []
            if self.accept("<"):
                arguments.append(self.type())
                while self.accept(","):
                    arguments.append(self.type())
                self.expect(">")
            result = DeclaredType(name, tuple(arguments))

        while self.accept("["):
            self.expect("]")
            result = ArrayType(result)
        return result

    def parameter(self) -> Parameter:
        param_type = self.type()
        return Parameter(self.identifier(), param_type)

    def signature(self) -> Signature:
        type_parameters = self.type_parameters()
        return_type = self.type()
        name = self.identifier()
        self.expect("(")
        parameters: list[Parameter] = []
        if not self.accept(")"):
            parameters.append(self.parameter())
            while self.accept(","):
                parameters.append(self.parameter())
            self.expect(")")
        return Signature(name, type_parameters, tuple(parameters), return_type)


def parse_type(text: str, type_variables: Iterable[str] = ()) -> TypeDescription:
    """Parse a type description from text.

    Args:
        text: Type text, e.g. ``java.util.List<T>[]``
        type_variables: Names to read as type variable references

    Returns:
        The parsed description

    Raises:
        TypeSyntaxError: If the text is not a well-formed type

    """
    parser = _Parser(text, type_variables)
    result = parser.type()
    parser.end()
    return result


def parse_signature(text: str, type_variables: Iterable[str] = ()) -> Signature:
    """Parse an operation signature from text.

    The signature's own type parameters are read as type variables in
    its return and parameter types, in addition to ``type_variables``.

    Raises:
        TypeSyntaxError: If the text is not a well-formed signature

    """
    parser = _Parser(text, type_variables)
    result = parser.signature()
    parser.end()
    return result
