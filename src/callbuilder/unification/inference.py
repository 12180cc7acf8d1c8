"""Type inference for accumulator fields.

A styled builder field is created by the style's ``start`` operation,
updated by its modifiers, and turned into the value the original method
expects by ``finish``. The field's type is whatever makes these three
equations hold at once:

    start() return type   = field
    field                 = finish() parameter type
    finish() return type  = type the original method expects

``start`` and ``finish`` may declare their own generic parameters, so
each one gets fresh unification variables for them. The consumer type
is encoded as is: generic parameters of the annotated method are
constants here.

Example:
    start:    <T> Builder<T> start()
    finish:   <T> List<T> finish(Builder<T> b)
    consumer: List<String>

    field type = Builder<String>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from callbuilder.errors import MalformedStyleDefinition
from callbuilder.unification.constraints import Equation, bundle, first_conflict
from callbuilder.unification.registry import TermRegistry
from callbuilder.unification.solver import UnificationFailure, unify
from callbuilder.unification.terms import Term, describe_term, free_variables

if TYPE_CHECKING:
    from callbuilder.descriptions import Signature, TypeDescription


@dataclass(frozen=True)
class Indeterminate:
    """Inference did not produce a type.

    Never raised; returned in place of a type so that callers can decide
    whether to skip the member or fail the generation.

    Attributes:
        reason: Human-readable explanation
        failure: The solver's failure, when unification failed
        equation: The first equation that conflicts, when known

    """

    reason: str
    failure: UnificationFailure | None = None
    equation: Equation | None = None

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        parts = [self.reason]
        if self.equation is not None:
            parts.append(f"  Equation: {self.equation.reason}")
        if self.failure is not None:
            parts.append(f"  Detail:   {self.failure}")
        return "\n".join(parts)


def check_style_pair(
    initializer: Signature | None,
    finisher: Signature | None,
    style: str = "<anonymous>",
) -> tuple[Signature, Signature]:
    """Reject a start/finish pair that inference cannot use.

    Returns:
        The pair, once checked

    Raises:
        MalformedStyleDefinition: If an operation is missing or ``finish``
            does not take exactly one parameter

    """
    if initializer is None:
        raise MalformedStyleDefinition(style, "could not find start() operation")
    if finisher is None:
        raise MalformedStyleDefinition(style, "could not find finish() operation")
    if len(finisher.parameters) != 1:
        raise MalformedStyleDefinition(
            style,
            f"finish() must take exactly one parameter, "
            f"takes {len(finisher.parameters)}",
        )
    return initializer, finisher


class FieldInference:
    """The solved type of one accumulator field.

    Holds the registry that encoded the field's constraints, so that
    modifiers are encoded against the same atoms.
    """

    def __init__(self, registry: TermRegistry, field_term: Term) -> None:
        self.registry = registry
        self.field_term = field_term

    def __repr__(self) -> str:
        return f"FieldInference({self.field_type!r})"

    @property
    def field_type(self) -> str:
        """Text of the builder field's type, e.g. ``Builder<String>``."""
        return self.registry.render(self.field_term)

    @classmethod
    def for_field(
        cls,
        initializer: Signature | None,
        finisher: Signature | None,
        consumer_type: TypeDescription,
        style: str = "<anonymous>",
    ) -> FieldInference | Indeterminate:
        """Infer the field type for a style's start/finish pair.

        Args:
            initializer: The style's ``start`` operation
            finisher: The style's ``finish`` operation
            consumer_type: Parameter type of the annotated method
            style: Style name used in error messages

        Returns:
            A FieldInference, or Indeterminate if no consistent field
            type exists.

        Raises:
            MalformedStyleDefinition: If the pair is unusable
            UnsupportedTypeDescription: If a type cannot be encoded

        """
        initializer, finisher = check_style_pair(initializer, finisher, style)

        registry = TermRegistry()
        field_var = registry.fresh_variable("F")
        start_vars = registry.type_parameters(initializer)
        finish_vars = registry.type_parameters(finisher)

        equations = [
            Equation(
                registry.encode(initializer.return_type, start_vars),
                field_var,
                "start() return type matches the builder field",
            ),
            Equation(
                field_var,
                registry.encode(finisher.parameters[0].type, finish_vars),
                "finish() parameter type matches the builder field",
            ),
            Equation(
                registry.encode(finisher.return_type, finish_vars),
                registry.encode(consumer_type),
                "finish() return type matches the annotated parameter",
            ),
        ]
        logger.debug(
            "inference.field.equations style={} equations={}",
            style,
            "; ".join(str(eq) for eq in equations),
        )

        result = unify(*bundle(equations))
        if isinstance(result, UnificationFailure):
            logger.debug("inference.field.failed style={} detail={}", style, result)
            return Indeterminate(
                f"could not infer the builder field type for style {style}",
                failure=result,
                equation=first_conflict(equations),
            )

        field_term = result.resolve(field_var)
        if free_variables(field_term):
            logger.debug(
                "inference.field.unresolved style={} term={}",
                style,
                describe_term(field_term),
            )
            return Indeterminate(
                f"builder field type for style {style} is not fully determined: "
                f"{describe_term(field_term)}",
            )

        inference = cls(registry, field_term)
        logger.debug(
            "inference.field.solved style={} type={}",
            style,
            inference.field_type,
        )
        return inference

    def modifier_parameter_types(self, modifier: Signature) -> list[str] | Indeterminate:
        """Infer the parameter types of the wrapper generated for a modifier.

        The modifier's first parameter is the field itself and is not
        part of the result.

        Returns:
            Types of the remaining parameters, in order, or Indeterminate
            if the modifier does not fit this field.

        Raises:
            MalformedStyleDefinition: If the modifier has no parameters
            UnsupportedTypeDescription: If a type cannot be encoded

        """
        if not modifier.parameters:
            raise MalformedStyleDefinition(
                modifier.name,
                "a modifier must take the builder field as its first parameter",
            )

        overrides = self.registry.type_parameters(modifier)
        result = unify(
            self.field_term,
            self.registry.encode(modifier.return_type, overrides),
        )
        if isinstance(result, UnificationFailure):
            logger.debug(
                "inference.modifier.failed modifier={} detail={}",
                modifier.name,
                result,
            )
            return Indeterminate(
                f"return type of {modifier.name}() does not match "
                f"the builder field type {self.field_type}",
                failure=result,
            )

        types: list[str] = []
        for parameter in modifier.parameters[1:]:
            resolved = result.resolve(self.registry.encode(parameter.type, overrides))
            if free_variables(resolved):
                return Indeterminate(
                    f"type of parameter {parameter.name} of {modifier.name}() "
                    f"is not determined by the builder field type {self.field_type}",
                )
            types.append(self.registry.render(resolved))

        logger.debug(
            "inference.modifier.solved modifier={} parameters={}",
            modifier.name,
            types,
        )
        return types


def infer_accumulator_type(
    initializer: Signature | None,
    finisher: Signature | None,
    consumer_type: TypeDescription,
) -> FieldInference | Indeterminate:
    """Infer the accumulator field type; see ``FieldInference.for_field``."""
    return FieldInference.for_field(initializer, finisher, consumer_type)


def infer_modifier_parameter_types(
    inference: FieldInference,
    modifier: Signature,
) -> list[str] | Indeterminate:
    """Infer a generated modifier's parameter types for a solved field."""
    return inference.modifier_parameter_types(modifier)
