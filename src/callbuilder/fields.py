"""Planning of builder fields for one annotated method.

The plans describe everything a code emitter needs: the type of every
builder field, and for styled fields the wrapper methods to generate
with their parameter types. Fields or modifiers whose types could not be
inferred stay in the plan as ``Indeterminate`` so the emitter can skip
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from callbuilder.descriptions import canonical_text
from callbuilder.errors import UnsupportedTypeDescription
from callbuilder.unification.inference import FieldInference, Indeterminate

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from callbuilder.descriptions import Parameter
    from callbuilder.styles import FieldStyle


def capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]


@dataclass(frozen=True)
class FieldInfo:
    """An annotated method's parameter, and its style if it has one."""

    parameter: Parameter
    style: FieldStyle | None = None

    @property
    def name(self) -> str:
        """Field name, the same as the parameter's."""
        return self.parameter.name

    @property
    def finish_type(self) -> str:
        """Type of the value handed to the annotated method."""
        return canonical_text(self.parameter.type)


@dataclass(frozen=True)
class ModifierPlan:
    """A wrapper method generated for one modifier of a style.

    Attributes:
        name: The modifier's name, e.g. ``addTo``
        method_name: The generated method's name, e.g. ``addToFirst``
        parameter_names: Names of the non-field parameters
        parameter_types: Their inferred types, or Indeterminate

    """

    name: str
    method_name: str
    parameter_names: tuple[str, ...]
    parameter_types: tuple[str, ...] | Indeterminate

    @property
    def resolved(self) -> bool:
        return not isinstance(self.parameter_types, Indeterminate)


@dataclass(frozen=True)
class FieldPlan:
    """How one parameter becomes a builder field.

    Plain fields have no style and a setter; styled fields have an
    inferred field type and one modifier plan per modifier.
    """

    info: FieldInfo
    field_type: str | Indeterminate
    modifiers: tuple[ModifierPlan, ...] = ()

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def resolved(self) -> bool:
        return not isinstance(self.field_type, Indeterminate)

    @property
    def setter_name(self) -> str | None:
        if self.info.style is not None:
            return None
        return "set" + capitalize_first(self.name)


@dataclass(frozen=True)
class MethodPlan:
    """Field plans for every parameter of one annotated method."""

    name: str
    fields: tuple[FieldPlan, ...] = ()

    @property
    def indeterminate(self) -> list[str]:
        """Names of fields and modifiers whose types were not inferred."""
        names: list[str] = []
        for plan in self.fields:
            if not plan.resolved:
                names.append(plan.name)
            names.extend(m.method_name for m in plan.modifiers if not m.resolved)
        return names


def _in_field(
    exc: UnsupportedTypeDescription,
    info: FieldInfo,
    style: FieldStyle,
    modifier: str | None = None,
) -> UnsupportedTypeDescription:
    where = f"parameter {info.name} (style {style.name}"
    where += f", modifier {modifier})" if modifier else ")"
    return UnsupportedTypeDescription(exc.description, where)


def plan_field(info: FieldInfo) -> FieldPlan:
    """Infer the field and modifier types for one parameter.

    Raises:
        MalformedStyleDefinition: If the field's style is unusable
        UnsupportedTypeDescription: If a type cannot be encoded

    """
    style = info.style
    if style is None:
        return FieldPlan(info, info.finish_type)

    try:
        inference = FieldInference.for_field(
            style.start,
            style.finish,
            info.parameter.type,
            style.name,
        )
    except UnsupportedTypeDescription as exc:
        raise _in_field(exc, info, style) from exc
    if isinstance(inference, Indeterminate):
        logger.warning(
            "fields.indeterminate field={} style={} reason={}",
            info.name,
            style.name,
            inference,
        )
        return FieldPlan(info, inference)

    modifiers: list[ModifierPlan] = []
    for modifier in style.modifiers:
        try:
            types = inference.modifier_parameter_types(modifier)
        except UnsupportedTypeDescription as exc:
            raise _in_field(exc, info, style, modifier.name) from exc
        if isinstance(types, Indeterminate):
            logger.warning(
                "fields.modifier.skipped field={} modifier={} reason={}",
                info.name,
                modifier.name,
                types,
            )
        else:
            types = tuple(types)
        modifiers.append(
            ModifierPlan(
                name=modifier.name,
                method_name=modifier.name + capitalize_first(info.name),
                parameter_names=tuple(p.name for p in modifier.parameters[1:]),
                parameter_types=types,
            ),
        )
    return FieldPlan(info, inference.field_type, tuple(modifiers))


def plan_fields(
    parameters: Iterable[Parameter],
    styles: Mapping[str, FieldStyle | None] | None = None,
) -> tuple[FieldPlan, ...]:
    """Plan every parameter of a method.

    Args:
        parameters: The annotated method's parameters, in order
        styles: Style for each styled parameter, by parameter name

    """
    styles = styles or {}
    return tuple(
        plan_field(FieldInfo(parameter, styles.get(parameter.name)))
        for parameter in parameters
    )


def plan_method(
    name: str,
    parameters: Iterable[Parameter],
    styles: Mapping[str, FieldStyle | None] | None = None,
) -> MethodPlan:
    """Plan the builder fields of one annotated method."""
    plan = MethodPlan(name, plan_fields(parameters, styles))
    logger.debug(
        "fields.method.planned method={} fields={} indeterminate={}",
        name,
        len(plan.fields),
        plan.indeterminate,
    )
    return plan
