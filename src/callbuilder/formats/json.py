"""JSON format for generation requests and plans.

A request names the annotated methods to plan, and optionally defines
extra styles next to the built-in ones:

    {
      "styles": {
        "SetAdding": [
          "<E> java.util.HashSet<E> start()",
          "<E> java.util.Set<E> finish(java.util.HashSet<E> set)",
          "<E> java.util.HashSet<E> addTo(java.util.HashSet<E> set, E item)"
        ]
      },
      "methods": [
        {
          "name": "Lists.<init>",
          "type_variables": [],
          "parameters": [
            {"name": "first", "type": "java.util.ArrayList<java.lang.String>",
             "style": "ArrayListAdding"}
          ]
        }
      ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from callbuilder.descriptions import Parameter
from callbuilder.errors import MalformedStyleDefinition
from callbuilder.fields import MethodPlan, plan_method
from callbuilder.formats.text import parse_type
from callbuilder.styles import BUILTIN_STYLES, FieldStyle
from callbuilder.unification.inference import Indeterminate

if TYPE_CHECKING:
    from collections.abc import Iterable

    from callbuilder.fields import FieldPlan


@dataclass(frozen=True)
class MethodRequest:
    """One annotated method to plan."""

    name: str
    parameters: tuple[Parameter, ...]
    styles: dict[str, FieldStyle] = field(default_factory=dict)

    def plan(self) -> MethodPlan:
        return plan_method(self.name, self.parameters, self.styles)


@dataclass(frozen=True)
class GenerationRequest:
    """A parsed request document."""

    styles: dict[str, FieldStyle]
    methods: tuple[MethodRequest, ...]


def _expect(value: Any, kind: type, path: str) -> Any:
    if not isinstance(value, kind):
        expected = {dict: "an object", list: "an array", str: "a string"}[kind]
        msg = f"{path}: expected {expected}, got {type(value).__name__}"
        raise ValueError(msg)  # noqa: TRY004
    return value


def _member(entry: dict[str, Any], key: str, kind: type, path: str) -> Any:
    if key not in entry:
        msg = f"{path}: missing '{key}'"
        raise ValueError(msg)
    return _expect(entry[key], kind, f"{path}.{key}")


def from_builtins(data: dict[str, Any]) -> GenerationRequest:
    """Build a request from decoded JSON data.

    Raises:
        MalformedStyleDefinition: If a style is malformed or unknown
        TypeSyntaxError: If a type or signature does not parse
        ValueError: If the document does not have the expected shape,
            naming the offending path, e.g. ``methods[0].parameters[1]``

    """
    if not isinstance(data, dict):
        msg = "Expected a JSON object with a 'methods' field"
        raise ValueError(msg)  # noqa: TRY004

    styles = dict(BUILTIN_STYLES)
    custom = _expect(data.get("styles", {}), dict, "styles")
    for name, signatures in custom.items():
        path = f"styles.{name}"
        _expect(signatures, list, path)
        for i, signature in enumerate(signatures):
            _expect(signature, str, f"{path}[{i}]")
        styles[name] = FieldStyle.parse(name, *signatures)

    methods: list[MethodRequest] = []
    for m, entry in enumerate(_expect(data.get("methods", []), list, "methods")):
        path = f"methods[{m}]"
        _expect(entry, dict, path)
        method_name = _member(entry, "name", str, path)
        declared = _expect(entry.get("type_variables", []), list, f"{path}.type_variables")
        type_variables = tuple(
            _expect(v, str, f"{path}.type_variables[{i}]") for i, v in enumerate(declared)
        )
        parameters: list[Parameter] = []
        chosen: dict[str, FieldStyle] = {}
        for p, param in enumerate(
            _expect(entry.get("parameters", []), list, f"{path}.parameters"),
        ):
            param_path = f"{path}.parameters[{p}]"
            _expect(param, dict, param_path)
            name = _member(param, "name", str, param_path)
            text = _member(param, "type", str, param_path)
            parameters.append(Parameter(name, parse_type(text, type_variables)))
            style_name = param.get("style")
            if style_name is None:
                continue
            _expect(style_name, str, f"{param_path}.style")
            if style_name not in styles:
                raise MalformedStyleDefinition(style_name, "unknown style")
            chosen[name] = styles[style_name]
        methods.append(MethodRequest(method_name, tuple(parameters), chosen))

    return GenerationRequest(styles, tuple(methods))


def from_json(s: str) -> GenerationRequest:
    """Parse a request document from a JSON string."""
    return from_builtins(json.loads(s))


def plan_to_builtins(plan: MethodPlan) -> dict[str, Any]:
    """Convert a method plan to JSON-compatible data.

    Indeterminate types become ``null`` with the reason alongside.
    """
    return {
        "method": plan.name,
        "fields": [_field_to_builtins(f) for f in plan.fields],
    }


def _field_to_builtins(plan: FieldPlan) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": plan.name,
        "style": plan.info.style.name if plan.info.style else None,
    }
    if isinstance(plan.field_type, Indeterminate):
        data["type"] = None
        data["reason"] = str(plan.field_type)
    else:
        data["type"] = plan.field_type
    if plan.setter_name is not None:
        data["setter"] = plan.setter_name
    data["modifiers"] = []
    for modifier in plan.modifiers:
        entry: dict[str, Any] = {
            "name": modifier.method_name,
            "calls": modifier.name,
            "parameter_names": list(modifier.parameter_names),
        }
        if isinstance(modifier.parameter_types, Indeterminate):
            entry["parameter_types"] = None
            entry["reason"] = str(modifier.parameter_types)
        else:
            entry["parameter_types"] = list(modifier.parameter_types)
        data["modifiers"].append(entry)
    return data


def to_json(plans: Iterable[MethodPlan], *, indent: int | None = 2) -> str:
    """Serialize method plans to a JSON string."""
    return json.dumps([plan_to_builtins(p) for p in plans], indent=indent)
