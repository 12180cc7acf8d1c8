"""callbuilder - accumulator type inference for builder code generation."""

from loguru import logger

from callbuilder.descriptions import (
    ArrayType,
    DeclaredType,
    IntersectionType,
    Parameter,
    PrimitiveType,
    Signature,
    TypeDescription,
    TypeVariableRef,
    WildcardType,
    canonical_text,
)
from callbuilder.errors import (
    CyclicSubstitutionError,
    InferenceError,
    MalformedStyleDefinition,
    TypeSyntaxError,
    UnresolvedTypeVariable,
    UnsupportedTypeDescription,
)
from callbuilder.fields import (
    FieldInfo,
    FieldPlan,
    MethodPlan,
    ModifierPlan,
    plan_field,
    plan_fields,
    plan_method,
)
from callbuilder.formats.text import parse_signature, parse_type
from callbuilder.styles import BUILTIN_STYLES, FieldStyle
from callbuilder.unification import (
    FieldInference,
    Indeterminate,
    TermRegistry,
    infer_accumulator_type,
    infer_modifier_parameter_types,
    render_type,
)

logger.disable("callbuilder")

__all__ = [
    # Type descriptions
    "BUILTIN_STYLES",
    "ArrayType",
    # Errors
    "CyclicSubstitutionError",
    "DeclaredType",
    # Inference
    "FieldInference",
    # Planning
    "FieldInfo",
    "FieldPlan",
    "FieldStyle",
    "Indeterminate",
    "InferenceError",
    "IntersectionType",
    "MalformedStyleDefinition",
    "MethodPlan",
    "ModifierPlan",
    "Parameter",
    "PrimitiveType",
    "Signature",
    "TermRegistry",
    "TypeDescription",
    "TypeSyntaxError",
    "TypeVariableRef",
    "UnresolvedTypeVariable",
    "UnsupportedTypeDescription",
    "WildcardType",
    "canonical_text",
    "infer_accumulator_type",
    "infer_modifier_parameter_types",
    "parse_signature",
    "parse_type",
    "plan_field",
    "plan_fields",
    "plan_method",
    "render_type",
]
