"""Unification engine for accumulator field types.

The engine works in four steps:
1. Encode: type descriptions become terms (``TermRegistry.encode``)
2. Unify: equations between terms are solved (``unify``)
3. Resolve: a term is rewritten until fully concrete (``Substitution.resolve``)
4. Render: the resolved term becomes type text (``TermRegistry.render``)

Example usage:
    from callbuilder.formats.text import parse_signature, parse_type
    from callbuilder.unification import infer_accumulator_type

    inference = infer_accumulator_type(
        parse_signature("<T> Builder<T> start()"),
        parse_signature("<T> List<T> finish(Builder<T> b)"),
        parse_type("List<String>"),
    )
    if inference:
        print(inference.field_type)  # Builder<String>
"""

from callbuilder.unification.constraints import Equation, bundle, first_conflict
from callbuilder.unification.inference import (
    FieldInference,
    Indeterminate,
    check_style_pair,
    infer_accumulator_type,
    infer_modifier_parameter_types,
)
from callbuilder.unification.registry import TermRegistry, render_type
from callbuilder.unification.solver import Substitution, UnificationFailure, unify
from callbuilder.unification.terms import (
    Atom,
    Sequence,
    Term,
    Variable,
    describe_term,
    free_variables,
    seq,
)

__all__ = [
    "Atom",
    "Equation",
    "FieldInference",
    "Indeterminate",
    "Sequence",
    "Substitution",
    "Term",
    "TermRegistry",
    "UnificationFailure",
    "Variable",
    "bundle",
    "check_style_pair",
    "describe_term",
    "first_conflict",
    "free_variables",
    "infer_accumulator_type",
    "infer_modifier_parameter_types",
    "render_type",
    "seq",
    "unify",
]
