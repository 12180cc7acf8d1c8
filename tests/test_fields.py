"""Tests for accumulator styles and builder field planning."""

import pytest

from callbuilder.descriptions import DeclaredType, Parameter, PrimitiveType
from callbuilder.errors import MalformedStyleDefinition, UnsupportedTypeDescription
from callbuilder.fields import FieldInfo, plan_field, plan_fields, plan_method
from callbuilder.formats.text import parse_type
from callbuilder.styles import (
    ARRAY_LIST_ADDING,
    BUILTIN_STYLES,
    STRING_APPENDING,
    FieldStyle,
)
from callbuilder.unification import Indeterminate


class TestFieldStyle:
    """Tests for sorting style operations."""

    def test_builtin_styles(self) -> None:
        assert set(BUILTIN_STYLES) == {
            "ArrayListAdding",
            "ImmutableListAdding",
            "OptionalSetting",
            "StringAppending",
        }
        assert [m.name for m in ARRAY_LIST_ADDING.modifiers] == ["addTo", "addAllTo"]

    def test_operations_are_sorted_by_name(self) -> None:
        style = FieldStyle.parse(
            "Counting",
            "java.lang.Integer count(java.lang.Integer c)",
            "int finish(java.lang.Integer c)",
            "java.lang.Integer start()",
        )
        assert style.start.name == "start"
        assert style.finish.name == "finish"
        assert [m.name for m in style.modifiers] == ["count"]
        assert [op.name for op in style.operations()] == ["start", "finish", "count"]

    def test_missing_finish(self) -> None:
        with pytest.raises(MalformedStyleDefinition) as excinfo:
            FieldStyle.parse("NoFinish", "java.lang.StringBuilder start()")
        assert excinfo.value.style == "NoFinish"
        assert "finish()" in excinfo.value.problem

    def test_missing_start(self) -> None:
        with pytest.raises(MalformedStyleDefinition) as excinfo:
            FieldStyle.parse("NoStart", "java.lang.String finish(java.lang.String s)")
        assert "start()" in excinfo.value.problem

    def test_finish_must_take_one_parameter(self) -> None:
        with pytest.raises(MalformedStyleDefinition):
            FieldStyle.parse(
                "Wide",
                "java.lang.StringBuilder start()",
                "java.lang.String finish(java.lang.StringBuilder a, int b)",
            )

    def test_modifier_must_take_the_field(self) -> None:
        with pytest.raises(MalformedStyleDefinition) as excinfo:
            FieldStyle.parse(
                "Reset",
                "java.lang.StringBuilder start()",
                "java.lang.String finish(java.lang.StringBuilder a)",
                "java.lang.StringBuilder reset()",
            )
        assert "reset()" in str(excinfo.value)


class TestPlanField:
    """Tests for planning a single field."""

    def test_plain_parameter_gets_a_setter(self) -> None:
        plan = plan_field(FieldInfo(Parameter("count", PrimitiveType("int"))))
        assert plan.field_type == "int"
        assert plan.setter_name == "setCount"
        assert plan.modifiers == ()
        assert plan.resolved

    def test_styled_parameter(self) -> None:
        info = FieldInfo(
            Parameter("first", parse_type("java.util.ArrayList<java.lang.String>")),
            ARRAY_LIST_ADDING,
        )
        plan = plan_field(info)
        assert plan.field_type == "java.util.ArrayList<java.lang.String>"
        assert plan.setter_name is None
        assert [(m.method_name, m.parameter_names, m.parameter_types) for m in plan.modifiers] == [
            ("addToFirst", ("item",), ("java.lang.String",)),
            ("addAllToFirst", ("items",), ("java.lang.Iterable<java.lang.String>",)),
        ]
        assert info.finish_type == "java.util.ArrayList<java.lang.String>"

    def test_indeterminate_field_is_kept_and_logged(self, log_records) -> None:
        info = FieldInfo(Parameter("name", PrimitiveType("int")), STRING_APPENDING)
        plan = plan_field(info)
        assert isinstance(plan.field_type, Indeterminate)
        assert not plan.resolved
        assert plan.modifiers == ()
        warnings = [r for r in log_records if r["level"].name == "WARNING"]
        assert any(r["message"].startswith("fields.indeterminate") for r in warnings)

    def test_skipped_modifier_does_not_affect_others(self, log_records) -> None:
        style = FieldStyle.parse(
            "Partial",
            "java.lang.StringBuilder start()",
            "java.lang.String finish(java.lang.StringBuilder b)",
            "java.lang.StringBuilder appendTo(java.lang.StringBuilder b, java.lang.String s)",
            "java.lang.StringBuffer broken(java.lang.StringBuilder b, int x)",
        )
        plan = plan_field(
            FieldInfo(Parameter("text", DeclaredType("java.lang.String")), style),
        )
        append, broken = plan.modifiers
        assert append.resolved
        assert append.parameter_types == ("java.lang.String",)
        assert not broken.resolved
        assert isinstance(broken.parameter_types, Indeterminate)
        assert any(
            r["message"].startswith("fields.modifier.skipped")
            and r["level"].name == "WARNING"
            for r in log_records
        )

    def test_unsupported_type_propagates(self) -> None:
        info = FieldInfo(
            Parameter("items", parse_type("java.util.ArrayList<? super java.lang.Long>")),
            ARRAY_LIST_ADDING,
        )
        with pytest.raises(UnsupportedTypeDescription) as excinfo:
            plan_field(info)
        assert excinfo.value.context == "parameter items (style ArrayListAdding)"
        assert "in parameter items (style ArrayListAdding)" in str(excinfo.value)

    def test_unsupported_modifier_type_names_the_modifier(self) -> None:
        style = FieldStyle.parse(
            "Wild",
            "java.lang.StringBuilder start()",
            "java.lang.String finish(java.lang.StringBuilder b)",
            "java.lang.StringBuilder add(java.lang.StringBuilder b, java.util.List<?> xs)",
        )
        info = FieldInfo(Parameter("text", parse_type("java.lang.String")), style)
        with pytest.raises(UnsupportedTypeDescription) as excinfo:
            plan_field(info)
        assert excinfo.value.context == "parameter text (style Wild, modifier add)"


class TestPlanMethod:
    """Tests for planning every field of a method."""

    def test_two_array_lists(self) -> None:
        parameters = [
            Parameter("first", parse_type("java.util.ArrayList<java.lang.String>")),
            Parameter("second", parse_type("java.util.ArrayList<java.lang.Integer>")),
        ]
        plans = plan_fields(
            parameters,
            {"first": ARRAY_LIST_ADDING, "second": ARRAY_LIST_ADDING},
        )
        assert [p.field_type for p in plans] == [
            "java.util.ArrayList<java.lang.String>",
            "java.util.ArrayList<java.lang.Integer>",
        ]
        assert plans[1].modifiers[0].parameter_types == ("java.lang.Integer",)

    def test_method_plan_lists_indeterminate_members(self) -> None:
        parameters = [
            Parameter("address", DeclaredType("java.lang.String")),
            Parameter("zip", PrimitiveType("int")),
            Parameter("note", DeclaredType("java.lang.String")),
        ]
        plan = plan_method(
            "HasStrings.<init>",
            parameters,
            {"address": STRING_APPENDING, "zip": STRING_APPENDING},
        )
        assert plan.name == "HasStrings.<init>"
        assert [f.name for f in plan.fields] == ["address", "zip", "note"]
        assert plan.indeterminate == ["zip"]
        assert plan.fields[2].setter_name == "setNote"
