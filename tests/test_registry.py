"""Tests for encoding type descriptions as terms and rendering them back."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from callbuilder.descriptions import (
    ArrayType,
    DeclaredType,
    IntersectionType,
    PrimitiveType,
    TypeVariableRef,
    WildcardType,
)
from callbuilder.errors import (
    InferenceError,
    UnresolvedTypeVariable,
    UnsupportedTypeDescription,
)
from callbuilder.formats.text import parse_signature, parse_type
from callbuilder.unification import (
    Atom,
    Sequence,
    Substitution,
    TermRegistry,
    UnificationFailure,
    Variable,
    render_type,
    seq,
    unify,
)

STRING = DeclaredType("java.lang.String")


class TestInterning:
    """Tests for atom interning."""

    def test_same_text_yields_same_atom(self) -> None:
        registry = TermRegistry()
        assert registry.atom("java.lang.String") is registry.atom("java.lang.String")
        assert len(registry) == 1

    def test_repeated_encoding_yields_same_atom(self) -> None:
        registry = TermRegistry()
        first = registry.encode(STRING)
        second = registry.encode(DeclaredType("java.lang.String"))
        assert isinstance(first, Sequence)
        assert isinstance(second, Sequence)
        assert first.head is second.head
        assert isinstance(unify(first, second), Substitution)

    def test_registries_do_not_share_atoms(self) -> None:
        left = TermRegistry().encode(STRING)
        right = TermRegistry().encode(STRING)
        assert isinstance(unify(left, right), UnificationFailure)

    def test_handles_index_the_arena(self) -> None:
        registry = TermRegistry()
        assert registry.atom("a").handle == 0
        assert registry.atom("b").handle == 1
        assert registry.atom("a").handle == 0

    def test_concurrent_interning_keeps_one_atom_per_text(self) -> None:
        registry = TermRegistry()
        names = [f"T{i % 20}" for i in range(2000)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            atoms = list(pool.map(registry.atom, names))
            variables = list(pool.map(registry.fresh_variable, names))
        assert len(registry) == 20
        for name, atom in zip(names, atoms, strict=True):
            assert atom is registry.atom(name)
        assert sorted(v.handle for v in variables) == list(range(2000))


class TestEncode:
    """Tests for TermRegistry.encode."""

    def test_declared_type_without_arguments(self) -> None:
        registry = TermRegistry()
        term = registry.encode(STRING)
        assert term == seq(registry.atom("java.lang.String"))

    def test_parameterized_type(self) -> None:
        registry = TermRegistry()
        term = registry.encode(
            DeclaredType("java.util.Map", (STRING, PrimitiveType("int"))),
        )
        assert term == seq(
            registry.atom("java.util.Map"),
            seq(registry.atom("java.lang.String")),
            registry.atom("int"),
        )

    def test_overridden_type_variable_becomes_variable(self) -> None:
        registry = TermRegistry()
        t = registry.fresh_variable("T")
        term = registry.encode(
            DeclaredType("java.util.List", (TypeVariableRef("T"),)),
            {"T": t},
        )
        assert term == seq(registry.atom("java.util.List"), t)

    def test_other_type_variables_are_atoms(self) -> None:
        registry = TermRegistry()
        term = registry.encode(TypeVariableRef("T"), {"E": registry.fresh_variable()})
        assert term is registry.atom("T")

    def test_arrays_are_atoms_of_their_text(self) -> None:
        registry = TermRegistry()
        term = registry.encode(ArrayType(PrimitiveType("int")))
        assert term is registry.atom("int[]")

    @pytest.mark.parametrize(
        "description",
        [
            WildcardType(),
            WildcardType(STRING, "super"),
            IntersectionType((STRING, DeclaredType("java.lang.Comparable"))),
        ],
    )
    def test_unsupported_descriptions(self, description) -> None:
        with pytest.raises(UnsupportedTypeDescription) as excinfo:
            TermRegistry().encode(description)
        assert excinfo.value.description == description

    def test_unsupported_nested_argument(self) -> None:
        description = parse_type("java.util.List<? extends java.lang.Number>")
        with pytest.raises(UnsupportedTypeDescription) as excinfo:
            TermRegistry().encode(description)
        assert str(excinfo.value).endswith(": ? extends java.lang.Number")

    def test_not_a_description(self) -> None:
        with pytest.raises(UnsupportedTypeDescription):
            TermRegistry().encode("java.lang.String")  # type: ignore[arg-type]

    def test_type_parameters_are_fresh_per_call(self) -> None:
        registry = TermRegistry()
        signature = parse_signature("<T, E> T pick(E from)")
        first = registry.type_parameters(signature)
        second = registry.type_parameters(signature)
        assert set(first) == {"T", "E"}
        assert first["T"] is not second["T"]
        assert first["T"] is not first["E"]


class TestRender:
    """Tests for TermRegistry.render."""

    @pytest.mark.parametrize(
        "text",
        [
            "int",
            "java.lang.String",
            "java.util.List<java.lang.String>",
            "java.util.Map<K, java.util.List<V>>",
            "java.util.List<java.lang.String>[]",
            "com.google.common.collect.ImmutableList.Builder<int[]>",
        ],
    )
    def test_round_trip(self, text: str) -> None:
        registry = TermRegistry()
        description = parse_type(text, type_variables=("K", "V"))
        assert registry.render(registry.encode(description, {})) == text

    def test_render_type_function(self) -> None:
        registry = TermRegistry()
        term = registry.encode(DeclaredType("java.util.List", (STRING,)))
        assert render_type(term, registry) == "java.util.List<java.lang.String>"

    def test_render_substituted_variable(self) -> None:
        registry = TermRegistry()
        t = registry.fresh_variable("T")
        term = registry.encode(
            DeclaredType("java.util.List", (TypeVariableRef("T"),)),
            {"T": t},
        )
        sub = unify(t, registry.encode(STRING))
        assert isinstance(sub, Substitution)
        assert registry.render(sub.resolve(term)) == "java.util.List<java.lang.String>"

    def test_unresolved_variable_is_an_error(self) -> None:
        registry = TermRegistry()
        with pytest.raises(UnresolvedTypeVariable):
            registry.render(seq(registry.atom("java.util.List"), Variable(9, "T")))

    def test_foreign_atom_is_an_error(self) -> None:
        with pytest.raises(InferenceError):
            TermRegistry().render(Atom(0, "java.lang.String"))
