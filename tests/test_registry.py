"""Tests for the metadata registry."""

import pytest

from gql_pyschema.core.errors import (
    ResolverAlreadyRegistered,
    ResolverTypeConflict,
    TypeAlreadyRegistered,
    TypeResolverConflict,
)
from gql_pyschema.core.ir import ArgMetadata, FieldMetadata


def make_arg(index, name="arg"):
    return ArgMetadata(owner="Root", method="get", name=name, scalar="String", index=index)


class TestLookup:
    """Tests for lookup-or-create."""

    def test_creates_empty_entry(self, registry):
        entry = registry.lookup("User")
        assert entry.name == "User"
        assert entry.fields == []
        assert entry.args == {}
        assert entry.role is None
        assert entry.resolver is None

    def test_returns_same_entry(self, registry):
        assert registry.lookup("User") is registry.lookup("User")

    def test_all_and_clear(self, registry):
        registry.lookup("A")
        registry.lookup("B")
        assert set(registry.all()) == {"A", "B"}

        registry.clear()
        assert registry.all() == {}
        assert not registry.has("A")


class TestRoles:
    """Tests for output/input/resolver exclusivity."""

    def test_declare_output(self, registry):
        entry = registry.declare_output_type("User")
        assert entry.role.name == "User"
        assert not entry.is_input

    def test_declare_input(self, registry):
        entry = registry.declare_input_type("UserInput")
        assert entry.is_input

    def test_type_after_resolver_conflicts(self, registry):
        registry.bind_resolver("Root", object())
        with pytest.raises(TypeResolverConflict):
            registry.declare_output_type("Root")
        with pytest.raises(TypeResolverConflict):
            registry.declare_input_type("Root")

    def test_resolver_after_type_conflicts(self, registry):
        registry.declare_input_type("Input")
        with pytest.raises(ResolverTypeConflict):
            registry.bind_resolver("Input", object())

    def test_role_set_once(self, registry):
        registry.declare_output_type("User")
        with pytest.raises(TypeAlreadyRegistered):
            registry.declare_input_type("User")

    def test_resolver_bound_once(self, registry):
        registry.bind_resolver("Root", object())
        with pytest.raises(ResolverAlreadyRegistered):
            registry.bind_resolver("Root", object())


class TestFieldsAndArgs:
    """Tests for appending fields and positioning args."""

    def test_fields_keep_insertion_order(self, registry):
        for name in ("c", "a", "b"):
            registry.add_field("User", FieldMetadata(owner="User", name=name, scalar="String"))
        assert [f.name for f in registry.lookup("User").fields] == ["c", "a", "b"]

    def test_args_are_placed_by_index(self, registry):
        registry.add_arg("Root", make_arg(1, "second"))
        registry.add_arg("Root", make_arg(0, "first"))
        assert [a.name for a in registry.lookup("Root").args["get"]] == ["first", "second"]

    def test_skipped_index_leaves_gap(self, registry):
        registry.add_arg("Root", make_arg(2, "third"))
        args = registry.lookup("Root").args_for("get")
        assert args[:2] == [None, None]
        assert args[2].name == "third"
