"""Tests for field and argument normalisation."""

import logging

import pytest

from gql_pyschema.core.errors import (
    ArrayNoReturnType,
    InvalidArgName,
    MethodNoReturnType,
    ResolverFieldMustBeMethod,
    ReturnIsUnknown,
    TypeMismatch,
)
from gql_pyschema.core.introspection import LIST, OPAQUE
from gql_pyschema.core.ir import FieldKind, FieldOptions
from gql_pyschema.core.processor import AnnotationProcessor, split_overloads
from gql_pyschema.core.scalars import Float, Int, Number, Void


class Address:
    pass


@pytest.fixture
def processor(registry):
    return AnnotationProcessor(registry)


class TestKindRules:
    """Queries and mutations must be methods; methods need a provider."""

    @pytest.mark.parametrize("kind", [FieldKind.QUERY, FieldKind.MUTATION])
    def test_resolver_field_must_be_method(self, processor, kind):
        with pytest.raises(ResolverFieldMustBeMethod):
            processor.process_field("Root", "value", is_method=False, introspected=str, returns=lambda: str, kind=kind)

    def test_method_needs_provider(self, processor):
        with pytest.raises(MethodNoReturnType):
            processor.process_field("User", "full_name", is_method=True, introspected=str)

    def test_method_with_provider(self, processor):
        field = processor.process_field("User", "full_name", is_method=True, returns=lambda: str)
        assert field.is_method
        assert field.scalar == "String"


class TestIntrospectedOnly:
    """Members declared without a provider."""

    def test_scalar_property(self, processor):
        field = processor.process_field("User", "name", is_method=False, introspected=str)
        assert field.scalar == "String"
        assert not field.is_custom_type
        assert not field.is_array

    def test_custom_property(self, processor):
        field = processor.process_field("User", "address", is_method=False, introspected=Address)
        assert field.scalar == "Address"
        assert field.is_custom_type

    def test_list_needs_provider(self, processor):
        with pytest.raises(ArrayNoReturnType):
            processor.process_field("User", "tags", is_method=False, introspected=LIST)

    def test_opaque_needs_provider(self, processor):
        with pytest.raises(ReturnIsUnknown):
            processor.process_field("User", "extra", is_method=False, introspected=OPAQUE)

    def test_opaque_with_provider_succeeds(self, processor):
        field = processor.process_field("User", "extra", is_method=False, introspected=OPAQUE, returns=lambda: str)
        assert field.scalar == "String"


class TestProviders:
    """Members declared with an explicit provider."""

    def test_list_of_scalar(self, processor):
        field = processor.process_field("User", "tags", is_method=False, introspected=LIST, returns=lambda: [str])
        assert field.is_array
        assert not field.is_custom_type
        assert field.scalar == "String"

    def test_list_of_custom(self, processor):
        field = processor.process_field("User", "homes", is_method=False, introspected=LIST, returns=lambda: [Address])
        assert field.is_array
        assert field.is_custom_type
        assert field.scalar == "Address"

    def test_generic_list_alias(self, processor):
        field = processor.process_field("User", "scores", is_method=True, returns=lambda: list[Float])
        assert field.is_array
        assert field.scalar == "Float"

    def test_empty_list_marker(self, processor):
        with pytest.raises(ArrayNoReturnType):
            processor.process_field("User", "tags", is_method=False, returns=lambda: [])

    def test_marker_scalars(self, processor):
        field = processor.process_field("User", "age", is_method=False, introspected=int, returns=lambda: Int)
        assert field.scalar == "Int"

    def test_generic_number_is_noted(self, processor, caplog):
        with caplog.at_level(logging.INFO, logger="gql_pyschema.core.processor"):
            field = processor.process_field("User", "score", is_method=False, returns=lambda: Number)
        assert field.scalar == "Number"
        assert "Assuming Float" in caplog.text

    def test_non_callable_provider(self, processor):
        with pytest.raises(TypeError):
            processor.process_field("User", "name", is_method=False, returns="String")


class TestTypeMismatch:
    """Introspected and declared types must agree."""

    def test_mismatch(self, processor):
        with pytest.raises(TypeMismatch):
            processor.process_field("User", "name", is_method=False, introspected=str, returns=lambda: Int)

    def test_custom_mismatch(self, processor):
        with pytest.raises(TypeMismatch):
            processor.process_field("User", "home", is_method=False, introspected=Address, returns=lambda: str)

    def test_boolean_is_not_checked(self, processor):
        field = processor.process_field("User", "flag", is_method=False, introspected=bool, returns=lambda: Int)
        assert field.scalar == "Int"

    def test_generic_number_is_not_checked(self, processor):
        field = processor.process_field("User", "score", is_method=False, introspected=Number, returns=lambda: Int)
        assert field.scalar == "Int"

    def test_list_annotation_is_not_checked(self, processor):
        field = processor.process_field("User", "ids", is_method=False, introspected=LIST, returns=lambda: [Int])
        assert field.scalar == "Int"

    def test_method_return_annotation_checked(self, processor):
        with pytest.raises(TypeMismatch):
            processor.process_field("Root", "get", is_method=True, introspected=type(None), returns=lambda: str)


class TestOptions:
    """The overload matrix and option handling."""

    def test_split_no_arguments(self):
        provider, options = split_overloads(None, None)
        assert provider is None
        assert options == FieldOptions()

    def test_split_options_only(self):
        provider, options = split_overloads({"nullable": True}, None)
        assert provider is None
        assert options.nullable is True

    def test_split_provider_and_options(self):
        provider, options = split_overloads(lambda: str, FieldOptions(comment="Name"))
        assert provider() is str
        assert options.comment == "Name"

    def test_options_as_first_argument(self, processor):
        field = processor.process_field("User", "name", is_method=False, introspected=str, returns=FieldOptions(nullable=True))
        assert field.options.nullable is True

    def test_caller_options_are_not_mutated(self, processor):
        options = FieldOptions(nullable=False)
        field = processor.process_field("Root", "reset", is_method=True, returns=lambda: Void, options=options)
        assert field.options.nullable is True
        assert options.nullable is False

    def test_void_is_nullable(self, processor):
        field = processor.process_field("Root", "reset", is_method=True, returns=lambda: None)
        assert field.scalar == "Void"
        assert field.options.nullable is True

    def test_on_registered_callback(self, processor, registry):
        seen = []
        field = processor.process_field(
            "User", "tags", is_method=False, introspected=LIST,
            returns=lambda: [str], options={"on_registered": seen.append},
        )
        assert seen == [field]
        assert registry.lookup("User").fields == [field]

    def test_resolver_binding_follows_kind(self, processor):
        plain = processor.process_field("Root", "a", is_method=True, returns=lambda: str)
        query = processor.process_field("Root", "b", is_method=True, returns=lambda: str, kind=FieldKind.QUERY)
        assert not plain.has_resolver_binding
        assert query.has_resolver_binding


class TestArgs:
    """Argument processing."""

    @pytest.mark.parametrize("name", [None, ""])
    def test_invalid_name(self, processor, name):
        with pytest.raises(InvalidArgName):
            processor.process_arg("Root", "get", name, 0, str)

    def test_scalar_arg(self, processor, registry):
        arg = processor.process_arg("Root", "get", "id", 0, int)
        assert arg.scalar == "Int"
        assert not arg.is_custom_type
        assert registry.lookup("Root").args["get"] == [arg]

    def test_custom_arg(self, processor):
        arg = processor.process_arg("Root", "get", "where", 1, Address)
        assert arg.is_custom_type
        assert arg.scalar == "Address"
        assert arg.index == 1

    def test_unknown_arg_type(self, processor):
        with pytest.raises(ReturnIsUnknown):
            processor.process_arg("Root", "get", "data", 0, OPAQUE)

    def test_list_arg_type(self, processor):
        with pytest.raises(ArrayNoReturnType):
            processor.process_arg("Root", "get", "ids", 0, LIST)
