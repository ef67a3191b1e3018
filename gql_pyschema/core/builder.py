"""Compiles registry metadata into a graphql-core schema.

A build names one or more resolvers. Every custom type they reference, directly or
through nested fields, is compiled once per build into an object or input type;
query and mutation methods become the fields of the two root types.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Sequence

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInputType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLSchema,
    GraphQLError,
    GraphQLString,
    Undefined,
    parse_value,
    validate_schema,
    value_from_ast,
)

from .errors import (
    ArgIndexGap,
    InputAsOutput,
    InvalidDefaultValue,
    InvalidSchema,
    NoQueryFieldsFound,
    OutputAsInput,
    ResolverNoDecorator,
    TypeNoFieldDecorator,
)
from .ir import ArgMetadata, FieldKind, FieldMetadata, RegistryEntry
from .registry import MetadataRegistry, default_registry
from .scalars import ScalarCatalog, scalar_catalog
from .session import QuerySession

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    """Settings for one schema build.

    query_root_name names the query root only when some resolver declares a
    query. The placeholder root is always named ``Query`` with a single
    ``key: String`` field.
    """
    query_root_name: str = "RootQuery"
    mutation_root_name: str = "RootMutation"
    # an engine rejects a schema without query fields; expose a dummy one instead
    placeholder_query: bool = True
    # a method parameter without a declared arg receives None
    allow_arg_gaps: bool = True
    validate: bool = True


@dataclass
class BuildSession:
    """Types compiled during one build, keyed by declaration name."""
    output_types: dict[str, GraphQLObjectType] = field(default_factory=dict)
    input_types: dict[str, GraphQLInputObjectType] = field(default_factory=dict)


def align_arguments(method: Callable[..., Any], args: list[ArgMetadata | None]) -> Callable[..., Any]:
    """Adapt a positional resolver method to the engine's keyword arguments."""

    def resolve(_source: Any, _info: Any, **kwargs: Any) -> Any:
        return method(*(kwargs.get(arg.name) if arg is not None else None for arg in args))

    return resolve


def call_member(name: str) -> Callable[..., Any]:
    """Resolve a method field of an object type by calling it on the source."""

    def resolve(source: Any, _info: Any) -> Any:
        if isinstance(source, Mapping):
            return source.get(name)
        return getattr(source, name)()

    return resolve


def coerce_input(declaration: type, field_names: Sequence[str], values: dict[str, Any]) -> Any:
    """Turn a submitted input object into an instance of its declaring class.

    Every declared field is set; fields the client omitted and that have no
    default are None.
    """
    instance = declaration.__new__(declaration)
    instance.__dict__.update({name: values.get(name) for name in field_names})
    return instance


def parse_default(owner: str, name: str, default: str, gql_type: GraphQLInputType) -> Any:
    """Convert a default written as a GraphQL literal into its internal value."""
    try:
        value = value_from_ast(parse_value(default), gql_type)
    except GraphQLError as e:
        raise InvalidDefaultValue(owner, name, default) from e
    if value is Undefined:
        raise InvalidDefaultValue(owner, name, default)
    return value


class SchemaBuilder:
    """Builds GraphQLSchema objects from a MetadataRegistry.

    Example:
        builder = SchemaBuilder(registry)
        schema = builder.build(["UserResolver", "OrderResolver"])
    """

    def __init__(
        self,
        registry: MetadataRegistry = default_registry,
        options: BuildOptions | None = None,
        catalog: ScalarCatalog = scalar_catalog,
    ):
        self.registry = registry
        self.options = options or BuildOptions()
        self.catalog = catalog
        self.session = BuildSession()

    def build(self, resolver_names: Sequence[str]) -> GraphQLSchema:
        """Compile the named resolvers into a single schema."""
        self.session = BuildSession()
        resolvers = [self.registry.lookup(name) for name in resolver_names]

        # every custom type returned or held by a resolver
        for entry in resolvers:
            for f in entry.fields:
                if not f.is_custom_type:
                    continue
                referenced = self.registry.lookup(f.scalar)
                if referenced.is_input:
                    raise InputAsOutput(f.scalar)
                self.build_output_type(referenced)

        # every custom type taken as an argument
        for entry in resolvers:
            for f in entry.fields:
                for arg in entry.args_for(f.name):
                    if arg is None or not arg.is_custom_type:
                        continue
                    referenced = self.registry.lookup(arg.scalar)
                    if not referenced.is_input:
                        raise OutputAsInput(arg.scalar)
                    self.build_input_type(referenced)

        queries: dict[str, GraphQLField] = {}
        mutations: dict[str, GraphQLField] = {}
        for entry in resolvers:
            self._merge_root_fields(queries, entry, FieldKind.QUERY)
            self._merge_root_fields(mutations, entry, FieldKind.MUTATION)

        if queries:
            query = GraphQLObjectType(self.options.query_root_name, queries)
        elif self.options.placeholder_query:
            query = GraphQLObjectType("Query", {"key": GraphQLField(GraphQLString)})
        else:
            raise NoQueryFieldsFound()

        mutation = GraphQLObjectType(self.options.mutation_root_name, mutations) if mutations else None

        schema = GraphQLSchema(query=query, mutation=mutation)
        if self.options.validate:
            errors = validate_schema(schema)
            if errors:
                raise InvalidSchema([e.message for e in errors])

        logger.debug(
            "Built schema from %s: %d queries, %d mutations, %d types, %d inputs",
            ", ".join(resolver_names),
            len(queries),
            len(mutations),
            len(self.session.output_types),
            len(self.session.input_types),
        )
        return schema

    def build_output_type(self, entry: RegistryEntry) -> GraphQLObjectType:
        """Compile an entry as an object type, at most once per build."""
        compiled = self.session.output_types.get(entry.name)
        if compiled is not None:
            return compiled
        if not entry.fields:
            raise TypeNoFieldDecorator(entry.name)

        fields: dict[str, GraphQLField] = {}
        # memoised before the fields so recursive references find it
        compiled = GraphQLObjectType(entry.name, lambda: fields)
        self.session.output_types[entry.name] = compiled

        for f in entry.fields:
            fields[f.name] = GraphQLField(
                self._output_type_of(f),
                resolve=call_member(f.name) if f.is_method else None,
                description=f.options.comment,
                extensions=self._extensions(f),
            )
        logger.debug("Compiled type '%s' with %d fields", entry.name, len(fields))
        return compiled

    def build_input_type(self, entry: RegistryEntry) -> GraphQLInputObjectType:
        """Compile an entry as an input type, at most once per build."""
        compiled = self.session.input_types.get(entry.name)
        if compiled is not None:
            return compiled
        if not entry.fields:
            raise TypeNoFieldDecorator(entry.name)

        fields: dict[str, GraphQLInputField] = {}
        declaration = entry.role.declaration if entry.role is not None else None
        field_names = [f.name for f in entry.fields]
        compiled = GraphQLInputObjectType(
            entry.name,
            lambda: fields,
            out_type=partial(coerce_input, declaration, field_names) if declaration is not None else None,
        )
        self.session.input_types[entry.name] = compiled

        for f in entry.fields:
            gql_type = self._input_type_of(f)
            default = f.options.default_value
            fields[f.name] = GraphQLInputField(
                gql_type,
                default_value=Undefined if default is None else parse_default(entry.name, f.name, default, gql_type),
                description=f.options.comment,
            )
        logger.debug("Compiled input '%s' with %d fields", entry.name, len(fields))
        return compiled

    def _output_type_of(self, f: FieldMetadata) -> GraphQLOutputType:
        if f.is_custom_type:
            referenced = self.registry.lookup(f.scalar)
            if referenced.is_input:
                raise InputAsOutput(f.scalar)
            return self._wrap(self.build_output_type(referenced), f)
        return self._wrap(self.catalog.to_scalar(f.scalar), f)

    def _input_type_of(self, f: FieldMetadata) -> GraphQLInputType:
        if f.is_custom_type:
            referenced = self.registry.lookup(f.scalar)
            if not referenced.is_input:
                raise OutputAsInput(f.scalar)
            return self._wrap(self.build_input_type(referenced), f)
        return self._wrap(self.catalog.to_scalar(f.scalar), f)

    def _arg_type_of(self, arg: ArgMetadata) -> GraphQLInputType:
        if arg.is_custom_type:
            referenced = self.registry.lookup(arg.scalar)
            if not referenced.is_input:
                raise OutputAsInput(arg.scalar)
            return self.build_input_type(referenced)
        return self.catalog.to_scalar(arg.scalar)

    @staticmethod
    def _wrap(gql_type: Any, f: FieldMetadata) -> Any:
        if not f.options.nullable:
            gql_type = GraphQLNonNull(gql_type)
        if f.is_array:
            gql_type = GraphQLList(gql_type)
        return gql_type

    @staticmethod
    def _extensions(f: FieldMetadata) -> dict[str, Any] | None:
        if f.options.complexity is None:
            return None
        return {"complexity": f.options.complexity}

    def _merge_root_fields(self, merged: dict[str, GraphQLField], entry: RegistryEntry, kind: FieldKind):
        """Add one resolver's root fields; a later resolver wins a name collision."""
        for name, gql_field in self._root_fields(entry, kind).items():
            if name in merged:
                logger.warning("%s '%s' of resolver '%s' replaces an earlier one", kind.value, name, entry.name)
            merged[name] = gql_field

    def _root_fields(self, entry: RegistryEntry, kind: FieldKind) -> dict[str, GraphQLField]:
        """Collect the query or mutation fields of one resolver."""
        fields: dict[str, GraphQLField] = {}
        for f in entry.fields_of_kind(kind):
            if not entry.is_resolver:
                raise ResolverNoDecorator(entry.name, kind.value, f.name)

            args = entry.args_for(f.name)
            if not self.options.allow_arg_gaps and None in args:
                raise ArgIndexGap(entry.name, f.name, args.index(None))

            fields[f.name] = GraphQLField(
                self._output_type_of(f),
                args={arg.name: GraphQLArgument(self._arg_type_of(arg)) for arg in args if arg is not None},
                resolve=align_arguments(getattr(entry.resolver, f.name), args),
                description=f.options.comment,
                extensions=self._extensions(f),
            )
        return fields


def declaration_name(declaration: str | type) -> str:
    return declaration if isinstance(declaration, str) else declaration.__name__


def build_schema(
    resolvers: str | type | Sequence[str | type],
    *,
    registry: MetadataRegistry | None = None,
    options: BuildOptions | None = None,
) -> QuerySession:
    """Build a schema from one or more resolvers and wrap it in a session.

    Args:
        resolvers: A resolver class or name, or a list of them (schema stitching)
        registry: Registry to read from (default: the process-wide registry)
        options: Build settings

    Returns:
        A QuerySession over the compiled schema
    """
    if isinstance(resolvers, (str, type)):
        resolvers = [resolvers]
    names = [declaration_name(r) for r in resolvers]
    builder = SchemaBuilder(default_registry if registry is None else registry, options)
    return QuerySession(builder.build(names))
