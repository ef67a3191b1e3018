"""Core modules for declaring and compiling GraphQL schemas."""

from .builder import BuildOptions, BuildSession, SchemaBuilder, build_schema
from .declarations import (
    arg,
    declare_arg,
    declare_field,
    declare_input_type,
    declare_mutation,
    declare_output_type,
    declare_query,
    declare_resolver,
    field,
    input_type,
    mutation,
    object_type,
    query,
    resolver,
)
from .errors import (
    ArgIndexGap,
    ArrayNoReturnType,
    DependencyCycle,
    DependencyUnresolvable,
    GraphSchemaError,
    InputAsOutput,
    InvalidArgName,
    InvalidDefaultValue,
    InvalidSchema,
    MethodNoReturnType,
    NoQueryFieldsFound,
    OutputAsInput,
    QueryError,
    ResolverAlreadyRegistered,
    ResolverFieldMustBeMethod,
    ResolverNoDecorator,
    ResolverTypeConflict,
    ReturnIsUnknown,
    TypeAlreadyRegistered,
    TypeMismatch,
    TypeNoFieldDecorator,
    TypeResolverConflict,
    UnhandledScalar,
)
from .injector import Injector, default_injector
from .introspection import (
    LIST,
    OPAQUE,
    AnnotationIntrospector,
    DeclarationSite,
    TypeIntrospector,
)
from .ir import (
    ArgMetadata,
    FieldKind,
    FieldMetadata,
    FieldOptions,
    RegistryEntry,
    TypeRoleMetadata,
)
from .processor import AnnotationProcessor
from .registry import MetadataRegistry, default_registry
from .scalars import ID, Bool, Float, Int, Number, ScalarCatalog, Void, scalar_catalog
from .session import QuerySession, substitute_variables

__all__ = [
    # Scalars
    "ID",
    "Bool",
    "Float",
    "Int",
    "Number",
    "Void",
    "ScalarCatalog",
    "scalar_catalog",
    # IR types
    "ArgMetadata",
    "FieldKind",
    "FieldMetadata",
    "FieldOptions",
    "RegistryEntry",
    "TypeRoleMetadata",
    # Introspection
    "LIST",
    "OPAQUE",
    "AnnotationIntrospector",
    "DeclarationSite",
    "TypeIntrospector",
    # Registry
    "MetadataRegistry",
    "default_registry",
    "AnnotationProcessor",
    # Injector
    "Injector",
    "default_injector",
    # Declarations
    "arg",
    "field",
    "input_type",
    "mutation",
    "object_type",
    "query",
    "resolver",
    "declare_arg",
    "declare_field",
    "declare_input_type",
    "declare_mutation",
    "declare_output_type",
    "declare_query",
    "declare_resolver",
    # Builder
    "BuildOptions",
    "BuildSession",
    "SchemaBuilder",
    "build_schema",
    # Session
    "QuerySession",
    "substitute_variables",
    # Errors
    "GraphSchemaError",
    "ArgIndexGap",
    "ArrayNoReturnType",
    "DependencyCycle",
    "DependencyUnresolvable",
    "InputAsOutput",
    "InvalidArgName",
    "InvalidDefaultValue",
    "InvalidSchema",
    "MethodNoReturnType",
    "NoQueryFieldsFound",
    "OutputAsInput",
    "QueryError",
    "ResolverAlreadyRegistered",
    "ResolverFieldMustBeMethod",
    "ResolverNoDecorator",
    "ResolverTypeConflict",
    "ReturnIsUnknown",
    "TypeAlreadyRegistered",
    "TypeMismatch",
    "TypeNoFieldDecorator",
    "TypeResolverConflict",
    "UnhandledScalar",
]
