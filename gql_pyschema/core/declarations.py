"""Registration entry points.

Two equivalent surfaces write into a MetadataRegistry:

Explicit calls, for startup code that enumerates its own declarations:

    declare_field(User, "name", lambda: str)
    declare_output_type(User)
    declare_query(Root, "user", lambda: User)
    declare_arg(Root, "user", "id", 0)
    declare_resolver(Root)

Decorators, which collect the same information from a class body:

    @object_type
    class User:
        name: str = field()
        tags: list[str] = field(lambda: [str], {"nullable": True})

    @resolver
    class Root:
        def __init__(self, store: Store):
            self.store = store

        @query(lambda: User)
        def user(self, id: Annotated[int, arg("id")]) -> User:
            return self.store.get(id)
"""

import inspect
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from .injector import Injector, default_injector
from .introspection import (
    DeclarationSite,
    TypeIntrospector,
    default_introspector,
    is_method_member,
    positional_parameters,
    type_hints,
    unwrap_function,
)
from .ir import ArgMetadata, FieldKind, FieldMetadata, FieldOptions, RegistryEntry
from .processor import AnnotationProcessor, TypeProvider
from .registry import MetadataRegistry, default_registry

T = TypeVar("T")

_MEMBER_ATTR = "__gql_member__"

Returns = TypeProvider | FieldOptions | Mapping[str, Any] | None
Options = FieldOptions | Mapping[str, Any] | None


def _registry(registry: MetadataRegistry | None) -> MetadataRegistry:
    return default_registry if registry is None else registry


# -----------------------------------------------------------------------------
# Explicit registration
# -----------------------------------------------------------------------------


def declare_output_type(cls: type, *, registry: MetadataRegistry | None = None) -> RegistryEntry:
    """Declare ``cls`` as an object (output) type."""
    return _registry(registry).declare_output_type(cls.__name__, cls)


def declare_input_type(cls: type, *, registry: MetadataRegistry | None = None) -> RegistryEntry:
    """Declare ``cls`` as an input type."""
    return _registry(registry).declare_input_type(cls.__name__, cls)


def declare_field(
    cls: type,
    member: str,
    returns: Returns = None,
    options: Options = None,
    *,
    kind: FieldKind = FieldKind.PLAIN,
    registry: MetadataRegistry | None = None,
    introspector: TypeIntrospector = default_introspector,
) -> FieldMetadata:
    """Declare an attribute or method of ``cls`` as a field.

    Args:
        cls: The declaring class
        member: Attribute or method name
        returns: Type provider such as ``lambda: [str]``, or the options
        options: FieldOptions or an equivalent dict
        kind: Plain field, query or mutation
        registry: Target registry (default: the process-wide one)
        introspector: Source of the member's annotated type
    """
    processor = AnnotationProcessor(_registry(registry))
    return processor.process_field(
        cls.__name__,
        member,
        is_method=is_method_member(cls, member),
        introspected=introspector.introspect(DeclarationSite(cls, member)),
        returns=returns,
        options=options,
        kind=kind,
    )


def declare_query(cls: type, member: str, returns: Returns = None, options: Options = None, **kwargs: Any) -> FieldMetadata:
    return declare_field(cls, member, returns, options, kind=FieldKind.QUERY, **kwargs)


def declare_mutation(cls: type, member: str, returns: Returns = None, options: Options = None, **kwargs: Any) -> FieldMetadata:
    return declare_field(cls, member, returns, options, kind=FieldKind.MUTATION, **kwargs)


def declare_arg(
    cls: type,
    method: str,
    name: str | None,
    index: int,
    *,
    registry: MetadataRegistry | None = None,
    introspector: TypeIntrospector = default_introspector,
) -> ArgMetadata:
    """Expose positional parameter ``index`` of ``method`` (not counting self) as ``name``."""
    processor = AnnotationProcessor(_registry(registry))
    introspected = introspector.introspect(DeclarationSite(cls, method, index))
    return processor.process_arg(cls.__name__, method, name, index, introspected)


def declare_resolver(
    cls: type[T],
    *,
    registry: MetadataRegistry | None = None,
    injector: Injector | None = None,
    on_created: Callable[[T], None] | None = None,
) -> T:
    """Construct ``cls`` with its dependencies and bind it as a resolver."""
    instance = (injector or default_injector).construct(cls)
    _registry(registry).bind_resolver(cls.__name__, instance)
    if on_created is not None:
        on_created(instance)
    return instance


# -----------------------------------------------------------------------------
# Decorators
# -----------------------------------------------------------------------------


@dataclass
class MemberDeclaration:
    """Marks an attribute or method for registration by a class decorator."""
    kind: FieldKind
    returns: Returns = None
    options: Options = None

    def __call__(self, function: Callable[..., Any]) -> Callable[..., Any]:
        setattr(unwrap_function(function), _MEMBER_ATTR, self)
        return function


@dataclass(frozen=True)
class ArgDeclaration:
    """Names a method parameter, used as ``Annotated[int, arg("id")]``."""
    name: str | None


def field(returns: Returns = None, options: Options = None) -> Any:
    """Declare a field; usable as an attribute value or a method decorator."""
    return MemberDeclaration(FieldKind.PLAIN, returns, options)


def query(returns: Returns = None, options: Options = None) -> MemberDeclaration:
    """Declare a resolver method as a query."""
    return MemberDeclaration(FieldKind.QUERY, returns, options)


def mutation(returns: Returns = None, options: Options = None) -> MemberDeclaration:
    """Declare a resolver method as a mutation."""
    return MemberDeclaration(FieldKind.MUTATION, returns, options)


def arg(name: str | None = None) -> ArgDeclaration:
    return ArgDeclaration(name)


def _arg_declarations(hint: Any) -> list[ArgDeclaration]:
    if typing.get_origin(hint) is not typing.Annotated:
        return []
    return [m for m in typing.get_args(hint)[1:] if isinstance(m, ArgDeclaration)]


def _register_members(cls: type, registry: MetadataRegistry, introspector: TypeIntrospector):
    """Register every marked attribute and method of ``cls``, in definition order."""
    for name, member in list(vars(cls).items()):
        if isinstance(member, MemberDeclaration):
            declare_field(
                cls, name, member.returns, member.options,
                kind=member.kind, registry=registry, introspector=introspector,
            )
            # instances carry their own values
            delattr(cls, name)
            continue

        function = unwrap_function(member)
        declaration = getattr(function, _MEMBER_ATTR, None) if inspect.isfunction(function) else None
        if declaration is None:
            continue

        declare_field(
            cls, name, declaration.returns, declaration.options,
            kind=declaration.kind, registry=registry, introspector=introspector,
        )
        hints = type_hints(function)
        for index, param in enumerate(positional_parameters(function)):
            for declared in _arg_declarations(hints.get(param.name, param.annotation)):
                declare_arg(cls, name, declared.name, index, registry=registry, introspector=introspector)


def object_type(
    cls: type | None = None,
    *,
    registry: MetadataRegistry | None = None,
    introspector: TypeIntrospector = default_introspector,
) -> Any:
    """Class decorator declaring an object type and its fields."""

    def decorator(target: type) -> type:
        _register_members(target, _registry(registry), introspector)
        declare_output_type(target, registry=registry)
        return target

    return decorator(cls) if cls is not None else decorator


def input_type(
    cls: type | None = None,
    *,
    registry: MetadataRegistry | None = None,
    introspector: TypeIntrospector = default_introspector,
) -> Any:
    """Class decorator declaring an input type and its fields."""

    def decorator(target: type) -> type:
        _register_members(target, _registry(registry), introspector)
        declare_input_type(target, registry=registry)
        return target

    return decorator(cls) if cls is not None else decorator


def resolver(
    cls: type | None = None,
    *,
    registry: MetadataRegistry | None = None,
    injector: Injector | None = None,
    introspector: TypeIntrospector = default_introspector,
    on_created: Callable[[Any], None] | None = None,
) -> Any:
    """Class decorator registering queries and mutations, then binding an instance."""

    def decorator(target: type) -> type:
        _register_members(target, _registry(registry), introspector)
        declare_resolver(target, registry=registry, injector=injector, on_created=on_created)
        return target

    return decorator(cls) if cls is not None else decorator
