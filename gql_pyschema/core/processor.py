"""Validation and normalisation of declared fields and arguments.

Fields, queries and mutations share one routine. It decides the field's final type
from an explicit type provider (a zero-argument callable such as ``lambda: [str]``)
or from the introspected annotation, checks both agree, and stores the resulting
FieldMetadata in the registry.
"""

import logging
import typing
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable

from .errors import (
    ArrayNoReturnType,
    InvalidArgName,
    MethodNoReturnType,
    ResolverFieldMustBeMethod,
    ReturnIsUnknown,
    TypeMismatch,
)
from .introspection import LIST, OPAQUE
from .ir import ArgMetadata, FieldKind, FieldMetadata, FieldOptions
from .registry import MetadataRegistry
from .scalars import NUMBER, VOID, ScalarCatalog, scalar_catalog

logger = logging.getLogger(__name__)

TypeProvider = Callable[[], Any]


def type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)


def normalize_options(options: FieldOptions | Mapping[str, Any] | None) -> FieldOptions:
    """Return a private FieldOptions copy of whatever the caller passed."""
    if options is None:
        return FieldOptions()
    if isinstance(options, FieldOptions):
        return replace(options)
    return FieldOptions(**options)


def split_overloads(
    returns: TypeProvider | FieldOptions | Mapping[str, Any] | None,
    options: FieldOptions | Mapping[str, Any] | None,
) -> tuple[TypeProvider | None, FieldOptions]:
    """Accept (), (provider), (options) and (provider, options)."""
    if isinstance(returns, (FieldOptions, Mapping)):
        return None, normalize_options(returns if options is None else options)
    if returns is not None and not callable(returns):
        raise TypeError(f"Expected a type provider callable, got {returns!r}")
    return returns, normalize_options(options)


class AnnotationProcessor:
    """Turns declarations into registry metadata."""

    def __init__(self, registry: MetadataRegistry, catalog: ScalarCatalog = scalar_catalog):
        self.registry = registry
        self.catalog = catalog

    def _classify(self, caller: str, element: Any) -> tuple[str, bool]:
        """Return (scalar or type name, is_custom_type) for an element type."""
        canonical = self.catalog.canonical_name(element)
        if canonical is None:
            return type_name(element), True
        if canonical == NUMBER:
            logger.info("[%s]: Found ambiguous type '%s'. Assuming Float", caller, type_name(element))
        return canonical, False

    def process_field(
        self,
        owner: str,
        member: str,
        *,
        is_method: bool,
        introspected: Any = None,
        returns: TypeProvider | FieldOptions | Mapping[str, Any] | None = None,
        options: FieldOptions | Mapping[str, Any] | None = None,
        kind: FieldKind = FieldKind.PLAIN,
    ) -> FieldMetadata:
        """Validate a declared member and register it as a field.

        Args:
            owner: Name of the declaring type or resolver
            member: Attribute or method name
            is_method: Whether the member is a method
            introspected: Annotation reported by the introspector (a type, LIST,
                OPAQUE, or None when nothing is known)
            returns: Type provider, or the options when no provider is given
            options: Field options
            kind: Plain field, query or mutation

        Returns:
            The registered FieldMetadata
        """
        caller = f"{owner} > {member}"
        member_kind = "Method" if is_method else "Property"

        if kind is not FieldKind.PLAIN and not is_method:
            raise ResolverFieldMustBeMethod(caller, member_kind, kind.value)

        provider, options = split_overloads(returns, options)

        if provider is None:
            if is_method:
                raise MethodNoReturnType(caller)
            if introspected is LIST:
                raise ArrayNoReturnType(caller)
            if introspected is OPAQUE or introspected is None:
                raise ReturnIsUnknown(caller)

        evaluated = provider() if provider is not None else introspected

        is_array = False
        if isinstance(evaluated, list):
            if len(evaluated) != 1:
                raise ArrayNoReturnType(caller)
            is_array, evaluated = True, evaluated[0]
        elif typing.get_origin(evaluated) is list:
            is_array, evaluated = True, typing.get_args(evaluated)[0]

        scalar, is_custom = self._classify(caller, evaluated)

        if (
            introspected is not None
            and introspected is not LIST
            and introspected is not OPAQUE
            and not self.catalog.is_boolean(introspected)
            and not self.catalog.is_generic_number(introspected)
        ):
            reported = self.catalog.canonical_name(introspected) or type_name(introspected)
            if reported != scalar:
                raise TypeMismatch(
                    caller, member_kind, type_name(introspected), f"[{scalar}]" if is_array else scalar
                )

        if scalar == VOID:
            options = replace(options, nullable=True)

        field = FieldMetadata(
            owner=owner,
            name=member,
            scalar=scalar,
            is_array=is_array,
            is_method=is_method,
            is_custom_type=is_custom,
            has_resolver_binding=kind is not FieldKind.PLAIN,
            kind=kind,
            options=options,
        )
        self.registry.add_field(owner, field)
        logger.debug("[%s]: %s is a '%s' of type '%s'", caller, kind.value, member_kind, field.type_label)

        if options.on_registered is not None:
            options.on_registered(field)
        return field

    def process_arg(self, owner: str, method: str, name: str | None, index: int, introspected: Any) -> ArgMetadata:
        """Register a named argument for a positional method parameter."""
        caller = f"{owner} > {method}"
        if not name:
            raise InvalidArgName(caller, index)
        if introspected is LIST:
            raise ArrayNoReturnType(caller)
        if introspected is None or introspected is OPAQUE:
            raise ReturnIsUnknown(caller)

        scalar, is_custom = self._classify(caller, introspected)
        arg = ArgMetadata(
            owner=owner,
            method=method,
            name=name,
            scalar=scalar,
            is_custom_type=is_custom,
            index=index,
        )
        self.registry.add_arg(owner, arg)
        logger.debug("[%s]: arg '%s' at %d of type '%s'", caller, name, index, scalar)
        return arg
