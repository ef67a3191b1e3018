"""Static type information for declaration sites.

The processor never inspects classes itself. It asks a TypeIntrospector what type a
member, a return value or a parameter was annotated with. The answer is one of:

    * a concrete type (a class, or ``NoneType`` for ``-> None``)
    * ``LIST``   - annotated as a list, element type not usable
    * ``OPAQUE`` - annotated as ``Any``/``object``/``dict``/a union, or not at all
    * ``None``   - nothing to report (e.g. a method without a return annotation)
"""

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


class _Sentinel:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


LIST = _Sentinel("LIST")
OPAQUE = _Sentinel("OPAQUE")

_LIST_ORIGINS = {list, tuple, set, frozenset}
_OPAQUE_TYPES = {typing.Any, object, dict}


@dataclass(frozen=True)
class DeclarationSite:
    """A member of a class, optionally narrowed to one positional parameter."""
    owner: type
    member: str
    index: int | None = None  # parameter index, not counting self


@runtime_checkable
class TypeIntrospector(Protocol):
    """Reports the statically known type of a declaration site."""

    def introspect(self, site: DeclarationSite) -> Any:
        ...


def unwrap_function(member: Any) -> Any:
    """Return the plain function behind a static/class method, if any."""
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def is_method_member(owner: type, member: str) -> bool:
    target = unwrap_function(inspect.getattr_static(owner, member, None))
    return inspect.isfunction(target)


def positional_parameters(function: Any) -> list[inspect.Parameter]:
    """Return the positional parameters of an instance method, without self."""
    params = [
        p
        for p in inspect.signature(function).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    return params[1:]


def type_hints(obj: Any) -> dict[str, Any]:
    """Resolve annotations, falling back to the raw ones when forward refs fail."""
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError):
        return dict(getattr(obj, "__annotations__", {}))


def classify(annotation: Any) -> Any:
    """Reduce an annotation to a concrete type, LIST or OPAQUE."""
    if annotation is None or annotation is type(None):
        return type(None)
    if isinstance(annotation, (str, typing.ForwardRef)):
        return OPAQUE
    if any(annotation is t for t in _OPAQUE_TYPES):
        return OPAQUE

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return classify(typing.get_args(annotation)[0])
    if origin in (typing.Union, types.UnionType):
        members = [a for a in typing.get_args(annotation) if a is not type(None)]
        # Optional[X] is X; anything wider is not a single type
        return classify(members[0]) if len(members) == 1 else OPAQUE
    if any(annotation is t or origin is t for t in _LIST_ORIGINS):
        return LIST
    if origin is not None:
        return OPAQUE
    if isinstance(annotation, type):
        return annotation
    return OPAQUE


class AnnotationIntrospector:
    """Default introspector backed by Python annotations."""

    def introspect(self, site: DeclarationSite) -> Any:
        target = unwrap_function(inspect.getattr_static(site.owner, site.member, None))

        if inspect.isfunction(target):
            hints = type_hints(target)
            if site.index is None:
                if "return" not in hints:
                    return None
                return classify(hints["return"])

            params = positional_parameters(target)
            if site.index >= len(params):
                return None
            name = params[site.index].name
            return classify(hints[name]) if name in hints else OPAQUE

        hints = type_hints(site.owner)
        if site.member not in hints:
            return OPAQUE
        return classify(hints[site.member])


default_introspector = AnnotationIntrospector()
