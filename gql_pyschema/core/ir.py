"""Intermediate representation of declared GraphQL metadata.

These dataclasses are what the annotation processor writes into the registry and
what the schema builder reads back when it compiles a schema.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class FieldKind(Enum):
    """How a declared member is exposed."""
    PLAIN = "field"
    QUERY = "query"
    MUTATION = "mutation"


@dataclass
class FieldOptions:
    """Optional settings attached to a declared field."""
    nullable: bool | None = None
    comment: str | None = None
    default_value: str | None = None
    complexity: int | None = None
    on_registered: Callable[["FieldMetadata"], None] | None = None


@dataclass
class FieldMetadata:
    """A declared field, query or mutation on a type or resolver."""
    owner: str
    name: str
    scalar: str  # scalar canonical name, or the declared type's name
    is_array: bool = False
    is_method: bool = False
    is_custom_type: bool = False
    has_resolver_binding: bool = False
    kind: FieldKind = FieldKind.PLAIN
    options: FieldOptions = field(default_factory=FieldOptions)

    @property
    def type_label(self) -> str:
        return f"[{self.scalar}]" if self.is_array else self.scalar


@dataclass
class ArgMetadata:
    """A named argument of a resolver method, bound to a positional parameter."""
    owner: str
    method: str
    name: str
    scalar: str
    is_custom_type: bool = False
    index: int = 0


@dataclass
class TypeRoleMetadata:
    """Whether a declaration is an output (object) type or an input type."""
    name: str
    is_input: bool = False
    declaration: type | None = None


@dataclass
class RegistryEntry:
    """Everything declared for one type or resolver."""
    name: str
    fields: list[FieldMetadata] = field(default_factory=list)
    # position in each list is the parameter index; None marks a gap
    args: dict[str, list[ArgMetadata | None]] = field(default_factory=dict)
    role: TypeRoleMetadata | None = None
    resolver: Any = None

    @property
    def is_input(self) -> bool:
        return self.role is not None and self.role.is_input

    @property
    def is_resolver(self) -> bool:
        return self.resolver is not None

    def fields_of_kind(self, kind: FieldKind) -> list[FieldMetadata]:
        """Return the fields of one kind, in declaration order."""
        return [f for f in self.fields if f.kind is kind]

    def args_for(self, method: str) -> list[ArgMetadata | None]:
        return self.args.get(method, [])
