"""Mapping between Python types and GraphQL scalars.

Python builtins cover strings, integers, floats and booleans. The marker classes
below name the scalars Python has no direct spelling for, and let a declaration be
explicit where the builtin would be ambiguous.

Example usage:
    from gql_pyschema.core.scalars import Float, scalar_catalog

    scalar_catalog.canonical_name(str)      # "String"
    scalar_catalog.canonical_name(Float)    # "Float"
    scalar_catalog.to_scalar("Float")       # GraphQLFloat
"""

import numbers
from typing import Any

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

from .errors import UnhandledScalar


class Int:
    """GraphQL Int."""


class Float:
    """GraphQL Float."""


class Bool:
    """GraphQL Boolean."""


class Void:
    """No meaningful value; exposed as a nullable Boolean."""


class ID:
    """Identifier; exposed as a String."""


class Number:
    """Generic number. Ambiguous, treated as Float."""


STRING = "String"
INT = "Int"
FLOAT = "Float"
BOOL = "Bool"
VOID = "Void"
IDENTIFIER = "ID"
NUMBER = "Number"


class ScalarCatalog:
    """Registry of Python types that map onto built-in scalars.

    Each registered type resolves to a canonical name; each canonical name
    resolves to a graphql-core scalar.
    """

    def __init__(self):
        self._names: dict[Any, str] = {}
        self._scalars: dict[str, GraphQLScalarType] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register the built-in Python types and markers."""
        self.register(str, STRING)
        self.register(int, INT)
        self.register(Int, INT)
        self.register(float, FLOAT)
        self.register(Float, FLOAT)
        self.register(bool, BOOL)
        self.register(Bool, BOOL)
        self.register(None, VOID)
        self.register(type(None), VOID)
        self.register(Void, VOID)
        self.register(ID, IDENTIFIER)
        self.register(Number, NUMBER)
        self.register(numbers.Number, NUMBER)

        self._scalars = {
            STRING: GraphQLString,
            INT: GraphQLInt,
            FLOAT: GraphQLFloat,
            NUMBER: GraphQLFloat,
            BOOL: GraphQLBoolean,
            VOID: GraphQLBoolean,
            IDENTIFIER: GraphQLString,
        }

    def register(self, python_type: Any, canonical_name: str):
        """Map a Python type onto a canonical scalar name."""
        self._names[python_type] = canonical_name

    def canonical_name(self, python_type: Any) -> str | None:
        """Return the canonical scalar name, or None for a custom type."""
        try:
            return self._names.get(python_type)
        except TypeError:
            # unhashable, so certainly not a registered scalar
            return None

    def has(self, python_type: Any) -> bool:
        return self.canonical_name(python_type) is not None

    def to_scalar(self, canonical_name: str) -> GraphQLScalarType:
        """Return the graphql-core scalar for a canonical name."""
        try:
            return self._scalars[canonical_name]
        except KeyError:
            raise UnhandledScalar(canonical_name) from None

    def is_void(self, python_type: Any) -> bool:
        return self.canonical_name(python_type) == VOID

    def is_boolean(self, python_type: Any) -> bool:
        return self.canonical_name(python_type) == BOOL

    def is_generic_number(self, python_type: Any) -> bool:
        return self.canonical_name(python_type) == NUMBER


scalar_catalog = ScalarCatalog()
