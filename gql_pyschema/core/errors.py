"""Errors raised while registering declarations, building schemas and executing queries.

Registration and build errors signal a programming-time contract violation. They are
raised synchronously and are expected to abort application startup.
"""

from typing import Any


class GraphSchemaError(Exception):
    """Base class for every error raised by gql-pyschema."""


class InvalidArgName(GraphSchemaError):
    def __init__(self, caller: str, index: int):
        super().__init__(f"Invalid name for arg {index} at {caller}")


class ArrayNoReturnType(GraphSchemaError):
    def __init__(self, caller: str):
        super().__init__(
            f"[{caller}]: Need to define a return type for a list; "
            "e.g. field(lambda: [str]) for list[str]"
        )


class ReturnIsUnknown(GraphSchemaError):
    def __init__(self, caller: str):
        super().__init__(
            f"[{caller}]: 'Any', 'object', 'dict' or an unannotated member "
            "is not allowed without an explicit type"
        )


class MethodNoReturnType(GraphSchemaError):
    def __init__(self, caller: str):
        super().__init__(
            f"[{caller}]: Need to define a return type for a method; "
            "e.g. field(lambda: [str])"
        )


class ResolverFieldMustBeMethod(GraphSchemaError):
    def __init__(self, caller: str, member_kind: str, field_kind: str):
        super().__init__(
            f"[{caller}]: {member_kind} can't be declared as {field_kind}. Must be a method"
        )


class TypeMismatch(GraphSchemaError):
    def __init__(self, caller: str, member_kind: str, introspected: str, declared: str):
        super().__init__(
            f"[{caller}]: declared type and {member_kind} type mismatch. "
            f"{member_kind} is annotated '{introspected}' but declared as '{declared}'"
        )


class TypeAlreadyRegistered(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"Type '{name}' already registered")


class ResolverAlreadyRegistered(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"Resolver '{name}' already registered")


class TypeResolverConflict(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' is already registered as a resolver")


class ResolverTypeConflict(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' is already registered as a type")


class InputAsOutput(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"Input type '{name}' used as output")


class OutputAsInput(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"Type '{name}' used as input but is not an input type")


class UnhandledScalar(GraphSchemaError):
    """Internal inconsistency between the scalar catalog and the processor."""

    def __init__(self, name: str):
        super().__init__(f"Unhandled scalar type - {name}")


class NoQueryFieldsFound(GraphSchemaError):
    def __init__(self):
        super().__init__("No query fields found")


class TypeNoFieldDecorator(GraphSchemaError):
    def __init__(self, name: str):
        super().__init__(f"[{name}]: does not declare any field but is referenced by a resolver")


class ResolverNoDecorator(GraphSchemaError):
    def __init__(self, owner: str, kind: str, name: str):
        super().__init__(f"No resolver registered for '{owner}' holding {kind} '{name}'")


class ArgIndexGap(GraphSchemaError):
    def __init__(self, owner: str, method: str, index: int):
        super().__init__(f"[{owner} > {method}]: no arg declared for parameter {index}")


class InvalidDefaultValue(GraphSchemaError):
    def __init__(self, owner: str, name: str, value: str):
        super().__init__(f"[{owner} > {name}]: default value {value!r} is not valid for the field type")


class DependencyCycle(GraphSchemaError):
    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"Dependency cycle: {' -> '.join(chain)}")


class DependencyUnresolvable(GraphSchemaError):
    def __init__(self, owner: str, parameter: str):
        super().__init__(
            f"[{owner}]: constructor parameter '{parameter}' has no type annotation and no default"
        )


class InvalidSchema(GraphSchemaError):
    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("Invalid schema: " + "; ".join(messages))


class QueryError(GraphSchemaError):
    """Raised when the execution engine reports errors for a document."""

    def __init__(self, message: str, errors: list[Any]):
        self.message = message
        self.errors = errors
        super().__init__(message)
