"""Query execution against a compiled schema.

Variables are substituted into the document text before it reaches the engine, so
``$name`` in ``getName(input: { name: $name })`` becomes ``"John"`` given
``{"name": "John"}``.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from graphql import GraphQLSchema, graphql, graphql_sync, print_schema
from pydantic import BaseModel

from .errors import QueryError

logger = logging.getLogger(__name__)


def to_literal(value: Any) -> str:
    """Render a Python value as a GraphQL literal."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True, exclude_none=True)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, Mapping):
        return "{ " + ", ".join(f"{k}: {to_literal(v)}" for k, v in value.items()) + " }"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_literal(v) for v in value) + "]"
    return str(value)


def substitute_variables(document: str, variables: Mapping[str, Any] | BaseModel | None) -> str:
    """Replace every ``$key`` token with the literal form of its value.

    Nested mappings are walked depth-first; their leaf keys are substituted in the
    same document, so ``{"info": {"admin": True}}`` resolves ``$admin``.
    """
    if isinstance(variables, BaseModel):
        variables = variables.model_dump(by_alias=True, exclude_none=True)
    for key, value in (variables or {}).items():
        if isinstance(value, BaseModel):
            value = value.model_dump(by_alias=True, exclude_none=True)
        if isinstance(value, Mapping):
            document = substitute_variables(document, value)
            continue
        literal = to_literal(value)
        document = re.sub(rf"\${re.escape(str(key))}(?!\w)", lambda _: literal, document)
    return document


class QuerySession:
    """Runs documents against one compiled schema.

    The schema is never modified, so a session can serve concurrent executions.

    Example:
        session = build_schema([UserResolver, OrderResolver])
        data = await session.execute("query { user(id: $id) { name } }", {"id": 1})
    """

    def __init__(self, schema: GraphQLSchema):
        self.schema = schema

    def sdl(self) -> str:
        """Return the schema in GraphQL SDL."""
        return print_schema(self.schema)

    def _result(self, result: Any) -> dict[str, Any]:
        if result.errors:
            error_messages = "; ".join(e.message for e in result.errors)
            raise QueryError(f"GraphQL errors: {error_messages}", list(result.errors))
        return result.data or {}

    async def execute(
        self,
        document: str,
        variables: Mapping[str, Any] | BaseModel | None = None,
    ) -> dict[str, Any]:
        """Execute a query or mutation document.

        Args:
            document: GraphQL document, possibly holding ``$key`` tokens
            variables: Values substituted for the tokens

        Returns:
            The 'data' portion of the result

        Raises:
            QueryError: If the engine reported errors; partial data is discarded
        """
        source = substitute_variables(document, variables)
        logger.debug("Executing document:\n%s", source)
        return self._result(await graphql(self.schema, source))

    def execute_sync(
        self,
        document: str,
        variables: Mapping[str, Any] | BaseModel | None = None,
    ) -> dict[str, Any]:
        """Execute a document whose resolvers are all synchronous."""
        source = substitute_variables(document, variables)
        logger.debug("Executing document:\n%s", source)
        return self._result(graphql_sync(self.schema, source))
