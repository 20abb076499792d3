"""Preflight validation of query texts.

A query is only exposed to application code after the live service has
accepted it once. Rejection is fatal: no callable is produced.
"""

import logging
from dataclasses import dataclass

from graphql import GraphQLSyntaxError, get_operation_ast, parse

from .errors import CompilationError, TransportError
from .executor import Failure, QueryExecutor, QueryResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundQuery:
    """A validated query text bound to an executor.

    Calling it (no arguments) re-executes the identical text and returns a
    ``QueryResult``; server errors come back as ``Failure``, not raised.

    Example:
        people = await validator.validate("{ people { name } }")
        result = await people()
    """
    query: str
    executor: QueryExecutor
    name: str | None = None

    async def __call__(self) -> QueryResult:
        return await self.executor.execute(self.query)


def operation_name(query: str) -> str | None:
    """Parse ``query`` and return its operation name, if it has one.

    Raises:
        CompilationError: If the text is not valid GraphQL
    """
    try:
        document = parse(query)
    except GraphQLSyntaxError as e:
        raise CompilationError(f"Invalid GraphQL query: {e.message}") from e
    operation = get_operation_ast(document)
    if operation is not None and operation.name is not None:
        return operation.name.value
    return None


class QueryValidator:
    """Checks queries against the live service before binding them."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    async def validate(self, query: str, name: str | None = None) -> BoundQuery:
        """Run ``query`` once and bind it if the service accepts it.

        Args:
            query: GraphQL query text
            name: Name for the bound query; defaults to the operation name

        Raises:
            CompilationError: If the text does not parse, the exchange
                fails, or the service reports errors for it
        """
        parsed_name = operation_name(query)
        name = name or parsed_name

        try:
            result = await self.executor.execute(query)
        except TransportError as e:
            raise CompilationError(
                f"Preflight of query {name or '<anonymous>'} failed: {e}"
            ) from e

        if isinstance(result, Failure):
            raise CompilationError(
                f"Query {name or '<anonymous>'} rejected by {self.executor.url}: {result.message}",
                result.errors,
            )

        logger.debug("Query %s accepted by %s", name or "<anonymous>", self.executor.url)
        return BoundQuery(query=query, executor=self.executor, name=name)
