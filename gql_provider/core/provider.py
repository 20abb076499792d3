"""Two-call entry point: compile a service's types, then bind queries.

    provider = await GraphQLProvider.create(url)      # fetch + compile
    people = await provider.bind_query(PEOPLE_QUERY)  # preflight + bind
    result = await people()                           # at runtime

Both calls are generation-time steps: any failure raises
``CompilationError`` and nothing partial is handed back.
"""

import logging
from pathlib import Path
from typing import Mapping

import httpx

from .auth import Auth
from .compiler import TypeCompiler, TypeRegistry
from .errors import CompilationError, ProtocolError, TransportError
from .executor import QueryExecutor
from .introspection import SchemaFetcher
from .scalars import BUILTIN_SCALARS
from .validator import BoundQuery, QueryValidator

logger = logging.getLogger(__name__)


class GraphQLProvider:
    """Compiled type surface of one GraphQL service plus query binding."""

    def __init__(self, registry: TypeRegistry, executor: QueryExecutor):
        self.registry = registry
        self.executor = executor
        self._validator = QueryValidator(executor)

    @property
    def url(self) -> str:
        return self.executor.url

    @classmethod
    async def create(
        cls,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        known_types: Mapping[str, type] = BUILTIN_SCALARS,
        schema_file: str | Path | None = None,
    ) -> "GraphQLProvider":
        """Fetch (or load) the schema and compile it.

        Args:
            url: GraphQL endpoint URL; queries are always bound against it
            auth: Authentication handler for every request
            timeout: Request timeout in seconds, None to disable
            transport: Optional httpx transport, mainly for tests
            known_types: Scalars mapped to native types
            schema_file: Saved introspection response to use instead of
                fetching from ``url``

        Raises:
            CompilationError: If the schema cannot be obtained or compiled
        """
        fetcher = SchemaFetcher(auth, timeout=timeout, transport=transport)
        try:
            if schema_file is not None:
                schema = fetcher.load(schema_file)
            else:
                schema = await fetcher.fetch(url)
        except ProtocolError as e:
            raise CompilationError(
                f"Could not introspect {url}: {e.message}", e.errors
            ) from e
        except TransportError as e:
            raise CompilationError(f"Could not introspect {url}: {e.message}") from e

        registry = TypeCompiler(known_types).compile(schema)
        executor = QueryExecutor(url, auth, timeout=timeout, transport=transport)
        return cls(registry, executor)

    async def bind_query(self, query: str, name: str | None = None) -> BoundQuery:
        """Preflight ``query`` and return a callable for it."""
        return await self._validator.validate(query, name)

    async def bind_queries(self, queries: Mapping[str, str]) -> dict[str, BoundQuery]:
        """Bind several queries; the first rejection aborts the whole set."""
        bound = {}
        for name, query in queries.items():
            bound[name] = await self.bind_query(query, name)
        logger.info("Bound %d queries against %s", len(bound), self.url)
        return bound
