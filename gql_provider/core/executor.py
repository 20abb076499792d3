"""GraphQL executor for running queries against a GraphQL endpoint.

Sends ``{"query": ...}`` and maps the response into a ``QueryResult``:
``Success`` with the ``data`` subtree or ``Failure`` with the reported
errors. Server-side errors are returned, never raised; only transport
problems raise.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from .auth import Auth, NoAuth
from .errors import TransportError, format_errors
from .transport import request_json
from .values import ListValue, NullValue, ObjectValue, ScalarValue, Value, to_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorDetail:
    """One entry of a response's ``errors`` list.

    ``payload`` keeps the whole entry (locations, path, extensions, ...).
    """
    message: str
    payload: Value

    @classmethod
    def from_value(cls, value: Value) -> "ErrorDetail":
        message = None
        if isinstance(value, ObjectValue):
            message = value.get("message")
        if isinstance(message, ScalarValue):
            return cls(message=str(message.value), payload=value)
        return cls(message=str(value.to_python()), payload=value)


@dataclass(frozen=True)
class Success:
    """The service answered without errors."""
    data: Value
    ok = True


@dataclass(frozen=True)
class Failure:
    """The service reported errors; ``errors`` keeps their order."""
    errors: tuple[ErrorDetail, ...]
    ok = False

    @property
    def message(self) -> str:
        return format_errors(self.errors)


QueryResult = Union[Success, Failure]


def result_from_response(document: Any) -> QueryResult:
    """Turn a decoded response body into a ``QueryResult``.

    A top-level ``errors`` key always yields ``Failure``, even when
    ``data`` is also present.

    Raises:
        TransportError: If the body is not a JSON object
    """
    body = to_value(document)
    if not isinstance(body, ObjectValue):
        raise TransportError(
            f"Expected a JSON object response, got {type(document).__name__}"
        )

    if "errors" in body:
        errors = body["errors"]
        entries = errors.items if isinstance(errors, ListValue) else (errors,)
        return Failure(tuple(ErrorDetail.from_value(entry) for entry in entries))

    return Success(body.get("data", NullValue()))


class QueryExecutor:
    """Executes GraphQL queries against an endpoint.

    The executor holds configuration only. Each ``execute`` call opens and
    closes its own connection, so one executor can serve many concurrent
    calls.

    Examples:
        executor = QueryExecutor(url)
        executor = QueryExecutor(url, auth=BearerAuth(token), timeout=10.0)

        result = await executor.execute("{ me { name } }")
        if result.ok:
            print(result.data["me"])
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the executor.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds, None to disable
            transport: Optional httpx transport, mainly for tests
        """
        self.url = url
        self.auth = auth or NoAuth()
        self.timeout = timeout
        self.transport = transport

    async def execute(self, query: str) -> QueryResult:
        """Execute a raw GraphQL query once.

        Args:
            query: GraphQL query string

        Returns:
            ``Success`` with the ``data`` subtree, or ``Failure`` with the
            server-reported errors

        Raises:
            TransportError: If the exchange fails or the body is unusable
        """
        document = await request_json(
            "POST",
            self.url,
            json={"query": query},
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        )
        result = result_from_response(document)
        if isinstance(result, Failure):
            logger.debug("Query against %s failed: %s", self.url, result.message)
        return result
