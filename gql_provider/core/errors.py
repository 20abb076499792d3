"""Exceptions raised while talking to a GraphQL service.

Transport failures and server-reported (protocol) failures are kept apart
so callers can tell a dead endpoint from a rejected request.
"""

from typing import Any, Sequence


def format_errors(errors: Sequence[Any]) -> str:
    """Join the ``message`` of each server error into one line."""
    messages = []
    for error in errors:
        message = getattr(error, "message", None)
        if message is None and isinstance(error, dict):
            message = error.get("message")
        messages.append(str(message if message is not None else error))
    return "; ".join(messages)


class GraphQLProviderError(Exception):
    """Base class for all gql-provider errors."""


class TransportError(GraphQLProviderError):
    """Raised when the HTTP exchange itself fails.

    Covers connection failures, non-success statuses and bodies that are
    not a usable JSON document. Never retried.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ProtocolError(GraphQLProviderError):
    """Raised when a well-formed response carries a top-level ``errors`` list."""

    def __init__(self, message: str, errors: Any):
        self.message = message
        # Raw server payload, unmodified
        self.errors = errors
        super().__init__(message)


class CompilationError(GraphQLProviderError):
    """Fatal error while generating a type surface or binding a query.

    ``errors`` carries whatever the service reported, if anything.
    """

    def __init__(self, message: str, errors: Sequence[Any] = ()):
        self.message = message
        self.errors = errors
        super().__init__(message)
