"""Authentication handlers for GraphQL requests.

Both the introspection GET and the query POST ask the configured handler
for the headers to send. Any object with ``get_headers()`` will do.
"""

from typing import Dict, Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class SessionAuth:
            def __init__(self, session_id: str):
                self.session_id = session_id

            def get_headers(self) -> dict[str, str]:
                return {"Cookie": f"session={self.session_id}"}
    """

    def get_headers(self) -> Dict[str, str]:
        """Return headers to include in requests."""
        ...


class NoAuth:
    """No authentication (public endpoints and tests)."""

    def get_headers(self) -> Dict[str, str]:
        return {}


class BearerAuth:
    """Sends ``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class ApiKeyAuth:
    """Sends an API key in a single header (``x-api-key`` unless overridden)."""

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name

    def get_headers(self) -> Dict[str, str]:
        return {self.header_name: self.api_key}


class HeaderAuth:
    """Sends a fixed set of headers, e.g. from ``--header Name:Value`` options."""

    def __init__(self, headers: Dict[str, str]):
        self._headers = dict(headers)

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "HeaderAuth":
        """Build from ``Name:Value`` strings."""
        headers = {}
        for pair in pairs:
            name, sep, value = pair.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header {pair!r}, expected Name:Value")
            headers[name.strip()] = value.strip()
        return cls(headers)

    def get_headers(self) -> Dict[str, str]:
        return self._headers.copy()
