"""Single HTTP request/response exchange with a GraphQL endpoint.

Every call opens its own ``httpx.AsyncClient`` and closes it once the
full body is read. Anything that goes wrong before a JSON document is in
hand becomes a ``TransportError``.
"""

import logging
from typing import Any

import httpx

from .auth import Auth, NoAuth
from .errors import TransportError

logger = logging.getLogger(__name__)


async def request_json(
    method: str,
    url: str,
    *,
    auth: Auth | None = None,
    timeout: float | None = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> Any:
    """Perform one request and return the decoded JSON body.

    Args:
        method: HTTP method ("GET" or "POST")
        url: GraphQL endpoint URL
        auth: Authentication handler; defaults to no auth
        timeout: Request timeout in seconds, None to disable
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        **kwargs: Passed through to ``httpx.AsyncClient.request``

    Raises:
        TransportError: On connection errors, non-2xx statuses or bodies
            that are not valid JSON
    """
    headers = {"Accept": "application/json"}
    headers.update((auth or NoAuth()).get_headers())

    logger.debug("%s %s", method, url)
    try:
        async with httpx.AsyncClient(
            timeout=timeout, headers=headers, transport=transport
        ) as client:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise TransportError(
            f"{method} {url} returned HTTP {e.response.status_code}",
            status_code=e.response.status_code,
            body=e.response.text,
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(f"{method} {url} failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise TransportError(
            f"{method} {url} returned a body that is not JSON",
            status_code=response.status_code,
            body=response.text,
        ) from e
