"""JSON-RPC HTTP Transport Layer

This module provides the transport layer abstraction for JSON-RPC over HTTP.
The transport is responsible for POSTing an encoded JSON-RPC message to the
server and handing back the raw HTTP response; it knows nothing about
JSON-RPC itself.

The module defines:
1. ``HttpResponse``, the raw response handed back to the client
2. A Protocol class that defines the transport interface
3. A concrete implementation built on ``httpx.AsyncClient``

Custom transports can be implemented by creating classes that implement the
JsonRpcHttpTransport protocol.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class HttpResponse:
    """The parts of an HTTP response the client looks at.

    Fields:
        status_code: The HTTP status code
        reason_phrase: The HTTP reason phrase, if the server sent one
        body: The decoded response body
    """

    status_code: int
    reason_phrase: str | None
    body: str


class JsonRpcHttpTransport(Protocol):
    """Protocol defining the transport layer interface.

    Timeouts, retries and connection management are the transport's business.
    Errors raised by ``post`` are not caught by the client and reach the
    caller unchanged.

    Example:
        ```python
        class MyTransport(JsonRpcHttpTransport):
            async def post(
                self, url: str, headers: dict[str, str], body: str
            ) -> HttpResponse:
                # Implementation for sending the message
                ...
        ```
    """

    async def post(self, url: str, headers: dict[str, str], body: str) -> HttpResponse:
        """POST a JSON-RPC message.

        Args:
            url (str): The server URL
            headers (dict[str, str]): The request headers
            body (str): The encoded JSON-RPC message

        Returns:
            HttpResponse: The server's response, whatever its status code
        """
        ...


class HttpxTransport:
    """HTTP transport implementation backed by ``httpx.AsyncClient``.

    Non-2xx responses are returned like any other; httpx exceptions such as
    ``httpx.ConnectError`` or ``httpx.TimeoutException`` propagate.

    Args:
        client (httpx.AsyncClient | None): The client to send requests with. If
            None, a client is created and owned by the transport.
        timeout (float | None): Timeout in seconds for a client created by the
            transport, None to wait forever. Ignored when ``client`` is given.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def post(self, url: str, headers: dict[str, str], body: str) -> HttpResponse:
        response = await self._client.post(url, headers=headers, content=body)
        logger.debug(
            "HTTP response received",
            extra={"statusCode": response.status_code, "url": url},
        )
        return HttpResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase or None,
            body=response.text,
        )

    async def aclose(self):
        """Close the underlying client, if the transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
