"""JSON-RPC 2.0 Message Type Definitions

This module defines the envelopes the client sends and the response shapes it
accepts. All types are TypedDicts so that they serialize with ``json.dumps``
as-is and can be validated with a Pydantic ``TypeAdapter``.

The client sends two kinds of messages:
1. Request - A call to a method that requires a response
2. Notification - A one-way message that doesn't require a response

and accepts two kinds of responses:
1. Success Response - A response containing the result of a method call
2. Error Response - A response indicating an error occurred

References:
    JSON-RPC 2.0 Specification: https://www.jsonrpc.org/specification
"""

from collections.abc import Mapping
from typing import Any, Literal, NotRequired

from typing_extensions import TypedDict

from pydantic import StrictInt, StrictStr

JSONRPC_VERSION: Literal["2.0"] = "2.0"

DEFAULT_REQUEST_ID = 1
"""The id carried by every request unless the client numbers them itself."""


class JsonRpcNotification(TypedDict):
    """A JSON-RPC notification message.

    Notifications are one-way messages that do not require a response.
    They are identical to requests but do not include an id field.

    Fields:
        jsonrpc: Must be exactly "2.0"
        method: The name of the method to be invoked
        params: Named parameters
    """

    jsonrpc: Literal["2.0"]
    method: str
    params: dict[str, Any]


class JsonRpcRequest(TypedDict):
    """A JSON-RPC request message.

    Fields:
        id: Request identifier that will be echoed back in the response
        jsonrpc: Must be exactly "2.0"
        method: The name of the method to be invoked
        params: Named parameters
    """

    id: int
    jsonrpc: Literal["2.0"]
    method: str
    params: dict[str, Any]


class JsonRpcResult(TypedDict):
    """A JSON-RPC success response message.

    Only the presence of ``jsonrpc`` and ``id`` is checked; their values and
    the result can be any JSON value, including null.
    """

    jsonrpc: Any
    result: Any
    id: Any


class JsonRpcError(TypedDict):
    """A JSON-RPC error object.

    Fields:
        code: The error code (see error code constants below)
        message: A short description of the error
        data: Optional additional error information
    """

    code: StrictInt
    message: StrictStr
    data: NotRequired[Any]


class JsonRpcErrorResponse(TypedDict):
    """A JSON-RPC error response message.

    Fields:
        jsonrpc: The protocol version
        error: The error that occurred
        id: The id from the original request, or null if the server couldn't
            determine it
    """

    jsonrpc: Any
    error: JsonRpcError
    id: Any


JsonRpcResponse = JsonRpcResult | JsonRpcErrorResponse
"""Union type of the responses a request can receive."""


def build_request(
    method: str, params: Mapping[str, Any] | None = None, id: int = DEFAULT_REQUEST_ID
) -> JsonRpcRequest:
    """Build the envelope for a request expecting a response."""
    return JsonRpcRequest(
        id=id,
        jsonrpc=JSONRPC_VERSION,
        method=method,
        params=dict(params or {}),
    )


def build_notification(
    method: str, params: Mapping[str, Any] | None = None
) -> JsonRpcNotification:
    """Build the envelope for a notification. Same as a request, minus the id."""
    return JsonRpcNotification(
        jsonrpc=JSONRPC_VERSION,
        method=method,
        params=dict(params or {}),
    )


# Standard JSON-RPC 2.0 error codes
JSONRPC_PARSE_ERROR = -32700
"""Invalid JSON was received by the server."""

JSONRPC_INVALID_REQUEST = -32600
"""The JSON sent is not a valid Request object."""

JSONRPC_METHOD_NOT_FOUND = -32601
"""The method does not exist / is not available."""

JSONRPC_INVALID_PARAMS = -32602
"""Invalid method parameter(s)."""

JSONRPC_INTERNAL_ERROR = -32603
"""Internal JSON-RPC error."""
