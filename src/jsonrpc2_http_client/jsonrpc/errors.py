"""Failures a JSON-RPC call can end in.

Every call ends in exactly one of four kinds of failure, or in success:

- ``TransportError``: the HTTP exchange did not return 200.
- ``DecodeError``: the response body is not JSON text.
- ``ProtocolValidationError``: the body is JSON but not a JSON-RPC 2.0 response.
- ``JsonRpcException``: the server answered with a JSON-RPC error object.

They share the ``JsonRpcClientError`` base class and carry a ``kind`` tag, so
callers can either catch the class they care about or switch on the tag.

Example:
    ```python
    try:
        result = await client.send_request("subtract", {"minuend": 42})
    except JsonRpcClientError as e:
        match e:
            case TransportError(status_code=503):
                ...  # try again later
            case JsonRpcException(code=JSONRPC_METHOD_NOT_FOUND):
                ...
            case _:
                raise
    ```
"""

from enum import StrEnum
from typing import Any

from .messages import JsonRpcError


class FailureKind(StrEnum):
    TRANSPORT = "transport"
    DECODE = "decode"
    PROTOCOL = "protocol"
    RPC = "rpc"


class JsonRpcClientError(Exception):
    """Base class of every failure raised by the client."""

    kind: FailureKind
    retryable: bool = False


class TransportError(JsonRpcClientError):
    """The server replied with an HTTP status other than 200.

    Args:
        status_code (int): The HTTP status code
        reason_phrase (str | None): The HTTP reason phrase, if any
    """

    __match_args__ = ("status_code", "reason_phrase")

    kind = FailureKind.TRANSPORT
    retryable = True

    def __init__(self, status_code: int, reason_phrase: str | None = None):
        super().__init__(status_code, reason_phrase)
        self.status_code = status_code
        self.reason_phrase = reason_phrase

    def __str__(self) -> str:
        return f"transport error: {self.status_code} {self.reason_phrase}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransportError):
            return NotImplemented
        return (self.status_code, self.reason_phrase) == (
            other.status_code,
            other.reason_phrase,
        )

    __hash__ = JsonRpcClientError.__hash__


class DecodeError(JsonRpcClientError):
    """The response body could not be parsed as JSON.

    The underlying error is chained as ``__cause__``. The position is None
    when the parser doesn't report one.
    """

    __match_args__ = ("message",)

    kind = FailureKind.DECODE

    def __init__(
        self,
        message: str,
        pos: int | None = None,
        lineno: int | None = None,
        colno: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.lineno = lineno
        self.colno = colno

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodeError):
            return NotImplemented
        return (self.message, self.pos, self.lineno, self.colno) == (
            other.message,
            other.pos,
            other.lineno,
            other.colno,
        )

    __hash__ = JsonRpcClientError.__hash__


class ProtocolValidationError(JsonRpcClientError):
    """The decoded body is not a well-formed JSON-RPC 2.0 response.

    Args:
        message (str): A human-readable error description
        errors (list): The Pydantic validation errors, when the body was
            rejected by shape validation
    """

    __match_args__ = ("message",)

    kind = FailureKind.PROTOCOL

    def __init__(self, message: str, errors: list[Any] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProtocolValidationError):
            return NotImplemented
        return (self.message, self.errors) == (other.message, other.errors)

    __hash__ = JsonRpcClientError.__hash__


class JsonRpcException(JsonRpcClientError):
    """Exception raised for errors reported by the server.

    This exception class represents JSON-RPC error objects and can be
    converted to and from them.

    Args:
        message (str): A human-readable error description
        code (int): The JSON-RPC error code (see messages.py for standard codes)
        data (Any): Optional additional error data

    Example:
        ```python
        try:
            result = await client.send_request("method")
        except JsonRpcException as e:
            if e.code == JSONRPC_METHOD_NOT_FOUND:
                print(f"Method not found: {e}")
            else:
                print(f"RPC error {e.code}: {e}")
        ```
    """

    __match_args__ = ("message", "code", "data")

    kind = FailureKind.RPC

    def __init__(self, message: str, code: int, data: Any = None):
        super(JsonRpcException, self).__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        return f"jsonrpc error: {self.code}: '{self.message}'"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonRpcException):
            return NotImplemented
        return (self.message, self.code, self.data) == (
            other.message,
            other.code,
            other.data,
        )

    __hash__ = JsonRpcClientError.__hash__

    def to_err(self) -> JsonRpcError:
        """Convert the exception to a JSON-RPC error object.

        Returns:
            JsonRpcError: The error object as found in a JSON-RPC response
        """
        if self.data is not None:
            return JsonRpcError(code=self.code, message=self.message, data=self.data)
        else:
            return JsonRpcError(code=self.code, message=self.message)

    @staticmethod
    def from_error(err: JsonRpcError) -> "JsonRpcException":
        """Create an exception from a JSON-RPC error object.

        Args:
            err (JsonRpcError): The error object from a JSON-RPC response

        Returns:
            JsonRpcException: The corresponding exception
        """
        if "data" in err:
            return JsonRpcException(err["message"], err["code"], err["data"])
        else:
            return JsonRpcException(err["message"], err["code"])
