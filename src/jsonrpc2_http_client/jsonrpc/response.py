"""JSON-RPC Response Checking

Turns the raw HTTP response to a call into its outcome. The checks run in a
fixed order and the first one to fail decides the outcome:

1. HTTP status: anything but 200 is a ``TransportError``, the body is not read
2. JSON decoding: a body that isn't JSON text is a ``DecodeError``
3. Shape: a body that isn't a JSON-RPC 2.0 response is a
   ``ProtocolValidationError``
4. Dispatch: an ``error`` member becomes a ``JsonRpcException``, otherwise
   the ``result`` member is the outcome

Notifications only go through the first step.

``check_response`` returns failures instead of raising them, so the same
response always maps to an equal outcome and callers that prefer values to
exceptions can match on it directly.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import (
    DecodeError,
    JsonRpcClientError,
    JsonRpcException,
    ProtocolValidationError,
    TransportError,
)
from .messages import JsonRpcErrorResponse, JsonRpcResult
from .transport import HttpResponse

logger = logging.getLogger(__name__)

HTTP_OK = 200

INVALID_RESPONSE_MESSAGE = "invalid JSON-RPC 2.0 response"

_result_adapter = TypeAdapter[JsonRpcResult](JsonRpcResult)
_error_adapter = TypeAdapter[JsonRpcErrorResponse](JsonRpcErrorResponse)


@dataclass(frozen=True)
class Success:
    """The successful outcome of a call.

    Fields:
        result: The ``result`` member of the response, None for notifications
    """

    result: Any = None

    def unwrap(self) -> Any:
        return self.result


Outcome = Success | JsonRpcClientError
"""Everything a call can end in."""


def unwrap(outcome: Outcome) -> Any:
    """Return the result of a successful outcome, or raise the failure."""
    if isinstance(outcome, JsonRpcClientError):
        raise outcome
    return outcome.unwrap()


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def decode_body(body: str) -> Any:
    """Parse a response body, raising ``DecodeError`` if it isn't JSON.

    ``NaN``, ``Infinity`` and ``-Infinity`` are refused, and so are bodies
    nested too deeply to parse.
    """
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DecodeError(e.msg, e.pos, e.lineno, e.colno) from e
    except ValueError as e:
        raise DecodeError(str(e)) from e
    except RecursionError as e:
        raise DecodeError("maximum nesting depth exceeded") from e


def validate_response(obj: Any) -> JsonRpcResult | JsonRpcErrorResponse:
    """Check that a decoded body has the shape of a JSON-RPC 2.0 response.

    The body must be an object holding ``jsonrpc`` and ``id``, and either a
    ``result`` or an ``error`` object with an integer ``code`` and a string
    ``message``. When ``error`` is present it must be well-formed, even if
    ``result`` is there too.

    Raises:
        ProtocolValidationError: If the body doesn't have that shape
    """
    if not isinstance(obj, dict):
        raise ProtocolValidationError(INVALID_RESPONSE_MESSAGE)

    adapter = _error_adapter if "error" in obj else _result_adapter
    try:
        return adapter.validate_python(obj)
    except ValidationError as e:
        raise ProtocolValidationError(
            INVALID_RESPONSE_MESSAGE, errors=e.errors(include_url=False)
        ) from e


def check_response(response: HttpResponse, *, notification: bool = False) -> Outcome:
    """Map the raw HTTP response to a call onto the call's outcome.

    Args:
        response (HttpResponse): The response returned by the transport
        notification (bool): Whether the call was a notification, in which
            case the body is ignored

    Returns:
        Outcome: ``Success`` or the failure the call ended in
    """
    # Anything else is a server/http error, not a json rpc error
    if response.status_code != HTTP_OK:
        return TransportError(response.status_code, response.reason_phrase)

    if notification:
        return Success()

    try:
        msg = validate_response(decode_body(response.body))
    except (DecodeError, ProtocolValidationError) as e:
        return e

    logger.debug("Received response", extra={"jsonRpcMsg": msg})

    if "error" in msg:
        return JsonRpcException.from_error(msg["error"])
    return Success(msg["result"])
