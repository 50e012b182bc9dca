from .client import JsonRpcClient, method, notification
from .errors import (
    DecodeError,
    FailureKind,
    JsonRpcClientError,
    JsonRpcException,
    ProtocolValidationError,
    TransportError,
)
from .headers import HeaderStore
from .messages import (
    DEFAULT_REQUEST_ID,
    JSONRPC_INTERNAL_ERROR,
    JSONRPC_INVALID_PARAMS,
    JSONRPC_INVALID_REQUEST,
    JSONRPC_METHOD_NOT_FOUND,
    JSONRPC_PARSE_ERROR,
    build_notification,
    build_request,
)
from .response import Outcome, Success, check_response, unwrap
from .transport import HttpResponse, HttpxTransport, JsonRpcHttpTransport

__all__ = (
    "JsonRpcClient",
    "method",
    "notification",
    "DecodeError",
    "FailureKind",
    "JsonRpcClientError",
    "JsonRpcException",
    "ProtocolValidationError",
    "TransportError",
    "HeaderStore",
    "DEFAULT_REQUEST_ID",
    "JSONRPC_INTERNAL_ERROR",
    "JSONRPC_INVALID_PARAMS",
    "JSONRPC_INVALID_REQUEST",
    "JSONRPC_METHOD_NOT_FOUND",
    "JSONRPC_PARSE_ERROR",
    "build_notification",
    "build_request",
    "Outcome",
    "Success",
    "check_response",
    "unwrap",
    "HttpResponse",
    "HttpxTransport",
    "JsonRpcHttpTransport",
)
