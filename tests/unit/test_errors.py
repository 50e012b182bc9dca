"""Tests for the failure classes in jsonrpc2_http_client.jsonrpc.errors."""

from __future__ import annotations

import pytest

from jsonrpc2_http_client.jsonrpc import (
    JSONRPC_METHOD_NOT_FOUND,
    DecodeError,
    FailureKind,
    JsonRpcClientError,
    JsonRpcException,
    ProtocolValidationError,
    TransportError,
)


@pytest.mark.unit
class TestTaxonomy:
    """Test the shared base class and kind tags."""

    @pytest.mark.parametrize(
        "error,kind,retryable",
        [
            (TransportError(500, "Internal Server Error"), FailureKind.TRANSPORT, True),
            (DecodeError("Expecting value", 0, 1, 1), FailureKind.DECODE, False),
            (ProtocolValidationError("invalid"), FailureKind.PROTOCOL, False),
            (JsonRpcException("Server error", -32000), FailureKind.RPC, False),
        ],
    )
    def test_kind_and_retryable(self, error, kind, retryable):
        """Should tag every failure with its kind."""
        assert isinstance(error, JsonRpcClientError)
        assert error.kind is kind
        assert error.retryable is retryable

    def test_pattern_matching(self):
        """Should support structural pattern matching on the failure fields."""

        def classify(error):
            match error:
                case TransportError(503):
                    return "unavailable"
                case JsonRpcException(_, code) if code == JSONRPC_METHOD_NOT_FOUND:
                    return "no such method"
                case _:
                    return "other"

        assert classify(TransportError(503, "Service Unavailable")) == "unavailable"
        assert classify(JsonRpcException("nope", JSONRPC_METHOD_NOT_FOUND)) == (
            "no such method"
        )
        assert classify(DecodeError("x", 0, 1, 1)) == "other"


@pytest.mark.unit
class TestStringForms:
    """Test str() of failures."""

    def test_transport_error(self):
        """Should show status and reason."""
        assert str(TransportError(500, "Internal Server Error")) == (
            "transport error: 500 Internal Server Error"
        )

    def test_jsonrpc_exception(self):
        """Should show code and message."""
        assert str(JsonRpcException("Server error", -32000)) == (
            "jsonrpc error: -32000: 'Server error'"
        )

    def test_protocol_error(self):
        """Should show the message."""
        assert str(ProtocolValidationError("invalid JSON-RPC 2.0 response")) == (
            "invalid JSON-RPC 2.0 response"
        )


@pytest.mark.unit
class TestJsonRpcExceptionConversion:
    """Test conversion between JsonRpcException and error objects."""

    def test_from_error_without_data(self):
        """Should leave data as None when absent."""
        exc = JsonRpcException.from_error({"code": -32000, "message": "Server error"})

        assert exc.code == -32000
        assert exc.message == "Server error"
        assert exc.data is None

    def test_from_error_with_data(self):
        """Should carry data when present."""
        exc = JsonRpcException.from_error(
            {"code": -32602, "message": "Invalid params", "data": ["a"]}
        )

        assert exc.data == ["a"]

    def test_to_err_round_trip(self):
        """Should omit data from the error object when None."""
        assert JsonRpcException("Server error", -32000).to_err() == {
            "code": -32000,
            "message": "Server error",
        }
        assert JsonRpcException("Bad", 1, {"k": "v"}).to_err() == {
            "code": 1,
            "message": "Bad",
            "data": {"k": "v"},
        }


@pytest.mark.unit
class TestEquality:
    """Test value equality of failures."""

    def test_equal_values(self):
        """Should compare equal when fields are equal."""
        assert TransportError(500, "x") == TransportError(500, "x")
        assert JsonRpcException("m", 1, [1]) == JsonRpcException("m", 1, [1])

    def test_different_values(self):
        """Should compare unequal when fields or classes differ."""
        assert TransportError(500, "x") != TransportError(502, "x")
        assert JsonRpcException("m", 1) != JsonRpcException("m", 2)
        assert ProtocolValidationError("m") != DecodeError("m", 0, 1, 1)

    def test_hashable(self):
        """Should remain usable in sets."""
        assert len({TransportError(500), DecodeError("m", 0, 1, 1)}) == 2
