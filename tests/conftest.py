"""Shared test fixtures for the jsonrpc2-http-client test suite."""

from __future__ import annotations

import json

import pytest

from jsonrpc2_http_client.jsonrpc import HttpResponse, JsonRpcClient

SERVER_URL = "https://mock-url.net/"
METHOD = "mock-method"
PARAMS = {"mockKey": "mockValue"}

RESULT = [
    {
        "ID": "5baa67721752be0001669f73",
        "createdAtISO8601": "2018-09-25T16:50:58.064Z",
        "officeID": "QQST000000051",
    }
]

# ============================================================================
# Response Bodies
# ============================================================================

VALID_RESPONSE_JSON = json.dumps({"jsonrpc": "2.0", "result": RESULT, "id": 1})

MALFORMED_RESPONSE_JSON = (
    '{"jsonrpc":"2.0result":[{"ID":"5baa67721752be0001669f73",'
    '"createdAtISO8601":"2018-09-25T16:50:58.064Z","officeID":"QQST000000051"}],"id":1}'
)

ERRORED_RESPONSE_JSON = (
    '{"jsonrpc":"2.0","error":{"code":-32000,"message":"Server error"},"id":1}'
)

INVALID_JSONRPC2_RESPONSE_JSON = (
    '{"jso3nrpc":"2.0","erdror":{"code":-32000,"message":"Server error"},"id":1}'
)


class RecordingTransport:
    """Transport double that records every POST and answers with a fixed response."""

    def __init__(self, response: HttpResponse | None = None):
        self.response = response or HttpResponse(200, "OK", VALID_RESPONSE_JSON)
        self.calls: list[tuple[str, dict[str, str], str]] = []

    async def post(self, url: str, headers: dict[str, str], body: str) -> HttpResponse:
        self.calls.append((url, headers, body))
        return self.response

    def reply(self, body: str, status_code: int = 200, reason_phrase: str | None = None):
        self.response = HttpResponse(status_code, reason_phrase, body)

    @property
    def last_url(self) -> str:
        return self.calls[-1][0]

    @property
    def last_headers(self) -> dict[str, str]:
        return self.calls[-1][1]

    @property
    def last_envelope(self) -> dict:
        return json.loads(self.calls[-1][2])


@pytest.fixture
def transport():
    """Recording transport answering with a valid result response."""
    return RecordingTransport()


@pytest.fixture
def client(transport):
    """Client talking to the recording transport."""
    return JsonRpcClient(transport, SERVER_URL)
