import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

import httpx
import logfire

from . import jsonrpc

logger = logging.getLogger(__name__)


def _params_arg(text: str) -> dict[str, Any]:
    try:
        params = json.loads(text)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e.msg}") from e
    if not isinstance(params, dict):
        raise argparse.ArgumentTypeError("params must be a JSON object")
    return params


def _header_arg(text: str) -> tuple[str, str | None]:
    name, sep, value = text.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME:VALUE, got {text!r}")
    return name.strip(), value.strip() or None


async def _run(
    url: str,
    method: str,
    params: dict[str, Any],
    notify: bool,
    headers: Sequence[tuple[str, str | None]],
    timeout: float | None,
    incrementing_ids: bool,
) -> Any:
    async with jsonrpc.HttpxTransport(timeout=timeout) as transport:
        client = jsonrpc.JsonRpcClient(
            transport, url, incrementing_ids=incrementing_ids
        )
        for name, value in headers:
            client.set_header(name, value)

        with logfire.span("Call {method=}", method=method, notification=notify):
            if notify:
                await client.send_notification(method, params)
                return None
            return await client.send_request(method, params)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Send a JSON-RPC 2.0 request or notification over HTTP."
    )
    parser.add_argument("url", help="URL of the JSON-RPC server")
    parser.add_argument("method", help="Name of the method to invoke")
    parser.add_argument(
        "--params",
        type=_params_arg,
        default={},
        help='Parameters as a JSON object, e.g. \'{"a": 1}\'. Defaults to {}.',
    )
    parser.add_argument(
        "--notify",
        action="store_true",
        help="Send a notification instead of a request. No result is printed.",
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        type=_header_arg,
        default=[],
        metavar="NAME:VALUE",
        help="Extra HTTP header. Can be repeated. An empty value removes the header.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=jsonrpc.transport.DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds. Defaults to %(default)s.",
    )
    parser.add_argument(
        "--incrementing-ids",
        action="store_true",
        help="Number requests instead of always using the id 1",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log sent and received messages"
    )
    parser.add_argument(
        "--enable-logfire",
        action="store_true",
        help="Enables logging HTTP calls to Logfire",
    )

    args = parser.parse_args(argv)

    if args.enable_logfire:
        logfire.configure(scrubbing=False)
        logfire.instrument_httpx()
        logging.basicConfig(handlers=[logfire.LogfireLoggingHandler()])
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Starting call", extra={"cliArgs": vars(args)})
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    try:
        result = loop.run_until_complete(
            _run(
                args.url,
                args.method,
                args.params,
                args.notify,
                args.headers,
                args.timeout,
                args.incrementing_ids,
            )
        )
    except (jsonrpc.JsonRpcClientError, httpx.HTTPError) as e:
        print(e, file=sys.stderr)
        raise SystemExit(1) from e
    finally:
        loop.close()

    if not args.notify:
        print(json.dumps(result))
