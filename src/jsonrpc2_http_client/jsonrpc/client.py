"""JSON-RPC Client

This module provides the JSON-RPC over HTTP client, including:
1. Request and notification sending
2. Custom request headers
3. Typed client proxy generation
4. Error handling

Each call POSTs one envelope and checks the one response it gets back; there
is no connection state besides the headers.

Example:
    ```python
    async with HttpxTransport() as transport:
        client = JsonRpcClient(transport, "https://example.net/rpc")
        client.set_header("Authorization", "Bearer s3cr3t")

        result = await client.send_request("subtract", {"minuend": 42, "subtrahend": 23})
        await client.send_notification("update", {"value": 1})

        class Offices:
            @method("getOffices")
            async def get_offices(self, *, city: str) -> list[str]: ...

        offices = await client.get_client(Offices).get_offices(city="Rome")
    ```

See Also:
    - transport.py: Transport layer implementations
    - response.py: How responses are checked
"""

import inspect
import json
import logging
import typing
from collections.abc import Mapping
from typing import Any, Callable, Type, TypeVar, overload

from pydantic import TypeAdapter

from .headers import HeaderStore
from .messages import (
    DEFAULT_REQUEST_ID,
    JsonRpcNotification,
    JsonRpcRequest,
    build_notification,
    build_request,
)
from .response import Outcome, check_response, unwrap
from .transport import HttpResponse, JsonRpcHttpTransport

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


def _check_stub_sig(func: Callable):
    """Check if a stub function has a valid signature.

    Parameters are sent as a by-name mapping, so stubs must not take
    positional-only or variadic positional arguments.

    Args:
        func (Callable): The function to check

    Raises:
        ValueError: If the function accepts positional-only arguments
    """
    params = list(inspect.signature(func).parameters.values())[1:]

    for param in params:
        match param.kind:
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.VAR_POSITIONAL:
                raise ValueError(
                    "RPC stubs must accept their parameters as keyword arguments"
                )


@overload
def method(name: str) -> Callable[[F], F]: ...


@overload
def method(func: F) -> F: ...


def method(name_or_func):
    """Decorator to mark a stub as a JSON-RPC method.

    Methods are RPC calls that expect a response. The decorated function must
    be async and cannot also be a notification. Its parameters are sent by
    name, and its return annotation, if any, is used to validate the result.

    Args:
        name_or_func (str | Callable): The RPC method name, or the stub itself
            to send it under its own name.

    Raises:
        ValueError: If the stub is not async, takes positional-only arguments
            or is already a notification.
    """
    if isinstance(name_or_func, str):
        name = name_or_func
    else:
        name = name_or_func.__name__

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise ValueError("Only async methods can be RPC methods")
        if getattr(func, "__jsonrpc_notification__", None) is not None:
            raise ValueError("A method can't also be a notification")
        _check_stub_sig(func)
        setattr(func, "__jsonrpc_method__", name)
        return func

    if isinstance(name_or_func, str):
        return decorator
    else:
        return decorator(name_or_func)


@overload
def notification(name: str) -> Callable[[F], F]: ...


@overload
def notification(func: F) -> F: ...


def notification(name_or_func):
    """Decorator to mark a stub as a JSON-RPC notification.

    Notifications are one-way messages that don't expect a response. The
    decorated function must be async and cannot also be a method.

    Args:
        name_or_func (str | Callable): The RPC notification name, or the stub
            itself to send it under its own name.

    Raises:
        ValueError: If the stub is not async, takes positional-only arguments
            or is already a method.
    """
    if isinstance(name_or_func, str):
        name = name_or_func
    else:
        name = name_or_func.__name__

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise ValueError("Only async methods can be RPC notifications")
        if getattr(func, "__jsonrpc_method__", None) is not None:
            raise ValueError("A notification can't also be a method")
        _check_stub_sig(func)
        setattr(func, "__jsonrpc_notification__", name)
        return func

    if isinstance(name_or_func, str):
        return decorator
    else:
        return decorator(name_or_func)


class _ParamsBinder:
    """Validates stub arguments and turns them into a JSON-ready mapping."""

    def __init__(self, func: Callable):
        self._sig = inspect.signature(func)
        hints = typing.get_type_hints(func)
        self._adapters = {
            name: TypeAdapter(hints.get(name, Any))
            for name in list(self._sig.parameters)[1:]
        }
        returns = hints.get("return")
        self._result = None if returns is None else TypeAdapter(returns)

    def bind(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        bound = self._sig.bind(None, **kwargs)
        bound.apply_defaults()
        params = {}
        for name, value in list(bound.arguments.items())[1:]:
            adapter = self._adapters[name]
            if self._sig.parameters[name].kind is inspect.Parameter.VAR_KEYWORD:
                items = value.items()
            else:
                items = [(name, value)]
            for key, item in items:
                params[key] = adapter.dump_python(
                    adapter.validate_python(item), mode="json"
                )
        return params

    def result(self, value: Any) -> Any:
        if self._result is None:
            return value
        return self._result.validate_python(value)


class JsonRpcClient:
    """Sends JSON-RPC 2.0 requests and notifications over HTTP.

    Every request carries the id 1 unless ``incrementing_ids`` is set, in which
    case requests are numbered 1, 2, 3... per client. Headers are copied from
    the header store when a call starts.

    Args:
        transport (JsonRpcHttpTransport): The transport used to POST messages.
        url (str): The server URL.
        incrementing_ids (bool): Number requests instead of using a fixed id.

    Example:
        ```python
        client = JsonRpcClient(HttpxTransport(), "https://example.net/rpc")
        try:
            result = await client.send_request("getOffices", {"city": "Rome"})
        except TransportError as e:
            ...  # retryable
        except JsonRpcClientError as e:
            ...
        ```
    """

    def __init__(
        self,
        transport: JsonRpcHttpTransport,
        url: str,
        *,
        incrementing_ids: bool = False,
    ):
        self._transport = transport
        self._url = url
        self._headers = HeaderStore()
        self._incrementing_ids = incrementing_ids
        self._next_id = DEFAULT_REQUEST_ID

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> HeaderStore:
        return self._headers

    def set_header(self, name: str, value: str | None):
        """Sets a header which will be sent with the next calls.

        Passing None as the value removes the header.
        """
        self._headers.set(name, value)

    def get_client(self, proto: Type[T]) -> T:
        """Create a strongly-typed client from a protocol class.

        This method creates a proxy object that implements the given protocol
        by converting method calls into JSON-RPC requests and notifications. The
        protocol class should define its methods using the @method and
        @notification decorators.

        Arguments are validated against the stub's annotations and serialized
        with Pydantic, so models can be passed directly. Results are validated
        against the stub's return annotation.

        Args:
            proto (Type[T]): A class defining the RPC interface.
                Methods should be decorated with @method or @notification.

        Returns:
            T: A proxy object implementing the class.

        Raises:
            ValueError: If the protocol contains non-method attributes or
                methods without proper decorators.
        """
        attributes = {}

        for attr_name in dir(proto):
            if attr_name.startswith("_"):
                continue

            attr = getattr(proto, attr_name)

            if not callable(attr):
                raise ValueError("Clients must only expose methods")

            method: str | None = getattr(attr, "__jsonrpc_method__", None)
            notification: str | None = getattr(attr, "__jsonrpc_notification__", None)

            if method is not None:

                def get_method_impl(name, binder):
                    async def method_impl(self, **kwargs):
                        params = binder.bind(kwargs)
                        result = await self._client.send_request(name, params)
                        return binder.result(result)

                    return method_impl

                attributes[attr_name] = get_method_impl(method, _ParamsBinder(attr))
            elif notification is not None:

                def get_notification_impl(name, binder):
                    async def notification_impl(self, **kwargs):
                        params = binder.bind(kwargs)
                        await self._client.send_notification(name, params)

                    return notification_impl

                attributes[attr_name] = get_notification_impl(
                    notification, _ParamsBinder(attr)
                )
            else:
                raise ValueError("Only methods and notifications are supported")
        klass = type(f"JsonRpc{proto.__name__}", (), attributes)
        instance = klass()
        instance._client = self
        return instance

    def _take_id(self) -> int:
        if not self._incrementing_ids:
            return DEFAULT_REQUEST_ID
        id = self._next_id
        self._next_id = self._next_id + 1
        return id

    async def _post(self, obj: JsonRpcRequest | JsonRpcNotification) -> HttpResponse:
        headers = self._headers.snapshot()
        logger.debug("Object sent", extra={"jsonRpcMsg": obj})
        return await self._transport.post(self._url, headers, json.dumps(obj))

    async def call(self, method: str, params: Mapping[str, Any] | None = None) -> Outcome:
        """Sends a JSON-RPC request and returns its outcome without raising.

        Args:
            method (str): The name of the RPC method to call.
            params (Mapping[str, Any] | None): The parameters, by name.

        Returns:
            Outcome: ``Success`` holding the result, or the failure the call
                ended in. Exceptions raised by the transport still propagate.
        """
        req = build_request(method, params, self._take_id())
        return check_response(await self._post(req))

    async def send_request(
        self, method: str, params: Mapping[str, Any] | None = None
    ) -> Any:
        """Sends a JSON-RPC request and waits for the response.

        Args:
            method (str): The name of the RPC method to call.
            params (Mapping[str, Any] | None): The parameters, by name.

        Returns:
            Any: The result of the RPC call.

        Raises:
            TransportError: If the server didn't reply with HTTP 200.
            DecodeError: If the response body isn't JSON.
            ProtocolValidationError: If the response isn't valid JSON-RPC 2.0.
            JsonRpcException: If the server returns an error response.
        """
        return unwrap(await self.call(method, params))

    async def send_notification(
        self, method: str, params: Mapping[str, Any] | None = None
    ):
        """Sends a JSON-RPC notification.

        The response body is ignored.

        Args:
            method (str): The name of the notification method.
            params (Mapping[str, Any] | None): The parameters, by name.

        Raises:
            TransportError: If the server didn't reply with HTTP 200.
        """
        noti = build_notification(method, params)
        unwrap(check_response(await self._post(noti), notification=True))
