# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from concurrent.futures import Future
from typing import Any, Generic, Iterable, Mapping, Optional, Self, TypeVar

import httpx

from fluent_request.backends.httpx import TransportCallback, read_response
from fluent_request.body import (
    OCTET_STREAM_CONTENT_TYPE,
    FluentFormBody,
    FluentMultipartBody,
    RequestBody,
)
from fluent_request.config import (
    FluentConfig,
    get_default_config,
    override_mapper,
    override_transport,
)
from fluent_request.decoding import ResponseDecoder, ResponseShape
from fluent_request.exceptions import FluentIOError
from fluent_request.hooks import PreparedRequest, basic_credentials
from fluent_request.methods import HttpMethod
from fluent_request.response import FluentResponse, ResponseCallback
from fluent_request.url import FluentUrl

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestBuilder(Generic[T]):
    """
    Accumulates the configuration of a single request and dispatches it.

        FluentRequest.request("https://api.example.com/posts/{id}", Post)
            .variable("id", 1)
            .bearer(token)
            .get()
    """

    def __init__(
        self,
        url: str,
        response_type: Any = bytes,
        config: Optional[FluentConfig] = None,
    ):
        self.url = url
        self.shape = ResponseShape.of(response_type)
        self.config = config or get_default_config()
        self.decoder = ResponseDecoder(self.config.mapper)

        self._headers: list[tuple[str, str]] = []
        self._url_variables: dict[str, Any] = {}
        self._query_parameters: dict[str, Any] = {}
        self._body: Optional[RequestBody] = None
        self._timeout: Optional[float] = None

    def body(self, body: Any) -> Self:
        """
        Set the request body. A RequestBody is used as is, anything else is
        encoded to JSON with the configured mapper (FluentMappingError on failure).
        """
        if body is None or isinstance(body, RequestBody):
            self._body = body
        else:
            self._body = RequestBody.json(body, self.config.mapper)
        return self

    def content(
        self, data: bytes | str, content_type: str = OCTET_STREAM_CONTENT_TYPE
    ) -> Self:
        self._body = RequestBody.raw(data, content_type)
        return self

    def variable(self, name: str, value: Any) -> Self:
        if value is not None:
            self._url_variables[name] = value
        return self

    def variables(self, variables: Mapping[str, Any]) -> Self:
        for name, value in variables.items():
            self.variable(name, value)
        return self

    def parameter(self, name: str, value: Any) -> Self:
        if value is not None:
            self._query_parameters[name] = value
        return self

    def parameters(self, parameters: Mapping[str, Any]) -> Self:
        for name, value in parameters.items():
            self.parameter(name, value)
        return self

    def header(self, name: str, value: str) -> Self:
        self._headers.append((name, value))
        return self

    def headers(
        self, headers: Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> Self:
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in pairs:
            self.header(name, value)
        return self

    def bearer(self, token: str) -> Self:
        return self.header("Authorization", f"Bearer {token}")

    def basic(self, username: str, password: str) -> Self:
        return self.header("Authorization", basic_credentials(username, password))

    def api_key(self, api_key: str, header_name: str = "X-API-Key") -> Self:
        return self.header(header_name, api_key)

    def timeout(self, seconds: Optional[float]) -> Self:
        self._timeout = seconds
        return self

    def multipart(self) -> FluentMultipartBody[T]:
        return FluentMultipartBody(self)

    def form(self) -> FluentFormBody[T]:
        return FluentFormBody(self)

    def build_url(self) -> str:
        return (
            FluentUrl.from_string(self.url)
            .variables(self._url_variables)
            .parameters(self._query_parameters)
            .build()
        )

    def prepare(self, method: HttpMethod | str) -> PreparedRequest:
        http_method = HttpMethod.parse(method)

        headers = [*self.config.default_headers, *self._headers]

        if (
            self._body is not None
            and self._body.content_type
            and not any(name.lower() == "content-type" for name, _ in headers)
        ):
            headers.append(("Content-Type", self._body.content_type))

        request = PreparedRequest(
            method=http_method.value,
            url=self.build_url(),
            headers=headers,
            body=self._body,
            timeout=self._timeout,
        )

        for hook in self.config.request_hooks:
            request = hook.before_request(request)

        logger.debug(
            "Prepared request: %s %s\nHeaders: %s\nBody: %s",
            request.method,
            request.url,
            request.headers,
            request.body,
        )

        return request

    def build_request(self, method: HttpMethod | str) -> httpx.Request:
        prepared = self.prepare(method)
        return self.config.transport.new_request(
            prepared.method,
            prepared.url,
            prepared.headers,
            prepared.body,
            prepared.timeout,
        )

    def execute(self, method: HttpMethod | str) -> FluentResponse[T]:
        """Send the request and block until the response is read and decoded"""
        request = self.build_request(method)
        response = self.config.transport.send(request)

        try:
            return self.read(response)
        finally:
            response.close()

    def execute_async(
        self, method: HttpMethod | str, callback: ResponseCallback[T]
    ) -> "Future[None]":
        """
        Send the request on the transport's thread pool. Exactly one of
        callback.on_response or callback.on_failure is invoked, off the calling
        thread. Method errors are raised here, before anything is sent.
        """
        request = self.build_request(method)
        return self.config.transport.send_async(
            request, DecodingCallback(self, callback)
        )

    async def aexecute(self, method: HttpMethod | str) -> FluentResponse[T]:
        request = self.build_request(method)
        response = await self.config.transport.asend(request)
        return self.decode(response, response.content)

    def read(self, response: httpx.Response) -> FluentResponse[T]:
        return self.decode(response, read_response(response))

    def decode(self, response: httpx.Response, data: bytes) -> FluentResponse[T]:
        logger.debug("Received response: status=%s", response.status_code)
        body = self.decoder.decode(data, self.shape, response.charset_encoding)
        return FluentResponse(body=body, response=response)

    def get(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.GET)

    def get_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.GET, callback)

    def head(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.HEAD)

    def head_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.HEAD, callback)

    def post(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.POST)

    def post_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.POST, callback)

    def put(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.PUT)

    def put_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.PUT, callback)

    def patch(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.PATCH)

    def patch_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.PATCH, callback)

    def delete(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.DELETE)

    def delete_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.DELETE, callback)

    def options(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.OPTIONS)

    def options_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.OPTIONS, callback)

    def trace(self) -> FluentResponse[T]:
        return self.execute(HttpMethod.TRACE)

    def trace_async(self, callback: ResponseCallback[T]) -> "Future[None]":
        return self.execute_async(HttpMethod.TRACE, callback)


class DecodingCallback(TransportCallback, Generic[T]):
    """Decodes transport responses before handing them to the caller's callback"""

    def __init__(self, builder: RequestBuilder[T], callback: ResponseCallback[T]):
        self.builder = builder
        self.callback = callback

    def on_response(self, request: httpx.Request, response: httpx.Response) -> None:
        try:
            result = self.builder.read(response)
        except Exception as err:
            logger.debug("Decoding %s %s failed: %r", request.method, request.url, err)
            self._notify_failure(err)
            return

        try:
            self.callback.on_response(result)
        except Exception:
            logger.exception(
                "Response callback raised for %s %s", request.method, request.url
            )

    def on_failure(self, request: httpx.Request, error: FluentIOError) -> None:
        self._notify_failure(error)

    def _notify_failure(self, error: Exception) -> None:
        try:
            self.callback.on_failure(error)
        except Exception:
            logger.exception("Failure callback raised while handling %s", error)


class FluentRequest:
    """Entry point for building requests"""

    @staticmethod
    def request(
        url: str,
        response_type: Any = bytes,
        *,
        config: Optional[FluentConfig] = None,
    ) -> RequestBuilder[Any]:
        return RequestBuilder(url, response_type, config)

    override_transport = staticmethod(override_transport)
    override_mapper = staticmethod(override_mapper)


__all__ = [
    "FluentRequest",
    "RequestBuilder",
    "DecodingCallback",
]
