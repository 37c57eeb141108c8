import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional, Protocol, Self

import httpx

from fluent_request.body import RequestBody
from fluent_request.exceptions import FluentIOError, FluentTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 30.0

DEFAULT_TIMEOUT = httpx.Timeout(
    DEFAULT_READ_TIMEOUT,
    connect=DEFAULT_CONNECT_TIMEOUT,
    write=DEFAULT_WRITE_TIMEOUT,
)


class TransportCallback(Protocol):

    def on_response(self, request: httpx.Request, response: httpx.Response) -> None: ...

    def on_failure(self, request: httpx.Request, error: FluentIOError) -> None: ...


class HttpTransport(Protocol):

    def new_request(
        self,
        method: str,
        url: str,
        headers: list[tuple[str, str]],
        body: Optional[RequestBody],
        timeout: Optional[float] = None,
    ) -> httpx.Request: ...

    def send(self, request: httpx.Request) -> httpx.Response: ...

    def send_async(
        self, request: httpx.Request, callback: TransportCallback
    ) -> "Future[None]": ...

    async def asend(self, request: httpx.Request) -> httpx.Response: ...

    def close(self) -> None: ...


def wrap_transport_error(err: Exception, request: httpx.Request) -> FluentIOError:
    if isinstance(err, httpx.TimeoutException):
        return FluentTimeoutError(f"Request timed out: {err}", request=request)
    return FluentIOError(
        f"{request.method} {request.url} failed: {err or type(err).__name__}",
        request=request,
    )


def read_response(response: httpx.Response) -> bytes:
    """Read the whole body of a streamed response, wrapping read failures"""
    try:
        return response.read()
    except (httpx.HTTPError, httpx.StreamError) as err:
        raise wrap_transport_error(err, response.request) from err


class HTTPXTransport(HttpTransport):
    """
    Transport backed by httpx.

    Blocking sends go through a shared httpx.Client and return streamed responses
    that the caller must close. Callback sends run on a thread pool owned by the
    transport, created on first use.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        max_workers: Optional[int] = None,
        follow_redirects: bool = False,
        headers: Optional[dict[str, str]] = None,
    ):
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self.max_workers = max_workers
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout, follow_redirects=follow_redirects, headers=headers
        )
        self._async_client = async_client
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        return self._client

    def new_request(
        self,
        method: str,
        url: str,
        headers: list[tuple[str, str]],
        body: Optional[RequestBody],
        timeout: Optional[float] = None,
    ) -> httpx.Request:
        body_kwargs: dict[str, Any] = body.to_httpx_kwargs() if body else {}

        return self._client.build_request(
            method,
            url,
            headers=headers,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            **body_kwargs,
        )

    def send(self, request: httpx.Request) -> httpx.Response:
        logger.debug("Sending %s %s", request.method, request.url)
        try:
            return self._client.send(
                request, stream=True, follow_redirects=self.follow_redirects
            )
        except httpx.HTTPError as err:
            raise wrap_transport_error(err, request) from err

    def send_async(
        self, request: httpx.Request, callback: TransportCallback
    ) -> "Future[None]":
        return self._get_executor().submit(self._dispatch, request, callback)

    async def asend(self, request: httpx.Request) -> httpx.Response:
        logger.debug("Sending %s %s (asyncio)", request.method, request.url)
        try:
            if self._async_client is not None:
                return await self._async_client.send(
                    request, follow_redirects=self.follow_redirects
                )

            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=self.follow_redirects
            ) as client:
                return await client.send(request)
        except httpx.HTTPError as err:
            raise wrap_transport_error(err, request) from err

    def _dispatch(self, request: httpx.Request, callback: TransportCallback) -> None:
        try:
            response = self.send(request)
        except FluentIOError as err:
            logger.debug("Async request failed: %s", err)
            callback.on_failure(request, err)
            return
        except Exception as err:
            logger.debug("Async request failed unexpectedly: %r", err)
            error = wrap_transport_error(err, request)
            error.__cause__ = err
            callback.on_failure(request, error)
            return

        try:
            callback.on_response(request, response)
        finally:
            response.close()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="fluent-request",
                )
            return self._executor

    def close(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = [
    "HttpTransport",
    "HTTPXTransport",
    "TransportCallback",
    "read_response",
    "DEFAULT_TIMEOUT",
]
