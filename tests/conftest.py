"""
Pytest configuration and fixtures for fluent_request tests.
"""

from typing import Callable, Generator

import httpx
import pytest
from pydantic import BaseModel

from fluent_request.backends.httpx import HTTPXTransport
from fluent_request.config import FluentConfig, set_default_config

Handler = Callable[[httpx.Request], httpx.Response]


class Article(BaseModel):
    id: int
    title: str


class RecordingHandler:
    """MockTransport handler that records requests and replies with a fixed response"""

    def __init__(self, response: "httpx.Response | Handler | None" = None):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if callable(self.response):
            return self.response(request)
        if self.response is not None:
            return self.response
        return httpx.Response(200)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def make_config(handler: Handler, **kwargs: object) -> FluentConfig:
    mock = httpx.MockTransport(handler)
    transport = HTTPXTransport(
        client=httpx.Client(transport=mock),
        async_client=httpx.AsyncClient(transport=mock),
    )
    return FluentConfig(transport=transport, **kwargs)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def reset_default_config() -> Generator[None, None, None]:
    """Make sure no test leaks a process-wide default into another."""
    yield
    set_default_config(None)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def config(handler: RecordingHandler) -> Generator[FluentConfig, None, None]:
    config = make_config(handler)
    yield config
    config.transport.close()
