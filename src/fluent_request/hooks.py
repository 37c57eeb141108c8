# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import base64
from dataclasses import dataclass, field
from typing import Optional, Protocol

from fluent_request.body import RequestBody


@dataclass
class PreparedRequest:
    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: Optional[RequestBody] = None
    timeout: Optional[float] = None


class RequestHook(Protocol):
    """Protocol for request hooks"""

    def before_request(self, request: PreparedRequest) -> PreparedRequest: ...


def basic_credentials(username: str, password: str) -> str:
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {credentials}"


class AuthenticationHook(RequestHook):
    """Base class for authentication hooks"""

    def before_request(self, request: PreparedRequest) -> PreparedRequest:
        return self.add_auth(request)

    def add_auth(self, request: PreparedRequest) -> PreparedRequest:
        raise NotImplementedError


class BearerTokenAuth(AuthenticationHook):

    def __init__(self, token: str):
        self.token = token

    def add_auth(self, request: PreparedRequest) -> PreparedRequest:
        request.headers.append(("Authorization", f"Bearer {self.token}"))
        return request


class BasicAuth(AuthenticationHook):

    def __init__(self, username: str, password: str):
        self.credentials = basic_credentials(username, password)

    def add_auth(self, request: PreparedRequest) -> PreparedRequest:
        request.headers.append(("Authorization", self.credentials))
        return request


class ApiKeyAuth(AuthenticationHook):

    def __init__(self, api_key: str, header_name: str = "X-API-Key"):
        self.api_key = api_key
        self.header_name = header_name

    def add_auth(self, request: PreparedRequest) -> PreparedRequest:
        request.headers.append((self.header_name, self.api_key))
        return request


__all__ = [
    "PreparedRequest",
    "RequestHook",
    "AuthenticationHook",
    "BearerTokenAuth",
    "BasicAuth",
    "ApiKeyAuth",
    "basic_credentials",
]
