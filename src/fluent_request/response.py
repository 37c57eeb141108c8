# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from typing import Generic, Optional, Protocol, TypeVar

import httpx

T = TypeVar("T")


@dataclass(frozen=True)
class FluentResponse(Generic[T]):
    """Decoded body paired with the transport response it was read from"""

    body: Optional[T]
    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def is_success(self) -> bool:
        return self.response.is_success


class ResponseCallback(Protocol[T]):
    """Protocol for callbacks of asynchronously dispatched requests"""

    def on_response(self, response: FluentResponse[T]) -> None: ...

    def on_failure(self, error: Exception) -> None: ...


__all__ = ["FluentResponse", "ResponseCallback"]
