# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Any, Optional


class FluentIOError(Exception):
    """Exception raised when the transport fails to send or read a request"""

    def __init__(self, message: str, request: Optional[Any] = None):
        self.request = request
        super().__init__(message)


class FluentTimeoutError(FluentIOError):
    """Exception raised when a request times out"""


class FluentMappingError(Exception):
    """Exception raised when a body cannot be encoded or a payload decoded"""


__all__ = [
    "FluentIOError",
    "FluentTimeoutError",
    "FluentMappingError",
]
