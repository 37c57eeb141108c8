# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, method: "HttpMethod | str") -> "HttpMethod":
        """
        Resolve a method given either as a member or by name (case-insensitive).
        Raises ValueError for anything else.
        """
        if isinstance(method, HttpMethod):
            return method
        if not isinstance(method, str):
            raise ValueError(f"Invalid HTTP method: {method!r}")
        try:
            return cls[method.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


__all__ = ["HttpMethod"]
