# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Transport backends
"""
Transport implementations for fluent requests.
"""

from .httpx import HttpTransport, HTTPXTransport, TransportCallback

__all__ = [
    "HttpTransport",
    "HTTPXTransport",
    "TransportCallback",
]
