# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Optional

import httpx

from fluent_request.backends.httpx import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
    HttpTransport,
    HTTPXTransport,
)
from fluent_request.hooks import RequestHook
from fluent_request.mapper import JsonMapper, PydanticJsonMapper
from fluent_request.utils.env_parse_utils import (
    get_env_bool,
    get_env_float,
    get_env_int,
    get_env_str,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLUENT_REQUEST_"


@dataclass
class FluentConfig:
    """
    Collaborators and defaults shared by the requests built from it.

    Builders receive a config explicitly or fall back to the process-wide
    default returned by get_default_config().
    """

    transport: HttpTransport = field(default_factory=HTTPXTransport)
    mapper: JsonMapper = field(default_factory=PydanticJsonMapper)
    default_headers: list[tuple[str, str]] = field(default_factory=list)
    request_hooks: list[RequestHook] = field(default_factory=list)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "FluentConfig":
        """
        Build a config from environment variables:

        - ``<prefix>CONNECT_TIMEOUT``, ``<prefix>READ_TIMEOUT`` and
          ``<prefix>WRITE_TIMEOUT`` in seconds
        - ``<prefix>MAX_WORKERS`` size of the callback thread pool
        - ``<prefix>FOLLOW_REDIRECTS`` boolean
        - ``<prefix>USER_AGENT`` sent with every request
        """
        connect_timeout = get_env_float(
            f"{prefix}CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT
        )
        read_timeout = get_env_float(f"{prefix}READ_TIMEOUT", DEFAULT_READ_TIMEOUT)
        write_timeout = get_env_float(f"{prefix}WRITE_TIMEOUT", DEFAULT_WRITE_TIMEOUT)
        max_workers = get_env_int(f"{prefix}MAX_WORKERS")
        follow_redirects = get_env_bool(f"{prefix}FOLLOW_REDIRECTS", False)
        user_agent = get_env_str(f"{prefix}USER_AGENT")

        if max_workers is not None and max_workers <= 0:
            raise ValueError(f"{prefix}MAX_WORKERS must be positive")

        timeout = httpx.Timeout(
            read_timeout, connect=connect_timeout, write=write_timeout
        )

        logger.debug(
            "Loaded config from env: timeout=%s max_workers=%s follow_redirects=%s",
            timeout,
            max_workers,
            follow_redirects,
        )

        return cls(
            transport=HTTPXTransport(
                timeout=timeout,
                max_workers=max_workers,
                follow_redirects=follow_redirects,
            ),
            default_headers=[("User-Agent", user_agent)] if user_agent else [],
        )


_default_config: Optional[FluentConfig] = None
# transport built by from_env() for the default, closed when it is replaced
_owned_transport: Optional[HttpTransport] = None
_default_config_lock = threading.Lock()


def _load_default_config() -> FluentConfig:
    global _default_config, _owned_transport
    if _default_config is None:
        _default_config = FluentConfig.from_env()
        _owned_transport = _default_config.transport
    return _default_config


def _swap_default_config(config: Optional[FluentConfig]) -> Optional[HttpTransport]:
    """
    Install a new default and return the owned transport it no longer uses.
    Must be called with _default_config_lock held.
    """
    global _default_config, _owned_transport
    _default_config = config
    released = _owned_transport
    if config is not None and config.transport is released:
        return None
    _owned_transport = None
    return released


def _close_released(transport: Optional[HttpTransport]) -> None:
    if transport is not None:
        logger.debug("Closing replaced default transport %r", transport)
        transport.close()


def get_default_config() -> FluentConfig:
    with _default_config_lock:
        return _load_default_config()


def set_default_config(config: Optional[FluentConfig]) -> None:
    """
    Replace the process-wide default; None resets it to the environment.
    A transport created for the environment default is closed once replaced.
    """
    with _default_config_lock:
        released = _swap_default_config(config)
    _close_released(released)


def override_transport(transport: HttpTransport) -> None:
    with _default_config_lock:
        config = replace(_load_default_config(), transport=transport)
        released = _swap_default_config(config)
    _close_released(released)


def override_mapper(mapper: JsonMapper) -> None:
    with _default_config_lock:
        config = replace(_load_default_config(), mapper=mapper)
        released = _swap_default_config(config)
    _close_released(released)


__all__ = [
    "FluentConfig",
    "get_default_config",
    "set_default_config",
    "override_transport",
    "override_mapper",
]
