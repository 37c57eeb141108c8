# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Tests for configuration loading and the process-wide default.
"""

import threading

import pytest

from fluent_request.backends.httpx import HTTPXTransport
from fluent_request.config import (
    FluentConfig,
    get_default_config,
    override_mapper,
    override_transport,
    set_default_config,
)
from fluent_request.mapper import PydanticJsonMapper


class TestFluentConfigFromEnv:
    """Test suite for FluentConfig.from_env()."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without variables the library defaults apply."""
        for name in (
            "CONNECT_TIMEOUT",
            "READ_TIMEOUT",
            "WRITE_TIMEOUT",
            "MAX_WORKERS",
            "FOLLOW_REDIRECTS",
            "USER_AGENT",
        ):
            monkeypatch.delenv(f"FLUENT_REQUEST_{name}", raising=False)

        config = FluentConfig.from_env()

        assert isinstance(config.transport, HTTPXTransport)
        assert config.transport.timeout.connect == 10.0
        assert config.transport.timeout.write == 10.0
        assert config.transport.timeout.read == 30.0
        assert config.transport.max_workers is None
        assert config.transport.follow_redirects is False
        assert config.default_headers == []
        assert isinstance(config.mapper, PydanticJsonMapper)

    def test_values_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Variables override the defaults."""
        monkeypatch.setenv("FLUENT_REQUEST_CONNECT_TIMEOUT", "1.5")
        monkeypatch.setenv("FLUENT_REQUEST_READ_TIMEOUT", "5")
        monkeypatch.setenv("FLUENT_REQUEST_MAX_WORKERS", "4")
        monkeypatch.setenv("FLUENT_REQUEST_FOLLOW_REDIRECTS", "yes")
        monkeypatch.setenv("FLUENT_REQUEST_USER_AGENT", "fluent-tests/1.0")

        config = FluentConfig.from_env()

        assert isinstance(config.transport, HTTPXTransport)
        assert config.transport.timeout.connect == 1.5
        assert config.transport.timeout.read == 5.0
        assert config.transport.max_workers == 4
        assert config.transport.follow_redirects is True
        assert config.default_headers == [("User-Agent", "fluent-tests/1.0")]

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The variable prefix can be changed."""
        monkeypatch.setenv("BILLING_API_READ_TIMEOUT", "12")

        config = FluentConfig.from_env(prefix="BILLING_API_")

        assert isinstance(config.transport, HTTPXTransport)
        assert config.transport.timeout.read == 12.0

    @pytest.mark.parametrize(
        "name, value",
        [
            ("FLUENT_REQUEST_READ_TIMEOUT", "soon"),
            ("FLUENT_REQUEST_MAX_WORKERS", "many"),
            ("FLUENT_REQUEST_MAX_WORKERS", "0"),
            ("FLUENT_REQUEST_FOLLOW_REDIRECTS", "maybe"),
        ],
    )
    def test_invalid_values(
        self, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        """Invalid values raise ValueError naming the variable."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError) as exc_info:
            FluentConfig.from_env()

        assert name in str(exc_info.value)


class TestDefaultConfig:
    """Test suite for the process-wide default config."""

    def test_default_is_created_once(self) -> None:
        """get_default_config() returns the same instance until replaced."""
        assert get_default_config() is get_default_config()

    def test_set_default_config(self) -> None:
        """set_default_config() replaces the default; None resets it."""
        config = FluentConfig()
        set_default_config(config)
        assert get_default_config() is config

        set_default_config(None)
        assert get_default_config() is not config

    def test_override_transport_keeps_mapper(self) -> None:
        """override_transport() swaps only the transport."""
        mapper = PydanticJsonMapper(exclude_none=True)
        set_default_config(FluentConfig(mapper=mapper))
        transport = HTTPXTransport()

        override_transport(transport)

        assert get_default_config().transport is transport
        assert get_default_config().mapper is mapper

    def test_override_mapper_keeps_transport(self) -> None:
        """override_mapper() swaps only the mapper."""
        transport = HTTPXTransport()
        set_default_config(FluentConfig(transport=transport))
        mapper = PydanticJsonMapper(by_alias=False)

        override_mapper(mapper)

        assert get_default_config().mapper is mapper
        assert get_default_config().transport is transport

    def test_concurrent_overrides_are_both_applied(self) -> None:
        """Overrides racing on different fields never lose an update."""
        for _ in range(50):
            set_default_config(FluentConfig())
            transport = HTTPXTransport()
            mapper = PydanticJsonMapper(by_alias=False)
            barrier = threading.Barrier(2)

            def swap_transport() -> None:
                barrier.wait()
                override_transport(transport)

            def swap_mapper() -> None:
                barrier.wait()
                override_mapper(mapper)

            threads = [
                threading.Thread(target=swap_transport),
                threading.Thread(target=swap_mapper),
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

            assert get_default_config().transport is transport
            assert get_default_config().mapper is mapper
            transport.close()

    def test_replaced_environment_transport_is_closed(self) -> None:
        """The transport built for the environment default is closed once replaced."""
        default_transport = get_default_config().transport
        assert isinstance(default_transport, HTTPXTransport)

        override_mapper(PydanticJsonMapper(by_alias=False))
        assert not default_transport.client.is_closed

        override_transport(HTTPXTransport())
        assert default_transport.client.is_closed

    def test_caller_transport_is_not_closed(self) -> None:
        """Transports supplied by the caller stay open when replaced."""
        transport = HTTPXTransport()
        set_default_config(FluentConfig(transport=transport))

        override_transport(HTTPXTransport())

        assert not transport.client.is_closed
        transport.close()
