# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
Tests for response shapes and the response decoder.
"""

from typing import Any, Optional

import pytest
from conftest import Article

from fluent_request.decoding import (
    NO_BODY,
    RAW_BYTES,
    TEXT,
    ResponseDecoder,
    ResponseShape,
    ShapeKind,
    resolve_encoding,
)
from fluent_request.exceptions import FluentMappingError
from fluent_request.mapper import PydanticJsonMapper


class ExplodingMapper:
    """Mapper that fails the test if it is ever used."""

    def encode(self, value: Any) -> bytes:
        raise AssertionError("encode should not be called")

    def decode(self, data: bytes, type_: Any) -> Any:
        raise AssertionError("decode should not be called")


@pytest.fixture
def decoder() -> ResponseDecoder:
    return ResponseDecoder(PydanticJsonMapper())


class TestResponseShape:
    """Test suite for ResponseShape.of()."""

    @pytest.mark.parametrize(
        "response_type, kind",
        [
            (None, ShapeKind.NONE),
            (type(None), ShapeKind.NONE),
            (bytes, ShapeKind.RAW_BYTES),
            (str, ShapeKind.TEXT),
            (Article, ShapeKind.STRUCTURED),
            (dict, ShapeKind.STRUCTURED),
            (list[Article], ShapeKind.STRUCTURED_GENERIC),
            (dict[str, int], ShapeKind.STRUCTURED_GENERIC),
            (Optional[Article], ShapeKind.STRUCTURED_GENERIC),
        ],
    )
    def test_shape_from_type(self, response_type: Any, kind: ShapeKind) -> None:
        """Response types map onto their shape kind."""
        assert ResponseShape.of(response_type).kind is kind

    def test_shape_is_passed_through(self) -> None:
        """An existing shape is returned unchanged."""
        shape = ResponseShape(ShapeKind.STRUCTURED, Article)
        assert ResponseShape.of(shape) is shape

    def test_structured_shape_keeps_type(self) -> None:
        """Structured shapes carry the type to decode into."""
        shape = ResponseShape.of(list[Article])
        assert shape.type_ == list[Article]
        assert shape.is_structured
        assert not TEXT.is_structured


class TestResponseDecoder:
    """Test suite for ResponseDecoder.decode()."""

    def test_missing_body_is_absent_for_every_shape(self) -> None:
        """A response without a body yields None whatever the shape."""
        decoder = ResponseDecoder(ExplodingMapper())
        for shape in (NO_BODY, RAW_BYTES, TEXT, ResponseShape.of(Article)):
            assert decoder.decode(None, shape) is None

    def test_no_body_shape_ignores_payload(self) -> None:
        """The NONE shape always yields None."""
        decoder = ResponseDecoder(ExplodingMapper())
        assert decoder.decode(b'{"id": 1}', NO_BODY) is None

    def test_raw_bytes_are_returned_unchanged(
        self, decoder: ResponseDecoder
    ) -> None:
        """RAW_BYTES is the identity, empty payload included."""
        payload = b"\x00\x01binary\xff"
        assert decoder.decode(payload, RAW_BYTES) is payload
        assert decoder.decode(b"", RAW_BYTES) == b""

    def test_text_uses_utf8_by_default(self, decoder: ResponseDecoder) -> None:
        """Text is decoded as UTF-8 when no charset is declared."""
        assert decoder.decode("olá".encode(), TEXT) == "olá"

    def test_text_uses_declared_charset(self, decoder: ResponseDecoder) -> None:
        """Text honours the response charset."""
        assert decoder.decode("café".encode("latin-1"), TEXT, "iso-8859-1") == "café"

    def test_empty_text(self, decoder: ResponseDecoder) -> None:
        """An empty text payload is the empty string."""
        assert decoder.decode(b"", TEXT) == ""

    def test_text_and_raw_bypass_mapper(self) -> None:
        """TEXT and RAW_BYTES never reach the mapper."""
        decoder = ResponseDecoder(ExplodingMapper())
        assert decoder.decode(b"{}", TEXT) == "{}"
        assert decoder.decode(b"{}", RAW_BYTES) == b"{}"

    def test_empty_structured_payload_is_absent(self) -> None:
        """An empty payload never reaches the mapper for structured shapes."""
        decoder = ResponseDecoder(ExplodingMapper())
        assert decoder.decode(b"", ResponseShape.of(Article)) is None
        assert decoder.decode(b"", ResponseShape.of(list[Article])) is None

    def test_structured_decode(self, decoder: ResponseDecoder) -> None:
        """A structured payload equals a direct mapper decode."""
        payload = b'{"id": 1, "title": "Hello"}'
        result = decoder.decode(payload, ResponseShape.of(Article))
        assert result == PydanticJsonMapper().decode(payload, Article)
        assert result == Article(id=1, title="Hello")

    def test_generic_structured_decode(self, decoder: ResponseDecoder) -> None:
        """Generic shapes decode into parameterized types."""
        payload = b'[{"id": 1, "title": "a"}, {"id": 2, "title": "b"}]'
        result = decoder.decode(payload, ResponseShape.of(list[Article]))
        assert result == [Article(id=1, title="a"), Article(id=2, title="b")]

    def test_malformed_payload_raises_mapping_error(
        self, decoder: ResponseDecoder
    ) -> None:
        """Decode failures surface as FluentMappingError."""
        with pytest.raises(FluentMappingError):
            decoder.decode(b"{not json", ResponseShape.of(Article))

    def test_type_mismatch_raises_mapping_error(
        self, decoder: ResponseDecoder
    ) -> None:
        """A payload of the wrong shape surfaces as FluentMappingError."""
        with pytest.raises(FluentMappingError):
            decoder.decode(b'{"id": "x"}', ResponseShape.of(Article))


class TestResolveEncoding:
    """Test suite for charset resolution."""

    def test_known_charset(self) -> None:
        """Known charsets are normalized by codecs."""
        assert resolve_encoding("ISO-8859-1") == "iso8859-1"

    def test_unknown_charset_falls_back(self) -> None:
        """Unknown charsets fall back to UTF-8."""
        assert resolve_encoding("no-such-charset") == "utf-8"
        assert resolve_encoding(None) == "utf-8"
