# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import codecs
import logging
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from fluent_request.mapper import JsonMapper

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class ShapeKind(Enum):
    NONE = "none"
    RAW_BYTES = "raw_bytes"
    TEXT = "text"
    STRUCTURED = "structured"
    STRUCTURED_GENERIC = "structured_generic"


@dataclass(frozen=True)
class ResponseShape:
    """
    Declares how a response payload should be interpreted.

    Use ResponseShape.of() to derive a shape from a response type:
    ``None`` means no body, ``bytes`` the raw payload, ``str`` decoded text,
    a class a structured object and a parameterized type such as
    ``list[Article]`` a structured generic value.
    """

    kind: ShapeKind
    type_: Any = None

    @classmethod
    def of(cls, response_type: Any) -> "ResponseShape":
        if isinstance(response_type, ResponseShape):
            return response_type
        if response_type is None or response_type is type(None):
            return cls(ShapeKind.NONE)
        if response_type in (bytes, bytearray):
            return cls(ShapeKind.RAW_BYTES)
        if response_type is str:
            return cls(ShapeKind.TEXT)
        if typing.get_origin(response_type) is None and isinstance(
            response_type, type
        ):
            return cls(ShapeKind.STRUCTURED, response_type)
        return cls(ShapeKind.STRUCTURED_GENERIC, response_type)

    @property
    def is_structured(self) -> bool:
        return self.kind in (ShapeKind.STRUCTURED, ShapeKind.STRUCTURED_GENERIC)


def resolve_encoding(encoding: Optional[str]) -> str:
    if encoding:
        try:
            return codecs.lookup(encoding).name
        except LookupError:
            logger.debug("Unknown charset %r, using %s", encoding, DEFAULT_ENCODING)
    return DEFAULT_ENCODING


NO_BODY = ResponseShape(ShapeKind.NONE)
RAW_BYTES = ResponseShape(ShapeKind.RAW_BYTES)
TEXT = ResponseShape(ShapeKind.TEXT)


class ResponseDecoder:

    def __init__(self, mapper: JsonMapper):
        self.mapper = mapper

    def decode(
        self,
        data: Optional[bytes],
        shape: ResponseShape,
        encoding: Optional[str] = None,
    ) -> Any:
        """
        Decode a payload according to the declared shape.

        ``data`` is None when the transport hands back no payload object, which
        always yields None. An empty payload stays empty for raw bytes and text,
        and yields None for structured shapes instead of being handed to the
        mapper. Mapping failures raise FluentMappingError.
        """
        if data is None:
            return None

        if shape.kind is ShapeKind.NONE:
            return None

        if shape.kind is ShapeKind.RAW_BYTES:
            return data

        if shape.kind is ShapeKind.TEXT:
            return data.decode(resolve_encoding(encoding), errors="replace")

        if len(data) == 0:
            logger.debug("Empty payload for %s, skipping decode", shape.type_)
            return None

        return self.mapper.decode(data, shape.type_)


__all__ = [
    "ShapeKind",
    "ResponseShape",
    "ResponseDecoder",
    "resolve_encoding",
    "NO_BODY",
    "RAW_BYTES",
    "TEXT",
]
