# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from fluent_request.exceptions import FluentMappingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonMapper(Protocol):
    """Protocol for converting between bytes and typed objects"""

    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes, type_: Any) -> Any: ...


class PydanticJsonMapper(JsonMapper):

    def __init__(self, by_alias: bool = True, exclude_none: bool = False):
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def encode(self, value: Any) -> bytes:
        if isinstance(value, bytes):
            return value

        try:
            if isinstance(value, BaseModel):
                return value.model_dump_json(
                    by_alias=self.by_alias, exclude_none=self.exclude_none
                ).encode()
            return to_json(
                value, by_alias=self.by_alias, exclude_none=self.exclude_none
            )
        except (PydanticSerializationError, ValueError, TypeError) as err:
            raise FluentMappingError(
                f"Unable to encode value of type {type(value).__name__}: {err}"
            ) from err

    def decode(self, data: bytes, type_: type[T] | Any) -> T:
        logger.debug("Decoding %s bytes into %s", len(data), type_)

        try:
            if isinstance(type_, type) and issubclass(type_, BaseModel):
                return type_.model_validate_json(data)  # type: ignore[return-value]
            return TypeAdapter(type_).validate_json(data)  # type: ignore[no-any-return]
        except ValidationError as err:
            raise FluentMappingError(
                f"Unable to decode payload into {type_}: {err}"
            ) from err
        except (ValueError, TypeError) as err:
            raise FluentMappingError(
                f"Unsupported decode target {type_}: {err}"
            ) from err


__all__ = ["JsonMapper", "PydanticJsonMapper"]
