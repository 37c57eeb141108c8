# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Generic, Mapping, Optional, TypeVar, Union

from fluent_request.mapper import JsonMapper

if TYPE_CHECKING:
    from fluent_request.request import RequestBuilder

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

FileContent = Union[Path, str, bytes, IO[bytes]]


@dataclass
class RequestBody:
    content: Optional[bytes] = None
    content_type: Optional[str] = None
    form_data: Optional[dict[str, str]] = None
    files: Optional[list[tuple[str, Any]]] = None

    @classmethod
    def json(cls, value: Any, mapper: JsonMapper) -> "RequestBody":
        return cls(content=mapper.encode(value), content_type=JSON_CONTENT_TYPE)

    @classmethod
    def raw(
        cls, data: bytes | str, content_type: str = OCTET_STREAM_CONTENT_TYPE
    ) -> "RequestBody":
        content = data.encode() if isinstance(data, str) else data
        return cls(content=content, content_type=content_type)

    def to_httpx_kwargs(self) -> dict[str, Any]:
        """Arguments for httpx.Client.build_request carrying this body"""
        kwargs: dict[str, Any] = {}

        if self.files:
            # Multipart, text fields included as filename-less parts
            kwargs["files"] = self.files
        elif self.form_data is not None:
            kwargs["data"] = self.form_data
        elif self.content is not None:
            kwargs["content"] = self.content

        return kwargs


class FluentFormBody(Generic[T]):
    """Builder for application/x-www-form-urlencoded bodies"""

    def __init__(self, fluent_request: "RequestBuilder[T]"):
        self.fluent_request = fluent_request
        self.body: dict[str, str] = {}

    def add(
        self, key: str | Mapping[str, str], value: Optional[str] = None
    ) -> "FluentFormBody[T]":
        if isinstance(key, Mapping):
            self.body.update({k: str(v) for k, v in key.items()})
        elif value is not None:
            self.body[key] = str(value)
        return self

    def build(self) -> "RequestBuilder[T]":
        return self.fluent_request.body(RequestBody(form_data=dict(self.body)))


class FluentMultipartBody(Generic[T]):
    """Builder for multipart/form-data bodies"""

    def __init__(self, fluent_request: "RequestBuilder[T]"):
        self.fluent_request = fluent_request
        self.parts: dict[str, str] = {}
        self.file_parts: dict[str, tuple[str, FileContent]] = {}

    def add(
        self, key: str | Mapping[str, str], value: Optional[str] = None
    ) -> "FluentMultipartBody[T]":
        if isinstance(key, Mapping):
            self.parts.update({k: str(v) for k, v in key.items()})
        elif value is not None:
            self.parts[key] = str(value)
        return self

    def add_file(
        self, key: str, filename: str, file: FileContent
    ) -> "FluentMultipartBody[T]":
        """
        Add a file part. ``file`` is a Path read at build time, bytes, a binary
        stream, or a str sent as UTF-8 text.
        """
        self.file_parts[key] = (filename, file)
        return self

    def build(self) -> "RequestBuilder[T]":
        files: list[Any] = [
            (key, (None, value.encode())) for key, value in self.parts.items()
        ]

        for key, (filename, file) in self.file_parts.items():
            files.append(
                (key, (filename, read_file_content(file), OCTET_STREAM_CONTENT_TYPE))
            )

        return self.fluent_request.body(RequestBody(files=files))


def read_file_content(file: FileContent) -> bytes | IO[bytes]:
    if isinstance(file, Path):
        return file.read_bytes()
    if isinstance(file, str):
        return file.encode()
    return file


__all__ = [
    "RequestBody",
    "FluentFormBody",
    "FluentMultipartBody",
    "JSON_CONTENT_TYPE",
    "OCTET_STREAM_CONTENT_TYPE",
]
