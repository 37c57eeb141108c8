# SPDX-FileCopyrightText: 2025 Lucas S
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
URL templating for fluent requests.

A pattern such as ``https://api.example.com/posts/{postId}?sort=asc`` is rendered
by substituting ``{name}`` placeholders and re-emitting every query parameter,
both the ones embedded in the pattern and the ones supplied explicitly:

    FluentUrl.from_string("https://api.example.com/posts/{postId}?sort=asc")
        .variable("postId", 1)
        .parameter("page", 2)
        .build()
    # https://api.example.com/posts/1?sort=asc&page=2
"""

import re
from typing import Any, Iterable, Mapping, Optional, Self

import httpx

QUERY_PARAM_PATTERN = re.compile(r"([?&])([^=&]+)=([^&]+)")

QueryPairs = Iterable[tuple[str, Any]]


class FluentUrl:

    def __init__(self, url: str):
        self.url = url
        self.url_variables: dict[str, Any] = {}
        self.query_parameters: dict[str, Any] = {}

    @classmethod
    def from_string(cls, url: str) -> Self:
        return cls(url)

    def variable(self, key: str, value: Any) -> Self:
        if value is not None:
            self.url_variables[key] = value
        return self

    def variables(self, url_variables: Optional[Mapping[str, Any]]) -> Self:
        for key, value in (url_variables or {}).items():
            self.variable(key, value)
        return self

    def parameter(self, key: str, value: Any) -> Self:
        if value is not None:
            self.query_parameters[key] = value
        return self

    def parameters(self, query_parameters: Optional[Mapping[str, Any]]) -> Self:
        for key, value in (query_parameters or {}).items():
            self.parameter(key, value)
        return self

    def build(self) -> str:
        embedded = self.extract_query_params(self.url)

        # The embedded query is re-emitted from the extracted pairs
        path, _, _ = self.url.partition("?")
        formatted = self.substitute_variables(path, self.url_variables)

        return self.append_query_string(
            formatted,
            [*embedded.items(), *self.query_parameters.items()],
        )

    def build_url(self) -> httpx.URL:
        return httpx.URL(self.build())

    @staticmethod
    def extract_query_params(url: str) -> dict[str, str]:
        """
        Collect every ``[?&]key=value`` occurrence found anywhere in the url.
        Fragments without a value are ignored; a repeated key keeps its last value.
        """
        query_params: dict[str, str] = {}

        for match in QUERY_PARAM_PATTERN.finditer(url):
            key, value = match.group(2), match.group(3)
            if key and value:
                query_params[key] = value

        return query_params

    @staticmethod
    def substitute_variables(url: str, url_variables: Mapping[str, Any]) -> str:
        formatted_url = url

        for key, value in url_variables.items():
            formatted_url = formatted_url.replace("{%s}" % key, str(value))

        return formatted_url

    @staticmethod
    def append_query_string(
        url: str, query_parameters: "Mapping[str, Any] | QueryPairs"
    ) -> str:
        pairs = (
            query_parameters.items()
            if isinstance(query_parameters, Mapping)
            else query_parameters
        )

        parameters = "&".join(f"{key}={value}" for key, value in pairs)

        if parameters:
            return f"{url}?{parameters}"
        return url

    def __repr__(self) -> str:
        return f"FluentUrl({self.url!r})"


def render_url(
    url: str,
    url_variables: Optional[Mapping[str, Any]] = None,
    query_parameters: Optional[Mapping[str, Any]] = None,
) -> str:
    return (
        FluentUrl.from_string(url)
        .variables(url_variables)
        .parameters(query_parameters)
        .build()
    )


__all__ = ["FluentUrl", "render_url", "QUERY_PARAM_PATTERN"]
