from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .backends.httpx import HttpTransport, HTTPXTransport, TransportCallback
    from .backends.otel import TracedRequestHook
    from .body import FluentFormBody, FluentMultipartBody, RequestBody
    from .config import (
        FluentConfig,
        get_default_config,
        override_mapper,
        override_transport,
        set_default_config,
    )
    from .decoding import ResponseDecoder, ResponseShape, ShapeKind
    from .exceptions import FluentIOError, FluentMappingError, FluentTimeoutError
    from .hooks import (
        ApiKeyAuth,
        AuthenticationHook,
        BasicAuth,
        BearerTokenAuth,
        PreparedRequest,
        RequestHook,
    )
    from .mapper import JsonMapper, PydanticJsonMapper
    from .methods import HttpMethod
    from .request import FluentRequest, RequestBuilder
    from .response import FluentResponse, ResponseCallback
    from .url import FluentUrl, render_url

    __all__ = [
        # Entry points
        "FluentRequest",
        "RequestBuilder",
        "HttpMethod",
        # URL templating
        "FluentUrl",
        "render_url",
        # Bodies
        "RequestBody",
        "FluentFormBody",
        "FluentMultipartBody",
        # Responses and decoding
        "FluentResponse",
        "ResponseCallback",
        "ResponseShape",
        "ShapeKind",
        "ResponseDecoder",
        "JsonMapper",
        "PydanticJsonMapper",
        # Configuration
        "FluentConfig",
        "get_default_config",
        "set_default_config",
        "override_transport",
        "override_mapper",
        # Transport
        "HttpTransport",
        "HTTPXTransport",
        "TransportCallback",
        # Hooks
        "PreparedRequest",
        "RequestHook",
        "AuthenticationHook",
        "BearerTokenAuth",
        "BasicAuth",
        "ApiKeyAuth",
        "TracedRequestHook",
        # Exceptions
        "FluentIOError",
        "FluentTimeoutError",
        "FluentMappingError",
    ]

__SPEC_PARENT__: str = __spec__.parent  # type: ignore
# A mapping of {<member name>: (package, <module name>, <real name>)}
_dynamic_imports: "dict[str, tuple[str, str, str | None]]" = {
    "FluentRequest": (__SPEC_PARENT__, "request", None),
    "RequestBuilder": (__SPEC_PARENT__, "request", None),
    "HttpMethod": (__SPEC_PARENT__, "methods", None),
    "FluentUrl": (__SPEC_PARENT__, "url", None),
    "render_url": (__SPEC_PARENT__, "url", None),
    "RequestBody": (__SPEC_PARENT__, "body", None),
    "FluentFormBody": (__SPEC_PARENT__, "body", None),
    "FluentMultipartBody": (__SPEC_PARENT__, "body", None),
    "FluentResponse": (__SPEC_PARENT__, "response", None),
    "ResponseCallback": (__SPEC_PARENT__, "response", None),
    "ResponseShape": (__SPEC_PARENT__, "decoding", None),
    "ShapeKind": (__SPEC_PARENT__, "decoding", None),
    "ResponseDecoder": (__SPEC_PARENT__, "decoding", None),
    "JsonMapper": (__SPEC_PARENT__, "mapper", None),
    "PydanticJsonMapper": (__SPEC_PARENT__, "mapper", None),
    "FluentConfig": (__SPEC_PARENT__, "config", None),
    "get_default_config": (__SPEC_PARENT__, "config", None),
    "set_default_config": (__SPEC_PARENT__, "config", None),
    "override_transport": (__SPEC_PARENT__, "config", None),
    "override_mapper": (__SPEC_PARENT__, "config", None),
    "HttpTransport": (__SPEC_PARENT__, "backends.httpx", None),
    "HTTPXTransport": (__SPEC_PARENT__, "backends.httpx", None),
    "TransportCallback": (__SPEC_PARENT__, "backends.httpx", None),
    "PreparedRequest": (__SPEC_PARENT__, "hooks", None),
    "RequestHook": (__SPEC_PARENT__, "hooks", None),
    "AuthenticationHook": (__SPEC_PARENT__, "hooks", None),
    "BearerTokenAuth": (__SPEC_PARENT__, "hooks", None),
    "BasicAuth": (__SPEC_PARENT__, "hooks", None),
    "ApiKeyAuth": (__SPEC_PARENT__, "hooks", None),
    "TracedRequestHook": (__SPEC_PARENT__, "backends.otel", None),
    "FluentIOError": (__SPEC_PARENT__, "exceptions", None),
    "FluentTimeoutError": (__SPEC_PARENT__, "exceptions", None),
    "FluentMappingError": (__SPEC_PARENT__, "exceptions", None),
}

__all__ = list(_dynamic_imports)


def __getattr__(attr_name: str) -> object:

    dynamic_attr = _dynamic_imports.get(attr_name)
    if dynamic_attr is None:
        raise AttributeError(f"module {__name__!r} has no attribute {attr_name!r}")

    package, module_name, realname = dynamic_attr

    module = import_module(f"{package}.{module_name}", package=package)
    result = getattr(module, attr_name if realname is None else realname)
    globals()[attr_name] = result
    return result


def __dir__() -> "list[str]":
    return list(__all__)
