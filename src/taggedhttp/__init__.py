# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
taggedhttp package entrypoint.

One coroutine per HTTP verb, each resolving to a four-state RemoteData value
(NotAsked / InFlight / Failed / Succeeded) instead of raising. HTTP behavior is
abstracted behind an injectable client interface; the default transport is httpx.
"""

from .config import HttpSettings, load_http_settings
from .context import client_context, get_http_client, get_http_settings
from .decoders import DecodeError, Decoder, encode_json_body, json_decoder, json_list, json_object, json_value, text
from .dispatch import (
    cancel,
    delete,
    delete_with_callback,
    get,
    get_with_callback,
    patch,
    patch_with_callback,
    post,
    post_with_callback,
    put,
    put_with_callback,
    send,
    send_with_callback,
    to_remote_data,
)
from .errors import ErrorKind, HttpError, categorize_exception
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, StubHttpClient, create_default_http_client
from .log import setup_logging
from .remote import (
    IN_FLIGHT,
    NOT_ASKED,
    Failed,
    InFlight,
    NotAsked,
    RemoteData,
    Succeeded,
    and_then,
    is_failed,
    is_in_flight,
    is_not_asked,
    is_succeeded,
    map_error,
    map_value,
    with_default,
)
from .request_config import DEFAULT_CONFIG, NO_CACHE_CONFIG, RequestConfig, accept_json_header, no_cache_header
from .version import __version__

__all__ = [
    "DEFAULT_CONFIG",
    "DecodeError",
    "Decoder",
    "ErrorKind",
    "Failed",
    "HttpClient",
    "HttpError",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "IN_FLIGHT",
    "InFlight",
    "NOT_ASKED",
    "NO_CACHE_CONFIG",
    "NotAsked",
    "RemoteData",
    "RequestConfig",
    "StubHttpClient",
    "Succeeded",
    "accept_json_header",
    "and_then",
    "cancel",
    "categorize_exception",
    "client_context",
    "create_default_http_client",
    "delete",
    "delete_with_callback",
    "encode_json_body",
    "get",
    "get_http_client",
    "get_http_settings",
    "get_with_callback",
    "is_failed",
    "is_in_flight",
    "is_not_asked",
    "is_succeeded",
    "json_decoder",
    "json_list",
    "json_object",
    "json_value",
    "load_http_settings",
    "map_error",
    "map_value",
    "no_cache_header",
    "patch",
    "patch_with_callback",
    "post",
    "post_with_callback",
    "put",
    "put_with_callback",
    "send",
    "send_with_callback",
    "setup_logging",
    "text",
    "to_remote_data",
    "with_default",
    "__version__",
]
