# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Tagged request dispatcher.

Every verb comes in two forms: a coroutine resolving to `RemoteData[HttpError, A]`, and a
`*_with_callback` variant that schedules the request on the running loop and hands the
result to a callback. Request outcomes never raise; only cancellation propagates.

GET defaults to NO_CACHE_CONFIG, every other verb to DEFAULT_CONFIG.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, Callable, TypeVar

from .context import resolve_http_client
from .decoders import Decoder, describe_decode_failure, encode_json_body
from .errors import ErrorKind, HttpError
from .http.client import HttpClient
from .http.headers import has_header
from .http.models import HttpRequest, HttpResponse
from .remote import Failed, RemoteData, Succeeded
from .request_config import DEFAULT_CONFIG, NO_CACHE_CONFIG, RequestConfig

logger = logging.getLogger(__name__)

A = TypeVar("A")

Result = RemoteData[HttpError, A]
ResultCallback = Callable[[Result[A]], Any]

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
JSON_CONTENT_TYPE = ("Content-Type", "application/json")

_pending_callbacks: set[asyncio.Task] = set()


def to_remote_data(response: HttpResponse, decoder: Decoder[A] | None, *, url: str = "") -> Result[A]:
    """
    Map a transport outcome onto Failed/Succeeded.

    A response with `ok=False` is a transport failure even if it carries a status code.
    With `decoder=None` the raw response text is returned without any decoding.
    """
    if not response.ok or response.status_code is None:
        kind = response.error_kind or ErrorKind.NETWORK_ERROR
        if kind is ErrorKind.BAD_URL:
            return Failed(HttpError.bad_url(url or response.url or ""))
        if kind is ErrorKind.TIMEOUT:
            return Failed(HttpError.timeout())
        return Failed(HttpError.network_error(response.error_message))

    if not response.is_success_status:
        return Failed(HttpError.bad_status(response.status_code))

    if decoder is None:
        return Succeeded(response.text)

    try:
        value = decoder(response.text)
    except Exception as exc:  # noqa: BLE001
        return Failed(HttpError.bad_body(describe_decode_failure(exc)))
    return Succeeded(value)


def build_request(method: str, url: str, config: RequestConfig, body: Any = None) -> HttpRequest:
    """Describe a request; a non-None body is JSON encoded."""
    method = method.upper()
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")
    if body is None:
        return HttpRequest.from_config(method, url, config)
    extra = () if has_header(config.headers, "Content-Type") else (JSON_CONTENT_TYPE,)
    return HttpRequest.from_config(method, url, config, body=encode_json_body(body), extra_headers=extra)


async def send(
    method: str,
    url: str,
    decoder: Decoder[A] | None,
    *,
    config: RequestConfig,
    body: Any = None,
    client: HttpClient | None = None,
) -> Result[A]:
    """Issue exactly one request and tag its outcome."""
    http_client = resolve_http_client(client)
    request = build_request(method, url, config, body)
    return await _dispatch(http_client, request, decoder)


async def _dispatch(http_client: HttpClient, request: HttpRequest, decoder: Decoder[A] | None) -> Result[A]:
    try:
        response = await http_client.request(request)
    except Exception as exc:  # noqa: BLE001
        logger.warning("HttpClient raised for %s %s: %s", request.method, request.url, exc)
        response = HttpResponse.failure(ErrorKind.NETWORK_ERROR, str(exc) or None)

    result = to_remote_data(response, decoder, url=request.url)
    if isinstance(result, Failed):
        logger.debug("%s %s -> %s", request.method, request.url, result.error)
    return result


async def get(url: str, decoder: Decoder[A], *, config: RequestConfig | None = None, client: HttpClient | None = None) -> Result[A]:
    return await send("GET", url, decoder, config=config or NO_CACHE_CONFIG, client=client)


async def post(
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> Result[A]:
    return await send("POST", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


async def put(
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> Result[A]:
    return await send("PUT", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


async def patch(
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> Result[A]:
    return await send("PATCH", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


async def delete(
    url: str,
    body: Any = None,
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> Result[str]:
    """DELETE never decodes; a 2xx response always yields the raw body text."""
    return await send("DELETE", url, None, body=body, config=config or DEFAULT_CONFIG, client=client)


def _schedule(make_call: Callable[[], Awaitable[Result[A]]], on_result: ResultCallback[A]) -> asyncio.Task:
    loop = asyncio.get_running_loop()
    task = loop.create_task(make_call())
    # The loop holds tasks weakly; keep them alive until settled.
    _pending_callbacks.add(task)

    def _settled(done: asyncio.Task) -> None:
        _pending_callbacks.discard(done)
        if done.cancelled():
            logger.debug("Request cancelled before settling; callback suppressed")
            return
        on_result(done.result())

    task.add_done_callback(_settled)
    return task


def send_with_callback(
    on_result: ResultCallback[A],
    method: str,
    url: str,
    decoder: Decoder[A] | None,
    *,
    config: RequestConfig,
    body: Any = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    """
    Schedule a request on the running loop and call `on_result` once it settles.

    Must be called from inside a running event loop. The returned task can be cancelled;
    a cancelled request never invokes the callback.
    """
    http_client = resolve_http_client(client)
    request = build_request(method, url, config, body)
    return _schedule(lambda: _dispatch(http_client, request, decoder), on_result)


def get_with_callback(
    on_result: ResultCallback[A],
    url: str,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    return send_with_callback(on_result, "GET", url, decoder, config=config or NO_CACHE_CONFIG, client=client)


def post_with_callback(
    on_result: ResultCallback[A],
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    return send_with_callback(on_result, "POST", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


def put_with_callback(
    on_result: ResultCallback[A],
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    return send_with_callback(on_result, "PUT", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


def patch_with_callback(
    on_result: ResultCallback[A],
    url: str,
    body: Any,
    decoder: Decoder[A],
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    return send_with_callback(on_result, "PATCH", url, decoder, body=body, config=config or DEFAULT_CONFIG, client=client)


def delete_with_callback(
    on_result: ResultCallback[str],
    url: str,
    body: Any = None,
    *,
    config: RequestConfig | None = None,
    client: HttpClient | None = None,
) -> asyncio.Task:
    return send_with_callback(on_result, "DELETE", url, None, body=body, config=config or DEFAULT_CONFIG, client=client)


def cancel(tracker: str, *, client: HttpClient | None = None) -> bool:
    """Forward a cancellation to the transport; True if an in-flight request was cancelled."""
    return resolve_http_client(client).cancel(tracker)


__all__ = [
    "Result",
    "ResultCallback",
    "build_request",
    "cancel",
    "delete",
    "delete_with_callback",
    "get",
    "get_with_callback",
    "patch",
    "patch_with_callback",
    "post",
    "post_with_callback",
    "put",
    "put_with_callback",
    "send",
    "send_with_callback",
    "to_remote_data",
]
