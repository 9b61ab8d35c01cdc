# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import json

import httpx

from taggedhttp import dispatch
from taggedhttp.config import HttpSettings, load_http_settings
from taggedhttp.context import client_context, get_http_settings
from taggedhttp.decoders import json_value
from taggedhttp.errors import ErrorKind, HttpError
from taggedhttp.http.adapters import StubHttpClient
from taggedhttp.http.client import create_default_http_client
from taggedhttp.http.httpx_client import HttpxClient
from taggedhttp.http.models import HttpRequest
from taggedhttp.remote import Failed, Succeeded
from taggedhttp.request_config import DEFAULT_CONFIG, RequestConfig

URL = "http://api.example/items"


def _httpx_client(handler, **client_kwargs) -> HttpxClient:
    transport = httpx.MockTransport(handler)
    return HttpxClient(
        HttpSettings(user_agent="UA/1.0"),
        client=httpx.AsyncClient(transport=transport, **client_kwargs),
    )


def test_httpx_client_success_passes_headers_and_body():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 7}, headers={"X-Request-Id": "abc"})

    async def scenario():
        client = _httpx_client(handler)
        try:
            response = await client.request(
                HttpRequest(url=URL, method="POST", headers=(("Accept", "application/json"),), body=b'{"a":1}')
            )
        finally:
            await client.aclose()
        return response

    response = asyncio.run(scenario())
    assert response.ok is True
    assert response.status_code == 201
    assert response.headers["x-request-id"] == "abc"
    assert json.loads(response.text) == {"id": 7}
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["accept"] == "application/json"
    assert request.headers["user-agent"] == "UA/1.0"
    assert request.content == b'{"a":1}'


def test_httpx_client_keeps_explicit_user_agent():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    async def scenario():
        client = _httpx_client(handler)
        await client.request(HttpRequest(url=URL, headers=(("User-Agent", "Custom/2.0"),)))
        await client.aclose()

    asyncio.run(scenario())
    assert seen[0].headers.get_list("user-agent") == ["Custom/2.0"]


def test_httpx_client_forwards_timeout():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    async def scenario():
        client = _httpx_client(handler)
        await client.request(HttpRequest(url=URL, timeout=2.5))
        await client.aclose()

    asyncio.run(scenario())
    assert seen[0].extensions["timeout"]["read"] == 2.5


def test_dispatch_over_httpx_sends_no_cache_headers_for_get():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[1, 2, 3])

    async def scenario():
        async with _httpx_client(handler) as client:
            return await dispatch.get(URL, json_value, client=client)

    result = asyncio.run(scenario())
    assert result == Succeeded([1, 2, 3])
    assert seen[0].headers["cache-control"] == "no-store, must-revalidate, no-cache, max-age=0"
    assert seen[0].headers["accept"] == "application/json"


def test_dispatch_over_httpx_maps_bad_status():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(500, text="internal error")

    async def scenario():
        async with _httpx_client(handler) as client:
            return await dispatch.post(URL, {"a": 1}, json_value, client=client)

    assert asyncio.run(scenario()) == Failed(HttpError.bad_status(500))


def test_httpx_exceptions_are_classified():
    def raising(exc_factory):
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_factory(request)

        return handler

    cases = [
        (lambda r: httpx.ReadTimeout("read timed out", request=r), ErrorKind.TIMEOUT),
        (lambda r: httpx.ConnectError("connection refused", request=r), ErrorKind.NETWORK_ERROR),
        (lambda r: httpx.UnsupportedProtocol("unsupported protocol", request=r), ErrorKind.BAD_URL),
    ]

    async def scenario():
        responses = []
        for factory, _ in cases:
            async with _httpx_client(raising(factory)) as client:
                responses.append(await client.request(HttpRequest(url=URL)))
        return responses

    responses = asyncio.run(scenario())
    for response, (_, kind) in zip(responses, cases):
        assert response.ok is False
        assert response.status_code is None
        assert response.error_kind is kind


def test_dispatch_over_httpx_maps_timeout_and_bad_url():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/slow":
            raise httpx.ConnectTimeout("timed out", request=request)
        raise httpx.UnsupportedProtocol("unsupported protocol", request=request)

    async def scenario():
        async with _httpx_client(handler) as client:
            slow = await dispatch.get("http://api.example/slow", json_value, client=client)
            bad = await dispatch.delete("http://api.example/other", client=client)
        return slow, bad

    slow, bad = asyncio.run(scenario())
    assert slow == Failed(HttpError.timeout())
    assert bad == Failed(HttpError.bad_url("http://api.example/other"))


def test_credentials_mode_controls_auth_and_cookies():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    async def scenario():
        client = _httpx_client(handler, auth=httpx.BasicAuth("user", "secret"), cookies={"session": "abc"})
        await client.request(HttpRequest(url=URL, with_credentials=False))
        await client.request(HttpRequest(url=URL, with_credentials=True))
        await client.aclose()

    asyncio.run(scenario())
    anonymous, credentialed = seen
    assert "authorization" not in anonymous.headers
    assert "cookie" not in anonymous.headers
    assert credentialed.headers["authorization"].startswith("Basic ")
    assert "session=abc" in credentialed.headers["cookie"]


def test_httpx_client_tracker_cancellation():
    async def scenario():
        gate_started = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
            gate_started.set()
            await asyncio.sleep(30)
            return httpx.Response(200, text="late")

        client = _httpx_client(handler)
        config = RequestConfig(headers=DEFAULT_CONFIG.headers, tracker="slow")
        task = asyncio.ensure_future(dispatch.get(URL, json_value, config=config, client=client))
        await gate_started.wait()
        cancelled = client.cancel("slow")
        await asyncio.wait([task])
        await client.aclose()
        return cancelled, task.cancelled()

    assert asyncio.run(scenario()) == (True, True)


def test_create_default_http_client_uses_settings():
    async def scenario():
        client = create_default_http_client(HttpSettings(timeout=3.0, user_agent="UA/9"))
        try:
            return client.settings.user_agent, client._client.timeout.read
        finally:
            await client.aclose()

    assert asyncio.run(scenario()) == ("UA/9", 3.0)


def test_overlong_url_is_bad_url():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(200, text="unreachable")

    url = "http://api.example/" + "a" * 70000

    async def scenario():
        async with _httpx_client(handler) as client:
            return await dispatch.get(url, json_value, client=client)

    assert asyncio.run(scenario()) == Failed(HttpError.bad_url(url))


def test_default_client_reads_ambient_settings():
    async def scenario():
        client = create_default_http_client()
        try:
            return client.settings.user_agent, client._client.timeout.read
        finally:
            await client.aclose()

    with client_context(http_settings=HttpSettings(timeout=1.0, user_agent="Ambient/1.0")):
        assert asyncio.run(scenario()) == ("Ambient/1.0", 1.0)


def test_client_context_layers_settings_with_client():
    stub = StubHttpClient()
    settings = HttpSettings(timeout=1.0)
    with client_context(http_client=stub, http_settings=settings) as context:
        assert context.http_client is stub
        assert get_http_settings() is settings
        with client_context(http_settings=None):
            assert get_http_settings() is settings
        ambient_client = HttpxClient()
        assert ambient_client.settings is settings
        asyncio.run(ambient_client.aclose())
    assert get_http_settings() == load_http_settings()
