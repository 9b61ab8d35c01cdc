# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings
from ..context import get_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import has_header, normalize_headers
from .models import HttpRequest, HttpResponse
from .tracking import RequestTracker

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Asynchronous httpx client wrapper.

    Requests made with `with_credentials=False` go out without the client's auth and
    without a Cookie header; credentialed requests carry both.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.AsyncClient | None = None,
        auth: httpx.Auth | None = None,
    ):
        self.settings = settings or get_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            auth=auth,
        )
        self._tracker = RequestTracker()

    async def request(self, request: HttpRequest) -> HttpResponse:
        with self._tracker.track(request.tracker):
            return await self._send(request)

    async def _send(self, request: HttpRequest) -> HttpResponse:
        headers = list(request.headers)
        if not has_header(headers, "User-Agent"):
            headers.append(("User-Agent", self.settings.user_agent))
        timeout = request.timeout if request.timeout is not None else httpx.USE_CLIENT_DEFAULT

        try:
            http_request = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
            if request.with_credentials:
                response = await self._client.send(http_request)
            else:
                http_request.headers.pop("Cookie", None)
                response = await self._client.send(http_request, auth=None)
        except Exception as exc:  # noqa: BLE001
            kind = categorize_exception(exc)
            logger.debug("%s %s failed (%s): %s", request.method, request.url, kind.value, exc)
            return HttpResponse.failure(kind, str(exc) or None)

        return HttpResponse(
            ok=True,
            status_code=response.status_code,
            headers=normalize_headers(response.headers),
            text=response.text,
            url=str(response.url),
        )

    def cancel(self, tracker: str) -> bool:
        return self._tracker.cancel(tracker)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
