# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from ..errors import ErrorKind
from .client import HttpClient
from .models import HttpRequest, HttpResponse
from .tracking import RequestTracker

StubResponse = HttpResponse | Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests."""

    def __init__(self, responses: dict[str, StubResponse] | None = None):
        self._responses: dict[str, StubResponse] = dict(responses or {})
        self._delays: dict[str, float | asyncio.Event] = {}
        self._tracker = RequestTracker()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: StubResponse, *, delay: float | asyncio.Event | None = None) -> None:
        """
        Register the outcome for `url`.

        `delay` holds the request open for that many seconds, or until the given event is set.
        """
        self._responses[url] = response
        if delay is None:
            self._delays.pop(url, None)
        else:
            self._delays[url] = delay

    def add_text(self, url: str, text: str, *, status_code: int = 200) -> None:
        self.add(url, HttpResponse(ok=True, status_code=status_code, text=text, url=url))

    def add_failure(self, url: str, kind: ErrorKind, message: str | None = None) -> None:
        self.add(url, HttpResponse.failure(kind, message))

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        with self._tracker.track(request.tracker):
            delay = self._delays.get(request.url)
            if isinstance(delay, asyncio.Event):
                await delay.wait()
            elif delay:
                await asyncio.sleep(delay)
            else:
                # Settle on a later loop iteration, never synchronously.
                await asyncio.sleep(0)

            response = self._responses.get(request.url)
            if response is None:
                return HttpResponse.failure(ErrorKind.NETWORK_ERROR, "No stubbed response configured")
            if callable(response):
                return response(request)
            return response

    def cancel(self, tracker: str) -> bool:
        return self._tracker.cancel(tracker)

    async def aclose(self) -> None:
        self.closed = True
