# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from typing import Protocol

from ..config import HttpSettings
from ..context import get_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    Minimal protocol for issuing HTTP requests.

    `request` must not raise for transport failures; it reports them as
    `HttpResponse(ok=False, error_kind=...)`. Cancellation propagates as
    `asyncio.CancelledError`.
    """

    async def request(self, request: HttpRequest) -> HttpResponse: ...

    def cancel(self, tracker: str) -> bool: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client; settings default to the ambient ones."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or get_http_settings())
