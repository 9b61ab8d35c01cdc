# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Ambient client context.

A ContextVar-backed ClientContext carries the HttpClient used by
the verb functions when no explicit `client=` is passed, and the HttpSettings new
transports are built from.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from .config import HttpSettings, load_http_settings

if TYPE_CHECKING:
    from .http.client import HttpClient


@dataclass(frozen=True)
class ClientContext:
    http_client: HttpClient | None = None
    http_settings: HttpSettings | None = None


_current_client_context: ContextVar[ClientContext | None] = ContextVar("taggedhttp_client_context", default=None)


def get_client_context() -> ClientContext:
    """Return the current ambient client context."""
    return _current_client_context.get() or ClientContext()


def get_http_settings() -> HttpSettings:
    """Return HttpSettings from context, falling back to loading defaults."""
    context = get_client_context()
    if context.http_settings is not None:
        return context.http_settings
    return load_http_settings()


def get_http_client() -> HttpClient:
    """Return the ambient HttpClient."""
    context = get_client_context()
    if context.http_client is None:
        raise RuntimeError("No HttpClient configured; pass client= or wrap the call in client_context(http_client=...)")
    return context.http_client


def resolve_http_client(client: HttpClient | None) -> HttpClient:
    return client if client is not None else get_http_client()


@contextmanager
def client_context(**overrides: Any) -> Iterator[ClientContext]:
    """
    Context manager that layers overrides onto the ambient ClientContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_client_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_client_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_client_context.reset(token)


__all__ = [
    "ClientContext",
    "client_context",
    "get_client_context",
    "get_http_client",
    "get_http_settings",
    "resolve_http_client",
]
