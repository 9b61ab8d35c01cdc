# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-request configuration values and the two stock presets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

HeaderPair = tuple[str, str]


def no_cache_header() -> HeaderPair:
    return ("Cache-Control", "no-store, must-revalidate, no-cache, max-age=0")


def accept_json_header() -> HeaderPair:
    return ("Accept", "application/json")


@dataclass(frozen=True)
class RequestConfig:
    """
    Headers and transport flags for a single request.

    A config passed to a verb function is used as-is; nothing is merged from the presets.
    """

    headers: tuple[HeaderPair, ...] = ()
    timeout: float | None = None
    tracker: str | None = None
    with_credentials: bool = False

    def __post_init__(self) -> None:
        headers = self.headers.items() if isinstance(self.headers, Mapping) else self.headers
        object.__setattr__(self, "headers", tuple((str(name), str(value)) for name, value in headers))

    def with_headers(self, *pairs: HeaderPair) -> RequestConfig:
        """Return a copy with `pairs` appended after the existing headers."""
        return replace(self, headers=self.headers + tuple(pairs))


DEFAULT_CONFIG = RequestConfig(headers=(accept_json_header(),))

NO_CACHE_CONFIG = replace(DEFAULT_CONFIG, headers=(no_cache_header(),) + DEFAULT_CONFIG.headers)


__all__ = [
    "DEFAULT_CONFIG",
    "HeaderPair",
    "NO_CACHE_CONFIG",
    "RequestConfig",
    "accept_json_header",
    "no_cache_header",
]
