# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with HttpClient implementations."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ErrorKind
from ..request_config import HeaderPair, RequestConfig

Headers = dict[str, str]


@dataclass(frozen=True)
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: tuple[HeaderPair, ...] = ()
    body: bytes | None = None
    timeout: float | None = None
    tracker: str | None = None
    with_credentials: bool = False

    @classmethod
    def from_config(
        cls,
        method: str,
        url: str,
        config: RequestConfig,
        *,
        body: bytes | None = None,
        extra_headers: tuple[HeaderPair, ...] = (),
    ) -> HttpRequest:
        """Build a request from a RequestConfig; `extra_headers` go after the configured ones."""
        return cls(
            url=url,
            method=method.upper(),
            headers=config.headers + tuple(extra_headers),
            body=body,
            timeout=config.timeout,
            tracker=config.tracker,
            with_credentials=config.with_credentials,
        )


@dataclass
class HttpResponse:
    """
    Transport outcome.

    `ok` is True whenever a response was received, whatever its status. When no response was
    obtained, `ok` is False, `status_code` is None and `error_kind` names the transport failure.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @property
    def is_success_status(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @classmethod
    def failure(cls, kind: ErrorKind, message: str | None = None) -> HttpResponse:
        return cls(ok=False, error_kind=kind, error_message=message)
