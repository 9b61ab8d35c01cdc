# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy for tagged request outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    BAD_URL = "BAD_URL"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    BAD_STATUS = "BAD_STATUS"
    BAD_BODY = "BAD_BODY"


@dataclass(frozen=True)
class HttpError:
    """
    Failure payload carried by `Failed`.

    `status_code` is set only for BAD_STATUS. `detail` holds the decoding failure for
    BAD_BODY, the offending URL for BAD_URL, and the transport message otherwise.
    """

    kind: ErrorKind
    status_code: int | None = None
    detail: str | None = None

    @classmethod
    def bad_url(cls, url: str) -> HttpError:
        return cls(ErrorKind.BAD_URL, detail=url)

    @classmethod
    def timeout(cls) -> HttpError:
        return cls(ErrorKind.TIMEOUT)

    @classmethod
    def network_error(cls, message: str | None = None) -> HttpError:
        return cls(ErrorKind.NETWORK_ERROR, detail=message)

    @classmethod
    def bad_status(cls, status_code: int) -> HttpError:
        return cls(ErrorKind.BAD_STATUS, status_code=status_code)

    @classmethod
    def bad_body(cls, description: str) -> HttpError:
        return cls(ErrorKind.BAD_BODY, detail=description)

    def __str__(self) -> str:
        reason = error_kind_to_reason(self.kind)
        if self.kind is ErrorKind.BAD_STATUS:
            return f"{reason}: {self.status_code}"
        if self.detail:
            return f"{reason}: {self.detail}"
        return reason


def categorize_exception(exc: BaseException) -> ErrorKind:
    """
    Map Python/httpx exceptions raised while issuing a request to a transport ErrorKind.

    Only BAD_URL, TIMEOUT and NETWORK_ERROR are produced; anything unrecognized means no
    response was obtained.
    """
    import httpx

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorKind.BAD_URL

    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorKind.TIMEOUT

    return ErrorKind.NETWORK_ERROR


def error_kind_to_reason(kind: Optional[ErrorKind]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorKind.BAD_URL: "Malformed URL",
        ErrorKind.TIMEOUT: "Request timed out",
        ErrorKind.NETWORK_ERROR: "Network error",
        ErrorKind.BAD_STATUS: "Bad status code",
        ErrorKind.BAD_BODY: "Unexpected response body",
        None: "",
    }
    return mapping.get(kind, "Request failed")


__all__ = [
    "ErrorKind",
    "HttpError",
    "categorize_exception",
    "error_kind_to_reason",
]
