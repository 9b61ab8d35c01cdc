# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport defaults for taggedhttp, read from the environment."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"taggedhttp/{__version__}"


def _optional_float_env(name: str, default: float | None) -> float | None:
    try:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        parsed = float(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP transport defaults.

    `timeout` applies only to requests whose RequestConfig leaves the timeout unset;
    `None` means no timeout at all.
    """

    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_optional_float_env("TAGGEDHTTP_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("TAGGEDHTTP_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("TAGGEDHTTP_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("TAGGEDHTTP_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
