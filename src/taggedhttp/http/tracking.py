# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tracker bookkeeping shared by HttpClient implementations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class RequestTracker:
    """
    Maps tracker tokens to the task running the request.

    Registering a token that already has a live request cancels the older one, so at most
    one request per token is in flight.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}

    @contextmanager
    def track(self, tracker: str | None) -> Iterator[None]:
        task = asyncio.current_task() if tracker is not None else None
        if tracker is None or task is None:
            yield
            return

        previous = self._tasks.get(tracker)
        if previous is not None and previous is not task and not previous.done():
            logger.debug("Cancelling superseded request for tracker %r", tracker)
            previous.cancel()
        self._tasks[tracker] = task
        try:
            yield
        finally:
            if self._tasks.get(tracker) is task:
                del self._tasks[tracker]

    def cancel(self, tracker: str) -> bool:
        """Cancel the in-flight request registered under `tracker`; False if there is none."""
        task = self._tasks.pop(tracker, None)
        if task is None or task.done():
            return False
        logger.debug("Cancelling request for tracker %r", tracker)
        return task.cancel()

    def __contains__(self, tracker: object) -> bool:
        return tracker in self._tasks


__all__ = ["RequestTracker"]
