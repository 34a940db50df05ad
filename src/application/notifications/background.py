from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from functools import partial
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundNotifier:
    """
    Runs side effects (emails) as detached asyncio tasks.
    Callers never await the result; failures end up in the log only.
    """

    def __init__(self) -> None:
        # Strong references so pending tasks are not garbage collected
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, description: str) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(partial(self._on_done, description))
        return task

    def _on_done(self, description: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Background task cancelled: %s", description)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task failed: %s", description, exc_info=exc)
            return
        logger.info("Background task done: %s", description)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
