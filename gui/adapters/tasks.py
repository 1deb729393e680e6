"""Scheduling of controller coroutines from Qt signal handlers.

Handlers run as tasks on the QtAsyncio event loop. Task references are held
until completion so pending handlers are not garbage collected.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)

_pending: set[asyncio.Future[Any]] = set()


def _report(task: asyncio.Future[Any]) -> None:
    _pending.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("UI handler failed", exc_info=exc)


def spawn(coro: Coroutine[Any, Any, Any]) -> asyncio.Future[Any]:
    """Schedule `coro` on the running loop and return its task."""
    task = asyncio.ensure_future(coro)
    _pending.add(task)
    task.add_done_callback(_report)
    return task
