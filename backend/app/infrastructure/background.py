"""Detached Tasks — fire-and-forget units that never report back to their spawner.

Invariants:
    - spawn() returns immediately; the caller never awaits the unit
    - A unit's exceptions are logged and discarded inside the unit
    - Units are never cancelled; their own timeouts bound their lifetime
    - spawn_in_thread() is for code with no running event loop (startup):
      the thread is non-daemon, so interpreter exit waits for it

Design Decisions:
    - Pending tasks are held in a set only so the loop keeps a strong reference
      (asyncio keeps weak references to tasks); done tasks remove themselves
"""

import asyncio
import logging
import threading
from typing import Awaitable, Callable, Coroutine

logger = logging.getLogger(__name__)


class DetachedTasks:
    """Registry of in-flight fire-and-forget units for one application."""

    def __init__(self) -> None:
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> frozenset[asyncio.Task]:
        return frozenset(self._pending)

    def spawn(self, unit: Awaitable[None], name: str | None = None) -> asyncio.Task:
        """Schedule a unit on the running loop and return without waiting."""
        task = asyncio.get_running_loop().create_task(
            _guarded(unit, name), name=name,
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def spawn_in_thread(
        self,
        unit_factory: Callable[[], Coroutine[None, None, None]],
        name: str = "detached-unit",
    ) -> threading.Thread:
        """Run a unit on its own thread and event loop (no loop in scope)."""
        thread = threading.Thread(
            target=lambda: asyncio.run(_guarded(unit_factory(), name)),
            name=name,
            daemon=False,
        )
        thread.start()
        return thread

    async def drain(self, timeout: float | None = None) -> None:
        """Wait (without cancelling) for the currently pending units."""
        if self._pending:
            await asyncio.wait(set(self._pending), timeout=timeout)


async def _guarded(unit: Awaitable[None], name: str | None) -> None:
    try:
        await unit
    except Exception:
        logger.error(f"Detached unit {name or '<unnamed>'} failed", exc_info=True)
