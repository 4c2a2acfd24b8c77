# stylejit/runtime/scheduler.py
"""
Coalesce class discoveries into one injection per rendering frame.

    idle ──add()──▶ pending ──frame──▶ flushing ──▶ idle

`add()` never injects synchronously; the first call while idle registers a
single frame callback on the running loop, later calls only grow the pending
set.  `flush()` drains the set into the injector.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from stylejit.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FRAME_INTERVAL = 1 / 60

Injector = Callable[[Iterable[str]], None]


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    FLUSHING = "flushing"


class InjectionScheduler:
    def __init__(
        self,
        injector: Injector,
        *,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._injector = injector
        self._frame_interval = max(0.0, frame_interval)
        self._loop = loop
        self._pending: Dict[str, None] = {}  # insertion-ordered set
        self._handle: Optional[asyncio.Handle] = None
        self.state = SchedulerState.IDLE

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def add(self, classes: Iterable[str]) -> None:
        """Queue *classes*; registers exactly one frame callback per cycle."""
        for c in classes:
            if c:
                self._pending[c] = None
        if not self._pending or self._handle is not None:
            return
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._frame_interval, self.flush)
        self.state = SchedulerState.PENDING

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.cancel()  # harmless when it is the running callback
            self._handle = None
        if not self._pending:
            self.state = SchedulerState.IDLE
            return
        self.state = SchedulerState.FLUSHING
        batch, self._pending = list(self._pending), {}
        logger.debug("Flushing %d pending classes", len(batch))
        try:
            self._injector(batch)
        finally:
            self.state = SchedulerState.IDLE

    def cancel(self) -> None:
        """Teardown only: drop the outstanding frame and pending classes."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending.clear()
        self.state = SchedulerState.IDLE
