"""
Execution contexts that completion callbacks are delivered on.

Decodes finish on worker threads; their results are handed to a single
consumer by message passing. `SerialQueue` is drained explicitly by the
thread that owns the document; `EventLoopContext` hands results to an
asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
import queue
import threading
import time
from typing import Any, Callable, Optional, Protocol, Tuple

LOGGER = logging.getLogger(__name__)


class ExecutionContext(Protocol):
    """Somewhere callbacks can be posted from any thread."""

    def post(self, fn: Callable[..., Any], *args: Any) -> None: ...

    def in_context(self) -> bool: ...


class SerialQueue:
    """Single-consumer callback queue drained by its owner thread."""

    def __init__(self, name: str = "main"):
        self.name = name
        self.owner_ident = threading.get_ident()
        self._queue: "queue.Queue[Tuple[Callable[..., Any], Tuple[Any, ...]]]" = (
            queue.Queue()
        )
        self._local = threading.local()

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.put((fn, args))

    def in_context(self) -> bool:
        """True while a callback posted to this queue is running."""
        return bool(getattr(self._local, "running", False))

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def _run(self, fn: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self._local.running = True
        try:
            fn(*args)
        except Exception:
            LOGGER.exception("Callback %r on queue %s raised", fn, self.name)
        finally:
            self._local.running = False

    def run_pending(self) -> int:
        """Run every callback queued so far without blocking."""
        ran = 0
        while True:
            try:
                fn, args = self._queue.get_nowait()
            except queue.Empty:
                return ran
            self._run(fn, args)
            ran += 1

    def drain(self, timeout: Optional[float] = None) -> int:
        """Wait up to ``timeout`` for a callback, then run everything queued."""
        try:
            fn, args = self._queue.get(timeout=timeout)
        except queue.Empty:
            return 0
        self._run(fn, args)
        return 1 + self.run_pending()

    def run_until(self, predicate: Callable[[], bool], timeout: float) -> bool:
        """Drain until ``predicate()`` holds or ``timeout`` seconds pass."""
        deadline = time.monotonic() + timeout
        while not predicate():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self.drain(timeout=min(remaining, 0.05))
        return True


class EventLoopContext:
    """Deliver callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        self._loop.call_soon_threadsafe(fn, *args)

    def in_context(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False
