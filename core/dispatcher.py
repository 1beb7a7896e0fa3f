"""
UI Dispatcher

Thread-safe hand-off of callables to the UI thread. Workers ``post()``;
the UI thread ``drain()``s (the app pumps it from an urwid alarm).
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional

logger = logging.getLogger("UiDispatcher")


class UiDispatcher:
    def __init__(self):
        self._queue: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._closed = threading.Event()

    def post(self, callback: Callable[[], None]) -> bool:
        """Queue ``callback`` for the UI thread. Returns False once closed."""
        if self._closed.is_set():
            return False
        self._queue.put(callback)
        return True

    def drain(self, max_items: Optional[int] = None) -> int:
        """Run queued callbacks in FIFO order on the calling thread."""
        processed = 0
        while max_items is None or processed < max_items:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            processed += 1
            try:
                callback()
            except Exception:
                logger.exception("UI callback failed")
        return processed

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        """Stop accepting callbacks and drop anything still queued."""
        self._closed.set()
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    @property
    def closed(self) -> bool:
        return self._closed.is_set()
