"""
Subscription Tasks

A producer runs on its own daemon thread; every result, the error and the
completion are delivered on the UI thread through the dispatcher.

Cancellation is cooperative:
- the worker checks the cancel token after each emission and closes the
  producer iterator;
- deliveries re-check the token on the UI thread, so anything a disposed task
  already queued is dropped.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Callable, Optional

from core.dispatcher import UiDispatcher
from core.media_service import Producer

logger = logging.getLogger("SubscriptionTask")


def new_task_name(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


class SubscriptionTask:
    """Cancellable handle around one producer subscription."""

    def __init__(
        self,
        producer: Producer,
        dispatcher: UiDispatcher,
        on_next: Callable[[Any], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        *,
        name: str = "",
    ):
        self.name = name or new_task_name("task")
        self._producer = producer
        self._dispatcher = dispatcher
        self._on_next = on_next
        self._on_error = on_error
        self._on_complete = on_complete

        self._cancel = threading.Event()
        # Set on the UI thread once complete/error has been delivered
        self._terminated = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "SubscriptionTask":
        self._thread = threading.Thread(
            target=self._run, name=self.name, daemon=True
        )
        self._thread.start()
        return self

    def dispose(self) -> None:
        if not self._cancel.is_set():
            logger.debug(f"[{self.name}] disposed")
        self._cancel.set()

    def is_disposed(self) -> bool:
        """True once cancelled or after the terminal event was delivered."""
        return self._cancel.is_set() or self._terminated

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread. Returns True if it has finished."""
        if not self._thread:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    # ---- worker thread ----
    def _run(self) -> None:
        iterator = None
        try:
            iterator = iter(self._producer())
            for value in iterator:
                if self._cancel.is_set():
                    return
                self._dispatcher.post(lambda v=value: self._deliver_next(v))
                if self._cancel.is_set():
                    return
        except Exception as e:
            if self._cancel.is_set():
                logger.debug(f"[{self.name}] error after dispose ignored: {e}")
                return
            self._dispatcher.post(lambda err=e: self._deliver_error(err))
            return
        finally:
            close = getattr(iterator, "close", None)
            if close and self._cancel.is_set():
                try:
                    close()
                except Exception as e:
                    logger.debug(f"[{self.name}] producer close failed: {e}")

        if not self._cancel.is_set():
            self._dispatcher.post(self._deliver_complete)

    # ---- UI thread ----
    def _deliver_next(self, value: Any) -> None:
        if self.is_disposed():
            return
        try:
            self._on_next(value)
        except Exception as e:
            # A failing consumer terminates the subscription like an upstream error
            self._cancel.set()
            self._deliver_error(e, force=True)

    def _deliver_error(self, error: BaseException, force: bool = False) -> None:
        if self._terminated or (self._cancel.is_set() and not force):
            return
        self._terminated = True
        if self._on_error:
            self._on_error(error)
        else:
            logger.error(f"[{self.name}] unhandled error: {error}")

    def _deliver_complete(self) -> None:
        if self.is_disposed():
            return
        self._terminated = True
        if self._on_complete:
            self._on_complete()
