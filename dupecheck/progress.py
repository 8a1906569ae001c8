"""
Progress reporting for Image Duplicate Checker.

Progress messages are observational: they are handed to a background relay
thread through a bounded queue so a slow receiver never holds up a scan.
When the queue is full, new messages are dropped.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional

from .config import PROGRESS_QUEUE_SIZE, PROGRESS_FLUSH_TIMEOUT

_logger = logging.getLogger(__name__)

ProgressSink = Callable[[str], None]

_STOP = object()


class ProgressReporter:
    """
    Fire-and-forget relay from a scan to a progress sink.

    ``close()`` gives the sink a short grace period to catch up, then
    discards whatever is still pending. Once ``close()`` returns the sink is
    never called again.

    Usage:
        with ProgressReporter(print) as progress:
            progress.report("Scanning...")
    """

    def __init__(self, sink: Optional[ProgressSink] = None, maxsize: int = PROGRESS_QUEUE_SIZE):
        self.sink = sink
        self.dropped = 0
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._thread: Optional[threading.Thread] = None
        self._start_lock = threading.Lock()
        self._drop_lock = threading.Lock()
        # Held for the duration of every sink call
        self._sink_lock = threading.Lock()
        self._stopped = threading.Event()
        self._closed = False

    def __call__(self, message: str) -> None:
        self.report(message)

    def __enter__(self) -> 'ProgressReporter':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_started(self) -> None:
        with self._start_lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._relay,
                    name='dupecheck-progress',
                    daemon=True,
                )
                self._thread.start()

    def _count_dropped(self, count: int = 1) -> None:
        with self._drop_lock:
            self.dropped += count

    def _relay(self) -> None:
        while True:
            message = self._queue.get()
            if message is _STOP:
                return
            with self._sink_lock:
                if self._stopped.is_set():
                    self._count_dropped()
                    return
                try:
                    self.sink(message)
                except Exception as e:
                    _logger.warning(f"Progress sink failed on {message!r}: {e}")

    def report(self, message: str) -> None:
        """Queue a message for the sink without waiting for it."""
        if self.sink is None or self._closed:
            return
        self._ensure_started()
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            self._count_dropped()

    def _discard_pending(self) -> None:
        discarded = 0
        while True:
            try:
                message = self._queue.get_nowait()
            except queue.Empty:
                break
            if message is not _STOP:
                discarded += 1
        if discarded:
            self._count_dropped(discarded)

    def close(self, timeout: float = PROGRESS_FLUSH_TIMEOUT) -> None:
        """
        Stop the relay thread.

        Pending messages are delivered for at most ``timeout`` seconds; the
        rest are discarded and counted in ``dropped``. Never blocks on a
        full queue.
        """
        if self._closed:
            return
        self._closed = True
        if self._thread is None:
            return

        try:
            self._queue.put_nowait(_STOP)
        except queue.Full:
            pass
        self._thread.join(timeout)

        self._stopped.set()
        # Wait out a sink call already in progress; no new one can start
        if self._sink_lock.acquire(timeout=timeout):
            self._sink_lock.release()
        else:
            _logger.debug("Progress sink still busy at close, abandoning relay thread")

        self._discard_pending()
        # Wake the relay if it is waiting on an empty queue
        try:
            self._queue.put_nowait(_STOP)
        except queue.Full:
            pass

        if self.dropped:
            _logger.debug(f"Dropped {self.dropped:,} progress messages")


__all__ = ['ProgressReporter', 'ProgressSink']
