"""
Background scheduler that grows the allocation engine at a fixed cadence.

The scheduler has two states, idle and running. Each run owns its own
threading.Event as the cancellation handle; the worker thread waits on that
event between iterations, so a stop request wakes it immediately instead of
after a full interval.
"""

import logging
import threading
import time
from typing import Optional

from .allocation import AllocationEngine
from .fatal import FatalHandler, abort_process

logger = logging.getLogger(__name__)


class LeakScheduler:
    """
    Cancellable periodic leak worker.

    Attributes:
        engine: The allocation engine to grow.
        chunk_bytes: Size of the buffer retained per iteration.
        interval_seconds: Wait between iterations.
        stop_join_timeout: How long stop() waits for the worker thread to exit.
        _state_lock: Guards the stop event / thread pair.
        _stop_event: Cancellation handle of the current run, None while idle.
        _thread: Worker thread of the current run, None while idle.
    """

    def __init__(
        self,
        engine: AllocationEngine,
        chunk_bytes: int,
        interval_seconds: float,
        stop_join_timeout: float = 5.0,
        on_fatal: FatalHandler = abort_process,
    ):
        if not chunk_bytes > 0:
            raise ValueError(f"chunk_bytes must be positive, got {chunk_bytes}")
        if not interval_seconds > 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.engine = engine
        self.chunk_bytes = chunk_bytes
        self.interval_seconds = interval_seconds
        self.stop_join_timeout = stop_join_timeout
        self._on_fatal = on_fatal

        self._state_lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._start_time: Optional[float] = None

    @property
    def is_running(self) -> bool:
        with self._state_lock:
            return self._stop_event is not None

    def start(self) -> bool:
        """
        Start the worker thread if idle.

        Returns:
            True if a new run was started, False if one was already running.
        """
        with self._state_lock:
            if self._stop_event is not None:
                logger.debug("Leak scheduler already running, start ignored")
                return False

            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                name="LeakScheduler",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            self._start_time = time.monotonic()
            thread.start()

        logger.info(
            f"Leak scheduler started: {self.chunk_bytes} bytes every {self.interval_seconds}s"
        )
        return True

    def stop(self) -> bool:
        """
        Signal the current run to finish and wait briefly for the thread.

        Returns:
            True if a running scheduler was stopped, False if it was idle.
        """
        with self._state_lock:
            if self._stop_event is None:
                logger.debug("Leak scheduler not running, stop ignored")
                return False

            stop_event, thread = self._stop_event, self._thread
            self._stop_event = None
            self._thread = None
            stop_event.set()

            if self._start_time is not None:
                runtime = time.monotonic() - self._start_time
                logger.info(f"Leak scheduler ran for {runtime:.2f} seconds")
            self._start_time = None

        # Join outside the lock so status queries are never held up.
        if thread is not None and thread is not threading.current_thread() and self.stop_join_timeout > 0:
            thread.join(self.stop_join_timeout)
            if thread.is_alive():
                logger.warning(
                    f"Leak scheduler thread still busy after {self.stop_join_timeout}s; "
                    "it will exit after its current allocation"
                )
        return True

    def _run(self, stop_event: threading.Event) -> None:
        iterations = 0
        while not stop_event.is_set():
            try:
                total_bytes, count = self.engine.add_buffer(self.chunk_bytes)
            except Exception as e:
                self._on_fatal(e, "leak scheduler iteration")
                self._finish_failed_run(stop_event)
                return

            iterations += 1
            logger.debug(f"Leak iteration {iterations}: {count} buffers, {total_bytes} bytes retained")

            if stop_event.wait(self.interval_seconds):
                break

        logger.info(f"Leak scheduler loop exited after {iterations} iterations")

    def _finish_failed_run(self, stop_event: threading.Event) -> None:
        """Return to idle after a fatal iteration, unless a newer run has taken over."""
        with self._state_lock:
            if self._stop_event is not stop_event:
                return
            stop_event.set()
            self._stop_event = None
            self._thread = None
            self._start_time = None
        logger.warning("Leak scheduler stopped after a failed iteration")
