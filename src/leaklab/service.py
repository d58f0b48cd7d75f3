"""
Leak service: the single process-wide instance behind the HTTP routes.

Owns the allocation engine, the scheduler and the status reporter, and turns
each control operation into the short confirmation text returned to callers.
"""

import logging
from typing import Any, Dict, Optional

from .engine import AllocationEngine, LeakScheduler, StatusReporter, abort_process
from .engine.fatal import FatalHandler
from .models.config import AppConfig
from .models.snapshot import BYTES_PER_MB
from .validation import ValidationError, validate_positive_integer

logger = logging.getLogger(__name__)


def _format_mb(value_bytes: int) -> str:
    return f"{value_bytes / BYTES_PER_MB:.2f}"


class LeakService:
    """
    Control operations of the leak training service.

    Every method is safe to call concurrently from request threads.
    """

    def __init__(self, config: Optional[AppConfig] = None, on_fatal: FatalHandler = abort_process):
        self.config = config or AppConfig()
        leak = self.config.leak
        self._on_fatal = on_fatal

        self.engine = AllocationEngine(fill_mode=leak.fill_mode)
        self.scheduler = LeakScheduler(
            self.engine,
            chunk_bytes=leak.chunk_mb * BYTES_PER_MB,
            interval_seconds=leak.interval_seconds,
            stop_join_timeout=leak.stop_join_timeout,
            on_fatal=on_fatal,
        )
        self.reporter = StatusReporter(
            self.engine,
            self.scheduler,
            high_memory_load_percent=self.config.status.high_memory_load_percent,
        )

    def start_leak(self) -> str:
        if not self.scheduler.start():
            return "Memory leak is already in progress..."

        leak = self.config.leak
        rate = leak.chunk_mb / leak.interval_seconds
        return (
            f"Memory leak started! Generating {leak.chunk_mb}MB every "
            f"{leak.interval_seconds:g} seconds (~{rate:g}MB/sec)..."
        )

    def stop_leak(self) -> str:
        if not self.scheduler.stop():
            return "Memory leak has not started yet"

        total_bytes, count = self.engine.totals()
        return f"Memory leak stopped. Total leaked: {_format_mb(total_bytes)} MB ({count} objects)"

    def leak_once(self, mb: Any = None) -> str:
        """
        Retain one buffer of ``mb`` megabytes.

        Out-of-range or non-numeric sizes are answered with the accepted
        range and leave the retained set untouched.
        """
        leak = self.config.leak
        if mb is None or mb == "":
            mb = leak.default_request_mb

        try:
            size_mb = validate_positive_integer(
                mb,
                min_value=leak.min_request_mb,
                max_value=leak.max_request_mb,
                field_name="mb",
            )
        except ValidationError as e:
            logger.warning(f"Rejected one-shot leak request: {e}")
            return f"Please specify a value between {leak.min_request_mb}-{leak.max_request_mb} MB"

        try:
            total_bytes, count = self.engine.add_buffer(size_mb * BYTES_PER_MB)
        except MemoryError as e:
            self._on_fatal(e, f"one-shot allocation of {size_mb} MB")
            raise

        logger.info(f"Leaked {size_mb} MB on request ({count} buffers retained)")
        return f"Leaked {size_mb} MB. Total leaked: {_format_mb(total_bytes)} MB"

    def clear(self) -> str:
        previous_count, previous_bytes = self.engine.clear_all()
        return f"Cleared {previous_count} objects, released ~{_format_mb(previous_bytes)} MB memory"

    def status(self) -> Dict[str, Any]:
        return self.reporter.get_snapshot().to_dict()

    def shutdown(self) -> None:
        """Stop the scheduler if it is running; retained buffers go with the process."""
        if self.scheduler.stop():
            logger.info("Leak scheduler stopped during shutdown")
