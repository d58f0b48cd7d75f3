"""
Status reporter producing MemorySnapshot values.

Combines the allocation engine's totals and the scheduler flag with figures
from the interpreter's collector (gc.get_stats) and the operating system
(psutil, plus the cgroup memory limit when running in a container).
"""

import gc
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import psutil

from ..models.snapshot import MemorySnapshot
from .allocation import AllocationEngine
from .scheduler import LeakScheduler

logger = logging.getLogger(__name__)

CGROUP_MEMORY_LIMIT_FILES = (
    Path("/sys/fs/cgroup/memory.max"),  # cgroup v2
    Path("/sys/fs/cgroup/memory/memory.limit_in_bytes"),  # cgroup v1
)


def read_cgroup_memory_limit(candidates: Iterable[Path] = CGROUP_MEMORY_LIMIT_FILES) -> Optional[int]:
    """
    Return the container memory limit in bytes, or None when unlimited or absent.

    The first readable file wins. cgroup v2 reports "max" for no limit.
    """
    for path in candidates:
        try:
            raw = path.read_text().strip()
        except OSError:
            continue
        if raw == "max":
            return None
        try:
            return int(raw)
        except ValueError:
            logger.debug(f"Ignoring unparsable cgroup limit in {path}: {raw!r}")
            return None
    return None


def get_total_available_memory(cgroup_limit: Optional[int] = None) -> int:
    """Physical memory, capped by the cgroup limit when one is set."""
    total = psutil.virtual_memory().total
    if cgroup_limit is not None and 0 < cgroup_limit < total:
        return cgroup_limit
    return total


def get_collection_counts() -> List[int]:
    """Per-generation collection counts of the cyclic garbage collector."""
    counts = [generation.get("collections", 0) for generation in gc.get_stats()]
    return (counts + [0, 0, 0])[:3]


class StatusReporter:
    """
    Builds a fresh MemorySnapshot for every query.

    Never takes the scheduler's locks for longer than a flag read, so it
    does not wait on an in-progress allocation.
    """

    def __init__(
        self,
        engine: AllocationEngine,
        scheduler: LeakScheduler,
        high_memory_load_percent: int = 90,
        process: Optional[psutil.Process] = None,
    ):
        self.engine = engine
        self.scheduler = scheduler
        self.high_memory_load_percent = high_memory_load_percent
        self._process = process or psutil.Process()

    def get_snapshot(self) -> MemorySnapshot:
        retained_bytes, buffer_count = self.engine.totals()
        gen0, gen1, gen2 = get_collection_counts()
        total_available = get_total_available_memory(read_cgroup_memory_limit())

        return MemorySnapshot(
            retained_bytes=retained_bytes,
            buffer_count=buffer_count,
            is_leaking=self.scheduler.is_running,
            heap_size_bytes=self._process.memory_info().rss,
            gen0_collections=gen0,
            gen1_collections=gen1,
            gen2_collections=gen2,
            high_memory_load_threshold_bytes=total_available * self.high_memory_load_percent // 100,
            total_available_memory_bytes=total_available,
        )
