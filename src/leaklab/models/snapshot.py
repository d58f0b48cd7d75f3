"""
Point-in-time memory statistics.

A MemorySnapshot combines the retained-buffer figures of the allocation
engine, the scheduler's leak-active flag and the interpreter/OS memory
figures. It is produced fresh for every status query and never cached.
"""

from dataclasses import dataclass
from typing import Any, Dict

BYTES_PER_MB = 1024 * 1024


def bytes_to_mb(value: int) -> float:
    """Convert a byte count to megabytes rounded to two decimals."""
    return round(value / BYTES_PER_MB, 2)


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Read-only view of memory and leak state at the instant of computation.

    Attributes:
        retained_bytes: Sum of the lengths of all retained buffers.
        buffer_count: Number of retained buffers.
        is_leaking: Whether the periodic leak scheduler is running.
        heap_size_bytes: Resident memory of this process.
        gen0_collections: Collections run by the interpreter's youngest generation.
        gen1_collections: Collections run by the middle generation.
        gen2_collections: Collections run by the oldest generation.
        high_memory_load_threshold_bytes: Memory level considered high load.
        total_available_memory_bytes: Physical memory or cgroup limit, whichever is lower.
    """

    retained_bytes: int
    buffer_count: int
    is_leaking: bool
    heap_size_bytes: int
    gen0_collections: int
    gen1_collections: int
    gen2_collections: int
    high_memory_load_threshold_bytes: int
    total_available_memory_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        """Render the snapshot with the JSON field names the dashboard polls."""
        return {
            "leakedMemoryMB": bytes_to_mb(self.retained_bytes),
            "objectCount": self.buffer_count,
            "isLeaking": self.is_leaking,
            "gcHeapSizeMB": bytes_to_mb(self.heap_size_bytes),
            "gen0Collections": self.gen0_collections,
            "gen1Collections": self.gen1_collections,
            "gen2Collections": self.gen2_collections,
            "highMemoryLoadThresholdMB": bytes_to_mb(self.high_memory_load_threshold_bytes),
            "totalAvailableMemoryMB": bytes_to_mb(self.total_available_memory_bytes),
        }
