"""
Allocation engine holding the retained buffer set.

This module provides the AllocationEngine class, which allocates byte buffers
filled with non-trivial content and keeps them reachable so the interpreter
can never reclaim them. Buffers are only released all at once by clear_all().
"""

import gc
import logging
import os
import threading
from typing import Callable, Dict, List, Tuple, Union

logger = logging.getLogger(__name__)

_PATTERN_BLOCK = bytes(range(256)) * 4096


Buffer = Union[bytes, bytearray]


def _fill_random(size_bytes: int) -> Buffer:
    return os.urandom(size_bytes)


def _fill_pattern(size_bytes: int) -> Buffer:
    # Always a fresh bytearray; bytes arithmetic may hand back the shared block itself.
    buffer = bytearray(size_bytes)
    block_size = len(_PATTERN_BLOCK)
    for offset in range(0, size_bytes, block_size):
        length = min(block_size, size_bytes - offset)
        buffer[offset:offset + length] = _PATTERN_BLOCK[:length]
    return buffer


FILLERS: Dict[str, Callable[[int], Buffer]] = {
    "random": _fill_random,
    "pattern": _fill_pattern,
}


def request_reclamation() -> None:
    """Ask the interpreter to run a full collection (twice, so finalizer garbage goes too)."""
    gc.collect()
    gc.collect()


class AllocationEngine:
    """
    Thread-safe, append-only set of retained byte buffers.

    Buffers are filled outside the lock so a large allocation does not stall
    status queries; the append and the running byte total are updated together
    under the lock, so readers never see a count and total that disagree.

    Attributes:
        fill_mode: Name of the content filler, "random" or "pattern".
        _buffers: The retained buffers in insertion order.
        _total_bytes: Sum of the lengths of ``_buffers``.
        _lock: Guards ``_buffers`` and ``_total_bytes``.
    """

    def __init__(self, fill_mode: str = "random"):
        if fill_mode not in FILLERS:
            raise ValueError(f"Invalid fill mode: {fill_mode}")
        self.fill_mode = fill_mode
        self._fill = FILLERS[fill_mode]
        self._buffers: List[Buffer] = []
        self._total_bytes = 0
        self._lock = threading.Lock()

    def add_buffer(self, size_bytes: int) -> Tuple[int, int]:
        """
        Allocate, fill and retain a buffer of ``size_bytes``.

        Args:
            size_bytes: Buffer length, must be a positive integer.

        Returns:
            Tuple of (new total retained bytes, new buffer count).

        Raises:
            ValueError: If size_bytes is not a positive integer.
            MemoryError: If the allocation cannot be satisfied.
        """
        if isinstance(size_bytes, bool) or not isinstance(size_bytes, int) or size_bytes <= 0:
            raise ValueError(f"Buffer size must be a positive integer, got {size_bytes!r}")

        buffer = self._fill(size_bytes)

        with self._lock:
            self._buffers.append(buffer)
            self._total_bytes += len(buffer)
            return self._total_bytes, len(self._buffers)

    def clear_all(self) -> Tuple[int, int]:
        """
        Drop every retained buffer and request reclamation.

        Returns:
            Tuple of (previous buffer count, previous total bytes).
        """
        with self._lock:
            released = self._buffers
            previous_total = self._total_bytes
            self._buffers = []
            self._total_bytes = 0

        previous_count = len(released)
        del released
        request_reclamation()

        logger.info(f"Released {previous_count} buffers ({previous_total} bytes)")
        return previous_count, previous_total

    def totals(self) -> Tuple[int, int]:
        """Return (total retained bytes, buffer count) as one consistent pair."""
        with self._lock:
            return self._total_bytes, len(self._buffers)

    def total_retained_bytes(self) -> int:
        with self._lock:
            return self._total_bytes

    def buffer_count(self) -> int:
        with self._lock:
            return len(self._buffers)
