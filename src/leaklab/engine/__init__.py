"""
Leak workload engine.

- AllocationEngine: thread-safe retained buffer set
- LeakScheduler: cancellable periodic growth worker
- StatusReporter: point-in-time memory snapshots
"""

from .allocation import AllocationEngine, request_reclamation
from .fatal import abort_process
from .scheduler import LeakScheduler
from .status import StatusReporter

__all__ = [
    "AllocationEngine",
    "LeakScheduler",
    "StatusReporter",
    "abort_process",
    "request_reclamation",
]
