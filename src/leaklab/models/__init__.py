"""
Data models for the leak training service.

Configuration Models:
- Server, leak workload and status reporter settings

Runtime Models:
- MemorySnapshot returned by the status endpoint
"""

from .config import AppConfig, LeakConfig, ServerConfig, StatusConfig
from .snapshot import BYTES_PER_MB, MemorySnapshot, bytes_to_mb

__all__ = [
    # Configuration
    "AppConfig",
    "LeakConfig",
    "ServerConfig",
    "StatusConfig",
    # Runtime
    "BYTES_PER_MB",
    "MemorySnapshot",
    "bytes_to_mb",
]
