"""
LeakLab: Memory Leak Training Lab.

A small HTTP-controlled service that allocates and retains memory on demand,
so operators can practise capturing and analysing memory dumps of a process
under real memory pressure.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Configuration dataclasses and the MemorySnapshot value
- validation: Input validation and error handling
- engine: Allocation engine, leak scheduler and status reporter
- service: The process-wide LeakService used by the HTTP layer
- api: FastAPI application and routes
- cli: Command-line entry point

Usage:
    From command line:
        leaklab --config conf/config.toml

    Programmatically:
        from leaklab import create_app, get_config
        app = create_app(get_config())
"""

from .api import create_app
from .config import get_config, clear_config_cache, set_config_path
from .engine import AllocationEngine, LeakScheduler, StatusReporter
from .models import AppConfig, LeakConfig, MemorySnapshot, ServerConfig, StatusConfig
from .service import LeakService
from .validation import ValidationError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "create_app",
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "LeakService",
    # Engine
    "AllocationEngine",
    "LeakScheduler",
    "StatusReporter",
    # Models
    "AppConfig",
    "LeakConfig",
    "MemorySnapshot",
    "ServerConfig",
    "StatusConfig",
    # Validation
    "ValidationError",
]
