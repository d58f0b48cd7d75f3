"""
Configuration data models.

This module contains the configuration structures for the HTTP server, the
leak workload and the status reporter, loaded from `config.toml`.
"""

from dataclasses import dataclass, field


@dataclass
class ServerConfig:
    """
    Settings for the HTTP control surface, loaded from `[server]`.
    """

    host: str = "0.0.0.0"
    port: int = 8080
    # One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
    log_level: str = "INFO"


@dataclass
class LeakConfig:
    """
    Settings for the allocation workload, loaded from `[leak]`.
    """

    # Pause between scheduler iterations.
    interval_seconds: float = 2.0
    # Size of the buffer retained on each scheduler iteration.
    chunk_mb: int = 10
    # Size used by /leak when no `mb` query parameter is given.
    default_request_mb: int = 10
    # Accepted range for one-shot /leak requests (inclusive).
    min_request_mb: int = 1
    max_request_mb: int = 500
    # "random" fills buffers from os.urandom, "pattern" with a repeating byte ramp.
    fill_mode: str = "random"
    # How long /stop waits for the scheduler thread to exit.
    stop_join_timeout: float = 5.0


@dataclass
class StatusConfig:
    """
    Settings for the status reporter, loaded from `[status]`.
    """

    # Share of total available memory reported as the high-memory threshold.
    high_memory_load_percent: int = 90


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    server: ServerConfig = field(default_factory=ServerConfig)
    leak: LeakConfig = field(default_factory=LeakConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
