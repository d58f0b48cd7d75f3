"""
Configuration validation utilities.

Each section of config.toml is validated into its dataclass. Missing keys
fall back to the dataclass defaults; present keys must be in range.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, LeakConfig, ServerConfig, StatusConfig
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
FILL_MODES = ["random", "pattern"]


def validate_server_config(server_data: Dict[str, Any]) -> ServerConfig:
    """
    Validate and create a ServerConfig from the `[server]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ServerConfig()

    host = server_data.get("host", defaults.host)
    if not isinstance(host, str) or not host.strip():
        raise ValidationError(
            "server.host must be a non-empty string", field_name="server.host", value=host
        )

    port = validate_positive_integer(
        server_data.get("port", defaults.port),
        min_value=1,
        max_value=65535,
        field_name="server.port",
    )

    log_level = validate_enum_choice(
        server_data.get("log_level", defaults.log_level),
        choices=LOG_LEVELS,
        field_name="server.log_level",
        case_sensitive=False,
    )

    return ServerConfig(host=host.strip(), port=port, log_level=log_level)


def validate_leak_config(leak_data: Dict[str, Any]) -> LeakConfig:
    """
    Validate and create a LeakConfig from the `[leak]` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = LeakConfig()

    interval_seconds = validate_positive_float(
        leak_data.get("interval_seconds", defaults.interval_seconds),
        min_value=0.01,
        max_value=3600.0,
        field_name="leak.interval_seconds",
    )

    chunk_mb = validate_positive_integer(
        leak_data.get("chunk_mb", defaults.chunk_mb),
        min_value=1,
        max_value=1024,
        field_name="leak.chunk_mb",
    )

    min_request_mb = validate_positive_integer(
        leak_data.get("min_request_mb", defaults.min_request_mb),
        min_value=1,
        field_name="leak.min_request_mb",
    )

    max_request_mb = validate_positive_integer(
        leak_data.get("max_request_mb", defaults.max_request_mb),
        min_value=min_request_mb,
        field_name="leak.max_request_mb",
    )

    default_request_mb = validate_positive_integer(
        leak_data.get("default_request_mb", defaults.default_request_mb),
        min_value=min_request_mb,
        max_value=max_request_mb,
        field_name="leak.default_request_mb",
    )

    fill_mode = validate_enum_choice(
        leak_data.get("fill_mode", defaults.fill_mode),
        choices=FILL_MODES,
        field_name="leak.fill_mode",
    )

    stop_join_timeout = validate_positive_float(
        leak_data.get("stop_join_timeout", defaults.stop_join_timeout),
        min_value=0.0,
        max_value=60.0,
        field_name="leak.stop_join_timeout",
    )

    return LeakConfig(
        interval_seconds=interval_seconds,
        chunk_mb=chunk_mb,
        default_request_mb=default_request_mb,
        min_request_mb=min_request_mb,
        max_request_mb=max_request_mb,
        fill_mode=fill_mode,
        stop_join_timeout=stop_join_timeout,
    )


def validate_status_config(status_data: Dict[str, Any]) -> StatusConfig:
    """
    Validate and create a StatusConfig from the `[status]` table.

    Raises:
        ValidationError: If validation fails
    """
    high_memory_load_percent = validate_positive_integer(
        status_data.get("high_memory_load_percent", StatusConfig().high_memory_load_percent),
        min_value=1,
        max_value=100,
        field_name="status.high_memory_load_percent",
    )
    return StatusConfig(high_memory_load_percent=high_memory_load_percent)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate a whole parsed config.toml into an AppConfig.

    Raises:
        ValidationError: If any section fails validation
    """
    for section in ("server", "leak", "status"):
        if not isinstance(config_data.get(section, {}), dict):
            raise ValidationError(
                f"[{section}] must be a table", field_name=section, value=config_data[section]
            )

    app_config = AppConfig(
        server=validate_server_config(config_data.get("server", {})),
        leak=validate_leak_config(config_data.get("leak", {})),
        status=validate_status_config(config_data.get("status", {})),
    )
    logger.debug(f"Validated configuration: {app_config}")
    return app_config
