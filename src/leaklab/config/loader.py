"""
Reading config.toml from disk.

Parses the file and reports settings the service does not understand. A
misspelt key would otherwise fall back to its default without any sign, so
every unknown section or key is logged as a warning before validation.
"""

import logging
import tomllib
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List

from ..models.config import AppConfig
from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)


def known_settings() -> Dict[str, List[str]]:
    """Map each config.toml section to the keys its dataclass accepts."""
    return {
        section.name: [setting.name for setting in fields(section.type)]
        for section in fields(AppConfig)
    }


def find_unknown_settings(config_data: Dict[str, Any]) -> List[str]:
    """
    List the dotted names of sections and keys that no dataclass declares.

    Sections that are not tables are left to validation.
    """
    sections = known_settings()
    unknown = []
    for section_name, section_data in config_data.items():
        if section_name not in sections:
            unknown.append(section_name)
            continue
        if not isinstance(section_data, dict):
            continue
        unknown.extend(
            f"{section_name}.{key}" for key in section_data if key not in sections[section_name]
        )
    return unknown


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Parse config.toml and warn about unrecognised settings.

    Returns:
        The parsed TOML tables

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Reading configuration from {config_path}")
    try:
        config_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        handle_config_error(e, f"parsing {config_path.name}", severity=ErrorSeverity.CRITICAL, logger=logger)
        raise

    for name in find_unknown_settings(config_data):
        logger.warning(f"Ignoring unknown setting '{name}' in {config_path}")
    return config_data
