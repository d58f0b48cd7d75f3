"""
Command-line interface for the Memory Leak Training Lab.

Loads configuration, applies command-line overrides, and serves the HTTP
control surface with uvicorn.
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

import uvicorn

from ..api import create_app
from ..config import get_config, get_config_info, set_config_path
from ..config.validators import LOG_LEVELS
from ..models.config import AppConfig
from ..validation import ValidationError, handle_cli_error, validate_positive_integer

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve a controllable memory leak workload for dump-analysis training."
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml in the project root.",
    )
    parser.add_argument("--host", type=str, help="Interface to bind (overrides server.host).")
    parser.add_argument("--port", type=int, help="Port to listen on (overrides server.port).")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (overrides server.log_level).",
    )
    return parser


def load_app_config(config_path: Optional[Path]) -> AppConfig:
    """
    Load configuration from ``config_path`` or the default location.

    A missing default file falls back to built-in defaults; a missing file
    named explicitly on the command line is an error.
    """
    if config_path is not None:
        set_config_path(config_path)
    elif not Path(get_config_info()["config_path"]).exists():
        logger.warning("No config.toml found, using built-in defaults")
        return AppConfig()
    return get_config()


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Raises:
        SystemExit: On configuration or argument validation failures.
    """
    args = build_parser().parse_args(argv)

    try:
        app_config = load_app_config(args.config)
        if args.host:
            app_config.server.host = args.host
        if args.port is not None:
            app_config.server.port = validate_positive_integer(
                args.port, min_value=1, max_value=65535, field_name="--port"
            )
        if args.log_level:
            app_config.server.log_level = args.log_level
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    server = app_config.server
    logging.getLogger().setLevel(server.log_level)

    logger.info(f"Memory Leak Training Lab listening on http://{server.host}:{server.port}")
    uvicorn.run(
        create_app(app_config),
        host=server.host,
        port=server.port,
        log_level=server.log_level.lower(),
    )


if __name__ == "__main__":
    main_cli()
