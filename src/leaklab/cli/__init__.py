"""
Command-line interface for the leaklab package.

This module provides the main CLI entry point for the training service.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
