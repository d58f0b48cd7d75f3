"""
HTTP layer for the leak training service.
"""

from .app import create_app
from .routes import get_leak_service, router

__all__ = [
    "create_app",
    "get_leak_service",
    "router",
]
