"""
API module for the Watermark Showcase server.

This module provides the FastAPI routes, middleware, and dependencies.
"""

from .images import router as images_router
from .middleware import setup_middleware
from .dependencies import get_current_config, get_client_info

__all__ = [
    "images_router",
    "setup_middleware",
    "get_current_config",
    "get_client_info"
]
