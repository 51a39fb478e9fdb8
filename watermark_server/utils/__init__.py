"""
Utility functions and helpers module.

This module provides configuration management for the server.
"""

from .config import get_config, reload_config, AppConfig

__all__ = [
    "get_config",
    "reload_config",
    "AppConfig",
]
