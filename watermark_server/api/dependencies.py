"""
FastAPI dependencies for dependency injection.
"""

import logging

from fastapi import Request

from ..utils.config import AppConfig, get_config

logger = logging.getLogger(__name__)


async def get_current_config(request: Request) -> AppConfig:
    """
    Get the configuration the application was created with.

    Falls back to the global configuration when the app carries none.

    Returns:
        AppConfig: Current application configuration
    """
    return getattr(request.app.state, "config", None) or get_config()


async def get_client_info(request: Request) -> dict:
    """
    Extract client information from request.

    Returns:
        dict: Client IP, user agent and request line
    """
    return {
        "client_ip": request.client.host if request.client else "unknown",
        "user_agent": request.headers.get("user-agent", "unknown"),
        "method": request.method,
        "url": str(request.url),
    }
