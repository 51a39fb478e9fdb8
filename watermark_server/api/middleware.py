"""
FastAPI middleware for request logging, security headers and error handling.
"""

import time
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, Response, HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ..utils.config import AppConfig, get_config

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging and timing.

    Adds an ``X-Process-Time`` header with the handling time in seconds.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.time()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        url = str(request.url)

        logger.info(f"Request: {method} {url} from {client_ip}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} for {method} {url} "
            f"in {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)

        return response


class SecurityMiddleware(BaseHTTPMiddleware):
    """
    Middleware adding security headers to every response.

    The content security policy allows ``data:`` images because the showcase
    page embeds its images inline.
    """

    SECURITY_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'",
    }

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        for header, value in self.SECURITY_HEADERS.items():
            response.headers[header] = value

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for global error handling and standardized error responses.

    Unhandled exceptions become a 500 response scoped to the failing request;
    the exception detail is only returned in debug mode.
    """

    def __init__(self, app, config: Optional[AppConfig] = None):
        super().__init__(app)
        self.config = config or get_config()

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)

        except HTTPException:
            raise

        except Exception as e:
            logger.error(f"Unhandled exception: {e}", exc_info=True)

            error_message = str(e) if self.config.api.debug else "An internal error occurred"

            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "message": error_message,
                    "timestamp": _timestamp()
                }
            )


def setup_middleware(app, config: Optional[AppConfig] = None):
    """
    Set up all middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        config (Optional[AppConfig]): Configuration passed to middleware
    """
    # Last added is executed first

    # Logging (innermost, closest to endpoints)
    app.add_middleware(LoggingMiddleware)

    # Security headers
    app.add_middleware(SecurityMiddleware)

    # Error handling (outermost)
    app.add_middleware(ErrorHandlingMiddleware, config=config)

    logger.info("All middleware configured successfully")
