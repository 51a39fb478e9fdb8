"""
Main application entry point for the Watermark Showcase server.

This module builds the FastAPI application, configures middleware and
routes, and runs the server with uvicorn when executed directly.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .api.dependencies import get_current_config
from .api.images import router as images_router
from .api.middleware import setup_middleware
from .services.watermark_service import WatermarkService, get_watermark_service
from .utils.config import AppConfig, get_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    service: Optional[WatermarkService] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config (Optional[AppConfig]): Configuration, the global one by default
        service (Optional[WatermarkService]): Service used by the page route;
            built from ``config`` when a config is given

    Returns:
        FastAPI: Configured application
    """
    config = config or (service.config if service else get_config())

    app = FastAPI(
        title="Watermark Showcase",
        description="Serve images with graphical and text watermarks",
        version="0.1.0",
        debug=config.api.debug,
        docs_url="/docs" if config.api.debug else None,
        redoc_url="/redoc" if config.api.debug else None
    )
    app.state.config = config

    if service is None and config is not get_config():
        service = WatermarkService(config)
    if service is not None:
        app.dependency_overrides[get_watermark_service] = lambda: service

    setup_middleware(app, config)
    app.include_router(images_router)

    @app.get("/health")
    async def health_check(
        current_config: AppConfig = Depends(get_current_config),
        watermark_service: WatermarkService = Depends(get_watermark_service)
    ):
        """
        Health check endpoint for monitoring and deployment.

        Returns:
            dict: Application health status and rendering statistics
        """
        return {
            "status": "healthy",
            "environment": current_config.environment,
            "output_format": current_config.template.output_format,
            "services": watermark_service.get_service_stats()["render_stats"]
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Return a standardized 500 response for unhandled exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if config.api.debug else "An unexpected error occurred"
            }
        )

    @app.on_event("startup")
    async def startup_event():
        """Application startup event handler."""
        logger.info("=" * 60)
        logger.info("Watermark Showcase Starting Up")
        logger.info("=" * 60)
        logger.info(f"Environment: {config.environment}")
        logger.info(f"Debug mode: {config.api.debug}")
        logger.info(f"Resource root: {config.resources.resource_root}")
        logger.info(f"Base images: {', '.join(config.resources.base_image_paths)}")
        logger.info(f"Output format: {config.template.output_format}")
        logger.info("=" * 60)

    return app


app = create_app()


def run():
    """Run the server with uvicorn on the configured host and port."""
    import uvicorn

    config = get_config()
    logging.getLogger().setLevel(config.log_level)

    logger.info(f"Starting server on :{config.api.port}...")

    uvicorn.run(
        "watermark_server.main:app",
        host=config.api.host,
        port=config.api.port,
        reload=config.api.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    run()
