"""
Showcase page endpoint serving the watermarked images.

The route runs both watermark pipelines, embeds the results into the HTML
template and returns the page. Every pipeline failure is answered with a
500 response carrying a static message for that failure kind.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from ..services.watermark_service import WatermarkService, get_watermark_service
from ..watermarks.base import WatermarkError
from .dependencies import get_client_info

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])

# Static client-facing messages per error code
ERROR_MESSAGES = {
    "RESOURCE_NOT_FOUND": "Error loading image",
    "DECODE_FAILED": "Error loading image",
    "FONT_LOAD_FAILED": "Error loading font",
    "TEMPLATE_LOAD_FAILED": "Error loading template",
    "TEMPLATE_EXEC_FAILED": "Error executing template",
}


@router.get("/", response_class=HTMLResponse)
async def serve_images(
    service: WatermarkService = Depends(get_watermark_service),
    client: dict = Depends(get_client_info)
) -> HTMLResponse:
    """
    Render the page with both watermarked images.

    Image decoding and compositing are CPU bound, so the pipelines run in
    the threadpool and never block other requests.

    Args:
        service (WatermarkService): Watermarking service dependency
        client (dict): Requesting client information

    Returns:
        HTMLResponse: ``text/html; charset=utf-8`` page

    Raises:
        HTTPException: 500 with a static message if any step fails
    """
    try:
        page = await run_in_threadpool(service.render_page)

    except WatermarkError as e:
        logger.warning(
            f"Showcase rendering failed for {client['client_ip']}: "
            f"{e.message} (code: {e.error_code})"
        )
        raise HTTPException(
            status_code=500,
            detail={
                "error": e.error_code,
                "message": ERROR_MESSAGES.get(e.error_code, "Error rendering images"),
                "recoverable": e.recoverable
            }
        )

    return HTMLResponse(content=page, media_type="text/html; charset=utf-8")
