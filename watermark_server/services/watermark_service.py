"""
Watermarking service producing the showcase images.

This module wires configuration, resource loading, the two watermark
compositors, image encoding, and page rendering together. Every call builds
fresh watermark models and re-reads all images and fonts; no decoded data is
shared between requests. The render counters are the only state kept across
requests and are updated under a lock.
"""

import time
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.config import AppConfig, get_config
from ..watermarks.base import (
    GraphicalWatermark,
    TextWatermark,
    WatermarkError,
    WatermarkStyle,
)
from ..watermarks.encoding import encode_image_to_base64
from ..watermarks.loader import FileSystemResourceReader, ResourceReader, load_image
from .page_renderer import PageRenderer

logger = logging.getLogger(__name__)


@dataclass
class ShowcaseImages:
    """
    Base64 encoded results of both watermark pipelines.

    Attributes:
        image1 (str): Base image with the graphical watermark
        image2 (str): Base image with the text watermark
        image_format (str): Encoding used for both images
        processing_time_ms (int): Time spent producing both images
    """
    image1: str
    image2: str
    image_format: str
    processing_time_ms: int = 0


class WatermarkService:
    """
    Service class running the graphical and text watermark pipelines.

    Both pipelines run sequentially; either both images are produced or the
    first failure is raised to the caller.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        reader: Optional[ResourceReader] = None,
        renderer: Optional[PageRenderer] = None
    ):
        """
        Initialize the watermarking service.

        Args:
            config (Optional[AppConfig]): Application configuration
            reader (Optional[ResourceReader]): Source of images and fonts
            renderer (Optional[PageRenderer]): Page template renderer
        """
        self.config = config or get_config()
        self.reader = reader or FileSystemResourceReader(self.config.resources.resource_root)
        self.renderer = renderer or PageRenderer.from_directory(
            self.config.template.template_dir,
            self.config.template.template_name,
            self.config.template.output_format
        )

        # Rendering statistics, shared by concurrent requests
        self._stats_lock = threading.Lock()
        self.total_renders = 0
        self.successful_renders = 0
        self.failed_renders = 0

        logger.info("Watermark service initialized")

    def build_graphical_watermark(self) -> GraphicalWatermark:
        settings = self.config.graphical_watermark
        return GraphicalWatermark(
            style=WatermarkStyle(opacity=settings.opacity),
            path=settings.path,
            scale=settings.scale
        )

    def build_text_watermark(self) -> TextWatermark:
        settings = self.config.text_watermark
        return TextWatermark(
            style=WatermarkStyle(
                opacity=settings.opacity,
                color=tuple(settings.color),
                font=settings.font,
                size=settings.size,
                rotation=settings.rotation
            ),
            text=settings.text
        )

    def watermark_images(self) -> ShowcaseImages:
        """
        Produce both watermarked images as base64 strings.

        Returns:
            ShowcaseImages: Encoded images and timing information

        Raises:
            WatermarkError: If any image, font or watermark fails to load
        """
        start_time = time.time()
        output_format = self.config.template.output_format

        graphical = self.build_graphical_watermark()
        base_image1 = load_image(self.reader, self.config.resources.graphical_base_image)
        watermarked1 = graphical.apply_to_image(base_image1, self.reader)

        text = self.build_text_watermark()
        base_image2 = load_image(self.reader, self.config.resources.text_base_image)
        watermarked2 = text.create_watermarked_image(base_image2, self.reader)

        images = ShowcaseImages(
            image1=encode_image_to_base64(watermarked1, output_format),
            image2=encode_image_to_base64(watermarked2, output_format),
            image_format=output_format,
            processing_time_ms=int((time.time() - start_time) * 1000)
        )

        logger.info(f"Watermarked images produced in {images.processing_time_ms}ms")
        return images

    def render_page(self) -> str:
        """
        Produce both images and render them into the page template.

        Each call counts as one render; it is successful only once the page
        has been rendered.

        Returns:
            str: Complete HTML document

        Raises:
            WatermarkError: If image processing or template rendering fails
        """
        with self._stats_lock:
            self.total_renders += 1

        try:
            images = self.watermark_images()
            page = self.renderer.render(images.image1, images.image2)

        except WatermarkError as e:
            with self._stats_lock:
                self.failed_renders += 1
            logger.error(f"Page rendering failed: {e.message} (code: {e.error_code})")
            raise

        with self._stats_lock:
            self.successful_renders += 1
        return page

    def get_service_stats(self) -> Dict[str, Any]:
        """
        Get rendering statistics and active watermark settings.

        Returns:
            Dict[str, Any]: Counters and configuration summary
        """
        with self._stats_lock:
            total = self.total_renders
            successful = self.successful_renders
            failed = self.failed_renders

        return {
            "render_stats": {
                "total_renders": total,
                "successful_renders": successful,
                "failed_renders": failed,
                "success_rate": successful / max(1, total)
            },
            "output_format": self.config.template.output_format,
            "watermarks": self.config.get_watermark_settings()
        }


# Global service instance
_watermark_service: Optional[WatermarkService] = None


def get_watermark_service() -> WatermarkService:
    """
    Get the global watermark service instance.

    Returns:
        WatermarkService: Lazily created service bound to the global config
    """
    global _watermark_service
    if _watermark_service is None:
        _watermark_service = WatermarkService()
    return _watermark_service
