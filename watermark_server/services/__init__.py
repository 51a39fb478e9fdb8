"""
Services module for the Watermark Showcase server.

This module provides the watermarking pipelines and page rendering.
"""

from .page_renderer import PageRenderer
from .watermark_service import ShowcaseImages, WatermarkService, get_watermark_service

__all__ = [
    "PageRenderer",
    "ShowcaseImages",
    "WatermarkService",
    "get_watermark_service"
]
