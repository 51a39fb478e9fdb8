"""
Image watermarking primitives.

This package provides the watermark models, resource loading, the graphical
and text compositors, and image encoding helpers.
"""

from .base import (
    WatermarkStyle,
    GraphicalWatermark,
    TextWatermark,
    WatermarkError,
    ResourceNotFoundError,
    ImageDecodeError,
    FontLoadError,
    TemplateLoadError,
    TemplateRenderError,
)
from .loader import (
    ResourceReader,
    FileSystemResourceReader,
    InMemoryResourceReader,
    load_image,
    load_font,
)
from .graphical import apply_graphical_watermark, center_offset
from .text import render_text_layer, apply_text_watermark
from .encoding import ImageFormat, encode_image, encode_image_to_base64, decode_base64_image

__all__ = [
    "WatermarkStyle",
    "GraphicalWatermark",
    "TextWatermark",
    "WatermarkError",
    "ResourceNotFoundError",
    "ImageDecodeError",
    "FontLoadError",
    "TemplateLoadError",
    "TemplateRenderError",
    "ResourceReader",
    "FileSystemResourceReader",
    "InMemoryResourceReader",
    "load_image",
    "load_font",
    "apply_graphical_watermark",
    "center_offset",
    "render_text_layer",
    "apply_text_watermark",
    "ImageFormat",
    "encode_image",
    "encode_image_to_base64",
    "decode_base64_image",
]
