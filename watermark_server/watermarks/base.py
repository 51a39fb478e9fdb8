"""
Core data types and error classes for image watermarking.

This module defines the immutable watermark style shared by both watermark
kinds, the graphical and text watermark variants built on top of it, and the
exception hierarchy raised by the imaging pipeline.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

RGBAColor = Tuple[int, int, int, int]


@dataclass(frozen=True)
class WatermarkStyle:
    """
    Visual parameters shared by every watermark kind.

    Attributes:
        opacity (float): Overall opacity in [0.0, 1.0]
        color (RGBAColor): Fill color for text watermarks
        font (str): Font resource reference used by text watermarks
        size (float): Font size in points (1pt renders as 1px)
        rotation (float): Rotation angle in degrees
    """
    opacity: float = 1.0
    color: RGBAColor = (0, 0, 0, 255)
    font: str = ""
    size: float = 12.0
    rotation: float = 0.0

    def __post_init__(self):
        """Validate style values after initialization."""
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError("Opacity must be between 0.0 and 1.0")

        if len(self.color) != 4 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError("Color must be four channel values between 0 and 255")

        if self.size <= 0:
            raise ValueError("Font size must be positive")


class _StyledWatermark:
    """Delegates style accessors to the composed ``style`` value."""

    style: WatermarkStyle

    @property
    def opacity(self) -> float:
        return self.style.opacity

    @property
    def color(self) -> RGBAColor:
        return self.style.color

    @property
    def font(self) -> str:
        return self.style.font

    @property
    def size(self) -> float:
        return self.style.size

    @property
    def rotation(self) -> float:
        return self.style.rotation


@dataclass(frozen=True)
class GraphicalWatermark(_StyledWatermark):
    """
    Bitmap watermark centered over a base image.

    The style's opacity is not applied when compositing; the watermark
    bitmap's own alpha channel decides how strongly each pixel blends.

    Attributes:
        style (WatermarkStyle): Shared style parameters
        path (str): Watermark image resource; empty disables the watermark
        scale (float): Uniform resize factor, 1.0 keeps the original size
    """
    style: WatermarkStyle = WatermarkStyle()
    path: str = ""
    scale: float = 1.0

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError("Scale must be greater than 0")

    def apply_to_image(self, base_image, reader):
        from .graphical import apply_graphical_watermark
        return apply_graphical_watermark(self, base_image, reader)


@dataclass(frozen=True)
class TextWatermark(_StyledWatermark):
    """
    Rotated text watermark blended over a base image at uniform opacity.

    Attributes:
        style (WatermarkStyle): Shared style parameters
        text (str): Text drawn at the center of the image
    """
    style: WatermarkStyle = WatermarkStyle()
    text: str = ""

    @property
    def rotation_radians(self) -> float:
        """Rotation in radians; positive degrees turn counter-clockwise."""
        return -self.rotation * math.pi / 180

    def render(self, width: int, height: int, reader):
        from .text import render_text_layer
        return render_text_layer(self, width, height, reader)

    def create_watermarked_image(self, base_image, reader):
        from .text import apply_text_watermark
        return apply_text_watermark(self, base_image, reader)


class WatermarkError(Exception):
    """
    Base exception for watermark rendering failures.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        recoverable (bool): Whether the error can be recovered from
    """

    error_code = "WATERMARK_FAILED"

    def __init__(self, message: str, error_code: Optional[str] = None, recoverable: bool = False):
        """
        Initialize watermark error.

        Args:
            message (str): Descriptive error message
            error_code (str): Unique error code, defaults to the class code
            recoverable (bool): Whether operation can be retried
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.error_code
        self.recoverable = recoverable


class ResourceNotFoundError(WatermarkError):
    """Raised when an image or font resource does not exist."""
    error_code = "RESOURCE_NOT_FOUND"


class ImageDecodeError(WatermarkError):
    """Raised when resource bytes cannot be decoded into an image."""
    error_code = "DECODE_FAILED"


class FontLoadError(WatermarkError):
    """Raised when a font face cannot be loaded."""
    error_code = "FONT_LOAD_FAILED"


class TemplateLoadError(WatermarkError):
    """Raised when the page template cannot be found or parsed."""
    error_code = "TEMPLATE_LOAD_FAILED"


class TemplateRenderError(WatermarkError):
    """Raised when the page template fails while rendering."""
    error_code = "TEMPLATE_EXEC_FAILED"
