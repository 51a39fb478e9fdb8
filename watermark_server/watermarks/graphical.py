"""
Graphical (bitmap) watermark compositing.
"""

import logging
from typing import Tuple

from PIL import Image

from .base import GraphicalWatermark
from .loader import ResourceReader, load_image

logger = logging.getLogger(__name__)


def center_offset(base_size: Tuple[int, int], overlay_size: Tuple[int, int]) -> Tuple[int, int]:
    """
    Top-left position that centers ``overlay_size`` inside ``base_size``.

    Halves truncate toward zero, so an overlay larger than the base gets a
    negative offset and is clipped symmetrically.
    """
    return (
        int((base_size[0] - overlay_size[0]) / 2),
        int((base_size[1] - overlay_size[1]) / 2),
    )


def scale_watermark(watermark_image: Image.Image, scale: float) -> Image.Image:
    if scale == 1:
        return watermark_image
    new_size = (
        max(1, int(watermark_image.width * scale)),
        max(1, int(watermark_image.height * scale)),
    )
    return watermark_image.resize(new_size, Image.Resampling.BILINEAR)


def apply_graphical_watermark(
    watermark: GraphicalWatermark,
    base_image: Image.Image,
    reader: ResourceReader
) -> Image.Image:
    """
    Center a bitmap watermark over a copy of the base image.

    Each watermark pixel is blended with standard "over" compositing weighted
    by its own alpha. The style opacity is intentionally not applied.

    Args:
        watermark (GraphicalWatermark): Watermark configuration
        base_image (Image.Image): Image to watermark, left untouched
        reader (ResourceReader): Source of the watermark bitmap

    Returns:
        Image.Image: New RGBA image with the base's bounds

    Raises:
        ResourceNotFoundError: If the watermark bitmap does not exist
        ImageDecodeError: If the watermark bitmap cannot be decoded
    """
    result = base_image.convert("RGBA") if base_image.mode != "RGBA" else base_image.copy()

    if not watermark.path:
        return result

    watermark_image = load_image(reader, watermark.path).convert("RGBA")
    watermark_image = scale_watermark(watermark_image, watermark.scale)

    offset = center_offset(result.size, watermark_image.size)

    # paste() clips out-of-bounds regions, alpha_composite() does not
    layer = Image.new("RGBA", result.size, (0, 0, 0, 0))
    layer.paste(watermark_image, offset)

    logger.debug(
        f"Graphical watermark {watermark.path} "
        f"{watermark_image.width}x{watermark_image.height} at {offset}"
    )
    return Image.alpha_composite(result, layer)
