"""
Text watermark rendering and uniform-opacity compositing.

The text is drawn on a transparent layer the size of the target image,
centered and rotated about the layer center. The layer is then blended over
the base through a constant alpha mask derived from the watermark opacity,
which scales the glyph antialiasing rather than replacing it.
"""

import logging
import math

from PIL import Image, ImageChops, ImageDraw

from .base import TextWatermark
from .graphical import center_offset
from .loader import ResourceReader, load_font

logger = logging.getLogger(__name__)

# Transparent margin around the glyphs so antialiasing survives rotation
TEXT_PADDING = 2


def render_text_layer(
    watermark: TextWatermark,
    width: int,
    height: int,
    reader: ResourceReader
) -> Image.Image:
    """
    Rasterize the watermark text onto a transparent canvas.

    Glyphs are drawn on a tight canvas centered on the text anchor, rotated
    with ``expand=True`` so no corner is cut, then pasted centered onto a
    ``width x height`` layer. Rotated text is clipped only by the final
    bounds.

    Args:
        watermark (TextWatermark): Text, font and style to render
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        reader (ResourceReader): Source of the font resource

    Returns:
        Image.Image: RGBA layer of the requested size

    Raises:
        FontLoadError: If the font cannot be loaded
    """
    font = load_font(reader, watermark.font, watermark.size)

    # The anchor sits at the exact center of the text canvas
    left, top, right, bottom = font.getbbox(watermark.text, anchor="mm")
    half_width = math.ceil(max(-left, right)) + TEXT_PADDING
    half_height = math.ceil(max(-top, bottom)) + TEXT_PADDING

    text_image = Image.new("RGBA", (2 * half_width, 2 * half_height), (255, 255, 255, 0))
    draw = ImageDraw.Draw(text_image)
    draw.text(
        (half_width, half_height),
        watermark.text,
        font=font,
        fill=tuple(watermark.color),
        anchor="mm"
    )

    angle = watermark.rotation_radians
    if angle:
        # rotate() turns counter-clockwise, the y-down radians turn clockwise
        text_image = text_image.rotate(
            -math.degrees(angle),
            resample=Image.Resampling.BICUBIC,
            expand=True
        )

    layer = Image.new("RGBA", (width, height), (255, 255, 255, 0))
    layer.paste(text_image, center_offset(layer.size, text_image.size))
    return layer


def apply_text_watermark(
    watermark: TextWatermark,
    base_image: Image.Image,
    reader: ResourceReader
) -> Image.Image:
    """
    Blend the rendered text layer over a copy of the base image.

    Args:
        watermark (TextWatermark): Watermark to apply
        base_image (Image.Image): Image to watermark, left untouched
        reader (ResourceReader): Source of the font resource

    Returns:
        Image.Image: New RGBA image with the base's bounds
    """
    text_layer = render_text_layer(watermark, base_image.width, base_image.height, reader)
    result = base_image.convert("RGBA") if base_image.mode != "RGBA" else base_image.copy()

    mask = Image.new("L", result.size, int(255 * watermark.opacity))
    text_layer.putalpha(ImageChops.multiply(text_layer.getchannel("A"), mask))

    logger.debug(
        f"Text watermark '{watermark.text}' on {result.width}x{result.height}, "
        f"rotation={watermark.rotation}, opacity={watermark.opacity}"
    )
    return Image.alpha_composite(result, text_layer)
