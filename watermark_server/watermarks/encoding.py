"""
In-memory image serialization and base64 wrapping.
"""

import base64
import logging
from enum import Enum
from io import BytesIO
from typing import Union

from PIL import Image

from .base import ImageDecodeError

logger = logging.getLogger(__name__)

# Matches the default quality of the reference JPEG encoder
JPEG_QUALITY = 75


class ImageFormat(Enum):
    """Supported output encodings."""
    JPEG = "jpeg"
    PNG = "png"


def _parse_format(image_format: Union[ImageFormat, str]):
    if isinstance(image_format, ImageFormat):
        return image_format
    try:
        return ImageFormat(str(image_format).lower())
    except ValueError:
        return None


def encode_image(image: Image.Image, image_format: Union[ImageFormat, str]) -> bytes:
    """
    Serialize an image to the given format in memory.

    Unsupported format tags produce an empty buffer rather than an error;
    callers that care must check for ``b""``.

    Args:
        image (Image.Image): Image to encode
        image_format (Union[ImageFormat, str]): Target format or its tag

    Returns:
        bytes: Encoded image, empty for unsupported formats
    """
    fmt = _parse_format(image_format)
    buffer = BytesIO()

    if fmt is ImageFormat.JPEG:
        image.convert("RGB").save(buffer, format="JPEG", quality=JPEG_QUALITY)
    elif fmt is ImageFormat.PNG:
        image.save(buffer, format="PNG")
    else:
        logger.warning(f"Unsupported image format '{image_format}', producing empty output")

    return buffer.getvalue()


def encode_image_to_base64(image: Image.Image, image_format: Union[ImageFormat, str]) -> str:
    """Encode an image and wrap the bytes in standard base64."""
    return base64.b64encode(encode_image(image, image_format)).decode("ascii")


def decode_base64_image(data: str) -> Image.Image:
    """
    Decode a base64 string produced by ``encode_image_to_base64``.

    Raises:
        ImageDecodeError: If the string is not valid base64 image data
    """
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(BytesIO(raw)) as img:
            img.load()
            return img
    except (ValueError, OSError) as e:
        raise ImageDecodeError(f"Failed to decode base64 image: {e}") from e
