"""
Resource readers and decoders for images and fonts.

Images and fonts are read through a ``ResourceReader`` so the imaging code
never touches the filesystem directly. Every call reads and decodes afresh;
nothing is cached between requests.
"""

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional, Union

from PIL import Image, ImageFont, UnidentifiedImageError

from .base import FontLoadError, ImageDecodeError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class ResourceReader(ABC):
    """
    Abstract source of named binary resources.

    Subclasses return the full contents of a resource and raise
    ``ResourceNotFoundError`` when the name cannot be resolved.
    """

    @abstractmethod
    def read(self, name: str) -> bytes:
        """
        Read a resource by name.

        Args:
            name (str): Resource name or path

        Returns:
            bytes: Resource contents

        Raises:
            ResourceNotFoundError: If the resource does not exist
        """
        pass


class FileSystemResourceReader(ResourceReader):
    """Reads resources from files relative to a root directory."""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    def resolve(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self.root / path
        return path

    def read(self, name: str) -> bytes:
        path = self.resolve(name)
        try:
            with open(path, "rb") as f:
                return f.read()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise ResourceNotFoundError(f"Resource not found: {name}") from e


class InMemoryResourceReader(ResourceReader):
    """Serves resources from a name to bytes mapping."""

    def __init__(self, resources: Optional[Dict[str, bytes]] = None):
        self.resources: Dict[str, bytes] = dict(resources or {})

    def add(self, name: str, data: bytes) -> None:
        self.resources[name] = data

    def read(self, name: str) -> bytes:
        try:
            return self.resources[name]
        except KeyError as e:
            raise ResourceNotFoundError(f"Resource not found: {name}") from e


def load_image(reader: ResourceReader, name: str) -> Image.Image:
    """
    Read and decode a raster image.

    The pixel data is fully loaded before returning so no buffer outlives
    the call.

    Args:
        reader (ResourceReader): Source of the image bytes
        name (str): Image resource name

    Returns:
        Image.Image: Decoded image

    Raises:
        ResourceNotFoundError: If the resource does not exist
        ImageDecodeError: If the bytes are not a decodable image or exceed
            Pillow's decompression bomb limit
    """
    data = reader.read(name)

    try:
        with Image.open(BytesIO(data)) as decoded:
            decoded.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Failed to decode image {name}: {e}") from e

    logger.debug(f"Loaded image {name}: {decoded.size[0]}x{decoded.size[1]} mode={decoded.mode}")
    return decoded


def load_font(reader: ResourceReader, font: str, size: float) -> ImageFont.FreeTypeFont:
    """
    Load a font face at the given size.

    An empty font reference selects Pillow's bundled scalable face. A
    missing font resource is reported as a font failure.

    Raises:
        FontLoadError: If the font is missing or its data cannot be loaded
    """
    if not font:
        try:
            return ImageFont.load_default(size=size)
        except (OSError, ImportError) as e:
            raise FontLoadError(f"Failed to load default font: {e}") from e

    try:
        data = reader.read(font)
    except ResourceNotFoundError as e:
        raise FontLoadError(f"Font not found: {font}") from e

    try:
        return ImageFont.truetype(BytesIO(data), size)
    except (OSError, ValueError) as e:
        raise FontLoadError(f"Failed to load font {font}: {e}") from e
