"""
Shared fixtures for the test suites.
"""

from pathlib import Path

import pytest
from PIL import ImageFont

SYSTEM_FONT_NAMES = [
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "FreeSans.ttf",
    "Arial.ttf",
    "arial.ttf",
]


@pytest.fixture(scope="session")
def truetype_font_path() -> Path:
    """Locate an installed TrueType font through Pillow's font search path."""
    for name in SYSTEM_FONT_NAMES:
        try:
            font = ImageFont.truetype(name, 10)
        except OSError:
            continue
        return Path(font.path)

    for font_dir in (Path("/usr/share/fonts"), Path("/usr/local/share/fonts")):
        if font_dir.is_dir():
            for candidate in sorted(font_dir.rglob("*.ttf")):
                return candidate

    pytest.skip("No TrueType font installed")


@pytest.fixture(scope="session")
def truetype_font_bytes(truetype_font_path) -> bytes:
    return truetype_font_path.read_bytes()
