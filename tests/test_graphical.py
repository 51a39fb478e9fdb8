"""
Unit tests for graphical watermark compositing.
"""

from io import BytesIO

import pytest
from PIL import Image

from watermark_server.watermarks.base import (
    GraphicalWatermark,
    ResourceNotFoundError,
    WatermarkStyle,
)
from watermark_server.watermarks.graphical import center_offset, scale_watermark
from watermark_server.watermarks.loader import InMemoryResourceReader

BASE_COLOR = (0, 0, 255, 255)
MARK_COLOR = (255, 0, 0, 255)


def _png_bytes(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class TestCenterOffset:
    """Test cases for center alignment."""

    def test_centered_offset(self):
        """Test the offset of a smaller overlay."""
        assert center_offset((800, 600), (100, 100)) == (350, 250)

    def test_odd_difference_truncates(self):
        """Test that half pixels are dropped."""
        assert center_offset((101, 51), (50, 50)) == (25, 0)

    def test_negative_offset_truncates_toward_zero(self):
        """Test that larger overlays get symmetric negative offsets."""
        assert center_offset((100, 100), (151, 151)) == (-25, -25)


class TestScaleWatermark:
    """Test cases for watermark scaling."""

    def test_unit_scale_returns_same_image(self):
        """Test that scale 1 does not resize."""
        image = Image.new("RGBA", (40, 20))

        assert scale_watermark(image, 1.0) is image

    def test_uniform_scale(self):
        """Test that both axes are scaled by the same factor."""
        image = Image.new("RGBA", (40, 20))

        assert scale_watermark(image, 1.5).size == (60, 30)
        assert scale_watermark(image, 0.25).size == (10, 5)


class TestApplyGraphicalWatermark:
    """Test cases for GraphicalWatermark.apply_to_image."""

    @pytest.fixture
    def base_image(self):
        """Create an opaque 800x600 base image."""
        return Image.new("RGBA", (800, 600), BASE_COLOR)

    @pytest.fixture
    def reader(self):
        """Create a reader holding an opaque 100x100 watermark."""
        return InMemoryResourceReader({
            "wm.png": _png_bytes(Image.new("RGBA", (100, 100), MARK_COLOR))
        })

    def test_unit_scale_keeps_bounds(self, base_image, reader):
        """Test that the output has the base image's bounds."""
        watermark = GraphicalWatermark(path="wm.png", scale=1.0)

        result = watermark.apply_to_image(base_image, reader)

        assert result.size == base_image.size
        assert result.mode == "RGBA"

    def test_empty_path_returns_identical_copy(self, reader):
        """Test that an empty path copies the base unchanged."""
        base_image = Image.new("RGBA", (64, 48))
        base_image.putdata([(x % 256, (x * 7) % 256, 3, 200) for x in range(64 * 48)])
        watermark = GraphicalWatermark(path="")

        result = watermark.apply_to_image(base_image, reader)

        assert result is not base_image
        assert result.tobytes() == base_image.tobytes()

    def test_watermark_drawn_centered(self, base_image, reader):
        """Test that a 100x100 mark on 800x600 starts at (350, 250)."""
        watermark = GraphicalWatermark(path="wm.png", scale=1.0)

        result = watermark.apply_to_image(base_image, reader)

        assert result.getpixel((350, 250)) == MARK_COLOR
        assert result.getpixel((449, 349)) == MARK_COLOR
        assert result.getpixel((349, 250)) == BASE_COLOR
        assert result.getpixel((350, 249)) == BASE_COLOR
        assert result.getpixel((450, 349)) == BASE_COLOR
        assert result.getpixel((449, 350)) == BASE_COLOR

    def test_scaled_watermark(self, base_image, reader):
        """Test that scaling shrinks the mark around the same center."""
        watermark = GraphicalWatermark(path="wm.png", scale=0.5)

        result = watermark.apply_to_image(base_image, reader)

        assert result.size == base_image.size
        assert result.getpixel((375, 275)) == MARK_COLOR
        assert result.getpixel((424, 324)) == MARK_COLOR
        assert result.getpixel((374, 275)) == BASE_COLOR
        assert result.getpixel((425, 324)) == BASE_COLOR

    def test_oversized_watermark_is_clipped(self, reader):
        """Test that a mark larger than the base covers it completely."""
        base_image = Image.new("RGBA", (50, 30), BASE_COLOR)
        watermark = GraphicalWatermark(path="wm.png")

        result = watermark.apply_to_image(base_image, reader)

        assert result.size == (50, 30)
        assert set(result.getdata()) == {MARK_COLOR}

    def test_per_pixel_alpha_ignores_opacity(self):
        """Test that blending uses the bitmap alpha, not the style opacity."""
        base_image = Image.new("RGBA", (20, 20), (0, 0, 0, 255))
        reader = InMemoryResourceReader({
            "half.png": _png_bytes(Image.new("RGBA", (10, 10), (255, 255, 255, 128)))
        })
        watermark = GraphicalWatermark(
            style=WatermarkStyle(opacity=0.1),
            path="half.png"
        )

        result = watermark.apply_to_image(base_image, reader)

        red, green, blue, alpha = result.getpixel((10, 10))
        assert abs(red - 128) <= 1
        assert red == green == blue
        assert alpha == 255
        assert result.getpixel((0, 0)) == (0, 0, 0, 255)

    def test_transparent_pixels_leave_base(self):
        """Test that fully transparent watermark pixels do not change the base."""
        base_image = Image.new("RGBA", (20, 20), BASE_COLOR)
        reader = InMemoryResourceReader({
            "clear.png": _png_bytes(Image.new("RGBA", (10, 10), (255, 0, 0, 0)))
        })

        result = GraphicalWatermark(path="clear.png").apply_to_image(base_image, reader)

        assert result.tobytes() == base_image.tobytes()

    def test_base_image_untouched(self, base_image, reader):
        """Test that the input image is not modified."""
        original = base_image.tobytes()

        GraphicalWatermark(path="wm.png").apply_to_image(base_image, reader)

        assert base_image.tobytes() == original

    def test_rgb_base_is_converted(self, reader):
        """Test that RGB bases produce RGBA results of the same size."""
        base_image = Image.new("RGB", (200, 100), (0, 0, 255))

        result = GraphicalWatermark(path="wm.png").apply_to_image(base_image, reader)

        assert result.mode == "RGBA"
        assert result.size == (200, 100)
        assert result.getpixel((100, 50)) == MARK_COLOR

    def test_missing_watermark(self, base_image):
        """Test that a missing watermark bitmap raises ResourceNotFoundError."""
        watermark = GraphicalWatermark(path="FG-copyright-mini.png")

        with pytest.raises(ResourceNotFoundError):
            watermark.apply_to_image(base_image, InMemoryResourceReader())
