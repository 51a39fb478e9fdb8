"""
Watermark Showcase server.

Serves an HTML page with two images: one carrying a centered bitmap
watermark and one carrying a rotated text watermark.
"""

__version__ = "0.1.0"
