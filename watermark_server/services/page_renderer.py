"""
HTML page rendering for the watermark showcase.

Templates are rendered with Jinja2 and HTML autoescaping. Loading and
rendering failures are raised as distinct errors so the API layer can answer
with a static 500 message without leaking template internals.
"""

import logging
from typing import Optional

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from ..watermarks.base import TemplateLoadError, TemplateRenderError

logger = logging.getLogger(__name__)


class PageRenderer:
    """
    Renders the showcase page with two embedded images.

    Attributes:
        template_name (str): Name of the template within the loader
        image_format (str): Image subtype used for the ``data:`` URIs
    """

    def __init__(
        self,
        loader: BaseLoader,
        template_name: str = "images.html",
        image_format: str = "jpeg"
    ):
        self.template_name = template_name
        self.image_format = image_format
        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "htm", "xml"]),
        )

    @classmethod
    def from_directory(
        cls,
        template_dir: str,
        template_name: str = "images.html",
        image_format: str = "jpeg"
    ) -> "PageRenderer":
        """Create a renderer reading templates from ``template_dir``."""
        return cls(FileSystemLoader(template_dir), template_name, image_format)

    def render(self, image1: str, image2: str, title: Optional[str] = None) -> str:
        """
        Render the page with two base64 encoded images.

        The template is loaded on every call, so edits on disk show up
        without a restart.

        Args:
            image1 (str): Base64 image with the graphical watermark
            image2 (str): Base64 image with the text watermark
            title (Optional[str]): Page title

        Returns:
            str: Rendered HTML document

        Raises:
            TemplateLoadError: If the template is missing or does not parse
            TemplateRenderError: If rendering the template fails
        """
        try:
            template = self._env.get_template(self.template_name)
        except (TemplateNotFound, TemplateSyntaxError) as e:
            logger.error(f"Error loading template {self.template_name}: {e}")
            raise TemplateLoadError(f"Error loading template {self.template_name}") from e

        try:
            return template.render(
                Image1=image1,
                Image2=image2,
                image_format=self.image_format,
                title=title or "Watermarked images",
            )
        except Exception as e:
            logger.error(f"Error executing template {self.template_name}: {e}")
            raise TemplateRenderError(f"Error executing template {self.template_name}") from e
