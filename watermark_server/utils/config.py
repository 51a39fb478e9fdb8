"""
Configuration management for the Watermark Showcase server.

This module handles application configuration including resource locations,
watermark styles, template settings, and server parameters. Values are
loaded from environment variables and an optional ``.env`` file; nested
settings use ``__`` as delimiter (e.g. ``TEXT_WATERMARK__OPACITY=0.4``).
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATE_DIR = str(Path(__file__).resolve().parent.parent / "templates")


class ResourceConfig(BaseModel):
    """
    Configuration for the images served by the showcase page.

    Attributes:
        resource_root (str): Directory that relative resource names resolve against
        graphical_base_image (str): Base image receiving the graphical watermark
        text_base_image (str): Base image receiving the text watermark
    """

    resource_root: str = Field(
        default=".",
        description="Directory that relative resource names resolve against"
    )

    graphical_base_image: str = Field(
        default="image.jpg",
        description="Base image for the graphical watermark pipeline"
    )

    text_base_image: str = Field(
        default="zerkalo-ozera.jpg",
        description="Base image for the text watermark pipeline"
    )

    @property
    def base_image_paths(self) -> List[str]:
        return [self.graphical_base_image, self.text_base_image]


class GraphicalWatermarkConfig(BaseModel):
    """
    Configuration for the bitmap watermark.

    Attributes:
        path (str): Watermark image resource, empty to disable
        scale (float): Uniform resize factor
        opacity (float): Stored for completeness, not applied to bitmaps
    """

    path: str = Field(
        default="FG-copyright-mini.png",
        description="Watermark bitmap resource"
    )

    scale: float = Field(
        default=1.0,
        gt=0.0,
        description="Uniform resize factor applied to the watermark bitmap"
    )

    opacity: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Watermark opacity (not applied by the bitmap compositor)"
    )


class TextWatermarkConfig(BaseModel):
    """
    Configuration for the text watermark.

    Attributes:
        text (str): Watermark text
        font (str): Font resource, empty for Pillow's bundled face
        size (float): Font size in points
        color (Tuple[int, int, int, int]): RGBA fill color
        rotation (float): Rotation in degrees, positive is counter-clockwise
        opacity (float): Uniform opacity of the text layer
    """

    text: str = Field(
        default="пятаяпередача.рф",
        description="Text drawn at the image center"
    )

    font: str = Field(
        default="Nunito-Medium.ttf",
        description="TrueType/OpenType font resource"
    )

    size: float = Field(
        default=35.0,
        gt=0.0,
        le=1000.0,
        description="Font size in points"
    )

    color: Tuple[int, int, int, int] = Field(
        default=(239, 250, 23, 255),
        description="RGBA text color"
    )

    rotation: float = Field(
        default=-29.5,
        ge=-360.0,
        le=360.0,
        description="Rotation angle in degrees"
    )

    opacity: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Uniform opacity applied to the whole text layer"
    )

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        """Ensure every channel fits in a byte."""
        if any(not 0 <= c <= 255 for c in v):
            raise ValueError("Color channels must be between 0 and 255")
        return v


class TemplateConfig(BaseModel):
    """
    Configuration for the HTML page template.

    Attributes:
        template_dir (str): Directory containing page templates
        template_name (str): Template rendered by the showcase route
        output_format (str): Encoding of the embedded images (jpeg or png)
    """

    template_dir: str = Field(
        default=DEFAULT_TEMPLATE_DIR,
        description="Directory containing page templates"
    )

    template_name: str = Field(
        default="images.html",
        description="Template rendered by the showcase route"
    )

    output_format: str = Field(
        default="jpeg",
        description="Encoding of the embedded images"
    )

    @field_validator('output_format')
    @classmethod
    def validate_output_format(cls, v):
        """Validate output format."""
        valid_formats = ["jpeg", "png"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Output format must be one of: {valid_formats}")
        return v.lower()


class APIConfig(BaseModel):
    """
    Configuration for the FastAPI server.

    Attributes:
        host (str): Server host address
        port (int): Server port number
        debug (bool): Enable debug mode
    """

    host: str = Field(
        default="0.0.0.0",
        description="Server host address"
    )

    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Server port number"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed error messages"
    )


class AppConfig(BaseSettings):
    """
    Main application configuration combining all subsystem configs.

    Attributes:
        resources (ResourceConfig): Base image configuration
        graphical_watermark (GraphicalWatermarkConfig): Bitmap watermark settings
        text_watermark (TextWatermarkConfig): Text watermark settings
        template (TemplateConfig): Page template settings
        api (APIConfig): API server configuration
        environment (str): Deployment environment (dev, staging, prod)
        log_level (str): Logging level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    resources: ResourceConfig = Field(default_factory=ResourceConfig)
    graphical_watermark: GraphicalWatermarkConfig = Field(default_factory=GraphicalWatermarkConfig)
    text_watermark: TextWatermarkConfig = Field(default_factory=TextWatermarkConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    api: APIConfig = Field(default_factory=APIConfig)

    environment: str = Field(
        default="development",
        description="Deployment environment"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    def get_watermark_settings(self) -> Dict[str, Any]:
        """
        Get both watermark configurations as dictionaries.

        Returns:
            Dict[str, Any]: Graphical and text watermark parameters
        """
        return {
            "graphical": self.graphical_watermark.model_dump(),
            "text": self.text_watermark.model_dump(),
        }


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """
    Get the global application configuration instance.

    Returns:
        AppConfig: Global configuration instance with all subsystem settings
    """
    return config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment and files.

    Returns:
        AppConfig: Newly loaded configuration instance
    """
    global config
    config = AppConfig()
    return config
