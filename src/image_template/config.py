"""
Runtime configuration.

Settings are read from ``IMAGE_TEMPLATE_*`` environment variables (or a
``.env`` file) once, by whoever builds the renderer, and then passed down
explicitly::

    from image_template.config import Settings
    from image_template.api.renderer import render_template

    settings = Settings(font_dir="/opt/fonts", font_ttf="Inter.ttf")
    result = render_template(template, inputs, settings=settings)
"""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    font_dir: str = ""
    font_ttf: str = ""
    font_fetch_timeout: float = 10.0
    default_font_size: float = 12.0

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_TEMPLATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def default_font_path(self) -> str:
        """Process-wide default font, or an empty string when unset."""
        if not self.font_ttf:
            return ""
        return os.path.join(self.font_dir, self.font_ttf)
