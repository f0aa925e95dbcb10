"""Pytest configuration for image_template tests."""

import os

import pytest
from PIL import Image

from image_template.config import Settings

FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)


def find_font() -> str:
    for path in FONT_CANDIDATES:
        if os.path.isfile(path):
            return path
    return ""


@pytest.fixture
def font_path() -> str:
    path = find_font()
    if not path:
        pytest.skip("No system TrueType font available")
    return path


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, font_dir="", font_ttf="")


@pytest.fixture
def canvas() -> Image.Image:
    return Image.new("RGBA", (1024, 600), (255, 255, 255, 255))
