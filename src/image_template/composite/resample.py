"""
Resize source rasters into a slot box.
"""

import logging
from typing import Tuple, Union

from PIL import Image

from image_template.api.pil_io import to_rgba
from image_template.constants import ResizeMode

logger = logging.getLogger(__name__)

# Pillow's bicubic filter is the Catmull-Rom cubic (a = -0.5).
RESAMPLE = Image.Resampling.BICUBIC


def resize(
    source: Image.Image,
    width: int,
    height: int,
    mode: Union[ResizeMode, str] = ResizeMode.FIT,
) -> Image.Image:
    """
    Scale ``source`` into a ``width`` x ``height`` box.

    ``fill`` stretches to exactly the box, ``fit`` keeps the aspect ratio and
    stays inside the box, ``cover`` keeps the aspect ratio and center-crops to
    exactly the box. Unknown modes behave as ``fit``.

    A non-positive target or an empty source is returned unchanged. Otherwise
    the result is a new RGBA image.
    """
    if width <= 0 or height <= 0:
        return source
    src_w, src_h = source.size
    if src_w == 0 or src_h == 0:
        return source

    mode = ResizeMode.parse(mode)
    rgba = to_rgba(source)
    if mode == ResizeMode.FILL:
        return rgba.resize((width, height), RESAMPLE)
    if mode == ResizeMode.COVER:
        return _cover(rgba, width, height)
    return rgba.resize(fit_size(source.size, width, height), RESAMPLE)


def fit_size(size: Tuple[int, int], width: int, height: int) -> Tuple[int, int]:
    """Largest aspect-preserving size inside the box, truncated to ints."""
    src_w, src_h = size
    scale = min(width / src_w, height / src_h)
    return max(1, int(src_w * scale)), max(1, int(src_h * scale))


def cover_size(size: Tuple[int, int], width: int, height: int) -> Tuple[int, int]:
    """Smallest aspect-preserving size covering the box, truncated to ints."""
    src_w, src_h = size
    scale = max(width / src_w, height / src_h)
    return max(width, int(src_w * scale)), max(height, int(src_h * scale))


def _cover(image: Image.Image, width: int, height: int) -> Image.Image:
    scaled_w, scaled_h = cover_size(image.size, width, height)
    scaled = image.resize((scaled_w, scaled_h), RESAMPLE)
    left = (scaled_w - width) // 2
    top = (scaled_h - height) // 2
    logger.debug(
        "Cover crop %dx%d -> %dx%d at (%d, %d)"
        % (scaled_w, scaled_h, width, height, left, top)
    )
    return scaled.crop((left, top, left + width, top + height))
