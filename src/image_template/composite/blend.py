"""
Source-over compositing onto the canvas.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from image_template.api.pil_io import to_rgba
from image_template.utils import intersect

logger = logging.getLogger(__name__)


def source_over(
    canvas: Image.Image,
    source: Image.Image,
    origin: Tuple[int, int],
    mask: Optional[Image.Image] = None,
) -> None:
    """
    Blend ``source`` onto ``canvas`` in place, with its top-left at ``origin``.

    ``mask`` scales the source alpha and must match the source size. Pixels
    falling outside the canvas are dropped.
    """
    if mask is not None and mask.size != source.size:
        raise ValueError(
            "Mask size %s does not match source size %s" % (mask.size, source.size)
        )
    if canvas.mode != "RGBA":
        raise ValueError("Canvas must be RGBA, got %s" % canvas.mode)

    x, y = origin
    bbox = (x, y, x + source.width, y + source.height)
    inter = intersect((0, 0, canvas.width, canvas.height), bbox)
    if inter == (0, 0, 0, 0):
        logger.debug("Source at %s is outside the canvas" % (bbox,))
        return

    crop = (inter[0] - x, inter[1] - y, inter[2] - x, inter[3] - y)
    color_s = _normalize(to_rgba(source).crop(crop))
    alpha_s = color_s[:, :, 3:]
    if mask is not None:
        alpha_s = alpha_s * _normalize(mask.crop(crop))[:, :, np.newaxis]

    backdrop = _normalize(canvas.crop(inter))
    alpha_b = backdrop[:, :, 3:]

    alpha = alpha_s + alpha_b * (1.0 - alpha_s)
    color = color_s[:, :, :3] * alpha_s + backdrop[:, :, :3] * alpha_b * (1.0 - alpha_s)
    color = divide(color, alpha)

    result = np.concatenate((color, alpha), axis=2)
    result = np.clip(np.round(result * 255.0), 0, 255).astype(np.uint8)
    canvas.paste(Image.fromarray(result), inter[:2])


def divide(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Un-premultiply; fully transparent pixels get black."""
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.true_divide(a, b)
        c[~np.isfinite(c)] = 0.0
    return c


def _normalize(image: Image.Image) -> np.ndarray:
    return np.asarray(image, dtype=np.float32) / 255.0
