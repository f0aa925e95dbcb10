"""
Constant opacity applied to a raster's alpha channel.
"""

import numpy as np
from PIL import Image

from image_template.api.pil_io import to_rgba
from image_template.constants import OPAQUE_THRESHOLD


def apply_opacity(image: Image.Image, opacity: float) -> Image.Image:
    """
    Multiply the alpha channel by ``opacity``.

    At ``opacity >= 0.9999`` the very same image is returned. Otherwise a new
    RGBA image is built whose alpha is ``floor(alpha * opacity)``; color
    channels are copied as they are. Out-of-range opacity is not rejected,
    the product is saturated to the 8-bit range.
    """
    if opacity >= OPAQUE_THRESHOLD:
        return image
    array = np.array(to_rgba(image), dtype=np.uint8)
    alpha = np.floor(array[:, :, 3].astype(np.float64) * opacity)
    array[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)
    return Image.fromarray(array)
