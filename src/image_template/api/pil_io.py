"""
PIL IO module.
"""

import logging
import os
from typing import Optional

from PIL import Image

logger = logging.getLogger(__name__)

# Format keyword -> (PIL format name, save options, PIL mode or None to keep).
_ENCODERS = {
    "png": ("PNG", {"compress_level": 9}, None),
    "jpg": ("JPEG", {"quality": 92}, "RGB"),
    "jpeg": ("JPEG", {"quality": 92}, "RGB"),
    "gif": ("GIF", {}, None),
    "tiff": ("TIFF", {}, None),
    "bmp": ("BMP", {}, "RGBA"),
}


def load_image(path: str) -> Image.Image:
    """
    Decode an image file.

    Any format Pillow reads is accepted. Pixel data is loaded eagerly so the
    file handle is released before returning.

    :raise OSError: when the file is missing or unreadable.
    :raise PIL.UnidentifiedImageError: when the data is not a known format.
    """
    with Image.open(path) as image:
        image.load()
        logger.debug("Loaded %s (%s, %dx%d)" % (path, image.mode, *image.size))
        return image


def to_rgba(image: Image.Image) -> Image.Image:
    """Convert to RGBA, honoring palette transparency."""
    if image.mode == "RGBA":
        return image
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("PA")
    return image.convert("RGBA")


def output_format(format: Optional[str], output_path: str) -> str:
    """Pick the encoder keyword: explicit format, file extension, or png."""
    if format:
        return format.lower()
    ext = os.path.splitext(output_path)[1].lower()
    if ext.startswith(".") and len(ext) > 1:
        return ext[1:]
    return "png"


def save_image(image: Image.Image, output_path: str, format: str) -> None:
    """
    Encode and save an image with the specified format.

    Unknown format keywords fall back to PNG. JPEG drops the alpha channel.
    """
    key = (format or "").lower()
    if key not in _ENCODERS:
        logger.debug("Unknown output format %r, using png" % format)
        key = "png"
    pil_format, options, mode = _ENCODERS[key]
    if mode is not None and image.mode != mode:
        image = image.convert(mode)
    image.save(output_path, format=pil_format, **options)
    logger.debug("Saved %s as %s" % (output_path, pil_format))
