"""
Various constants for image_template
"""

from enum import Enum

# Opacity at or above this value leaves a raster untouched.
OPAQUE_THRESHOLD = 0.9999

# Rounded masks without an explicit radius use this fraction of the short side.
DEFAULT_CORNER_RATIO = 0.12

# Wrapped text advances by this multiple of the font's natural line height.
LINE_SPACING = 1.4

FONT_EXTENSIONS = (".ttf", ".otf")


class ResizeMode(str, Enum):
    """
    Resize policy of an image slot.

    .. py:attribute:: FILL

        Stretch to exactly the slot size; aspect ratio is not preserved.

    .. py:attribute:: FIT

        Shrink or grow until the whole source fits inside the slot.

    .. py:attribute:: COVER

        Scale until the slot is covered, then center-crop to the slot size.
    """

    FILL = "fill"
    FIT = "fit"
    COVER = "cover"

    @classmethod
    def parse(cls, value) -> "ResizeMode":
        """Unknown or empty keywords resize as :py:attr:`FIT`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").lower())
        except ValueError:
            return cls.FIT


class MaskKind(str, Enum):
    """
    Mask shape of an image slot.
    """

    NONE = ""
    CIRCLE = "circle"
    ROUNDED = "rounded"
    RECT = "rect"

    @classmethod
    def parse(cls, value) -> "MaskKind":
        """Any unknown non-empty keyword is a plain rectangle."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(value)
        except ValueError:
            return cls.RECT


class FontSource(str, Enum):
    """
    Explicit font source selector of a text slot.
    """

    AUTO = ""
    FILE = "file"
    SYSTEM = "system"
    URL = "url"
    EMBEDDED = "embedded"

    @classmethod
    def parse(cls, value) -> "FontSource":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").lower())
        except ValueError:
            return cls.AUTO


# Alignment keywords to anchor fractions; anything else is 0.0.
HORIZONTAL_ALIGN = {
    "center": 0.5,
    "centre": 0.5,
    "right": 1.0,
}

VERTICAL_ALIGN = {
    "middle": 0.5,
    "center": 0.5,
    "bottom": 1.0,
}
