"""
Text rendering for text slots: font resolution and layout.

- :py:mod:`image_template.text.fonts`: Ordered font resolver chain
- :py:mod:`image_template.text.layout`: Alignment, wrapping and drawing
"""

from image_template.text.fonts import FontResolution, FontResolverChain
from image_template.text.layout import TextLayoutEngine, layout_text

__all__ = [
    "FontResolution",
    "FontResolverChain",
    "TextLayoutEngine",
    "layout_text",
]
