"""
Composite module for slot rendering and blending.

This subpackage turns one slot and its input into pixels on the shared
canvas. Image slots run through a fixed pipeline::

    resample.resize -> opacity.apply_opacity -> mask.make_mask
        -> placement.resolve -> blend.source_over

Text slots are handed to :py:class:`~image_template.text.TextLayoutEngine`.

Key modules:

- :py:mod:`image_template.composite.composite`: Slot compositor
- :py:mod:`image_template.composite.resample`: fill / fit / cover resizing
- :py:mod:`image_template.composite.opacity`: Constant opacity
- :py:mod:`image_template.composite.mask`: Circle, rounded and rectangle masks
- :py:mod:`image_template.composite.placement`: Anchor placement
- :py:mod:`image_template.composite.blend`: Source-over blending

Example usage::

    from PIL import Image
    from image_template.composite import composite_slot

    canvas = Image.new("RGBA", (1024, 600), (255, 255, 255, 255))
    warning = composite_slot(canvas, slot, "photo.jpg")
"""

from image_template.composite.composite import SlotCompositor, composite_slot

__all__ = [
    "SlotCompositor",
    "composite_slot",
]
