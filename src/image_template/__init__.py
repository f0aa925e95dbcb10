"""
image-template: render finished images from declarative templates.

A template names a base image and an ordered list of rectangular slots. Each
slot receives either an image (resized, faded, masked and anchored into its
box) or a line of text (set in a resolved font and aligned inside its box).

Basic usage::

    from image_template import Template, render_template

    template = Template.from_dict({
        "template_image": "base.png",
        "slots": [{"id": "photo", "x": 100, "y": 100,
                   "width": 200, "height": 150, "mask": "rounded"}],
    })
    result = render_template(template, {"photo": "cat.jpg"})
    result.image.save("out.png")

Architecture:

- :py:mod:`image_template.api`: Template model, I/O and render driver
- :py:mod:`image_template.composite`: Slot compositing pipeline
- :py:mod:`image_template.text`: Font resolution and text layout
"""

from image_template.api.renderer import RenderResult, render_file, render_template
from image_template.api.template import Slot, Template, TextOptions
from image_template.version import __version__

__all__ = [
    "RenderResult",
    "Slot",
    "Template",
    "TextOptions",
    "render_file",
    "render_template",
    "__version__",
]
