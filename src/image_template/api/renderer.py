"""
Render driver: template + inputs -> finished image.
"""

import logging
from typing import List, Mapping, Optional

import requests
from attrs import define, field
from PIL import Image

from image_template.api import pil_io
from image_template.api.template import Template, parse_inputs, parse_template
from image_template.composite.composite import Loader, SlotCompositor
from image_template.composite.resample import resize
from image_template.config import Settings
from image_template.constants import ResizeMode
from image_template.errors import RenderError
from image_template.text.layout import TextLayoutEngine

logger = logging.getLogger(__name__)


@define
class RenderResult:
    """Finished canvas and the per-slot warnings collected on the way."""

    image: Image.Image
    warnings: List[str] = field(factory=list)

    def save(self, path: str, format: Optional[str] = None) -> None:
        pil_io.save_image(self.image, path, pil_io.output_format(format, path))


def create_canvas(template: Template, loader: Loader = pil_io.load_image) -> Image.Image:
    """
    Build the RGBA canvas from the template's base image.

    With a positive output width and height the base is stretched to that
    size; otherwise the canvas keeps the base image size.

    :raise RenderError: when the base image cannot be loaded.
    """
    try:
        base = loader(template.template_image)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise RenderError("loading base image %s: %s" % (template.template_image, e)) from e

    output = template.output
    if output.width > 0 and output.height > 0:
        base = resize(base, output.width, output.height, ResizeMode.FILL)
    canvas = pil_io.to_rgba(base)
    if canvas is base:
        canvas = canvas.copy()
    logger.debug("Canvas %dx%d" % canvas.size)
    return canvas


def render_template(
    template: Template,
    inputs: Mapping[str, str],
    settings: Optional[Settings] = None,
    loader: Loader = pil_io.load_image,
    session: Optional[requests.Session] = None,
) -> RenderResult:
    """
    Render every slot of ``template`` in order.

    Slots without an input are skipped. Slots whose content cannot be loaded
    are skipped with a warning; the render always completes once the base
    image is loaded.
    """
    canvas = create_canvas(template, loader)
    engine = TextLayoutEngine(settings or Settings(), session=session)
    compositor = SlotCompositor(canvas, text_engine=engine, loader=loader)
    try:
        for slot in template:
            compositor.apply(slot, inputs.get(slot.id))
    finally:
        engine.close()
    image, warnings = compositor.finish()
    if warnings:
        logger.info("Rendered with %d warning(s)" % len(warnings))
    return RenderResult(image, warnings)


def render_file(
    template_path: str,
    inputs_path: str,
    output_path: str,
    settings: Optional[Settings] = None,
) -> RenderResult:
    """
    Parse, render and save.

    :raise TemplateError: when either document cannot be parsed.
    :raise RenderError: when the base image cannot be loaded or the output
        cannot be written.
    """
    template = parse_template(template_path)
    inputs = parse_inputs(inputs_path)
    result = render_template(template, inputs, settings=settings)
    try:
        result.save(output_path, template.output.format)
    except (OSError, ValueError) as e:
        raise RenderError("saving output image %s: %s" % (output_path, e)) from e
    logger.debug("Generated image saved to %s" % output_path)
    return result
