"""Slot compositing: the per-slot image and text pipelines."""

import logging
from typing import Callable, List, Optional, Tuple

from PIL import Image

from image_template.api.pil_io import load_image
from image_template.api.template import Slot
from image_template.composite import blend, mask, opacity, placement, resample
from image_template.text.layout import TextLayoutEngine

logger = logging.getLogger(__name__)

Loader = Callable[[str], Image.Image]


def composite_slot(
    canvas: Image.Image,
    slot: Slot,
    value: Optional[str],
    text_engine: Optional[TextLayoutEngine] = None,
    loader: Loader = load_image,
) -> Optional[str]:
    """
    Composite one slot onto ``canvas`` in place.

    ``value`` is the slot's input: an image path, or the literal text for
    text slots. ``None`` skips the slot silently.

    Returns a warning message when the slot could only be rendered partially
    or not at all; nothing is raised for unreadable per-slot content.
    """
    compositor = SlotCompositor(canvas, text_engine=text_engine, loader=loader)
    try:
        return compositor.apply(slot, value)
    finally:
        compositor.close()


class SlotCompositor(object):
    """Composite context owning the canvas for one render.

    Slots are painted in the order they are applied, so later slots draw over
    earlier ones.

    Example::

        compositor = SlotCompositor(canvas)
        for slot in template:
            compositor.apply(slot, inputs.get(slot.id))
        canvas, warnings = compositor.finish()
    """

    def __init__(
        self,
        canvas: Image.Image,
        text_engine: Optional[TextLayoutEngine] = None,
        loader: Loader = load_image,
    ):
        if canvas.mode != "RGBA":
            raise ValueError("Canvas must be RGBA, got %s" % canvas.mode)
        self._canvas = canvas
        self._text_engine = text_engine
        self._owns_engine = text_engine is None
        self._loader = loader
        self._warnings: List[str] = []

    @property
    def canvas(self) -> Image.Image:
        return self._canvas

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    @property
    def text_engine(self) -> TextLayoutEngine:
        if self._text_engine is None:
            self._text_engine = TextLayoutEngine()
        return self._text_engine

    def apply(self, slot: Slot, value: Optional[str]) -> Optional[str]:
        if value is None:
            logger.debug("No input for slot %s, skipping" % slot.id)
            return None

        if slot.is_text:
            warning = self.text_engine.draw(self._canvas, slot, value)
        else:
            warning = self._apply_image(slot, value)

        if warning is not None:
            self._warnings.append(warning)
        return warning

    def finish(self) -> Tuple[Image.Image, List[str]]:
        return self._canvas, self.warnings

    def close(self) -> None:
        """Release the text engine if this compositor created it."""
        if self._owns_engine and self._text_engine is not None:
            self._text_engine.close()
            self._text_engine = None

    def _apply_image(self, slot: Slot, path: str) -> Optional[str]:
        try:
            content = self._loader(path)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            warning = "failed to load image for slot %s: %s" % (slot.id, e)
            logger.warning(warning)
            return warning

        resized = resample.resize(content, slot.width, slot.height, slot.mode)
        source = opacity.apply_opacity(resized, slot.opacity)
        shape = mask.make_mask(slot.mask, source.width, source.height, slot.radius)
        place = placement.resolve(slot, source.width, source.height)
        blend.source_over(self._canvas, source, place.origin, shape)
        logger.debug(
            "Composited slot %s box %s at %s (%s, %s mask)"
            % (slot.id, slot.box, place.bbox, slot.mode.value, slot.mask.value or "no")
        )
        return None
