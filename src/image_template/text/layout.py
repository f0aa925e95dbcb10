"""
Text layout and drawing inside a slot box.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import requests
from attrs import define
from PIL import Image, ImageColor, ImageDraw

from image_template.api.template import Slot, TextOptions
from image_template.config import Settings
from image_template.constants import HORIZONTAL_ALIGN, LINE_SPACING, VERTICAL_ALIGN
from image_template.text.fonts import Face, FontResolution, FontResolverChain
from image_template.utils import clamp_anchor

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0, 255)


@define(frozen=True)
class TextLine:
    x: float
    y: float
    text: str


@define(frozen=True)
class TextLayout:
    """Positioned lines plus the anchor they were aligned to."""

    lines: Tuple[TextLine, ...]
    anchor: Tuple[float, float]
    alignment: Tuple[float, float]
    width: float
    height: float


def anchor_point(slot: Slot) -> Tuple[float, float]:
    """Point inside the slot box picked by the slot's anchor fractions."""
    ax = clamp_anchor(slot.anchor_x)
    ay = clamp_anchor(slot.anchor_y)
    return (slot.x + slot.width * ax, slot.y + slot.height * ay)


def alignment(options: TextOptions) -> Tuple[float, float]:
    """Horizontal and vertical alignment keywords as anchor fractions."""
    return (
        HORIZONTAL_ALIGN.get(options.align_x.lower(), 0.0),
        VERTICAL_ALIGN.get(options.align_y.lower(), 0.0),
    )


def parse_color(value: str) -> Tuple[int, int, int, int]:
    """Hex color string to RGBA; empty or invalid gives black."""
    if not value:
        return BLACK
    try:
        return ImageColor.getcolor(value, "RGBA")
    except ValueError:
        logger.warning("Invalid text color %r, using black" % value)
        return BLACK


def line_height(font: Face) -> float:
    """Natural line height (ascent + descent) of the face."""
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        if ascent + descent > 0:
            return float(ascent + descent)
    bbox = font.getbbox("Ag")
    return float(max(1, bbox[3] - bbox[1]))


def wrap_lines(text: str, font: Face, max_width: float) -> List[str]:
    """
    Greedy word wrap to ``max_width`` pixels.

    Explicit newlines start a new line. A single word wider than the limit is
    kept whole on its own line.
    """
    lines = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = word if not current else current + " " + word
            if current and font.getlength(candidate) > max_width:
                lines.append(current)
                current = word
            else:
                current = candidate
        lines.append(current)
    return lines


def layout_text(slot: Slot, text: str, font: Face) -> TextLayout:
    """
    Position ``text`` for ``slot``.

    Wrapped text is boxed to ``max_width`` and spaced by 1.4 line heights;
    otherwise the text is a single line. Either way the block is placed so
    that the alignment fractions of its box sit on the anchor point.
    """
    options = slot.text_opts
    px, py = anchor_point(slot)
    ax, ay = alignment(options)
    height = line_height(font)

    if options.wrap and options.max_width > 0:
        strings = wrap_lines(text, font, options.max_width)
        step = height * LINE_SPACING
        width = float(options.max_width)
        total = len(strings) * step - (LINE_SPACING - 1.0) * height
    else:
        strings = [text]
        step = height
        width = float(font.getlength(text))
        total = height

    left = px - ax * width
    top = py - ay * total
    lines = tuple(
        TextLine(left, top + index * step, string) for index, string in enumerate(strings)
    )
    return TextLayout(lines, (px, py), (ax, ay), width, total)


class TextLayoutEngine(object):
    """
    Draws text slots onto a canvas.

    The font chain is built once from the given settings and reused for every
    slot::

        engine = TextLayoutEngine(Settings())
        warning = engine.draw(canvas, slot, "Hello")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fonts: Optional[FontResolverChain] = None,
        session: Optional[requests.Session] = None,
        system_dirs: Optional[Sequence[str]] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.fonts = fonts or FontResolverChain(
            self.settings, session=session, system_dirs=system_dirs
        )

    def close(self) -> None:
        self.fonts.close()

    def resolve_font(self, options: TextOptions) -> FontResolution:
        return self.fonts.resolve(options)

    def draw(self, canvas: Image.Image, slot: Slot, text: str) -> Optional[str]:
        """
        Draw ``text`` for ``slot`` onto ``canvas`` in place.

        Returns a warning when no configured font could be loaded and the
        built-in face was used instead.
        """
        options = slot.text_opts
        resolution = self.resolve_font(options)
        warning = None
        if not resolution.resolved and _wants_font(options, self.fonts):
            warning = "slot %s: failed to load font, using builtin font" % slot.id
            logger.warning(warning)

        layout = layout_text(slot, text, resolution.face)
        color = parse_color(options.color)
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        for line in layout.lines:
            if line.text:
                draw.text((line.x, line.y), line.text, font=resolution.face, fill=color)
        canvas.alpha_composite(layer)
        logger.debug(
            "Drew %d line(s) for slot %s with %s font"
            % (len(layout.lines), slot.id, resolution.source)
        )
        return warning


def _wants_font(options: TextOptions, fonts: FontResolverChain) -> bool:
    """True when the slot or the configuration asked for a real font."""
    if options.font_size > 0 or fonts.default.applies(options):
        return True
    return any(resolver.applies(options) for resolver in fonts.resolvers.values())
