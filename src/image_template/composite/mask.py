"""
Coverage masks for image slots.

Every shape except the default opaque mask is filled through the same aggdraw
vector path, so circle, rounded and rectangle edges are antialiased alike.
"""

import logging
from typing import Iterator, Union

import aggdraw
from PIL import Image

from image_template.constants import DEFAULT_CORNER_RATIO, MaskKind
from image_template.utils import new_registry

logger = logging.getLogger(__name__)

SHAPES, register = new_registry(attribute="kind")

# Control point distance for a cubic Bezier quarter circle.
KAPPA = 0.5522847498


def make_mask(
    kind: Union[MaskKind, str], width: int, height: int, radius: float = 0.0
) -> Image.Image:
    """
    Rasterize a ``width`` x ``height`` coverage mask in mode ``L``.

    ``""`` gives a fully opaque mask, ``circle`` a centered disk of radius
    ``min(width, height) / 2``, ``rounded`` a rounded rectangle spanning the
    box (``radius`` or ``0.12 * min(width, height)`` when not positive), and
    any other keyword a plain rectangle spanning the box.
    """
    kind = MaskKind.parse(kind)
    if kind == MaskKind.NONE:
        return Image.new("L", (width, height), 255)
    if width <= 0 or height <= 0:
        return Image.new("L", (max(width, 0), max(height, 0)), 0)
    path = " ".join(map(_format, SHAPES[kind](width, height, radius)))
    return _fill_path(path, width, height)


def _format(token: Union[str, float]) -> str:
    if isinstance(token, str):
        return token
    return "%.3f" % token


def _fill_path(path: str, width: int, height: int) -> Image.Image:
    mask = Image.new("L", (width, height), 0)
    draw = aggdraw.Draw(mask)
    brush = aggdraw.Brush(color=255)
    draw.symbol((0, 0), aggdraw.Symbol(path), None, brush)
    draw.flush()
    del draw
    return mask


@register(MaskKind.CIRCLE)
def _circle(width: int, height: int, radius: float) -> Iterator[Union[str, float]]:
    r = min(width, height) / 2.0
    yield from _ellipse(width / 2.0, height / 2.0, r)


@register(MaskKind.ROUNDED)
def _rounded(width: int, height: int, radius: float) -> Iterator[Union[str, float]]:
    r = radius if radius > 0 else min(width, height) * DEFAULT_CORNER_RATIO
    r = min(r, width / 2.0, height / 2.0)
    k = r * (1.0 - KAPPA)

    yield "M"
    yield r
    yield 0.0
    yield "L"
    yield width - r
    yield 0.0
    yield "C"
    yield from (width - k, 0.0, width, k, width, r)
    yield "L"
    yield width
    yield height - r
    yield "C"
    yield from (width, height - k, width - k, height, width - r, height)
    yield "L"
    yield r
    yield height
    yield "C"
    yield from (k, height, 0.0, height - k, 0.0, height - r)
    yield "L"
    yield 0.0
    yield r
    yield "C"
    yield from (0.0, k, k, 0.0, r, 0.0)
    yield "Z"


@register(MaskKind.RECT)
def _rectangle(width: int, height: int, radius: float) -> Iterator[Union[str, float]]:
    yield "M"
    yield from (0.0, 0.0)
    yield "L"
    yield from (float(width), 0.0)
    yield "L"
    yield from (float(width), float(height))
    yield "L"
    yield from (0.0, float(height))
    yield "Z"


def _ellipse(cx: float, cy: float, r: float) -> Iterator[Union[str, float]]:
    """Closed circle as four cubic Bezier arcs."""
    k = r * KAPPA
    yield "M"
    yield from (cx + r, cy)
    yield "C"
    yield from (cx + r, cy + k, cx + k, cy + r, cx, cy + r)
    yield "C"
    yield from (cx - k, cy + r, cx - r, cy + k, cx - r, cy)
    yield "C"
    yield from (cx - r, cy - k, cx - k, cy - r, cx, cy - r)
    yield "C"
    yield from (cx + k, cy - r, cx + r, cy - k, cx + r, cy)
    yield "Z"
