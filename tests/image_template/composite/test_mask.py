import logging

import pytest

from image_template.composite.mask import SHAPES, make_mask
from image_template.constants import MaskKind

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("size", [(100, 80), (1, 1), (3, 250)])
def test_empty_kind_is_opaque(size):
    mask = make_mask("", size[0], size[1], 0)
    assert mask.mode == "L"
    assert mask.size == size
    assert mask.getextrema() == (255, 255)


@pytest.mark.parametrize("kind", ["rect", "square", "triangle", "RECT"])
def test_unknown_kind_is_rectangle(kind):
    mask = make_mask(kind, 50, 60, 0)
    assert mask.size == (50, 60)
    assert mask.getpixel((25, 30)) == 255
    assert mask.getpixel((1, 1)) == 255


def test_circle():
    mask = make_mask("circle", 100, 100, 0)
    assert mask.size == (100, 100)
    assert mask.getpixel((50, 50)) == 255
    for corner in [(0, 0), (99, 0), (0, 99), (99, 99), (5, 5)]:
        assert mask.getpixel(corner) < mask.getpixel((50, 50))
        assert mask.getpixel(corner) == 0


def test_circle_uses_short_side():
    mask = make_mask("circle", 120, 60, 0)
    assert mask.size == (120, 60)
    assert mask.getpixel((60, 30)) == 255
    assert mask.getpixel((60, 2)) > 0
    assert mask.getpixel((20, 30)) == 0
    assert mask.getpixel((100, 30)) == 0


def test_rounded():
    mask = make_mask("rounded", 80, 60, 10)
    assert mask.size == (80, 60)
    assert mask.getpixel((40, 30)) == 255
    assert mask.getpixel((0, 0)) < 255
    assert mask.getpixel((40, 1)) == 255
    assert mask.getpixel((1, 30)) == 255


def test_rounded_default_radius():
    mask = make_mask("rounded", 100, 100, 0)
    assert mask.getpixel((50, 50)) == 255
    assert mask.getpixel((0, 0)) < 255
    assert mask.tobytes() == make_mask("rounded", 100, 100, 12).tobytes()
    assert mask.tobytes() != make_mask("rounded", 100, 100, 30).tobytes()


def test_rounded_radius_is_limited_to_half_side():
    assert (
        make_mask("rounded", 60, 60, 500).tobytes()
        == make_mask("rounded", 60, 60, 30).tobytes()
    )


@pytest.mark.parametrize("kind", list(MaskKind))
def test_every_kind_matches_requested_size(kind):
    mask = make_mask(kind, 37, 23, 4)
    assert mask.size == (37, 23)


def test_shape_registry():
    assert set(SHAPES) == {MaskKind.CIRCLE, MaskKind.ROUNDED, MaskKind.RECT}
    for kind, func in SHAPES.items():
        assert func.kind == kind


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", MaskKind.NONE),
        (None, MaskKind.NONE),
        ("circle", MaskKind.CIRCLE),
        ("rounded", MaskKind.ROUNDED),
        ("rect", MaskKind.RECT),
        ("star", MaskKind.RECT),
    ],
)
def test_parse_kind(value, expected):
    assert MaskKind.parse(value) == expected
