import logging

import pytest

from image_template.api.template import Slot
from image_template.composite.placement import Placement, resolve

logger = logging.getLogger(__name__)


@pytest.mark.parametrize(
    "anchor, expected",
    [
        ((0.0, 0.0), (100, 100)),
        ((0.5, 0.5), (25, 50)),
        ((1.0, 1.0), (-50, 0)),
        ((0.5, 0.0), (25, 100)),
        ((1.5, -0.2), (100, 100)),
    ],
)
def test_resolve(anchor, expected):
    slot = Slot(id="a", x=100, y=100, width=200, height=150,
                anchor_x=anchor[0], anchor_y=anchor[1])
    place = resolve(slot, 150, 100)
    assert place.origin == expected
    assert (place.width, place.height) == (150, 100)


@pytest.mark.parametrize(
    "width, expected",
    [(5, 97), (7, 96), (1, 99), (3, 98)],
)
def test_half_pixel_rounds_up(width, expected):
    slot = Slot(id="a", x=100, y=100, anchor_x=0.5, anchor_y=0.5)
    place = resolve(slot, width, width)
    assert place.origin == (expected, expected)


def test_bbox():
    place = Placement(10, 20, 30, 40)
    assert place.bbox == (10, 20, 40, 60)


def test_resolve_may_leave_canvas():
    slot = Slot(id="a", x=0, y=0, anchor_x=1.0, anchor_y=1.0)
    assert resolve(slot, 40, 30).bbox == (-40, -30, 0, 0)
