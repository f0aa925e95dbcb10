"""
Destination placement of image slot content.
"""

import math
from typing import Tuple

from attrs import define

from image_template.api.template import Slot
from image_template.utils import Box, clamp_anchor


@define(frozen=True)
class Placement:
    """Content origin on the canvas and the rectangle it covers."""

    x: int
    y: int
    width: int
    height: int

    @property
    def origin(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def bbox(self) -> Box:
        """Destination rectangle as (left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def resolve(slot: Slot, width: int, height: int) -> Placement:
    """
    Place ``width`` x ``height`` content so that its anchor point lands on the
    slot's (x, y).

    The anchor fractions are taken from the slot and clamped; the resulting
    rectangle may extend past the canvas.
    """
    ax = clamp_anchor(slot.anchor_x)
    ay = clamp_anchor(slot.anchor_y)
    x = slot.x - _round_half_up(width * ax)
    y = slot.y - _round_half_up(height * ay)
    return Placement(x, y, width, height)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
