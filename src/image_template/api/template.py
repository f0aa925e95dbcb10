"""
Template and inputs data model.

A template is a JSON document naming a base image, optional output settings
and an ordered list of slots::

    {
        "template_image": "resources/base.png",
        "output": {"width": 1024, "height": 600, "format": "png"},
        "slots": [
            {"id": "avatar", "x": 40, "y": 40, "width": 200, "height": 200,
             "mask": "circle", "mode": "cover"},
            {"id": "title", "x": 0, "y": 0, "width": 180, "height": 80,
             "is_text": true,
             "text_opts": {"font_size": 32, "color": "#ffffff",
                           "align_x": "center", "align_y": "middle"}}
        ]
    }

Inputs are a JSON object mapping slot ids to an image path or literal text.
All model classes are frozen; the compositor only reads them.
"""

import json
import logging
from typing import Any, Dict, Mapping, Tuple

from attrs import define, field, fields
from attrs.converters import to_bool

from image_template.constants import FontSource, MaskKind, ResizeMode
from image_template.errors import TemplateError

logger = logging.getLogger(__name__)


Inputs = Dict[str, str]


def _known(cls: Any, data: Mapping[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        logger.debug("Ignoring unknown %s keys: %s" % (cls.__name__, sorted(unknown)))
    return {key: value for key, value in data.items() if key in names}


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@define(frozen=True)
class TextOptions:
    """
    Text rendering options of a text slot.

    .. py:attribute:: font_source

        Explicit source selector, see
        :py:class:`~image_template.constants.FontSource`. Empty means
        automatic discovery.

    .. py:attribute:: color

        Fill color as a ``#RRGGBB`` hex string; empty means black.

    .. py:attribute:: max_width

        Wrap width in pixels, only used when ``wrap`` is set.
    """

    font_path: str = field(default="", converter=_str)
    font_name: str = field(default="", converter=_str)
    font_source: FontSource = field(default=FontSource.AUTO, converter=FontSource.parse)
    font_url: str = field(default="", converter=_str)
    font_size: float = field(default=0.0, converter=float)
    color: str = field(default="", converter=_str)
    align_x: str = field(default="", converter=_str)
    align_y: str = field(default="", converter=_str)
    wrap: bool = field(default=False, converter=to_bool)
    max_width: int = field(default=0, converter=int)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TextOptions":
        return cls(**_known(cls, data))


def _text_options(value: Any) -> TextOptions:
    if isinstance(value, TextOptions):
        return value
    return TextOptions.from_dict(value or {})


@define(frozen=True)
class Slot:
    """
    A rectangular placement region of the template.

    ``x``, ``y``, ``width`` and ``height`` are canvas pixels. ``anchor_x``
    and ``anchor_y`` locate the reference point as fractions of the content
    (image slots) or of the box (text slots).
    """

    id: str = field(converter=str)
    x: int = field(default=0, converter=int)
    y: int = field(default=0, converter=int)
    width: int = field(default=0, converter=int)
    height: int = field(default=0, converter=int)
    mask: MaskKind = field(default=MaskKind.NONE, converter=MaskKind.parse)
    radius: float = field(default=0.0, converter=float)
    anchor_x: float = field(default=0.0, converter=float)
    anchor_y: float = field(default=0.0, converter=float)
    mode: ResizeMode = field(default=ResizeMode.FIT, converter=ResizeMode.parse)
    opacity: float = field(default=1.0, converter=float)
    is_text: bool = field(default=False, converter=to_bool)
    text_opts: TextOptions = field(factory=TextOptions, converter=_text_options)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Destination box as (left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Slot":
        return cls(**_known(cls, data))


@define(frozen=True)
class Output:
    """Output canvas size and encoding; zeros keep the base image size."""

    width: int = field(default=0, converter=int)
    height: int = field(default=0, converter=int)
    format: str = field(default="", converter=_str)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Output":
        return cls(**_known(cls, data))


def _output(value: Any) -> Output:
    if isinstance(value, Output):
        return value
    return Output.from_dict(value or {})


def _slots(value: Any) -> Tuple[Slot, ...]:
    return tuple(
        slot if isinstance(slot, Slot) else Slot.from_dict(slot) for slot in value or ()
    )


@define(frozen=True)
class Template:
    """Base image reference, output options and slots in painting order."""

    template_image: str = field(converter=str)
    output: Output = field(factory=Output, converter=_output)
    slots: Tuple[Slot, ...] = field(factory=tuple, converter=_slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self):
        return iter(self.slots)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Template":
        """
        Build a template from a decoded JSON mapping.

        :raise TemplateError: when a field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise TemplateError("Template must be an object, got %s" % type(data).__name__)
        try:
            return cls(**_known(cls, data))
        except (TypeError, ValueError, AttributeError) as e:
            raise TemplateError("Invalid template: %s" % e) from e


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise TemplateError("Cannot read %s: %s" % (path, e)) from e
    except json.JSONDecodeError as e:
        raise TemplateError("Invalid JSON in %s: %s" % (path, e)) from e


def parse_template(path: str) -> Template:
    """Read and parse the JSON template file."""
    template = Template.from_dict(_read_json(path))
    logger.debug("Parsed template %s with %d slots" % (path, len(template)))
    return template


def parse_inputs(path: str) -> Inputs:
    """Read and parse the JSON inputs file (slot id -> image path or text)."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise TemplateError("Inputs must be an object, got %s" % type(data).__name__)
    for key, value in data.items():
        if not isinstance(value, str):
            raise TemplateError(
                "Input %r must be a string, got %s" % (key, type(value).__name__)
            )
    return data
