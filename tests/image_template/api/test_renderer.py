import logging

import pytest
from PIL import Image

from image_template.api.renderer import (
    RenderResult,
    create_canvas,
    render_file,
    render_template,
)
from image_template.api.template import Template
from image_template.errors import RenderError, TemplateError

from ..utils import MemoryLoader, make_project, save, solid, write_json

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)

PHOTO = {"id": "photo", "x": 100, "y": 100, "width": 200, "height": 150}


def _template(**kwargs):
    data = {"template_image": "base.png", "slots": [PHOTO]}
    data.update(kwargs)
    return Template.from_dict(data)


def _loader():
    return MemoryLoader({
        "base.png": solid((400, 300), WHITE),
        "red.png": solid((100, 100)),
    })


def test_create_canvas_keeps_base_size():
    loader = _loader()
    canvas = create_canvas(_template(), loader)
    assert canvas.size == (400, 300)
    assert canvas.mode == "RGBA"
    assert canvas is not loader.images["base.png"]


def test_create_canvas_stretches_to_output():
    canvas = create_canvas(_template(output={"width": 1024, "height": 600}), _loader())
    assert canvas.size == (1024, 600)
    assert canvas.getpixel((1000, 500)) == WHITE


def test_create_canvas_ignores_partial_output():
    canvas = create_canvas(_template(output={"width": 1024}), _loader())
    assert canvas.size == (400, 300)


def test_create_canvas_rgb_base():
    loader = MemoryLoader({"base.png": Image.new("RGB", (10, 10), (1, 2, 3))})
    canvas = create_canvas(_template(), loader)
    assert canvas.getpixel((0, 0)) == (1, 2, 3, 255)


def test_missing_base_image():
    with pytest.raises(RenderError):
        render_template(_template(), {}, loader=MemoryLoader({}))


def test_invalid_base_path():
    template = Template.from_dict({"template_image": "base\x00.png"})
    with pytest.raises(RenderError):
        render_template(template, {})


def test_render_skips_invalid_slot_path(tmp_path, settings):
    base = save(solid((40, 30), WHITE), tmp_path / "base.png")
    template = _template(template_image=base)
    result = render_template(template, {"photo": "bad\x00.png"}, settings)
    assert len(result.warnings) == 1
    assert result.image.size == (40, 30)


def test_render_template(settings):
    loader = _loader()
    result = render_template(_template(), {"photo": "red.png"}, settings, loader=loader)
    assert isinstance(result, RenderResult)
    assert result.warnings == []
    assert result.image.getpixel((100, 100)) == RED
    assert result.image.getpixel((249, 249)) == RED
    assert result.image.getpixel((250, 250)) == WHITE
    assert loader.images["base.png"].getpixel((100, 100)) == WHITE


def test_render_skips_missing_inputs(settings):
    loader = _loader()
    result = render_template(_template(), {"other": "red.png"}, settings, loader=loader)
    assert result.warnings == []
    assert result.image.tobytes() == loader.images["base.png"].tobytes()
    assert loader.calls == ["base.png"]


def test_render_collects_warnings(settings):
    template = _template(slots=[PHOTO, dict(PHOTO, id="second")])
    result = render_template(
        template, {"photo": "gone.png", "second": "red.png"}, settings, loader=_loader()
    )
    assert len(result.warnings) == 1
    assert "photo" in result.warnings[0]
    assert result.image.getpixel((150, 150)) == RED


def test_render_text_slot(settings):
    template = _template(slots=[
        {"id": "title", "x": 0, "y": 0, "width": 400, "height": 300, "is_text": True,
         "text_opts": {"font_size": 40, "font_path": "/nonexistent.ttf"}},
    ])
    result = render_template(template, {"title": "Hello"}, settings, loader=_loader())
    assert result.warnings == ["slot title: failed to load font, using builtin font"]
    assert result.image.tobytes() != solid((400, 300), WHITE).tobytes()


def test_render_result_save(tmp_path):
    result = RenderResult(solid((10, 10)))
    path = str(tmp_path / "out.jpg")
    result.save(path)
    with Image.open(path) as image:
        assert image.format == "JPEG"
    result.save(path, "png")
    with Image.open(path) as image:
        assert image.format == "PNG"


def test_render_file(tmp_path, settings):
    template_path, inputs_path = make_project(
        tmp_path, slots=[PHOTO], output={"format": "bmp"}
    )
    output_path = str(tmp_path / "out.png")
    result = render_file(template_path, inputs_path, output_path, settings)
    assert result.warnings == []
    with Image.open(output_path) as image:
        assert image.format == "BMP"
        assert image.size == (300, 200)
        assert image.convert("RGBA").getpixel((150, 150)) == RED


def test_render_file_missing_photo(tmp_path, settings):
    template_path, inputs_path = make_project(
        tmp_path, slots=[PHOTO], inputs={"photo": str(tmp_path / "gone.png")}
    )
    output_path = str(tmp_path / "out.png")
    result = render_file(template_path, inputs_path, output_path, settings)
    assert len(result.warnings) == 1
    with Image.open(output_path) as image:
        assert image.size == (300, 200)


def test_render_file_invalid_template(tmp_path, settings):
    template_path = write_json({"slots": []}, tmp_path / "template.json")
    inputs_path = write_json({}, tmp_path / "inputs.json")
    with pytest.raises(TemplateError):
        render_file(template_path, inputs_path, str(tmp_path / "out.png"), settings)


def test_render_file_unwritable_output(tmp_path, settings):
    template_path, inputs_path = make_project(tmp_path)
    output_path = str(tmp_path / "no" / "such" / "dir" / "out.png")
    with pytest.raises(RenderError):
        render_file(template_path, inputs_path, output_path, settings)
