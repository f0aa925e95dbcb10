import json
import logging
from typing import Dict, Tuple

from PIL import Image

logging.basicConfig(level=logging.DEBUG)

Color = Tuple[int, int, int, int]


def solid(size: Tuple[int, int], color: Color = (255, 0, 0, 255)) -> Image.Image:
    return Image.new("RGBA", size, color)


def gradient(size: Tuple[int, int]) -> Image.Image:
    """Deterministic non-uniform RGBA image."""
    width, height = size
    image = Image.new("RGBA", size)
    image.putdata(
        [
            (x * 255 // max(1, width - 1), y * 255 // max(1, height - 1), 128, 255)
            for y in range(height)
            for x in range(width)
        ]
    )
    return image


def save(image: Image.Image, path) -> str:
    image.save(str(path))
    return str(path)


class MemoryLoader(object):
    """Image loader backed by a dict, raising like a missing file otherwise."""

    def __init__(self, images: Dict[str, Image.Image]):
        self.images = images
        self.calls = []

    def __call__(self, path: str) -> Image.Image:
        self.calls.append(path)
        if path not in self.images:
            raise FileNotFoundError(2, "No such file or directory", path)
        return self.images[path]


def write_json(data, path) -> str:
    with open(str(path), "w", encoding="utf-8") as f:
        json.dump(data, f)
    return str(path)


def make_project(tmp_path, slots=(), output=None, inputs=None):
    """Base image, template and inputs files under ``tmp_path``."""
    base = save(solid((300, 200), (255, 255, 255, 255)), tmp_path / "base.png")
    photo = save(solid((100, 100)), tmp_path / "photo.png")
    template = {"template_image": base, "slots": list(slots)}
    if output is not None:
        template["output"] = output
    template_path = write_json(template, tmp_path / "template.json")
    if inputs is None:
        inputs = {"photo": photo}
    inputs_path = write_json(inputs, tmp_path / "inputs.json")
    return template_path, inputs_path
