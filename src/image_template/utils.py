"""
Shared helpers: registries, anchor clamping and box arithmetic.
"""

from typing import Any, Callable, Tuple, TypeVar, Union

T = TypeVar("T")

Box = Tuple[int, int, int, int]


def new_registry(attribute: Union[str, None] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    Mask rasterizers and font resolvers are looked up through such registries,
    keyed by :py:class:`~image_template.constants.MaskKind` and
    :py:class:`~image_template.constants.FontSource` respectively.

    :param attribute: Optional attribute name that receives the key on each
                      registered object.
    :return: Tuple of (registry_dict, register_decorator)

    Example::

        SHAPES, register = new_registry(attribute="kind")

        @register(MaskKind.CIRCLE)
        def circle_path(width, height, radius):
            ...

        # circle_path.kind == MaskKind.CIRCLE
    """
    registry = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register


def clamp_anchor(value: float) -> float:
    """Anchor fractions outside [0, 1] fall back to 0 (top-left)."""
    if value < 0.0 or value > 1.0:
        return 0.0
    return float(value)


def intersect(a: Box, b: Box) -> Box:
    """Calculate intersection of two (left, top, right, bottom) boxes."""
    inter = (max(a[0], b[0]), max(a[1], b[1]), min(a[2], b[2]), min(a[3], b[3]))
    if inter[0] >= inter[2] or inter[1] >= inter[3]:
        return (0, 0, 0, 0)
    return inter
