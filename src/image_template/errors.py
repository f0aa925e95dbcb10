"""
Exception types raised by image_template.

Only structural failures raise: a template or inputs document that cannot be
parsed, or a base image that cannot be loaded. Per-slot problems are reported
as warnings by :py:mod:`image_template.composite` and never abort a render.
"""


class ImageTemplateError(Exception):
    """Base class of all image_template errors."""


class TemplateError(ImageTemplateError, ValueError):
    """Template or inputs document is unreadable or malformed."""


class RenderError(ImageTemplateError):
    """Render cannot produce an output image."""
