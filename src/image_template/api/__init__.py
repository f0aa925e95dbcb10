"""
High-level API for rendering image templates.

Key modules:

- :py:mod:`image_template.api.template`: Template, Slot and inputs model
- :py:mod:`image_template.api.renderer`: Render driver and result
- :py:mod:`image_template.api.pil_io`: PIL/Pillow image I/O utilities

Example usage::

    from image_template.api.renderer import render_file

    result = render_file("template.json", "inputs.json", "output.png")
    for warning in result.warnings:
        print(warning)
"""
