#!/usr/bin/env python
import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(here, "src", "image_template", "version.py")) as f:
    exec(f.read(), version)


setup(
    name="image-template",
    version=version["__version__"],
    description="Render images from a base image and a template of image and text slots",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "Pillow>=10.1",
        "numpy",
        "attrs>=22.2",
        "aggdraw",
        "requests",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["image-template=image_template.cli:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
