# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""SVG sprite compilation and usage-example synthesis."""

from .compiler import ModeResult, Resource, SpriteCompiler, SpriteConfig
from .examples import generate_examples
from .modes import SpriteMode
from .shapes import Shape, shape_id_from_filename


__all__ = [
    "ModeResult",
    "Resource",
    "Shape",
    "SpriteCompiler",
    "SpriteConfig",
    "SpriteMode",
    "generate_examples",
    "shape_id_from_filename",
]
