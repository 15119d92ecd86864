# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Convert API endpoints for image conversion and SVG sprite generation."""

from .image import handle_convert_image_request
from .sprite import handle_sprite_request

__all__ = [
    "handle_convert_image_request",
    "handle_sprite_request",
]
