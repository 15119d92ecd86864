# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Raster image decoding, resizing and encoding."""

# Conversion-layer exceptions (clean abstraction from library-specific errors)
from .exceptions import (
    ConversionError,
    ImageDecodeError,
    ImageEncodeError,
    ShapeError,
    SpriteCompileError,
)
from .processing import (
    FitMode,
    ImageFormat,
    convert_image,
    decode_image,
    encode_image,
    resize_image,
    to_8bit,
)


__all__ = [
    "ConversionError",
    "FitMode",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageFormat",
    "ShapeError",
    "SpriteCompileError",
    "convert_image",
    "decode_image",
    "encode_image",
    "resize_image",
    "to_8bit",
]
