# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Conversion-layer exceptions for clean abstraction from library-specific errors.

These exceptions provide a consistent interface for error handling across the
libraries doing the actual work (Pillow, ElementTree/defusedxml) without exposing
library-specific exception types to the request handlers.

Design Pattern:
    All diagnostic information (file names, library messages) should be logged
    immediately before raising exceptions. The exception attributes identify the
    failing input, they are not meant to be returned to HTTP callers.
"""


class ConversionError(Exception):
    """Base exception for conversion failures.

    Attributes:
        source_name: Original filename of the upload that caused the error
    """

    def __init__(self, message: str, source_name: str | None = None):
        """Initialize conversion error.

        Args:
            message: Human-readable error description
            source_name: Original filename of the failing upload
        """
        super().__init__(message)
        self.source_name = source_name


class ImageDecodeError(ConversionError):
    """Uploaded bytes could not be decoded as an image.

    Raised for:
    - Unrecognized image format
    - Truncated or corrupt data
    - Decompression bomb protection tripping
    """


class ImageEncodeError(ConversionError):
    """Pillow failed to resize or re-encode an image to the target format."""


class SpriteCompileError(ConversionError):
    """Sprite compilation produced no usable output."""


class ShapeError(SpriteCompileError):
    """An SVG shape could not be parsed or is not an <svg> document."""
