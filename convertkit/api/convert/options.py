# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass
from typing import Any

from ...config import Config
from ...media.processing import FitMode, ImageFormat
from ...sprite.modes import SpriteMode
from ...utils.fields import ConvertFields, SpriteFields


@dataclass
class ConvertOptions:
    """Strongly typed options for an image conversion request."""

    target_format: ImageFormat
    resize: bool
    width: int | None
    height: int | None
    fit: FitMode
    multiple_files: bool

    @property
    def size(self) -> tuple[int, int] | None:
        """Resize box as (width, height), or None when no resize applies."""
        if self.resize and self.width and self.height:
            return (self.width, self.height)
        return None

    @classmethod
    def from_form_params(cls, params: dict[str, Any], config: Config) -> "ConvertOptions":
        """Create ConvertOptions from form fields with validation and defaults.

        Raises:
            ValueError: missing/unsupported target format, bad resize dimensions, unknown fit
        """
        raw_format = params.get(ConvertFields.TARGET_FORMAT.name)
        if raw_format is None or not str(raw_format).strip():
            raise ValueError("Missing target format")
        if not ConvertFields.TARGET_FORMAT.validate(raw_format):
            raise ValueError(f"Unsupported target format: {raw_format}")
        target_format = ConvertFields.TARGET_FORMAT.transform(raw_format)

        resize = ConvertFields.RESIZE.resolve(params)
        width = height = None
        if resize:
            # Both dimensions must be positive integers, otherwise the request is rejected
            try:
                width = ConvertFields.WIDTH.resolve(params)
                height = ConvertFields.HEIGHT.resolve(params)
            except ValueError:
                width = height = None
            if not width or not height:
                raise ValueError("Resize requires positive integer width and height")
            max_pixels = int(config.get("image.max_pixels"))
            if width * height > max_pixels:
                raise ValueError(f"Resize box {width}x{height} exceeds {max_pixels} pixels")

        return cls(
            target_format=target_format,
            resize=resize,
            width=width,
            height=height,
            fit=ConvertFields.FIT.resolve(params, config),
            multiple_files=ConvertFields.MULTIPLE_FILES.resolve(params),
        )

    def log_info(self, file_count: int) -> None:
        """Log conversion configuration info."""
        size = f"{self.width}x{self.height} fit={self.fit.value}" if self.size else "original"
        logging.getLogger("convert").info(
            f"convert files={file_count} format={self.target_format.value} size={size} "
            f"multiple={self.multiple_files}"
        )


@dataclass
class SpriteOptions:
    """Strongly typed options for a sprite generation request."""

    mode: SpriteMode

    @classmethod
    def from_form_params(cls, params: dict[str, Any], config: Config) -> "SpriteOptions":
        """Create SpriteOptions from form fields; unknown modes raise ValueError."""
        try:
            mode = SpriteFields.SPRITE_FORMAT.resolve(params, config)
        except ValueError:
            raise ValueError(f"Unsupported sprite format: {params.get(SpriteFields.SPRITE_FORMAT.name)}") from None
        return cls(mode=mode)
