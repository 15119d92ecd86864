# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..media.processing import FitMode, ImageFormat
from ..sprite.modes import SpriteMode


@dataclass
class FieldDef:
    """Definition of a form field with type, validation, and defaults."""

    name: str
    field_type: type
    validator: Callable[[Any], bool] | None = None
    default_factory: Callable[..., Any] | None = None
    transformer: Callable[[Any], Any] | None = None
    description: str = ""

    def validate(self, value: Any) -> bool:
        """Validate a field value."""
        if self.validator:
            try:
                return self.validator(value)
            except (ValueError, TypeError):
                return False
        return True

    def get_default(self, config=None) -> Any:
        """Get default value for this field."""
        if self.default_factory:
            if config is not None:
                return self.default_factory(config)
            else:
                return self.default_factory()
        return None

    def transform(self, value: Any) -> Any:
        """Transform a field value."""
        if self.transformer:
            return self.transformer(value)
        return value

    def resolve(self, params: dict[str, Any], config=None) -> Any:
        """Read, default, validate and transform this field from form params.

        Blank values count as absent. Raises ValueError for invalid values.
        """
        value = params.get(self.name)
        if value is None or (isinstance(value, str) and not value.strip()):
            value = self.get_default(config)
            if value is None:
                return None

        if not self.validate(value):
            raise ValueError(f"Invalid {self.name}: {value}")

        return self.transform(value)


def parse_bool(value: Any) -> bool:
    """Interpret HTML form booleans ("true", "on", "1", ...)."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_int(value: Any) -> int:
    return int(str(value).strip())


class ConvertFields:
    """Fields of the image conversion form."""

    TARGET_FORMAT = FieldDef(
        "targetFormat",
        str,
        lambda x: str(x).strip().lower() in {f.value for f in ImageFormat},
        transformer=lambda x: ImageFormat(str(x).strip().lower()),
        description="Target image format",
    )

    MULTIPLE_FILES = FieldDef(
        "multipleFiles",
        bool,
        default_factory=lambda: False,
        transformer=parse_bool,
        description="Always answer with a zip archive",
    )

    RESIZE = FieldDef(
        "resize", bool, default_factory=lambda: False, transformer=parse_bool, description="Resize before encoding"
    )

    WIDTH = FieldDef("width", int, lambda x: _parse_int(x) > 0, transformer=_parse_int, description="Resize width")
    HEIGHT = FieldDef("height", int, lambda x: _parse_int(x) > 0, transformer=_parse_int, description="Resize height")

    FIT = FieldDef(
        "fit",
        str,
        lambda x: str(x).strip().lower() in {m.value for m in FitMode},
        default_factory=lambda config: config.get("image.fit"),
        transformer=lambda x: FitMode(str(x).strip().lower()),
        description="Resize fit mode",
    )


class SpriteFields:
    """Fields of the sprite generation form."""

    SPRITE_FORMAT = FieldDef(
        "spriteFormat",
        str,
        lambda x: str(x).strip() in {m.value for m in SpriteMode},
        default_factory=lambda config: config.get("sprite.default_mode"),
        transformer=lambda x: SpriteMode(str(x).strip()),
        description="Sprite render mode",
    )
