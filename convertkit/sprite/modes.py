# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

from enum import Enum


class SpriteMode(Enum):
    """Output shapes a sprite can be compiled into."""

    CSS = "css"  # Packed sprite referenced as a CSS background image
    VIEW = "view"  # Packed sprite plus <view> elements for fragment references
    DEFS = "defs"  # Shapes as nested <svg> inside <defs>
    SYMBOL = "symbol"  # Shapes as <symbol> elements for <use>
    STACK = "stack"  # Shapes stacked, only the :target one displayed

    @property
    def has_stylesheet(self) -> bool:
        return self in (SpriteMode.CSS, SpriteMode.VIEW)

    @property
    def sprite_filename(self) -> str:
        return f"sprite.{self.value}.svg"

    @property
    def stylesheet_filename(self) -> str:
        return f"sprite.{self.value}.css"
