# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass

from ..config import Config
from ..media.exceptions import SpriteCompileError
from .modes import SpriteMode
from .shapes import Shape, format_number, shape_id_from_filename, svg_tag


XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

# Only the fragment-targeted child of a stack sprite is displayed
STACK_STYLE = ":root>svg{display:none}:root>svg:target{display:block}"


@dataclass
class Resource:
    """A compiled text artifact and the filename it should be saved as."""

    filename: str
    contents: str


@dataclass
class ModeResult:
    """Output of one render mode: the sprite plus an optional stylesheet."""

    sprite: Resource
    css: Resource | None = None


@dataclass
class SpriteConfig:
    """Compiler settings for a single sprite render."""

    mode: SpriteMode
    shape_size: float = 24
    namespace_ids: bool = True
    namespace_classnames: bool = True
    layout: str = "vertical"
    padding: float = 0
    css_prefix: str = "svg-"
    css_dimensions: str = "-dims"

    @classmethod
    def from_config(cls, mode: SpriteMode, config: Config) -> "SpriteConfig":
        cfg = config.get("sprite")
        css = cfg.get("css", {})
        return cls(
            mode=mode,
            shape_size=float(cfg.get("shape_size", 24)),
            namespace_ids=bool(cfg.get("namespace_ids", True)),
            namespace_classnames=bool(cfg.get("namespace_classnames", True)),
            layout=str(css.get("layout", "vertical")).lower(),
            padding=max(0.0, float(css.get("padding", 0))),
            css_prefix=str(css.get("prefix", "svg-")),
            css_dimensions=str(css.get("dimensions", "-dims")),
        )


class SpriteCompiler:
    """Collects SVG shapes and compiles them into a sprite for one mode."""

    def __init__(self, config: SpriteConfig):
        self.config = config
        self.shapes: list[Shape] = []

    @property
    def shape_ids(self) -> list[str]:
        return [shape.id for shape in self.shapes]

    def _unique_id(self, base: str) -> str:
        taken = set(self.shape_ids)
        if base not in taken:
            return base
        n = 2
        while f"{base}-{n}" in taken:
            n += 1
        return f"{base}-{n}"

    def add(self, filename: str, content: str | bytes) -> Shape:
        """Register an SVG document under an id derived from its filename."""
        shape_id = self._unique_id(shape_id_from_filename(filename))
        shape = Shape.from_svg(shape_id, content, self.config.shape_size)

        if self.config.namespace_ids or self.config.namespace_classnames:
            shape.namespace(
                f"{shape_id}_", ids=self.config.namespace_ids, classnames=self.config.namespace_classnames
            )

        self.shapes.append(shape)
        logging.getLogger("sprite").debug(
            f"Added shape {shape_id!r} from {filename!r} ({format_number(shape.width)}x{format_number(shape.height)})"
        )
        return shape

    def compile(self) -> dict[str, ModeResult]:
        """Render every configured mode, keyed by mode name."""
        if not self.shapes:
            raise SpriteCompileError("No shapes registered")

        mode = self.config.mode
        result = {mode.value: RENDERERS[mode](self.shapes, self.config)}
        logging.getLogger("sprite").info(f"Compiled {len(self.shapes)} shapes into {mode.sprite_filename}")
        return result


def _serialize(root: ET.Element) -> str:
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def _sprite_resource(root: ET.Element, config: SpriteConfig) -> Resource:
    return Resource(config.mode.sprite_filename, _serialize(root))


def render_symbol(shapes: list[Shape], config: SpriteConfig) -> ModeResult:
    root = ET.Element(svg_tag("svg"))
    for shape in shapes:
        root.append(shape.to_element("symbol", {"id": shape.id, "viewBox": shape.view_box_str}))
    return ModeResult(sprite=_sprite_resource(root, config))


def render_defs(shapes: list[Shape], config: SpriteConfig) -> ModeResult:
    root = ET.Element(svg_tag("svg"))
    defs = ET.SubElement(root, svg_tag("defs"))
    for shape in shapes:
        defs.append(shape.to_element("svg", {"id": shape.id, "viewBox": shape.view_box_str}))
    return ModeResult(sprite=_sprite_resource(root, config))


def render_stack(shapes: list[Shape], config: SpriteConfig) -> ModeResult:
    root = ET.Element(svg_tag("svg"))
    style = ET.SubElement(root, svg_tag("style"))
    style.text = STACK_STYLE
    for shape in shapes:
        root.append(shape.to_element("svg", {"id": shape.id, "viewBox": shape.view_box_str}))
    return ModeResult(sprite=_sprite_resource(root, config))


def pack_shapes(shapes: list[Shape], layout: str, padding: float) -> tuple[list[tuple[Shape, float, float]], float, float]:
    """Place shapes one after another along the layout axis.

    Returns:
        (placements, total_width, total_height) where each placement is (shape, x, y)
    """
    horizontal = layout == "horizontal"
    placements: list[tuple[Shape, float, float]] = []
    offset = 0.0

    for shape in shapes:
        if horizontal:
            placements.append((shape, offset, 0.0))
            offset += shape.width + padding
        else:
            placements.append((shape, 0.0, offset))
            offset += shape.height + padding

    extent = max(0.0, offset - padding)
    if horizontal:
        return placements, extent, max(shape.height for shape in shapes)
    return placements, max(shape.width for shape in shapes), extent


def _background_offset(value: float) -> str:
    return "0" if value == 0 else f"-{format_number(value)}px"


def render_stylesheet(placements: list[tuple[Shape, float, float]], config: SpriteConfig) -> str:
    """CSS rules positioning the packed sprite as a background per shape."""
    rules = []
    for shape, x, y in placements:
        selector = f".{config.css_prefix}{shape.id}"
        rules.append(
            f"{selector} {{\n"
            f'\tbackground: url("{config.mode.sprite_filename}") {_background_offset(x)} {_background_offset(y)} no-repeat;\n'
            f"}}"
        )
        if config.css_dimensions:
            rules.append(
                f"{selector}{config.css_dimensions} {{\n"
                f"\twidth: {format_number(shape.width)}px;\n"
                f"\theight: {format_number(shape.height)}px;\n"
                f"}}"
            )
    return "\n\n".join(rules) + "\n"


def _render_packed(shapes: list[Shape], config: SpriteConfig, views: bool) -> ModeResult:
    placements, width, height = pack_shapes(shapes, config.layout, config.padding)
    w, h = format_number(width), format_number(height)
    root = ET.Element(svg_tag("svg"), {"width": w, "height": h, "viewBox": f"0 0 {w} {h}"})

    for shape, x, y in placements:
        sw, sh = format_number(shape.width), format_number(shape.height)
        if views:
            ET.SubElement(
                root,
                svg_tag("view"),
                {"id": f"view-{shape.id}", "viewBox": f"{format_number(x)} {format_number(y)} {sw} {sh}"},
            )
        root.append(
            shape.to_element(
                "svg",
                {
                    "id": shape.id,
                    "width": sw,
                    "height": sh,
                    "viewBox": shape.view_box_str,
                    "x": format_number(x),
                    "y": format_number(y),
                },
            )
        )

    return ModeResult(
        sprite=_sprite_resource(root, config),
        css=Resource(config.mode.stylesheet_filename, render_stylesheet(placements, config)),
    )


def render_css(shapes: list[Shape], config: SpriteConfig) -> ModeResult:
    return _render_packed(shapes, config, views=False)


def render_view(shapes: list[Shape], config: SpriteConfig) -> ModeResult:
    return _render_packed(shapes, config, views=True)


RENDERERS: dict[SpriteMode, Callable[[list[Shape], SpriteConfig], ModeResult]] = {
    SpriteMode.CSS: render_css,
    SpriteMode.VIEW: render_view,
    SpriteMode.DEFS: render_defs,
    SpriteMode.SYMBOL: render_symbol,
    SpriteMode.STACK: render_stack,
}
