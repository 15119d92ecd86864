# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import copy
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from defusedxml import ElementTree as SafeElementTree

from ..media.exceptions import ShapeError


SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XLINK_HREF = f"{{{XLINK_NS}}}href"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

# Root attributes describing the standalone document, not how the shape paints
ROOT_ONLY_ATTRS = {
    "id",
    "x",
    "y",
    "width",
    "height",
    "viewBox",
    "version",
    "baseProfile",
    "enable-background",
    XML_SPACE,
}

# Attributes holding whitespace-separated id references
ID_LIST_ATTRS = ("aria-labelledby", "aria-describedby")

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(?:px)?\s*$")
_URL_REF_RE = re.compile(r"url\(\s*(['\"]?)#([^'\")\s]+)\1\s*\)")
_CSS_ID_RE = re.compile(r"#(-?[_a-zA-Z][\w-]*)")
_CSS_CLASS_RE = re.compile(r"\.(-?[_a-zA-Z][\w-]*)")


def svg_tag(name: str) -> str:
    """Qualified ElementTree tag for an SVG element name."""
    return f"{{{SVG_NS}}}{name}"


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def format_number(value: float) -> str:
    """Render a coordinate without a trailing .0 or float noise."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def parse_length(value: str | None) -> float | None:
    """Parse a unitless or px length; relative units yield None."""
    if not value:
        return None
    m = _LENGTH_RE.match(value)
    if not m:
        return None
    length = float(m.group(1))
    return length if length > 0 else None


def parse_view_box(value: str | None) -> tuple[float, float, float, float] | None:
    if not value:
        return None
    parts = re.split(r"[\s,]+", value.strip())
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    if w <= 0 or h <= 0:
        return None
    return (x, y, w, h)


def shape_id_from_filename(filename: str) -> str:
    """Derive a shape identifier from an upload filename.

    Directory components and a trailing ".svg" are dropped, whitespace
    becomes an underscore, and an empty result falls back to "icon".
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if name.endswith(".svg"):
        name = name[:-4]
    name = re.sub(r"\s+", "_", name.strip())
    return name or "icon"


@dataclass
class Shape:
    """One SVG document registered with the sprite compiler."""

    id: str
    view_box: tuple[float, float, float, float]
    width: float
    height: float
    attrs: dict[str, str]
    children: list[ET.Element]

    @property
    def view_box_str(self) -> str:
        return " ".join(format_number(v) for v in self.view_box)

    @classmethod
    def from_svg(cls, shape_id: str, content: str | bytes, default_size: float = 24) -> "Shape":
        """Parse untrusted SVG text into a shape."""
        try:
            root = SafeElementTree.fromstring(content)
        except Exception as e:
            logging.getLogger("sprite").warning(f"Failed to parse SVG for shape {shape_id!r}: {e}")
            raise ShapeError(f"Invalid SVG: {e}", shape_id) from e

        # Documents without xmlns still render as SVG once inlined
        for el in root.iter():
            if isinstance(el.tag, str) and not el.tag.startswith("{"):
                el.tag = svg_tag(el.tag)

        if local_name(root.tag) != "svg":
            logging.getLogger("sprite").warning(f"Shape {shape_id!r} has root <{local_name(root.tag)}>, expected <svg>")
            raise ShapeError(f"Root element is not <svg>: {local_name(root.tag)}", shape_id)

        width = parse_length(root.get("width"))
        height = parse_length(root.get("height"))
        view_box = parse_view_box(root.get("viewBox"))

        if view_box is None:
            vw = width or height or default_size
            vh = height or width or default_size
            view_box = (0.0, 0.0, vw, vh)

        return cls(
            id=shape_id,
            view_box=view_box,
            width=width or view_box[2],
            height=height or view_box[3],
            attrs={k: v for k, v in root.attrib.items() if k not in ROOT_ONLY_ATTRS},
            children=list(root),
        )

    def _elements(self):
        for child in self.children:
            yield from child.iter()

    def namespace(self, prefix: str, ids: bool = True, classnames: bool = True) -> None:
        """Prefix internal ids and class names so shapes cannot collide in one sprite."""
        id_map: dict[str, str] = {}
        class_map: dict[str, str] = {}

        if ids:
            for el in self._elements():
                el_id = el.get("id")
                if el_id:
                    id_map[el_id] = f"{prefix}{el_id}"

        if classnames:
            for attrib in [self.attrs, *(el.attrib for el in self._elements())]:
                for name in attrib.get("class", "").split():
                    class_map[name] = f"{prefix}{name}"

        if not id_map and not class_map:
            return

        _rewrite_attrs(self.attrs, id_map, class_map)
        for el in self._elements():
            _rewrite_attrs(el.attrib, id_map, class_map)
            if local_name(el.tag) == "style" and el.text:
                el.text = _rewrite_css(el.text, id_map, class_map)

    def to_element(self, tag: str, attrs: dict[str, str]) -> ET.Element:
        """Build a sprite element (symbol, nested svg) carrying a copy of this shape."""
        el = ET.Element(svg_tag(tag), attrs)
        for key, value in self.attrs.items():
            el.attrib.setdefault(key, value)
        el.extend(copy.deepcopy(child) for child in self.children)
        return el


def _rewrite_attrs(attrib: dict[str, str], id_map: dict[str, str], class_map: dict[str, str]) -> None:
    for key, value in list(attrib.items()):
        if key == "id":
            attrib[key] = id_map.get(value, value)
        elif key in ("href", XLINK_HREF):
            if value.startswith("#") and value[1:] in id_map:
                attrib[key] = f"#{id_map[value[1:]]}"
        elif key == "class":
            attrib[key] = " ".join(class_map.get(name, name) for name in value.split())
        elif key in ID_LIST_ATTRS:
            attrib[key] = " ".join(id_map.get(ref, ref) for ref in value.split())
        elif key == "style":
            attrib[key] = _rewrite_css(value, id_map, class_map)
        elif "url(" in value:
            attrib[key] = _URL_REF_RE.sub(lambda m: f"url({m.group(1)}#{id_map.get(m.group(2), m.group(2))}{m.group(1)})", value)


def _rewrite_css(text: str, id_map: dict[str, str], class_map: dict[str, str]) -> str:
    # Only known names are touched, so hex colors survive unless they equal an id
    if id_map:
        text = _CSS_ID_RE.sub(lambda m: f"#{id_map.get(m.group(1), m.group(1))}", text)
    if class_map:
        text = _CSS_CLASS_RE.sub(lambda m: f".{class_map.get(m.group(1), m.group(1))}", text)
    return text
