# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Usage-example snippets shown next to a generated sprite.

Labels are user-facing (the upload page is Chinese), snippets are plain
strings referencing the sprite file and the first shape id.
"""

from collections.abc import Callable

from .modes import SpriteMode


LABEL_HTML = "HTML用法"
LABEL_CSS = "CSS用法"
LABEL_INLINE = "内联SVG用法"
LABEL_ALL_ICONS = "所有图标"
LABEL_REACT = "React组件示例"

DEFAULT_ICON = "icon"


def _css_examples(sprite_filename: str, icon: str) -> dict[str, str]:
    return {
        LABEL_CSS: f""".icon-{icon} {{
  width: 24px;
  height: 24px;
  background-image: url('{sprite_filename}');
  background-position: 0 0;
  background-repeat: no-repeat;
}}""",
        LABEL_HTML: f'<div class="icon-{icon}"></div>',
    }


def _view_examples(sprite_filename: str, icon: str) -> dict[str, str]:
    return {
        LABEL_HTML: f"""<svg>
  <use href="{sprite_filename}#view-{icon}" />
</svg>""",
    }


def _defs_examples(sprite_filename: str, icon: str) -> dict[str, str]:
    return {
        LABEL_HTML: f"""<svg width="24" height="24">
  <use xlink:href="{sprite_filename}#{icon}" />
</svg>""",
    }


def _symbol_examples(sprite_filename: str, icon: str) -> dict[str, str]:
    return {
        LABEL_HTML: f"""<svg width="24" height="24">
  <use href="{sprite_filename}#{icon}" />
</svg>""",
        LABEL_INLINE: f"""<!-- 将雪碧图直接内联到HTML中 -->
<!-- 然后可以这样使用图标 -->
<svg width="24" height="24">
  <use href="#{icon}" />
</svg>""",
    }


def _stack_examples(sprite_filename: str, icon: str) -> dict[str, str]:
    return {
        LABEL_HTML: f"""<svg>
  <use href="{sprite_filename}#{icon}" />
</svg>""",
    }


MODE_EXAMPLES: dict[SpriteMode, Callable[[str, str], dict[str, str]]] = {
    SpriteMode.CSS: _css_examples,
    SpriteMode.VIEW: _view_examples,
    SpriteMode.DEFS: _defs_examples,
    SpriteMode.SYMBOL: _symbol_examples,
    SpriteMode.STACK: _stack_examples,
}


def all_icons_example(shape_ids: list[str], sprite_filename: str) -> str:
    """One commented <use> snippet per shape, separated by blank lines."""
    return "\n\n".join(
        f"""<!-- {name} -->
<svg width="24" height="24">
  <use href="{sprite_filename}#{name}" />
</svg>"""
        for name in shape_ids
    )


def react_example(sprite_filename: str, icon: str) -> str:
    return f"""// SvgIcon.jsx
import React from 'react';

export const SvgIcon = ({{ name, size = 24 }}) => (
  <svg width={{size}} height={{size}}>
    <use href={{`{sprite_filename}#${{name}}`}} />
  </svg>
);

// 使用方式
<SvgIcon name="{icon}" size={{32}} />"""


def generate_examples(mode: SpriteMode, shape_ids: list[str], sprite_filename: str) -> dict[str, str]:
    """Build the label -> snippet mapping for a compiled sprite."""
    icon = shape_ids[0] if shape_ids else DEFAULT_ICON

    examples = MODE_EXAMPLES[mode](sprite_filename, icon)
    examples[LABEL_ALL_ICONS] = all_icons_example(shape_ids, sprite_filename)
    examples[LABEL_REACT] = react_example(sprite_filename, icon)
    return examples
