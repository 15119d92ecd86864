import pytest

from convertkit.sprite import SpriteMode, generate_examples


def test_all_icons_lists_every_shape():
    ids = ["home", "star", "bell"]
    examples = generate_examples(SpriteMode.SYMBOL, ids, "sprite.symbol.svg")

    snippets = examples["所有图标"].split("\n\n")
    assert len(snippets) == 3
    for name, snippet in zip(ids, snippets):
        assert snippet.startswith(f"<!-- {name} -->")
        assert f'href="sprite.symbol.svg#{name}"' in snippet


@pytest.mark.parametrize(
    "mode, labels",
    [
        (SpriteMode.CSS, {"CSS用法", "HTML用法"}),
        (SpriteMode.VIEW, {"HTML用法"}),
        (SpriteMode.DEFS, {"HTML用法"}),
        (SpriteMode.SYMBOL, {"HTML用法", "内联SVG用法"}),
        (SpriteMode.STACK, {"HTML用法"}),
    ],
)
def test_labels_per_mode(mode, labels):
    examples = generate_examples(mode, ["home"], mode.sprite_filename)
    assert set(examples) == labels | {"所有图标", "React组件示例"}


def test_css_example_references_sprite():
    examples = generate_examples(SpriteMode.CSS, ["home"], "sprite.css.svg")
    assert "background-image: url('sprite.css.svg');" in examples["CSS用法"]
    assert examples["HTML用法"] == '<div class="icon-home"></div>'


def test_view_example_uses_view_fragment():
    examples = generate_examples(SpriteMode.VIEW, ["home"], "sprite.view.svg")
    assert 'href="sprite.view.svg#view-home"' in examples["HTML用法"]


def test_defs_example_uses_xlink():
    examples = generate_examples(SpriteMode.DEFS, ["home"], "sprite.defs.svg")
    assert 'xlink:href="sprite.defs.svg#home"' in examples["HTML用法"]


def test_symbol_inline_example_uses_bare_fragment():
    examples = generate_examples(SpriteMode.SYMBOL, ["home", "star"], "sprite.symbol.svg")
    assert '<use href="#home" />' in examples["内联SVG用法"]


def test_react_example_is_parameterized():
    examples = generate_examples(SpriteMode.STACK, ["home"], "sprite.stack.svg")
    react = examples["React组件示例"]
    assert "export const SvgIcon = ({ name, size = 24 }) => (" in react
    assert "<use href={`sprite.stack.svg#${name}`} />" in react
    assert '<SvgIcon name="home" size={32} />' in react


def test_first_icon_fallback():
    examples = generate_examples(SpriteMode.SYMBOL, [], "sprite.symbol.svg")
    assert "sprite.symbol.svg#icon" in examples["HTML用法"]
    assert examples["所有图标"] == ""
