import pytest

from convertkit.api.convert.options import ConvertOptions, SpriteOptions
from convertkit.media import FitMode, ImageFormat
from convertkit.sprite import SpriteMode
from convertkit.utils.fields import parse_bool


def test_minimal_convert_options(config):
    options = ConvertOptions.from_form_params({"targetFormat": "webp"}, config)
    assert options.target_format is ImageFormat.WEBP
    assert options.resize is False
    assert options.size is None
    assert options.fit is FitMode.COVER
    assert options.multiple_files is False


def test_missing_target_format_rejected(config):
    with pytest.raises(ValueError, match="Missing target format"):
        ConvertOptions.from_form_params({"targetFormat": "  "}, config)


@pytest.mark.parametrize("fmt", ["svg", "bmp", "tiff", ""])
def test_unsupported_target_format_rejected(config, fmt):
    with pytest.raises(ValueError):
        ConvertOptions.from_form_params({"targetFormat": fmt}, config)


def test_target_format_is_case_insensitive(config):
    options = ConvertOptions.from_form_params({"targetFormat": "PNG"}, config)
    assert options.target_format is ImageFormat.PNG


def test_resize_with_positive_dimensions(config):
    options = ConvertOptions.from_form_params(
        {"targetFormat": "png", "resize": "true", "width": "120", "height": "80"}, config
    )
    assert options.size == (120, 80)


@pytest.mark.parametrize(
    "dims",
    [
        {"width": "0", "height": "80"},
        {"width": "120", "height": "-5"},
        {"width": "120"},
        {},
        {"width": "abc", "height": "80"},
        {"width": "12.5", "height": "80"},
    ],
)
def test_resize_requires_positive_integer_dimensions(config, dims):
    params = {"targetFormat": "png", "resize": "true", **dims}
    with pytest.raises(ValueError, match="positive integer width and height"):
        ConvertOptions.from_form_params(params, config)


def test_resize_box_over_pixel_limit_rejected(config):
    params = {"targetFormat": "png", "resize": "true", "width": "200000", "height": "200000"}
    with pytest.raises(ValueError, match="exceeds"):
        ConvertOptions.from_form_params(params, config)


def test_pixel_limit_from_config(config):
    config.set("image.max_pixels", 100)
    params = {"targetFormat": "png", "resize": "true", "width": "10", "height": "10"}
    assert ConvertOptions.from_form_params(params, config).size == (10, 10)

    params["height"] = "11"
    with pytest.raises(ValueError, match="10x11 exceeds 100 pixels"):
        ConvertOptions.from_form_params(params, config)


def test_dimensions_ignored_without_resize(config):
    options = ConvertOptions.from_form_params(
        {"targetFormat": "png", "resize": "false", "width": "0", "height": "0"}, config
    )
    assert options.resize is False
    assert options.size is None


def test_fit_from_form_and_config(config):
    options = ConvertOptions.from_form_params({"targetFormat": "png", "fit": "inside"}, config)
    assert options.fit is FitMode.INSIDE

    config.set("image.fit", "fill")
    options = ConvertOptions.from_form_params({"targetFormat": "png"}, config)
    assert options.fit is FitMode.FILL


def test_unknown_fit_rejected(config):
    with pytest.raises(ValueError, match="Invalid fit"):
        ConvertOptions.from_form_params({"targetFormat": "png", "fit": "stretchy"}, config)


def test_multiple_files_flag(config):
    options = ConvertOptions.from_form_params({"targetFormat": "gif", "multipleFiles": "true"}, config)
    assert options.multiple_files is True


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("on", True), ("1", True), ("TRUE", True), ("false", False), ("0", False), ("", False)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_sprite_mode_defaults_to_symbol(config):
    assert SpriteOptions.from_form_params({}, config).mode is SpriteMode.SYMBOL
    assert SpriteOptions.from_form_params({"spriteFormat": ""}, config).mode is SpriteMode.SYMBOL


@pytest.mark.parametrize("mode", ["css", "view", "defs", "symbol", "stack"])
def test_sprite_modes_accepted(config, mode):
    assert SpriteOptions.from_form_params({"spriteFormat": mode}, config).mode.value == mode


def test_sprite_mode_invalid(config):
    with pytest.raises(ValueError, match="Unsupported sprite format: invalid"):
        SpriteOptions.from_form_params({"spriteFormat": "invalid"}, config)
