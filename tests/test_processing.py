import io

import numpy as np
import pytest
from PIL import Image

from convertkit.config import Config
from convertkit.media import (
    FitMode,
    ImageDecodeError,
    ImageFormat,
    convert_image,
    decode_image,
    encode_image,
    to_8bit,
)


def _open(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


@pytest.mark.parametrize(
    "target, pil_name",
    [
        (ImageFormat.PNG, "PNG"),
        (ImageFormat.JPEG, "JPEG"),
        (ImageFormat.WEBP, "WEBP"),
        (ImageFormat.GIF, "GIF"),
    ],
)
def test_convert_encodes_target_format(make_image, target, pil_name):
    out = _open(convert_image(make_image(), target))
    assert out.format == pil_name
    assert out.size == (100, 100)


def test_content_type_matches_format():
    assert ImageFormat.JPEG.content_type == "image/jpeg"
    assert ImageFormat.WEBP.content_type == "image/webp"


def test_no_resize_keeps_dimensions(make_image):
    out = _open(convert_image(make_image(size=(64, 32)), ImageFormat.PNG, size=None))
    assert out.size == (64, 32)


@pytest.mark.parametrize(
    "fit, expected",
    [
        (FitMode.COVER, (50, 20)),
        (FitMode.CONTAIN, (50, 20)),
        (FitMode.FILL, (50, 20)),
        (FitMode.INSIDE, (20, 20)),
    ],
)
def test_resize_fit_modes(make_image, fit, expected):
    out = _open(convert_image(make_image(size=(100, 100)), ImageFormat.PNG, size=(50, 20), fit=fit))
    assert out.size == expected


def test_contain_pads_transparent_for_alpha_images(make_image):
    src = make_image(size=(100, 100), color=(0, 0, 255, 255), mode="RGBA")
    out = _open(convert_image(src, ImageFormat.PNG, size=(50, 20), fit=FitMode.CONTAIN))
    assert out.mode == "RGBA"
    assert out.getpixel((0, 10))[3] == 0
    assert out.getpixel((25, 10))[3] == 255


def test_contain_pads_with_background_for_opaque_images(make_image, config):
    config.set("image.background", "white")
    out = _open(convert_image(make_image(size=(100, 100)), ImageFormat.PNG, size=(50, 20), fit=FitMode.CONTAIN))
    assert out.getpixel((0, 10)) == (255, 255, 255)


def test_jpeg_flattens_alpha_onto_background(make_image):
    src = make_image(size=(16, 16), color=(255, 0, 0, 0), mode="RGBA")
    out = _open(convert_image(src, ImageFormat.JPEG))
    assert out.mode == "RGB"
    r, g, b = out.getpixel((8, 8))
    assert max(r, g, b) < 10


def test_webp_keeps_alpha(make_image):
    src = make_image(size=(16, 16), color=(0, 255, 0, 128), mode="RGBA")
    out = _open(convert_image(src, ImageFormat.WEBP))
    assert out.mode == "RGBA"


def test_paletted_input_with_transparency_resizes(make_image):
    img = Image.new("P", (40, 40), 1)
    img.putpalette([0, 0, 0, 255, 0, 0] + [0] * 762)
    img.info["transparency"] = 0
    buf = io.BytesIO()
    img.save(buf, format="GIF", transparency=0)

    out = _open(convert_image(buf.getvalue(), ImageFormat.PNG, size=(20, 20)))
    assert out.size == (20, 20)


def test_cmyk_input_encodes_to_png():
    img = Image.new("CMYK", (10, 10), (0, 255, 255, 0))
    buf = io.BytesIO()
    img.save(buf, format="JPEG")

    out = _open(convert_image(buf.getvalue(), ImageFormat.PNG))
    assert out.mode == "RGB"


def test_gamma_correct_resize(make_image, config):
    config.set("image.gamma_correct", True)
    src = make_image(size=(80, 40), color=(128, 64, 32, 200), mode="RGBA")
    out = _open(convert_image(src, ImageFormat.PNG, size=(40, 20), fit=FitMode.FILL))
    assert out.size == (40, 20)
    assert out.mode == "RGBA"


def test_unsharp_applied_without_error(make_image, config):
    config.set("image.unsharp.amount", 0.5)
    out = _open(convert_image(make_image(size=(60, 60)), ImageFormat.PNG, size=(30, 30)))
    assert out.size == (30, 30)


def test_decode_rejects_garbage():
    with pytest.raises(ImageDecodeError) as exc_info:
        decode_image(b"definitely not an image", source_name="broken.png")
    assert exc_info.value.source_name == "broken.png"


def test_reencoding_same_format_is_stable(make_image):
    # A -> PNG -> PNG decodes to the same pixels as A -> PNG
    once = convert_image(make_image(size=(32, 32), color=(10, 20, 30)), ImageFormat.PNG)
    twice = convert_image(once, ImageFormat.PNG)

    direct = encode_image(decode_image(make_image(size=(32, 32), color=(10, 20, 30))), ImageFormat.PNG)
    assert _open(twice).tobytes() == _open(direct).tobytes()


def test_background_config_fallback(make_image, config):
    config.set("image.background", "not-a-color")
    src = make_image(size=(8, 8), color=(255, 0, 0, 0), mode="RGBA")
    out = _open(convert_image(src, ImageFormat.JPEG))
    assert out.size == (8, 8)


def _gray16_gradient(size=64) -> bytes:
    # Every row runs 0 .. 65535 left to right
    row = np.linspace(0, 65535, size).astype(np.uint16)
    img = Image.fromarray(np.tile(row, (size, 1)))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.mark.parametrize("target", [ImageFormat.JPEG, ImageFormat.WEBP, ImageFormat.GIF])
def test_16bit_grayscale_scaled_not_clipped(target):
    out = _open(convert_image(_gray16_gradient(), target)).convert("L")

    assert out.getpixel((0, 32)) <= 8
    assert 110 <= out.getpixel((32, 32)) <= 150
    assert out.getpixel((63, 32)) >= 245


def test_16bit_grayscale_resize_keeps_gradient():
    out = _open(convert_image(_gray16_gradient(), ImageFormat.PNG, size=(32, 32), fit=FitMode.FILL)).convert("L")

    assert out.size == (32, 32)
    assert out.getpixel((0, 16)) <= 8
    assert 110 <= out.getpixel((16, 16)) <= 150


def test_16bit_grayscale_png_without_resize_keeps_depth():
    out = _open(convert_image(_gray16_gradient(), ImageFormat.PNG))

    assert out.mode in ("I", "I;16")
    assert out.getpixel((63, 0)) == 65535
    assert out.getpixel((32, 0)) == int(np.linspace(0, 65535, 64).astype(np.uint16)[32])


def test_to_8bit_float_and_passthrough():
    floats = Image.fromarray(np.full((4, 4), 0.5, dtype=np.float32))
    assert floats.mode == "F"
    assert to_8bit(floats).getpixel((0, 0)) == 128

    rgb = Image.new("RGB", (4, 4))
    assert to_8bit(rgb) is rgb


def test_cover_crops_extreme_aspect_ratio(make_image):
    out = _open(convert_image(make_image(size=(2, 400)), ImageFormat.PNG, size=(300, 300)))
    assert out.size == (300, 300)
