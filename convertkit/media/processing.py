# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import io
import logging
from enum import Enum

import numpy as np
from PIL import Image, ImageCms, ImageColor, ImageFilter
from PIL.ImageCms import Intent

from ..config import Config
from .exceptions import ImageDecodeError, ImageEncodeError


# Module-level LUT caches for gamma correction
_LINEAR_LUT: np.ndarray | None = None
_SRGB_LUT: np.ndarray | None = None


class ImageFormat(Enum):
    """Raster formats the converter can encode to."""

    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    GIF = "gif"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


class FitMode(Enum):
    """How a resize maps the source onto the requested box."""

    COVER = "cover"  # Fill the box, center-crop the overflow
    CONTAIN = "contain"  # Fit inside the box, pad to the exact box
    FILL = "fill"  # Stretch to the box, ignore aspect ratio
    INSIDE = "inside"  # Fit inside the box, no padding


RESAMPLE_METHODS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "box": Image.Resampling.BOX,  # area-average; good for big downscales
    "nearest": Image.Resampling.NEAREST,  # use for pixel art/UI icons
}


def has_alpha(img: Image.Image) -> bool:
    """Return True if the image carries transparency in any form."""
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _background_color(mode: str):
    """Configured background color expressed in the given image mode."""
    color = str(Config().get("image.background"))
    try:
        return ImageColor.getcolor(color, mode)
    except ValueError:
        logging.getLogger("processing").warning(f"Invalid background color {color!r}, using black")
        return ImageColor.getcolor("black", mode)


def convert_to_srgb(img: Image.Image) -> Image.Image:
    """Convert image from embedded ICC profile to sRGB if needed.

    Args:
        img: PIL Image with potential ICC profile

    Returns:
        Image converted to sRGB color space
    """
    # Check if color correction is enabled
    cfg = Config().get("image")
    if not cfg.get("color_correction"):
        return img

    try:
        icc_profile = img.info.get("icc_profile")
        if not icc_profile:
            return img

        # Create profile objects
        source_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
        srgb_profile = ImageCms.createProfile("sRGB")

        # Check if source is already sRGB (avoid unnecessary conversion)
        try:
            profile_name = ImageCms.getProfileName(source_profile).strip()
        except Exception:
            profile_name = "unknown"
        if "srgb" in profile_name.lower():
            return img

        logging.getLogger("processing").info(f"Converting {profile_name} -> sRGB")

        transform = ImageCms.buildTransformFromOpenProfiles(
            source_profile, srgb_profile, img.mode, img.mode, renderingIntent=Intent.RELATIVE_COLORIMETRIC
        )
        converted_img = ImageCms.applyTransform(img, transform)
        assert converted_img is not None, "ImageCms.applyTransform must return an image"

        # Remove the old ICC profile
        converted_img.info = img.info.copy()
        converted_img.info.pop("icc_profile", None)

        return converted_img

    except Exception as e:
        logging.getLogger("processing").warning(f"Color conversion failed: {e}")
        return img


# High bit depth grayscale modes Pillow decodes 16-bit PNG/TIFF and float TIFF into
HIGH_DEPTH_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N", "F")


def to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16-bit, 32-bit integer and float grayscale down to 8-bit L.

    Pillow's convert() clips these modes at 255 rather than scaling them.
    """
    if img.mode not in HIGH_DEPTH_MODES:
        return img

    arr = np.asarray(img)
    if img.mode == "F":
        # Float data is either normalized (0..1) or already in 0..255
        peak = 1.0 if arr.size and float(np.nanmax(arr)) <= 1.0 else 255.0
        out = np.clip(np.nan_to_num(arr) * (255.0 / peak) + 0.5, 0, 255)
    elif img.mode == "I" and (arr.size == 0 or int(arr.max()) <= 255):
        out = np.clip(arr, 0, 255)
    else:
        out = np.clip(arr.astype(np.int64), 0, 65535) >> 8

    converted = Image.fromarray(out.astype(np.uint8))
    converted.info = img.info.copy()
    return converted


def decode_image(data: bytes, source_name: str | None = None) -> Image.Image:
    """Decode uploaded bytes into a Pillow image (first frame for animations)."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except Exception as e:
        logging.getLogger("processing").warning(f"Failed to decode {source_name or 'upload'}: {e}")
        raise ImageDecodeError(f"Cannot decode image: {e}", source_name) from e

    return convert_to_srgb(img)


def _to_linear_u16(rgb_u8: np.ndarray) -> np.ndarray:
    # sRGB -> linear via 1D LUT (fast & accurate for u8)
    global _LINEAR_LUT
    if _LINEAR_LUT is None:
        x = np.arange(256, dtype=np.float32) / 255.0
        lut = np.where(x <= 0.04045, x / 12.92, ((x + 0.055) / 1.055) ** 2.4)
        _LINEAR_LUT = (lut * 65535.0 + 0.5).astype(np.uint16)  # promote for precision
    return _LINEAR_LUT[rgb_u8]


def _to_srgb_u8(lin_u16: np.ndarray) -> np.ndarray:
    global _SRGB_LUT
    if _SRGB_LUT is None:
        y = np.linspace(0.0, 1.0, 65536, dtype=np.float32)
        lut = np.where(y <= 0.0031308, y * 12.92, 1.055 * (y ** (1 / 2.4)) - 0.055)
        _SRGB_LUT = (lut * 255.0 + 0.5).astype(np.uint8)
    return _SRGB_LUT[lin_u16]


def _resample(img: Image.Image, new_size: tuple[int, int], resample: Image.Resampling, gamma_correct: bool) -> Image.Image:
    """Resize in sRGB space, or in linear light when gamma correction is on."""
    if not gamma_correct or resample == Image.Resampling.NEAREST or img.mode not in ("RGB", "RGBA"):
        return img.resize(new_size, resample=resample)

    # Work in linear: resize each channel individually as 16-bit, then convert back to sRGB u8
    arr = np.asarray(img, dtype=np.uint8)
    lin = _to_linear_u16(arr[..., :3])  # (H,W,3) uint16
    channels = [
        np.array(Image.fromarray(lin[..., i]).resize(new_size, resample=resample), dtype=np.uint16) for i in range(3)
    ]
    srgb_u8 = _to_srgb_u8(np.stack(channels, axis=-1))  # (new_h,new_w,3) u8
    out = Image.fromarray(srgb_u8).convert("RGB")

    if img.mode == "RGBA":
        # Alpha is linear already
        out.putalpha(img.getchannel("A").resize(new_size, resample=resample))

    return out


def resize_image(img: Image.Image, size: tuple[int, int], fit: FitMode = FitMode.COVER) -> Image.Image:
    """Resize image to the requested box using the given fit mode.

    Args:
        img: PIL Image to resize
        size: Target (width, height) tuple, both positive
        fit: How the source aspect ratio is reconciled with the box
    """
    cfg = Config().get("image")
    w, h = size

    resample = RESAMPLE_METHODS.get(str(cfg.get("method")).lower(), Image.Resampling.LANCZOS)

    img = to_8bit(img)

    # Paletted/bilevel/CMYK images resize with nearest only, expand them first
    if img.mode not in ("L", "LA", "RGB", "RGBA"):
        img = img.convert("RGBA" if has_alpha(img) else "RGB")

    src_w, src_h = img.size
    if fit is FitMode.COVER:
        # Center-crop the source to the box aspect so the resample lands on the box
        if src_w * h > src_h * w:
            crop_w = max(1, round(src_h * w / h))
            left = (src_w - crop_w) // 2
            img = img.crop((left, 0, left + crop_w, src_h))
        else:
            crop_h = max(1, round(src_w * h / w))
            top = (src_h - crop_h) // 2
            img = img.crop((0, top, src_w, top + crop_h))
        new_size = (w, h)
    elif fit is FitMode.FILL:
        new_size = (w, h)
    else:
        scale = min(w / src_w, h / src_h)
        new_size = (max(1, int(round(src_w * scale))), max(1, int(round(src_h * scale))))

    im = _resample(img, new_size, resample, bool(cfg.get("gamma_correct")))

    # Optional mild sharpen to recover micro-contrast on small outputs
    us = cfg.get("unsharp")
    amt = float(us.get("amount"))
    if amt > 0.0 and im.mode in ("L", "RGB", "RGBA"):
        radius = max(0.1, float(us.get("radius")))
        thresh = max(0, int(us.get("threshold")))
        im = im.filter(ImageFilter.UnsharpMask(radius=radius, percent=int(amt * 100), threshold=thresh))

    if im.size != size and fit is FitMode.CONTAIN:
        # Transparent padding where the image has alpha, background color otherwise
        fill = 0 if has_alpha(im) else _background_color(im.mode)
        canvas = Image.new(im.mode, size, fill)
        canvas.paste(im, ((w - im.size[0]) // 2, (h - im.size[1]) // 2))
        im = canvas

    return im


def flatten_alpha(img: Image.Image) -> Image.Image:
    """Composite an image with transparency onto the configured background."""
    if not has_alpha(img):
        return img

    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, _background_color("RGB"))
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


def encode_image(img: Image.Image, target_format: ImageFormat, source_name: str | None = None) -> bytes:
    """Encode a Pillow image to the target format, normalizing modes first."""
    quality = Config().get("image.quality")
    params: dict = {}

    try:
        # PNG is the only target that stores 16-bit grayscale as is
        if target_format is not ImageFormat.PNG or img.mode not in ("I", "I;16"):
            img = to_8bit(img)

        if target_format is ImageFormat.JPEG:
            img = flatten_alpha(img)
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            params["quality"] = int(quality["jpeg"])

        elif target_format is ImageFormat.WEBP:
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA" if has_alpha(img) else "RGB")
            params["quality"] = int(quality["webp"])

        elif target_format is ImageFormat.GIF:
            if img.mode not in ("P", "L", "RGB", "RGBA"):
                img = img.convert("RGBA" if has_alpha(img) else "RGB")

        else:  # PNG
            if img.mode not in ("1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"):
                img = img.convert("RGBA" if has_alpha(img) else "RGB")

        buffer = io.BytesIO()
        img.save(buffer, format=target_format.pil_format, **params)
        return buffer.getvalue()

    except Exception as e:
        logging.getLogger("processing").warning(
            f"Failed to encode {source_name or 'upload'} as {target_format.value}: {e}"
        )
        raise ImageEncodeError(f"Cannot encode image as {target_format.value}: {e}", source_name) from e


def convert_image(
    data: bytes,
    target_format: ImageFormat,
    size: tuple[int, int] | None = None,
    fit: FitMode = FitMode.COVER,
    source_name: str | None = None,
) -> bytes:
    """Decode, optionally resize, and re-encode one uploaded image."""
    img = decode_image(data, source_name)

    if size is not None:
        try:
            img = resize_image(img, size, fit)
        except Exception as e:
            logging.getLogger("processing").warning(f"Failed to resize {source_name or 'upload'} to {size}: {e}")
            raise ImageEncodeError(f"Cannot resize image: {e}", source_name) from e

    return encode_image(img, target_format, source_name)
