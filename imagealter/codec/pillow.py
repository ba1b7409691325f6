"""Pillow backed image codec."""

from __future__ import annotations

import functools
import io
import math
from pathlib import Path
from typing import Any, Callable

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from ..errors import CodecPrimitiveError, DecodeError, EncodeError
from ..geometry import Rect

SOLARIZE_THRESHOLD = 128
CONTRAST_STEP = 1.25
DITHER_COLORS = 16
SEPIA_MID = "#704214"
SEPIA_WHITE = "#fff5e1"

# Formats that cannot carry an alpha channel or a palette through the encoder.
_RGB_ONLY_FORMATS = {"JPEG", "BMP", "PPM"}


def _primitive(func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func)
    def wrapper(self: "PillowCodec", image: Image.Image, *args: Any) -> Image.Image:
        try:
            return func(self, image, *args)
        except (OSError, ValueError, MemoryError, NotImplementedError) as exc:
            raise CodecPrimitiveError(str(exc) or type(exc).__name__) from exc

    return wrapper


def _has_alpha(image: Image.Image) -> bool:
    if image.mode in ("RGBA", "LA", "PA"):
        return True
    return image.mode == "P" and "transparency" in image.info


def _filterable(image: Image.Image) -> Image.Image:
    if image.mode in ("L", "RGB", "RGBA"):
        return image
    return image.convert("RGBA" if _has_alpha(image) else "RGB")


def _per_rgb(image: Image.Image, op: Callable[[Image.Image], Image.Image]) -> Image.Image:
    # ImageOps point operations only understand L and RGB; alpha is carried around them.
    if image.mode in ("L", "RGB"):
        return op(image)
    if _has_alpha(image):
        rgba = image.convert("RGBA")
        result = op(rgba.convert("RGB"))
        if result.mode != "RGBA":
            result = result.convert("RGBA")
        result.putalpha(rgba.getchannel("A"))
        return result
    return op(image.convert("RGB"))


class PillowCodec:
    name = "pillow"

    def decode(self, path: Path) -> Image.Image:
        try:
            image = Image.open(path)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"couldn't read image: {exc}") from exc
        try:
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            image.close()
            raise DecodeError(f"couldn't read image: {exc}") from exc
        return image

    def encode(self, image: Image.Image, format_name: str, quality: int) -> bytes:
        prepared = image
        buffer = io.BytesIO()
        try:
            if format_name.upper() in _RGB_ONLY_FORMATS and image.mode not in ("RGB", "L"):
                prepared = image.convert("RGB")
            prepared.save(buffer, format=format_name, quality=quality)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"ImageToBlob failed: {exc}") from exc
        finally:
            if prepared is not image:
                prepared.close()
        return buffer.getvalue()

    def release(self, image: Image.Image) -> None:
        image.close()

    def size(self, image: Image.Image) -> tuple[int, int]:
        return image.size

    def source_format(self, image: Image.Image) -> str | None:
        return image.format

    def frame_count(self, image: Image.Image) -> int:
        return int(getattr(image, "n_frames", 1))

    def writable_formats(self) -> dict[str, str]:
        Image.init()
        return {
            ext.lstrip(".").lower(): fmt
            for ext, fmt in Image.registered_extensions().items()
            if fmt in Image.SAVE
        }

    @_primitive
    def clone(self, image: Image.Image) -> Image.Image:
        return image.copy()

    @_primitive
    def rotate(self, image: Image.Image, degrees: float) -> Image.Image:
        # Pillow rotates counter-clockwise.
        return image.rotate(-degrees, resample=Image.Resampling.BICUBIC, expand=True)

    @_primitive
    def crop(self, image: Image.Image, rect: Rect) -> Image.Image:
        return image.crop(rect.box())

    @_primitive
    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        return image.resize((width, height), Image.Resampling.LANCZOS)

    @_primitive
    def strip(self, image: Image.Image) -> Image.Image:
        stripped = image.copy()
        stripped.info = {key: value for key, value in image.info.items() if key == "transparency"}
        return stripped

    @_primitive
    def blur(self, image: Image.Image) -> Image.Image:
        return _filterable(image).filter(ImageFilter.BLUR)

    @_primitive
    def sharpen(self, image: Image.Image) -> Image.Image:
        return _filterable(image).filter(ImageFilter.SHARPEN)

    @_primitive
    def unsharpen(self, image: Image.Image) -> Image.Image:
        return _filterable(image).filter(ImageFilter.UnsharpMask(radius=2, percent=150, threshold=3))

    @_primitive
    def despeckle(self, image: Image.Image) -> Image.Image:
        return _filterable(image).filter(ImageFilter.MedianFilter(3))

    @_primitive
    def enhance(self, image: Image.Image) -> Image.Image:
        return _filterable(image).filter(ImageFilter.SMOOTH)

    @_primitive
    def oil_paint(self, image: Image.Image, radius: int) -> Image.Image:
        return _filterable(image).filter(ImageFilter.ModeFilter(radius * 2 + 1))

    @_primitive
    def solarize(self, image: Image.Image) -> Image.Image:
        return _per_rgb(image, lambda im: ImageOps.solarize(im, threshold=SOLARIZE_THRESHOLD))

    @_primitive
    def negate(self, image: Image.Image) -> Image.Image:
        return _per_rgb(image, ImageOps.invert)

    @_primitive
    def equalize(self, image: Image.Image) -> Image.Image:
        return _per_rgb(image, ImageOps.equalize)

    @_primitive
    def normalize(self, image: Image.Image) -> Image.Image:
        return _per_rgb(image, ImageOps.autocontrast)

    @_primitive
    def dither(self, image: Image.Image) -> Image.Image:
        quantized = image.convert("RGB").quantize(colors=DITHER_COLORS, dither=Image.Dither.FLOYDSTEINBERG)
        return quantized.convert("RGB")

    @_primitive
    def grayscale(self, image: Image.Image) -> Image.Image:
        return image.convert("LA" if _has_alpha(image) else "L")

    @_primitive
    def contrast(self, image: Image.Image, sharpen: bool) -> Image.Image:
        factor = CONTRAST_STEP if sharpen else 1.0 / CONTRAST_STEP
        return ImageEnhance.Contrast(_filterable(image)).enhance(factor)

    @_primitive
    def threshold(self, image: Image.Image, level: float) -> Image.Image:
        return _per_rgb(image, lambda im: im.point(lambda value: 255 if value >= level else 0))

    @_primitive
    def swirl(self, image: Image.Image, degrees: float) -> Image.Image:
        source = _filterable(image)
        pixels = np.asarray(source)
        height, width = pixels.shape[:2]
        center_x = width / 2.0
        center_y = height / 2.0
        radius = max(center_x, center_y)
        scale_x = height / width if height > width else 1.0
        scale_y = width / height if width > height else 1.0

        ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
        dx = (xs - center_x) * scale_x
        dy = (ys - center_y) * scale_y
        distance = np.hypot(dx, dy)
        falloff = np.clip(1.0 - distance / radius, 0.0, 1.0)
        angle = math.radians(degrees) * falloff * falloff
        sin = np.sin(angle)
        cos = np.cos(angle)
        src_x = (cos * dx - sin * dy) / scale_x + center_x
        src_y = (sin * dx + cos * dy) / scale_y + center_y
        cols = np.clip(np.rint(src_x), 0, width - 1).astype(np.intp)
        rows = np.clip(np.rint(src_y), 0, height - 1).astype(np.intp)
        return Image.fromarray(np.ascontiguousarray(pixels[rows, cols]))

    @_primitive
    def sepia(self, image: Image.Image, threshold: float) -> Image.Image:
        midpoint = int(min(254, max(1, round(threshold / 100.0 * 255))))

        def tone(im: Image.Image) -> Image.Image:
            return ImageOps.colorize(
                ImageOps.grayscale(im),
                black="#000000",
                white=SEPIA_WHITE,
                mid=SEPIA_MID,
                midpoint=midpoint,
            )

        return _per_rgb(image, tone)
