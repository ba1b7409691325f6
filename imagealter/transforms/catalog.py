"""The built-in transformation catalog."""

from __future__ import annotations

import math
from typing import Any

from ..args import ArgKind, Argument
from ..codec.base import ImageCodec
from ..errors import ArgumentTypeError, GeometryError
from ..geometry import clamp, clamp_magnitude, crop_rect, scale_to_fit
from .registry import TransformationDescriptor

CONTRAST_LIMIT = 10
OILPAINT_RADIUS_RANGE = (1, 10)
SEPIA_RANGE = (0.0, 100.0)
SWIRL_RANGE = (-360.0, 360.0)
THRESHOLD_RANGE = (0.0, 256.0)
SCALE_KEYS = ("maxwidth", "maxheight")


def _number(name: str, argument: Argument, default: float) -> float:
    if argument.is_none:
        return default
    if not argument.is_number:
        raise ArgumentTypeError(f"{name} accepts a single optional numeric argument")
    value = argument.as_float()
    if not math.isfinite(value):
        raise ArgumentTypeError(f"{name} requires a finite number, got {value}")
    return value


def _bounds(name: str, argument: Argument) -> dict[str, int]:
    if argument.kind is not ArgKind.MAP:
        raise ArgumentTypeError(f"{name} requires a map with 'maxwidth' and/or 'maxheight'")
    bounds: dict[str, int] = {}
    for key, value in argument.value.items():
        if key not in SCALE_KEYS:
            raise ArgumentTypeError(f"{name}: unrecognized key '{key}'")
        if value.kind is not ArgKind.INTEGER:
            raise ArgumentTypeError(f"{name}: '{key}' must be an integer")
        bounds[key] = value.value
    return bounds


def _fit(codec: ImageCodec, image: Any, name: str, argument: Argument) -> Any:
    bounds = _bounds(name, argument)
    width, height = codec.size(image)
    target = scale_to_fit(width, height, bounds.get("maxwidth"), bounds.get("maxheight"))
    if target == (width, height):
        return codec.clone(image)
    return codec.resize(image, *target)


def noop(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.clone(image)


def blur(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.blur(image)


def contrast(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    amount = clamp_magnitude(int(_number("contrast", argument, 1)), CONTRAST_LIMIT)
    if amount == 0:
        return codec.clone(image)
    current = image
    try:
        for _ in range(abs(amount)):
            adjusted = codec.contrast(current, amount > 0)
            if current is not image:
                codec.release(current)
            current = adjusted
    except Exception:
        if current is not image:
            codec.release(current)
        raise
    return current


def crop(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    if argument.kind is not ArgKind.LIST or len(argument.value) != 4:
        raise ArgumentTypeError("crop requires a list of four numbers [x1, y1, x2, y2]")
    if any(item.kind is not ArgKind.DOUBLE for item in argument.value):
        raise ArgumentTypeError("crop coordinates must be floating point values between 0.0 and 1.0")
    x1, y1, x2, y2 = (item.value for item in argument.value)
    if not all(math.isfinite(v) for v in (x1, y1, x2, y2)):
        raise ArgumentTypeError("crop coordinates must be finite numbers")
    width, height = codec.size(image)
    rect = crop_rect(x1, y1, x2, y2, width, height)
    if rect.width < 1 or rect.height < 1:
        raise GeometryError(f"crop rectangle is smaller than one pixel on a {width}x{height} image")
    return codec.crop(image, rect)


def despeckle(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.despeckle(image)


def dither(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.dither(image)


def enhance(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.enhance(image)


def equalize(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.equalize(image)


def grayscale(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.grayscale(image)


def negate(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.negate(image)


def normalize(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.normalize(image)


def oilpaint(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    radius = int(clamp(int(_number("oilpaint", argument, 3)), *OILPAINT_RADIUS_RANGE))
    return codec.oil_paint(image, radius)


def rotate(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.rotate(image, _number("rotate", argument, 90.0))


def scale(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return _fit(codec, image, "scale", argument)


def sepia(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.sepia(image, clamp(_number("sepia", argument, 80.0), *SEPIA_RANGE))


def sharpen(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.sharpen(image)


def solarize(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.solarize(image)


def swirl(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.swirl(image, clamp(_number("swirl", argument, 90.0), *SWIRL_RANGE))


def threshold(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.threshold(image, clamp(_number("threshold", argument, 128.0), *THRESHOLD_RANGE))


def thumbnail(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    resized = _fit(codec, image, "thumbnail", argument)
    try:
        return codec.strip(resized)
    finally:
        codec.release(resized)


def unsharpen(codec: ImageCodec, image: Any, argument: Argument) -> Any:
    return codec.unsharpen(image)


BUILTIN_TRANSFORMATIONS: tuple[TransformationDescriptor, ...] = (
    TransformationDescriptor("noop", False, False, noop, "Leave the image unchanged."),
    TransformationDescriptor("blur", False, False, blur, "Blur the image."),
    TransformationDescriptor(
        "contrast",
        True,
        False,
        contrast,
        "Adjust the image's contrast. Takes an optional integer between -10 and 10; "
        "positive values increase contrast, negative values decrease it. Default 1.",
    ),
    TransformationDescriptor(
        "crop",
        True,
        True,
        crop,
        "Crop the image. Requires an array of four floating point numbers "
        "[x1, y1, x2, y2] between 0.0 and 1.0, relative to the image's width and height.",
    ),
    TransformationDescriptor("despeckle", False, False, despeckle, "Reduce speckle noise in the image."),
    TransformationDescriptor("dither", False, False, dither, "Reduce the image to a small dithered palette."),
    TransformationDescriptor("enhance", False, False, enhance, "Apply a digital filter that improves the quality of a noisy image."),
    TransformationDescriptor("equalize", False, False, equalize, "Apply a histogram equalization to the image."),
    TransformationDescriptor("grayscale", False, False, grayscale, "Convert the image to grayscale."),
    TransformationDescriptor("greyscale", False, False, grayscale, "Convert the image to greyscale (alias of grayscale)."),
    TransformationDescriptor("negate", False, False, negate, "Negate the colors of the image."),
    TransformationDescriptor(
        "normalize",
        False,
        False,
        normalize,
        "Stretch the image's intensity range to span the full range of values.",
    ),
    TransformationDescriptor(
        "oilpaint",
        True,
        False,
        oilpaint,
        "Simulate an oil painting. Takes an optional radius between 1 and 10. Default 3.",
    ),
    TransformationDescriptor(
        "rotate",
        True,
        False,
        rotate,
        "Rotate the image clockwise. Takes an optional number of degrees. Default 90.",
    ),
    TransformationDescriptor(
        "scale",
        True,
        True,
        scale,
        "Scale the image down, preserving aspect ratio. Requires an object with "
        "integer 'maxwidth' and/or 'maxheight' properties.",
    ),
    TransformationDescriptor(
        "sepia",
        True,
        False,
        sepia,
        "Apply a sepia tone. Takes an optional threshold percentage between 0 and 100. Default 80.",
    ),
    TransformationDescriptor("sharpen", False, False, sharpen, "Sharpen the image."),
    TransformationDescriptor("solarize", False, False, solarize, "Apply a solarization effect to the image."),
    TransformationDescriptor(
        "swirl",
        True,
        False,
        swirl,
        "Swirl the pixels about the center of the image. Takes an optional number of "
        "degrees between -360 and 360. Default 90.",
    ),
    TransformationDescriptor(
        "threshold",
        True,
        False,
        threshold,
        "Reduce each channel to black or white. Takes an optional level between 0 and 256. Default 128.",
    ),
    TransformationDescriptor(
        "thumbnail",
        True,
        True,
        thumbnail,
        "Like scale, but also strips profiles and comments from the image for a smaller result.",
    ),
    TransformationDescriptor("unsharpen", False, False, unsharpen, "Sharpen the image with an unsharp mask."),
)
