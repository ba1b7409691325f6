from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from imagealter.codec.pillow import PillowCodec
from imagealter.errors import DecodeError, EncodeError
from imagealter.geometry import Rect


def _gradient(mode: str = "RGB", size: tuple[int, int] = (32, 16)) -> Image.Image:
    image = Image.new("RGB", size)
    width, height = size
    image.putdata([((x * 8) % 256, (y * 16) % 256, (x + y) % 256) for y in range(height) for x in range(width)])
    if mode == "P":
        return image.convert("P", palette=Image.Palette.ADAPTIVE, colors=32)
    return image.convert(mode)


PRIMITIVES = [
    ("clone", ()),
    ("blur", ()),
    ("sharpen", ()),
    ("unsharpen", ()),
    ("despeckle", ()),
    ("enhance", ()),
    ("oil_paint", (2,)),
    ("solarize", ()),
    ("negate", ()),
    ("equalize", ()),
    ("normalize", ()),
    ("dither", ()),
    ("grayscale", ()),
    ("contrast", (True,)),
    ("contrast", (False,)),
    ("threshold", (128.0,)),
    ("swirl", (90.0,)),
    ("sepia", (80.0,)),
    ("rotate", (30.0,)),
    ("strip", ()),
]


@pytest.mark.parametrize("mode", ["RGB", "RGBA", "L", "P"])
@pytest.mark.parametrize("op,args", PRIMITIVES)
def test_primitives_return_new_images(mode: str, op: str, args: tuple) -> None:
    codec = PillowCodec()
    source = _gradient(mode)
    result = getattr(codec, op)(source, *args)
    assert isinstance(result, Image.Image)
    assert result is not source
    if op != "rotate":
        assert result.size == source.size


def test_primitives_keep_alpha() -> None:
    codec = PillowCodec()
    source = _gradient("RGBA")
    assert codec.negate(source).mode == "RGBA"
    assert codec.sepia(source, 50.0).mode == "RGBA"
    assert codec.grayscale(source).mode == "LA"


def test_rotate_is_clockwise() -> None:
    codec = PillowCodec()
    source = Image.new("RGB", (4, 2), (0, 0, 0))
    source.putpixel((0, 0), (255, 0, 0))
    rotated = codec.rotate(source, 90.0)
    assert rotated.size == (2, 4)
    # top-left ends up top-right after a clockwise quarter turn
    assert rotated.getpixel((1, 0)) == (255, 0, 0)


def test_crop_and_resize() -> None:
    codec = PillowCodec()
    source = _gradient()
    assert codec.crop(source, Rect(4, 2, 10, 6)).size == (10, 6)
    assert codec.resize(source, 8, 4).size == (8, 4)


def test_swirl_by_zero_degrees_is_identity() -> None:
    codec = PillowCodec()
    source = _gradient()
    assert codec.swirl(source, 0.0).tobytes() == source.tobytes()


def test_threshold_is_binary() -> None:
    codec = PillowCodec()
    result = codec.threshold(_gradient("L"), 100.0)
    assert set(result.getdata()) <= {0, 255}


def test_strip_drops_metadata() -> None:
    codec = PillowCodec()
    source = _gradient()
    source.info["comment"] = b"hello"
    assert "comment" not in codec.strip(source).info


def test_decode_and_encode_round_trip(tmp_path: Path) -> None:
    codec = PillowCodec()
    path = tmp_path / "in.png"
    _gradient().save(path)

    image = codec.decode(path)
    assert codec.source_format(image) == "PNG"
    assert codec.frame_count(image) == 1
    assert codec.size(image) == (32, 16)

    blob = codec.encode(image, "JPEG", 80)
    codec.release(image)
    with Image.open(io.BytesIO(blob)) as decoded:
        assert decoded.format == "JPEG"


def test_decode_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        PillowCodec().decode(tmp_path / "missing.png")


def test_encode_unknown_format_fails() -> None:
    with pytest.raises(EncodeError):
        PillowCodec().encode(_gradient(), "NOPE", 75)


def test_writable_formats_cover_common_types() -> None:
    formats = PillowCodec().writable_formats()
    assert formats["jpg"] == "JPEG"
    assert formats["png"] == "PNG"
    assert formats["gif"] == "GIF"
