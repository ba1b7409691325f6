from __future__ import annotations

import pytest

from imagealter.errors import UnknownFormat
from imagealter.formats import NATIVE_FORMAT, FormatTable, ImageFormat, resolve_format, resolve_quality

TABLE = FormatTable({"jpg": "JPEG", ".jpeg": "JPEG", "png": "PNG", "gif": "GIF"})


def test_explicit_format_is_case_insensitive() -> None:
    assert resolve_format("PNG", "in.jpg", TABLE) == ImageFormat("PNG", "png")
    assert resolve_format("jpg", "in.png", TABLE) == ImageFormat("JPEG", "jpeg")
    assert resolve_format("Jpeg", "in.png", TABLE) == ImageFormat("JPEG", "jpeg")


def test_explicit_format_may_be_a_file_name() -> None:
    assert resolve_format("out.GIF", "in.png", TABLE) == ImageFormat("GIF", "gif")


@pytest.mark.parametrize("explicit", ["bmpx", "", "tiff"])
def test_unknown_explicit_format_fails(explicit: str) -> None:
    with pytest.raises(UnknownFormat):
        resolve_format(explicit, "in.png", TABLE)


def test_format_inferred_from_source_extension() -> None:
    assert resolve_format(None, "/photos/Holiday.JPG", TABLE) == ImageFormat("JPEG", "jpeg")


def test_unrecognized_source_extension_falls_back_to_native() -> None:
    resolved = resolve_format(None, "/photos/scan.xyz", TABLE)
    assert resolved is NATIVE_FORMAT
    assert resolved.is_native
    assert not ImageFormat("PNG", "png").is_native


def test_quality_resolution() -> None:
    assert resolve_quality(150) == 100
    assert resolve_quality(-5) == 0
    assert resolve_quality(None) == 75
    assert resolve_quality(42) == 42
    assert resolve_quality("90") == 75
    assert resolve_quality(True) == 75


def test_default_quality_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IMAGEALTER_DEFAULT_QUALITY", "90")
    assert resolve_quality(None) == 90
    monkeypatch.setenv("IMAGEALTER_DEFAULT_QUALITY", "500")
    assert resolve_quality(None) == 100
    monkeypatch.setenv("IMAGEALTER_DEFAULT_QUALITY", "high")
    assert resolve_quality(None) == 75


@pytest.mark.parametrize("source", ["/photos/png", "/photos.jpg/scan", "gif"])
def test_source_without_extension_falls_back_to_native(source: str) -> None:
    assert resolve_format(None, source, TABLE) is NATIVE_FORMAT
