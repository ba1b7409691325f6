"""Image codec capability consumed by the engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from ..geometry import Rect


class ImageCodec(Protocol):
    """Decode/encode plus the primitive operations the catalog relies on.

    Primitives never modify their input; each returns a new handle that the
    caller owns. Failures raise ``CodecPrimitiveError`` (or ``DecodeError`` /
    ``EncodeError`` for the codec entry points).
    """

    name: str

    def decode(self, path: Path) -> Any:
        ...

    def encode(self, image: Any, format_name: str, quality: int) -> bytes:
        ...

    def release(self, image: Any) -> None:
        ...

    def size(self, image: Any) -> tuple[int, int]:
        ...

    def source_format(self, image: Any) -> str | None:
        ...

    def frame_count(self, image: Any) -> int:
        ...

    def writable_formats(self) -> dict[str, str]:
        ...

    def clone(self, image: Any) -> Any:
        ...

    def rotate(self, image: Any, degrees: float) -> Any:
        ...

    def crop(self, image: Any, rect: Rect) -> Any:
        ...

    def resize(self, image: Any, width: int, height: int) -> Any:
        ...

    def strip(self, image: Any) -> Any:
        ...

    def blur(self, image: Any) -> Any:
        ...

    def sharpen(self, image: Any) -> Any:
        ...

    def unsharpen(self, image: Any) -> Any:
        ...

    def despeckle(self, image: Any) -> Any:
        ...

    def enhance(self, image: Any) -> Any:
        ...

    def oil_paint(self, image: Any, radius: int) -> Any:
        ...

    def solarize(self, image: Any) -> Any:
        ...

    def negate(self, image: Any) -> Any:
        ...

    def equalize(self, image: Any) -> Any:
        ...

    def normalize(self, image: Any) -> Any:
        ...

    def dither(self, image: Any) -> Any:
        ...

    def grayscale(self, image: Any) -> Any:
        ...

    def contrast(self, image: Any, sharpen: bool) -> Any:
        ...

    def threshold(self, image: Any, level: float) -> Any:
        ...

    def swirl(self, image: Any, degrees: float) -> Any:
        ...

    def sepia(self, image: Any, threshold: float) -> Any:
        ...
