"""Image codec implementations."""

from __future__ import annotations

from .base import ImageCodec
from .pillow import PillowCodec


def default_codec() -> ImageCodec:
    return PillowCodec()
