"""Registry of named image transformations."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable

from ..args import Argument
from ..codec.base import ImageCodec
from ..errors import ArgumentTypeError, CodecPrimitiveError

ApplyFunc = Callable[[ImageCodec, Any, Argument], Any]


@dataclass(frozen=True)
class TransformationDescriptor:
    name: str
    accepts_args: bool
    requires_args: bool
    apply: ApplyFunc
    doc: str

    def __post_init__(self) -> None:
        if self.requires_args and not self.accepts_args:
            raise ValueError(f"{self.name}: a transformation that requires arguments must accept them")

    def invoke(self, codec: ImageCodec, image: Any, argument: Argument) -> Any:
        """Validate the argument policy, then run the transformation.

        The input image is never released here; handle ownership belongs to
        the pipeline executor.
        """
        if not self.accepts_args and not argument.is_none:
            raise ArgumentTypeError(f"{self.name} does not accept arguments")
        if self.requires_args and argument.is_none:
            raise ArgumentTypeError(f"{self.name} requires an argument")
        try:
            return self.apply(codec, image, argument)
        except CodecPrimitiveError as exc:
            raise CodecPrimitiveError(f"error during {self.name}: {exc.message}") from exc

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "accepts_args": self.accepts_args,
            "requires_args": self.requires_args,
            "doc": self.doc,
        }


class TransformationRegistry:
    def __init__(self, descriptors: Iterable[TransformationDescriptor]) -> None:
        ordered = tuple(descriptors)
        table: dict[str, TransformationDescriptor] = {}
        for descriptor in ordered:
            key = descriptor.name.lower()
            if key in table:
                raise ValueError(f"duplicate transformation name: {descriptor.name}")
            table[key] = descriptor
        self._ordered = ordered
        self._table = MappingProxyType(table)

    def lookup(self, name: str) -> TransformationDescriptor | None:
        return self._table.get(name.lower())

    def list(self) -> list[TransformationDescriptor]:
        return list(self._ordered)

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self._ordered]
