"""Transformation argument values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ArgumentTypeError


class ArgKind(Enum):
    NONE = "none"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class Argument:
    kind: ArgKind
    value: Any = None

    @classmethod
    def from_json(cls, value: Any) -> "Argument":
        """Narrow a loosely typed payload value into an argument."""
        if value is None:
            return NONE
        if isinstance(value, Argument):
            return value
        if isinstance(value, bool):
            raise ArgumentTypeError("boolean arguments are not supported")
        if isinstance(value, int):
            return cls(ArgKind.INTEGER, value)
        if isinstance(value, float):
            return cls(ArgKind.DOUBLE, value)
        if isinstance(value, str):
            return cls(ArgKind.STRING, value)
        if isinstance(value, (list, tuple)):
            return cls(ArgKind.LIST, tuple(cls.from_json(item) for item in value))
        if isinstance(value, Mapping):
            items: dict[str, Argument] = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise ArgumentTypeError(f"map keys must be strings, got {type(key).__name__}")
                items[key] = cls.from_json(item)
            return cls(ArgKind.MAP, MappingProxyType(items))
        raise ArgumentTypeError(f"unsupported argument type: {type(value).__name__}")

    @property
    def is_none(self) -> bool:
        return self.kind is ArgKind.NONE

    @property
    def is_number(self) -> bool:
        return self.kind in (ArgKind.INTEGER, ArgKind.DOUBLE)

    def as_float(self) -> float:
        if not self.is_number:
            raise ArgumentTypeError(f"expected a number, got {self.kind.value}")
        try:
            return float(self.value)
        except OverflowError as exc:
            raise ArgumentTypeError("number out of range for a floating point value") from exc

    def to_json(self) -> Any:
        if self.kind is ArgKind.LIST:
            return [item.to_json() for item in self.value]
        if self.kind is ArgKind.MAP:
            return {key: item.to_json() for key, item in self.value.items()}
        return self.value


NONE = Argument(ArgKind.NONE)
