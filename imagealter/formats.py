"""Output format and quality resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .errors import UnknownFormat
from .utils import default_quality


@dataclass(frozen=True)
class ImageFormat:
    name: str
    extension: str

    @property
    def is_native(self) -> bool:
        return not self.name


# Keep whatever format the input was decoded from.
NATIVE_FORMAT = ImageFormat("", "")


class FormatTable:
    """Case-insensitive map from extensions and format names to writable formats."""

    def __init__(self, extensions: Mapping[str, str]) -> None:
        table: dict[str, str] = {}
        for ext, format_name in extensions.items():
            table[ext.lstrip(".").lower()] = format_name
        for format_name in set(extensions.values()):
            table.setdefault(format_name.lower(), format_name)
        self._table = MappingProxyType(table)

    def lookup(self, token: str) -> ImageFormat | None:
        if not token:
            return None
        ext = token.rsplit(".", 1)[-1].lower()
        format_name = self._table.get(ext)
        if format_name is None:
            return None
        return ImageFormat(format_name, format_name.lower())

    def names(self) -> list[str]:
        return sorted(set(self._table.values()))


def resolve_format(explicit: str | None, source_path: Path | str, table: FormatTable) -> ImageFormat:
    if explicit is not None:
        resolved = table.lookup(explicit)
        if resolved is None:
            raise UnknownFormat(explicit)
        return resolved
    return table.lookup(Path(source_path).suffix) or NATIVE_FORMAT


def resolve_quality(requested: Any = None, default: int | None = None) -> int:
    if default is None:
        default = default_quality()
    if requested is None or isinstance(requested, bool) or not isinstance(requested, int):
        value = default
    else:
        value = requested
    return max(0, min(100, int(value)))
