"""Core ImageAlter engine orchestration."""

from __future__ import annotations

import uuid
from contextlib import suppress
from pathlib import Path
from typing import Any, Iterable

from .codec import default_codec
from .codec.base import ImageCodec
from .errors import EncodeError, ImageAlterError, OutputIOError, PipelineError
from .formats import FormatTable, ImageFormat, resolve_format, resolve_quality
from .pipeline import PipelineRequest, PipelineStep, run_steps
from .runs.events import emit, open_events
from .transforms import default_registry
from .transforms.registry import TransformationRegistry
from .utils import ensure_dir


class ImageAlterEngine:
    def __init__(
        self,
        codec: ImageCodec | None = None,
        registry: TransformationRegistry | None = None,
        events_path: Path | str | None = None,
        run_id: str | None = None,
    ) -> None:
        self.codec = codec or default_codec()
        self.registry = registry or default_registry()
        self.run_id = run_id or str(uuid.uuid4())
        self.events = open_events(events_path, self.run_id)
        self.formats = FormatTable(self.codec.writable_formats())
        emit(self.events, "engine_initialized", codec=self.codec.name, formats=self.formats.names())

    def list_transformations(self) -> list[dict[str, Any]]:
        return [descriptor.describe() for descriptor in self.registry.list()]

    def run(self, request: PipelineRequest, source_path: Path | str, output_dir: Path | str) -> Path:
        return self.run_pipeline(
            source_path,
            output_dir,
            output_format=request.output_format,
            quality=request.quality,
            steps=request.steps,
        )

    def run_pipeline(
        self,
        source_path: Path | str,
        output_dir: Path | str,
        output_format: str | None = None,
        quality: int | None = None,
        steps: Iterable[PipelineStep] = (),
    ) -> Path:
        """Decode, transform and encode one image; returns the written path.

        Nothing is written when any stage fails.
        """
        source = Path(source_path)
        try:
            image_format = resolve_format(output_format, str(source), self.formats)
            resolved_quality = resolve_quality(quality)
            emit(self.events, "quality_resolved", requested=quality, quality=resolved_quality)
            blob = self._transform(source, image_format, resolved_quality, list(steps))
            return self._write(source, Path(output_dir), image_format, blob)
        except ImageAlterError as exc:
            step = exc.step_index if isinstance(exc, PipelineError) else None
            emit(self.events, "pipeline_failed", error=exc.message, code=exc.code, step=step)
            raise

    def _transform(self, source: Path, image_format: ImageFormat, quality: int, steps: list[PipelineStep]) -> bytes:
        emit(self.events, "image_read_started", path=str(source))
        image = self.codec.decode(source)
        try:
            native_format = self.codec.source_format(image)
            emit(
                self.events,
                "image_decoded",
                path=str(source),
                format=native_format,
                frames=self.codec.frame_count(image),
                size=list(self.codec.size(image)),
            )
        except Exception:
            self.codec.release(image)
            raise
        # run_steps owns the handle from here on.
        final = run_steps(self.codec, image, steps, self.registry, self.events)
        try:
            format_name = native_format if image_format.is_native else image_format.name
            if not format_name:
                raise EncodeError("can't determine the input image's format")
            return self.codec.encode(final, format_name, quality)
        finally:
            self.codec.release(final)

    def _write(self, source: Path, output_dir: Path, image_format: ImageFormat, blob: bytes) -> Path:
        name = source.name if image_format.is_native else f"img.{image_format.extension}"
        try:
            ensure_dir(output_dir)
        except OSError as exc:
            raise OutputIOError(f"Couldn't create temp dir: {exc.strerror or exc}") from exc
        out_path = output_dir / name
        try:
            out_path.write_bytes(blob)
        except OSError as exc:
            with suppress(OSError):
                out_path.unlink(missing_ok=True)
            raise OutputIOError(f"Error saving output image: {exc.strerror or exc}") from exc
        emit(self.events, "output_written", path=str(out_path), bytes=len(blob))
        return out_path


_ENGINE: ImageAlterEngine | None = None


def init_engine(**kwargs: Any) -> ImageAlterEngine:
    global _ENGINE
    if _ENGINE is not None:
        raise RuntimeError("ImageAlter engine already initialized")
    _ENGINE = ImageAlterEngine(**kwargs)
    return _ENGINE


def get_engine() -> ImageAlterEngine:
    if _ENGINE is None:
        raise RuntimeError("ImageAlter engine not initialized; call init_engine() first")
    return _ENGINE


def shutdown_engine() -> None:
    global _ENGINE
    _ENGINE = None
