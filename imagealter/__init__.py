"""ImageAlter: named image transformations composed into pipelines."""

from __future__ import annotations

from .args import ArgKind, Argument
from .engine import ImageAlterEngine, get_engine, init_engine, shutdown_engine
from .errors import (
    ArgumentTypeError,
    CodecPrimitiveError,
    DecodeError,
    EncodeError,
    GeometryError,
    ImageAlterError,
    OutputIOError,
    PipelineError,
    UnknownFormat,
    UnknownTransformation,
)
from .formats import NATIVE_FORMAT, ImageFormat, resolve_format, resolve_quality
from .pipeline import PipelineRequest, PipelineStep, run_steps
from .transforms import default_registry
