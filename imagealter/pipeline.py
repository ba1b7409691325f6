"""Sequential transformation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .args import NONE, Argument
from .codec.base import ImageCodec
from .errors import ImageAlterError, PipelineError, UnknownTransformation
from .runs.events import EventWriter, emit
from .transforms.registry import TransformationRegistry


@dataclass(frozen=True)
class PipelineStep:
    name: str
    argument: Argument = NONE

    @classmethod
    def of(cls, name: str, value: Any = None) -> "PipelineStep":
        return cls(name, Argument.from_json(value))


@dataclass
class PipelineRequest:
    steps: Sequence[PipelineStep] = field(default_factory=tuple)
    output_format: str | None = None
    quality: int | None = None


def run_steps(
    codec: ImageCodec,
    image: Any,
    steps: Iterable[PipelineStep],
    registry: TransformationRegistry,
    events: EventWriter | None = None,
) -> Any:
    """Apply ``steps`` to ``image`` in order and return the final handle.

    The executor owns ``image`` from the moment it is passed in. After each
    successful step the previous handle is released; when a step fails the
    current handle is released and a ``PipelineError`` naming the step is
    raised. Later steps are never attempted.
    """
    current = image
    for index, step in enumerate(steps):
        try:
            descriptor = registry.lookup(step.name)
            if descriptor is None:
                raise UnknownTransformation(step.name)
            produced = descriptor.invoke(codec, current, step.argument)
            if produced is not current:
                codec.release(current)
                current = produced
            emit(events, "step_applied", index=index, name=descriptor.name, size=list(codec.size(current)))
        except ImageAlterError as exc:
            codec.release(current)
            emit(events, "step_failed", index=index, name=step.name, error=exc.message, code=exc.code)
            raise PipelineError(exc, index, step.name) from exc
        except Exception:
            codec.release(current)
            raise
    return current
