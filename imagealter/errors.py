"""Error kinds raised by the transformation engine.

Every error carries a human readable message and the service error code the
hosting layer reports back to its caller.
"""

from __future__ import annotations


class ImageAlterError(RuntimeError):
    code = "bp.transformFailed"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(ImageAlterError):
    pass


class UnknownTransformation(ImageAlterError):
    code = "bp.invalidArguments"

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown transformation: {name}")
        self.name = name


class ArgumentTypeError(ImageAlterError):
    code = "bp.invalidArguments"


class GeometryError(ImageAlterError):
    code = "bp.invalidArguments"


class UnknownFormat(ImageAlterError):
    code = "bp.invalidArguments"

    def __init__(self, requested: str) -> None:
        super().__init__(f"can't determine output format: {requested}")
        self.requested = requested


class CodecPrimitiveError(ImageAlterError):
    pass


class EncodeError(ImageAlterError):
    pass


class OutputIOError(ImageAlterError):
    pass


class InvalidFileURL(ImageAlterError):
    code = "bp.fileAccessError"


class PipelineError(ImageAlterError):
    """A step failed; wraps the step's error and remembers where it happened."""

    def __init__(self, error: ImageAlterError, step_index: int, step_name: str) -> None:
        super().__init__(f"step {step_index} ({step_name}): {error.message}")
        self.error = error
        self.step_index = step_index
        self.step_name = step_name
