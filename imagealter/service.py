"""Host-facing `transform` function: payload decoding and service description."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlparse
from urllib.request import url2pathname

from .engine import ImageAlterEngine
from .errors import ArgumentTypeError, ImageAlterError, InvalidFileURL
from .pipeline import PipelineRequest, PipelineStep
from .transforms.registry import TransformationRegistry

SERVICE_NAME = "ImageAlter"
SERVICE_VERSION = "4.0.1"
TRANSFORM_FUNCTION = "transform"


def path_from_url(url: str) -> Path:
    if not url:
        raise InvalidFileURL("invalid file URI")
    parsed = urlparse(url)
    if parsed.scheme == "file":
        if parsed.netloc not in ("", "localhost"):
            raise InvalidFileURL(f"invalid file URI: {url}")
        return Path(url2pathname(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise InvalidFileURL(f"invalid file URI: {url}")
    return Path(url)


def parse_actions(actions: Any) -> list[PipelineStep]:
    if actions is None:
        return []
    if not isinstance(actions, (list, tuple)):
        raise ArgumentTypeError("actions must be a list")
    steps: list[PipelineStep] = []
    for idx, action in enumerate(actions):
        if isinstance(action, str):
            steps.append(PipelineStep(action))
        elif isinstance(action, Mapping) and len(action) == 1:
            name, value = next(iter(action.items()))
            steps.append(PipelineStep.of(str(name), value))
        else:
            raise ArgumentTypeError(
                f"action {idx} must be a string or an object with a single property"
            )
    return steps


def parse_request(payload: Mapping[str, Any]) -> PipelineRequest:
    output_format = payload.get("format")
    if output_format is not None and not isinstance(output_format, str):
        raise ArgumentTypeError("format must be a string")
    quality = payload.get("quality")
    if isinstance(quality, bool) or not isinstance(quality, int):
        quality = None
    return PipelineRequest(
        steps=parse_actions(payload.get("actions")),
        output_format=output_format,
        quality=quality,
    )


def transform(engine: ImageAlterEngine, payload: Mapping[str, Any], temp_dir: Path | str) -> dict[str, Any]:
    if "file" not in payload:
        raise ArgumentTypeError("missing required argument: file")
    source = path_from_url(str(payload["file"]))
    request = parse_request(payload)
    out_path = engine.run(request, source, temp_dir)
    return {"file": str(out_path)}


def invoke(
    engine: ImageAlterEngine,
    function: str,
    payload: Mapping[str, Any],
    temp_dir: Path | str,
) -> dict[str, Any]:
    """Run a host call, reporting failures as ``{"error", "verboseError"}`` results."""
    if function != TRANSFORM_FUNCTION:
        return {"error": "bp.internalError", "verboseError": "unknown function invoked"}
    try:
        return transform(engine, payload, temp_dir)
    except ImageAlterError as exc:
        return {"error": exc.code, "verboseError": exc.message or "unknown"}


def actions_doc(registry: TransformationRegistry) -> str:
    parts = [
        "An array of actions to perform.  Each action is either a string "
        "(i.e. { actions: [ 'solarize' ] }) , or an object with a single property, "
        "where the property name is the action to perform, and the property value "
        "is the argument (i.e. { actions: [{rotate: 90}] }.  Supported actions include: "
    ]
    for descriptor in registry.list():
        parts.append(f"{descriptor.name} -- {descriptor.doc} | ")
    return "".join(parts)


def describe(registry: TransformationRegistry) -> dict[str, Any]:
    arguments = [
        {
            "name": "file",
            "type": "path",
            "required": True,
            "doc": "The image to transform.",
        },
        {
            "name": "format",
            "type": "string",
            "required": False,
            "doc": "The format of the output image.  Default is to output in the same "
            "format as the input image.  A string, one of: jpg, gif, or png",
        },
        {
            "name": "quality",
            "type": "integer",
            "required": False,
            "doc": "The quality of the output image.  From 0-100.  Lower qualities "
            "result in faster operations and smaller file sizes, at the cost of image quality.",
        },
        {
            "name": "actions",
            "type": "list",
            "required": False,
            "doc": actions_doc(registry),
        },
    ]
    return {
        "name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "doc": "Implements client side Image manipulation",
        "functions": [
            {
                "name": TRANSFORM_FUNCTION,
                "doc": "Perform a set of transformations on an input image",
                "arguments": arguments,
            }
        ],
    }
