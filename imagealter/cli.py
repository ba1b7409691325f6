"""ImageAlter CLI entrypoints."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .engine import ImageAlterEngine
from .errors import ImageAlterError
from .pipeline import PipelineStep
from .runs.events import events_path
from .service import parse_actions
from .utils import load_dotenv


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="imagealter", description="Apply a pipeline of image transformations")
    sub = parser.add_subparsers(dest="command")

    transform = sub.add_parser("transform", help="Transform a single image")
    transform.add_argument("--file", required=True, help="Path to the input image")
    transform.add_argument("--out", required=True, help="Output directory")
    transform.add_argument("--format", dest="output_format", help="Output format (jpg, png, gif, ...)")
    transform.add_argument("--quality", type=int, help="Encode quality, 0-100")
    transform.add_argument(
        "--action",
        dest="actions",
        action="append",
        default=[],
        help="NAME or NAME=JSON; repeat to build the pipeline in order",
    )
    transform.add_argument("--actions-json", dest="actions_json", help="JSON array of actions")
    transform.add_argument("--events", help="Path to events.jsonl")

    sub.add_parser("list", help="List available transformations")
    return parser


def _parse_action(raw: str) -> PipelineStep:
    name, sep, value = raw.partition("=")
    if not sep:
        return PipelineStep(name.strip())
    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    return PipelineStep.of(name.strip(), parsed)


def _handle_transform(args: argparse.Namespace) -> int:
    events = events_path(args.events)
    try:
        steps = [_parse_action(raw) for raw in args.actions]
        if args.actions_json:
            steps.extend(parse_actions(json.loads(args.actions_json)))
        engine = ImageAlterEngine(events_path=events)
        out_path = engine.run_pipeline(
            args.file,
            args.out,
            output_format=args.output_format,
            quality=args.quality,
            steps=steps,
        )
    except (ImageAlterError, json.JSONDecodeError) as exc:
        print(f"Transform failed: {exc}", file=sys.stderr)
        return 1
    print(out_path)
    return 0


def _handle_list(args: argparse.Namespace) -> int:
    engine = ImageAlterEngine()
    for item in engine.list_transformations():
        if item["requires_args"]:
            policy = "required"
        elif item["accepts_args"]:
            policy = "optional"
        else:
            policy = "none"
        print(f"{item['name']:<10} args={policy:<8} {item['doc']}")
    return 0


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "transform":
        raise SystemExit(_handle_transform(args))
    if args.command == "list":
        raise SystemExit(_handle_list(args))
    parser.print_help()
    raise SystemExit(1)


if __name__ == "__main__":
    main()
