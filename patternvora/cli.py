"""Command-line entry: generate shape data, hit-test a saved state, list styles."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from patternvora.config import settings
from patternvora.engine.hit_test import get_shape_at_position
from patternvora.engine.overrides import apply_overrides
from patternvora.engine.pipeline import generate_shape_data, load_modules
from patternvora.engine.registry import get_style_registry
from patternvora.models.layer import LayerConfig
from patternvora.models.state import AppState
from patternvora.palettes import get_palette
from patternvora.utils.geometry import get_dimensions

logger = logging.getLogger("patternvora")


def _configure_logging() -> None:
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, settings.patternvora_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _canvas(args: argparse.Namespace, aspect_ratio: str | None = None) -> tuple[float, float]:
    if args.width is not None and args.height is not None:
        return args.width, args.height
    ratio = args.aspect_ratio or aspect_ratio or settings.default_aspect_ratio
    return get_dimensions(ratio, args.size or settings.default_canvas_size)


def _read_json(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def cmd_generate(args: argparse.Namespace) -> int:
    config = LayerConfig.model_validate(_read_json(args.config))
    if args.palette:
        config = config.model_copy(update={"palette": get_palette(args.palette)})
    width, height = _canvas(args)
    shapes = generate_shape_data(width, height, config)
    if args.apply_overrides:
        shapes = apply_overrides(shapes, config.overrides, width, height)

    payload = json.dumps([s.to_wire() for s in shapes], indent=args.indent)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        logger.info("Wrote %d shapes to %s", len(shapes), args.output)
    else:
        print(payload)
    return 0


def cmd_hit_test(args: argparse.Namespace) -> int:
    state = AppState.model_validate(_read_json(args.state))
    width, height = _canvas(args, state.aspect_ratio)
    hit = get_shape_at_position(args.x, args.y, width, height, state)
    print(json.dumps(hit.to_wire() if hit else None, indent=args.indent))
    return 0


def cmd_styles(args: argparse.Namespace) -> int:
    load_modules()
    for style in get_style_registry().styles():
        print(style)
    return 0


def _add_canvas_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=float, help="Canvas width (needs --height)")
    parser.add_argument("--height", type=float, help="Canvas height (needs --width)")
    parser.add_argument("--aspect-ratio", choices=["1:1", "16:9", "9:16", "4:5", "3:4"])
    parser.add_argument("--size", type=int, help="Long side in pixels for --aspect-ratio")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="patternvora", description="Seeded vector pattern shape generator")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a layer's shape data as JSON")
    gen.add_argument("config", help="LayerConfig JSON file")
    gen.add_argument("--output", "-o", help="Write to this file instead of stdout")
    gen.add_argument("--palette", help="Use a built-in palette by name")
    gen.add_argument("--apply-overrides", action="store_true", help="Apply and drop hidden overrides")
    _add_canvas_args(gen)
    gen.set_defaults(func=cmd_generate)

    hit = sub.add_parser("hit-test", help="Find the top-most shape at a canvas point")
    hit.add_argument("state", help="AppState JSON file")
    hit.add_argument("x", type=float)
    hit.add_argument("y", type=float)
    _add_canvas_args(hit)
    hit.set_defaults(func=cmd_hit_test)

    styles = sub.add_parser("styles", help="List registered styles")
    styles.set_defaults(func=cmd_styles)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()
    try:
        return args.func(args)
    except (OSError, KeyError, json.JSONDecodeError, ValidationError) as e:
        print(f"patternvora: {e}", file=sys.stderr)
        return 1
