"""
Command-line interface for holoscribe.

  holoscribe scribe -i model.obj -o model.svg -s 100x50mm
  holoscribe viz -i circles.svg -o hologram.svg --animate
  holoscribe init-config -o holoscribe.yaml
"""

import argparse
import re
import sys

from holoscribe.config import load_config, save_default_config
from holoscribe.tracer import configure_tracer, get_tracer

_SIZE_RE = re.compile(r"^(\d+)(?:x(\d+))?(mm|cm|m)$")
_UNIT_FACTORS = {"mm": 1, "cm": 10, "m": 1000}


def parse_size(arg):
    """
    Parse ``width[xheight](mm|cm|m)`` into (width, height) in millimetres.

    A missing height means a square canvas. Raises ValueError otherwise.
    """
    match = _SIZE_RE.match(arg)
    if not match:
        raise ValueError(f"Invalid size {arg!r}, expected width[xheight](mm|cm|m)")

    width = int(match.group(1))
    height = int(match.group(2)) if match.group(2) else width
    factor = _UNIT_FACTORS[match.group(3)]
    return width * factor, height * factor


def parse_point(arg):
    """Parse ``x,y`` into a tuple of floats."""
    parts = arg.split(",")
    if len(parts) != 2:
        raise ValueError(f"Invalid point {arg!r}, expected x,y")
    return float(parts[0]), float(parts[1])


def _size_type(arg):
    try:
        return parse_size(arg)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _point_type(arg):
    try:
        return parse_point(arg)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _add_trace_args(parser):
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="holoscribe",
        description="holoscribe: turn 3D wireframes into scratch-hologram SVGs and preview their reflections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scribe_parser = subparsers.add_parser("scribe", help="Scribe a mesh into an SVG")
    scribe_parser.add_argument("--input", "-i", required=True, help="Input mesh (.obj, .stl, ...)")
    scribe_parser.add_argument("--output", "-o", required=True, help="Output SVG file")
    scribe_parser.add_argument(
        "--size", "-s",
        type=_size_type,
        default=None,
        help="Canvas size as width[xheight](mm|cm|m)",
    )
    scribe_parser.add_argument(
        "--stroke-density",
        type=int,
        default=None,
        help="Points per model unit along each edge",
    )
    scribe_parser.add_argument(
        "--strategy",
        choices=["circle", "diamond"],
        default=None,
        help="How each point is scribed",
    )
    scribe_parser.add_argument(
        "--z-scale",
        type=float,
        default=None,
        help="Scaling factor from z coordinate to circle radius",
    )
    scribe_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    scribe_parser.add_argument("--debug", action="store_true", help="Write debug artifacts")
    _add_trace_args(scribe_parser)

    viz_parser = subparsers.add_parser("viz", help="Preview reflections on an SVG of circles")
    viz_parser.add_argument("--input", "-i", required=True, help="Input SVG with circles")
    viz_parser.add_argument("--output", "-o", required=True, help="Output SVG file")
    viz_parser.add_argument("--animate", action="store_true", help="Animate a moving light source")
    viz_parser.add_argument("--duration", type=float, default=None, help="Animation duration in seconds")
    viz_parser.add_argument(
        "--mode",
        choices=["swept", "two_frame"],
        default=None,
        help="Animation style",
    )
    viz_parser.add_argument("--light-start", type=_point_type, default=None, help="Light start as x,y")
    viz_parser.add_argument("--light-end", type=_point_type, default=None, help="Light end as x,y")
    viz_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    _add_trace_args(viz_parser)

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="holoscribe.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "scribe":
        return handle_scribe(args)
    elif args.command == "viz":
        return handle_viz(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _configure_tracing(args):
    configure_tracer(
        enabled=args.trace,
        level=args.trace_level,
        file_path=args.trace_file,
        json_output=args.trace_json,
    )


def handle_scribe(args):
    """Handle the scribe command."""
    _configure_tracing(args)
    tracer = get_tracer()

    config = load_config(args.config)
    if args.size is not None:
        config.scriber.canvas_width, config.scriber.canvas_height = args.size
        config.scriber.units = "mm"
    if args.stroke_density is not None:
        config.interpolation.density = args.stroke_density
    if args.strategy is not None:
        config.scriber.strategy = args.strategy
    if args.z_scale is not None:
        config.circle.z_scale = args.z_scale

    try:
        from holoscribe.pipeline import run_scribe_pipeline

        with tracer.span("cli_scribe", module="cli"):
            run_scribe_pipeline(args.input, args.output, config=config, debug=args.debug)

        print(f"Scribed {args.input} -> {args.output}")
        return 0

    except Exception as e:
        tracer.event(f"Scribe failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_viz(args):
    """Handle the viz command."""
    _configure_tracing(args)
    tracer = get_tracer()

    config = load_config(args.config)

    try:
        from holoscribe.models import Point2D
        from holoscribe.pipeline import run_visualize_pipeline

        ls_start = Point2D(x=args.light_start[0], y=args.light_start[1]) if args.light_start else None
        ls_end = Point2D(x=args.light_end[0], y=args.light_end[1]) if args.light_end else None

        with tracer.span("cli_viz", module="cli"):
            run_visualize_pipeline(
                args.input, args.output,
                config=config,
                animate=args.animate,
                ls_start=ls_start,
                ls_end=ls_end,
                duration_secs=args.duration,
                mode=args.mode,
            )

        kind = "animated" if args.animate else "static"
        print(f"Built {kind} hologram {args.input} -> {args.output}")
        return 0

    except Exception as e:
        tracer.event(f"Visualize failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
