"""
Pipeline orchestration for holoscribe.

Two independent flows:
- scribe: mesh file -> edge point cloud -> scribed SVG
- visualize: SVG of circles -> static or animated hologram SVG
"""

import os

from holoscribe.config import load_config
from holoscribe.io.load_mesh import load_mesh, validate_mesh_inputs
from holoscribe.io.save_artifacts import DebugArtifactWriter, save_svg
from holoscribe.mesh.interpolate import interpolate_edges
from holoscribe.models import Point2D
from holoscribe.scribe.scriber import Scriber
from holoscribe.tracer import get_tracer, trace
from holoscribe.viz.visualizer import Visualizer


def scribe_mesh(mesh, config):
    """
    Interpolate a mesh's edges and scribe them into a drawing.

    Returns (drawing, points).
    """
    points = interpolate_edges(mesh, config.interpolation.density)
    dwg = Scriber.from_config(config).scribe(points)
    return dwg, points


@trace(label="run_scribe_pipeline")
def run_scribe_pipeline(input_path, out_path, config=None, config_path=None, debug=False):
    """
    Load a mesh, scribe it, and save the SVG.

    Args:
        input_path: mesh file (.obj, .stl, ...)
        out_path: SVG file to write
        config: HoloConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: also write the point cloud and a summary under <out dir>/debug

    Returns:
        svgwrite.Drawing
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    errors = validate_mesh_inputs([input_path])
    if errors:
        for error in errors:
            tracer.event(error, level="ERROR")
        raise ValueError(f"Input validation failed: {errors}")

    mesh = load_mesh(input_path)

    with tracer.span("scribe_mesh", module="pipeline"):
        dwg, points = scribe_mesh(mesh, config)

    save_svg(dwg, out_path)

    debug_writer = DebugArtifactWriter(os.path.dirname(out_path) or ".", enabled=debug)
    debug_writer.save_points(points)
    debug_writer.save_json(
        {
            "input": os.path.abspath(input_path),
            "num_vertices": len(mesh.vertices),
            "num_faces": len(mesh.faces),
            "num_points": len(points),
            "density": config.interpolation.density,
            "strategy": config.scriber.strategy,
        },
        "scribe_summary.json",
    )

    return dwg


@trace(label="run_visualize_pipeline")
def run_visualize_pipeline(input_path, out_path, config=None, config_path=None,
                           animate=False, ls_start=None, ls_end=None, duration_secs=None, mode=None):
    """
    Turn an SVG of circles into a hologram preview and save it.

    Light positions and duration default to the hologram section of the
    configuration.

    Returns:
        svgwrite.Drawing
    """
    if config is None:
        config = load_config(config_path)

    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Drawing not found: {input_path}")

    viz = Visualizer.from_file(input_path, config)
    hc = config.hologram

    if animate:
        ls_start = ls_start or Point2D(x=hc.light_start[0], y=hc.light_start[1])
        ls_end = ls_end or Point2D(x=hc.light_end[0], y=hc.light_end[1])
        duration_secs = hc.duration_secs if duration_secs is None else duration_secs
        dwg = viz.build_animated_hologram(ls_start, ls_end, duration_secs, mode=mode)
    else:
        dwg = viz.build_static_hologram(ls_start)

    save_svg(dwg, out_path)
    return dwg
