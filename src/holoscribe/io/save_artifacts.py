"""
Output writing for holoscribe.

Drawings, JSON summaries and point-cloud dumps all go through here so the
pipelines never touch file handles directly. Parent directories are created
on demand.
"""

import json
import os

import numpy as np
from pydantic import BaseModel

from holoscribe.tracer import get_tracer


def _prepare(path):
    """Create the parent directory of an output file and return the path."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    return path


def _write_text(path, text, kind):
    with open(_prepare(path), "w", encoding="utf-8") as f:
        f.write(text)
    get_tracer().event(f"Wrote {kind}: {path}", chars=len(text))


def save_svg(drawing, path):
    """Serialize an svgwrite drawing, or write SVG text unchanged."""
    text = drawing if isinstance(drawing, str) else drawing.tostring()
    _write_text(path, text, "SVG")


def save_json(data, path, indent=2):
    """Write a dict or pydantic model as indented JSON."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    _write_text(path, json.dumps(data, indent=indent, default=str), "JSON")


def save_point_cloud_csv(points, path):
    """Dump an (N, 3) point cloud as ``x,y,z`` rows under a header line."""
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    np.savetxt(_prepare(path), points, delimiter=",", header="x,y,z", comments="")
    get_tracer().event(f"Wrote {len(points)} points: {path}")


class DebugArtifactWriter:
    """
    Intermediate results of one pipeline run, kept under ``<out_dir>/debug``.

    A disabled writer ignores every call.
    """

    def __init__(self, out_dir, enabled=True):
        self.debug_dir = os.path.join(out_dir, "debug")
        self.enabled = enabled

    def save_json(self, data, filename):
        if self.enabled:
            save_json(data, os.path.join(self.debug_dir, filename))

    def save_points(self, points, filename="points.csv"):
        if self.enabled:
            save_point_cloud_csv(points, os.path.join(self.debug_dir, filename))
