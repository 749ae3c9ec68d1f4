"""
Canvas composition for scribed holograms.

The Scriber sizes a drawing around a point cloud and lets its strategy fill
it in. Coordinates stay in model units inside the viewBox (x right, y up,
z out of the screen); the canvas width and height carry physical units.
"""

import numpy as np
import svgwrite

from holoscribe.errors import EmptyInputError
from holoscribe.models import Extents
from holoscribe.scribe.strategies import get_strategy
from holoscribe.tracer import get_tracer, trace


def compute_extents(points, margin, min_extent=0.0):
    """
    ViewBox around the x, y projection of a point cloud.

    Adds ``margin`` on every side, then widens any axis still narrower than
    ``min_extent`` symmetrically about its centre. A single point therefore
    never yields an inverted or empty box.

    Raises EmptyInputError for an empty cloud.
    """
    points = np.asarray(points, dtype=float)
    if points.size == 0:
        raise EmptyInputError("Cannot compute extents of an empty point cloud")

    xy = points.reshape(-1, points.shape[-1])[:, :2]
    lo = xy.min(axis=0) - margin
    hi = xy.max(axis=0) + margin

    for axis in range(2):
        span = hi[axis] - lo[axis]
        if span < min_extent:
            pad = (min_extent - span) / 2.0
            lo[axis] -= pad
            hi[axis] += pad

    return Extents(
        xmin=float(lo[0]),
        ymin=float(lo[1]),
        width=float(hi[0] - lo[0]),
        height=float(hi[1] - lo[1]),
    )


class Scriber:
    """
    Composes a sized SVG document from a point cloud.

    The strategy is fixed at construction. Each call to scribe() builds a
    fresh drawing; the Scriber keeps no per-call state.
    """

    def __init__(self, strategy, config):
        self.strategy = strategy
        self.config = config

    @classmethod
    def from_config(cls, config):
        return cls(get_strategy(config), config)

    @property
    def canvas_size(self):
        sc = self.config.scriber
        return (f"{sc.canvas_width}{sc.units}", f"{sc.canvas_height}{sc.units}")

    @trace(label="scribe")
    def scribe(self, points):
        """
        Build the drawing for a point cloud.

        Args:
            points: (N, 3) array-like of x, y, z

        Returns:
            svgwrite.Drawing sized to the configured canvas with a viewBox
            covering the points plus margin
        """
        tracer = get_tracer()
        sc = self.config.scriber

        points = np.asarray(points, dtype=float).reshape(-1, 3)
        extents = compute_extents(points, sc.margin, sc.min_extent)

        tracer.event(
            f"Extents xmin={extents.xmin:.3f} ymin={extents.ymin:.3f} "
            f"w={extents.width:.3f} h={extents.height:.3f}"
        )

        dwg = svgwrite.Drawing(size=self.canvas_size)
        dwg.viewbox(*extents.as_tuple())

        self.strategy.render(points, dwg, self.config.stroke)

        if sc.draw_bounds:
            dwg.add(self.bounds_outline(dwg, extents))

        return dwg

    def bounds_outline(self, dwg, extents):
        """Closed rectangle tracing the viewBox edge."""
        return dwg.rect(
            insert=(extents.xmin, extents.ymin),
            size=(extents.width, extents.height),
            id="bounds",
            fill="none",
            stroke=self.config.stroke.color,
            stroke_width=self.config.stroke.width,
        )
