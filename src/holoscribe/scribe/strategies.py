"""
Point scribing strategies.

A strategy decides what mark each point of a cloud leaves on the drawing.
The Scriber owns exactly one strategy and hands it the whole cloud at once.
"""

from abc import ABC, abstractmethod

from holoscribe.tracer import get_tracer


class PointStrategy(ABC):
    """Interface for turning a point cloud into drawing elements."""

    name = ""

    @abstractmethod
    def render(self, points, dwg, stroke):
        """
        Add the marks for every point to the drawing.

        Args:
            points: (N, 3) array of x, y, z
            dwg: svgwrite.Drawing to add elements to
            stroke: StrokeConfig shared by all marks

        Returns:
            the same drawing
        """
        pass


class DiamondStrategy(PointStrategy):
    """
    Outline each point with a diamond whose size follows depth.

    All diamonds go into one combined path. Each one starts at the top
    vertex (x, y - size) and walks left, bottom, right, top.
    """

    name = "diamond"

    def __init__(self, plane_start=-1.0, plane_end=1.0, min_size=0.01, max_size=0.1):
        self.plane_start = plane_start
        self.plane_end = plane_end
        self.min_size = min_size
        self.max_size = max_size

    def size_for_depth(self, z):
        """Linear remap of z from [plane_start, plane_end] to [min_size, max_size]."""
        return self.min_size + (z - self.plane_start) * (self.max_size - self.min_size) / (
            self.plane_end - self.plane_start
        )

    def diamond_path(self, x, y, size):
        return (
            f"M{x} {y} m0 {-size} "
            f"l{-size} {size} l{size} {size} l{size} {-size} l{-size} {-size}"
        )

    def render(self, points, dwg, stroke):
        tracer = get_tracer()

        commands = [
            self.diamond_path(float(x), float(y), float(self.size_for_depth(z)))
            for x, y, z in points
        ]
        if commands:
            dwg.add(dwg.path(
                d=" ".join(commands),
                id="diamonds",
                fill="none",
                stroke=stroke.color,
                stroke_width=stroke.width,
            ))

        tracer.event(f"Scribed {len(commands)} diamonds")
        return dwg


class DepthCircleStrategy(PointStrategy):
    """
    One circle per point, radius z * z_scale.

    z points out of the screen, so points closer to the viewer draw larger
    circles. Negative depths give negative radii and are written unchanged.
    """

    name = "circle"

    def __init__(self, z_scale=1.0):
        self.z_scale = z_scale

    def radius_for_depth(self, z):
        return z * self.z_scale

    def render(self, points, dwg, stroke):
        tracer = get_tracer()

        group = dwg.g(id="circles", fill="none", stroke=stroke.color, stroke_width=stroke.width)
        for x, y, z in points:
            group.add(dwg.circle(
                center=(float(x), float(y)),
                r=float(self.radius_for_depth(z)),
            ))
        dwg.add(group)

        tracer.event(f"Scribed {len(points)} circles", z_scale=self.z_scale)
        return dwg


def get_strategy(config):
    """
    Factory for the strategy named by config.scriber.strategy.

    Raises ValueError for unknown names.
    """
    name = config.scriber.strategy
    if name == DepthCircleStrategy.name:
        return DepthCircleStrategy(z_scale=config.circle.z_scale)
    if name == DiamondStrategy.name:
        return DiamondStrategy(
            plane_start=config.diamond.plane_start,
            plane_end=config.diamond.plane_end,
            min_size=config.diamond.min_size,
            max_size=config.diamond.max_size,
        )
    raise ValueError(f"Unknown scribing strategy: {name}")
