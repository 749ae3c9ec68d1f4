"""
Pydantic data models shared by the scribe and visualize pipelines.

Point clouds themselves are plain (N, 3) float numpy arrays; the models here
describe the smaller values that travel between stages.
"""

from typing import List

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from holoscribe.errors import MalformedInputError


class Point2D(BaseModel):
    """A point on the drawing plane, e.g. a light source."""
    x: float
    y: float

    model_config = ConfigDict(extra="forbid", frozen=True)


class Extents(BaseModel):
    """
    A viewBox: minimum corner plus width and height.

    This (xmin, ymin, width, height) form is used for every extents value in
    the package; xmax and ymax are derived.
    """
    xmin: float = 0.0
    ymin: float = 0.0
    width: float = 0.0
    height: float = 0.0

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def xmax(self):
        return self.xmin + self.width

    @property
    def ymax(self):
        return self.ymin + self.height

    def as_tuple(self):
        return (self.xmin, self.ymin, self.width, self.height)

    @classmethod
    def from_values(cls, values):
        """Build extents from exactly four numbers."""
        values = list(values)
        if len(values) != 4:
            raise MalformedInputError(
                f"viewBox needs 4 numbers, got {len(values)}",
                details={"values": values},
            )
        return cls(xmin=values[0], ymin=values[1], width=values[2], height=values[3])


class Circle(BaseModel):
    """
    A circle read from, or written to, a drawing.

    The radius is not required to be positive: source drawings sometimes
    carry negative radii and the arc geometry works with either sign.
    """
    cx: float
    cy: float
    r: float

    model_config = ConfigDict(extra="forbid", frozen=True)


class Mesh(BaseModel):
    """Indexed triangle mesh with 0-based face indices."""
    vertices: List[List[float]] = Field(default_factory=list)
    faces: List[List[int]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def vertex_array(self):
        return np.asarray(self.vertices, dtype=float).reshape(-1, 3)


class ArcGeometry(BaseModel):
    """A reflected-light arc on a circle."""
    center: Point2D
    radius: float
    incidence_angle: float  # radians
    half_cone_angle: float  # radians
    start: Point2D
    end: Point2D

    model_config = ConfigDict(extra="forbid")

    def to_path(self):
        """SVG path data: move to start, small arc with positive sweep to end."""
        r = self.radius
        return (
            f"M{self.start.x} {self.start.y} "
            f"A{r} {r} 0 0 1 {self.end.x} {self.end.y}"
        )


class AnimatedArc(BaseModel):
    """Keyframed path data for one circle's looping reflection."""
    frames: List[str] = Field(default_factory=list)
    key_times: List[float] = Field(default_factory=list)
    duration_secs: float
    repeat_count: str = "indefinite"

    model_config = ConfigDict(extra="forbid")

    @property
    def values(self):
        """Frames joined the way an SVG animate element expects them."""
        return ";".join(self.frames)
