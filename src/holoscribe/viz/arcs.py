"""
Reflection arcs on circles lit by a point light source.

Angles are measured from +X with y pointing up, while drawings have y
pointing down, so every point on a circle is placed at
(cx + r cos a, cy - r sin a).
"""

import math

from holoscribe.errors import DegenerateGeometryError
from holoscribe.models import ArcGeometry, Point2D


def incidence_angle(cx, cy, light_source):
    """
    Angle from a circle centre towards the light source, in radians.

    Uses atan(-dy / dx) and subtracts pi from negative results, which folds
    every direction onto the upper half of the circle. A light source
    straight above or below the centre (dx == 0) gives pi / 2.

    Raises DegenerateGeometryError if the light sits on the centre.
    """
    dx = light_source.x - cx
    dy = light_source.y - cy

    if dx == 0:
        if dy == 0:
            raise DegenerateGeometryError(
                "Light source coincides with circle centre",
                details={"cx": cx, "cy": cy},
            )
        return math.pi / 2

    angle = math.atan(-dy / dx)
    if angle < 0:
        angle -= math.pi
    if not math.isfinite(angle):
        raise DegenerateGeometryError(
            "Incidence angle is not finite",
            details={"dx": dx, "dy": dy},
        )
    return angle


def point_on_circle(cx, cy, r, angle):
    return Point2D(x=cx + r * math.cos(angle), y=cy - r * math.sin(angle))


def circular_arc(circle, angle, half_cone_angle):
    """
    Arc of the circle centred on ``angle`` and spanning +/- ``half_cone_angle``.

    Both angles are in radians. Raises DegenerateGeometryError for a zero
    radius.
    """
    if circle.r == 0:
        raise DegenerateGeometryError(
            "Circle has zero radius",
            details={"cx": circle.cx, "cy": circle.cy},
        )

    return ArcGeometry(
        center=Point2D(x=circle.cx, y=circle.cy),
        radius=circle.r,
        incidence_angle=angle,
        half_cone_angle=half_cone_angle,
        start=point_on_circle(circle.cx, circle.cy, circle.r, angle - half_cone_angle),
        end=point_on_circle(circle.cx, circle.cy, circle.r, angle + half_cone_angle),
    )


def reflection_arc(circle, light_source, half_cone_angle_deg):
    """
    The band of a circle that reflects light from ``light_source``.

    Args:
        circle: Circle
        light_source: Point2D
        half_cone_angle_deg: half the angular width of the band, in degrees

    Returns:
        ArcGeometry; ``to_path()`` gives the SVG path data
    """
    angle = incidence_angle(circle.cx, circle.cy, light_source)
    return circular_arc(circle, angle, math.radians(half_cone_angle_deg))


def light_source_angle(circle, light_source):
    """
    Signed angle from +X to the direction of the light, or None when the
    light source is inside (or on) the circle.
    """
    dx = light_source.x - circle.cx
    dy = light_source.y - circle.cy
    if math.hypot(dx, dy) <= abs(circle.r):
        return None
    return math.atan2(-dy, dx)
