"""
Looping reflection animations for a moving light source.

The light travels from a start to an end position and back. Frames are arc
path strings; the sequence always begins and ends on the same frame so the
loop has no jump at the wrap point.
"""

import math
import numbers

import numpy as np

from holoscribe.config import HologramConfig
from holoscribe.errors import DegenerateGeometryError, InvalidDurationError
from holoscribe.models import AnimatedArc
from holoscribe.viz.arcs import circular_arc, incidence_angle, reflection_arc


def _check_duration(duration_secs):
    if not (isinstance(duration_secs, numbers.Real) and math.isfinite(duration_secs)) or duration_secs <= 0:
        raise InvalidDurationError(
            f"Animation duration must be positive, got {duration_secs!r}",
            details={"duration_secs": duration_secs},
        )


def uniform_key_times(num_frames):
    """Evenly spaced keyTimes from 0 to 1."""
    if num_frames < 2:
        return [0.0] * num_frames
    return [float(t) for t in np.linspace(0.0, 1.0, num_frames)]


def sweep_angle(circle, ls_start, ls_end):
    """
    Signed angle in radians turning the vector centre->ls_start onto
    centre->ls_end.

    Raises DegenerateGeometryError when either light position is the centre.
    """
    start = np.array([ls_start.x - circle.cx, ls_start.y - circle.cy])
    end = np.array([ls_end.x - circle.cx, ls_end.y - circle.cy])
    if not start.any() or not end.any():
        raise DegenerateGeometryError(
            "Light source coincides with circle centre",
            details={"cx": circle.cx, "cy": circle.cy},
        )
    cross = start[0] * end[1] - start[1] * end[0]
    return float(math.atan2(cross, float(np.dot(start, end))))


def animate_two_frame(circle, ls_start, ls_end, duration_secs, half_cone_angle_deg=3.5):
    """
    Three keyframes: arc at ls_start, arc at ls_end, arc at ls_start.
    """
    _check_duration(duration_secs)

    first = reflection_arc(circle, ls_start, half_cone_angle_deg).to_path()
    middle = reflection_arc(circle, ls_end, half_cone_angle_deg).to_path()
    frames = [first, middle, first]

    return AnimatedArc(
        frames=frames,
        key_times=uniform_key_times(len(frames)),
        duration_secs=duration_secs,
    )


def swept_angles(circle, ls_start, ls_end, step_angle_deg=3.5):
    """
    Arc angles for the outward leg of a swept animation.

    Starts at the incidence angle of ls_start and turns through the signed
    sweep in ceil(|sweep| / step_angle) equal steps, at least one. The sweep
    is measured with y pointing down the drawing and arc angles with y
    pointing up, hence the subtraction.
    """
    if step_angle_deg <= 0:
        raise ValueError(f"Step angle must be positive, got {step_angle_deg}")

    sweep = sweep_angle(circle, ls_start, ls_end)
    num_steps = max(1, math.ceil(abs(sweep) / math.radians(step_angle_deg)))
    start_angle = incidence_angle(circle.cx, circle.cy, ls_start)

    return [start_angle - sweep * step / num_steps for step in range(num_steps + 1)]


def animate_swept(circle, ls_start, ls_end, duration_secs, half_cone_angle_deg=3.5, step_angle_deg=3.5):
    """
    Sweep the arc through evenly spaced angles and back.

    The outward leg comes from swept_angles(); the return leg replays it
    backwards without repeating the turning frame, giving 2 * steps + 1
    keyframes with uniform timing.
    """
    _check_duration(duration_secs)

    half_cone = math.radians(half_cone_angle_deg)
    forward = [
        circular_arc(circle, angle, half_cone).to_path()
        for angle in swept_angles(circle, ls_start, ls_end, step_angle_deg)
    ]
    frames = forward + forward[-2::-1]

    return AnimatedArc(
        frames=frames,
        key_times=uniform_key_times(len(frames)),
        duration_secs=duration_secs,
    )


def animate(circle, ls_start, ls_end, duration_secs, config=None, mode=None):
    """
    Animated reflection arc for one circle.

    ``mode`` overrides config.hologram.animation_mode; ``config`` supplies
    the cone and step angles (HologramConfig defaults when omitted).
    """
    hologram = config.hologram if config is not None else HologramConfig()
    mode = mode or hologram.animation_mode

    if mode == "two_frame":
        return animate_two_frame(
            circle, ls_start, ls_end, duration_secs,
            half_cone_angle_deg=hologram.half_cone_angle_deg,
        )
    if mode == "swept":
        return animate_swept(
            circle, ls_start, ls_end, duration_secs,
            half_cone_angle_deg=hologram.half_cone_angle_deg,
            step_angle_deg=hologram.step_angle_deg,
        )
    raise ValueError(f"Unknown animation mode: {mode} (expected 'swept' or 'two_frame')")
