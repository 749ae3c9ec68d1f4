"""
Hologram previews for drawings made of circles.

A Visualizer holds the circles and extents parsed from one drawing and
produces SVG documents showing each circle together with the arc of it that
would catch the light.
"""

import svgwrite

from holoscribe.config import HoloConfig
from holoscribe.models import Point2D
from holoscribe.tracer import get_tracer, trace
from holoscribe.viz.animate import animate
from holoscribe.viz.arcs import light_source_angle, reflection_arc
from holoscribe.viz.parse import parse_circles_with_extents

HOLOGRAM_STYLE = """
    .inputCircle { fill: none; stroke: lightgrey; }
    .outputArc { fill: none; stroke: red; stroke-linecap: round; }
"""


class Visualizer:
    """Builds static and animated hologram documents from parsed circles."""

    def __init__(self, circles, extents, config=None, light_source=None):
        self.circles = list(circles)
        self.extents = extents
        self.config = config or HoloConfig()
        self.light_source = light_source or Point2D(
            x=extents.width / 2.0,
            y=-extents.height / 3.0,
        )

    @classmethod
    def from_svg_contents(cls, contents, config=None):
        """Parse circles and extents out of SVG text."""
        config = config or HoloConfig()
        circles, extents = parse_circles_with_extents(
            contents,
            default_width=config.hologram.default_width,
            default_height=config.hologram.default_height,
        )
        return cls(circles, extents, config)

    @classmethod
    def from_file(cls, path, config=None):
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
        return cls.from_svg_contents(contents, config)

    def _new_document(self):
        """Outer document plus the nested viewport the circles are drawn in."""
        hc = self.config.hologram
        # animate values are path data, not the numbers svgwrite's validator expects
        dwg = svgwrite.Drawing(size=(hc.default_width, hc.default_height), debug=False)
        dwg.defs.add(dwg.style(HOLOGRAM_STYLE))
        viewport = dwg.svg()
        viewport.viewbox(*self.extents.as_tuple())
        dwg.add(viewport)
        return dwg, viewport

    def _input_circle(self, dwg, circle):
        return dwg.circle(
            center=(circle.cx, circle.cy),
            r=circle.r,
            class_="inputCircle",
            stroke_width=self.extents.width * self.config.hologram.circle_stroke_width,
        )

    def _arc_stroke_width(self):
        return self.extents.width * self.config.hologram.holo_stroke_width

    def _lit(self, circle, light_source):
        """False when the light sits inside the circle and no arc is visible."""
        if light_source_angle(circle, light_source) is None:
            get_tracer().event(
                f"Light source inside circle at ({circle.cx}, {circle.cy}), arc skipped",
                level="WARN",
            )
            return False
        return True

    @trace(label="build_static_hologram")
    def build_static_hologram(self, light_source=None):
        """
        Each circle plus its reflection arc for a fixed light source.

        Uses the visualizer's default light source (centred horizontally, a
        third of the height above the drawing) when none is given.
        """
        tracer = get_tracer()
        light_source = light_source or self.light_source
        half_cone = self.config.hologram.half_cone_angle_deg

        dwg, viewport = self._new_document()
        arcs = 0
        for circle in self.circles:
            viewport.add(self._input_circle(dwg, circle))
            if not self._lit(circle, light_source):
                continue
            arc = reflection_arc(circle, light_source, half_cone)
            viewport.add(dwg.path(
                d=arc.to_path(),
                class_="outputArc",
                stroke_width=self._arc_stroke_width(),
            ))
            arcs += 1

        tracer.event(f"Static hologram: {len(self.circles)} circles, {arcs} arcs")
        return dwg

    @trace(label="build_animated_hologram")
    def build_animated_hologram(self, ls_start, ls_end, duration_secs, mode=None):
        """
        Each circle plus an arc that follows a light moving from ls_start to
        ls_end and back, repeating indefinitely with the given duration.

        ``mode`` is "swept" or "two_frame"; defaults to the configured mode.
        """
        tracer = get_tracer()

        dwg, viewport = self._new_document()
        for circle in self.circles:
            viewport.add(self._input_circle(dwg, circle))

            animated = animate(circle, ls_start, ls_end, duration_secs, config=self.config, mode=mode)
            path = dwg.path(
                d=animated.frames[0],
                class_="outputArc",
                stroke_width=self._arc_stroke_width(),
            )
            path.add(dwg.animate(
                attributeName="d",
                values=animated.values,
                keyTimes=";".join(f"{t:g}" for t in animated.key_times),
                dur=f"{animated.duration_secs}s",
                repeatCount=animated.repeat_count,
            ))
            viewport.add(path)

        tracer.event(f"Animated hologram: {len(self.circles)} circles", duration_secs=duration_secs)
        return dwg
