"""
Circle and viewport extraction from SVG drawings.

Reads an SVG as a stream of start/end events and keeps only what the
reflection stage needs: the circles and the viewBox they live in.
"""

import re
from collections import Counter
from xml.etree import ElementTree as ET

from holoscribe.errors import MalformedInputError
from holoscribe.models import Circle, Extents
from holoscribe.tracer import get_tracer, trace

DEFAULT_WIDTH = 500.0
DEFAULT_HEIGHT = 500.0

_LENGTH_RE = re.compile(
    r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(?:px|mm|cm|in|pt|pc)?\s*$"
)


def _local_name(tag):
    """Strip an XML namespace: '{http://www.w3.org/2000/svg}circle' -> 'circle'."""
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""


def parse_length(value, name):
    """Parse a numeric attribute, dropping an absolute unit suffix if present."""
    match = _LENGTH_RE.match(value or "")
    if not match:
        raise MalformedInputError(f"Invalid {name}: {value!r}", details={name: value})
    return float(match.group(1))


def parse_viewbox(value):
    """Parse a viewBox of four whitespace- or comma-separated numbers."""
    tokens = [t for t in re.split(r"[\s,]+", value.strip()) if t]
    try:
        numbers = [float(t) for t in tokens]
    except ValueError:
        raise MalformedInputError(f"Invalid viewBox: {value!r}", details={"viewBox": value})
    return Extents.from_values(numbers)


def extents_from_size(attrib, default_width=DEFAULT_WIDTH, default_height=DEFAULT_HEIGHT):
    """Extents with origin (0, 0) from width/height attributes, or the defaults."""
    width = parse_length(attrib["width"], "width") if "width" in attrib else default_width
    height = parse_length(attrib["height"], "height") if "height" in attrib else default_height
    return Extents(xmin=0.0, ymin=0.0, width=width, height=height)


def circle_from_attrib(attrib):
    """Geometry of a circle element; styling attributes are dropped."""
    return Circle(
        cx=parse_length(attrib.get("cx", "0"), "cx"),
        cy=parse_length(attrib.get("cy", "0"), "cy"),
        r=parse_length(attrib.get("r", "0"), "r"),
    )


@trace(label="parse_circles_with_extents")
def parse_circles_with_extents(svg_contents, default_width=DEFAULT_WIDTH, default_height=DEFAULT_HEIGHT):
    """
    Extract circles and viewport extents from SVG text.

    Extents come from the outermost svg element that declares a viewBox. If
    none does, the outermost svg's width/height are used with origin (0, 0),
    and missing dimensions fall back to the defaults. Circles are collected
    from anywhere inside the outermost svg, nested viewports included.
    Scanning stops when the outermost svg closes.

    Other elements are skipped; each skipped element type is reported once as
    a warning with its count.

    Returns:
        (circles, extents) with circles in document order

    Raises:
        MalformedInputError: invalid XML, no svg element, or unparseable
        numeric attributes
    """
    tracer = get_tracer()

    parser = ET.XMLPullParser(events=("start", "end"))
    try:
        parser.feed(svg_contents)
        parser.close()
    except ET.ParseError as e:
        raise MalformedInputError(f"Drawing is not well-formed XML: {e}")

    circles = []
    skipped = Counter()
    outer_attrib = None
    viewbox_extents = None
    svg_depth = 0

    for event, elem in parser.read_events():
        tag = _local_name(elem.tag)

        if event == "end":
            if tag == "svg" and svg_depth > 0:
                svg_depth -= 1
                if svg_depth == 0:
                    break
            continue

        if tag == "svg":
            if svg_depth == 0:
                outer_attrib = dict(elem.attrib)
            svg_depth += 1
            if viewbox_extents is None and "viewBox" in elem.attrib:
                viewbox_extents = parse_viewbox(elem.attrib["viewBox"])
        elif tag == "circle" and svg_depth > 0:
            circles.append(circle_from_attrib(elem.attrib))
        else:
            skipped[tag] += 1

    if outer_attrib is None:
        raise MalformedInputError("Drawing has no top-level svg element")

    for tag, count in skipped.items():
        tracer.event(f"Skipped {count} unrecognized <{tag}> element(s)", level="WARN")

    extents = viewbox_extents or extents_from_size(outer_attrib, default_width, default_height)

    tracer.event(f"Parsed {len(circles)} circles", extents=list(extents.as_tuple()))

    return circles, extents
