"""Pytest fixtures for holoscribe tests."""

import os
import tempfile

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default configuration."""
    from holoscribe.config import HoloConfig
    return HoloConfig()


@pytest.fixture
def single_triangle():
    """Right triangle in the z=0 plane with unit legs."""
    from holoscribe.models import Mesh
    return Mesh(
        vertices=[[0, 0, 0], [1, 0, 0], [0, 1, 0]],
        faces=[[0, 1, 2]],
    )


@pytest.fixture
def unit_square():
    """Two triangles sharing the diagonal (0, 2)."""
    from holoscribe.models import Mesh
    return Mesh(
        vertices=[[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]],
        faces=[[0, 1, 2], [0, 2, 3]],
    )


@pytest.fixture
def tetrahedron():
    """Regular tetrahedron: 4 faces, 6 edges."""
    from holoscribe.models import Mesh
    return Mesh(
        vertices=[[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]],
        faces=[[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]],
    )


@pytest.fixture
def small_cloud():
    """A handful of points with varied depth."""
    return np.array([
        [0.0, 0.0, 0.5],
        [2.0, 1.0, 0.25],
        [-1.0, 3.0, 1.0],
    ])


@pytest.fixture
def nested_viewbox_svg():
    """Outer canvas without a viewBox wrapping an inner viewport with one circle."""
    return """
<svg height="500" width="500" xmlns="http://www.w3.org/2000/svg">
<svg viewBox="-1.2759765,-1.2759765 2.551953,2.551953" xmlns="http://www.w3.org/2000/svg">
<circle cx="0.850651" cy="0" fill="none" r="-0.13143276" stroke="black" stroke-width="0.005"/>
</svg></svg>
"""


@pytest.fixture
def circles_svg_file(temp_dir):
    """SVG file with three circles in a 400x300 canvas."""
    path = os.path.join(temp_dir, "circles.svg")
    with open(path, "w", encoding="utf-8") as f:
        f.write(
            '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="300">'
            '<circle cx="100" cy="150" r="40"/>'
            '<circle cx="200" cy="150" r="60"/>'
            '<circle cx="300" cy="150" r="20"/>'
            '</svg>'
        )
    return path


@pytest.fixture
def obj_file(temp_dir):
    """Wavefront OBJ of a single unit triangle."""
    path = os.path.join(temp_dir, "triangle.obj")
    with open(path, "w", encoding="utf-8") as f:
        f.write("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    return path
