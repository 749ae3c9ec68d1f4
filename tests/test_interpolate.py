"""Tests for mesh edge interpolation."""

import numpy as np
import pytest

from holoscribe.errors import InvalidMeshError
from holoscribe.mesh.interpolate import (
    canonical_edge, interpolate_edge, interpolate_edges, segments_for_length, unique_edges,
)
from holoscribe.models import Mesh


def split_by_edge(cloud, edges, vertices, density):
    """Cut a cloud back into per-edge runs using the known run lengths."""
    runs = []
    offset = 0
    while offset < len(cloud):
        start = cloud[offset]
        # find which edge this run starts on by trying every candidate length
        for a, b in edges:
            for first, last in ((vertices[a], vertices[b]), (vertices[b], vertices[a])):
                n = segments_for_length(np.linalg.norm(np.subtract(last, first)), density) + 1
                run = cloud[offset:offset + n]
                if (len(run) == n and np.allclose(run[0], first) and np.allclose(run[-1], last)):
                    runs.append((tuple(first), tuple(last), n))
                    offset += n
                    break
            else:
                continue
            break
        else:
            raise AssertionError(f"No edge starts at {start}")
    return runs


class TestUniqueEdges:
    """Tests for edge extraction and deduplication."""

    def test_canonical_edge_order(self):
        """Test that both directions of an edge compare equal."""
        assert canonical_edge(5, 7) == canonical_edge(7, 5) == (5, 7)

    def test_single_triangle_edges(self, single_triangle):
        """Test that a triangle has exactly three edges."""
        edges = unique_edges(single_triangle.faces, 3)

        assert edges == {(0, 1), (1, 2), (0, 2)}

    def test_shared_edge_counted_once(self, unit_square):
        """Test that the diagonal shared by two faces appears once."""
        edges = unique_edges(unit_square.faces, 4)

        assert len(edges) == 5
        assert (0, 2) in edges

    def test_tetrahedron_edges(self, tetrahedron):
        """Test that a closed tetrahedron has six edges."""
        assert len(unique_edges(tetrahedron.faces, 4)) == 6

    def test_short_face_rejected(self):
        """Test that faces with fewer than three indices fail."""
        with pytest.raises(InvalidMeshError):
            unique_edges([[0, 1]], 3)

    def test_out_of_bounds_index_rejected(self):
        """Test that indices past the vertex list fail."""
        with pytest.raises(InvalidMeshError):
            unique_edges([[0, 1, 3]], 3)

    def test_negative_index_rejected(self):
        """Test that negative indices fail."""
        with pytest.raises(InvalidMeshError):
            unique_edges([[0, -1, 2]], 3)


class TestInterpolateEdge:
    """Tests for interpolating a single edge."""

    def test_minimum_segments(self):
        """Test that short edges still get three segments."""
        points = interpolate_edge([0, 0, 0], [0.1, 0, 0], density=1)

        assert len(points) == 4

    def test_segments_follow_length(self):
        """Test that longer edges get floor(length * density) segments."""
        points = interpolate_edge([0, 0, 0], [10, 0, 0], density=2)

        assert len(points) == 21
        np.testing.assert_allclose(np.diff(points[:, 0]), 0.5)

    def test_endpoints_exact(self):
        """Test that the first and last points are the edge endpoints."""
        start = [0.3, -1.7, 2.2]
        end = [4.1, 0.9, -3.3]

        points = interpolate_edge(start, end, density=3)

        assert points[0].tolist() == pytest.approx(start)
        assert points[-1].tolist() == end

    def test_zero_length_edge(self):
        """Test that a degenerate edge produces finite repeated points."""
        points = interpolate_edge([1, 2, 3], [1, 2, 3], density=5)

        assert len(points) == 4
        assert np.isfinite(points).all()
        np.testing.assert_allclose(points, [[1, 2, 3]] * 4)

    def test_non_finite_length_clamped(self):
        """Test that a non-finite scaled length falls back to the minimum."""
        assert segments_for_length(float("inf"), 1) == 3
        assert segments_for_length(float("nan"), 1) == 3


class TestInterpolateEdges:
    """Tests for whole-mesh interpolation."""

    def test_single_triangle_scenario(self, single_triangle):
        """Test the unit triangle at density 1: three edges of four points each."""
        cloud = interpolate_edges(single_triangle, 1)

        assert cloud.shape == (12, 3)
        runs = split_by_edge(cloud, unique_edges(single_triangle.faces, 3),
                             single_triangle.vertices, 1)
        assert len(runs) == 3
        assert all(n >= 4 for _, _, n in runs)

    def test_every_edge_exactly_once(self, unit_square):
        """Test that the shared diagonal is interpolated once."""
        density = 4
        cloud = interpolate_edges(unit_square, density)

        runs = split_by_edge(cloud, unique_edges(unit_square.faces, 4), unit_square.vertices, density)
        endpoints = [frozenset((first, last)) for first, last, _ in runs]

        assert len(runs) == 5
        assert len(set(endpoints)) == 5
        diagonal = frozenset(((0.0, 0.0, 0.0), (1.0, 1.0, 0.0)))
        assert endpoints.count(diagonal) == 1

    def test_point_count(self, tetrahedron):
        """Test that point count matches the per-edge formula."""
        density = 10
        edge_length = np.sqrt(8)
        per_edge = int(np.floor(edge_length * density)) + 1

        cloud = interpolate_edges(tetrahedron, density)

        assert len(cloud) == 6 * per_edge

    def test_empty_mesh(self):
        """Test that a mesh without faces yields an empty cloud."""
        cloud = interpolate_edges(Mesh(vertices=[[0, 0, 0]], faces=[]), 1)

        assert cloud.shape == (0, 3)

    def test_invalid_mesh(self):
        """Test that bad face indices surface as InvalidMeshError."""
        mesh = Mesh(vertices=[[0, 0, 0], [1, 0, 0]], faces=[[0, 1, 2]])

        with pytest.raises(InvalidMeshError):
            interpolate_edges(mesh, 1)


class TestMeshPoints:
    """Tests for the mesh's vertex array view."""

    def test_vertex_rows(self, single_triangle):
        """Test that each vertex is one x, y, z row."""
        vertices = single_triangle.vertex_array

        assert vertices.shape == (3, 3)
        assert vertices.dtype == float

    def test_no_vertices(self):
        """Test that a vertex-less mesh still gives an (0, 3) array."""
        assert Mesh().vertex_array.shape == (0, 3)
