"""
Edge interpolation for triangle meshes.

Turns the wireframe of a mesh into a dense point cloud: every unique edge is
sampled evenly from one endpoint to the other so that downstream strategies
can scribe each point individually.
"""

import math

import numpy as np

from holoscribe.errors import InvalidMeshError
from holoscribe.tracer import get_tracer, trace

MIN_SEGMENTS = 3


def canonical_edge(a, b):
    """Order an edge's vertex indices so (a, b) and (b, a) compare equal."""
    return (a, b) if a <= b else (b, a)


def unique_edges(faces, num_vertices):
    """
    Collect the distinct edges of a list of triangular faces.

    Edges shared by adjacent faces are stored once. Raises InvalidMeshError
    for faces with fewer than 3 indices or indices outside the vertex list.
    """
    edges = set()

    for face_idx, face in enumerate(faces):
        if len(face) < 3:
            raise InvalidMeshError(
                f"Face {face_idx} references {len(face)} vertices, expected 3",
                details={"face": face_idx},
            )
        v0, v1, v2 = face[0], face[1], face[2]
        for index in (v0, v1, v2):
            if index < 0 or index >= num_vertices:
                raise InvalidMeshError(
                    f"Face {face_idx} references vertex {index}, mesh has {num_vertices}",
                    details={"face": face_idx, "index": index},
                )

        edges.add(canonical_edge(v0, v1))
        edges.add(canonical_edge(v1, v2))
        edges.add(canonical_edge(v2, v0))

    return edges


def segments_for_length(distance, density):
    """Number of segments to split an edge into; never fewer than three."""
    scaled = distance * density
    if not math.isfinite(scaled):
        return MIN_SEGMENTS
    return max(MIN_SEGMENTS, int(math.floor(scaled)))


def interpolate_edge(start, end, density):
    """
    Evenly spaced points from start to end, both endpoints included.

    Returns an (num_segments + 1, 3) array ordered start to end.
    """
    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)
    num_segments = segments_for_length(float(np.linalg.norm(end - start)), density)

    with np.errstate(divide="ignore", invalid="ignore"):
        factors = np.arange(num_segments + 1, dtype=float) / num_segments
    factors[~np.isfinite(factors)] = 0.0

    points = start + factors[:, None] * (end - start)
    # land exactly on the endpoint rather than start + 1.0 * (end - start)
    points[-1] = end
    return points


@trace(label="interpolate_edges")
def interpolate_edges(mesh, density):
    """
    Sample every unique edge of a mesh into a single point cloud.

    Args:
        mesh: Mesh with 0-based triangular faces
        density: points per model unit along each edge

    Returns:
        (N, 3) float array. Points of one edge are contiguous and ordered
        start to end; the order of edges relative to each other is not
        defined.
    """
    tracer = get_tracer()

    vertices = mesh.vertex_array
    edges = unique_edges(mesh.faces, len(vertices))

    tracer.event(f"Found {len(edges)} unique edges in {len(mesh.faces)} faces")

    if not edges:
        return np.empty((0, 3), dtype=float)

    segments = [interpolate_edge(vertices[a], vertices[b], density) for a, b in edges]
    cloud = np.concatenate(segments, axis=0)

    tracer.event(f"Interpolated {len(cloud)} points", density=density)

    return cloud
