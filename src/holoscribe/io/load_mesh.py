"""
Mesh loading for holoscribe.

Reads OBJ/STL/PLY files with trimesh and converts them to the package's Mesh
model. Vertices are kept exactly as stored in the file so face indices keep
pointing at the same vertices.
"""

import os

import trimesh

from holoscribe.errors import InvalidMeshError
from holoscribe.models import Mesh
from holoscribe.tracer import get_tracer, trace

SUPPORTED_EXTENSIONS = [".obj", ".stl", ".ply", ".off"]


def mesh_from_trimesh(tm):
    """Convert a trimesh.Trimesh to a Mesh."""
    return Mesh(
        vertices=tm.vertices.astype(float).tolist(),
        faces=tm.faces.astype(int).tolist(),
    )


@trace(label="load_mesh")
def load_mesh(path):
    """
    Load a triangle mesh from disk.

    Scenes holding several objects are reduced to their first geometry.

    Raises FileNotFoundError if path does not exist.
    Raises InvalidMeshError if the file holds no triangle mesh.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Mesh not found: {path}")

    loaded = trimesh.load(path, process=False)

    if isinstance(loaded, trimesh.Scene):
        meshes = [g for g in loaded.geometry.values() if isinstance(g, trimesh.Trimesh)]
        if not meshes:
            raise InvalidMeshError(f"Scene has no mesh geometry: {path}")
        if len(meshes) > 1:
            tracer.event(f"Scene has {len(meshes)} meshes, using the first", level="WARN")
        loaded = meshes[0]

    if not isinstance(loaded, trimesh.Trimesh):
        raise InvalidMeshError(f"Unsupported mesh type from {path}: {type(loaded).__name__}")

    mesh = mesh_from_trimesh(loaded)
    tracer.event(f"Loaded mesh: {len(mesh.vertices)} vertices, {len(mesh.faces)} faces")

    return mesh


def validate_mesh_inputs(paths):
    """
    Check that every path exists and has a supported mesh extension.

    Returns a list of error messages (empty if all valid).
    """
    errors = []

    for path in paths:
        if not os.path.exists(path):
            errors.append(f"File not found: {path}")
            continue

        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            errors.append(f"Unsupported mesh format: {path}")

    return errors
