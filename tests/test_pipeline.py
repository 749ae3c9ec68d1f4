"""Integration tests for the scribe and visualize pipelines."""

import json
import os

import pytest


class TestMeshLoading:
    """Tests for reading mesh files."""

    def test_load_obj(self, obj_file):
        """Test that an OBJ triangle loads with its vertices and face."""
        from holoscribe.io.load_mesh import load_mesh

        mesh = load_mesh(obj_file)

        assert len(mesh.vertices) == 3
        assert len(mesh.faces) == 1
        assert sorted(map(tuple, mesh.vertices)) == [(0, 0, 0), (0, 1, 0), (1, 0, 0)]

    def test_missing_file(self, temp_dir):
        """Test that a missing mesh raises FileNotFoundError."""
        from holoscribe.io.load_mesh import load_mesh

        with pytest.raises(FileNotFoundError):
            load_mesh(os.path.join(temp_dir, "nope.obj"))

    def test_validate_inputs(self, obj_file, temp_dir):
        """Test that missing files and unknown formats are both reported."""
        from holoscribe.io.load_mesh import validate_mesh_inputs

        text_file = os.path.join(temp_dir, "notes.txt")
        with open(text_file, "w") as f:
            f.write("hello")

        errors = validate_mesh_inputs([obj_file, text_file, os.path.join(temp_dir, "gone.stl")])

        assert len(errors) == 2
        assert "Unsupported" in errors[0]
        assert "not found" in errors[1]


class TestScribePipeline:
    """Tests for the mesh to SVG pipeline."""

    def test_scribe_mesh(self, single_triangle, default_config):
        """Test the in-memory scribe of a triangle."""
        from holoscribe.pipeline import scribe_mesh

        dwg, points = scribe_mesh(single_triangle, default_config)

        assert points.shape == (12, 3)
        assert "<circle" in dwg.tostring()

    def test_writes_svg(self, obj_file, temp_dir):
        """Test that the pipeline writes a parseable SVG."""
        from holoscribe.pipeline import run_scribe_pipeline
        from holoscribe.viz.parse import parse_circles_with_extents

        out_path = os.path.join(temp_dir, "out", "triangle.svg")
        run_scribe_pipeline(obj_file, out_path)

        assert os.path.exists(out_path)
        with open(out_path, encoding="utf-8") as f:
            circles, extents = parse_circles_with_extents(f.read())
        assert len(circles) == 12
        assert extents.as_tuple() == pytest.approx((-1.0, -1.0, 3.0, 3.0))
        assert not os.path.exists(os.path.join(temp_dir, "out", "debug"))

    def test_debug_artifacts(self, obj_file, temp_dir):
        """Test that debug mode dumps the point cloud and a summary."""
        from holoscribe.pipeline import run_scribe_pipeline

        out_path = os.path.join(temp_dir, "triangle.svg")
        run_scribe_pipeline(obj_file, out_path, debug=True)

        with open(os.path.join(temp_dir, "debug", "points.csv"), encoding="utf-8") as f:
            lines = f.read().strip().split("\n")
        with open(os.path.join(temp_dir, "debug", "scribe_summary.json"), encoding="utf-8") as f:
            summary = json.load(f)

        assert lines[0] == "x,y,z"
        assert len(lines) == 13
        assert summary["num_points"] == 12
        assert summary["num_faces"] == 1
        assert summary["strategy"] == "circle"

    def test_diamond_from_config_file(self, obj_file, temp_dir):
        """Test that a YAML config switches the strategy."""
        from holoscribe.pipeline import run_scribe_pipeline

        config_path = os.path.join(temp_dir, "holo.yaml")
        with open(config_path, "w", encoding="utf-8") as f:
            f.write("scriber:\n  strategy: diamond\n  draw_bounds: true\n")

        out_path = os.path.join(temp_dir, "triangle.svg")
        dwg = run_scribe_pipeline(obj_file, out_path, config_path=config_path)

        svg = dwg.tostring()
        assert 'id="diamonds"' in svg
        assert 'id="bounds"' in svg

    def test_rejects_unsupported_input(self, temp_dir):
        """Test that validation failures stop the pipeline."""
        from holoscribe.pipeline import run_scribe_pipeline

        bad = os.path.join(temp_dir, "model.txt")
        with open(bad, "w") as f:
            f.write("v 0 0 0\n")

        with pytest.raises(ValueError, match="validation"):
            run_scribe_pipeline(bad, os.path.join(temp_dir, "out.svg"))


class TestVisualizePipeline:
    """Tests for the SVG to hologram pipeline."""

    def test_static(self, circles_svg_file, temp_dir):
        """Test that a static hologram is written next to the input."""
        from holoscribe.pipeline import run_visualize_pipeline

        out_path = os.path.join(temp_dir, "holo.svg")
        run_visualize_pipeline(circles_svg_file, out_path)

        with open(out_path, encoding="utf-8") as f:
            svg = f.read()
        assert svg.count('class="outputArc"') == 3
        assert "<animate" not in svg

    def test_animated_defaults(self, circles_svg_file, temp_dir):
        """Test that animation falls back to configured lights and duration."""
        from holoscribe.pipeline import run_visualize_pipeline

        out_path = os.path.join(temp_dir, "holo.svg")
        run_visualize_pipeline(circles_svg_file, out_path, animate=True)

        with open(out_path, encoding="utf-8") as f:
            svg = f.read()
        assert svg.count("<animate") == 3
        assert 'dur="2.0s"' in svg

    def test_missing_input(self, temp_dir):
        """Test that a missing drawing raises FileNotFoundError."""
        from holoscribe.pipeline import run_visualize_pipeline

        with pytest.raises(FileNotFoundError):
            run_visualize_pipeline(os.path.join(temp_dir, "none.svg"), os.path.join(temp_dir, "o.svg"))

    def test_scribe_then_visualize(self, temp_dir):
        """Test that a scribed drawing feeds straight into the visualizer."""
        from holoscribe.pipeline import run_scribe_pipeline, run_visualize_pipeline

        tilted = os.path.join(temp_dir, "tilted.obj")
        with open(tilted, "w", encoding="utf-8") as f:
            f.write("v 0 0 1\nv 1 0 1\nv 0 1 2\nf 1 2 3\n")
        scribed = os.path.join(temp_dir, "scribed.svg")
        run_scribe_pipeline(tilted, scribed)

        dwg = run_visualize_pipeline(scribed, os.path.join(temp_dir, "holo.svg"))

        assert dwg.tostring().count('class="inputCircle"') == 12

    def test_zero_radius_circles(self, obj_file, temp_dir):
        """Test that the flat triangle's zero-radius circles cannot be lit."""
        from holoscribe.errors import DegenerateGeometryError
        from holoscribe.pipeline import run_scribe_pipeline, run_visualize_pipeline

        scribed = os.path.join(temp_dir, "scribed.svg")
        run_scribe_pipeline(obj_file, scribed)

        with pytest.raises(DegenerateGeometryError):
            run_visualize_pipeline(scribed, os.path.join(temp_dir, "holo.svg"), animate=True)
