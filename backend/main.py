"""
holoscribe web front-end (FastAPI)

Serves a small form and wraps the scribe and visualize pipelines.

Endpoints:
    GET  /               HTML form
    POST /api/scribe     mesh upload (or built-in tetrahedron) -> scribed SVG
    POST /api/hologram   SVG upload -> static or animated hologram SVG

Every request builds its own configuration and drawing; nothing is shared
between requests.
"""

import tempfile
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from holoscribe.config import HoloConfig
from holoscribe.errors import HoloError
from holoscribe.io.load_mesh import SUPPORTED_EXTENSIONS, load_mesh
from holoscribe.models import Mesh, Point2D
from holoscribe.pipeline import scribe_mesh
from holoscribe.viz.visualizer import Visualizer

SVG_MEDIA_TYPE = "image/svg+xml"

# Regular tetrahedron, used when no mesh is uploaded
TETRAHEDRON = Mesh(
    vertices=[[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]],
    faces=[[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]],
)

INDEX_HTML = """
<html><head><title>holoscribe</title></head><body>
<h2>Scribe a mesh</h2>
<form action="/api/scribe" method="post" enctype="multipart/form-data">
  Mesh (optional): <input type="file" name="mesh"><br>
  Width (mm): <input type="text" name="width_mm" value="100"><br>
  Height (mm): <input type="text" name="height_mm" value="100"><br>
  Stroke density: <input type="text" name="stroke_density" value="10"><br>
  <button type="submit">Scribe</button>
</form>
<h2>Preview a hologram</h2>
<form action="/api/hologram" method="post" enctype="multipart/form-data">
  SVG: <input type="file" name="svg"><br>
  Animate: <input type="checkbox" name="animate" value="true"><br>
  Duration (s): <input type="text" name="duration_secs" value="2.0"><br>
  <button type="submit">Preview</button>
</form>
</body></html>
"""

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(title="holoscribe", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _load_uploaded_mesh(upload: UploadFile) -> Mesh:
    """Write an uploaded mesh to a temp file so trimesh can pick its loader."""
    suffix = Path(upload.filename or "upload.obj").suffix.lower() or ".obj"
    if suffix not in SUPPORTED_EXTENSIONS:
        raise HTTPException(status_code=400, detail=f"Unsupported mesh format: {suffix}")

    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=suffix)
    try:
        tmp.write(await upload.read())
        tmp.close()
        return load_mesh(tmp.name)
    finally:
        Path(tmp.name).unlink(missing_ok=True)


# ---------------------------------------------------------------------------
# API Endpoints
# ---------------------------------------------------------------------------

@app.get("/", response_class=HTMLResponse)
async def index():
    return INDEX_HTML


@app.post("/api/scribe")
async def scribe(
    width_mm: float = Form(100.0),
    height_mm: float = Form(100.0),
    stroke_density: int = Form(1),
    strategy: str = Form("circle"),
    mesh: Optional[UploadFile] = File(None),
):
    """Scribe the uploaded mesh, or the built-in tetrahedron, into an SVG."""
    if width_mm <= 0 or height_mm <= 0:
        raise HTTPException(status_code=400, detail="Canvas size must be positive")
    if stroke_density <= 0:
        raise HTTPException(status_code=400, detail="Stroke density must be positive")

    config = HoloConfig()
    config.scriber.canvas_width = width_mm
    config.scriber.canvas_height = height_mm
    config.scriber.strategy = strategy
    config.interpolation.density = stroke_density

    try:
        model = await _load_uploaded_mesh(mesh) if mesh is not None and mesh.filename else TETRAHEDRON
        dwg, _ = scribe_mesh(model, config)
    except (HoloError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return Response(content=dwg.tostring(), media_type=SVG_MEDIA_TYPE)


@app.post("/api/hologram")
async def hologram(
    svg: UploadFile = File(...),
    animate: bool = Form(False),
    duration_secs: float = Form(2.0),
    light_x: Optional[float] = Form(None),
    light_y: Optional[float] = Form(None),
):
    """Overlay reflection arcs on the circles of an uploaded SVG."""
    config = HoloConfig()
    contents = (await svg.read()).decode("utf-8", errors="replace")

    try:
        viz = Visualizer.from_svg_contents(contents, config)
        if animate:
            hc = config.hologram
            dwg = viz.build_animated_hologram(
                Point2D(x=hc.light_start[0], y=hc.light_start[1]),
                Point2D(x=hc.light_end[0], y=hc.light_end[1]),
                duration_secs,
            )
        else:
            light = None
            if light_x is not None and light_y is not None:
                light = Point2D(x=light_x, y=light_y)
            dwg = viz.build_static_hologram(light)
    except HoloError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return Response(content=dwg.tostring(), media_type=SVG_MEDIA_TYPE)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=5000,
        reload=True,
    )
