"""Wing planform, mesh generation, diagnostics and STL output."""

from .diagnostics import (
    MeshReport,
    WingProperties,
    aspect_ratio,
    surface_area,
    tip_overlap,
    validate_planform,
)
from .generator import (
    WingMesh,
    chordwise_fractions,
    expected_triangle_count,
    expected_vertex_count,
    generate_mesh,
    generate_triangles,
    generate_vertices,
)
from .grid import WingGrid
from .planform import Units, WingPlanform, build_planform
from .stl import render_stl, write_stl

__all__ = [
    "MeshReport",
    "Units",
    "WingGrid",
    "WingMesh",
    "WingPlanform",
    "WingProperties",
    "aspect_ratio",
    "build_planform",
    "chordwise_fractions",
    "expected_triangle_count",
    "expected_vertex_count",
    "generate_mesh",
    "generate_triangles",
    "generate_vertices",
    "render_stl",
    "surface_area",
    "tip_overlap",
    "validate_planform",
    "write_stl",
]
