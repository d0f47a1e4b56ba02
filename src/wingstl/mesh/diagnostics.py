"""Planform and mesh diagnostics.

Planform checks run before any mesh is generated: a tip that overlaps itself
or an extreme aspect ratio is a GeometryValidationError. Mesh reports are
informational and use trimesh to check that the generated surface is closed.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..airfoil.base import AirfoilSection
from ..exceptions import GeometryValidationError
from .generator import WingMesh, expected_triangle_count, expected_vertex_count
from .planform import WingPlanform

MIN_ASPECT_RATIO = 1.0
MAX_ASPECT_RATIO = 100.0

ADJUST_FLAGS = "'-l', '-t', '-b' or '-c'"


def _edge_offset(semi_span: float, sweep: float) -> float:
    return semi_span * math.tan(math.radians(90.0 - sweep))


def surface_area(semi_span: float, root_chord: float, sweep_leading: float, sweep_trailing: float) -> float:
    """Planform area of the full (two-sided) wing."""
    dx_leading = _edge_offset(semi_span, sweep_leading)
    dx_trailing = _edge_offset(semi_span, sweep_trailing)

    return 2.0 * root_chord * semi_span + semi_span * (dx_trailing - dx_leading)


def aspect_ratio(semi_span: float, root_chord: float, sweep_leading: float, sweep_trailing: float) -> float:
    """Full-wing aspect ratio, or 0 when the planform has no area."""
    s = surface_area(semi_span, root_chord, sweep_leading, sweep_trailing)
    b = 2.0 * semi_span

    return b * b / s if s > sys.float_info.epsilon else 0.0


def tip_overlap(semi_span: float, root_chord: float, sweep_leading: float, sweep_trailing: float) -> bool:
    """True when the trailing edge reaches the tip at or ahead of the leading edge."""
    return root_chord + _edge_offset(semi_span, sweep_trailing) <= _edge_offset(semi_span, sweep_leading)


def _planform_args(planform: WingPlanform) -> Tuple[float, float, float, float]:
    return planform.semi_span, planform.root_chord, planform.sweep_leading, planform.sweep_trailing


def validate_planform(planform: WingPlanform) -> None:
    """Reject planforms that cannot be meshed."""
    args = _planform_args(planform)

    if tip_overlap(*args):
        raise GeometryValidationError(
            f"Wing tip overlap detected; try adjusting values for {ADJUST_FLAGS}",
            details={
                "semi_span": planform.semi_span,
                "root_chord": planform.root_chord,
                "sweep_leading": planform.sweep_leading,
                "sweep_trailing": planform.sweep_trailing,
            },
        )

    ar = aspect_ratio(*args)
    if ar < MIN_ASPECT_RATIO or ar > MAX_ASPECT_RATIO:
        raise GeometryValidationError(
            f"Extreme aspect ratio detected; try adjusting values for {ADJUST_FLAGS}",
            details={"aspect_ratio": round(ar, 3), "min": MIN_ASPECT_RATIO, "max": MAX_ASPECT_RATIO},
        )


@dataclass(frozen=True)
class WingProperties:
    """Summary of a run, shown with verbose output."""

    airfoil: str
    units: str
    semi_span: float
    root_chord: float
    aspect_ratio: float
    surface_area: float
    sweep_leading: float
    sweep_trailing: float
    closed_trailing_edge: bool
    num_spanwise_stations: int
    num_chordwise_points: int
    cosine_spacing: bool
    num_vertices: int
    num_triangles: int

    @classmethod
    def from_planform(cls, planform: WingPlanform, section: AirfoilSection) -> "WingProperties":
        args = _planform_args(planform)
        closed = section.has_closed_trailing_edge
        rows = planform.num_chordwise_points
        stations = planform.num_spanwise_stations

        return cls(
            airfoil=section.name,
            units=planform.units.value,
            semi_span=planform.semi_span,
            root_chord=planform.root_chord,
            aspect_ratio=aspect_ratio(*args),
            surface_area=surface_area(*args),
            sweep_leading=planform.sweep_leading,
            sweep_trailing=planform.sweep_trailing,
            closed_trailing_edge=closed,
            num_spanwise_stations=stations,
            num_chordwise_points=rows,
            cosine_spacing=planform.cosine_spacing,
            num_vertices=expected_vertex_count(rows, stations, closed),
            num_triangles=expected_triangle_count(rows, stations, closed),
        )

    def format_lines(self) -> List[str]:
        u = self.units
        return [
            "Wing properties:",
            f"  Semi span length:\t\t{self.semi_span:.2f} {u}",
            f"  Root chord length:\t\t{self.root_chord:.2f} {u}",
            f"  Airfoil profile:\t\t{self.airfoil}",
            f"  Full wing aspect ratio:\t{self.aspect_ratio:.2f}",
            f"  Full wing surface area:\t{self.surface_area:.2f} sq {u}",
            f"  Leading edge sweep angle:\t{self.sweep_leading:.2f} deg",
            f"  Trailing edge sweep angle:\t{self.sweep_trailing:.2f} deg",
            f"  Trailing edge configuration:\t{'closed' if self.closed_trailing_edge else 'open'}",
            f"  Spanwise points:\t\t{self.num_spanwise_stations}",
            f"  Chordwise points:\t\t{self.num_chordwise_points}",
            f"  Chordwise distribution:\t{'cosine' if self.cosine_spacing else 'linear'}",
            f"  Mesh vertices:\t\t{self.num_vertices}",
            f"  Mesh triangles:\t\t{self.num_triangles}",
        ]


@dataclass(frozen=True)
class MeshReport:
    """Topology and size checks of a generated mesh."""

    num_vertices: int
    num_triangles: int
    is_watertight: bool
    is_winding_consistent: bool
    volume: Optional[float]
    bounds: Tuple[Tuple[float, float, float], Tuple[float, float, float]]

    @classmethod
    def from_mesh(cls, mesh: WingMesh) -> "MeshReport":
        tm = mesh.to_trimesh()
        watertight = bool(tm.is_watertight)
        lo, hi = tm.bounds

        return cls(
            num_vertices=mesh.num_vertices,
            num_triangles=mesh.num_triangles,
            is_watertight=watertight,
            is_winding_consistent=bool(tm.is_winding_consistent),
            volume=float(tm.volume) if watertight else None,
            bounds=(tuple(float(v) for v in lo), tuple(float(v) for v in hi)),
        )
