"""Wing mesh generation.

The wing is a grid of ``rows`` chordwise positions by ``stations`` spanwise
positions on each surface. Triangles are emitted in a fixed order: upper and
lower surface panels, then port and starboard walls, then the aft cap when the
trailing edge is open. Every triangle is wound so its normal points out of the
solid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np
import trimesh

from ..airfoil.base import AirfoilSection
from ..exceptions import InternalInvariantError, ResourceError
from ..logging import get_logger
from .grid import WingGrid
from .planform import WingPlanform

logger = get_logger("mesh")

Triangle = Tuple[int, int, int]


@dataclass(frozen=True)
class WingMesh:
    """Vertices in meters and outward-wound triangle indices."""

    vertices: np.ndarray
    triangles: np.ndarray
    rows: int
    stations: int
    closed_trailing_edge: bool

    @property
    def num_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def num_triangles(self) -> int:
        return int(self.triangles.shape[0])

    def to_trimesh(self) -> trimesh.Trimesh:
        """View the mesh as a trimesh object without merging or reordering anything."""
        return trimesh.Trimesh(vertices=self.vertices.copy(), faces=self.triangles.copy(), process=False)


def expected_vertex_count(rows: int, stations: int, closed_trailing_edge: bool) -> int:
    return stations * (2 * rows - int(closed_trailing_edge) - 1)


def expected_triangle_count(rows: int, stations: int, closed_trailing_edge: bool) -> int:
    closed = int(closed_trailing_edge)
    num_surface = (rows - 1) * (stations - 1) * 2
    num_wall = 2 * rows - closed - 3
    num_aft = (1 - closed) * (stations - 1) * 2
    return 2 * (num_surface + num_wall) + num_aft


def chordwise_fractions(rows: int, cosine_spacing: bool) -> List[float]:
    """Normalised chord positions of each row, clustered at both edges with cosine spacing."""
    fractions = []
    for i in range(rows):
        xn = i / (rows - 1)
        if cosine_spacing:
            xn = (1.0 - math.cos(math.pi * xn)) / 2.0
        fractions.append(xn)
    return fractions


def generate_vertices(section: AirfoilSection, planform: WingPlanform) -> WingGrid:
    """Fill a grid with the wing's surface vertices."""
    rows = planform.num_chordwise_points
    stations = planform.num_spanwise_stations
    units = planform.units

    grid = WingGrid(rows, stations, section.has_closed_trailing_edge)

    tan_leading = math.tan(math.radians(90.0 - planform.sweep_leading))
    tan_trailing = math.tan(math.radians(90.0 - planform.sweep_trailing))
    tan_difference = tan_trailing - tan_leading

    fractions = chordwise_fractions(rows, planform.cosine_spacing)

    for upper in (True, False):
        row_range = range(rows) if upper else grid.lower_rows()

        for i in row_range:
            # The section is the same at every station, only scaled and shifted
            xn_surface, zn_surface = section.surface_point(fractions[i], upper)

            for j in range(stations):
                y = planform.semi_span * j / (stations - 1)
                dx_leading = y * tan_leading
                local_chord = planform.root_chord + y * tan_difference

                grid.set(i, j, upper, (
                    units.to_meters(xn_surface * local_chord + dx_leading),
                    units.to_meters(y),
                    units.to_meters(zn_surface * local_chord),
                ))

    return grid


def surface_triangles(grid: WingGrid) -> Iterator[Triangle]:
    """Two triangles per quad on the upper surface, then on the lower surface."""
    for upper in (True, False):
        for i in range(grid.rows - 1):
            for j in range(grid.stations - 1):
                if upper:
                    c0 = grid.upper(i, j)
                    c1 = grid.upper(i, j + 1)
                    c2 = grid.upper(i + 1, j + 1)
                    c3 = grid.upper(i + 1, j)
                else:
                    c0 = grid.lower(i, j + 1)
                    c1 = grid.lower(i, j)
                    c2 = grid.lower(i + 1, j)
                    c3 = grid.lower(i + 1, j + 1)

                yield c3, c2, c1
                yield c3, c1, c0


def wall_triangles(grid: WingGrid) -> Iterator[Triangle]:
    """Close the root (port) and tip (starboard) sections."""
    last_row = grid.rows - 2

    for port in (True, False):
        j = 0 if port else grid.stations - 1

        for i in range(grid.rows - 1):
            if i == 0:
                # Upper and lower meet at the leading edge
                if port:
                    yield grid.upper(i, j), grid.lower(i + 1, j), grid.upper(i + 1, j)
                else:
                    yield grid.upper(i, j), grid.upper(i + 1, j), grid.lower(i + 1, j)
            elif i == last_row and grid.closed_trailing_edge:
                if port:
                    yield grid.lower(i + 1, j), grid.upper(i, j), grid.lower(i, j)
                else:
                    yield grid.lower(i + 1, j), grid.lower(i, j), grid.upper(i, j)
            else:
                if port:
                    c0 = grid.lower(i, j)
                    c1 = grid.lower(i + 1, j)
                    c2 = grid.upper(i + 1, j)
                    c3 = grid.upper(i, j)
                else:
                    c0 = grid.lower(i + 1, j)
                    c1 = grid.lower(i, j)
                    c2 = grid.upper(i, j)
                    c3 = grid.upper(i + 1, j)

                yield c0, c1, c2
                yield c0, c2, c3


def aft_triangles(grid: WingGrid) -> Iterator[Triangle]:
    """Bridge upper and lower trailing-edge rows of an open trailing edge."""
    i = grid.rows - 1

    for j in range(grid.stations - 1):
        c0 = grid.lower(i, j)
        c1 = grid.lower(i, j + 1)
        c2 = grid.upper(i, j + 1)
        c3 = grid.upper(i, j)

        yield c0, c1, c2
        yield c0, c2, c3


def generate_triangles(grid: WingGrid) -> np.ndarray:
    """Stitch triangle indices for every region of the grid."""
    num_triangles = expected_triangle_count(grid.rows, grid.stations, grid.closed_trailing_edge)

    try:
        triangles = np.empty((num_triangles, 3), dtype=np.int64)
    except MemoryError as e:
        raise ResourceError(
            "Unable to allocate memory for triangle indices",
            details={"num_triangles": num_triangles},
        ) from e

    regions = [surface_triangles(grid), wall_triangles(grid)]
    if not grid.closed_trailing_edge:
        regions.append(aft_triangles(grid))

    k = 0
    for region in regions:
        for tri in region:
            if k >= num_triangles:
                raise InternalInvariantError(
                    "Triangle count exceeds closed-form count",
                    details={"expected": num_triangles},
                )
            triangles[k] = tri
            k += 1

    if k != num_triangles:
        raise InternalInvariantError(
            "Triangle count does not match closed-form count",
            details={"expected": num_triangles, "created": k},
        )

    return triangles


def generate_mesh(section: AirfoilSection, planform: WingPlanform) -> WingMesh:
    """Build the full wing mesh for a validated section and planform."""
    grid = generate_vertices(section, planform)
    triangles = generate_triangles(grid)

    if triangles.size and int(triangles.max()) >= grid.num_vertices:
        raise InternalInvariantError(
            "Triangle index out of range",
            details={"max_index": int(triangles.max()), "num_vertices": grid.num_vertices},
        )

    vertices = grid.vertices
    vertices.setflags(write=False)
    triangles.setflags(write=False)

    logger.debug(
        "Stitched {} triangles over {} x {} grid",
        len(triangles),
        grid.rows,
        grid.stations,
    )

    return WingMesh(
        vertices=vertices,
        triangles=triangles,
        rows=grid.rows,
        stations=grid.stations,
        closed_trailing_edge=grid.closed_trailing_edge,
    )
