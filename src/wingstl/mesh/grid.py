"""Two-dimensional vertex accessor for the wing grid.

Vertices are stored in one flat buffer. The upper block comes first with rows
``0 .. rows-1``. The lower block follows with rows ``1 .. rows-1-closed_te``.
Within a block the index is ``row * stations + station``. The leading-edge row,
and the trailing-edge row when closed, exist only in the upper block; lower
lookups for those rows return the upper vertex.
"""

from __future__ import annotations

import numpy as np

from ..exceptions import ResourceError


class WingGrid:
    """Owns the vertex buffer and maps (row, station) pairs to buffer indices."""

    def __init__(self, rows: int, stations: int, closed_trailing_edge: bool):
        self.rows = rows
        self.stations = stations
        self.closed_trailing_edge = closed_trailing_edge
        self._closed = int(closed_trailing_edge)

        self.num_lower_rows = rows - 1 - self._closed
        self.num_vertices = stations * (2 * rows - self._closed - 1)

        try:
            self.vertices = np.zeros((self.num_vertices, 3), dtype=np.float64)
        except MemoryError as e:
            raise ResourceError(
                "Unable to allocate memory for surface vertices",
                details={"num_vertices": self.num_vertices},
            ) from e

    def _check(self, i: int, j: int) -> None:
        if not (0 <= i < self.rows and 0 <= j < self.stations):
            raise IndexError(f"grid position ({i}, {j}) outside {self.rows} x {self.stations}")

    def is_shared_row(self, i: int) -> bool:
        """True for rows where the upper and lower surfaces share vertices."""
        return i == 0 or (self.closed_trailing_edge and i == self.rows - 1)

    def upper(self, i: int, j: int) -> int:
        self._check(i, j)
        return i * self.stations + j

    def lower(self, i: int, j: int) -> int:
        self._check(i, j)
        if self.is_shared_row(i):
            return i * self.stations + j
        return self.rows * self.stations + (i - 1) * self.stations + j

    def index(self, i: int, j: int, upper: bool) -> int:
        return self.upper(i, j) if upper else self.lower(i, j)

    def lower_rows(self) -> range:
        return range(1, self.rows - self._closed)

    def set(self, i: int, j: int, upper: bool, point) -> None:
        self.vertices[self.index(i, j, upper)] = point
