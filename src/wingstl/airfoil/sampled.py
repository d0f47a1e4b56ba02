"""Digitized airfoil sections in Selig and Lednicer point order.

Selig files list one continuous path around the section, from the trailing
edge along one surface to the leading edge and back along the other. Lednicer
files list two runs that each start at the leading edge and end at the
trailing edge.

Point order is validated, never repaired. A sampled section answers surface
queries by linear interpolation between the bracketing points of the run that
belongs to the requested surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from ..exceptions import GeometryValidationError
from .base import AirfoilPoint, AirfoilSection, Dialect

TRAILING_EDGE_TOLERANCE = 1e-6

Run = Tuple[AirfoilPoint, ...]


def as_points(points: Iterable[Sequence[float]]) -> Tuple[AirfoilPoint, ...]:
    """Coerce (x, y) pairs into a tuple of AirfoilPoint."""
    return tuple(AirfoilPoint(float(p[0]), float(p[1])) for p in points)


def count_direction_switches(xs: Sequence[float], start_decreasing: bool) -> int:
    """Count changes of direction along ``xs``.

    The scan starts from an assumed direction, so a sequence that immediately
    runs the other way counts one switch. Steps with no change in x are skipped.
    """
    decreasing = start_decreasing
    switches = 0

    for a, b in zip(xs, xs[1:]):
        dx = b - a
        if dx == 0.0:
            continue

        step_decreasing = dx < 0.0
        if step_decreasing != decreasing:
            switches += 1
            decreasing = step_decreasing

    return switches


def validate_selig_order(points: Sequence[Sequence[float]]) -> None:
    """Require x to fall to a single minimum and then rise."""
    xs = [p[0] for p in points]
    switches = count_direction_switches(xs, start_decreasing=True)

    if switches != 1:
        raise GeometryValidationError(
            "Selig airfoil points are misordered; x must decrease to the leading edge then increase",
            details={"direction_switches": switches},
        )

    # A path that only rises also counts one switch; the minimum must be interior
    le = xs.index(min(xs))
    if le == 0 or le == len(xs) - 1:
        raise GeometryValidationError(
            "Selig airfoil points are misordered; x must decrease to the leading edge then increase",
            details={"leading_edge_index": le, "num_points": len(xs)},
        )


def find_lednicer_split(points: Sequence[Sequence[float]]) -> Optional[int]:
    """Index where x drops back to the leading edge, or None for a single run."""
    for i in range(1, len(points)):
        if points[i][0] < points[i - 1][0]:
            return i
    return None


def validate_lednicer_order(points: Sequence[Sequence[float]], split_index: int) -> None:
    """Require two x-increasing runs; the second may change direction once."""
    first = [p[0] for p in points[:split_index]]
    second = [p[0] for p in points[split_index:]]

    if len(first) < 2 or len(second) < 2:
        raise GeometryValidationError(
            "Lednicer airfoil needs at least two points on each surface",
            details={"split_index": split_index, "num_points": len(points)},
        )

    first_switches = count_direction_switches(first, start_decreasing=False)
    if first_switches != 0:
        raise GeometryValidationError(
            "Lednicer airfoil points are misordered; first surface x must increase",
            details={"direction_switches": first_switches},
        )

    second_switches = count_direction_switches(second, start_decreasing=False)
    if second_switches > 1:
        raise GeometryValidationError(
            "Lednicer airfoil points are misordered; second surface x changes direction more than once",
            details={"direction_switches": second_switches},
        )


def trailing_edge_is_closed(a: AirfoilPoint, b: AirfoilPoint, tolerance: float = TRAILING_EDGE_TOLERANCE) -> bool:
    """True when the two trailing-edge end points coincide within ``tolerance`` chords."""
    return abs(a.x - b.x) <= tolerance and abs(a.y - b.y) <= tolerance


def _interp(p0: AirfoilPoint, p1: AirfoilPoint, x: float) -> float:
    return p0.y + (p1.y - p0.y) * (x - p0.x) / (p1.x - p0.x)


def lookup(run: Run, opposite: Run, xc: float) -> float:
    """Surface height of ``run`` at ``xc``.

    Both runs are ordered from leading edge to trailing edge. A run that stops
    short of the chord ends is completed with the opposite run's end point.
    """
    for pt in run:
        if pt.x == xc:
            return pt.y

    for a, b in zip(run, run[1:]):
        if a.x != b.x and min(a.x, b.x) <= xc <= max(a.x, b.x):
            return _interp(a, b, xc)

    first, last = run[0], run[-1]

    if xc > last.x:
        te = opposite[-1]
        if te.x > last.x and xc <= te.x:
            return _interp(last, te, xc)
    elif xc < first.x:
        le = opposite[0]
        if le.x < first.x and xc >= le.x:
            return _interp(le, first, xc)

    nearest = first if abs(first.x - xc) <= abs(last.x - xc) else last
    return nearest.y


def _mean_y(run: Run) -> float:
    return sum(p.y for p in run) / len(run)


class _SampledSection(AirfoilSection):
    """Shared behaviour of the two digitized dialects."""

    points: Run
    label: str
    upper_run: Run
    lower_run: Run
    closed: bool

    def _assign_runs(self, run_a: Run, run_b: Run) -> None:
        if _mean_y(run_a) >= _mean_y(run_b):
            upper, lower = run_a, run_b
        else:
            upper, lower = run_b, run_a

        object.__setattr__(self, "upper_run", upper)
        object.__setattr__(self, "lower_run", lower)

    @property
    def has_closed_trailing_edge(self) -> bool:
        return self.closed

    @property
    def name(self) -> str:
        return self.label or f"{self.dialect.value} airfoil"

    @property
    def num_points(self) -> int:
        return len(self.points)

    def surface_point(self, xc: float, upper: bool) -> Tuple[float, float]:
        if upper:
            z = lookup(self.upper_run, self.lower_run, xc)
        else:
            z = lookup(self.lower_run, self.upper_run, xc)
        return xc, z


@dataclass(frozen=True)
class SeligSection(_SampledSection):
    """One continuous path: trailing edge, one surface, leading edge, other surface, trailing edge."""

    points: Run
    label: str = ""
    leading_edge_index: int = field(init=False)
    upper_run: Run = field(init=False, repr=False)
    lower_run: Run = field(init=False, repr=False)
    closed: bool = field(init=False)

    dialect = Dialect.SELIG

    def __post_init__(self):
        points = as_points(self.points)
        object.__setattr__(self, "points", points)

        validate_selig_order(points)

        xs = [p.x for p in points]
        le = xs.index(min(xs))
        object.__setattr__(self, "leading_edge_index", le)

        # Both runs go from the leading edge to the trailing edge
        self._assign_runs(points[le::-1], points[le:])
        object.__setattr__(self, "closed", trailing_edge_is_closed(points[0], points[-1]))


@dataclass(frozen=True)
class LednicerSection(_SampledSection):
    """Two runs sharing the leading edge, each listed from leading to trailing edge."""

    points: Run
    split_index: Optional[int] = None
    label: str = ""
    upper_run: Run = field(init=False, repr=False)
    lower_run: Run = field(init=False, repr=False)
    closed: bool = field(init=False)

    dialect = Dialect.LEDNICER

    def __post_init__(self):
        points = as_points(self.points)
        object.__setattr__(self, "points", points)

        split = self.split_index
        if split is None:
            split = find_lednicer_split(points)
        if split is None:
            raise GeometryValidationError(
                "Lednicer airfoil has no second surface; x never returns to the leading edge",
                details={"num_points": len(points)},
            )
        object.__setattr__(self, "split_index", split)

        validate_lednicer_order(points, split)

        self._assign_runs(points[:split], points[split:])
        object.__setattr__(self, "closed", trailing_edge_is_closed(points[split - 1], points[-1]))
