"""Parser for digitized airfoil ``.dat`` files.

File layout::

    NACA 2412 (any free-text label)      <- required header
    61.  61.                             <- optional point quantity line
                                         <- optional break (Lednicer only)
    1.0000  0.0013                       <- points
    ...

Two floats that are both greater than one, seen before the first point, are a
point quantity declaration ``(n_upper, n_lower)``. A single break immediately
before the first point marks the Lednicer dialect; anything else is Selig.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..exceptions import GeometryValidationError, InputFormatError, ResourceError, validate_range
from ..logging import get_logger
from .base import AirfoilPoint, Dialect
from .sampled import LednicerSection, SeligSection, find_lednicer_split

MIN_AIRFOIL_POINTS = 3
MAX_AIRFOIL_POINTS = 1000

logger = get_logger("dat")


@dataclass(frozen=True)
class DatContents:
    """Raw contents of a .dat file before geometry is built."""

    label: str
    points: Tuple[AirfoilPoint, ...]
    dialect: Dialect
    quantities: Optional[Tuple[int, int]] = None


def _format_error(message: str, source: str, line_no: Optional[int] = None, **details) -> InputFormatError:
    info = {"file": source}
    if line_no is not None:
        info["line"] = line_no
    info.update(details)
    return InputFormatError(message, details=info)


def _parse_pair(line: str) -> Optional[Tuple[float, float]]:
    fields = line.replace(",", " ").split()
    if len(fields) != 2:
        return None
    try:
        return float(fields[0]), float(fields[1])
    except ValueError:
        return None


def scan_dat(text: str, source: str = "<string>") -> DatContents:
    """Apply the .dat grammar and return header, raw points and dialect."""
    lines = text.splitlines()

    if not lines or not lines[0].strip():
        raise _format_error("Airfoil file is missing its header line", source, 1)

    label = lines[0].strip()
    body = lines[1:]

    # Blank lines after the last point are not breaks
    while body and not body[-1].strip():
        body.pop()

    points: List[AirfoilPoint] = []
    quantities: Optional[Tuple[int, int]] = None
    num_breaks = 0
    pending_break = False
    is_lednicer = False

    for offset, raw in enumerate(body):
        line_no = offset + 2
        line = raw.strip()

        if not line:
            if not pending_break:
                num_breaks += 1
                if num_breaks > 1:
                    raise _format_error("Airfoil file has more than one break", source, line_no)
            pending_break = True
            continue

        pair = _parse_pair(line)
        if pair is None:
            raise _format_error("Airfoil file line is not a pair of numbers", source, line_no, text=line)

        x, y = pair

        if not points and x > 1.0 and y > 1.0:
            if quantities is not None:
                raise _format_error("Airfoil file has more than one point quantity line", source, line_no)
            if pending_break:
                raise _format_error("Break must come immediately before the first point", source, line_no)
            quantities = (int(round(x)), int(round(y)))
            continue

        if pending_break:
            if points:
                raise _format_error("Break must come immediately before the first point", source, line_no)
            is_lednicer = True
            pending_break = False

        points.append(AirfoilPoint(x, y))
        if len(points) > MAX_AIRFOIL_POINTS:
            raise _format_error(
                "Airfoil file has too many points",
                source,
                line_no,
                max=MAX_AIRFOIL_POINTS,
            )

    try:
        validate_range(len(points), MIN_AIRFOIL_POINTS, MAX_AIRFOIL_POINTS, "number of airfoil points")
    except InputFormatError as e:
        e.details["file"] = source
        raise

    dialect = Dialect.LEDNICER if is_lednicer else Dialect.SELIG

    return DatContents(label=label, points=tuple(points), dialect=dialect, quantities=quantities)


def normalize_points(points: Tuple[AirfoilPoint, ...], source: str = "<string>") -> Tuple[AirfoilPoint, ...]:
    """Map x onto [0, 1] and scale y by the same factor."""
    xs = [p.x for p in points]
    x_min, x_max = min(xs), max(xs)
    chord = x_max - x_min

    if chord <= 0.0:
        raise GeometryValidationError(
            "Airfoil points have no chordwise extent",
            details={"file": source, "x": x_min},
        )

    return tuple(AirfoilPoint((p.x - x_min) / chord, p.y / chord) for p in points)


def check_quantities(contents: DatContents, split_index: Optional[int], source: str) -> None:
    """Reject a point quantity line that disagrees with the points that follow it."""
    if contents.quantities is None:
        return

    n_upper, n_lower = contents.quantities
    n = len(contents.points)

    if contents.dialect is Dialect.LEDNICER:
        consistent = n_upper + n_lower == n and n_upper == split_index
    else:
        consistent = n_upper + n_lower in (n, n + 1)

    if not consistent:
        raise _format_error(
            "Point quantity line conflicts with the points in the file",
            source,
            declared=f"{n_upper}+{n_lower}",
            found=n,
        )


def parse_dat(text: str, source: str = "<string>") -> Union[SeligSection, LednicerSection]:
    """Parse .dat text into a validated, normalised sampled section."""
    contents = scan_dat(text, source)
    points = normalize_points(contents.points, source)

    if contents.dialect is Dialect.LEDNICER:
        split = find_lednicer_split(points)
        check_quantities(contents, split, source)
        section = LednicerSection(points, split_index=split, label=contents.label)
    else:
        check_quantities(contents, None, source)
        section = SeligSection(points, label=contents.label)

    logger.debug(
        "Read {} points from {} ({}, {} trailing edge)",
        len(points),
        source,
        section.dialect.value,
        "closed" if section.has_closed_trailing_edge else "open",
    )
    return section


def read_dat(path: Union[str, Path]) -> Union[SeligSection, LednicerSection]:
    """Read and parse a .dat file from disk."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise ResourceError(
            "Unable to open airfoil file for reading",
            details={"file": str(path), "reason": e.strerror or type(e).__name__},
        ) from e

    if not text:
        raise InputFormatError("Airfoil file is empty", details={"file": str(path)})

    return parse_dat(text, source=str(path))
