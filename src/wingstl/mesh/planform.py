"""Wing planform parameters.

A ``WingPlanform`` is only built through ``build_planform``, which turns every
field-level problem into an ``InputFormatError``. Once built it is frozen and
every downstream consumer can trust its ranges.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import MAX_CHORD_POINTS, MAX_SPANWISE_STATIONS, MIN_CHORD_POINTS, MIN_SPANWISE_STATIONS
from ..exceptions import InputFormatError

MIN_SWEEP = 1.0
MAX_SWEEP = 179.0

FEET_PER_METER = 3.28084
INCHES_PER_METER = 39.3701

# Command-line flag for each planform field, used in error messages
FIELD_FLAGS = {
    "semi_span": "-b",
    "root_chord": "-c",
    "sweep_leading": "-l",
    "sweep_trailing": "-t",
    "num_chordwise_points": "-p",
    "num_spanwise_stations": "-n",
    "units": "-u",
}


class Units(str, Enum):
    """Linear units accepted for planform dimensions."""

    METERS = "m"
    CENTIMETERS = "cm"
    MILLIMETERS = "mm"
    FEET = "ft"
    INCHES = "in"

    def to_meters(self, value: float) -> float:
        if self is Units.FEET:
            return value / FEET_PER_METER
        if self is Units.INCHES:
            return value / INCHES_PER_METER
        if self is Units.CENTIMETERS:
            return value / 100.0
        if self is Units.MILLIMETERS:
            return value / 1000.0
        return value


class WingPlanform(BaseModel):
    """Immutable description of a swept, tapered half wing."""

    model_config = ConfigDict(frozen=True)

    semi_span: float = Field(gt=0.0)
    root_chord: float = Field(gt=0.0)
    sweep_leading: float = Field(default=90.0, gt=MIN_SWEEP, lt=MAX_SWEEP)
    sweep_trailing: float = Field(default=90.0, gt=MIN_SWEEP, lt=MAX_SWEEP)
    num_chordwise_points: int = Field(default=100, ge=MIN_CHORD_POINTS, le=MAX_CHORD_POINTS)
    num_spanwise_stations: int = Field(default=2, ge=MIN_SPANWISE_STATIONS, le=MAX_SPANWISE_STATIONS)
    cosine_spacing: bool = True
    units: Units = Units.METERS


def build_planform(**values: Any) -> WingPlanform:
    """Validate raw values into a planform."""
    try:
        return WingPlanform(**values)
    except ValidationError as e:
        err = e.errors()[0]
        name = ".".join(str(p) for p in err["loc"])
        details = {"parameter": name, "value": err.get("input"), "expected": err["msg"]}
        if name in FIELD_FLAGS:
            details["flag"] = FIELD_FLAGS[name]
        raise InputFormatError(f"Invalid value for {name.replace('_', ' ')}", details=details) from e
