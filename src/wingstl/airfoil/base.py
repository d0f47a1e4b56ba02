"""Common surface-query capability shared by every airfoil section."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple, Tuple


class Dialect(str, Enum):
    """How a section's geometry is described."""

    NACA4 = "naca4"
    SELIG = "selig"
    LEDNICER = "lednicer"


class AirfoilPoint(NamedTuple):
    """A normalised (x, y) chord-fraction pair."""

    x: float
    y: float


class AirfoilSection(ABC):
    """A 2D airfoil cross-section that can be sampled at any chord fraction.

    Concrete sections are immutable. ``surface_point`` is the only query the
    mesh generator makes, once per chordwise row and surface.
    """

    dialect: Dialect

    @property
    @abstractmethod
    def has_closed_trailing_edge(self) -> bool:
        """True when upper and lower surfaces meet at the trailing edge."""

    @abstractmethod
    def surface_point(self, xc: float, upper: bool) -> Tuple[float, float]:
        """Return the normalised (x, z) surface point at chord fraction ``xc``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for reports."""
