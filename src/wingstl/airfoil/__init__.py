"""Airfoil cross-section models."""

from .base import AirfoilPoint, AirfoilSection, Dialect
from .dat import parse_dat, read_dat
from .naca import NACA4Section, camber, gradient, surface_x, surface_z, thickness
from .sampled import LednicerSection, SeligSection, validate_lednicer_order, validate_selig_order

__all__ = [
    "AirfoilPoint",
    "AirfoilSection",
    "Dialect",
    "LednicerSection",
    "NACA4Section",
    "SeligSection",
    "camber",
    "gradient",
    "parse_dat",
    "read_dat",
    "surface_x",
    "surface_z",
    "thickness",
    "validate_lednicer_order",
    "validate_selig_order",
]
