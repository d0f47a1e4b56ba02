"""NACA 4-digit analytic airfoil model.

The camber gradient is fed directly into sin/cos as the rotation angle of the
thickness offset rather than being converted with an arctangent. Generated
geometry depends on this exact behaviour.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import GeometryValidationError, InputFormatError
from .base import AirfoilSection, Dialect

A0 = 0.2969
A1 = -0.126
A2 = -0.3516
A3 = 0.2843
A4_OPEN = -0.1015
A4_CLOSED = -0.1036

EPSILON = sys.float_info.epsilon


def camber(xc: float, m: float, p: float) -> float:
    """Mean camber line height at chord fraction ``xc``."""
    a = 2.0 * p * xc - xc * xc

    if xc < p and p > EPSILON:
        return m * a / (p * p)

    b = 1.0 - p
    return m * (1.0 - 2.0 * p + a) / (b * b)


def gradient(xc: float, m: float, p: float) -> float:
    """Derivative of the camber line with respect to ``xc``."""
    a = 2.0 * m * (p - xc)

    if xc < p and p > EPSILON:
        return a / (p * p)

    b = 1.0 - p
    return a / (b * b)


def thickness(xc: float, t: float, closed: bool) -> float:
    """Half-thickness distribution for maximum thickness ``t`` (chord fraction)."""
    x2 = xc * xc
    a4 = A4_CLOSED if closed else A4_OPEN

    return (A0 * math.sqrt(xc) + A1 * xc + A2 * x2 + A3 * x2 * xc + a4 * x2 * x2) * t / 0.2


def surface_x(xc: float, thk: float, theta: float, upper: bool) -> float:
    sign = -1.0 if upper else 1.0
    return xc + sign * thk * math.sin(theta)


def surface_z(zc: float, thk: float, theta: float, upper: bool) -> float:
    sign = 1.0 if upper else -1.0
    return zc + sign * thk * math.cos(theta)


@dataclass(frozen=True)
class NACA4Section(AirfoilSection):
    """Analytic NACA 4-digit section.

    Attributes:
        m: maximum camber as a chord fraction (first digit / 100)
        p: position of maximum camber as a chord fraction (second digit / 10)
        t: maximum thickness as a chord fraction (last two digits / 100)
        closed_trailing_edge: selects the closed or open thickness polynomial
    """

    m: float
    p: float
    t: float
    closed_trailing_edge: bool = True
    code: str = ""

    dialect = Dialect.NACA4

    def __post_init__(self):
        if self.t <= 0.0:
            raise GeometryValidationError(
                "Zero thickness airfoil detected; increase the third or fourth digit of the NACA code",
                details={"airfoil": self.name, "flag": "-a"},
            )

    @classmethod
    def from_code(cls, code: str, closed_trailing_edge: bool = True) -> "NACA4Section":
        """Build a section from a 4-digit code such as ``"2412"``."""
        if len(code) != 4 or not all(c in "0123456789" for c in code):
            raise InputFormatError(
                "NACA airfoil must be an integer with exactly 4 digits",
                details={"value": code, "flag": "-a"},
            )

        return cls(
            m=int(code[0]) / 100.0,
            p=int(code[1]) / 10.0,
            t=int(code[2:]) / 100.0,
            closed_trailing_edge=closed_trailing_edge,
            code=code,
        )

    @property
    def has_closed_trailing_edge(self) -> bool:
        return self.closed_trailing_edge

    @property
    def name(self) -> str:
        if self.code:
            return f"NACA {self.code}"
        return f"NACA m={self.m:g} p={self.p:g} t={self.t:g}"

    def surface_point(self, xc: float, upper: bool) -> Tuple[float, float]:
        theta = gradient(xc, self.m, self.p)
        thk = thickness(xc, self.t, self.closed_trailing_edge)
        zc = camber(xc, self.m, self.p)

        return surface_x(xc, thk, theta, upper), surface_z(zc, thk, theta, upper)
