"""wingstl: swept wing STL generator.

Compiles a wing planform and a NACA 4-digit or digitized airfoil section into a
closed triangulated surface and writes it as ASCII STL.
"""

__version__ = "1.0.0"

from .airfoil import AirfoilSection, LednicerSection, NACA4Section, SeligSection, parse_dat, read_dat
from .exceptions import (
    GeometryValidationError,
    InputFormatError,
    InternalInvariantError,
    ResourceError,
    WingstlError,
)
from .mesh import Units, WingMesh, WingPlanform, build_planform, generate_mesh, write_stl
from .pipeline import build_and_write, compile_wing, load_section

__all__ = [
    "__version__",
    "AirfoilSection",
    "GeometryValidationError",
    "InputFormatError",
    "InternalInvariantError",
    "LednicerSection",
    "NACA4Section",
    "ResourceError",
    "SeligSection",
    "Units",
    "WingMesh",
    "WingPlanform",
    "WingstlError",
    "build_and_write",
    "build_planform",
    "compile_wing",
    "generate_mesh",
    "load_section",
    "parse_dat",
    "read_dat",
    "write_stl",
]
