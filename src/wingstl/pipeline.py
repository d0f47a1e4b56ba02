"""End-to-end compilation from airfoil and planform to an STL file."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

from .airfoil import AirfoilSection, NACA4Section, read_dat
from .logging import get_logger, log_mesh_generated
from .mesh import WingMesh, WingPlanform, generate_mesh, validate_planform, write_stl

logger = get_logger("pipeline")


def is_dat_path(airfoil: str) -> bool:
    return airfoil.lower().endswith(".dat")


def load_section(airfoil: str, closed_trailing_edge: bool = True) -> AirfoilSection:
    """Resolve an airfoil argument: a 4-digit NACA code or a path to a .dat file.

    Closure of a digitized section comes from its points, so
    ``closed_trailing_edge`` only applies to NACA codes.
    """
    if is_dat_path(airfoil):
        section = read_dat(airfoil)
        if section.has_closed_trailing_edge != closed_trailing_edge:
            logger.debug("Trailing edge closure of {} taken from its points", airfoil)
        return section

    return NACA4Section.from_code(airfoil, closed_trailing_edge=closed_trailing_edge)


def compile_wing(section: AirfoilSection, planform: WingPlanform) -> WingMesh:
    """Validate the planform and generate the mesh."""
    validate_planform(planform)

    mesh = generate_mesh(section, planform)
    log_mesh_generated(mesh.num_vertices, mesh.num_triangles, mesh.closed_trailing_edge)
    return mesh


def build_and_write(
    section: AirfoilSection,
    planform: WingPlanform,
    output: Union[str, Path],
) -> Tuple[WingMesh, Path]:
    """Compile the wing and write it as ASCII STL."""
    mesh = compile_wing(section, planform)
    path = write_stl(mesh, output)
    return mesh, path
