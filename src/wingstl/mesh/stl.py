"""ASCII STL output.

The whole file is rendered in memory before the output file is opened, so a
failed run never leaves a truncated STL behind.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from trimesh.exchange.stl import export_stl_ascii

from ..exceptions import ResourceError
from ..logging import get_logger
from .generator import WingMesh

logger = get_logger("stl")


def render_stl(mesh: WingMesh) -> str:
    """Serialise the mesh as ASCII STL text, one facet per triangle in index order."""
    text = export_stl_ascii(mesh.to_trimesh())
    if not text.endswith("\n"):
        text += "\n"
    return text


def write_stl(mesh: WingMesh, path: Union[str, Path]) -> Path:
    """Write the mesh to ``path`` and return the resolved path."""
    path = Path(path)
    text = render_stl(mesh)

    try:
        with open(path, "w", encoding="ascii") as f:
            f.write(text)
    except OSError as e:
        raise ResourceError(
            "Unable to open STL file for writing",
            details={"file": str(path), "reason": e.strerror or type(e).__name__},
        ) from e

    logger.info("Wrote {} facets to {}", mesh.num_triangles, path)
    return path
