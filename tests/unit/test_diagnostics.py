"""Unit tests for planform and mesh diagnostics."""

import math

import pytest

from wingstl.exceptions import GeometryValidationError
from wingstl.mesh import (
    MeshReport,
    WingProperties,
    aspect_ratio,
    generate_mesh,
    surface_area,
    tip_overlap,
    validate_planform,
)


class TestPlanformMetrics:
    """Test area, aspect ratio and tip overlap."""

    def test_rectangular_wing(self):
        assert surface_area(6.0, 1.0, 90.0, 90.0) == pytest.approx(12.0)
        assert aspect_ratio(6.0, 1.0, 90.0, 90.0) == pytest.approx(12.0)

    def test_tapered_wing(self):
        # Leading edge swept back, trailing edge swept forward
        area = surface_area(2.0, 1.0, 80.0, 100.0)
        offset = 2.0 * math.tan(math.radians(10.0))
        assert area == pytest.approx(4.0 + 2.0 * (-offset - offset))

    def test_no_area_gives_zero_aspect_ratio(self):
        assert surface_area(1.0, 1.0, 90.0, 170.0) < 0.0
        assert aspect_ratio(1.0, 1.0, 90.0, 170.0) == 0.0

    def test_tip_overlap(self):
        assert tip_overlap(6.0, 1.0, 10.0, 170.0)
        assert not tip_overlap(6.0, 1.0, 90.0, 90.0)
        assert not tip_overlap(6.0, 1.0, 85.0, 85.0)

    def test_tip_overlap_on_forward_swept_trailing_edge(self):
        # Tip chord 1 - 6 * tan(10 deg) is negative
        assert tip_overlap(6.0, 1.0, 90.0, 100.0)
        assert not tip_overlap(6.0, 1.0, 90.0, 95.0)


class TestValidatePlanform:
    """Test planform rejection before meshing."""

    def test_valid_planform(self, make_planform):
        validate_planform(make_planform())

    def test_tip_overlap_rejected(self, make_planform):
        with pytest.raises(GeometryValidationError, match="tip overlap") as exc_info:
            validate_planform(make_planform(sweep_leading=10.0, sweep_trailing=170.0))
        assert "'-l', '-t', '-b' or '-c'" in str(exc_info.value)

    def test_low_aspect_ratio_rejected(self, make_planform):
        with pytest.raises(GeometryValidationError, match="aspect ratio"):
            validate_planform(make_planform(semi_span=0.1))

    def test_high_aspect_ratio_rejected(self, make_planform):
        with pytest.raises(GeometryValidationError, match="aspect ratio") as exc_info:
            validate_planform(make_planform(semi_span=60.0, root_chord=0.1))
        assert exc_info.value.details["aspect_ratio"] == pytest.approx(1200.0)


class TestWingProperties:
    """Test the run summary."""

    def test_from_planform(self, naca2412, make_planform):
        props = WingProperties.from_planform(make_planform(), naca2412)

        assert props.airfoil == "NACA 2412"
        assert props.aspect_ratio == pytest.approx(12.0)
        assert props.surface_area == pytest.approx(12.0)
        assert props.num_vertices == 76
        assert props.num_triangles == 148
        assert props.closed_trailing_edge

    def test_format_lines(self, naca2412, make_planform):
        lines = WingProperties.from_planform(make_planform(units="ft"), naca2412).format_lines()

        assert lines[0] == "Wing properties:"
        assert any("NACA 2412" in line for line in lines)
        assert any(line.endswith("12.00 sq ft") for line in lines)
        assert any("cosine" in line for line in lines)


class TestMeshReport:
    """Test topology checks of generated meshes."""

    def test_closed_mesh(self, naca2412, make_planform):
        mesh = generate_mesh(naca2412, make_planform(num_spanwise_stations=3))
        report = MeshReport.from_mesh(mesh)

        assert report.num_vertices == mesh.num_vertices
        assert report.num_triangles == mesh.num_triangles
        assert report.is_watertight
        assert report.is_winding_consistent
        assert report.volume > 0.0
        assert report.bounds[0][1] == pytest.approx(0.0)
        assert report.bounds[1][1] == pytest.approx(6.0)
