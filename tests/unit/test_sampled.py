"""Unit tests for digitized Selig and Lednicer sections."""

import pytest

from wingstl.airfoil import AirfoilPoint, Dialect, LednicerSection, SeligSection
from wingstl.airfoil.sampled import (
    count_direction_switches,
    find_lednicer_split,
    lookup,
    trailing_edge_is_closed,
    validate_lednicer_order,
    validate_selig_order,
)
from wingstl.exceptions import GeometryValidationError

DIAMOND_SELIG = [(1.0, 0.0), (0.5, -0.05), (0.0, 0.0), (0.5, 0.05), (1.0, 0.0)]


class TestDirectionSwitches:
    """Test the single-switch scan."""

    def test_monotone_in_assumed_direction(self):
        assert count_direction_switches([3, 2, 1], start_decreasing=True) == 0
        assert count_direction_switches([1, 2, 3], start_decreasing=False) == 0

    def test_first_step_against_assumed_direction_counts(self):
        assert count_direction_switches([1, 2, 3], start_decreasing=True) == 1

    def test_flat_steps_are_skipped(self):
        assert count_direction_switches([1.0, 0.5, 0.5, 0.0, 0.0, 1.0], start_decreasing=True) == 1


class TestSeligOrder:
    """Test Selig ordering validation."""

    def test_valid_path_passes(self):
        validate_selig_order(DIAMOND_SELIG)

    def test_path_starting_at_leading_edge_fails(self):
        points = [(0.0, 0.0), (0.5, 0.05), (1.0, 0.0), (0.5, -0.05), (0.0, 0.0)]
        with pytest.raises(GeometryValidationError, match="misordered"):
            validate_selig_order(points)

    def test_monotone_path_fails(self):
        with pytest.raises(GeometryValidationError):
            validate_selig_order([(1.0, 0.0), (0.5, 0.05), (0.0, 0.0)])

    def test_rising_only_path_fails(self):
        with pytest.raises(GeometryValidationError, match="misordered") as exc_info:
            validate_selig_order([(0.0, 0.0), (0.5, 0.05), (1.0, 0.0)])
        assert exc_info.value.details["leading_edge_index"] == 0

    def test_minimum_at_last_point_fails(self):
        with pytest.raises(GeometryValidationError, match="misordered"):
            validate_selig_order([(1.0, 0.0), (1.0, 0.05), (0.5, 0.02), (0.0, 0.0)])


class TestLednicerOrder:
    """Test Lednicer ordering validation."""

    def test_split_is_first_decrease(self):
        points = [(0, 0), (0.5, 0.1), (1, 0), (0, 0), (0.5, -0.1), (1, 0)]
        assert find_lednicer_split(points) == 3

    def test_no_split_for_single_run(self):
        assert find_lednicer_split([(0, 0), (0.5, 0.1), (1, 0)]) is None

    def test_second_run_may_switch_once(self):
        points = [(0, 0), (0.5, 0.1), (1, 0), (0, 0), (0.5, -0.1), (1, 0), (0.98, 0.001)]
        validate_lednicer_order(points, 3)

    def test_second_run_switching_twice_fails(self):
        points = [(0, 0), (0.5, 0.1), (1, 0), (0, 0), (0.6, -0.1), (0.5, -0.08), (1, 0)]
        with pytest.raises(GeometryValidationError, match="more than once"):
            validate_lednicer_order(points, 3)

    def test_short_run_fails(self):
        with pytest.raises(GeometryValidationError, match="at least two points"):
            validate_lednicer_order([(0, 0), (0.5, 0.1), (1, 0), (0, 0)], 3)

    def test_missing_second_surface(self):
        with pytest.raises(GeometryValidationError, match="no second surface"):
            LednicerSection([(0, 0), (0.5, 0.1), (1, 0)])


class TestLookup:
    """Test surface height lookup by interpolation."""

    upper = (AirfoilPoint(0.0, 0.0), AirfoilPoint(0.5, 0.1), AirfoilPoint(0.9, 0.02))
    lower = (AirfoilPoint(0.0, 0.0), AirfoilPoint(0.5, -0.1), AirfoilPoint(1.0, -0.01))

    def test_exact_match(self):
        assert lookup(self.upper, self.lower, 0.5) == 0.1

    def test_interpolates_between_bracketing_points(self):
        assert lookup(self.upper, self.lower, 0.25) == pytest.approx(0.05)
        assert lookup(self.lower, self.upper, 0.75) == pytest.approx(-0.055)

    def test_short_run_completed_by_opposite_trailing_edge(self):
        # Upper stops at 0.9; the lower trailing edge point closes the gap
        assert lookup(self.upper, self.lower, 0.95) == pytest.approx(0.005)

    def test_leading_edge_completed_by_opposite_run(self):
        upper = (AirfoilPoint(0.1, 0.03), AirfoilPoint(1.0, 0.0))
        lower = (AirfoilPoint(0.0, 0.0), AirfoilPoint(1.0, 0.0))
        assert lookup(upper, lower, 0.05) == pytest.approx(0.015)


class TestSeligSection:
    """Test Selig section construction."""

    def test_runs_and_closure(self):
        section = SeligSection(DIAMOND_SELIG, label="diamond")

        assert section.dialect is Dialect.SELIG
        assert section.leading_edge_index == 2
        assert section.has_closed_trailing_edge
        assert section.name == "diamond"
        assert section.num_points == 5

        assert section.surface_point(0.5, upper=True) == (0.5, 0.05)
        assert section.surface_point(0.5, upper=False) == (0.5, -0.05)

    def test_upper_surface_first_is_accepted(self):
        reversed_order = [(1.0, 0.0), (0.5, 0.05), (0.0, 0.0), (0.5, -0.05), (1.0, 0.0)]
        section = SeligSection(reversed_order)

        assert section.surface_point(0.5, upper=True)[1] == pytest.approx(0.05)
        assert section.surface_point(0.5, upper=False)[1] == pytest.approx(-0.05)

    def test_open_trailing_edge(self):
        points = [(1.0, 0.002), (0.5, 0.05), (0.0, 0.0), (0.5, -0.05), (1.0, -0.002)]
        assert not SeligSection(points).has_closed_trailing_edge

    def test_misordered_points_rejected(self):
        with pytest.raises(GeometryValidationError):
            SeligSection([(0.0, 0.0), (0.5, 0.05), (1.0, 0.0), (0.5, -0.05), (0.0, 0.0)])


class TestLednicerSection:
    """Test Lednicer section construction."""

    def test_runs_and_closure(self):
        points = [(0, 0), (0.5, 0.05), (1, 0), (0, 0), (0.5, -0.05), (1, 0)]
        section = LednicerSection(points)

        assert section.dialect is Dialect.LEDNICER
        assert section.split_index == 3
        assert section.has_closed_trailing_edge
        assert section.surface_point(0.25, upper=True)[1] == pytest.approx(0.025)
        assert section.surface_point(0.25, upper=False)[1] == pytest.approx(-0.025)

    def test_matches_equivalent_selig_section(self):
        lednicer = LednicerSection([(0, 0), (0.5, 0.05), (1, 0), (0, 0), (0.5, -0.05), (1, 0)])
        selig = SeligSection(DIAMOND_SELIG)

        for xc in (0.0, 0.1, 0.5, 0.8, 1.0):
            for upper in (True, False):
                assert lednicer.surface_point(xc, upper) == pytest.approx(selig.surface_point(xc, upper))


def test_trailing_edge_tolerance():
    assert trailing_edge_is_closed(AirfoilPoint(1.0, 0.0), AirfoilPoint(1.0, 5e-7))
    assert not trailing_edge_is_closed(AirfoilPoint(1.0, 0.0), AirfoilPoint(1.0, 2e-6))
