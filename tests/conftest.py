"""Pytest configuration and fixtures for wingstl."""

import os
from pathlib import Path
from typing import Callable

import pytest
from loguru import logger

from wingstl.airfoil import NACA4Section
from wingstl.mesh import WingPlanform, build_planform

# Upper surface first, as most published Selig files are
SELIG_0012_OPEN = """NACA 0012 sample
1.00000  0.00126
0.75000  0.03994
0.50000  0.05294
0.25000  0.05853
0.10000  0.04683
0.00000  0.00000
0.10000 -0.04683
0.25000 -0.05853
0.50000 -0.05294
0.75000 -0.03994
1.00000 -0.00126
"""

SELIG_0012_CLOSED = """NACA 0012 closed sample
1.00000  0.00000
0.75000  0.03994
0.50000  0.05294
0.25000  0.05853
0.10000  0.04683
0.00000  0.00000
0.10000 -0.04683
0.25000 -0.05853
0.50000 -0.05294
0.75000 -0.03994
1.00000  0.00000
"""

LEDNICER_0012_OPEN = """NACA 0012 sample

0.00000  0.00000
0.10000  0.04683
0.25000  0.05853
0.50000  0.05294
0.75000  0.03994
1.00000  0.00126
0.00000  0.00000
0.10000 -0.04683
0.25000 -0.05853
0.50000 -0.05294
0.75000 -0.03994
1.00000 -0.00126
"""


@pytest.fixture(autouse=True)
def set_test_environment():
    """Set environment variables for testing."""
    os.environ["WINGSTL_LOG_LEVEL"] = "WARNING"  # Reduce log noise during tests
    yield
    # Sinks may hold a captured stream that pytest closes after the test
    logger.remove()


@pytest.fixture
def naca0012() -> NACA4Section:
    return NACA4Section.from_code("0012")


@pytest.fixture
def naca2412() -> NACA4Section:
    return NACA4Section.from_code("2412")


@pytest.fixture
def make_planform() -> Callable[..., WingPlanform]:
    """Factory for planforms with small, fast defaults."""

    def _make(**overrides) -> WingPlanform:
        values = dict(
            semi_span=6.0,
            root_chord=1.0,
            sweep_leading=90.0,
            sweep_trailing=90.0,
            num_chordwise_points=20,
            num_spanwise_stations=2,
            cosine_spacing=True,
        )
        values.update(overrides)
        return build_planform(**values)

    return _make


@pytest.fixture
def selig_text() -> str:
    return SELIG_0012_OPEN


@pytest.fixture
def selig_closed_text() -> str:
    return SELIG_0012_CLOSED


@pytest.fixture
def lednicer_text() -> str:
    return LEDNICER_0012_OPEN


@pytest.fixture
def selig_dat(tmp_path: Path) -> Path:
    path = tmp_path / "naca0012_selig.dat"
    path.write_text(SELIG_0012_OPEN, encoding="utf-8")
    return path


@pytest.fixture
def lednicer_dat(tmp_path: Path) -> Path:
    path = tmp_path / "naca0012_lednicer.dat"
    path.write_text(LEDNICER_0012_OPEN, encoding="utf-8")
    return path


# Custom markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
