"""
Shared test fixtures for Wren panel decomposition tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wren import WrenConfig


@pytest.fixture
def square():
    """A 100x100 counter-clockwise square."""
    return [(0, 0), (100, 0), (100, 100), (0, 100)]


@pytest.fixture
def clockwise_square(square):
    """The same square wound clockwise."""
    return [square[0]] + square[:0:-1]


@pytest.fixture
def square_with_midpoint(square):
    """The square with an extra vertex halfway along its bottom edge."""
    return [square[0], (50, 0)] + square[1:]


@pytest.fixture
def l_shape():
    """A concave L outline with 50-wide arms and one reflex vertex at (50, 50)."""
    return [(0, 0), (100, 0), (100, 50), (50, 50), (50, 100), (0, 100)]


@pytest.fixture
def narrow_triangle():
    """Isosceles triangle with a 10-long base and ~40.3-long sides.

    Its inradius (~4.4) is below the default fin width, so it only decomposes
    with a smaller fin.
    """
    return [(0, 0), (10, 0), (5, 40)]


@pytest.fixture
def small_fin_config():
    """Config whose fin offsets fit inside the narrow triangle."""
    return WrenConfig(point_distance=15.0, fin_width=2.0)
