"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import FieldConfig, GameSession, MineField, VisibleField


# ============================================================================
# Layouts
# ============================================================================

# Mines at (1,0), (2,1), (2,2), (3,1), (3,3)
SMALL_LAYOUT = [
    [False, False, False, False],
    [True, False, False, False],
    [False, True, True, False],
    [False, True, False, True],
]

# Single mine at (3,1)
ALMOST_EMPTY_LAYOUT = [
    [False, False, False, False],
    [False, False, False, False],
    [False, False, False, False],
    [False, True, False, False],
]

EMPTY_LAYOUT = [[False] * 4 for _ in range(4)]


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source for reproducible mine placement."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_field() -> MineField:
    """4x4 field with five mines."""
    return MineField.from_grid(SMALL_LAYOUT)


@pytest.fixture
def almost_empty_field() -> MineField:
    """4x4 field with a single mine at (3, 1)."""
    return MineField.from_grid(ALMOST_EMPTY_LAYOUT)


@pytest.fixture
def empty_field() -> MineField:
    """4x4 field with no mines."""
    return MineField.from_grid(EMPTY_LAYOUT)


@pytest.fixture
def nominal_field(rng: np.random.Generator) -> MineField:
    """Unpopulated 9x9 field promising 10 mines."""
    return MineField(9, 9, 10, rng=rng)


# ============================================================================
# Visible Field Fixtures
# ============================================================================

@pytest.fixture
def small_visible(small_field: MineField) -> VisibleField:
    """Visible field over the five-mine layout."""
    return VisibleField(small_field)


@pytest.fixture
def almost_empty_visible(almost_empty_field: MineField) -> VisibleField:
    """Visible field over the single-mine layout."""
    return VisibleField(almost_empty_field)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def beginner_session(rng: np.random.Generator) -> GameSession:
    """Random 9x9 session with 10 mines."""
    return GameSession(FieldConfig(9, 9, 10), rng=rng)
