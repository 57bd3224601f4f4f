"""Shared pytest fixtures for the overlapping model tests."""

import random

import numpy as np
import pytest


# =============================================================================
# Seed Images
# =============================================================================

@pytest.fixture
def uniform_seed() -> np.ndarray:
    """A 2x2 RGB seed image with all four pixels the same color."""
    return np.full((2, 2, 3), 128, dtype=np.int_)


@pytest.fixture
def two_color_seed() -> np.ndarray:
    """A 1x2 RGB seed image with two distinct colors (black left, white right)."""
    return np.array([[[0, 0, 0], [255, 255, 255]]], dtype=np.int_)


@pytest.fixture
def stripes_seed() -> np.ndarray:
    """A 4x4 tile index seed image with vertical stripes of the tiles 1 and 2."""
    return np.array(
        [
            [1, 2, 1, 2],
            [1, 2, 1, 2],
            [1, 2, 1, 2],
            [1, 2, 1, 2],
        ],
        dtype=np.int_,
    )


@pytest.fixture
def three_tile_seed() -> np.ndarray:
    """A 1x3 tile index seed image with three distinct tiles."""
    return np.array([[7, 3, 5]], dtype=np.int_)


# =============================================================================
# Randomness
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    """A seeded random number generator."""
    return random.Random(1234)
