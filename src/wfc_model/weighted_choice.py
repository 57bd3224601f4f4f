"""Provides the weighted random choice used to collapse cells."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import random

    from numpy.typing import ArrayLike


def masked_weighted_choice(weights: ArrayLike, mask: ArrayLike, rng: random.Random) -> int:
    """Randomly picks an index among the eligible ones, weighted by the corresponding weights.

    Only indices for which the mask is True take part in the draw. The probability of picking an eligible index is its
    weight divided by the sum of the weights of all eligible indices.

    Args:
        weights: Non-negative integer weights (e.g. pattern frequencies), one per index.
        mask: Boolean eligibility flags, one per index.
        rng: The random number generator driving the draw. Passing a seeded instance makes the draw deterministic.

    Returns:
        The chosen index.

    Raises:
        ValueError: If weights and mask differ in length or the eligible weights sum up to zero.
    """
    weights_array = np.asarray(weights, dtype=np.int_)
    mask_array = np.asarray(mask, dtype=bool)
    if weights_array.shape != mask_array.shape:
        raise ValueError(f"Got {weights_array.size} weights but {mask_array.size} mask entries")

    total_weight = int(weights_array[mask_array].sum())
    if total_weight <= 0:
        raise ValueError("Cannot choose from a set of eligible values whose weights sum up to zero")

    remaining = rng.randrange(total_weight)
    for i in range(weights_array.size):
        if mask_array[i]:
            if remaining >= weights_array[i]:
                remaining -= int(weights_array[i])
            else:
                return i

    # Unreachable as long as remaining < total_weight.
    raise AssertionError("Weighted choice ran past the last eligible index")
