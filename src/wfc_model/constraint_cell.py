"""Implements the constraint state of a single output cell."""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING

import numpy as np

from wfc_model.enums import CellState
from wfc_model.weighted_choice import masked_weighted_choice

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


logger = logging.getLogger(__name__)


class ConstraintCell:
    """Represents the superposition of colors and patterns still possible for one output cell.

    The cell state consists of two independent bitsets: one flag per palette color and one flag per catalog pattern.
    Both start fully set and only ever shrink afterwards. A cell without any possible pattern is in contradiction, a cell
    with exactly one possible pattern is resolved and a cell with more than one possible pattern is undecided.
    """

    # Boolean array which contains True for each palette index of a color that is still possible, False otherwise.
    _possible_colors: NDArray[np.bool_]
    # Boolean array which contains True for each index of a pattern that is still possible, False otherwise.
    _possible_states: NDArray[np.bool_]

    def __init__(self, color_count: int, state_count: int) -> None:
        """Initializes a fully unconstrained cell (all colors and patterns possible)."""
        self._possible_colors = np.full(color_count, True, dtype=bool)
        self._possible_states = np.full(state_count, True, dtype=bool)

    @property
    def possible_colors(self) -> NDArray[np.bool_]:
        """Read-only view of the color bitset."""
        view = self._possible_colors.view()
        view.flags.writeable = False
        return view

    @property
    def possible_states(self) -> NDArray[np.bool_]:
        """Read-only view of the pattern bitset."""
        view = self._possible_states.view()
        view.flags.writeable = False
        return view

    @property
    def possible_state_count(self) -> int:
        """The number of patterns that are still possible."""
        return int(np.count_nonzero(self._possible_states))

    @property
    def state(self) -> CellState:
        """Whether the cell is in contradiction, resolved or still undecided."""
        possible_state_count = self.possible_state_count
        if possible_state_count == 0:
            return CellState.CONTRADICTION
        if possible_state_count == 1:
            return CellState.RESOLVED
        return CellState.UNDECIDED

    @property
    def resolved_state_index(self) -> int | None:
        """The index of the only possible pattern, or None if the cell is not resolved."""
        if self.possible_state_count != 1:
            return None
        return int(np.flatnonzero(self._possible_states)[0])

    def is_color_possible(self, color_index: int) -> bool:
        """Checks if the color with the given palette index is still possible.

        Raises:
            IndexError: If the index is out of range. Negative indices are not wrapped around.
        """
        self._check_index(color_index, self._possible_colors.size)
        return bool(self._possible_colors[color_index])

    def is_state_possible(self, state_index: int) -> bool:
        """Checks if the pattern with the given index is still possible.

        Raises:
            IndexError: If the index is out of range. Negative indices are not wrapped around.
        """
        self._check_index(state_index, self._possible_states.size)
        return bool(self._possible_states[state_index])

    def remove_color(self, color_index: int) -> bool:
        """Marks a color as no longer possible. Returns True if the color was possible before."""
        was_possible = self.is_color_possible(color_index)
        self._possible_colors[color_index] = False
        return was_possible

    def remove_state(self, state_index: int) -> bool:
        """Marks a pattern as no longer possible. Returns True if the pattern was possible before."""
        was_possible = self.is_state_possible(state_index)
        self._possible_states[state_index] = False
        return was_possible

    def restrict_states(self, allowed_states: ArrayLike) -> bool:
        """Intersects the pattern bitset with a mask of allowed patterns.

        Used by propagation: patterns not contained in the mask are removed, patterns that were already removed stay
        removed.

        Args:
            allowed_states: Boolean mask with one flag per pattern.

        Returns:
            True if at least one pattern was removed, False otherwise.

        Raises:
            ValueError: If the mask length differs from the number of patterns.
        """
        mask = np.asarray(allowed_states, dtype=bool)
        if mask.shape != self._possible_states.shape:
            raise ValueError(f"Expected a mask of {self._possible_states.size} states, got {mask.size}")
        changed = bool((self._possible_states & ~mask).any())
        # In place, so views handed out by 'possible_states' keep tracking the bitset.
        np.logical_and(self._possible_states, mask, out=self._possible_states)
        return changed

    def get_entropy(self, frequency_hints: ArrayLike) -> float | None:
        """Calculates the Shannon entropy over the remaining possible patterns.

        Each remaining pattern is weighted by its frequency, normalized by the sum of the frequencies of all remaining
        patterns: entropy = -sum(p * ln(p)).

        Args:
            frequency_hints: The frequency of each pattern of the catalog, indexed by pattern index.

        Returns:
            None if no pattern is possible anymore (contradiction), 0.0 if exactly one pattern is possible, the entropy
            otherwise. A NaN result indicates invalid frequencies and has to be treated as a defect by the caller.
        """
        weights = np.asarray(frequency_hints, dtype=np.double)
        assert weights.shape == self._possible_states.shape

        possible_state_count = self.possible_state_count
        if possible_state_count == 0:
            return None
        if possible_state_count == 1:
            return 0.0

        possible_weights = weights[self._possible_states]
        with np.errstate(divide="ignore", invalid="ignore"):
            probabilities = possible_weights / possible_weights.sum()
            entropy = -float((probabilities * np.log(probabilities)).sum())

        if math.isnan(entropy):
            logger.debug("Entropy is NaN for the possible weights %s", possible_weights)
        return entropy

    def collapse(self, frequency_hints: ArrayLike, rng: random.Random | None = None) -> int:
        """Randomly picks one of the possible patterns, weighted by pattern frequency, and removes all others.

        Args:
            frequency_hints: The frequency of each pattern of the catalog, indexed by pattern index.
            rng: The random number generator used for the draw. A fresh unseeded generator is used if not given.

        Returns:
            The index of the chosen pattern.
        """
        assert self._possible_states.any(), "Cannot collapse a cell without possible states"
        if rng is None:
            rng = random.Random()

        chosen_state = masked_weighted_choice(frequency_hints, self._possible_states, rng)
        self._possible_states[:] = False
        self._possible_states[chosen_state] = True
        return chosen_state

    @staticmethod
    def _check_index(index: int, size: int) -> None:
        """Raises an IndexError if the index does not address one of 'size' bitset entries."""
        if not 0 <= index < size:
            raise IndexError(f"Index {index} out of range for {size} entries")

    def __repr__(self) -> str:
        """Returns a summary of the remaining color and pattern counts."""
        return (
            f"ConstraintCell(colors={np.count_nonzero(self._possible_colors)}/{self._possible_colors.size}, "
            f"states={self.possible_state_count}/{self._possible_states.size})"
        )
