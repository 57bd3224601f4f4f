"""Manages the catalog of NxN color patterns extracted from a seed image."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from wfc_model.color_palette import as_color_array, ColorPalette, to_color

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from wfc_model.color_palette import Color


logger = logging.getLogger(__name__)


class PatternCatalog:
    """Catalog of all unique NxN patterns of a seed image together with their frequencies.

    Patterns of size NxN are extracted by sliding a window over the seed image with a stride of 1 in both axes. The
    window never wraps around the image borders. Identical blocks are merged into a single pattern whose frequency is
    the number of times the block occurs in the seed image. The frequencies serve as sampling weights when collapsing a
    cell. Rotated and reflected variants of the patterns are not added.

    Attributes:
        pattern_size: The width and height of the square patterns extracted (in pixels).
        pattern_count: The total number of unique patterns discovered.
        palette: The palette the color indices of the patterns refer to.
    """

    pattern_size: int
    pattern_count: int
    palette: ColorPalette

    # The 3D (rows, cols, channels) seed image which is used for pattern extraction.
    _color_array: NDArray[np.int_]

    # An array storing the frequency count for each pattern (used as probability weights).
    _frequency_hints: NDArray[np.int_]

    # A list of unique pattern objects in order of first occurrence, where the index corresponds to the pattern ID.
    _patterns: list[_Pattern]

    def __init__(self, seed_array: ArrayLike, pattern_size: int, palette: ColorPalette | None = None) -> None:
        """Extracts and counts the patterns of a seed image.

        Args:
            seed_array: A 2D array of scalar colors or a 3D array of multi-channel colors.
            pattern_size: The width and height of the square patterns to extract (in pixels).
            palette: The palette of the seed image. Built from the seed image if not given.
        """
        self.pattern_size = pattern_size

        self._color_array = as_color_array(seed_array)
        self.palette = palette if palette is not None else ColorPalette.from_seed_array(self._color_array)

        self._extract_and_count_patterns()
        self._frequency_hints = np.array([pattern._frequency for pattern in self._patterns], dtype=np.int_)

        logger.debug(
            "Extracted %d unique %dx%d patterns from a %dx%d seed image",
            self.pattern_count,
            self.pattern_size,
            self.pattern_size,
            self._color_array.shape[1],
            self._color_array.shape[0],
        )

    @property
    def frequency_hints(self) -> NDArray[np.int_]:
        """The frequency of each pattern, indexed by pattern index."""
        return self._frequency_hints

    def get_frequency(self, pattern_index: int) -> int:
        """Returns the number of occurrences of a pattern in the seed image."""
        return self._patterns[pattern_index]._frequency

    def get_color_arrangement(self, pattern_index: int) -> NDArray[np.int_]:
        """Returns the (N, N, channels) array of colors that defines the pattern."""
        return self._patterns[pattern_index]._color_arrangement

    def get_color_index_arrangement(self, pattern_index: int) -> NDArray[np.int_]:
        """Returns the (N, N) array of palette indices of the pattern's colors."""
        return self._patterns[pattern_index]._color_index_arrangement

    def get_top_left_color(self, pattern_index: int) -> Color:
        """Returns the color at the pattern's top-left corner (0, 0).

        This is the color an output cell takes when it is resolved to the pattern.
        """
        return to_color(self._patterns[pattern_index]._color_arrangement[0, 0])

    def _extract_and_count_patterns(self) -> None:
        """Extracts all unique NxN patterns and counts their frequency."""
        self._patterns = []
        patterns_by_hash: dict[bytes, _Pattern] = {}
        self.pattern_count = 0

        # A window larger than the seed image yields no rows/cols here, leaving the catalog empty.
        for row in range(self._color_array.shape[0] - self.pattern_size + 1):
            for col in range(self._color_array.shape[1] - self.pattern_size + 1):
                color_arrangement = self._color_array[row : row + self.pattern_size, col : col + self.pattern_size]

                hash_value = self._hash_color_arrangement(color_arrangement)
                if hash_value not in patterns_by_hash:
                    new_pattern = _Pattern(
                        self.pattern_count, color_arrangement, self._index_color_arrangement(color_arrangement)
                    )
                    self._patterns.append(new_pattern)
                    self.pattern_count += 1
                    patterns_by_hash[hash_value] = new_pattern
                else:
                    patterns_by_hash[hash_value]._frequency += 1

    def _index_color_arrangement(self, color_arrangement: NDArray[np.int_]) -> NDArray[np.int_]:
        """Maps every color of a block to its palette index."""
        return np.array(
            [
                [self.palette.index_of(color_arrangement[row, col]) for col in range(color_arrangement.shape[1])]
                for row in range(color_arrangement.shape[0])
            ],
            dtype=np.int_,
        )

    def _hash_color_arrangement(self, array: NDArray[np.int_]) -> bytes:
        """Generates a key that is equal for two blocks exactly if their colors are equal."""
        return np.ascontiguousarray(array).tobytes()


class _Pattern:
    """Internal class to represent a single unique NxN color pattern."""

    # The unique integer ID for this pattern.
    _index: int
    # The (N, N, channels) array of colors that define the pattern.
    _color_arrangement: NDArray[np.int_]
    # The (N, N) array of palette indices of the colors.
    _color_index_arrangement: NDArray[np.int_]
    # The number of times this pattern was found in the seed image.
    _frequency: int

    def __init__(
        self, index: int, color_arrangement: NDArray[np.int_], color_index_arrangement: NDArray[np.int_]
    ) -> None:
        """Initializes a pattern object. Frequency starts at 1 upon creation."""
        self._index = index
        self._color_arrangement = color_arrangement.copy()
        self._color_index_arrangement = color_index_arrangement
        self._frequency = 1
