"""Implements the overlapping WFC model: the grid of constraint cells and the queries a solver loop is built from."""

from __future__ import annotations

import logging
import math
from typing import Any, TYPE_CHECKING

import numpy as np

from wfc_model.color_palette import ColorPalette
from wfc_model.constants import BLOCK_SIZE_DEFAULT, BLOCK_SIZE_MIN_LIMIT, UNRESOLVED_COLOR_VALUE
from wfc_model.constraint_cell import ConstraintCell
from wfc_model.errors import AllStatesDecided, NoValidStatesError, UnexpectedNaNError
from wfc_model.pattern_catalog import PatternCatalog
from wfc_model.seed_image import load_seed_image

if TYPE_CHECKING:
    import random
    from os import PathLike

    from numpy.typing import ArrayLike, NDArray


logger = logging.getLogger(__name__)


class OverlappingModel:
    """Grid of constraint cells together with the palette and pattern catalog of a seed image.

    The model provides the primitives an external solver loop composes into observe -> collapse -> propagate: selecting
    the cell with the lowest nonzero entropy, collapsing a cell to a single pattern and evaluating which patterns are
    still consistent with the color constraints around a grid position. The model does not propagate constraints
    itself. Cells are addressed by their (row, col) coords and mutated one at a time.

    Attributes:
        palette: The sorted colors of the seed image.
        catalog: The NxN patterns of the seed image and their frequencies.
        block_size: The width and height N of the patterns (in pixels).
        grid_size: (height, width) of the output grid (in cells).
    """

    palette: ColorPalette
    catalog: PatternCatalog
    block_size: int
    grid_size: tuple[int, int]

    # 2D array of 'ConstraintCell' objects storing the state of every output cell.
    _cell_grid: NDArray[Any]

    def __init__(
        self, seed_array: ArrayLike, output_size: tuple[int, int], block_size: int = BLOCK_SIZE_DEFAULT
    ) -> None:
        """Builds palette and catalog from the seed image and allocates a grid of unconstrained cells.

        Args:
            seed_array: A 2D array of scalar colors or a 3D (rows, cols, channels) array of multi-channel colors.
            output_size: (width, height) of the output grid (in cells).
            block_size: The width and height N of the patterns to extract. Callers are expected to keep N within the
                output grid dimensions, this is not checked.

        Raises:
            ValueError: If the block size or one of the output dimensions is smaller than 1.
        """
        if block_size < BLOCK_SIZE_MIN_LIMIT:
            raise ValueError(f"Block size must be at least {BLOCK_SIZE_MIN_LIMIT}, got {block_size}")
        width, height = output_size
        if width < 1 or height < 1:
            raise ValueError(f"Output size must be positive in both dimensions, got {output_size}")

        self.block_size = block_size
        self.palette = ColorPalette.from_seed_array(seed_array)
        self.catalog = PatternCatalog(seed_array, block_size, self.palette)
        self.grid_size = (height, width)

        self._cell_grid = np.empty(self.grid_size, dtype=object)
        for row in range(height):
            for col in range(width):
                self._cell_grid[row, col] = ConstraintCell(len(self.palette), self.catalog.pattern_count)

        logger.debug(
            "Initialized %dx%d overlapping model with %d colors and %d patterns",
            width,
            height,
            len(self.palette),
            self.catalog.pattern_count,
        )

    @classmethod
    def from_image_file(
        cls, seed_img_path: str | PathLike[str], output_size: tuple[int, int], block_size: int = BLOCK_SIZE_DEFAULT
    ) -> OverlappingModel:
        """Loads a seed image from disk and builds a model from it."""
        return cls(load_seed_image(seed_img_path), output_size, block_size)

    def get_cell(self, coords: tuple[int, int]) -> ConstraintCell:
        """Returns the cell at the given (row, col) coords."""
        if not self.is_coordinate_in_bounds(coords):
            raise IndexError(f"Coords {coords} outside of the {self.grid_size[0]}x{self.grid_size[1]} grid")
        return self._cell_grid[coords]

    def select_lowest_nonzero_entropy_cell(self) -> tuple[int, int]:
        """Returns the coords of the undecided cell with the lowest entropy.

        The cells are scanned row by row. If several cells share the lowest entropy, the one scanned last wins.

        Returns:
            The (row, col) coords of the cell to collapse next.

        Raises:
            NoValidStatesError: If a cell without possible patterns is encountered. The scan stops at the first one.
            UnexpectedNaNError: If the entropy of a cell is NaN.
            AllStatesDecided: If every cell is resolved. This is the regular termination signal, not a failure.
        """
        frequency_hints = self.catalog.frequency_hints
        lowest_entropy = math.inf
        lowest_entropy_coords: tuple[int, int] | None = None

        for row in range(self.grid_size[0]):
            for col in range(self.grid_size[1]):
                coords = (row, col)
                entropy = self._cell_grid[coords].get_entropy(frequency_hints)

                if entropy is None:
                    logger.debug("Contradiction at %s", coords)
                    raise NoValidStatesError(coords)
                if math.isnan(entropy):
                    raise UnexpectedNaNError(coords)
                if 0.0 < entropy <= lowest_entropy:
                    lowest_entropy = entropy
                    lowest_entropy_coords = coords

        if lowest_entropy_coords is None:
            logger.debug("All cells are decided")
            raise AllStatesDecided()
        return lowest_entropy_coords

    def collapse_cell_at(self, coords: tuple[int, int], rng: random.Random | None = None) -> int:
        """Collapses the cell at the given coords to a single pattern, weighted by pattern frequency.

        Returns:
            The index of the chosen pattern.
        """
        pattern_index = self.get_cell(coords).collapse(self.catalog.frequency_hints, rng)
        logger.debug("Collapsed cell %s to pattern %d", coords, pattern_index)
        return pattern_index

    def color_to_index(self, color: ArrayLike) -> int:
        """Returns the palette index of a color.

        Raises:
            LookupError: If the color does not occur in the seed image.
        """
        return self.palette.index_of(color)

    def is_coordinate_in_bounds(self, coords: tuple[int, int]) -> bool:
        """Checks if the (row, col) coords lie within the output grid."""
        row, col = coords
        return 0 <= row < self.grid_size[0] and 0 <= col < self.grid_size[1]

    def eligible_patterns_at(self, position: tuple[int, int]) -> list[int]:
        """Determines which patterns can still be placed with their top-left corner at the given position.

        A pattern placed at the position covers the NxN cells starting there. Each covered cell has to still allow the
        pattern's color at that offset. Offsets that fall outside of the grid are ignored, so patterns may hang off the
        grid edges.

        Args:
            position: The (row, col) coords of the pattern's top-left corner.

        Returns:
            The indices of all eligible patterns in ascending order.
        """
        eligible_pattern_indices = []

        for pattern_index in range(self.catalog.pattern_count):
            color_index_arrangement = self.catalog.get_color_index_arrangement(pattern_index)
            if self._is_pattern_eligible_at(color_index_arrangement, position):
                eligible_pattern_indices.append(pattern_index)

        return eligible_pattern_indices

    def get_color_grid(self) -> NDArray[np.int_]:
        """Converts the grid of cells into a grid of colors.

        Each resolved cell is mapped to the color at the top-left corner (0, 0) of its pattern. Cells that are not
        resolved get constants.UNRESOLVED_COLOR_VALUE in every channel.

        Returns:
            A 3D integer array of shape (height, width, channels).
        """
        color_grid = np.full((*self.grid_size, self.palette.channel_count), UNRESOLVED_COLOR_VALUE, dtype=np.int_)
        for row in range(self.grid_size[0]):
            for col in range(self.grid_size[1]):
                pattern_index = self._cell_grid[row, col].resolved_state_index
                if pattern_index is not None:
                    color_grid[row, col] = self.catalog.get_top_left_color(pattern_index)
        return color_grid

    def _is_pattern_eligible_at(self, color_index_arrangement: NDArray[np.int_], position: tuple[int, int]) -> bool:
        """Checks every in-bounds pixel of a pattern against the color bitset of the cell it covers."""
        for offset_row in range(color_index_arrangement.shape[0]):
            for offset_col in range(color_index_arrangement.shape[1]):
                coords = (position[0] + offset_row, position[1] + offset_col)
                if not self.is_coordinate_in_bounds(coords):
                    continue
                if not self._cell_grid[coords].is_color_possible(int(color_index_arrangement[offset_row, offset_col])):
                    return False
        return True
