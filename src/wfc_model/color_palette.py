"""Manages the sorted set of colors observed in a seed image."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterator, Sequence
from typing import overload, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


Color = tuple[int, ...]


def as_color_array(seed_array: ArrayLike) -> NDArray[np.int_]:
    """Converts a seed image into a 3D (rows, cols, channels) array of integer color components.

    A 2D array of scalar values (e.g. tile indices) is treated as an image with a single channel.

    Args:
        seed_array: A 2D array of scalar colors or a 3D array of multi-channel colors.

    Returns:
        A 3D integer array of shape (rows, cols, channels).

    Raises:
        ValueError: If the seed image is neither 2D nor 3D.
    """
    color_array = np.asarray(seed_array, dtype=np.int_)
    if color_array.ndim == 2:
        color_array = color_array[:, :, np.newaxis]
    elif color_array.ndim != 3:
        raise ValueError(f"Seed image must be a 2D or 3D array, got {color_array.ndim} dimensions")
    return color_array


def to_color(value: ArrayLike) -> Color:
    """Converts a scalar or a sequence of color components into a hashable, totally ordered color tuple."""
    return tuple(int(component) for component in np.atleast_1d(np.asarray(value)).ravel())


class ColorPalette(Sequence[Color]):
    """Deduplicated, sorted collection of all colors appearing in a seed image.

    Colors are tuples of integer components and are ordered lexicographically. The position of a color in the palette
    is its stable index, which is used to address the color bitsets of the constraint cells.

    Attributes:
        channel_count: The number of components per color.
    """

    channel_count: int

    # The sorted list of unique colors, where the index corresponds to the palette index.
    _colors: list[Color]

    def __init__(self, colors: list[Color], channel_count: int) -> None:
        """Initializes the palette from an already sorted, duplicate-free list of colors."""
        self._colors = colors
        self.channel_count = channel_count

    @classmethod
    def from_seed_array(cls, seed_array: ArrayLike) -> ColorPalette:
        """Collects every color of the seed image, removes duplicates and sorts them.

        Args:
            seed_array: A 2D array of scalar colors or a 3D array of multi-channel colors.

        Returns:
            The palette of the seed image.
        """
        color_array = as_color_array(seed_array)
        channel_count = color_array.shape[2]
        pixels = color_array.reshape(-1, channel_count)
        # Rows come back deduplicated and sorted lexicographically, matching the tuple order of the colors.
        colors = [to_color(pixel) for pixel in np.unique(pixels, axis=0)]
        return cls(colors, channel_count)

    def index_of(self, color: ArrayLike) -> int:
        """Returns the palette index of a color using binary search.

        Args:
            color: The color to look up, either a scalar (single channel) or a sequence of components.

        Returns:
            The index of the color in the palette.

        Raises:
            LookupError: If the color is not part of the palette. Since patterns are derived from the same seed image as
                the palette, this indicates corrupted input.
        """
        key = to_color(color)
        index = bisect_left(self._colors, key)
        if index == len(self._colors) or self._colors[index] != key:
            raise LookupError(f"Color {key} not found in palette!")
        return index

    @overload
    def __getitem__(self, index: int) -> Color: ...

    @overload
    def __getitem__(self, index: slice) -> list[Color]: ...

    def __getitem__(self, index: int | slice) -> Color | list[Color]:
        """Returns the color (or colors) at the given palette index (or slice)."""
        return self._colors[index]

    def __len__(self) -> int:
        """Returns the number of colors in the palette."""
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        """Iterates over the colors in ascending order."""
        return iter(self._colors)

    def __repr__(self) -> str:
        """Returns a representation listing all colors."""
        return f"ColorPalette({self._colors!r})"
