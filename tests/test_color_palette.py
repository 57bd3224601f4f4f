"""Tests for wfc_model.color_palette module."""

import numpy as np
import pytest

from wfc_model.color_palette import as_color_array, ColorPalette, to_color


class TestAsColorArray:
    """Tests for as_color_array."""

    def test_2d_gets_single_channel(self, stripes_seed):
        """Test a 2D tile index array is treated as a single channel image."""
        color_array = as_color_array(stripes_seed)

        assert color_array.shape == (4, 4, 1)
        assert color_array[0, 1, 0] == 2

    def test_3d_is_kept(self, two_color_seed):
        """Test a 3D RGB array keeps its shape."""
        assert as_color_array(two_color_seed).shape == (1, 2, 3)

    def test_invalid_dimensions(self):
        """Test 1D and 4D arrays are rejected."""
        with pytest.raises(ValueError):
            as_color_array(np.zeros(4))
        with pytest.raises(ValueError):
            as_color_array(np.zeros((1, 1, 1, 1)))


class TestToColor:
    """Tests for to_color."""

    def test_scalar(self):
        assert to_color(5) == (5,)

    def test_sequence(self):
        assert to_color(np.array([1, 2, 3])) == (1, 2, 3)
        assert to_color([4, 5, 6]) == (4, 5, 6)


class TestColorPalette:
    """Tests for ColorPalette."""

    def test_duplicate_free_and_sorted(self):
        """Test the palette contains every color exactly once, in ascending order."""
        seed = np.array(
            [
                [[9, 0, 0], [1, 2, 3], [9, 0, 0]],
                [[1, 2, 3], [0, 0, 255], [1, 2, 2]],
            ]
        )
        palette = ColorPalette.from_seed_array(seed)

        assert list(palette) == [(0, 0, 255), (1, 2, 2), (1, 2, 3), (9, 0, 0)]
        assert len(palette) == len(set(palette))
        assert list(palette) == sorted(palette)
        assert palette.channel_count == 3

    def test_uniform_seed(self, uniform_seed):
        """Test a single colored seed image yields a single palette entry."""
        palette = ColorPalette.from_seed_array(uniform_seed)

        assert len(palette) == 1
        assert palette[0] == (128, 128, 128)

    def test_index_of(self, stripes_seed):
        """Test colors are found at their sorted position."""
        palette = ColorPalette.from_seed_array(stripes_seed)

        assert palette.index_of(1) == 0
        assert palette.index_of(2) == 1
        assert palette.index_of((2,)) == 1

    def test_index_of_rgb(self, two_color_seed):
        palette = ColorPalette.from_seed_array(two_color_seed)

        assert palette.index_of([0, 0, 0]) == 0
        assert palette.index_of(np.array([255, 255, 255])) == 1

    def test_index_of_missing_color(self, two_color_seed):
        """Test looking up a color not in the palette fails fast."""
        palette = ColorPalette.from_seed_array(two_color_seed)

        with pytest.raises(LookupError):
            palette.index_of((1, 2, 3))
        with pytest.raises(LookupError):
            palette.index_of((255, 255, 256))
