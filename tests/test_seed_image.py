"""Tests for wfc_model.seed_image module."""

import numpy as np
from PIL import Image

from wfc_model.seed_image import load_seed_image


class TestLoadSeedImage:
    """Tests for load_seed_image."""

    def test_rgb_image(self, tmp_path):
        """Test pixels are returned as a (rows, cols, 3) array."""
        img = Image.new("RGB", (3, 2), (0, 0, 0))
        img.putpixel((2, 1), (10, 20, 30))
        img_path = tmp_path / "seed.png"
        img.save(img_path)

        seed_array = load_seed_image(img_path)

        assert seed_array.shape == (2, 3, 3)
        assert seed_array[1, 2].tolist() == [10, 20, 30]
        assert seed_array[0, 0].tolist() == [0, 0, 0]
        assert np.issubdtype(seed_array.dtype, np.integer)

    def test_alpha_channel_dropped(self, tmp_path):
        img = Image.new("RGBA", (2, 2), (1, 2, 3, 255))
        img_path = tmp_path / "seed.png"
        img.save(img_path)

        assert load_seed_image(str(img_path)).shape == (2, 2, 3)

    def test_grayscale_converted(self, tmp_path):
        """Test grayscale images are expanded to RGB."""
        img = Image.new("L", (2, 1), 77)
        img_path = tmp_path / "seed.png"
        img.save(img_path)

        assert load_seed_image(img_path)[0, 0].tolist() == [77, 77, 77]
