"""Loads seed images from disk into color arrays."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from wfc_model.constants import SEED_IMAGE_MODE

if TYPE_CHECKING:
    from os import PathLike

    from numpy.typing import NDArray


logger = logging.getLogger(__name__)


def load_seed_image(seed_img_path: str | PathLike[str]) -> NDArray[np.int_]:
    """Opens an image file and returns its pixels as a color array.

    The image is converted to RGB first, so palette-based and grayscale images yield the same array layout as true color
    images. An alpha channel is dropped.

    Args:
        seed_img_path: The file path to the seed image.

    Returns:
        A 3D integer array of shape (rows, cols, 3) containing the RGB components of every pixel.
    """
    with Image.open(seed_img_path) as img:
        seed_img = img.convert(SEED_IMAGE_MODE)

    seed_array = np.asarray(seed_img, dtype=np.int_)
    logger.debug("Loaded %dx%d seed image from %s", seed_array.shape[1], seed_array.shape[0], seed_img_path)
    return seed_array
