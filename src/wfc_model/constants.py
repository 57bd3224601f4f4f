"""Contains global constants and default values used throughout the overlapping model."""


# === MODEL CONSTANTS ===

BLOCK_SIZE_DEFAULT: int = 3
BLOCK_SIZE_MIN_LIMIT: int = 1

# Value written to every channel of the color grid for cells that are not resolved (yet).
UNRESOLVED_COLOR_VALUE: int = -1

# === SEED IMAGE CONSTANTS ===

SEED_IMAGE_MODE: str = "RGB"
