"""Defines the errors reported by the overlapping model while selecting cells."""

from __future__ import annotations

from wfc_model.enums import ModelErrorKind


class ModelError(Exception):
    """Base class for all outcomes reported through the model's error channel.

    Attributes:
        kind: The kind of outcome, allowing a driver to dispatch on a single enumeration.
        coords: The (row, col) coords of the cell that caused the error, or None if no single cell is responsible.
    """

    kind: ModelErrorKind
    coords: tuple[int, int] | None

    def __init__(self, kind: ModelErrorKind, coords: tuple[int, int] | None = None) -> None:
        """Stores the kind and coords and builds the error message from them."""
        self.kind = kind
        self.coords = coords
        if coords is None:
            super().__init__(kind.value)
        else:
            super().__init__(f"{kind.value} at {coords}")


class NoValidStatesError(ModelError):
    """Raised when a cell has no possible pattern left (contradiction).

    The constraint system is unsatisfiable at this cell under the current choices. The driver has to abort or backtrack.
    """

    def __init__(self, coords: tuple[int, int]) -> None:
        """Creates the error for the contradicting cell at the given coords."""
        super().__init__(ModelErrorKind.NO_VALID_STATES, coords)


class UnexpectedNaNError(ModelError):
    """Raised when the entropy of a cell is NaN. Indicates a defect or corrupted catalog data."""

    def __init__(self, coords: tuple[int, int]) -> None:
        """Creates the error for the cell at the given coords whose entropy is NaN."""
        super().__init__(ModelErrorKind.UNEXPECTED_NAN, coords)


class AllStatesDecided(ModelError):
    """Raised when no cell with positive entropy is left.

    This is the normal termination signal for a driver: every cell of the grid is resolved.
    """

    def __init__(self) -> None:
        """Creates the termination signal, which is not tied to a single cell."""
        super().__init__(ModelErrorKind.ALL_STATES_DECIDED)
