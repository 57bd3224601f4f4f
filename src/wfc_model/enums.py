"""Contains all enumeration classes used throughout the overlapping model."""

from __future__ import annotations

from enum import Enum


class CellState(Enum):
    """Defines the states a constraint cell can be in, derived from its remaining possible patterns."""

    CONTRADICTION = "Contradiction"
    """No pattern is possible anymore, the constraints cannot be satisfied at this cell."""
    RESOLVED = "Resolved"
    """Exactly one pattern is possible, the cell has been decided."""
    UNDECIDED = "Undecided"
    """More than one pattern is still possible."""


class ModelErrorKind(Enum):
    """Defines the kinds of outcomes the model reports through its error channel."""

    NO_VALID_STATES = "No Valid States"
    """A cell has no possible pattern left (contradiction)."""
    UNEXPECTED_NAN = "Unexpected NaN"
    """The entropy of a cell could not be computed as a number."""
    ALL_STATES_DECIDED = "All States Decided"
    """Every cell is resolved. Signals successful termination, not a fault."""
