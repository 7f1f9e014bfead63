"""
Exceptions raised by the filter.

InvalidInputError is the only failure of the numeric pipeline itself: it is
raised before any frame is processed, so a caller never sees partial output.
"""


class InvalidInputError(ValueError):
    """Unsupported stack or filter parameters."""


class FilterCancelledError(Exception):
    """Raised when an external abort request stops a running filter."""

    def __init__(self, position: int, n_slices: int) -> None:
        super().__init__(f"Filter cancelled before slice {position}/{n_slices}.")
        self.position = position
        self.n_slices = n_slices
