"""
Filter Configuration
====================
This module holds the default parameters and the FilterConfig value that is
passed from the caller (CLI, worker, script) to the filter driver.

Why is this file needed?
------------------------
1. Defaults: The same defaults are shared by the CLI, the worker and the API.
2. Validation: Parameters are checked once, before a run starts, so the
   numeric core can assume sane values.

Exports:
    FilterConfig: Frozen dataclass with the filter parameters.
"""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict

from sincfilter.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Global Constants
DEFAULT_HALF_WIDTH: int = 20
DEFAULT_CUTOFF: float = 0.25
DEFAULT_SMOOTH_ENDS: bool = True
DEFAULT_SHOW_FILTER: bool = False

# The kernel is always designed at half of the requested cutoff
KERNEL_CUTOFF_SCALE: float = 0.5


@dataclass(frozen=True)
class FilterConfig:
    """
    Parameters of one filter run.

    Attributes:
        half_width: Number of taps on each side of the kernel center.
        cutoff: Low-pass cutoff as a fraction of Nyquist, in (0, 1).
        smooth_ends: Filter the first and last `half_width` slices with
            progressively shorter kernels instead of copying them.
        show_filter: Emit the full-width kernel as a diagnostic curve.
    """
    half_width: int = DEFAULT_HALF_WIDTH
    cutoff: float = DEFAULT_CUTOFF
    smooth_ends: bool = DEFAULT_SMOOTH_ENDS
    show_filter: bool = DEFAULT_SHOW_FILTER

    @property
    def kernel_length(self) -> int:
        return 2 * self.half_width + 1

    @property
    def kernel_cutoff(self) -> float:
        """Cutoff handed to the kernel designer."""
        return KERNEL_CUTOFF_SCALE * self.cutoff

    def validate(self) -> FilterConfig:
        """
        Check the parameters.

        Raises:
            InvalidInputError: If the half-width is not a non-negative integer
                or the cutoff is outside (0, 1).

        Returns:
            The same config, to allow chaining.
        """
        if isinstance(self.half_width, bool) or not isinstance(self.half_width, numbers.Integral):
            raise InvalidInputError(f"Kernel half-width must be an integer, got {self.half_width!r}.")
        if self.half_width < 0:
            raise InvalidInputError(f"Kernel half-width must be non-negative, got {self.half_width}.")
        if not 0.0 < self.cutoff < 1.0:
            raise InvalidInputError(f"Cutoff frequency must be in (0, 1), got {self.cutoff}.")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown filter parameters: {sorted(unknown)}")
        values = {key: val for key, val in data.items() if key in known}
        # HDF5 attributes come back as numpy scalars
        for key, val in values.items():
            if hasattr(val, 'item'):
                values[key] = val.item()
        return cls(**values)
