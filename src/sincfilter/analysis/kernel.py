"""
Windowed-sinc kernel design.

Low-pass FIR kernel as described in "The Scientist and Engineer's Guide to
Digital Signal Processing" (S. W. Smith): an ideal sinc response truncated to
2*half_width+1 taps, tapered with a Blackman window and normalized to unit DC
gain.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _check_half_width(half_width: int) -> None:
    if half_width < 0:
        raise ValueError(f"Kernel half-width must be non-negative, got {half_width}.")


def kernel_offsets(half_width: int) -> npt.NDArray[np.float64]:
    """
    Tap offsets -half_width..+half_width, used as the x-axis of the kernel curve.
    """
    _check_half_width(half_width)
    return np.arange(-half_width, half_width + 1, dtype=np.float64)


def sinc_taps(half_width: int, cutoff: float) -> npt.NDArray[np.float64]:
    """
    Truncated sinc response before windowing and normalization.

    Args:
        half_width: Number of taps on each side of the center.
        cutoff: Cutoff frequency as a fraction of the sampling rate.

    Returns:
        Array of length 2*half_width+1. The center tap carries the limit value
        2*pi*cutoff; every other offset is a non-zero integer.
    """
    _check_half_width(half_width)
    offsets = np.arange(2 * half_width + 1, dtype=np.float64) - half_width
    taps = np.empty_like(offsets)

    off_center = offsets != 0.0
    taps[off_center] = np.sin(2.0 * np.pi * cutoff * offsets[off_center]) / offsets[off_center]
    taps[half_width] = 2.0 * np.pi * cutoff
    return taps


def blackman_window(half_width: int) -> npt.NDArray[np.float64]:
    """
    Blackman window of length 2*half_width+1 (both end points are zero).
    """
    _check_half_width(half_width)
    if half_width == 0:
        return np.ones(1, dtype=np.float64)
    i = np.arange(2 * half_width + 1, dtype=np.float64)
    return 0.42 - 0.5 * np.cos(np.pi * i / half_width) + 0.08 * np.cos(2.0 * np.pi * i / half_width)


def design_low_pass(half_width: int, cutoff: float) -> npt.NDArray[np.float64]:
    """
    Design a symmetric low-pass kernel normalized to unit DC gain.

    Args:
        half_width: Number of taps on each side of the center. 0 yields the
            single-tap identity kernel.
        cutoff: Cutoff frequency as a fraction of the sampling rate, in (0, 1).

    Raises:
        ValueError: If `half_width` is negative or `cutoff` is outside (0, 1).

    Returns:
        Kernel of length 2*half_width+1 summing to 1.0. If the windowed taps
        sum to exactly zero, every tap is zero instead.
    """
    _check_half_width(half_width)
    if not 0.0 < cutoff < 1.0:
        raise ValueError(f"Kernel cutoff must be in (0, 1), got {cutoff}.")

    if half_width == 0:
        return np.ones(1, dtype=np.float64)

    taps = sinc_taps(half_width, cutoff) * blackman_window(half_width)
    total = taps.sum()
    if total == 0.0:
        logger.warning(
            f"Kernel taps sum to zero (half-width={half_width}, cutoff={cutoff}); "
            f"using an all-zero kernel."
        )
        return np.zeros_like(taps)

    return taps / total
