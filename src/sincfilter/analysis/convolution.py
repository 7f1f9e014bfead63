from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from sincfilter.model.stack import ImageStack


def convolve_frames(
    stack: ImageStack,
    center: int,
    half_width: int,
    kernel: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Weighted sum of the 2*half_width+1 slices around `center`, pixel by pixel.

    Tap `i` reads slice `center - i + half_width`, so tap 0 is the slice
    `half_width` positions ahead of the center and the last tap the one
    `half_width` positions behind it.

    Args:
        stack: Input stack, indexed 1..N.
        center: 1-based index of the output slice.
        half_width: Effective half-width for this slice.
        kernel: Coefficients of length 2*half_width+1.

    Raises:
        ValueError: If the kernel length does not match the half-width.
        IndexError: If a referenced slice lies outside 1..N.

    Returns:
        New float64 frame with the shape of the input frames.
    """
    kernel = np.asarray(kernel, dtype=np.float64)
    n_taps = 2 * half_width + 1
    if half_width < 0 or kernel.shape != (n_taps,):
        raise ValueError(
            f"Kernel of shape {kernel.shape} does not match half-width {half_width} "
            f"(expected {n_taps} taps)."
        )

    first, last = center - half_width, center + half_width
    if first < 1 or last > stack.n_slices:
        raise IndexError(
            f"Slices {first}..{last} around {center} are outside the stack (1..{stack.n_slices})."
        )

    accumulator = np.zeros((stack.height, stack.width), dtype=np.float64)
    for i in range(n_taps):
        accumulator += stack.get_frame(center - i + half_width) * kernel[i]
    return accumulator
