"""
Filter Driver
=============
Runs the windowed-sinc low-pass filter over a whole stack.

The stack splits into three regions along the frame axis:

    head    slices 1..khw          kernel grows from 1 tap to full width
    middle  slices khw+1..N-khw    full-width kernel, designed once
    tail    slices N-khw+1..N      kernel shrinks back to 1 tap

With end smoothing disabled the head and tail slices are copied unchanged.

Note: This module should be pure Python/NumPy and should NOT import PySide6.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

import numpy as np

from sincfilter.analysis.convolution import convolve_frames
from sincfilter.analysis.kernel import design_low_pass, kernel_offsets
from sincfilter.config import FilterConfig
from sincfilter.errors import FilterCancelledError, InvalidInputError
from sincfilter.model.stack import ImageStack

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
AbortCallback = Callable[[], bool]
KernelCallback = Callable[["npt.NDArray[np.float64]", "npt.NDArray[np.float64]"], None]


class Region(Enum):
    HEAD = "head"
    MIDDLE = "middle"
    TAIL = "tail"


def region_of(position: int, n_slices: int, half_width: int) -> Region:
    """Region of the 1-based slice `position`."""
    if not 1 <= position <= n_slices:
        raise IndexError(f"Slice {position} out of range 1..{n_slices}.")
    if position <= half_width:
        return Region.HEAD
    if position > n_slices - half_width:
        return Region.TAIL
    return Region.MIDDLE


def effective_half_width(position: int, n_slices: int, half_width: int, smooth_ends: bool) -> int:
    """
    Half-width actually used for the output slice `position`.

    Head slice j uses j-1 and tail slice j uses N-j when smoothing, so the
    kernel never reaches past either end of the stack. Unsmoothed edge slices
    are passed through, which is half-width 0.
    """
    region = region_of(position, n_slices, half_width)
    if region is Region.MIDDLE:
        return half_width
    if not smooth_ends:
        return 0
    if region is Region.HEAD:
        return position - 1
    return n_slices - position


def slice_label(region: Region, position: int, smooth_ends: bool) -> str:
    # An unsmoothed tail is labelled "foot"
    if region is Region.TAIL and not smooth_ends:
        return f"foot{position}"
    return f"{region.value}{position}"


def output_title(stack: ImageStack, config: FilterConfig) -> str:
    """Name of the filtered stack, with the filter parameters embedded."""
    return f"{stack.short_title}_WS{config.half_width}_{config.cutoff}Hz.tif"


def validate_stack(stack: ImageStack, config: FilterConfig) -> None:
    """
    Reject stacks the filter cannot process.

    Raises:
        InvalidInputError: If the stack has a single slice, is a color
            composite, or is not longer than the kernel.
    """
    if stack.n_slices <= 1 or stack.is_color:
        raise InvalidInputError("This filter requires a non-RGB stack with more than one slice.")
    if config.kernel_length >= stack.n_slices:
        raise InvalidInputError(
            f"Kernel half-width must be less than half the stack size "
            f"(2*{config.half_width}+1 = {config.kernel_length} >= {stack.n_slices} slices)."
        )


class StackFilter:
    """
    Windowed-sinc low-pass filter along the frame axis of a stack.
    """

    def __init__(self, config: FilterConfig) -> None:
        """
        Args:
            config: Filter parameters, validated here.

        Raises:
            InvalidInputError: If the parameters are invalid.
        """
        self.config = config.validate()
        self._kernels: Dict[int, npt.NDArray[np.float64]] = {}

    def kernel_for(self, half_width: int) -> npt.NDArray[np.float64]:
        """Kernel for the given effective half-width, designed on first use."""
        kernel = self._kernels.get(half_width)
        if kernel is None:
            kernel = design_low_pass(half_width, self.config.kernel_cutoff)
            kernel.setflags(write=False)
            self._kernels[half_width] = kernel
        return kernel

    @property
    def kernel(self) -> npt.NDArray[np.float64]:
        """Full-width kernel shared by every middle slice."""
        return self.kernel_for(self.config.half_width)

    def apply(
        self,
        stack: ImageStack,
        callback: Optional[ProgressCallback] = None,
        abort: Optional[AbortCallback] = None,
        kernel_callback: Optional[KernelCallback] = None,
    ) -> ImageStack:
        """
        Filter every slice of `stack`.

        Args:
            stack: Input stack, left untouched.
            callback: Called as callback(position, n_slices) after each slice.
            abort: Polled before each slice; returning True cancels the run.
            kernel_callback: Receives (offsets, kernel) of the full-width
                kernel before processing, if `config.show_filter` is set.

        Raises:
            InvalidInputError: If the stack cannot be filtered.
            FilterCancelledError: If `abort` requested cancellation.

        Returns:
            New stack of float64 frames with the same length and frame size.
        """
        validate_stack(stack, self.config)
        config = self.config
        n_slices = stack.n_slices

        logger.info(
            f"Filtering '{stack.title}': {n_slices} slices, half-width={config.half_width}, "
            f"cutoff={config.cutoff}, smooth_ends={config.smooth_ends}"
        )

        if config.show_filter and kernel_callback is not None:
            kernel_callback(kernel_offsets(config.half_width), self.kernel.copy())

        output = ImageStack.empty(stack.width, stack.height, title=output_title(stack, config))

        for position in range(1, n_slices + 1):
            if abort is not None and abort():
                logger.warning(f"Filter cancelled at slice {position}/{n_slices}.")
                raise FilterCancelledError(position, n_slices)

            region = region_of(position, n_slices, config.half_width)
            label = slice_label(region, position, config.smooth_ends)

            if region is not Region.MIDDLE and not config.smooth_ends:
                frame = stack.get_frame(position)
                logger.debug(f"{label}: passed through")
            else:
                hw = effective_half_width(position, n_slices, config.half_width, config.smooth_ends)
                frame = convolve_frames(stack, position, hw, self.kernel_for(hw))
                logger.debug(f"{label}: half-width {hw}")

            output.add_slice(label, frame)

            if callback is not None:
                callback(position, n_slices)

        logger.info(f"Filtering finished: '{output.title}'")
        return output


def filter_stack(
    stack: ImageStack,
    config: Optional[FilterConfig] = None,
    callback: Optional[ProgressCallback] = None,
) -> ImageStack:
    """Filter `stack` with `config` (defaults if omitted)."""
    return StackFilter(config or FilterConfig()).apply(stack, callback=callback)
