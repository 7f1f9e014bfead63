"""
Numeric Core
============
Kernel design and frame-axis convolution.

Note: This package should be pure Python/NumPy and should NOT import PySide6
or matplotlib.
"""
from sincfilter.analysis.kernel import blackman_window, design_low_pass, kernel_offsets, sinc_taps
from sincfilter.analysis.convolution import convolve_frames

__all__ = [
    "blackman_window",
    "convolve_frames",
    "design_low_pass",
    "kernel_offsets",
    "sinc_taps",
]
