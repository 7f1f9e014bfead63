"""
Windowed-sinc low-pass filtering of image stacks along the frame axis.
"""
from sincfilter.analysis.convolution import convolve_frames
from sincfilter.analysis.kernel import design_low_pass
from sincfilter.config import FilterConfig
from sincfilter.controller.driver import StackFilter, effective_half_width, filter_stack
from sincfilter.errors import FilterCancelledError, InvalidInputError
from sincfilter.model.stack import ImageStack

__all__ = [
    "FilterCancelledError",
    "FilterConfig",
    "ImageStack",
    "InvalidInputError",
    "StackFilter",
    "convolve_frames",
    "design_low_pass",
    "effective_half_width",
    "filter_stack",
]
