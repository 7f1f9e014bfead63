"""
The CONTROLLER layer drives the numeric core over a stack. Only `workers`
depends on PySide6; import it explicitly when a Qt event loop is available.
"""
from sincfilter.controller.driver import (
    Region,
    StackFilter,
    effective_half_width,
    filter_stack,
    output_title,
    region_of,
    slice_label,
    validate_stack,
)

__all__ = [
    "Region",
    "StackFilter",
    "effective_half_width",
    "filter_stack",
    "output_title",
    "region_of",
    "slice_label",
    "validate_stack",
]
