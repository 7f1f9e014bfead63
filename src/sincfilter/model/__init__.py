"""
The MODEL layer contains the stack data structure and its storage.
It has NO knowledge of the GUI (Qt) or of plotting.
"""
from sincfilter.model.stack import FLOAT_DTYPE, ImageStack

__all__ = ["FLOAT_DTYPE", "ImageStack"]
