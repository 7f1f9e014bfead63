"""
Command Line Interface
======================
Filters a stack file and writes the result as HDF5 (or an ImageJ TIFF for .tif outputs).

Usage:
    $ sincfilter movie.h5 --half-width 10 --cutoff 0.2
    $ python -m sincfilter movie.npy -o smoothed.h5 --no-smooth-ends --show-filter
"""
from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from sincfilter.config import DEFAULT_CUTOFF, DEFAULT_HALF_WIDTH, FilterConfig
from sincfilter.controller.driver import StackFilter
from sincfilter.errors import InvalidInputError
from sincfilter.logging_config import setup_logging
from sincfilter.model.io import StackIO

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sincfilter",
        description="Windowed-sinc low-pass filter along the frame axis of an image stack.",
    )
    parser.add_argument("input", help="Input stack (.h5, .hdf5, .tif, .tiff, .npy or .npz)")
    parser.add_argument(
        "-o", "--output",
        help="Output file, HDF5 or .tif for an ImageJ TIFF (default: <input dir>/<title>_WS<khw>_<fc>Hz.h5)",
    )
    parser.add_argument(
        "--half-width", type=int, default=DEFAULT_HALF_WIDTH,
        help=f"Kernel half-width in slices (default: {DEFAULT_HALF_WIDTH})",
    )
    parser.add_argument(
        "--cutoff", type=float, default=DEFAULT_CUTOFF,
        help=f"Low-pass cutoff as a fraction of Nyquist, 0-1 (default: {DEFAULT_CUTOFF})",
    )
    parser.add_argument(
        "--no-smooth-ends", dest="smooth_ends", action="store_false",
        help="Copy the first and last half-width slices instead of filtering them with shorter kernels",
    )
    parser.add_argument(
        "--show-filter", action="store_true",
        help="Plot the full-width kernel before filtering",
    )
    parser.add_argument(
        "--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def default_output_path(input_path: str, title: str) -> str:
    """Place the output next to the input, named after the filtered stack."""
    stem = os.path.splitext(title)[0]
    return os.path.join(os.path.dirname(os.path.abspath(input_path)), f"{stem}.h5")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    config = FilterConfig(
        half_width=args.half_width,
        cutoff=args.cutoff,
        smooth_ends=args.smooth_ends,
        show_filter=args.show_filter,
    )

    kernel_callback = None
    if config.show_filter:
        from sincfilter.view.kernel_plot import plot_kernel
        kernel_callback = plot_kernel

    def progress_callback(position: int, n_slices: int) -> None:
        logger.info(f"Processing {position}/{n_slices}")

    try:
        stack_filter = StackFilter(config)
    except InvalidInputError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    try:
        stack = StackIO.load_stack(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read stack: {e}")
        return EXIT_IO_ERROR

    try:
        result = stack_filter.apply(
            stack, callback=progress_callback, kernel_callback=kernel_callback,
        )
    except InvalidInputError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    output_path = args.output or default_output_path(args.input, result.title)
    try:
        StackIO.save_stack(result, output_path, config=config)
    except OSError as e:
        logger.error(f"Could not write stack: {e}")
        return EXIT_IO_ERROR
    return EXIT_OK
