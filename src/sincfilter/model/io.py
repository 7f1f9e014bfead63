"""
Input/Output Manager (HDF5 / TIFF / NumPy)
Handles saving and loading image stacks.
"""
from __future__ import annotations

import logging
import os
from importlib.metadata import version, PackageNotFoundError
from typing import List, Optional

import h5py
import numpy as np
import tifffile

from sincfilter.config import FilterConfig
from sincfilter.model.stack import ImageStack

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("sincfilter")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

HDF5_EXTENSIONS = (".h5", ".hdf5")
TIFF_EXTENSIONS = (".tif", ".tiff")
NUMPY_EXTENSIONS = (".npy", ".npz")


class StackIO:

    @staticmethod
    def save_stack(stack: ImageStack, filepath: str, config: Optional[FilterConfig] = None) -> None:
        """
        Save a stack to an HDF5 file, or to an ImageJ TIFF for .tif/.tiff paths.

        Args:
            stack: Stack to save.
            filepath: Target path, overwritten if it exists.
            config: Filter parameters stored as provenance, if the stack is a
                filter output. TIFF files do not carry them.
        """
        logger.info(f"Saving stack '{stack.title}' ({stack.n_slices} slices) to: {filepath}")
        try:
            if os.path.splitext(filepath)[1].lower() in TIFF_EXTENSIONS:
                StackIO._save_tiff(stack, filepath)
            else:
                StackIO._save_hdf5(stack, filepath, config)
            logger.info(f"Stack saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save stack: {e}")
            raise

    @staticmethod
    def load_stack(filepath: str) -> ImageStack:
        """
        Load a stack from an HDF5 (.h5, .hdf5), TIFF (.tif, .tiff) or NumPy
        (.npy, .npz) file.

        Raises:
            ValueError: If the file type is not supported or the file is not
                valid HDF5.
        """
        logger.info(f"Loading stack from: {filepath}")
        ext = os.path.splitext(filepath)[1].lower()
        title = os.path.basename(filepath)

        if ext in NUMPY_EXTENSIONS:
            return StackIO._load_numpy(filepath, title)

        if ext in TIFF_EXTENSIONS:
            return StackIO._load_tiff(filepath, title)

        if ext not in HDF5_EXTENSIONS:
            msg = f"Unsupported stack file type '{ext}'."
            logger.error(msg)
            raise ValueError(msg)

        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        with h5py.File(filepath, "r") as f:
            if "frames" not in f:
                msg = f"File '{filepath}' has no 'frames' dataset."
                logger.error(msg)
                raise ValueError(msg)
            frames = f["frames"][()]

            labels = None
            if "labels" in f:
                labels = [
                    val.decode("utf-8") if isinstance(val, bytes) else str(val)
                    for val in f["labels"][()]
                ]

            if "title" in f.attrs:
                title = f.attrs["title"]
                if isinstance(title, bytes):
                    title = title.decode("utf-8")

        stack = ImageStack(frames, title=str(title), labels=labels)
        logger.debug(f"Loaded {stack!r}")
        return stack

    @staticmethod
    def load_filter_config(filepath: str) -> Optional[FilterConfig]:
        """Read the filter parameters stored with a filter output, if any."""
        with h5py.File(filepath, "r") as f:
            if "filter" not in f:
                return None
            return FilterConfig.from_dict(dict(f["filter"].attrs))

    @staticmethod
    def _save_hdf5(stack: ImageStack, filepath: str, config: Optional[FilterConfig]) -> None:
        with h5py.File(filepath, "w") as f:
            f.attrs["version"] = APP_VERSION
            f.attrs["title"] = stack.title

            f.create_dataset("frames", data=stack.to_array(), compression="gzip")
            f.create_dataset("labels", data=np.array(stack.labels, dtype=object),
                             dtype=h5py.string_dtype(encoding="utf-8"))

            if config is not None:
                grp_filter = f.create_group("filter")
                for key, val in config.to_dict().items():
                    grp_filter.attrs[key] = val

    @staticmethod
    def _save_tiff(stack: ImageStack, filepath: str) -> None:
        data = stack.to_array()
        if stack.is_color:
            tifffile.imwrite(filepath, data, photometric="rgb")
            return

        # ImageJ stores floating point stacks as 32-bit
        if np.issubdtype(data.dtype, np.floating):
            data = data.astype(np.float32)
        metadata = {"axes": "ZYX"}
        if any(stack.labels):
            metadata["Labels"] = stack.labels
        tifffile.imwrite(filepath, data, imagej=True, metadata=metadata)

    @staticmethod
    def _load_tiff(filepath: str, title: str) -> ImageStack:
        with tifffile.TiffFile(filepath) as tif:
            frames = tif.asarray()
            is_rgb = tif.pages[0].photometric == tifffile.PHOTOMETRIC.RGB
            imagej_metadata = tif.imagej_metadata or {}

        # A single page reads as (height, width), or (height, width, 3) for RGB
        single_page = frames.ndim == 2 or (is_rgb and frames.ndim == 3)
        n_slices = 1 if single_page else frames.shape[0]

        labels: Optional[List[str]] = None
        stored_labels = imagej_metadata.get("Labels")
        if stored_labels is not None and len(stored_labels) == n_slices:
            labels = [str(label) for label in stored_labels]

        stack = ImageStack(frames, title=title, labels=labels, is_color=is_rgb)
        logger.debug(f"Loaded {stack!r}")
        return stack

    @staticmethod
    def _load_numpy(filepath: str, title: str) -> ImageStack:
        if filepath.lower().endswith(".npz"):
            with np.load(filepath) as archive:
                if not archive.files:
                    raise ValueError(f"Archive '{filepath}' contains no arrays.")
                frames = archive[archive.files[0]]
        else:
            frames = np.load(filepath)
        stack = ImageStack(frames, title=title)
        logger.debug(f"Loaded {stack!r}")
        return stack
