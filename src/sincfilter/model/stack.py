"""
Image Stack (Data Model)
========================
An ordered sequence of equally-sized 2-D frames, addressed 1..N like the
slices of an ImageJ stack.

Classes:
    ImageStack: Frame container with labels and a title.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

import numpy as np

from sincfilter.errors import InvalidInputError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Working numeric type of every frame read from a stack
FLOAT_DTYPE = np.float64


class ImageStack:
    """
    Stack of frames stored as one array of shape (n_slices, height, width).

    A 2-D array is taken as a single frame. A 4-D array of shape
    (n_slices, height, width, channels) is a color composite: it can be
    stored and inspected but not filtered.

    A 3-D array is always read as grayscale slices, so a single RGB image of
    shape (height, width, 3) must be passed with `is_color=True`; it then
    becomes a one-slice color stack.

    The frames are copied on construction and in `add_slice`, so later
    changes to the caller's arrays never reach the stack.
    """

    def __init__(
        self,
        frames: npt.ArrayLike,
        title: str = "stack",
        labels: Optional[Sequence[str]] = None,
        is_color: bool = False,
    ) -> None:
        data = np.array(frames, copy=True)
        if is_color and data.ndim == 3:
            data = data[np.newaxis, ...]
        if is_color and data.ndim != 4:
            raise ValueError(f"Expected a 3-D or 4-D color array, got shape {data.shape}.")
        if data.ndim == 2:
            data = data[np.newaxis, ...]
        if data.ndim not in (3, 4):
            raise ValueError(f"Expected a 2-D, 3-D or 4-D array, got shape {data.shape}.")

        self._frames: List[npt.NDArray] = list(data)
        self._width: int = int(data.shape[2])
        self._height: int = int(data.shape[1])
        self._is_color: bool = data.ndim == 4
        self.title = title

        if labels is None:
            self._labels = [""] * len(self._frames)
        else:
            if len(labels) != len(self._frames):
                raise ValueError(f"Got {len(labels)} labels for {len(self._frames)} slices.")
            self._labels = [str(label) for label in labels]

    @classmethod
    def empty(cls, width: int, height: int, title: str = "stack") -> ImageStack:
        """Create a stack without slices; fill it with `add_slice`."""
        stack = cls(np.zeros((0, height, width), dtype=FLOAT_DTYPE), title=title)
        return stack

    # --- Geometry ---
    @property
    def n_slices(self) -> int:
        return len(self._frames)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_color(self) -> bool:
        return self._is_color

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    @property
    def short_title(self) -> str:
        """Title without its file extension."""
        return os.path.splitext(self.title)[0]

    def __len__(self) -> int:
        return self.n_slices

    def __iter__(self) -> Iterator[npt.NDArray[np.float64]]:
        for index in range(1, self.n_slices + 1):
            yield self.get_frame(index)

    def __repr__(self) -> str:
        return (f"ImageStack(title={self.title!r}, n_slices={self.n_slices}, "
                f"width={self.width}, height={self.height}, is_color={self.is_color})")

    # --- Access ---
    def _check_index(self, index: int) -> None:
        if not 1 <= index <= self.n_slices:
            raise IndexError(f"Slice {index} out of range 1..{self.n_slices}.")

    def get_frame(self, index: int) -> npt.NDArray[np.float64]:
        """
        Return slice `index` (1-based) converted to float64.

        The result is always a new array; the stored frame is never exposed.

        Raises:
            IndexError: If `index` is outside 1..n_slices.
            InvalidInputError: If the stack is a color composite.
        """
        if self._is_color:
            raise InvalidInputError("Color composite stacks cannot be read as single frames.")
        self._check_index(index)
        return np.array(self._frames[index - 1], dtype=FLOAT_DTYPE, copy=True)

    def get_label(self, index: int) -> str:
        self._check_index(index)
        return self._labels[index - 1]

    def add_slice(self, label: str, frame: npt.ArrayLike) -> None:
        """
        Append a frame at the end of the stack.

        Raises:
            ValueError: If the frame shape does not match the stack.
        """
        data = np.array(frame, copy=True)
        expected = (self._height, self._width)
        if data.shape != expected:
            raise ValueError(f"Frame of shape {data.shape} does not fit a stack of {expected}.")
        self._frames.append(data)
        self._labels.append(str(label))

    def to_array(self) -> npt.NDArray:
        """All slices as one array of shape (n_slices, height, width[, channels])."""
        if not self._frames:
            return np.zeros((0, self._height, self._width), dtype=FLOAT_DTYPE)
        return np.stack(self._frames)
