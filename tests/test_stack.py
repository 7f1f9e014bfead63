"""
Unit tests for the ImageStack data model.
"""

import numpy as np
import pytest

from sincfilter.errors import InvalidInputError
from sincfilter.model.stack import ImageStack


class TestImageStack:
    """Test suite for ImageStack."""

    def test_geometry(self):
        stack = ImageStack(np.zeros((6, 4, 9), dtype=np.uint8), title="cells.tif")
        assert stack.n_slices == len(stack) == 6
        assert (stack.height, stack.width) == (4, 9)
        assert not stack.is_color
        assert stack.short_title == "cells"
        assert stack.labels == [""] * 6

    def test_single_frame(self):
        stack = ImageStack(np.ones((3, 3)))
        assert stack.n_slices == 1

    def test_color_composite(self):
        stack = ImageStack(np.zeros((5, 2, 3, 3), dtype=np.uint8))
        assert stack.is_color
        assert (stack.height, stack.width) == (2, 3)
        with pytest.raises(InvalidInputError):
            stack.get_frame(1)

    def test_bad_dimensions(self):
        with pytest.raises(ValueError):
            ImageStack(np.zeros(10))

    def test_get_frame_is_one_based_float_copy(self):
        frames = np.arange(24, dtype=np.int16).reshape(3, 2, 4)
        stack = ImageStack(frames)
        frame = stack.get_frame(2)
        assert frame.dtype == np.float64
        assert np.array_equal(frame, frames[1])

        frame[:] = -1.0
        assert np.array_equal(stack.get_frame(2), frames[1])

    @pytest.mark.parametrize("index", [0, 4, -1])
    def test_get_frame_out_of_range(self, index):
        stack = ImageStack(np.zeros((3, 2, 2)))
        with pytest.raises(IndexError):
            stack.get_frame(index)

    def test_labels(self):
        stack = ImageStack(np.zeros((2, 2, 2)), labels=["a", "b"])
        assert stack.get_label(2) == "b"
        with pytest.raises(ValueError):
            ImageStack(np.zeros((2, 2, 2)), labels=["a"])

    def test_build_incrementally(self):
        stack = ImageStack.empty(width=3, height=2, title="out.tif")
        assert stack.n_slices == 0
        assert stack.to_array().shape == (0, 2, 3)

        stack.add_slice("head1", np.ones((2, 3)))
        stack.add_slice("middle2", np.full((2, 3), 2.0))
        assert stack.labels == ["head1", "middle2"]
        assert stack.to_array().shape == (2, 2, 3)
        assert np.all(stack.get_frame(2) == 2.0)

    def test_add_slice_wrong_shape(self):
        stack = ImageStack.empty(width=3, height=2)
        with pytest.raises(ValueError):
            stack.add_slice("bad", np.ones((3, 2)))

    def test_iteration(self):
        frames = np.arange(12, dtype=np.float64).reshape(3, 2, 2)
        assert [frame[0, 0] for frame in ImageStack(frames)] == [0.0, 4.0, 8.0]

    def test_source_array_changes_do_not_reach_stack(self):
        """Frames are copied on construction and when added."""
        frames = np.ones((10, 2, 2))
        stack = ImageStack(frames)
        frames[4] = 99.0
        assert stack.get_frame(5)[0, 0] == 1.0

        frame = np.zeros((2, 2))
        stack.add_slice("extra", frame)
        frame[:] = 5.0
        assert np.all(stack.get_frame(11) == 0.0)

    def test_single_rgb_image(self):
        """A (height, width, 3) array is one color slice only when flagged as color."""
        rgb = np.zeros((12, 8, 3), dtype=np.uint8)
        assert ImageStack(rgb).n_slices == 12

        stack = ImageStack(rgb, is_color=True)
        assert stack.is_color
        assert stack.n_slices == 1
        assert (stack.height, stack.width) == (12, 8)

    def test_color_flag_needs_channels(self):
        with pytest.raises(ValueError):
            ImageStack(np.zeros((4, 4)), is_color=True)
