"""
Unit tests for FilterConfig.
"""

import dataclasses

import numpy as np
import pytest

from sincfilter.config import DEFAULT_CUTOFF, DEFAULT_HALF_WIDTH, FilterConfig
from sincfilter.errors import InvalidInputError


class TestFilterConfig:
    """Test suite for the FilterConfig dataclass."""

    def test_default_config(self):
        cfg = FilterConfig()
        assert cfg.half_width == DEFAULT_HALF_WIDTH == 20
        assert cfg.cutoff == DEFAULT_CUTOFF == 0.25
        assert cfg.smooth_ends is True
        assert cfg.show_filter is False

    def test_computed_properties(self):
        cfg = FilterConfig(half_width=3, cutoff=0.3)
        assert cfg.kernel_length == 7
        assert cfg.kernel_cutoff == pytest.approx(0.15)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            FilterConfig().half_width = 5

    def test_validate_returns_self(self):
        cfg = FilterConfig(half_width=0, cutoff=0.5)
        assert cfg.validate() is cfg

    @pytest.mark.parametrize("half_width", [-1, 2.5, True, "3"])
    def test_invalid_half_width(self, half_width):
        with pytest.raises(InvalidInputError):
            FilterConfig(half_width=half_width).validate()

    @pytest.mark.parametrize("cutoff", [0.0, 1.0, -0.25, 2.0])
    def test_invalid_cutoff(self, cutoff):
        with pytest.raises(InvalidInputError):
            FilterConfig(cutoff=cutoff).validate()

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            FilterConfig(half_width=-1).validate()

    def test_dict_round_trip_with_numpy_scalars(self, caplog):
        """Values read back from HDF5 attributes are numpy scalars; unknown keys are dropped."""
        data = {
            "half_width": np.int64(4),
            "cutoff": np.float64(0.2),
            "smooth_ends": np.bool_(False),
            "show_filter": np.bool_(True),
            "version": "0.1.0",
        }
        cfg = FilterConfig.from_dict(data)
        assert cfg == FilterConfig(half_width=4, cutoff=0.2, smooth_ends=False, show_filter=True)
        assert type(cfg.half_width) is int
        assert "version" in caplog.text
        assert FilterConfig.from_dict(cfg.to_dict()) == cfg
