"""
Liquid Glass -- Safety & Validation Tests

Run with: pytest tests/test_safety.py -v
"""

import numpy as np
import pytest

from core.safety import (
    InvalidParameterError,
    SafetyError,
    preflight,
    validate_chain_depth,
    validate_choice,
    validate_gamma_power,
    validate_intensity,
    validate_surface,
    MAX_CHAIN_DEPTH,
)
from core.sampling import clamp_coords, sample, sample_channel


class TestValidateSurface:

    def test_returns_height_width(self, frame):
        assert validate_surface(frame) == (24, 32)
        assert validate_surface(frame, width=32, height=24) == (24, 32)

    def test_numpy_int_dimensions(self, frame):
        assert validate_surface(frame, width=np.int64(32), height=np.int32(24)) == (24, 32)

    @pytest.mark.parametrize("kwargs", [{"width": 0}, {"height": -1}, {"width": 31}, {"width": 32.0}, {"height": True}])
    def test_bad_dimensions(self, frame, kwargs):
        with pytest.raises(InvalidParameterError):
            validate_surface(frame, **kwargs)

    def test_not_an_array(self):
        with pytest.raises(InvalidParameterError, match="numpy"):
            validate_surface("frame.png")

    def test_two_dimensional(self):
        with pytest.raises(InvalidParameterError):
            validate_surface(np.zeros((4, 4), dtype=np.uint8))

    def test_invalid_parameter_is_value_error(self):
        assert issubclass(InvalidParameterError, ValueError)


class TestValidateScalars:

    def test_intensity_ok(self):
        assert validate_intensity(0) == 0.0
        assert validate_intensity(np.float32(0.05)) == pytest.approx(0.05)

    @pytest.mark.parametrize("bad", [-1e-9, float("nan"), float("inf"), True, [0.1]])
    def test_intensity_bad(self, bad):
        with pytest.raises(InvalidParameterError):
            validate_intensity(bad)

    def test_gamma_ok(self):
        assert validate_gamma_power(2) == 2.0

    @pytest.mark.parametrize("bad", [0, -0.5, float("nan"), float("-inf")])
    def test_gamma_bad(self, bad):
        with pytest.raises(InvalidParameterError):
            validate_gamma_power(bad)

    def test_choice(self):
        assert validate_choice("mode", "a", ("a", "b")) == "a"
        with pytest.raises(InvalidParameterError, match="Available: a, b"):
            validate_choice("mode", "c", ("b", "a"))


class TestChainDepth:

    def test_at_limit_ok(self):
        validate_chain_depth([{}] * MAX_CHAIN_DEPTH)

    def test_over_limit(self):
        with pytest.raises(SafetyError, match="max is"):
            validate_chain_depth([{}] * (MAX_CHAIN_DEPTH + 1))


class TestPreflight:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            preflight(tmp_path / "nope.png")

    def test_bad_extension(self, tmp_path):
        p = tmp_path / "notes.txt"
        p.write_text("hello")
        with pytest.raises(SafetyError, match="not allowed"):
            preflight(p)

    def test_ok(self, tmp_path):
        p = tmp_path / "img.PNG"
        p.write_bytes(b"\x89PNG")
        info = preflight(p)
        assert info["extension"] == ".png"
        assert info["size_mb"] < 1


class TestSampling:

    def test_clamp_coords(self):
        xs, ys = clamp_coords(np.array([-5, 0, 3, 99]), np.array([7, -1, 2, 0]), 4, 3)
        assert xs.tolist() == [0, 0, 3, 3]
        assert ys.tolist() == [2, 0, 2, 0]

    def test_sample_never_wraps(self, row_frame):
        # -1 would read the last column if it reached numpy unclamped
        colors = sample(row_frame, np.array([[-1, 8]]), np.array([[0, 0]]))
        np.testing.assert_array_equal(colors[0, 0], row_frame[0, 0])
        np.testing.assert_array_equal(colors[0, 1], row_frame[0, 7])

    def test_sample_channel(self, row_frame):
        vals = sample_channel(row_frame, 2, np.array([[3, 12]]), np.array([[-4, 4]]))
        assert vals.tolist() == [[31, 71]]
