"""
Tests for pinv() (Moore-Penrose pseudo-inverse).

Validates the four Penrose conditions, the per-precision thresholds and
the behavior of singular values below the threshold.
"""

import numpy as np
import pytest

from pylinalg import pinv
from pylinalg.core.compute.precision import PINV_THRESHOLD_FP32, PINV_THRESHOLD_FP64
from pylinalg.core.exceptions import ValidationError
from pylinalg.dense._pinv import scale_factors


def _assert_penrose(A, P, atol):
    np.testing.assert_allclose(A @ P @ A, A, atol=atol)
    np.testing.assert_allclose(P @ A @ P, P, atol=atol)
    np.testing.assert_allclose((A @ P).conj().T, A @ P, atol=atol)
    np.testing.assert_allclose((P @ A).conj().T, P @ A, atol=atol)


class TestPinv:

    def test_tall(self, rectangular_matrix):
        result = pinv(rectangular_matrix)
        assert result.pinv.shape == (4, 6)
        _assert_penrose(rectangular_matrix, result.pinv, atol=1e-10)
        assert result.rank == 4

    def test_wide(self, rng):
        A = rng.standard_normal((3, 7))
        result = pinv(A)
        assert result.pinv.shape == (7, 3)
        _assert_penrose(A, result.pinv, atol=1e-10)

    def test_invertible_matches_inverse(self, general_matrix):
        result = pinv(general_matrix)
        np.testing.assert_allclose(result.pinv, np.linalg.inv(general_matrix), atol=1e-10)

    def test_matches_numpy(self, rectangular_matrix):
        np.testing.assert_allclose(
            pinv(rectangular_matrix).pinv, np.linalg.pinv(rectangular_matrix), atol=1e-10
        )

    def test_complex(self, rng):
        A = rng.standard_normal((5, 3)) + 1j * rng.standard_normal((5, 3))
        result = pinv(A)
        assert result.pinv.dtype == np.complex128
        _assert_penrose(A, result.pinv, atol=1e-10)

    def test_float32(self, rectangular_matrix):
        A = rectangular_matrix.astype(np.float32)
        result = pinv(A)
        assert result.pinv.dtype == np.float32
        assert result.threshold == PINV_THRESHOLD_FP32
        _assert_penrose(A, result.pinv, atol=1e-4)

    def test_default_thresholds(self, rectangular_matrix):
        assert pinv(rectangular_matrix).threshold == PINV_THRESHOLD_FP64

    def test_input_not_modified(self, rectangular_matrix):
        before = rectangular_matrix.copy()
        pinv(rectangular_matrix)
        np.testing.assert_array_equal(rectangular_matrix, before)

    def test_flat_buffer(self, rectangular_matrix):
        result = pinv(rectangular_matrix.ravel(), rows=6, cols=4)
        np.testing.assert_allclose(result.pinv, np.linalg.pinv(rectangular_matrix), atol=1e-10)

    def test_negative_threshold_rejected(self, rectangular_matrix):
        with pytest.raises(ValidationError, match="threshold"):
            pinv(rectangular_matrix, threshold=-1.0)


class TestPinvThreshold:

    def test_rank_deficient_truncated(self):
        A = np.outer([1.0, 2.0, 3.0], [1.0, 1.0])
        result = pinv(A, truncate=True)
        assert result.rank == 1
        _assert_penrose(A, result.pinv, atol=1e-10)
        np.testing.assert_allclose(result.pinv, np.linalg.pinv(A), atol=1e-10)

    def test_small_values_kept_without_truncate(self):
        A = np.diag([2.0, 1e-12])
        result = pinv(A)
        assert result.rank == 1
        # the value below threshold scales its column by itself
        np.testing.assert_allclose(result.pinv, np.diag([0.5, 1e-12]), atol=1e-20)

    def test_small_values_zeroed_with_truncate(self):
        result = pinv(np.diag([2.0, 1e-12]), truncate=True)
        np.testing.assert_allclose(result.pinv, np.diag([0.5, 0.0]))

    def test_custom_threshold(self):
        result = pinv(np.diag([4.0, 0.5]), threshold=1.0, truncate=True)
        assert result.threshold == 1.0
        assert result.rank == 1
        np.testing.assert_allclose(result.pinv, np.diag([0.25, 0.0]))

    def test_value_equal_to_threshold_not_reciprocated(self):
        factors = scale_factors(np.array([2.0, 1.0]), threshold=1.0, truncate=False)
        np.testing.assert_array_equal(factors, [0.5, 1.0])

    def test_scale_factors_keep_dtype(self):
        factors = scale_factors(np.array([2.0, 0.0], dtype=np.float32), 1e-5, truncate=True)
        assert factors.dtype == np.float32
        np.testing.assert_array_equal(factors, [0.5, 0.0])

    def test_summary(self, rectangular_matrix):
        text = pinv(rectangular_matrix).summary()
        assert "Pseudo-Inverse" in text
        assert "Rank: 4" in text
