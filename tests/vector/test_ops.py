"""
Tests for the elementwise vector kernels.

Validates:
    - Results for each kernel, real and complex
    - In-place (into a) and out= destinations, and the first-n prefix
    - Divide-by-zero saturates to zeros without warning
    - Destination validation
"""

import warnings

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.vector import (
    scalar_add,
    scalar_divide,
    scalar_multiply,
    scalar_subtract,
    vector_copy,
    vector_dot,
    vector_multiply,
)


# ═══════════════════════════════════════════════════════════════════════
# vector_copy
# ═══════════════════════════════════════════════════════════════════════


class TestVectorCopy:

    def test_new_array(self):
        a = np.array([1.0, 2.0, 3.0])
        c = vector_copy(a)
        np.testing.assert_array_equal(c, a)
        assert not np.shares_memory(c, a)

    def test_prefix(self):
        np.testing.assert_array_equal(vector_copy(np.arange(5.0), 2), [0.0, 1.0])

    def test_into_out(self):
        out = np.full(4, -1.0)
        result = vector_copy(np.array([7.0, 8.0]), out=out)
        assert result is out
        np.testing.assert_array_equal(out, [7.0, 8.0, -1.0, -1.0])

    def test_list_input(self):
        np.testing.assert_array_equal(vector_copy([1, 2]), [1.0, 2.0])

    def test_zero_length(self):
        assert vector_copy(np.arange(3.0), 0).size == 0

    def test_n_exceeds_length(self):
        with pytest.raises(DimensionError):
            vector_copy(np.arange(3.0), 4)


# ═══════════════════════════════════════════════════════════════════════
# vector_multiply
# ═══════════════════════════════════════════════════════════════════════


class TestVectorMultiply:

    def test_in_place_into_a(self):
        a = np.array([1.0, 2.0, 3.0])
        result = vector_multiply(a, np.array([4.0, 5.0, 6.0]))
        assert result is a
        np.testing.assert_array_equal(a, [4.0, 10.0, 18.0])

    def test_out_leaves_inputs(self):
        a = np.array([1.0, 2.0])
        b = np.array([3.0, 4.0])
        out = np.empty(2)
        vector_multiply(a, b, out=out)
        np.testing.assert_array_equal(out, [3.0, 8.0])
        np.testing.assert_array_equal(a, [1.0, 2.0])

    def test_prefix_only(self):
        a = np.array([1.0, 2.0, 3.0])
        vector_multiply(a, np.array([2.0, 2.0, 2.0]), n=2)
        np.testing.assert_array_equal(a, [2.0, 4.0, 3.0])

    def test_complex(self):
        a = np.array([1 + 1j, 2 - 1j])
        vector_multiply(a, np.array([1j, 2.0]))
        np.testing.assert_allclose(a, [-1 + 1j, 4 - 2j])

    def test_b_too_short(self):
        with pytest.raises(DimensionError):
            vector_multiply(np.ones(3), np.ones(2))

    def test_list_cannot_be_written_in_place(self):
        with pytest.raises(ValidationError, match="numpy array"):
            vector_multiply([1.0, 2.0], np.ones(2))

    def test_complex_result_into_real_array_rejected(self):
        with pytest.raises(ValidationError, match="cannot store"):
            vector_multiply(np.ones(2), np.array([1j, 1j]))


# ═══════════════════════════════════════════════════════════════════════
# vector_dot
# ═══════════════════════════════════════════════════════════════════════


class TestVectorDot:

    def test_real(self):
        assert vector_dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == 32.0

    def test_prefix(self):
        assert vector_dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], n=2) == 14.0

    def test_complex_unconjugated(self):
        a = np.array([1j, 1.0])
        b = np.array([1j, 1.0])
        assert vector_dot(a, b) == pytest.approx(0.0)

    def test_complex_conjugated(self):
        a = np.array([1j, 1.0])
        assert vector_dot(a, a, conjugate=True) == pytest.approx(2.0)

    def test_conjugate_no_effect_on_real(self, rng):
        a = rng.standard_normal(5)
        b = rng.standard_normal(5)
        assert vector_dot(a, b, conjugate=True) == pytest.approx(vector_dot(a, b))

    def test_empty_is_zero(self):
        assert vector_dot(np.ones(3), np.ones(3), n=0) == 0.0


# ═══════════════════════════════════════════════════════════════════════
# Scalar operations
# ═══════════════════════════════════════════════════════════════════════


class TestScalarOps:

    def test_multiply(self):
        a = np.array([1.0, 2.0])
        assert scalar_multiply(a, 3.0) is a
        np.testing.assert_array_equal(a, [3.0, 6.0])

    def test_add_into_out(self):
        a = np.array([1.0, 2.0])
        out = np.empty(2)
        scalar_add(a, 0.5, out=out)
        np.testing.assert_array_equal(out, [1.5, 2.5])
        np.testing.assert_array_equal(a, [1.0, 2.0])

    def test_subtract_prefix(self):
        a = np.array([1.0, 2.0, 3.0])
        scalar_subtract(a, 1.0, n=2)
        np.testing.assert_array_equal(a, [0.0, 1.0, 3.0])

    def test_divide(self):
        a = np.array([2.0, 4.0, 6.0])
        scalar_divide(a, 2.0)
        np.testing.assert_array_equal(a, [1.0, 2.0, 3.0])

    def test_divide_by_zero_gives_zeros(self):
        a = np.array([2.0, 4.0, 6.0])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = scalar_divide(a, 0.0)
        np.testing.assert_array_equal(result, [0.0, 0.0, 0.0])

    def test_divide_by_zero_into_out(self):
        a = np.array([2.0, 4.0, 6.0])
        out = np.ones(3)
        scalar_divide(a, 0, out=out)
        np.testing.assert_array_equal(out, [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(a, [2.0, 4.0, 6.0])

    def test_divide_by_complex_zero(self):
        a = np.array([1 + 1j, 2 + 0j])
        scalar_divide(a, 0j)
        np.testing.assert_array_equal(a, [0j, 0j])

    def test_complex_scalar(self):
        a = np.array([1.0 + 0j, 2.0 + 0j])
        scalar_multiply(a, 1j)
        np.testing.assert_array_equal(a, [1j, 2j])

    def test_float32_preserved(self):
        a = np.array([1.0, 2.0], dtype=np.float32)
        scalar_multiply(a, 2.0)
        assert a.dtype == np.float32
        np.testing.assert_array_equal(a, [2.0, 4.0])

    def test_non_scalar_rejected(self):
        with pytest.raises(ValidationError, match="scalar operand"):
            scalar_add(np.ones(2), np.ones(2))

    def test_read_only_rejected(self):
        a = np.ones(2)
        a.flags.writeable = False
        with pytest.raises(ValidationError, match="read-only"):
            scalar_add(a, 1.0)

    def test_out_too_short(self):
        with pytest.raises(ValidationError, match="shorter"):
            scalar_add(np.ones(3), 1.0, out=np.empty(2))
