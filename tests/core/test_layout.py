"""
Tests for row-major <-> column-major layout translation.

Validates:
    - Flat re-indexing col[j*rows + i] = row[i*cols + j] and its inverse
    - to_backend staging copies (Fortran order, never aliasing the input)
    - from_backend transpose/conjugate on copy
    - native_view shares memory and is the transpose
"""

import numpy as np
import pytest

from pylinalg.core.compute.linalg.layout import (
    from_backend,
    from_column_major,
    native_view,
    to_backend,
    to_column_major,
)
from pylinalg.core.exceptions import DimensionError


# ═══════════════════════════════════════════════════════════════════════
# Flat buffers
# ═══════════════════════════════════════════════════════════════════════


class TestFlatBuffers:

    def test_to_column_major_2x3(self):
        # [[0, 1, 2],
        #  [3, 4, 5]]
        col = to_column_major(np.arange(6.0), 2, 3)
        np.testing.assert_array_equal(col, [0, 3, 1, 4, 2, 5])

    def test_index_formula(self, rng):
        rows, cols = 3, 5
        row = rng.standard_normal(rows * cols)
        col = to_column_major(row, rows, cols)
        for i in range(rows):
            for j in range(cols):
                assert col[j * rows + i] == row[i * cols + j]

    def test_inverse(self, rng):
        row = rng.standard_normal(12) + 1j * rng.standard_normal(12)
        back = from_column_major(to_column_major(row, 4, 3), 4, 3)
        np.testing.assert_array_equal(back, row)

    def test_single_row_and_column_are_identity(self):
        buf = np.arange(4.0)
        np.testing.assert_array_equal(to_column_major(buf, 1, 4), buf)
        np.testing.assert_array_equal(to_column_major(buf, 4, 1), buf)

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="rows \\* cols"):
            to_column_major(np.arange(5.0), 2, 3)

    def test_requires_flat_buffer(self):
        with pytest.raises(DimensionError, match="flat 1D"):
            from_column_major(np.ones((2, 3)), 2, 3)


# ═══════════════════════════════════════════════════════════════════════
# Matrix staging
# ═══════════════════════════════════════════════════════════════════════


class TestToBackend:

    def test_fortran_ordered_copy(self):
        A = np.arange(6.0).reshape(2, 3)
        staged = to_backend(A)
        assert staged.flags.f_contiguous
        np.testing.assert_array_equal(staged, A)
        assert not np.shares_memory(staged, A)

    def test_memory_is_column_major_buffer(self):
        A = np.arange(6.0).reshape(2, 3)
        staged = to_backend(A)
        np.testing.assert_array_equal(staged.ravel(order='K'), to_column_major(A.ravel(), 2, 3))

    def test_dtype_conversion(self):
        staged = to_backend(np.eye(2, dtype=np.float32), dtype=np.complex64)
        assert staged.dtype == np.complex64

    def test_vector_becomes_column(self):
        assert to_backend(np.arange(3.0)).shape == (3, 1)


class TestFromBackend:

    def test_c_ordered_copy(self):
        F = np.asfortranarray(np.arange(6.0).reshape(2, 3))
        out = from_backend(F)
        assert out.flags.c_contiguous
        np.testing.assert_array_equal(out, F)
        assert not np.shares_memory(out, F)

    def test_transpose(self):
        vt = np.asfortranarray(np.arange(6.0).reshape(2, 3))
        np.testing.assert_array_equal(from_backend(vt, transpose=True), vt.T)

    def test_conjugate_transpose(self):
        vh = np.asfortranarray(np.array([[1 + 2j, 3 - 1j], [0 + 1j, 2 + 0j]]))
        out = from_backend(vh, transpose=True, conjugate=True)
        np.testing.assert_array_equal(out, vh.conj().T)
        assert out.flags.c_contiguous

    def test_conjugate_ignored_for_real(self):
        M = np.asfortranarray(np.ones((2, 2)))
        out = from_backend(M, conjugate=True)
        assert out.dtype == np.float64


class TestNativeView:

    def test_is_transpose_sharing_memory(self):
        A = np.arange(9.0).reshape(3, 3)
        view = native_view(A)
        np.testing.assert_array_equal(view, A.T)
        assert view.flags.f_contiguous
        assert np.shares_memory(view, A)

    def test_rejects_non_contiguous(self):
        A = np.arange(16.0).reshape(4, 4)[:, ::2]
        with pytest.raises(DimensionError, match="C-contiguous"):
            native_view(A)
