"""
Tests for MatrixDesign and the solution wrappers.
"""

import numpy as np
import pytest

from pylinalg.core.exceptions import DimensionError, ValidationError
from pylinalg.dense import MatrixDesign, eigh, inv, solve


class TestMatrixDesign:

    def test_from_2d(self):
        A = np.arange(6.0).reshape(2, 3)
        design = MatrixDesign.from_array(A)
        assert design.shape == (2, 3)
        assert design.data is A
        assert design.name == 'A'
        assert not design.is_square

    def test_from_flat_buffer(self):
        design = MatrixDesign.from_array(np.arange(6.0), 'B', rows=3, cols=2)
        assert design.shape == (3, 2)
        np.testing.assert_array_equal(design.data[1], [2.0, 3.0])

    def test_square_required(self):
        with pytest.raises(DimensionError, match="square"):
            MatrixDesign.from_array(np.ones((2, 3)), square=True)

    def test_finite_required(self):
        with pytest.raises(ValidationError):
            MatrixDesign.from_array(np.array([[np.inf]]))

    def test_finite_check_optional(self):
        design = MatrixDesign.from_array(np.array([[np.inf]]), finite=False)
        assert design.shape == (1, 1)

    def test_precision_and_complex(self):
        design = MatrixDesign.from_array(np.eye(2, dtype=np.complex64))
        assert design.is_complex
        assert design.precision == 'fp32'
        assert design.metadata == {'rows': 2, 'cols': 2, 'dtype': 'complex64'}

    def test_immutable(self):
        design = MatrixDesign.from_array(np.eye(2))
        with pytest.raises(AttributeError):
            design._rows = 3


class TestSolutionAccessors:

    def test_common_properties(self, spd_matrix):
        result = eigh(spd_matrix)
        assert result.ok
        assert result.backend_name == 'cpu_lapack'
        assert 'pylinalg_version' in result.provenance
        assert result.timing['total_seconds'] >= 0

    def test_solve_summary(self, general_matrix, rng):
        text = solve(general_matrix, rng.standard_normal((5, 2))).summary()
        assert "Linear Solve" in text
        assert "Right-hand sides: 2" in text
        assert "Shape: 5 x 5 (float64)" in text

    def test_inverse_summary(self, general_matrix):
        text = inv(general_matrix.copy()).summary()
        assert "Matrix Inverse" in text
        assert "In place: True" in text

    def test_eigh_summary(self):
        text = eigh(np.diag([1.0, 2.0]), descending=True).summary()
        assert "Eigenvalues (descending)" in text
