"""
MatrixDesign: validated input for the dense operations.

Wraps a row-major matrix together with its dimensions and precision.
The orchestration code trusts a MatrixDesign: shape, dtype and finiteness
are checked once, here, at the public boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.compute.precision import PrecisionTier, is_complex, precision_tier
from pylinalg.core.validation import check_array, check_finite, check_matrix, check_square


@dataclass(frozen=True)
class MatrixDesign:
    """
    Validated dense row-major matrix.

    Immutable after construction. The wrapped array is the caller's data
    (or a view of it); operations stage their own column-major copies and
    never write through it, except for in-place inversion.

    Construction:
        MatrixDesign.from_array(A, 'A')                    # 2D array
        MatrixDesign.from_array(buf, 'A', rows=3, cols=4)  # flat buffer
        MatrixDesign.from_array(A, 'A', square=True)       # require rows == cols
    """
    _data: NDArray[np.inexact[Any]]
    _rows: int
    _cols: int
    _name: str

    @classmethod
    def from_array(
        cls,
        data: ArrayLike,
        name: str = 'A',
        *,
        rows: int | None = None,
        cols: int | None = None,
        square: bool = False,
        finite: bool = True,
    ) -> MatrixDesign:
        """
        Build MatrixDesign from a 2D array or a flat row-major buffer.

        Args:
            data: 2D array, or 1D buffer of rows * cols elements
            name: Name used in error messages
            rows: Row count (required for flat buffers)
            cols: Column count (required for flat buffers)
            square: Require a square matrix
            finite: Reject NaN/Inf entries

        Raises:
            ValidationError: Non-numeric or non-finite data
            DimensionError: Missing, inconsistent, or non-square dimensions
        """
        if hasattr(data, 'cpu') and hasattr(data, 'numpy'):
            data = data.cpu().numpy()
        array = check_array(data, name)
        matrix = check_matrix(array, name, rows=rows, cols=cols)
        if square:
            check_square(matrix, name)
        if finite:
            check_finite(matrix, name)
        n_rows, n_cols = matrix.shape
        return cls(_data=matrix, _rows=n_rows, _cols=n_cols, _name=name)

    # === Properties ===

    @property
    def data(self) -> NDArray[np.inexact[Any]]:
        """Row-major matrix (rows x cols)."""
        return self._data

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def name(self) -> str:
        return self._name

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_square(self) -> bool:
        return self._rows == self._cols

    @property
    def is_complex(self) -> bool:
        return is_complex(self._data.dtype)

    @property
    def precision(self) -> PrecisionTier:
        return precision_tier(self._data.dtype)

    @property
    def metadata(self) -> dict[str, Any]:
        """Dimensions and element type, recorded in Result.info."""
        return {
            'rows': self._rows,
            'cols': self._cols,
            'dtype': str(self._data.dtype),
        }
