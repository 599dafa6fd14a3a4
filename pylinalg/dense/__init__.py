"""
Dense matrix decompositions and solves.

Public API:
    svd(A, rows, cols)            -> SVDSolution
    eigh(A, dim, descending)      -> EighSolution
    eig(A, dim, descending, ...)  -> EigSolution
    solve(A, B, dim, nrhs)        -> SolveSolution
    solve_spd(A, B, dim, nrhs)    -> SolveSolution
    inv(A, dim, overwrite_a)      -> InverseSolution
    pinv(A, rows, cols)           -> PinvSolution

Every operation accepts row-major input, handles the column-major backend
layout internally, and returns a solution even when the backend fails
numerically; check ``solution.ok`` or call ``solution.raise_for_status()``,
or pass ``strict=True``.

Example:
    >>> from pylinalg.dense import eigh
    >>> result = eigh([[2.0, 0.0], [0.0, 5.0]], descending=True)
    >>> result.eigenvalues
    array([5., 2.])
"""

from pylinalg.dense.design import MatrixDesign
from pylinalg.dense.solution import (
    SVDParams,
    EighParams,
    EigParams,
    SolveParams,
    InverseParams,
    PinvParams,
    SVDSolution,
    EighSolution,
    EigSolution,
    SolveSolution,
    InverseSolution,
    PinvSolution,
)
from pylinalg.dense.solvers import svd, eigh, eig, solve, solve_spd, inv, pinv

__all__ = [
    "svd",
    "eigh",
    "eig",
    "solve",
    "solve_spd",
    "inv",
    "pinv",
    "MatrixDesign",
    "SVDParams",
    "EighParams",
    "EigParams",
    "SolveParams",
    "InverseParams",
    "PinvParams",
    "SVDSolution",
    "EighSolution",
    "EigSolution",
    "SolveSolution",
    "InverseSolution",
    "PinvSolution",
]
