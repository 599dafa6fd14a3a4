"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pylinalg.core.capabilities import (
    CAPABILITY_COMPLEX,
    CAPABILITY_DOUBLE_PRECISION,
    CAPABILITY_LEFT_EIGENVECTORS,
    CAPABILITY_SINGLE_PRECISION,
    CAPABILITY_WORKSPACE_QUERY,
)
from pylinalg.dense.backends.cpu import CPULapackBackend


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def general_matrix(rng):
    """Well-conditioned 5 x 5 general matrix."""
    return rng.standard_normal((5, 5)) + 5.0 * np.eye(5)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive-definite 4 x 4 matrix."""
    M = rng.standard_normal((4, 4))
    return M @ M.T + 4.0 * np.eye(4)


@pytest.fixture
def rectangular_matrix(rng):
    """Tall 6 x 4 matrix of full column rank."""
    return rng.standard_normal((6, 4))


class FakeBackend:
    """
    Backend double that reports a chosen status code.

    Successful calls are delegated to the LAPACK backend, so a FakeBackend
    with status 0 behaves like 'cpu'. With a non-zero status every execute
    call returns zero-filled outputs and that code, without touching the
    input.
    """

    def __init__(self, status=0, capabilities=None, name='fake'):
        self.status = status
        self.calls = []
        self._name = name
        self._lapack = CPULapackBackend()
        if capabilities is None:
            capabilities = {
                CAPABILITY_WORKSPACE_QUERY,
                CAPABILITY_SINGLE_PRECISION,
                CAPABILITY_DOUBLE_PRECISION,
                CAPABILITY_COMPLEX,
                CAPABILITY_LEFT_EIGENVECTORS,
            }
        self._capabilities = frozenset(capabilities)

    @property
    def name(self):
        return self._name

    def supports(self, capability):
        return capability in self._capabilities

    def workspace_query(self, routine, dtype, **dims):
        self.calls.append(('workspace_query', routine))
        return self._lapack.workspace_query(routine, dtype, **dims)

    def _run(self, routine, failed, *args, **kwargs):
        self.calls.append((routine, kwargs.get('lwork')))
        if self.status == 0:
            return getattr(self._lapack, routine)(*args, **kwargs)
        return failed + (self.status,)

    def gesvd(self, a, *, full_matrices, lwork):
        return self._run('gesvd', (None, None, None), a, full_matrices=full_matrices, lwork=lwork)

    def syev(self, a, *, lwork):
        return self._run('syev', (None, None), a, lwork=lwork)

    def geev(self, a, *, compute_vl, compute_vr, lwork):
        return self._run(
            'geev', (None, None, None), a,
            compute_vl=compute_vl, compute_vr=compute_vr, lwork=lwork,
        )

    def gesv(self, a, b):
        return self._run('gesv', (None,), a, b)

    def posv(self, a, b):
        return self._run('posv', (None,), a, b)

    def getrf(self, a):
        return self._run('getrf', (a, None), a)

    def getri(self, lu, piv, *, lwork):
        return self._run('getri', (None,), lu, piv, lwork=lwork)

    def gemm(self, alpha, a, b, *, trans_a=0, trans_b=0):
        self.calls.append(('gemm', None))
        return self._lapack.gemm(alpha, a, b, trans_a=trans_a, trans_b=trans_b)


@pytest.fixture
def fake_backend():
    """Factory for FakeBackend instances."""
    return FakeBackend
