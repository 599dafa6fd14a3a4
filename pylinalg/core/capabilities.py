"""
Capability string constants for PyLinalg backends.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pylinalg.core.capabilities import (
        CAPABILITY_WORKSPACE_QUERY,
        CAPABILITY_DOUBLE_PRECISION,
    )

    if backend.supports(CAPABILITY_WORKSPACE_QUERY):
        lwork = backend.workspace_query('gesvd', dtype, m=m, n=n)
"""

# Backend answers optimal scratch-size queries before the real call
CAPABILITY_WORKSPACE_QUERY = 'workspace_query'

# float32 / complex64 inputs
CAPABILITY_SINGLE_PRECISION = 'single_precision'

# float64 / complex128 inputs
CAPABILITY_DOUBLE_PRECISION = 'double_precision'

# complex64 / complex128 inputs
CAPABILITY_COMPLEX = 'complex'

# General eigensolver can return left eigenvectors
CAPABILITY_LEFT_EIGENVECTORS = 'left_eigenvectors'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_WORKSPACE_QUERY,
    CAPABILITY_SINGLE_PRECISION,
    CAPABILITY_DOUBLE_PRECISION,
    CAPABILITY_COMPLEX,
    CAPABILITY_LEFT_EIGENVECTORS,
})

__all__ = [
    'CAPABILITY_WORKSPACE_QUERY',
    'CAPABILITY_SINGLE_PRECISION',
    'CAPABILITY_DOUBLE_PRECISION',
    'CAPABILITY_COMPLEX',
    'CAPABILITY_LEFT_EIGENVECTORS',
    'ALL_CAPABILITIES',
]
