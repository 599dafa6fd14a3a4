"""
Shared orchestration helpers for the dense operations.

Status-code interpretation, the failure policy, backend capability checks,
and Result assembly live here so every operation handles them the same way.

Failure policy:
    status 0   -> Status.OK
    status < 0 -> BackendError (illegal argument: a bug, never degraded)
    status > 0 -> the routine's failure Status; outputs degrade to zeros
                  (None for SVD factors), a message is recorded in
                  Result.warnings and emitted as a NumericalWarning, or,
                  with strict=True, the matching exception is raised.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np

from pylinalg.core.capabilities import (
    CAPABILITY_COMPLEX,
    CAPABILITY_DOUBLE_PRECISION,
    CAPABILITY_SINGLE_PRECISION,
)
from pylinalg.core.compute.precision import is_complex, precision_tier
from pylinalg.core.compute.timing import Timer
from pylinalg.core.exceptions import (
    BackendError,
    ConvergenceError,
    NotPositiveDefiniteError,
    NumericalWarning,
    SingularMatrixError,
    ValidationError,
)
from pylinalg.core.protocols import Backend
from pylinalg.core.result import Result, Status

# What a positive status code means for each routine
FAILURE_STATUS: dict[str, Status] = {
    'gesvd': Status.NON_CONVERGENCE,
    'syev': Status.NON_CONVERGENCE,
    'geev': Status.NON_CONVERGENCE,
    'gesv': Status.SINGULAR,
    'getrf': Status.SINGULAR,
    'getri': Status.SINGULAR,
    'posv': Status.NOT_POSITIVE_DEFINITE,
}

_DESCRIPTIONS = {
    Status.NON_CONVERGENCE: "did not converge",
    Status.SINGULAR: "matrix is singular",
    Status.NOT_POSITIVE_DEFINITE: "matrix is not positive definite",
}


def status_from_info(routine: str, info: int) -> Status:
    """
    Interpret a backend status code.

    Raises:
        BackendError: If info is negative
    """
    info = int(info)
    if info < 0:
        raise BackendError(
            f"{routine}: illegal value in argument {-info}",
            routine=routine,
            status_code=info,
        )
    if info == 0:
        return Status.OK
    return FAILURE_STATUS[routine]


def check_backend_supports(backend: Backend, dtype: np.dtype) -> None:
    """
    Verify a backend can run an element type.

    Raises:
        ValidationError: If the backend lacks the precision or complex support
    """
    if precision_tier(dtype) == 'fp32':
        needed = CAPABILITY_SINGLE_PRECISION
    else:
        needed = CAPABILITY_DOUBLE_PRECISION
    if not backend.supports(needed):
        raise ValidationError(
            f"backend '{backend.name}' does not support {dtype} "
            f"(missing capability {needed!r})"
        )
    if is_complex(dtype) and not backend.supports(CAPABILITY_COMPLEX):
        raise ValidationError(
            f"backend '{backend.name}' does not support complex matrices"
        )


def make_timer(backend: Backend) -> Timer:
    """Timer that synchronizes the backend's device, if it has one."""
    timer = Timer(sync=getattr(backend, 'sync_target', None))
    timer.start()
    return timer


def failure_message(routine: str, status: Status, info: int, fallback: str) -> str:
    return f"{routine} {_DESCRIPTIONS[status]} (status {info}); {fallback}"


def raise_for_status(result: Result[Any], matrix_name: str = 'A') -> None:
    """
    Raise the exception matching a failed Result.

    Does nothing for Status.OK.
    """
    if result.ok:
        return
    routine = result.info.get('routine')
    code = result.info.get('status_code')
    message = result.info.get('message') or f"{routine} failed with status {code}"
    if result.status is Status.NON_CONVERGENCE:
        raise ConvergenceError(message, routine=routine, status_code=code)
    if result.status is Status.SINGULAR:
        raise SingularMatrixError(
            message, matrix_name=matrix_name, routine=routine, status_code=code
        )
    if result.status is Status.NOT_POSITIVE_DEFINITE:
        raise NotPositiveDefiniteError(
            message, matrix_name=matrix_name, routine=routine, status_code=code
        )


def finish(
    params: Any,
    *,
    status: Status,
    info: dict[str, Any],
    timer: Timer,
    backend: Backend,
    strict: bool,
    fallback: str,
) -> Result[Any]:
    """
    Assemble the Result and apply the failure policy.

    Args:
        params: Operation payload (already degraded on failure)
        status: Outcome of the backend computation
        info: Metadata; must contain 'routine' and 'status_code'
        timer: Started timer for the operation
        backend: Backend that ran the operation
        strict: Raise on failure instead of degrading
        fallback: Description of the degraded output, for the message

    Raises:
        ConvergenceError, SingularMatrixError, NotPositiveDefiniteError:
            On failure when strict is True
    """
    timer.stop()
    result_warnings: tuple[str, ...] = ()
    if status is not Status.OK:
        message = failure_message(info['routine'], status, info['status_code'], fallback)
        info['message'] = message
        result_warnings = (message,)

    result = Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend.name,
        warnings=result_warnings,
        status=status,
    )

    if status is not Status.OK:
        if strict:
            raise_for_status(result)
        warnings.warn(result_warnings[0], NumericalWarning, stacklevel=4)
    return result
