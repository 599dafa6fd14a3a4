"""
Tests for the Result[P] envelope.

Validates:
    - Generic payloads and frozen immutability
    - Default factories (warnings, provenance) and the default Status
    - ok / has_warning()
    - Provenance metadata contains expected version keys
"""

from dataclasses import FrozenInstanceError, dataclass

import numpy as np
import pytest

from pylinalg.core.result import Result, Status, _default_provenance


# ═══════════════════════════════════════════════════════════════════════
# Test payload types
# ═══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    X: np.ndarray


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(X=np.eye(2)),
        info={'routine': 'gesv', 'status_code': 0},
        timing=None,
        backend_name='cpu_lapack',
    )
    defaults.update(kwargs)
    return Result(**defaults)


# ═══════════════════════════════════════════════════════════════════════
# Construction and field access
# ═══════════════════════════════════════════════════════════════════════


class TestResultConstruction:

    def test_basic_creation(self):
        result = _result(timing={'total_seconds': 0.01, 'factorization': 0.008})
        np.testing.assert_array_equal(result.params.X, np.eye(2))
        assert result.info['routine'] == 'gesv'
        assert result.timing['factorization'] == 0.008
        assert result.backend_name == 'cpu_lapack'

    def test_timing_none(self):
        assert _result().timing is None


# ═══════════════════════════════════════════════════════════════════════
# Status
# ═══════════════════════════════════════════════════════════════════════


class TestStatus:

    def test_default_is_ok(self):
        result = _result()
        assert result.status is Status.OK
        assert result.ok is True

    @pytest.mark.parametrize("status", [
        Status.NON_CONVERGENCE,
        Status.SINGULAR,
        Status.NOT_POSITIVE_DEFINITE,
    ])
    def test_failure_status_not_ok(self, status):
        result = _result(status=status)
        assert result.status is status
        assert result.ok is False

    def test_failed_zero_payload_distinguishable(self):
        """A zero payload from a failure differs from a valid zero result by status."""
        failed = _result(params=FakeParams(X=np.zeros((2, 2))), status=Status.SINGULAR)
        valid = _result(params=FakeParams(X=np.zeros((2, 2))))
        np.testing.assert_array_equal(failed.params.X, valid.params.X)
        assert failed.ok != valid.ok


# ═══════════════════════════════════════════════════════════════════════
# Default factories
# ═══════════════════════════════════════════════════════════════════════


class TestDefaults:

    def test_warnings_default_empty(self):
        result = _result()
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)

    def test_provenance_auto_generated(self):
        result = _result()
        assert "pylinalg_version" in result.provenance
        assert "numpy_version" in result.provenance
        assert "scipy_version" in result.provenance

    def test_provenance_explicit_override(self):
        result = _result(provenance={"custom": "metadata"})
        assert result.provenance == {"custom": "metadata"}


# ═══════════════════════════════════════════════════════════════════════
# Immutability
# ═══════════════════════════════════════════════════════════════════════


class TestImmutability:
    """Result is frozen; no attribute mutation allowed."""

    def test_cannot_set_params(self):
        with pytest.raises(FrozenInstanceError):
            _result().params = FakeParams(X=np.zeros(1))

    def test_cannot_set_status(self):
        with pytest.raises(FrozenInstanceError):
            _result().status = Status.SINGULAR

    def test_cannot_set_warnings(self):
        with pytest.raises(FrozenInstanceError):
            _result().warnings = ("new warning",)


# ═══════════════════════════════════════════════════════════════════════
# has_warning()
# ═══════════════════════════════════════════════════════════════════════


class TestHasWarning:

    def test_no_warnings_returns_false(self):
        assert _result().has_warning("anything") is False

    def test_substring_match(self):
        result = _result(warnings=("gesv matrix is singular (status 2); X zero-filled",))
        assert result.has_warning("singular") is True
        assert result.has_warning("zero-filled") is True
        assert result.has_warning("converge") is False


# ═══════════════════════════════════════════════════════════════════════
# _default_provenance()
# ═══════════════════════════════════════════════════════════════════════


class TestDefaultProvenance:

    def test_contains_versions(self):
        import pylinalg
        prov = _default_provenance()
        assert prov["pylinalg_version"] == pylinalg.__version__
        assert prov["numpy_version"] == np.__version__
        assert isinstance(prov["scipy_version"], str)

    def test_independent_copies(self):
        prov1 = _default_provenance()
        prov2 = _default_provenance()
        assert prov1 is not prov2
        assert prov1 == prov2
