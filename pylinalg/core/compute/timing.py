"""
Execution timing utilities.

Every dense operation times its phases (layout translation, workspace
query, factorization, post-processing) and reports them in Result.timing.
GPU backends synchronize the device before each measurement so that
asynchronous kernels are attributed to the right phase.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Literal

SyncTarget = Literal['cuda', 'mps'] | None


class Timer:
    """
    Accumulating section timer with optional device synchronization.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('workspace_query'):
            lwork = query_workspace(backend, 'gesvd', dtype, m=m, n=n)

        with timer.section('factorization'):
            u, s, vt, info = backend.gesvd(a, full_matrices=True, lwork=lwork)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.004, 'workspace_query': 0.0001, 'factorization': 0.0039}
    """

    def __init__(self, sync: SyncTarget = None):
        """
        Initialize timer.

        Args:
            sync: Device to synchronize before each measurement
                ('cuda', 'mps'), or None for host-only timing.
        """
        self._sync_target = sync
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        """Synchronize the target device, if any."""
        if self._sync_target is None:
            return
        import torch
        if self._sync_target == 'cuda' and torch.cuda.is_available():
            torch.cuda.synchronize()
        elif self._sync_target == 'mps' and torch.backends.mps.is_available():
            torch.mps.synchronize()

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section.

        Args:
            name: Section identifier (used as key in result dict)

        Note:
            Repeated sections with the same name accumulate.
        """
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result


@contextmanager
def timed(sync: SyncTarget = None) -> Iterator[Timer]:
    """
    Context manager for simple timing.

    Usage:
        with timed() as timer:
            solution = svd(A)
        print(f"Took {timer.result()['total_seconds']:.3f}s")
    """
    timer = Timer(sync=sync)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
