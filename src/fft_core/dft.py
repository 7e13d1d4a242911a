"""
Direct DFT plan.

Base case of the plan tree: prime lengths (and length 1) are transformed with
the O(N^2) definition of the DFT. The N roots of unity are computed once when
the plan is built, so execution is a pure multiply-accumulate loop compiled
with Numba.
"""

import numpy as np
from numba import jit

from .plan import Direction, FFTPlan, Method


@jit(nopython=True, cache=True)
def _dft_direct(x: np.ndarray, X: np.ndarray, twiddle: np.ndarray) -> None:
    """X[k] = sum_n x[n] * twiddle[(k*n) mod N] (JIT compiled)."""
    N = len(x)
    for k in range(N):
        s = 0j
        for n in range(N):
            s += x[n] * twiddle[(k * n) % N]
        X[k] = s


def roots_of_unity(nfft: int, direction: Direction) -> np.ndarray:
    """exp(sign * 2*pi*i * k / nfft) for k in [0, nfft), double precision."""
    theta = Direction(direction).sign * 2.0 * np.pi * np.arange(nfft) / nfft
    return np.cos(theta) + 1j * np.sin(theta)


def direct_dft(x: np.ndarray, direction: Direction = Direction.FORWARD) -> np.ndarray:
    """
    Reference DFT computed straight from the definition.

    Parameters
    ----------
    x : np.ndarray
        1-D input signal
    direction : Direction
        Sign of the exponent; the inverse is not normalized

    Returns
    -------
    np.ndarray
        complex128 array with the same length as ``x``
    """
    x = np.asarray(x, dtype=np.complex128)
    N = len(x)
    X = np.empty(N, dtype=np.complex128)
    _dft_direct(x, X, roots_of_unity(N, direction))
    return X


class DFTPlan(FFTPlan):
    """O(N^2) transform for any length, used for primes and size 1."""

    method = Method.DFT

    def __init__(self, nfft, x, y, direction=Direction.FORWARD, flags=0, *,
                 logger=None, allocator=None):
        super().__init__(nfft, x, y, direction, flags, logger=logger, allocator=allocator)

        try:
            self.twiddle = self._allocate(self.nfft, np.complex128)
            self.work = self._allocate(self.nfft, np.complex128)
            self.twiddle[:] = roots_of_unity(self.nfft, self.direction)
        except Exception:
            self.destroy()
            raise

        self.logger.debug("created dft plan n=%d %s", self.nfft, self.direction.name)

    def execute(self) -> None:
        assert not self._destroyed, "execute() on a destroyed plan"
        _dft_direct(self.x, self.work, self.twiddle)
        np.copyto(self.y, self.work, casting='same_kind')
