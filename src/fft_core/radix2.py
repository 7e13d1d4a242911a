"""
Radix-2 plan using Numba JIT

Iterative Cooley-Tukey radix-2 DIT transform for power-of-two lengths.
Optimizations:
1. Numba JIT compilation (nopython mode)
2. Iterative (non-recursive) implementation - avoids Python call overhead
3. Bit-reversal permutation straight into the work buffer
4. Cache compiled functions
"""

import math

import numpy as np
from numba import jit

from .errors import InvalidPlanError
from .plan import Direction, FFTPlan, Method


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray, X: np.ndarray, sign: int) -> None:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT (Numba JIT).

    Reads ``x`` and writes the transform into the complex128 buffer ``X``.
    ``sign`` is -1 for the forward and +1 for the inverse transform.
    """
    N = len(x)
    n_bits = int(math.log2(N))

    # Bit-reversal permutation
    for i in range(N):
        j = _bit_reverse(i, n_bits)
        X[j] = x[i]

    # Process stages: size 2, 4, 8, ..., N
    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2
        w_mult = np.exp(sign * 2j * np.pi / stage_size)

        for k in range(0, N, stage_size):
            w = 1.0 + 0j
            for j in range(half_size):
                even_idx = k + j
                odd_idx = k + j + half_size

                even = X[even_idx]
                odd = X[odd_idx] * w

                X[even_idx] = even + odd
                X[odd_idx] = even - odd

                w = w * w_mult

        stage_size *= 2


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


class Radix2Plan(FFTPlan):
    """Power-of-two transform (N >= 2)."""

    method = Method.RADIX2

    def __init__(self, nfft, x, y, direction=Direction.FORWARD, flags=0, *,
                 logger=None, allocator=None):
        super().__init__(nfft, x, y, direction, flags, logger=logger, allocator=allocator)
        if self.nfft < 2 or not is_power_of_two(self.nfft):
            raise InvalidPlanError(f"radix-2 plan needs a power of two >= 2, got nfft={self.nfft}")

        self.work = self._allocate(self.nfft, np.complex128)
        self.logger.debug("created radix-2 plan n=%d %s", self.nfft, self.direction.name)

    def execute(self) -> None:
        assert not self._destroyed, "execute() on a destroyed plan"
        _fft_radix2_iter(self.x, self.work, self.direction.sign)
        np.copyto(self.y, self.work, casting='same_kind')
