"""
Mixed-radix plan (Cooley-Tukey decomposition)

A composite length N is split as N = P * Q, where Q is the smallest factor of
N. The N-point transform then becomes

1. Q transforms of size P over the decimated sequences x[Q*k + i],
   each output multiplied by the twiddle factor W_N^(i*k),
2. P transforms of size Q over the contiguous blocks x[Q*i : Q*i + Q],
   written back transposed (y[k*P + i]).

Both sub-transforms are ordinary plans obtained from the plan factory, so a
mixed-radix plan recursively decomposes until it reaches a prime or
power-of-two size.
"""

from typing import Callable, Optional

import numpy as np

from .errors import InvalidPlanError, PrimeSizeError
from .plan import Direction, FFTPlan, Method, PlanFlags

PlanFactory = Callable[..., FFTPlan]


def smallest_factor(n: int) -> int:
    """
    Smallest integer q in [2, n) dividing n, or 0 if n is prime.

    Linear scan from 2 upward; the choice of the smallest factor fixes the
    shape of the plan tree, so no other factorization is attempted.
    """
    for q in range(2, n):
        if n % q == 0:
            return q
    return 0


class MixedRadixPlan(FFTPlan):
    """
    Cooley-Tukey plan for a composite transform length.

    Args:
        nfft: Composite transform length (>= 4)
        x: Input buffer, read but never modified
        y: Output buffer
        direction: ``Direction.FORWARD`` or ``Direction.INVERSE``; the inverse
            is not normalized
        flags: ``PlanFlags``, forwarded to both sub-plans
        factory: Callable building the P- and Q-point sub-plans with the
            signature of ``fft_core.factory.create_plan``
        logger: Logger for this plan and its sub-plans
        allocator: Allocator for every owned buffer (inject a
            ``BufferAllocator`` to count them)

    Raises:
        PrimeSizeError: nfft is prime; nothing is allocated in that case
        AllocationError: a buffer could not be allocated; everything built
            so far is released first
    """

    method = Method.MIXED_RADIX

    def __init__(
        self,
        nfft: int,
        x: np.ndarray,
        y: np.ndarray,
        direction: Direction = Direction.FORWARD,
        flags: PlanFlags = PlanFlags.NONE,
        *,
        factory: Optional[PlanFactory] = None,
        logger=None,
        allocator=None
    ):
        super().__init__(nfft, x, y, direction, flags, logger=logger, allocator=allocator)
        if self.nfft < 2:
            raise InvalidPlanError(f"mixed-radix plan needs nfft >= 2, got {self.nfft}")

        Q = smallest_factor(self.nfft)
        if Q == 0:
            self.logger.error("mixed-radix plan requested for prime nfft=%d", self.nfft)
            raise PrimeSizeError(self.nfft)
        P = self.nfft // Q
        self.P = P
        self.Q = Q

        if factory is None:
            from .factory import create_plan as factory

        try:
            # scratch buffers are shared by both sub-plans
            t_len = max(P, Q)
            self.scratch_a = self._allocate(t_len)
            self.scratch_b = self._allocate(t_len)
            self.staging = self._allocate(self.nfft)
            self.twiddle = self._allocate(self.nfft)
            # twiddle[(i*k) mod N] gathered per pass-1 row i
            self.twiddle_rows = self._allocate(self.nfft).reshape(Q, P)

            sub_kwargs = dict(logger=self.logger, allocator=self.allocator)
            self.subplans.append(factory(P, self.scratch_a[:P], self.scratch_b[:P],
                                         self.direction, self.flags, **sub_kwargs))
            self.subplans.append(factory(Q, self.scratch_a[:Q], self.scratch_b[:Q],
                                         self.direction, self.flags, **sub_kwargs))

            theta = self.direction.sign * 2.0 * np.pi * np.arange(self.nfft) / self.nfft
            self.twiddle[:] = np.cos(theta) + 1j * np.sin(theta)
            self.twiddle_rows[:] = self.twiddle[(np.arange(Q)[:, None] * np.arange(P)) % self.nfft]
        except Exception:
            self.destroy()
            raise

        self._trace = bool(self.flags & PlanFlags.TRACE)
        self.logger.debug("created mixed-radix plan n=%d P=%d Q=%d %s",
                          self.nfft, P, Q, self.direction.name)

    @property
    def plan_p(self) -> FFTPlan:
        return self.subplans[0]

    @property
    def plan_q(self) -> FFTPlan:
        return self.subplans[1]

    def execute(self) -> None:
        assert not self._destroyed, "execute() on a destroyed plan"
        P, Q, N = self.P, self.Q, self.nfft
        t0, t1 = self.scratch_a, self.scratch_b
        x = self.staging
        twiddle_rows = self.twiddle_rows
        plan_p, plan_q = self.subplans

        # copy input to internal buffer
        np.copyto(x, self.x)

        # compute Q DFTs of size P
        if self._trace:
            self.logger.debug("n=%d: computing %d DFTs of size %d", N, Q, P)
        for i in range(Q):
            t0[:P] = x[i::Q]
            plan_p.execute()
            np.multiply(t1[:P], twiddle_rows[i], out=x[i::Q])
            if self._trace:
                self.logger.debug("  i=%3d/%3d %s", i, Q, np.array2string(x[i::Q], precision=6))

        # compute P DFTs of size Q and transpose
        if self._trace:
            self.logger.debug("n=%d: computing %d DFTs of size %d", N, P, Q)
        for i in range(P):
            t0[:Q] = x[Q * i:Q * (i + 1)]
            plan_q.execute()
            self.y[i::P] = t1[:Q]
            if self._trace:
                self.logger.debug("  i=%3d/%3d %s", i, P, np.array2string(self.y[i::P], precision=6))

    def _summary(self) -> str:
        return f"{super()._summary()} (P={self.P}, Q={self.Q})"
