"""
Exceptions raised while building FFT plans.

Plan execution never raises; everything that can go wrong is detected when
the plan is created.
"""


class FFTError(Exception):
    """Base class for all fft_core errors."""


class PlanConstructionError(FFTError):
    """A plan could not be built."""


class InvalidPlanError(PlanConstructionError, ValueError):
    """Bad transform size or input/output buffers."""


class PrimeSizeError(PlanConstructionError, ValueError):
    """A mixed-radix plan was requested for a prime length."""

    def __init__(self, nfft: int):
        self.nfft = nfft
        super().__init__(
            f"mixed-radix transform needs a composite size, nfft={nfft} is prime"
        )


class AllocationError(PlanConstructionError, MemoryError):
    """Buffer allocation failed or a buffer was released twice."""
