"""
Plan factory: picks a transform algorithm for a given size.

    nfft == 1 or prime          -> direct DFT
    power of two                -> radix-2 (unless PlanFlags.NO_RADIX2)
    any other composite length  -> mixed-radix (Cooley-Tukey)

PlanFlags.FORCE_DFT overrides the table and always selects the direct DFT.
"""

from typing import Optional

import numpy as np

from .dft import DFTPlan
from .errors import InvalidPlanError
from .memory import HeapAllocator
from .mixed_radix import MixedRadixPlan, smallest_factor
from .plan import Direction, FFTPlan, Method, PlanFlags
from .radix2 import Radix2Plan, is_power_of_two

PLAN_TYPES = {
    Method.DFT: DFTPlan,
    Method.RADIX2: Radix2Plan,
    Method.MIXED_RADIX: MixedRadixPlan,
}


def is_prime(n: int) -> bool:
    return n >= 2 and smallest_factor(n) == 0


def select_method(nfft: int, flags: PlanFlags = PlanFlags.NONE) -> Method:
    """Algorithm used for a transform of length ``nfft``."""
    if nfft < 1:
        raise InvalidPlanError(f"nfft must be positive, got {nfft}")
    if flags & PlanFlags.FORCE_DFT or nfft == 1 or is_prime(nfft):
        return Method.DFT
    if is_power_of_two(nfft) and not flags & PlanFlags.NO_RADIX2:
        return Method.RADIX2
    return Method.MIXED_RADIX


def create_plan(
    nfft: int,
    x: np.ndarray,
    y: np.ndarray,
    direction: Direction = Direction.FORWARD,
    flags: PlanFlags = PlanFlags.NONE,
    *,
    logger=None,
    allocator: Optional[HeapAllocator] = None
) -> FFTPlan:
    """
    Create a plan transforming ``x`` into ``y``.

    Parameters
    ----------
    nfft : int
        Transform length
    x, y : np.ndarray
        Input and output buffers (complex64 or complex128, length >= nfft).
        Both are owned by the caller and must outlive the plan.
    direction : Direction
        FORWARD uses exp(-2*pi*i*k*n/N), INVERSE exp(+2*pi*i*k*n/N); the
        inverse is not scaled by 1/N
    flags : PlanFlags
        Options applied to the whole plan tree
    logger : logging.Logger, optional
        Logger for the plan tree
    allocator : HeapAllocator, optional
        Allocator for every buffer owned by the plan tree; inject a
        BufferAllocator to count live buffers

    Returns
    -------
    FFTPlan
        Must be released with ``destroy_plan`` (or used as a context manager)

    Examples
    --------
    >>> x = np.zeros(6, dtype=np.complex128); x[0] = 1
    >>> y = np.empty(6, dtype=np.complex128)
    >>> plan = create_plan(6, x, y)
    >>> execute(plan)
    >>> y  # all ones
    >>> destroy_plan(plan)
    """
    method = select_method(int(nfft), PlanFlags(flags))
    return PLAN_TYPES[method](nfft, x, y, direction, flags, logger=logger, allocator=allocator)


def execute(plan: FFTPlan) -> None:
    plan.execute()


def destroy_plan(plan: FFTPlan) -> None:
    plan.destroy()
