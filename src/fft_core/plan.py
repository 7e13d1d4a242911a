"""
Common plan interface shared by every transform algorithm.

A plan is created once for a fixed size, direction and pair of buffers,
executed any number of times, and destroyed exactly once. Composite plans
hold their sub-plans through this interface only, so a mixed-radix plan can
own a radix-2 plan, a direct DFT plan or another mixed-radix plan alike.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum, IntEnum, IntFlag
from typing import List, Optional

import numpy as np

from .errors import InvalidPlanError
from .memory import HeapAllocator, default_allocator


class Direction(IntEnum):
    """Transform direction. The value is the sign of the twiddle exponent."""
    FORWARD = -1
    INVERSE = 1

    @property
    def sign(self) -> int:
        return int(self.value)


class PlanFlags(IntFlag):
    """Options passed unchanged down the whole plan tree."""
    NONE = 0
    NO_RADIX2 = 1   # route powers of two through the mixed-radix plan
    FORCE_DFT = 2   # use the direct DFT for every size
    TRACE = 4       # dump intermediate values at DEBUG level


class Method(Enum):
    DFT = 'dft'
    RADIX2 = 'radix-2'
    MIXED_RADIX = 'mixed-radix'


class FFTPlan(ABC):
    """
    Base class for all transform plans.

    Args:
        nfft: Transform length
        x: Input buffer, 1-D complex array with at least ``nfft`` samples
        y: Output buffer, same dtype as ``x``, at least ``nfft`` samples
        direction: ``Direction.FORWARD`` or ``Direction.INVERSE``
        flags: ``PlanFlags`` bit set
        logger: Logger used by this plan and handed to its sub-plans
        allocator: Source of every buffer the plan owns

    The plan works on views of the first ``nfft`` samples of ``x`` and ``y``;
    the caller keeps ownership of both arrays.
    """

    method: Method

    def __init__(
        self,
        nfft: int,
        x: np.ndarray,
        y: np.ndarray,
        direction: Direction = Direction.FORWARD,
        flags: PlanFlags = PlanFlags.NONE,
        *,
        logger: Optional[logging.Logger] = None,
        allocator: Optional[HeapAllocator] = None
    ):
        self.logger = logger if logger is not None else logging.getLogger(type(self).__module__)
        self.allocator = allocator if allocator is not None else default_allocator
        self.subplans: List['FFTPlan'] = []
        self._buffers: List[np.ndarray] = []
        self._destroyed = False

        nfft = int(nfft)
        if nfft < 1:
            raise InvalidPlanError(f"nfft must be positive, got {nfft}")
        _check_buffer('input', x, nfft)
        _check_buffer('output', y, nfft)
        if x.dtype != y.dtype:
            raise InvalidPlanError(f"input dtype {x.dtype} != output dtype {y.dtype}")

        self.nfft = nfft
        self.x = x[:nfft]
        self.y = y[:nfft]
        self.dtype = x.dtype
        try:
            self.direction = Direction(direction)
        except ValueError as exc:
            raise InvalidPlanError(f"direction must be FORWARD (-1) or INVERSE (+1), got {direction!r}") from exc
        self.flags = PlanFlags(flags)

    @abstractmethod
    def execute(self) -> None:
        """Transform the current contents of ``x`` into ``y``."""

    def destroy(self) -> None:
        """
        Release sub-plans (depth first) and then owned buffers in reverse
        order of allocation. Calling it again is a no-op.
        """
        if self._destroyed:
            self.logger.warning("%s plan n=%d destroyed twice", self.method.value, self.nfft)
            return
        self._destroyed = True

        try:
            self._destroy_subplans()
        finally:
            self._free_buffers()

        self.logger.debug("destroyed %s plan n=%d", self.method.value, self.nfft)

    def _destroy_subplans(self) -> None:
        # every sibling is destroyed even if an earlier one raises
        if self.subplans:
            child = self.subplans.pop(0)
            try:
                child.destroy()
            finally:
                self._destroy_subplans()

    def _free_buffers(self) -> None:
        if self._buffers:
            buf = self._buffers.pop()
            try:
                self.allocator.free(buf)
            finally:
                self._free_buffers()

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def _allocate(self, length: int, dtype=None) -> np.ndarray:
        buf = self.allocator.allocate(length, self.dtype if dtype is None else dtype)
        self._buffers.append(buf)
        return buf

    def _summary(self) -> str:
        return f"{self.method.value:<12s} n={self.nfft} {self.direction.name}"

    def describe(self, indent: int = 0) -> str:
        """Indented, multi-line description of this plan and its sub-plans."""
        lines = [" " * indent + self._summary()]
        for subplan in self.subplans:
            lines.append(subplan.describe(indent + 2))
        return "\n".join(lines)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.destroy()
        return False

    def __repr__(self) -> str:
        state = ', destroyed' if self._destroyed else ''
        return (f"{type(self).__name__}(nfft={self.nfft}, direction={self.direction.name}, "
                f"dtype={self.dtype}{state})")


def _check_buffer(name: str, buf, nfft: int) -> None:
    if not isinstance(buf, np.ndarray):
        raise InvalidPlanError(f"{name} buffer must be a numpy array, got {type(buf).__name__}")
    if buf.ndim != 1:
        raise InvalidPlanError(f"{name} buffer must be 1D, got shape {buf.shape}")
    if buf.dtype not in (np.complex64, np.complex128):
        raise InvalidPlanError(f"{name} buffer must be complex64 or complex128, got {buf.dtype}")
    if len(buf) < nfft:
        raise InvalidPlanError(f"{name} buffer holds {len(buf)} samples, need {nfft}")
