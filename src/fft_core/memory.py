"""
Buffer allocation for FFT plans.

Plans never call ``np.zeros`` directly for the buffers they own. They ask an
allocator instead. ``HeapAllocator`` hands out plain numpy buffers and keeps
no record of them; ``BufferAllocator`` additionally tracks every live buffer
so that a plan tree can be checked for leaks after it has been destroyed.
Leak tracking is opt-in: inject a ``BufferAllocator`` when building a plan.
"""

from typing import Dict, Optional

import numpy as np

from .errors import AllocationError


class HeapAllocator:
    """Untracked allocator; buffers are released by the garbage collector."""

    def allocate(self, length: int, dtype=np.complex128) -> np.ndarray:
        """
        Allocate a zero-filled buffer of ``length`` samples.

        Raises:
            AllocationError: if numpy cannot satisfy the request.
        """
        try:
            return np.zeros(length, dtype=dtype)
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate {length} x {np.dtype(dtype)}") from exc

    def free(self, buf: np.ndarray) -> None:
        pass

    def __repr__(self) -> str:
        return "HeapAllocator()"


class BufferAllocator(HeapAllocator):
    """
    Hands out zero-filled 1-D numpy buffers and tracks which are still live.

    Args:
        limit_bytes: Optional cap on the total size of live buffers. A request
            that would exceed it fails with ``AllocationError``, which makes
            resource exhaustion reproducible in tests.
    """

    def __init__(self, limit_bytes: Optional[int] = None):
        self.limit_bytes = limit_bytes
        self._live: Dict[int, np.ndarray] = {}
        self.live_bytes = 0
        self.num_allocations = 0
        self.num_frees = 0

    @property
    def live_count(self) -> int:
        return len(self._live)

    def allocate(self, length: int, dtype=np.complex128) -> np.ndarray:
        """
        Allocate a zero-filled buffer of ``length`` samples.

        Raises:
            AllocationError: if numpy cannot satisfy the request or the
                configured byte limit would be exceeded.
        """
        nbytes = int(length) * np.dtype(dtype).itemsize
        if self.limit_bytes is not None and self.live_bytes + nbytes > self.limit_bytes:
            raise AllocationError(
                f"cannot allocate {nbytes} bytes: {self.live_bytes} of "
                f"{self.limit_bytes} bytes already in use"
            )
        buf = super().allocate(length, dtype)

        self._live[id(buf)] = buf
        self.live_bytes += buf.nbytes
        self.num_allocations += 1
        return buf

    def free(self, buf: np.ndarray) -> None:
        """Release a buffer previously returned by :meth:`allocate`."""
        if self._live.pop(id(buf), None) is None:
            raise AllocationError("buffer was not allocated here or was already freed")
        self.live_bytes -= buf.nbytes
        self.num_frees += 1

    def owns(self, buf: np.ndarray) -> bool:
        return id(buf) in self._live

    def __repr__(self) -> str:
        return (f"BufferAllocator(live={self.live_count}, live_bytes={self.live_bytes}, "
                f"allocs={self.num_allocations}, frees={self.num_frees})")


# stateless, shared by plans built without an allocator
default_allocator = HeapAllocator()
