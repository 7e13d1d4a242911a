"""
One-shot 1-D transforms built on top of the plan API.

Each call creates a plan, executes it once and destroys it. Code that
transforms many signals of the same length should keep a plan instead.
"""

from typing import Optional

import numpy as np

from .factory import create_plan
from .memory import HeapAllocator
from .plan import Direction, PlanFlags

_NORMS = ("backward", "ortho", "forward")


def _prepare(x, n: Optional[int]) -> np.ndarray:
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")

    # single precision in, single precision out
    if x.dtype in (np.float32, np.complex64):
        dtype = np.complex64
    else:
        dtype = np.complex128

    if n is None:
        n = x.shape[0]
    if n < 1:
        raise ValueError(f"Invalid number of FFT data points ({n})")

    # Pad or truncate to desired length
    buf = np.zeros(n, dtype=dtype)
    m = min(n, x.shape[0])
    buf[:m] = x[:m]
    return buf


def _transform(x, n, norm, flags, direction, allocator) -> np.ndarray:
    if norm not in _NORMS:
        raise ValueError(f"Invalid norm value {norm!r}; should be one of {_NORMS}")

    buf = _prepare(x, n)
    out = np.empty_like(buf)
    with create_plan(len(buf), buf, out, direction, flags, allocator=allocator) as plan:
        plan.execute()

    # Apply normalization
    n = len(buf)
    if norm == "ortho":
        out /= np.sqrt(n)
    elif (norm == "forward") == (direction == Direction.FORWARD):
        out /= n
    return out


def fft(x: np.ndarray, n: Optional[int] = None, norm: str = "backward",
        flags: PlanFlags = PlanFlags.NONE, allocator: Optional[HeapAllocator] = None) -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform.

    Parameters
    ----------
    x : np.ndarray
        1-D input array
    n : int, optional
        Length of the transform. ``x`` is zero-padded or truncated to ``n``.
    norm : str
        Normalization mode: "backward", "ortho", or "forward"
    flags : PlanFlags
        Options for plan creation
    allocator : HeapAllocator, optional
        Allocator for the temporary plan's buffers

    Returns
    -------
    np.ndarray
        complex64 for single-precision input, complex128 otherwise

    Examples
    --------
    >>> X = fft(np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0]))
    >>> # Should match scipy.fft.fft(x)
    """
    return _transform(x, n, norm, flags, Direction.FORWARD, allocator)


def ifft(x: np.ndarray, n: Optional[int] = None, norm: str = "backward",
         flags: PlanFlags = PlanFlags.NONE, allocator: Optional[HeapAllocator] = None) -> np.ndarray:
    """
    Compute the 1-D inverse discrete Fourier Transform.

    With the default "backward" norm the result is scaled by 1/n, so
    ``ifft(fft(x))`` recovers ``x``.
    """
    return _transform(x, n, norm, flags, Direction.INVERSE, allocator)
