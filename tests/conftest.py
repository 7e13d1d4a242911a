import numpy as np
import pytest

from fft_core import BufferAllocator


@pytest.fixture
def allocator():
    """Fresh allocator so each test can count its own buffers."""
    return BufferAllocator()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def random_signal(rng, n, dtype=np.complex128):
    return (rng.standard_normal(n) + 1j * rng.standard_normal(n)).astype(dtype)


def rel_error(actual, expected):
    return np.linalg.norm(actual - expected) / max(np.linalg.norm(expected), 1e-30)
