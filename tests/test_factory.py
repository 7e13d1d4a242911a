"""
Unit tests for the plan factory and the base-case plans.

Run:
    pytest tests/test_factory.py -v
"""

import numpy as np
import pytest
from scipy.fft import fft as scipy_fft, ifft as scipy_ifft

from fft_core import (
    DFTPlan,
    Direction,
    InvalidPlanError,
    Method,
    MixedRadixPlan,
    PlanConstructionError,
    PlanFlags,
    Radix2Plan,
    create_plan,
    destroy_plan,
    direct_dft,
    execute,
    is_prime,
    select_method,
)
from fft_core.radix2 import is_power_of_two

from conftest import random_signal, rel_error


class TestSelectMethod:
    """Size-based dispatch."""

    def test_dispatch_table(self):
        expected = {
            1: Method.DFT,
            2: Method.DFT,
            3: Method.DFT,
            4: Method.RADIX2,
            6: Method.MIXED_RADIX,
            7: Method.DFT,
            9: Method.MIXED_RADIX,
            64: Method.RADIX2,
            97: Method.DFT,
            100: Method.MIXED_RADIX,
            1024: Method.RADIX2,
        }
        for n, method in expected.items():
            assert select_method(n) == method, f"n={n}"

    def test_flags(self):
        assert select_method(64, PlanFlags.NO_RADIX2) == Method.MIXED_RADIX
        assert select_method(2, PlanFlags.NO_RADIX2) == Method.DFT
        assert select_method(100, PlanFlags.FORCE_DFT) == Method.DFT
        assert select_method(64, PlanFlags.FORCE_DFT | PlanFlags.NO_RADIX2) == Method.DFT

    def test_invalid_size(self):
        for n in [0, -4]:
            with pytest.raises(InvalidPlanError):
                select_method(n)

    def test_is_prime(self):
        primes = [n for n in range(50) if is_prime(n)]
        assert primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]

    def test_is_power_of_two(self):
        assert [n for n in range(70) if is_power_of_two(n)] == [1, 2, 4, 8, 16, 32, 64]


class TestCreatePlan:
    """create_plan / execute / destroy_plan."""

    def test_plan_types(self):
        for n, cls in [(1, DFTPlan), (5, DFTPlan), (16, Radix2Plan), (24, MixedRadixPlan)]:
            x = np.zeros(n, dtype=np.complex128)
            y = np.zeros(n, dtype=np.complex128)
            plan = create_plan(n, x, y)
            assert type(plan) is cls
            destroy_plan(plan)

    def test_polymorphic_execute(self, allocator, rng):
        """execute() works the same for every concrete plan."""
        for n in [1, 2, 13, 32, 48, 243]:
            x = random_signal(rng, n)
            y = np.zeros(n, dtype=np.complex128)
            plan = create_plan(n, x, y, Direction.FORWARD, allocator=allocator)
            execute(plan)
            destroy_plan(plan)
            assert rel_error(y, scipy_fft(x)) < 1e-10, f"n={n}"
        assert allocator.live_count == 0

    def test_inverse_matches_scipy(self, rng):
        """INVERSE is scipy's ifft without the 1/N factor."""
        for n in [7, 16, 30, 64]:
            x = random_signal(rng, n)
            y = np.zeros(n, dtype=np.complex128)
            with create_plan(n, x, y, Direction.INVERSE) as plan:
                plan.execute()
            assert rel_error(y, n * scipy_ifft(x)) < 1e-10

    def test_force_dft(self, rng):
        x = random_signal(rng, 60)
        y = np.zeros(60, dtype=np.complex128)
        with create_plan(60, x, y, flags=PlanFlags.FORCE_DFT) as plan:
            assert plan.method == Method.DFT
            assert not plan.subplans
            plan.execute()
        assert rel_error(y, scipy_fft(x)) < 1e-10

    def test_no_radix2_tree(self):
        """With NO_RADIX2 a power of two decomposes down to size-2 DFTs."""
        x = np.zeros(16, dtype=np.complex128)
        y = np.zeros(16, dtype=np.complex128)
        with create_plan(16, x, y, flags=PlanFlags.NO_RADIX2) as plan:
            node, depth = plan, 0
            while node.subplans:
                assert node.method == Method.MIXED_RADIX
                assert node.Q == 2
                node, depth = node.subplans[0], depth + 1
            assert node.method == Method.DFT and node.nfft == 2
            assert depth == 3

    def test_flags_reach_subplans(self):
        x = np.zeros(36, dtype=np.complex128)
        y = np.zeros(36, dtype=np.complex128)
        flags = PlanFlags.NO_RADIX2 | PlanFlags.TRACE
        with create_plan(36, x, y, flags=flags) as plan:
            assert all(sub.flags == flags for sub in plan.subplans)


class TestBufferValidation:
    """Bad buffers are rejected at construction."""

    def test_rejects_real_buffers(self):
        x = np.zeros(12)
        y = np.zeros(12)
        with pytest.raises(InvalidPlanError):
            create_plan(12, x, y)

    def test_rejects_short_buffers(self):
        x = np.zeros(10, dtype=np.complex128)
        y = np.zeros(12, dtype=np.complex128)
        with pytest.raises(InvalidPlanError, match="input buffer holds 10"):
            create_plan(12, x, y)

    def test_rejects_dtype_mismatch(self):
        x = np.zeros(12, dtype=np.complex64)
        y = np.zeros(12, dtype=np.complex128)
        with pytest.raises(InvalidPlanError):
            create_plan(12, x, y)

    def test_rejects_non_arrays(self):
        with pytest.raises(InvalidPlanError):
            create_plan(4, [0j] * 4, np.zeros(4, dtype=np.complex128))

    def test_rejects_2d(self):
        x = np.zeros((2, 6), dtype=np.complex128)
        with pytest.raises(InvalidPlanError):
            create_plan(12, x, x)

    def test_rejects_bad_direction(self):
        x = np.zeros(12, dtype=np.complex128)
        y = np.zeros(12, dtype=np.complex128)
        for direction in [0, 2, "forward"]:
            with pytest.raises(InvalidPlanError, match="direction"):
                create_plan(12, x, y, direction)

    def test_error_hierarchy(self):
        """Construction errors are also ValueErrors for generic callers."""
        assert issubclass(InvalidPlanError, PlanConstructionError)
        assert issubclass(InvalidPlanError, ValueError)

    def test_radix2_rejects_other_sizes(self, allocator):
        x = np.zeros(12, dtype=np.complex128)
        y = np.zeros(12, dtype=np.complex128)
        with pytest.raises(InvalidPlanError):
            Radix2Plan(12, x, y, allocator=allocator)
        assert allocator.num_allocations == 0


class TestBasePlans:
    """Direct DFT and radix-2 kernels."""

    def test_direct_dft_matches_scipy(self, rng):
        for n in [1, 2, 3, 11, 31]:
            x = random_signal(rng, n)
            assert rel_error(direct_dft(x), scipy_fft(x)) < 1e-12

    def test_dft_single_precision(self, rng):
        x = random_signal(rng, 31, np.complex64)
        y = np.zeros(31, dtype=np.complex64)
        with DFTPlan(31, x, y) as plan:
            plan.execute()
        assert y.dtype == np.complex64
        assert rel_error(y, direct_dft(x)) < 1e-6

    def test_radix2_power_of_2(self, rng):
        """Test radix-2 plan on power-of-2 lengths."""
        for N in [2, 4, 64, 128, 256, 512, 1024]:
            x = random_signal(rng, N)
            y = np.zeros(N, dtype=np.complex128)
            with Radix2Plan(N, x, y) as plan:
                plan.execute()
            error = np.abs(y - scipy_fft(x))
            assert error.max() < 1e-10, f"radix-2 failed for N={N}"

    def test_radix2_inverse(self, rng):
        x = random_signal(rng, 32)
        y = np.zeros(32, dtype=np.complex128)
        with Radix2Plan(32, x, y, Direction.INVERSE) as plan:
            plan.execute()
        assert rel_error(y, 32 * scipy_ifft(x)) < 1e-12
