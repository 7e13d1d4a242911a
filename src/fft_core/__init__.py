"""
FFT Core Module - Plan-based FFT with Mixed-Radix Cooley-Tukey Decomposition

Transforms are described by plans that are built once for a size, direction
and pair of buffers, executed repeatedly, and destroyed when no longer
needed. Composite lengths are split as N = P * Q and handled by recursive
mixed-radix plans; primes fall back to a direct DFT and powers of two to a
radix-2 kernel.

Modules:
    - plan: plan interface, Direction, PlanFlags
    - mixed_radix: Cooley-Tukey mixed-radix plan
    - dft, radix2: base-case plans
    - factory: size-based algorithm dispatch
    - transforms: one-shot fft / ifft
    - memory: tracked buffer allocation
"""

from .errors import (
    FFTError,
    PlanConstructionError,
    InvalidPlanError,
    PrimeSizeError,
    AllocationError,
)
from .memory import HeapAllocator, BufferAllocator, default_allocator
from .plan import FFTPlan, Direction, PlanFlags, Method
from .dft import DFTPlan, direct_dft
from .radix2 import Radix2Plan
from .mixed_radix import MixedRadixPlan, smallest_factor
from .factory import create_plan, execute, destroy_plan, select_method, is_prime
from .transforms import fft, ifft

__all__ = [
    # Plans
    'FFTPlan',
    'DFTPlan',
    'Radix2Plan',
    'MixedRadixPlan',
    'Direction',
    'PlanFlags',
    'Method',
    # Factory
    'create_plan',
    'execute',
    'destroy_plan',
    'select_method',
    'is_prime',
    'smallest_factor',
    # One-shot transforms
    'fft',
    'ifft',
    'direct_dft',
    # Memory
    'HeapAllocator',
    'BufferAllocator',
    'default_allocator',
    # Errors
    'FFTError',
    'PlanConstructionError',
    'InvalidPlanError',
    'PrimeSizeError',
    'AllocationError',
]

__version__ = '1.0.0'
