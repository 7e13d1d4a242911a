"""
YAML configuration for scripts that build FFT plans.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import yaml

from ..plan import PlanFlags

PRECISIONS = {
    'single': np.complex64,
    'double': np.complex128,
}


@dataclass
class FFTConfig:
    """Plan and benchmark settings."""
    precision: str = 'double'
    radix2: bool = True
    trace: bool = False
    log_level: str = 'INFO'
    sizes: List[int] = field(default_factory=lambda: [12, 60, 360, 1000, 1024, 4096])
    n_iter: int = 100
    seed: Optional[int] = None

    def __post_init__(self):
        if self.precision not in PRECISIONS:
            raise ValueError(f"Unknown precision {self.precision!r}, expected one of {list(PRECISIONS)}")
        self.sizes = [int(n) for n in self.sizes]
        if any(n < 1 for n in self.sizes):
            raise ValueError(f"FFT sizes must be positive, got {self.sizes}")

    @property
    def dtype(self):
        return PRECISIONS[self.precision]

    @property
    def flags(self) -> PlanFlags:
        flags = PlanFlags.NONE
        if not self.radix2:
            flags |= PlanFlags.NO_RADIX2
        if self.trace:
            flags |= PlanFlags.TRACE
        return flags

    @classmethod
    def from_dict(cls, config: Dict) -> 'FFTConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**config)


def load_config(config_path: Union[str, Path]) -> FFTConfig:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}
    return FFTConfig.from_dict(config)
