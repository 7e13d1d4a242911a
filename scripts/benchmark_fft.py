#!/usr/bin/env python3
"""
Plan execution benchmark

For every size in the config this script:
  1. Builds a forward plan (recording the plan tree and build time)
  2. Checks the output against numpy.fft.fft
  3. Times repeated plan execution against numpy.fft.fft

Usage:
    python scripts/benchmark_fft.py [--config CONFIG_PATH] [--log-file LOG_FILE]
"""

import argparse
import time
from pathlib import Path

import numpy as np
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fft_core import BufferAllocator, Direction, create_plan
from fft_core.utils import load_config, setup_logging

PROJECT_ROOT = Path(__file__).parent.parent

console = Console()


def benchmark_size(n, config, allocator, logger):
    """Build, verify and time one transform size."""
    rng = np.random.default_rng(config.seed)
    x = (rng.standard_normal(n) + 1j * rng.standard_normal(n)).astype(config.dtype)
    y = np.empty(n, dtype=config.dtype)

    start = time.perf_counter()
    plan = create_plan(n, x, y, Direction.FORWARD, config.flags,
                       logger=logger, allocator=allocator)
    build_ms = (time.perf_counter() - start) * 1000

    try:
        # Warm up (JIT compilation)
        plan.execute()
        error = np.abs(y - np.fft.fft(x)).max() / max(np.abs(y).max(), 1.0)
        logger.info(f"n={n} plan:\n{plan.describe()}")

        start = time.perf_counter()
        for _ in range(config.n_iter):
            plan.execute()
        plan_ms = (time.perf_counter() - start) / config.n_iter * 1000

        start = time.perf_counter()
        for _ in range(config.n_iter):
            np.fft.fft(x)
        numpy_ms = (time.perf_counter() - start) / config.n_iter * 1000

        return {
            'n': n,
            'method': plan.method.value,
            'build_ms': build_ms,
            'plan_ms': plan_ms,
            'numpy_ms': numpy_ms,
            'rel_error': error,
        }
    finally:
        plan.destroy()


def main():
    parser = argparse.ArgumentParser(description="FFT plan benchmark")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'default.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Optional log file for plan trees and traces'
    )
    args = parser.parse_args()

    config = load_config(args.config)
    logger = setup_logging(log_file=args.log_file, level=config.log_level)
    allocator = BufferAllocator()

    console.print(Panel.fit(
        f"[bold]FFT plan benchmark[/bold]\n"
        f"precision={config.precision}  radix2={config.radix2}  n_iter={config.n_iter}"
    ))

    table = Table(box=box.ROUNDED)
    table.add_column("N", justify="right")
    table.add_column("Method")
    table.add_column("Build (ms)", justify="right")
    table.add_column("Plan (ms)", justify="right")
    table.add_column("NumPy (ms)", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_column("Rel. error", justify="right")

    tol = 1e-5 if config.precision == 'single' else 1e-10
    for n in config.sizes:
        result = benchmark_size(n, config, allocator, logger)
        ratio = result['plan_ms'] / result['numpy_ms']
        status = "green" if result['rel_error'] < tol else "red"
        table.add_row(
            str(n),
            result['method'],
            f"{result['build_ms']:.3f}",
            f"{result['plan_ms']:.4f}",
            f"{result['numpy_ms']:.4f}",
            f"{ratio:.2f}x",
            f"[{status}]{result['rel_error']:.2e}[/{status}]",
        )

    console.print(table)
    if allocator.live_count:
        console.print(f"[red]✗[/red] {allocator.live_count} buffers still live after destroy")
        logger.error(f"leaked buffers: {allocator}")
    else:
        console.print(f"[green]✓[/green] all {allocator.num_allocations} buffers released")


if __name__ == "__main__":
    main()
