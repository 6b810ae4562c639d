"""Wall-clock benchmarking of a resolved executable.

Each run is one process spawn with stdout/stderr discarded. Warm-up runs
must be spawnable; measured runs that exit non-zero or time out are dropped
from the sample set rather than failing the benchmark.
"""

from __future__ import annotations

import math
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np

from .exceptions import CommandError
from .logging_config import get_logger
from .metrics import (
    LatencyMetrics,
    PerformanceMetrics,
    ResourceMetrics,
    ScalabilityMetrics,
    ThroughputMetrics,
)

logger = get_logger(__name__)

DEFAULT_RUN_TIMEOUT = 60.0


@dataclass(frozen=True)
class BenchmarkOptions:
    """How many runs to make and what to pass to the executable."""

    warmup: int = 1
    iterations: int = 5
    args: Sequence[str] = ()


def percentile_index(p: float, n: int) -> int:
    """Nearest-rank index into *n* sorted samples, halves rounded up.

    ``p * (n - 1)`` is rounded half away from zero, then clamped to the
    valid index range.
    """
    if n <= 0:
        return 0
    index = math.floor(p * (n - 1) + 0.5)
    return max(0, min(index, n - 1))


def metrics_from_samples(samples_ms: Sequence[float]) -> PerformanceMetrics:
    """Latency/throughput metrics from successful run durations (ms)."""
    if len(samples_ms) == 0:
        return PerformanceMetrics()

    ordered = np.sort(np.asarray(samples_ms, dtype=float))
    n = len(ordered)
    p50 = float(ordered[percentile_index(0.50, n)])
    p95 = float(ordered[percentile_index(0.95, n)])
    p99 = float(ordered[percentile_index(0.99, n)])

    return PerformanceMetrics(
        latency=LatencyMetrics(
            p50_ms=p50,
            p95_ms=p95,
            p99_ms=p99,
            cold_start_ms=float(ordered[0]),
            ttfb_ms=0.0,
        ),
        throughput=ThroughputMetrics(
            requests_per_second=1000.0 / p50 if p50 > 0 else 0.0,
        ),
        resource_usage=ResourceMetrics(),
        scalability=ScalabilityMetrics(),
    )


class BenchmarkRunner:
    """Runs an executable repeatedly and summarises its latency.

    Args:
        options: Warm-up/iteration counts and arguments
        timeout: Seconds allowed per process run
    """

    def __init__(self, options: BenchmarkOptions | None = None, timeout: float = DEFAULT_RUN_TIMEOUT):
        self.options = options or BenchmarkOptions()
        self.timeout = timeout

    def _run(self, command: list[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=self.timeout,
        )

    def _warmup(self, command: list[str]) -> None:
        for i in range(self.options.warmup):
            try:
                self._run(command)
            except subprocess.TimeoutExpired:
                raise CommandError(command, f"warm-up run timed out after {self.timeout}s")
            except OSError as e:
                raise CommandError(command, f"cannot spawn warm-up run: {e}")
            logger.debug("Warm-up run %d/%d done", i + 1, self.options.warmup)

    def _measure(self, command: list[str]) -> list[float]:
        samples: list[float] = []
        for i in range(self.options.iterations):
            start = time.perf_counter()
            try:
                result = self._run(command)
            except subprocess.TimeoutExpired:
                logger.debug("Run %d timed out; excluded", i + 1)
                continue
            except OSError as e:
                raise CommandError(command, f"cannot spawn measured run: {e}")
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            if result.returncode != 0:
                logger.debug("Run %d exited with %d; excluded", i + 1, result.returncode)
                continue
            logger.debug("Run %d: %.3f ms", i + 1, elapsed_ms)
            samples.append(elapsed_ms)
        return samples

    def benchmark(self, executable: Path) -> PerformanceMetrics:
        """Benchmark *executable*.

        Raises:
            CommandError: If a warm-up run cannot be spawned or times out, or
                a measured run cannot be spawned
        """
        command = [str(executable), *self.options.args]
        logger.info(
            "Benchmarking %s (%d warm-up, %d measured)",
            executable,
            self.options.warmup,
            self.options.iterations,
        )
        self._warmup(command)
        samples = self._measure(command)
        if not samples:
            logger.warning("No successful runs of %s; performance metrics are zero", executable)
        return metrics_from_samples(samples)
