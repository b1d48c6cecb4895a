# tests/performance/conftest.py
"""Timing helpers for performance tests."""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class BenchmarkTiming:
    """Wall-clock duration of a timed block, filled in on exit."""

    wall_seconds: float = 0.0


@contextmanager
def benchmark_timer() -> Iterator[BenchmarkTiming]:
    timing = BenchmarkTiming()
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.wall_seconds = time.perf_counter() - start
