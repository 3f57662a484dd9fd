# MIT License (see LICENSE)
"""
Simple profiling utilities for the simulation loop.

Measures wall time spent in the phases of ``System.step`` ("forces" and
"integrate") without external dependencies.

Example:
    profiler = Profiler()
    system = System("verlet", 100, profiler=profiler)
    ...
    system.run(dt=1e-3, n_steps=1000)
    print(profiler.stats.summary()["forces"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Timing samples (seconds) grouped by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def total(self, name: str) -> float:
        """Accumulated time of a section in seconds, 0.0 if never timed."""
        return sum(self.samples.get(name, ()))

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to a dict with keys:
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * (sum(times) / len(times)),
                "max_ms": 1e3 * max(times),
            }
        return out

    def reset(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
