"""
Reference in-memory instruments.

Small, thread-safe implementations of the capability protocols:
- CounterValue: Monotonically increasing total (add)
- GaugeValue: Point-in-time value (set)
- SampleHistogram: Keeps every observation, exact quantiles
- BucketHistogram: Cumulative bucket counts, interpolated percentiles

They are what the harness is exercised against in the test-suite, and a
starting point when wiring a real backend:

    counter = CounterValue()
    check_counter(counter, counter.get).raise_for_failures()
"""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from teststat.models import Quantiles
from teststat.quantiles import QUANTILE_LEVELS

# Bounds around the default N(500, 25^2) workload, one stdev apart
DEFAULT_BUCKETS = (425.0, 450.0, 475.0, 500.0, 525.0, 550.0, 575.0)


@dataclass
class CounterValue:
    """Thread-safe counter."""
    value: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add(self, delta: float) -> None:
        with self._lock:
            self.value += delta

    def get(self) -> float:
        with self._lock:
            return self.value


@dataclass
class GaugeValue:
    """Thread-safe gauge."""
    value: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def set(self, value: float) -> None:
        with self._lock:
            self.value = value

    def get(self) -> float:
        with self._lock:
            return self.value


class SampleHistogram:
    """
    Thread-safe histogram that keeps every observation.

    Quantiles are exact order statistics with linear interpolation between
    closest ranks, so they converge to the population quantiles as the
    sample grows.
    """

    def __init__(self) -> None:
        self._values: List[float] = []
        self._sorted = True
        self._lock = threading.Lock()

    def observe(self, value: float) -> None:
        """Record an observation."""
        with self._lock:
            self._values.append(value)
            self._sorted = False

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._values)

    def quantile(self, q: float) -> Optional[float]:
        """
        Estimate the q-quantile.

        Args:
            q: Quantile in [0, 1].

        Returns:
            Interpolated value, or None with no observations.
        """
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"quantile must be in [0, 1], got {q}")
        with self._lock:
            if not self._values:
                return None
            if not self._sorted:
                self._values.sort()
                self._sorted = True

            pos = q * (len(self._values) - 1)
            lo = math.floor(pos)
            hi = min(lo + 1, len(self._values) - 1)
            frac = pos - lo
            return self._values[lo] + frac * (self._values[hi] - self._values[lo])

    def quantiles(self) -> Quantiles:
        """p50/p90/p95/p99, the shape check_histogram reads back."""
        values = [self.quantile(q) for q in QUANTILE_LEVELS]
        if values[0] is None:
            raise ValueError("no observations recorded")
        return Quantiles.from_sequence(values)


class BucketHistogram:
    """
    Thread-safe histogram with configurable buckets.

    Tracks:
    - Count per bucket
    - Total sum
    - Total count
    """

    def __init__(self, buckets: Tuple[float, ...] = DEFAULT_BUCKETS) -> None:
        self._buckets = tuple(sorted(buckets)) + (float("inf"),)
        self._counts = [0] * len(self._buckets)
        self._sum = 0.0
        self._count = 0
        self._lock = threading.Lock()

    @property
    def bounds(self) -> Tuple[float, ...]:
        """Finite upper bounds, ascending."""
        return self._buckets[:-1]

    def observe(self, value: float) -> None:
        """Record an observation."""
        with self._lock:
            self._sum += value
            self._count += 1
            for i, bound in enumerate(self._buckets):
                if value <= bound:
                    self._counts[i] += 1
                    break

    def counts(self) -> List[int]:
        """Cumulative observation counts for each finite bound."""
        with self._lock:
            result = []
            cumulative = 0
            for i, bound in enumerate(self._buckets):
                cumulative += self._counts[i]
                if bound != float("inf"):
                    result.append(cumulative)
            return result

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def sum(self) -> float:
        with self._lock:
            return self._sum

    def percentile(self, p: float) -> Optional[float]:
        """
        Estimate percentile from histogram buckets.

        Args:
            p: Percentile (0-100)

        Returns:
            Estimated value at percentile (linear interpolation within the
            bucket), or None with no observations or when the percentile
            falls in the overflow bucket.
        """
        with self._lock:
            if self._count == 0:
                return None

            target = self._count * (p / 100.0)
            cumulative = 0

            for i, bound in enumerate(self._buckets):
                cumulative += self._counts[i]
                if cumulative >= target:
                    if bound == float("inf"):
                        return None
                    if i == 0:
                        return bound
                    prev_cumulative = cumulative - self._counts[i]
                    prev_bound = self._buckets[i - 1]
                    ratio = (target - prev_cumulative) / self._counts[i]
                    return prev_bound + ratio * (bound - prev_bound)

            return None
