"""
Workload generators.

Every generator takes an explicit random.Random so a run can be replayed
from its seed; nothing here touches the module-level random state or the
instrument under test.
"""

from __future__ import annotations

import random
from typing import List, Optional

from teststat.config import get_settings
from teststat.models import NormalDistribution


def make_rng(seed: Optional[int] = None) -> random.Random:
    """
    Build the generator a verification run draws from.

    Args:
        seed: Explicit seed. Falls back to TESTSTAT_SEED, then to system
            entropy when neither is set.
    """
    if seed is None:
        seed = get_settings().seed
    return random.Random(seed)


def permutation_workload(rng: random.Random, size: Optional[int] = None) -> List[float]:
    """
    Prefix of a random permutation of 0..size-1, as floats.

    The prefix length is drawn uniformly from 1..size-1, so the workload is
    never empty and never the whole permutation.

    Args:
        rng: Source of randomness.
        size: Permutation size (default TESTSTAT_PERMUTATION_SIZE, 100).
    """
    if size is None:
        size = get_settings().permutation_size
    if size < 2:
        raise ValueError(f"permutation size must be at least 2, got {size}")
    perm = rng.sample(range(size), size)
    n = rng.randint(1, size - 1)
    return [float(v) for v in perm[:n]]


def normal_workload(
    rng: random.Random,
    distribution: NormalDistribution,
    count: int,
) -> List[float]:
    """
    count independent draws from N(mean, stdev^2).

    Args:
        rng: Source of randomness.
        distribution: Mean and standard deviation to draw from.
        count: Number of samples, must be positive.
    """
    if count < 1:
        raise ValueError(f"sample count must be positive, got {count}")
    return [rng.gauss(distribution.mean, distribution.stdev) for _ in range(count)]
