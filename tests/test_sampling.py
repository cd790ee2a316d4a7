"""Tests for workload generators and seeding."""

import random
import statistics

import pytest

from teststat.config import reset_settings
from teststat.models import NormalDistribution
from teststat.sampling import make_rng, normal_workload, permutation_workload


class TestPermutationWorkload:
    def test_shape(self):
        workload = permutation_workload(random.Random(42))
        assert 1 <= len(workload) <= 99
        assert all(isinstance(v, float) for v in workload)
        assert len(set(workload)) == len(workload)
        assert set(workload) <= {float(i) for i in range(100)}

    def test_never_empty(self):
        for seed in range(500):
            assert len(permutation_workload(random.Random(seed))) >= 1

    def test_reproducible(self):
        assert permutation_workload(random.Random(7)) == permutation_workload(
            random.Random(7)
        )

    def test_custom_size(self):
        workload = permutation_workload(random.Random(3), size=2)
        assert workload in ([0.0], [1.0])

    def test_size_from_settings(self, monkeypatch):
        monkeypatch.setenv("TESTSTAT_PERMUTATION_SIZE", "5")
        reset_settings()
        for seed in range(50):
            workload = permutation_workload(random.Random(seed))
            assert 1 <= len(workload) <= 4
            assert max(workload) <= 4.0

    def test_too_small(self):
        with pytest.raises(ValueError):
            permutation_workload(random.Random(0), size=1)


class TestNormalWorkload:
    def test_count_and_moments(self):
        workload = normal_workload(random.Random(1), NormalDistribution(), 10000)
        assert len(workload) == 10000
        assert statistics.fmean(workload) == pytest.approx(500, abs=1.5)
        assert statistics.stdev(workload) == pytest.approx(25, abs=1.5)

    def test_reproducible(self):
        dist = NormalDistribution(mean=0, stdev=1)
        assert normal_workload(random.Random(9), dist, 100) == normal_workload(
            random.Random(9), dist, 100
        )

    def test_non_positive_count(self):
        with pytest.raises(ValueError):
            normal_workload(random.Random(0), NormalDistribution(), 0)


class TestMakeRng:
    def test_explicit_seed(self):
        assert make_rng(5).random() == random.Random(5).random()

    def test_seed_from_settings(self, monkeypatch):
        monkeypatch.setenv("TESTSTAT_SEED", "1234")
        reset_settings()
        assert make_rng().random() == random.Random(1234).random()

    def test_does_not_touch_global_state(self):
        random.seed(99)
        expected = random.random()
        random.seed(99)
        permutation_workload(make_rng(1))
        assert random.random() == expected
