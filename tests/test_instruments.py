"""Tests for the reference in-memory instruments."""

import threading

import pytest

from teststat.instruments import (
    BucketHistogram,
    CounterValue,
    GaugeValue,
    SampleHistogram,
)
from teststat.models import Quantiles


class TestCounterValue:
    def test_add(self):
        c = CounterValue()
        c.add(2.5)
        c.add(4)
        assert c.get() == 6.5

    def test_concurrent_adds(self):
        c = CounterValue()

        def worker():
            for _ in range(1000):
                c.add(1.0)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert c.get() == 8000.0


class TestGaugeValue:
    def test_set_overwrites(self):
        g = GaugeValue()
        g.set(3.0)
        g.set(-1.0)
        assert g.get() == -1.0

    def test_initial_value(self):
        assert GaugeValue(value=1.0).get() == 1.0


class TestSampleHistogram:
    def test_quantile_interpolates(self):
        h = SampleHistogram()
        for v in (5.0, 1.0, 4.0, 2.0, 3.0):
            h.observe(v)
        assert h.count == 5
        assert h.quantile(0.0) == 1.0
        assert h.quantile(0.5) == 3.0
        assert h.quantile(0.9) == pytest.approx(4.6)
        assert h.quantile(1.0) == 5.0

    def test_observe_after_query(self):
        h = SampleHistogram()
        h.observe(10.0)
        assert h.quantile(0.5) == 10.0
        h.observe(0.0)
        assert h.quantile(0.5) == 5.0

    def test_quantiles_shape(self):
        h = SampleHistogram()
        for v in range(101):
            h.observe(float(v))
        q = h.quantiles()
        assert isinstance(q, Quantiles)
        assert q.p50 == pytest.approx(50.0)
        assert q.p90 == pytest.approx(90.0)
        assert q.p95 == pytest.approx(95.0)
        assert q.p99 == pytest.approx(99.0)

    def test_empty(self):
        h = SampleHistogram()
        assert h.quantile(0.5) is None
        with pytest.raises(ValueError):
            h.quantiles()

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            SampleHistogram().quantile(1.5)


class TestBucketHistogram:
    def test_cumulative_counts(self):
        h = BucketHistogram((2.5, 1.5))
        for v in (1.0, 2.0, 3.0):
            h.observe(v)
        assert h.bounds == (1.5, 2.5)
        assert h.counts() == [1, 2]
        assert h.count == 3
        assert h.sum == 6.0

    def test_percentile(self):
        h = BucketHistogram((1.5, 2.5))
        for v in (1.0, 2.0, 3.0):
            h.observe(v)
        assert h.percentile(50) == pytest.approx(2.0)
        assert h.percentile(10) == 1.5

    def test_percentile_in_overflow(self):
        h = BucketHistogram((1.0,))
        h.observe(5.0)
        assert h.percentile(99) is None

    def test_empty(self):
        assert BucketHistogram().percentile(50) is None
        assert BucketHistogram().counts() == [0] * 7
