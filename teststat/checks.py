"""
Verification procedures for counters, gauges and histograms.

Each procedure is a single linear pass:

    generate workload -> apply to instrument -> read back -> compare -> report

The expected result is always computed by the harness itself (from the
workload, or from the distribution parameters for histograms) and never from
the instrument. Mismatches are returned as a VerificationOutcome, not raised;
call outcome.raise_for_failures() to turn them into a MismatchError.

Usage:
    from teststat import check_histogram, make_rng

    outcome = check_histogram(
        histogram,
        lambda: histogram.quantiles(),
        tolerance=0.01,
        rng=make_rng(42),
    )
    outcome.raise_for_failures()
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from teststat import telemetry
from teststat.config import get_settings
from teststat.exceptions import DegenerateWorkloadError, ReadbackError
from teststat.models import (
    CheckFailure,
    InstrumentKind,
    NormalDistribution,
    Quantiles,
    VerificationOutcome,
)
from teststat.protocol import (
    BucketReader,
    Counter,
    Gauge,
    Histogram,
    QuantileReader,
    ValueReader,
)
from teststat.quantiles import distribution_quantiles, normal_cdf
from teststat.sampling import make_rng, normal_workload, permutation_workload
from teststat.tolerance import matches, validate_tolerance

logger = logging.getLogger(__name__)


def _finish(outcome: VerificationOutcome) -> VerificationOutcome:
    if outcome.passed:
        logger.debug(
            "%s check passed (%d samples)", outcome.instrument.value, outcome.samples
        )
    else:
        logger.warning(
            "%s check failed: %s", outcome.instrument.value, outcome.message
        )
        telemetry.log(
            "warn",
            "teststat.check_failed",
            instrument=outcome.instrument.value,
            failures=len(outcome.failures),
        )
    return outcome


def check_counter(
    counter: Counter,
    value: ValueReader,
    *,
    rng: Optional[random.Random] = None,
    workload: Optional[Sequence[float]] = None,
) -> VerificationOutcome:
    """
    Add a workload of deltas to the counter and check the final total.

    The total must equal the sum of the deltas exactly.

    Args:
        counter: Instrument under test.
        value: Returns the counter's current total.
        rng: Generator for the workload (default make_rng()).
        workload: Explicit deltas; skips sampling. May be empty.

    Returns:
        VerificationOutcome with at most one failure.
    """
    if workload is None:
        workload = permutation_workload(rng or make_rng())

    with telemetry.span("teststat.check_counter", samples=len(workload)):
        want = 0.0
        for delta in workload:
            delta = float(delta)
            counter.add(delta)
            want += delta

        have = float(value())

    failures: List[CheckFailure] = []
    if want != have:
        failures.append(CheckFailure(want=want, have=have))
    return _finish(
        VerificationOutcome(
            instrument=InstrumentKind.COUNTER,
            samples=len(workload),
            failures=failures,
        )
    )


def check_gauge(
    gauge: Gauge,
    value: ValueReader,
    *,
    rng: Optional[random.Random] = None,
    workload: Optional[Sequence[float]] = None,
) -> VerificationOutcome:
    """
    Set the gauge to each workload value in turn and check the final value.

    The gauge must report the last value set, exactly.

    Args:
        gauge: Instrument under test.
        value: Returns the gauge's current value.
        rng: Generator for the workload (default make_rng()).
        workload: Explicit values; skips sampling. Must not be empty.

    Raises:
        DegenerateWorkloadError: If an explicit workload is empty.
    """
    if workload is None:
        workload = permutation_workload(rng or make_rng())
    if len(workload) == 0:
        raise DegenerateWorkloadError(
            "gauge check needs at least one value: an empty workload never "
            "calls set(), so there is no last value to compare against",
            code="empty_gauge_workload",
        )

    with telemetry.span("teststat.check_gauge", samples=len(workload)):
        want = 0.0
        for v in workload:
            v = float(v)
            gauge.set(v)
            want = v

        have = float(value())

    failures: List[CheckFailure] = []
    if want != have:
        failures.append(CheckFailure(want=want, have=have))
    return _finish(
        VerificationOutcome(
            instrument=InstrumentKind.GAUGE,
            samples=len(workload),
            failures=failures,
        )
    )


def _populate_normal(
    histogram: Histogram,
    rng: Optional[random.Random],
    distribution: NormalDistribution,
    count: Optional[int],
) -> int:
    if count is None:
        count = get_settings().histogram_samples
    for v in normal_workload(rng or make_rng(), distribution, count):
        histogram.observe(v)
    return count


def check_histogram(
    histogram: Histogram,
    quantiles: QuantileReader,
    tolerance: float,
    *,
    rng: Optional[random.Random] = None,
    distribution: Optional[NormalDistribution] = None,
    count: Optional[int] = None,
) -> VerificationOutcome:
    """
    Observe a normal workload and check the histogram's reported quantiles.

    Samples are drawn from N(500, 25^2) unless another distribution is given.
    The reference quantiles come from the distribution parameters, not from
    the sampled data, so sampling noise cannot leak into the expectation.
    All four quantiles are checked; every one outside tolerance is reported.

    Args:
        histogram: Instrument under test.
        quantiles: Returns (p50, p90, p95, p99) from the histogram.
        tolerance: Maximum relative error per quantile.
        rng: Generator for the workload (default make_rng()).
        distribution: Workload distribution (default mean 500, stdev 25).
        count: Number of observations (default TESTSTAT_HISTOGRAM_SAMPLES).

    Raises:
        ConfigError: If tolerance is negative or NaN.
        ReadbackError: If quantiles() does not return four values.
    """
    validate_tolerance(tolerance)
    distribution = distribution or NormalDistribution()

    with telemetry.span(
        "teststat.check_histogram",
        mean=distribution.mean,
        stdev=distribution.stdev,
        tolerance=tolerance,
    ):
        count = _populate_normal(histogram, rng, distribution, count)
        want = distribution_quantiles(distribution)
        have = Quantiles.from_sequence(quantiles())

    failures: List[CheckFailure] = []
    for (label, w), (_, h) in zip(want.items(), have.items()):
        if not matches(w, h, tolerance):
            failures.append(CheckFailure(check=label, want=w, have=h, tolerance=tolerance))
    return _finish(
        VerificationOutcome(
            instrument=InstrumentKind.HISTOGRAM,
            samples=count,
            failures=failures,
        )
    )


def check_histogram_buckets(
    histogram: Histogram,
    buckets: BucketReader,
    bounds: Sequence[float],
    tolerance: float,
    *,
    rng: Optional[random.Random] = None,
    distribution: Optional[NormalDistribution] = None,
    count: Optional[int] = None,
) -> VerificationOutcome:
    """
    Observe a normal workload and check a bucketed histogram's counts.

    For each upper bound b the histogram should hold about count * Phi(b)
    observations at or below b.

    Args:
        histogram: Instrument under test.
        buckets: Returns cumulative observation counts, one per bound.
        bounds: Upper bucket bounds, in the order buckets() reports them.
        tolerance: Maximum relative error per bucket.
        rng: Generator for the workload (default make_rng()).
        distribution: Workload distribution (default mean 500, stdev 25).
        count: Number of observations (default TESTSTAT_HISTOGRAM_SAMPLES).

    Raises:
        ConfigError: If tolerance is negative or NaN.
        ReadbackError: If buckets() length differs from bounds.
    """
    validate_tolerance(tolerance)
    distribution = distribution or NormalDistribution()

    with telemetry.span(
        "teststat.check_histogram_buckets",
        bounds=len(bounds),
        tolerance=tolerance,
    ):
        count = _populate_normal(histogram, rng, distribution, count)
        have = [float(v) for v in buckets()]

    if len(have) != len(bounds):
        raise ReadbackError(
            f"bucket readback returned {len(have)} counts for {len(bounds)} bounds",
            expected_length=len(bounds),
            actual_length=len(have),
        )

    failures: List[CheckFailure] = []
    for bound, h in zip(bounds, have):
        w = count * normal_cdf(bound, distribution.mean, distribution.stdev)
        if not matches(w, h, tolerance):
            failures.append(
                CheckFailure(check=f"le={bound}", want=w, have=h, tolerance=tolerance)
            )
    return _finish(
        VerificationOutcome(
            instrument=InstrumentKind.HISTOGRAM_BUCKETS,
            samples=count,
            failures=failures,
        )
    )
