"""
teststat - Conformance checks for counter, gauge and histogram implementations.

Drive an instrument with a randomized workload, read its state back through
a callable you supply, and compare against an independently computed
expectation:

    from teststat import check_counter, check_gauge, check_histogram, make_rng
    from teststat.instruments import CounterValue, GaugeValue, SampleHistogram

    counter, gauge, histogram = CounterValue(), GaugeValue(), SampleHistogram()

    rng = make_rng(42)
    check_counter(counter, counter.get, rng=rng).raise_for_failures()
    check_gauge(gauge, gauge.get, rng=rng).raise_for_failures()

    outcome = check_histogram(
        histogram,
        histogram.quantiles,
        tolerance=0.01,
        rng=rng,
    )
    assert outcome.passed, outcome.message

Advanced usage via submodules:
    from teststat.quantiles import probit, normal_quantiles
    from teststat.tolerance import matches
    from teststat.instruments import SampleHistogram, BucketHistogram
"""

from teststat.checks import (  # noqa: F401
    check_counter,
    check_gauge,
    check_histogram,
    check_histogram_buckets,
)
from teststat.exceptions import (  # noqa: F401
    ConfigError,
    DegenerateWorkloadError,
    DomainError,
    MismatchError,
    ReadbackError,
    TeststatError,
)
from teststat.models import (  # noqa: F401
    CheckFailure,
    InstrumentKind,
    NormalDistribution,
    Quantiles,
    VerificationOutcome,
)
from teststat.quantiles import normal_quantile, normal_quantiles, probit  # noqa: F401
from teststat.report import format_report  # noqa: F401
from teststat.sampling import make_rng  # noqa: F401
from teststat.tolerance import matches  # noqa: F401

__all__ = [
    "check_counter",
    "check_gauge",
    "check_histogram",
    "check_histogram_buckets",
    "CheckFailure",
    "InstrumentKind",
    "NormalDistribution",
    "Quantiles",
    "VerificationOutcome",
    "TeststatError",
    "MismatchError",
    "DegenerateWorkloadError",
    "DomainError",
    "ConfigError",
    "ReadbackError",
    "probit",
    "normal_quantile",
    "normal_quantiles",
    "matches",
    "make_rng",
    "format_report",
]
