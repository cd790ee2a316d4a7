"""
Conformance Demo: run every check against the reference instruments.

Shows the full harness loop:
1. Build instruments that satisfy the Counter/Gauge/Histogram protocols
2. Hand the harness a readback callable for each one
3. Print a report and exit non-zero on any mismatch

Settings (seed, histogram sample count) can come from a .env file:
    TESTSTAT_SEED=42
    TESTSTAT_HISTOGRAM_SAMPLES=20000

Run:
    python examples/verify_reference_instruments.py
"""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env")

from teststat import (  # noqa: E402
    check_counter,
    check_gauge,
    check_histogram,
    check_histogram_buckets,
    format_report,
    make_rng,
)
from teststat.instruments import (  # noqa: E402
    BucketHistogram,
    CounterValue,
    GaugeValue,
    SampleHistogram,
)


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    rng = make_rng()

    counter = CounterValue()
    gauge = GaugeValue()
    histogram = SampleHistogram()
    buckets = BucketHistogram((475.0, 500.0, 525.0, 550.0))

    outcomes = [
        check_counter(counter, counter.get, rng=rng),
        check_gauge(gauge, gauge.get, rng=rng),
        check_histogram(histogram, histogram.quantiles, 0.01, rng=rng),
        check_histogram_buckets(buckets, buckets.counts, buckets.bounds, 0.1, rng=rng),
    ]

    print(format_report(outcomes))
    return 0 if all(o.passed for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
