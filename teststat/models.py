from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from teststat.exceptions import MismatchError, ReadbackError


class InstrumentKind(str, Enum):
    """Instrument kinds the harness knows how to verify."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    HISTOGRAM_BUCKETS = "histogram_buckets"


class NormalDistribution(BaseModel):
    """
    Parameters of the normal distribution a histogram workload is drawn from.

    These are the ground truth for the analytic quantiles; the sampled data
    only has to converge to them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mean: float = 500.0
    stdev: float = Field(default=25.0, gt=0)


class Quantiles(BaseModel):
    """The four quantiles a histogram check compares."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    p50: float
    p90: float
    p95: float
    p99: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Quantiles":
        """
        Build from a (p50, p90, p95, p99) sequence, as returned by a readback.

        A Quantiles instance is returned unchanged.

        Raises:
            ReadbackError: If values does not hold exactly four numbers.
        """
        if isinstance(values, Quantiles):
            return values
        values = tuple(values)
        if len(values) != 4:
            raise ReadbackError(
                f"quantile readback must return 4 values (p50, p90, p95, p99), "
                f"got {len(values)}",
                expected_length=4,
                actual_length=len(values),
            )
        p50, p90, p95, p99 = (float(v) for v in values)
        return cls(p50=p50, p90=p90, p95=p95, p99=p99)

    def items(self) -> List[tuple]:
        """(label, value) pairs in ascending quantile order."""
        return [
            ("p50", self.p50),
            ("p90", self.p90),
            ("p95", self.p95),
            ("p99", self.p99),
        ]


class CheckFailure(BaseModel):
    """
    One violated check.

    Attributes:
        check: Label of the check ("p90", "le=525.0"), or None for the single
            comparison a counter or gauge check makes.
        want: Expected value, computed without consulting the instrument.
        have: Value reported by the readback.
        tolerance: Relative tolerance applied, None for exact comparisons.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    check: Optional[str] = None
    want: float
    have: float
    tolerance: Optional[float] = None

    @property
    def message(self) -> str:
        text = f"want {self.want:f}, have {self.have:f}"
        if self.check:
            return f"{self.check}: {text}"
        return text


class VerificationOutcome(BaseModel):
    """
    Result of one verification run.

    Empty failures means the instrument passed. A histogram run records every
    failing quantile, not just the first one.
    """

    model_config = ConfigDict(extra="forbid")

    instrument: InstrumentKind
    samples: int = Field(..., ge=0)
    failures: List[CheckFailure] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def message(self) -> str:
        """All failure messages joined with "; ", empty on success."""
        return "; ".join(f.message for f in self.failures)

    def raise_for_failures(self) -> None:
        """
        Raise MismatchError if any check failed.

        Raises:
            MismatchError: Carrying every failure record of this run.
        """
        if self.failures:
            raise MismatchError(
                self.message,
                instrument=self.instrument.value,
                failures=self.failures,
            )
