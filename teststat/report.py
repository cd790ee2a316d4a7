"""Human-readable formatting of verification outcomes."""

from __future__ import annotations

from typing import Optional, Sequence

from teststat.models import VerificationOutcome


def format_report(outcomes: Sequence[VerificationOutcome]) -> str:
    """
    Format verification outcomes as human-readable text.

    Args:
        outcomes: Outcomes from check_counter / check_gauge / check_histogram.

    Returns:
        Formatted string suitable for printing in test output.
    """
    lines = []

    for outcome in outcomes:
        status = "PASS" if outcome.passed else "FAIL"
        lines.append("=" * 60)
        lines.append(f"{outcome.instrument.value.upper()}: {status}")
        lines.append("=" * 60)
        lines.append(f"Samples: {outcome.samples}")

        if outcome.failures:
            lines.append("")
            lines.append("--- Failures ---")
            for failure in outcome.failures:
                tol = _fmt(failure.tolerance, 4)
                lines.append(f"  {failure.message} (tolerance={tol})")

        lines.append("")

    passed = sum(1 for o in outcomes if o.passed)
    lines.append(f"{passed}/{len(outcomes)} checks passed")
    return "\n".join(lines)


def _fmt(val: Optional[float], decimals: int = 1) -> str:
    """Format a value, handling None."""
    if val is None:
        return "exact"
    return f"{val:.{decimals}f}"
