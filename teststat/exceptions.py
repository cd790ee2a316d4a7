"""
Typed exceptions for teststat.

Provides structured error handling with:
- TeststatError: Base exception for all teststat errors
- MismatchError: Instrument readback disagrees with the expected result
- DegenerateWorkloadError: Workload that cannot produce a meaningful check
- DomainError: Probability outside the open interval (0, 1)
- ConfigError: Invalid tolerance or settings values
- ReadbackError: Readback callable returned the wrong shape

All exceptions include structured attributes for programmatic handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

if TYPE_CHECKING:
    from teststat.models import CheckFailure


class TeststatError(Exception):
    """Base exception for all teststat errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging or test output."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class MismatchError(TeststatError):
    """Readback disagrees with the expected result.

    Raised by VerificationOutcome.raise_for_failures(). The message joins
    every violated check with "; " so one report shows all discrepancies.

    Attributes:
        instrument: Instrument kind that was checked
        failures: One CheckFailure per violated check
    """

    def __init__(
        self,
        message: str,
        *,
        instrument: Optional[str] = None,
        failures: Sequence["CheckFailure"] = (),
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if instrument:
            details["instrument"] = instrument
        details["failures"] = [f.model_dump() for f in failures]

        self.instrument = instrument
        self.failures = list(failures)

        super().__init__(message, code=code, details=details)


class DegenerateWorkloadError(TeststatError):
    """Workload that leaves the expected result undefined.

    Raised when:
    - A gauge is checked against an explicitly empty workload (set is
      never called, so there is no last value to compare against)
    """

    pass


class DomainError(TeststatError, ValueError):
    """Argument outside a function's mathematical domain.

    Raised when:
    - probit() receives p <= 0, p >= 1 or NaN

    Attributes:
        value: The offending argument
    """

    def __init__(
        self,
        message: str,
        *,
        value: Optional[float] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if value is not None:
            details["value"] = value

        self.value = value

        super().__init__(message, code=code, details=details)


class ConfigError(TeststatError):
    """Configuration or validation error.

    Raised when:
    - Tolerance is negative or NaN
    - TESTSTAT_* environment variables hold invalid values

    Examples:
        ConfigError("tolerance must be >= 0", details={"tolerance": -1})
    """

    pass


class ReadbackError(TeststatError):
    """Readback callable returned a value of the wrong shape.

    Attributes:
        expected_length: How many values the check needs
        actual_length: How many values the readback returned
    """

    def __init__(
        self,
        message: str,
        *,
        expected_length: Optional[int] = None,
        actual_length: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if expected_length is not None:
            details["expected_length"] = expected_length
        if actual_length is not None:
            details["actual_length"] = actual_length

        self.expected_length = expected_length
        self.actual_length = actual_length

        super().__init__(message, code=code, details=details)


__all__ = [
    "TeststatError",
    "MismatchError",
    "DegenerateWorkloadError",
    "DomainError",
    "ConfigError",
    "ReadbackError",
]
