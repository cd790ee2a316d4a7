"""
Harness configuration from environment variables.

Usage:
    from teststat.config import get_settings

    settings = get_settings()
    print(settings.seed, settings.histogram_samples)
"""

from functools import lru_cache
from typing import Optional
import os

from teststat.exceptions import ConfigError

DEFAULT_HISTOGRAM_SAMPLES = 10000
DEFAULT_PERMUTATION_SIZE = 100


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(
            f"{name} must be an integer, got {raw!r}",
            code="invalid_setting",
            details={"name": name, "value": raw},
        ) from None


class Settings:
    """Harness configuration loaded from environment variables."""

    def __init__(self) -> None:
        # Default seed for make_rng(); unset means system entropy
        self.seed: Optional[int] = _env_int("TESTSTAT_SEED", None)

        # Histogram workload size
        self.histogram_samples: int = _env_int(
            "TESTSTAT_HISTOGRAM_SAMPLES", DEFAULT_HISTOGRAM_SAMPLES
        )

        # Counter/gauge workloads are drawn from a permutation of 0..size-1
        self.permutation_size: int = _env_int(
            "TESTSTAT_PERMUTATION_SIZE", DEFAULT_PERMUTATION_SIZE
        )

        if self.histogram_samples < 1:
            raise ConfigError(
                "TESTSTAT_HISTOGRAM_SAMPLES must be positive",
                code="invalid_setting",
                details={"value": self.histogram_samples},
            )
        if self.permutation_size < 2:
            raise ConfigError(
                "TESTSTAT_PERMUTATION_SIZE must be at least 2",
                code="invalid_setting",
                details={"value": self.permutation_size},
            )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Clear settings cache. For testing only."""
    get_settings.cache_clear()
