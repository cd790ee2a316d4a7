"""Pytest configuration: project root on sys.path, fresh settings per test."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in sys.path for proper imports with pytest-xdist
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from teststat.config import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "TESTSTAT_SEED",
        "TESTSTAT_HISTOGRAM_SAMPLES",
        "TESTSTAT_PERMUTATION_SIZE",
        "TESTSTAT_LOGFIRE",
        "TESTSTAT_TELEMETRY_STDERR",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
