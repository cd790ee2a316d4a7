"""Tests for environment-driven settings and optional telemetry."""

import pytest

from teststat import telemetry
from teststat.config import (
    DEFAULT_HISTOGRAM_SAMPLES,
    DEFAULT_PERMUTATION_SIZE,
    get_settings,
    reset_settings,
)
from teststat.exceptions import ConfigError


class TestSettings:
    def test_defaults(self):
        settings = get_settings()
        assert settings.seed is None
        assert settings.histogram_samples == DEFAULT_HISTOGRAM_SAMPLES
        assert settings.permutation_size == DEFAULT_PERMUTATION_SIZE

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TESTSTAT_SEED", "7")
        monkeypatch.setenv("TESTSTAT_HISTOGRAM_SAMPLES", "5000")
        monkeypatch.setenv("TESTSTAT_PERMUTATION_SIZE", "10")
        reset_settings()
        settings = get_settings()
        assert settings.seed == 7
        assert settings.histogram_samples == 5000
        assert settings.permutation_size == 10

    def test_blank_seed_means_unset(self, monkeypatch):
        monkeypatch.setenv("TESTSTAT_SEED", "  ")
        reset_settings()
        assert get_settings().seed is None

    def test_non_integer(self, monkeypatch):
        monkeypatch.setenv("TESTSTAT_SEED", "abc")
        reset_settings()
        with pytest.raises(ConfigError) as exc_info:
            get_settings()
        assert exc_info.value.code == "invalid_setting"
        assert exc_info.value.details["name"] == "TESTSTAT_SEED"

    @pytest.mark.parametrize(
        "name,value",
        [
            ("TESTSTAT_HISTOGRAM_SAMPLES", "0"),
            ("TESTSTAT_PERMUTATION_SIZE", "1"),
        ],
    )
    def test_out_of_range(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        reset_settings()
        with pytest.raises(ConfigError):
            get_settings()


class TestTelemetry:
    def test_disabled_by_default(self):
        assert telemetry.enabled() is False
        assert telemetry.configure() is False

    def test_span_is_noop_when_disabled(self):
        with telemetry.span("teststat.test", samples=3):
            value = 1
        assert value == 1

    def test_span_propagates_exceptions(self):
        with pytest.raises(KeyError):
            with telemetry.span("teststat.test"):
                raise KeyError("x")

    def test_stderr_mirror(self, monkeypatch, capsys):
        monkeypatch.setenv("TESTSTAT_TELEMETRY_STDERR", "1")
        telemetry.log("info", "hello", n=2)
        assert "[teststat] hello {'n': 2}" in capsys.readouterr().err

    def test_stderr_quiet_by_default(self, capsys):
        telemetry.log("info", "hello")
        assert capsys.readouterr().err == ""
