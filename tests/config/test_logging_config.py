"""Tests for logging configuration."""

import pytest

from gymfit_access.config.logging_config import LoggingConfig, get_log_level_from_verbosity


@pytest.fixture
def clean_log_env(monkeypatch):
    for name in ("LOG_VERBOSITY", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestVerbosity:
    @pytest.mark.parametrize("verbosity, level", [
        ("quiet", "ERROR"),
        ("NORMAL", "WARNING"),
        ("verbose", "INFO"),
        ("debug", "DEBUG"),
        ("chatty", "WARNING"),
    ])
    def test_mapping(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level


class TestLoggingConfig:
    """Test the dictConfig mapping built from the environment."""

    def test_defaults(self, clean_log_env):
        config = LoggingConfig.build()

        assert config["loggers"]["gymfit_access"]["level"] == "WARNING"
        assert config["handlers"]["console"]["level"] == "WARNING"
        assert "%(name)s" not in config["formatters"]["default"]["format"]

    def test_explicit_level_wins(self, clean_log_env):
        clean_log_env.setenv("LOG_VERBOSITY", "QUIET")
        clean_log_env.setenv("LOG_LEVEL", "debug")

        assert LoggingConfig.build()["loggers"]["gymfit_access"]["level"] == "DEBUG"

    def test_invalid_level_falls_back_to_verbosity(self, clean_log_env):
        clean_log_env.setenv("LOG_VERBOSITY", "VERBOSE")
        clean_log_env.setenv("LOG_LEVEL", "LOUD")

        assert LoggingConfig.build()["loggers"]["gymfit_access"]["level"] == "INFO"

    def test_detailed_format(self, clean_log_env):
        clean_log_env.setenv("LOG_FORMAT", "detailed")
        assert "%(name)s" in LoggingConfig.build()["formatters"]["default"]["format"]

    def test_noisy_modules_only_log_errors(self, clean_log_env):
        loggers = LoggingConfig.build()["loggers"]

        assert loggers["redis"]["level"] == "ERROR"
        assert not loggers["redis"]["propagate"]
