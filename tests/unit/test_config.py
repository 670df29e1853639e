"""Tests for runtime settings — env-driven configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from buildeta.config import ProgressSettings


class TestProgressSettings:
    def test_defaults(self):
        cfg = ProgressSettings()
        assert cfg.sample_interval == 5.0
        assert cfg.guess_decay == 10.0
        assert cfg.work_decay == 1.2
        assert cfg.program_name == "shake-progress"
        assert cfg.log_level == "INFO"

    def test_sinks_enabled_by_default(self):
        cfg = ProgressSettings()
        assert cfg.titlebar is True
        assert cfg.program is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BUILDETA_SAMPLE_INTERVAL", "0.5")
        monkeypatch.setenv("BUILDETA_PROGRAM", "false")
        monkeypatch.setenv("BUILDETA_LOG_LEVEL", "DEBUG")
        cfg = ProgressSettings()
        assert cfg.sample_interval == 0.5
        assert cfg.program is False
        assert cfg.log_level == "DEBUG"

    def test_sample_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProgressSettings(sample_interval=0)

    def test_decay_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("BUILDETA_WORK_DECAY", "-1")
        with pytest.raises(ValidationError):
            ProgressSettings()
