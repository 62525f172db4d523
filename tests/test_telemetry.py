from __future__ import annotations

import pytest

from kaksel.runtime.telemetry import LogSettings, preset_settings


def test_defaults_keep_the_console_quiet() -> None:
    settings = LogSettings.from_env({})

    assert settings == LogSettings()
    assert settings.console is False
    assert settings.buffer_size is None


def test_environment_overrides() -> None:
    settings = LogSettings.from_env(
        {
            "KAKSEL_LOG_LEVEL": "debug",
            "KAKSEL_DISABLE_CONSOLE": "0",
            "KAKSEL_NO_COLOR": "yes",
            "KAKSEL_LOG_JSON": "1",
            "KAKSEL_LOG_FILE": "/tmp/kaksel.log",
            "KAKSEL_LOG_BUFFERED": "true",
            "KAKSEL_LOG_BUFFER_SIZE": "64",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console is True
    assert settings.color is False
    assert settings.json is True
    assert settings.log_file == "/tmp/kaksel.log"
    assert settings.buffer_size == 64


def test_preset_applies_its_overrides() -> None:
    settings = preset_settings("Development", LogSettings())

    assert settings.level == "DEBUG"
    assert settings.console is True


def test_explicit_log_file_wins_over_the_preset() -> None:
    base = LogSettings(log_file="mine.log")

    assert preset_settings("production", base).log_file == "mine.log"
    assert preset_settings("production", LogSettings()).log_file == "kaksel.log"


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        preset_settings("verbose", LogSettings())
