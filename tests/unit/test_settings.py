from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from bookfold.exceptions import SettingsError
from bookfold.settings import Settings, get_settings
from bookfold.typing.models import PatternConfig

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_payload = (
        f"APP_ENV={'test'}\n"
        f"LOG_LEVEL={'DEBUG'}\n"
        f"LOG_JSON={'false'}\n"
        f"WORKING_HEIGHT={500}\n"
        f"DEPTH_GAMMA={1.0}\n"
        f"REQUIRE_PAYMENT={'true'}\n"
    )
    env_file.write_text(env_payload, encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.app_env == "test"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.working_height == 500
    assert settings.depth_gamma == 1.0
    assert settings.require_payment is True


def test_settings_defaults_match_pattern_config_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert Settings().pattern_config() == PatternConfig()


def test_pattern_config_carries_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MIN_DEPTH_MM", "5")
    monkeypatch.setenv("CUT_THRESHOLD", "150")
    monkeypatch.setenv("UNIFORM_DEPTH_MM", "15")

    config = Settings().pattern_config()

    assert config.min_depth_mm == 5.0
    assert config.cut_threshold == 150
    assert config.uniform_depth_mm == 15.0


def test_settings_rejects_inverted_depth_range(monkeypatch) -> None:
    monkeypatch.setenv("MIN_DEPTH_MM", "40")
    monkeypatch.setenv("MAX_DEPTH_MM", "3")
    with pytest.raises(ValidationError, match="MIN_DEPTH_MM must be lower than MAX_DEPTH_MM"):
        Settings()


def test_settings_rejects_out_of_range_threshold(monkeypatch) -> None:
    monkeypatch.setenv("BINARIZE_THRESHOLD", "300")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "ci")

    settings = get_settings()
    assert settings.app_env == "ci"

    get_settings.cache_clear()


def test_get_settings_wraps_invalid_values(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("WORKING_HEIGHT", "0")

    with pytest.raises(SettingsError):
        get_settings()

    get_settings.cache_clear()


def test_get_settings_loads_defaults_without_env_file(tmp_path: Path, monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.chdir(tmp_path)

    settings = get_settings()

    assert settings.pattern_config() == PatternConfig()
    assert not (tmp_path / ".env").exists()

    get_settings.cache_clear()


def test_get_settings_wraps_unexpected_failures(monkeypatch) -> None:
    get_settings.cache_clear()

    def _raise_runtime_error():
        raise RuntimeError("boom")

    monkeypatch.setattr("bookfold.settings.Settings", _raise_runtime_error)

    with pytest.raises(SettingsError, match="boom"):
        get_settings()

    get_settings.cache_clear()
