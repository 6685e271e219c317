"""Tests for settings loading."""

from pathlib import Path

import pytest

import numan.config
from numan.config import APP_DIR_NAME, Settings, get_settings, user_config_dir


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("NUMAN_CONFIG_DIR", raising=False)
    settings = Settings(_env_file=None)
    assert settings.config_dir == user_config_dir() / APP_DIR_NAME
    assert settings.registry_url == "https://www.nuget.org/api/v2/package/"
    assert settings.client_version == "4.1.0"
    assert settings.archive_extension == ".nupkg"
    assert settings.upload_timeout is None
    assert settings.log_level == "WARNING"


def test_logs_dir(tmp_path: Path) -> None:
    settings = Settings(config_dir=tmp_path)
    assert settings.logs_dir == tmp_path / "logs"


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("NUMAN_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("NUMAN_REGISTRY_URL", "http://localhost:5555/api/v2/package/")
    monkeypatch.setenv("NUMAN_UPLOAD_TIMEOUT", "30")
    monkeypatch.setenv("NUMAN_LOG_LEVEL", "debug")
    monkeypatch.setenv("NUMAN_ARCHIVE_EXTENSION", "snupkg")

    settings = Settings(_env_file=None)

    assert settings.config_dir == tmp_path
    assert settings.registry_url == "http://localhost:5555/api/v2/package/"
    assert settings.upload_timeout == 30.0
    assert settings.log_level == "DEBUG"
    assert settings.archive_extension == ".snupkg"


def test_get_settings_is_cached(isolated_config_dir) -> None:
    first = get_settings()
    assert get_settings() is first
    assert first.config_dir == isolated_config_dir


posix_only = pytest.mark.skipif(numan.config.os.name == "nt", reason="posix layout")


@posix_only
@pytest.mark.parametrize(
    "platform, env, expected",
    [
        ("linux", {"XDG_CONFIG_HOME": "/xdg"}, Path("/xdg")),
        ("linux", {}, Path.home() / ".config"),
        ("darwin", {"XDG_CONFIG_HOME": "/xdg"}, Path.home() / "Library" / "Application Support"),
    ],
)
def test_user_config_dir(monkeypatch, platform, env, expected) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setattr(numan.config.sys, "platform", platform)

    assert user_config_dir() == expected
