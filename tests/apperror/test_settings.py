"""Tests for pydantic-settings-backed configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from packages.apperror.config import load_settings


def _write_config(path: Path) -> Path:
    """Write a YAML config file touching both sections."""
    path.write_text(
        "\n".join(
            [
                "logging:",
                "  level: WARNING",
                "  service: yaml-service",
                "wire:",
                "  max_detail_bytes: 1024",
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_load_settings_uses_precedence_cascade(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Init params override env, env overrides YAML, then defaults."""
    config_file = _write_config(tmp_path / "apperror.yaml")
    monkeypatch.setenv("APPERROR_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv("APPERROR_WIRE__ATTACH_REQUEST_INFO", "false")

    settings = load_settings(
        cli_params={"logging": {"level": "DEBUG"}},
        config_path=config_file,
    )

    assert settings.logging.level == "DEBUG"
    assert settings.logging.service == "yaml-service"
    assert settings.logging.environment == "dev"
    assert settings.wire.max_detail_bytes == 1024
    assert settings.wire.attach_request_info is False


def test_load_settings_env_overrides_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Environment values win over the YAML file."""
    config_file = _write_config(tmp_path / "apperror.yaml")
    monkeypatch.setenv("APPERROR_WIRE__MAX_DETAIL_BYTES", "2048")

    settings = load_settings(config_path=config_file)

    assert settings.wire.max_detail_bytes == 2048
    assert settings.logging.level == "WARNING"


def test_load_settings_uses_model_defaults_when_sources_missing(tmp_path: Path) -> None:
    """Missing YAML and env fall back to model defaults."""
    settings = load_settings(config_path=tmp_path / "missing.yaml")

    assert settings.logging.level == "INFO"
    assert settings.logging.json_output is True
    assert settings.wire.max_detail_bytes is None
    assert settings.wire.attach_request_info is True


def test_load_settings_rejects_invalid_detail_limit(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Non-positive detail limits fail validation."""
    monkeypatch.setenv("APPERROR_WIRE__MAX_DETAIL_BYTES", "0")

    with pytest.raises(ValidationError):
        load_settings(config_path=tmp_path / "missing.yaml")
