from dataclasses import fields
from pathlib import Path

import pytest

from voxfront.config import load_config

REPO_ROOT = Path(__file__).resolve().parents[1]


def _clear_env(monkeypatch) -> None:
    for key in (
        "ENV",
        "LOG_LEVEL",
        "TARGET_SAMPLE_RATE_HZ",
        "WORKERS",
        "DEFAULT_LANGUAGE",
        "DETECTOR_THRESHOLD",
        "RESAMPLE_QUALITY",
        "MAX_SENTENCE_CHARS",
        "RESOURCES_PATH",
    ):
        monkeypatch.delenv(f"VOXFRONT_{key}", raising=False)


def test_load_dev_profile(monkeypatch) -> None:
    _clear_env(monkeypatch)

    config = load_config("dev", config_dir=REPO_ROOT / "configs")

    assert config.env == "dev"
    assert config.log_level == "DEBUG"
    assert config.workers == 1
    assert config.default_language == "en"
    assert config.detector_threshold == 0.5
    assert config.target_sample_rate_hz == 24000
    assert config.resample_quality == "medium"
    assert config.resolved_resources_path() is None


def test_env_override(monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("VOXFRONT_ENV", "prod")
    monkeypatch.setenv("VOXFRONT_TARGET_SAMPLE_RATE_HZ", "48000")
    monkeypatch.setenv("VOXFRONT_DETECTOR_THRESHOLD", "0.75")
    monkeypatch.setenv("VOXFRONT_RESOURCES_PATH", "/srv/voxfront/resources.zip")

    config = load_config(config_dir=REPO_ROOT / "configs")

    assert config.env == "prod"
    assert config.target_sample_rate_hz == 48000
    assert config.workers == 4
    assert config.detector_threshold == 0.75
    assert config.resolved_resources_path() == Path("/srv/voxfront/resources.zip")


def test_missing_profile_uses_defaults(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)

    config = load_config("staging", config_dir=tmp_path)

    assert config.env == "staging"
    assert config.log_level == "INFO"
    assert config.max_sentence_chars == 50


def test_invalid_values_are_rejected(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)

    monkeypatch.setenv("VOXFRONT_WORKERS", "many")
    with pytest.raises(ValueError, match="VOXFRONT_WORKERS"):
        load_config("dev", config_dir=tmp_path)

    monkeypatch.setenv("VOXFRONT_WORKERS", "0")
    with pytest.raises(ValueError, match="at least 1"):
        load_config("dev", config_dir=tmp_path)

    monkeypatch.delenv("VOXFRONT_WORKERS")
    monkeypatch.setenv("VOXFRONT_DETECTOR_THRESHOLD", "1.5")
    with pytest.raises(ValueError, match="within"):
        load_config("dev", config_dir=tmp_path)


def test_profile_rejects_boolean_numbers(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)
    (tmp_path / "dev.toml").write_text("workers = true\n", encoding="utf-8")

    with pytest.raises(ValueError, match="bool"):
        load_config("dev", config_dir=tmp_path)


def test_profile_ignores_unknown_keys(monkeypatch, tmp_path) -> None:
    _clear_env(monkeypatch)
    (tmp_path / "dev.toml").write_text('api_host = "0.0.0.0"\napi_port = 8000\nworkers = 2\n', encoding="utf-8")

    config = load_config("dev", config_dir=tmp_path)

    assert config.workers == 2
    assert {field.name for field in fields(config)}.isdisjoint({"api_host", "api_port"})
