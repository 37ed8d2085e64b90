"""Configuration loading utilities for voxfront."""

from __future__ import annotations

import math
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_INT_KEYS = {"workers", "target_sample_rate_hz", "target_channels", "max_sentence_chars"}
_FLOAT_KEYS = {"detector_threshold"}
_STR_KEYS = {"log_level", "default_language", "resample_quality", "resources_path"}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration resolved from profile + environment variables."""

    env: str
    log_level: str
    workers: int
    default_language: str
    detector_threshold: float
    target_sample_rate_hz: int
    target_channels: int
    resample_quality: str
    max_sentence_chars: int
    resources_path: str

    def resolved_resources_path(self) -> Path | None:
        """Configured resource archive, or `None` for the bundled one."""
        return Path(self.resources_path) if self.resources_path else None


def load_config(env_name: str | None = None, config_dir: Path | None = None) -> AppConfig:
    """Load configuration from `configs/<env>.toml` and environment overrides."""
    env = env_name or os.getenv("VOXFRONT_ENV", "dev")
    resolved_dir = config_dir or _default_config_dir()
    profile_path = resolved_dir / f"{env}.toml"

    defaults: dict[str, str | int | float] = {
        "log_level": "INFO",
        "workers": 1,
        "default_language": "en",
        "detector_threshold": 0.5,
        "target_sample_rate_hz": 24000,
        "target_channels": 1,
        "resample_quality": "medium",
        "max_sentence_chars": 50,
        "resources_path": "",
    }
    file_values = _load_profile(profile_path)
    defaults.update(file_values)

    values: dict[str, str | int | float] = {}
    for key, default in defaults.items():
        name = f"VOXFRONT_{key.upper()}"
        raw = os.getenv(name)
        if key in _INT_KEYS:
            values[key] = _parse_int(name, raw, default)
        elif key in _FLOAT_KEYS:
            values[key] = _parse_float(name, raw, default)
        else:
            values[key] = raw if raw is not None else str(default)

    threshold = values["detector_threshold"]
    if not 0.0 <= float(threshold) <= 1.0:
        raise ValueError(f"VOXFRONT_DETECTOR_THRESHOLD must be within [0, 1], got {threshold!r}")
    if int(values["workers"]) < 1:
        raise ValueError(f"VOXFRONT_WORKERS must be at least 1, got {values['workers']!r}")

    return AppConfig(env=env, **values)  # type: ignore[arg-type]


def _default_config_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "configs"


def _load_profile(path: Path) -> dict[str, str | int | float]:
    if not path.exists():
        return {}

    with path.open("rb") as handle:
        payload = tomllib.load(handle)

    resolved: dict[str, str | int | float] = {}
    for key, raw in payload.items():
        if key in _INT_KEYS:
            resolved[key] = _coerce_int(key, raw)
        elif key in _FLOAT_KEYS:
            resolved[key] = _coerce_float(key, raw)
        elif key in _STR_KEYS:
            resolved[key] = _coerce_str(key, raw)
    return resolved


def _parse_int(name: str, raw: str | None, default: str | int | float) -> int:
    if raw is None:
        return _coerce_int(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_float(name: str, raw: str | None, default: str | int | float) -> float:
    if raw is None:
        return _coerce_float(name, default)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {raw!r}")
    return value


def _coerce_int(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got type bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    raise ValueError(f"{name} must be an integer, got type {type(value).__name__}")


def _coerce_float(name: str, value: object) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got type bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"{name} must be a number, got {value!r}") from exc
    raise ValueError(f"{name} must be a number, got type {type(value).__name__}")


def _coerce_str(name: str, value: object) -> str:
    if isinstance(value, str):
        return value
    raise ValueError(f"{name} must be a string, got type {type(value).__name__}")
