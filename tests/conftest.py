from pathlib import Path

import pytest

from voxfront import resources as resources_module
from voxfront.config import load_config
from voxfront.core import FrontendPipeline
from voxfront.resources import Resources, bundled_data_dir, load_resources

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def resources() -> Resources:
    return load_resources(bundled_data_dir())


@pytest.fixture
def config(monkeypatch):
    for key in (
        "ENV",
        "LOG_LEVEL",
        "WORKERS",
        "DEFAULT_LANGUAGE",
        "DETECTOR_THRESHOLD",
        "TARGET_SAMPLE_RATE_HZ",
        "TARGET_CHANNELS",
        "RESAMPLE_QUALITY",
        "MAX_SENTENCE_CHARS",
        "RESOURCES_PATH",
    ):
        monkeypatch.delenv(f"VOXFRONT_{key}", raising=False)
    return load_config("dev", config_dir=REPO_ROOT / "configs")


@pytest.fixture
def pipeline(resources, config) -> FrontendPipeline:
    return FrontendPipeline(resources, config)


@pytest.fixture
def fresh_resource_state(monkeypatch):
    """Isolate tests that exercise the process-wide `load()`."""
    monkeypatch.setattr(resources_module, "_loaded", None)
