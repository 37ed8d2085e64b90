"""Core pipeline orchestration."""

from voxfront.core.pipeline import (
    FrontendPipeline,
    InferenceEngine,
    SynthesisResult,
    Utterance,
    build_response,
    run_frontend,
)

__all__ = [
    "FrontendPipeline",
    "InferenceEngine",
    "SynthesisResult",
    "Utterance",
    "build_response",
    "run_frontend",
]
