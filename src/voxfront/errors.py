"""Error taxonomy for the synthesis front end."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal


class VoxfrontError(Exception):
    """Base class for fatal front-end errors."""


class InvalidResampleSpec(VoxfrontError, ValueError):
    """Raised when a resample spec cannot describe a real conversion."""


class ResourceLoadFailure(VoxfrontError, RuntimeError):
    """Raised when the resource archive is missing or malformed."""


class InferenceFailure(VoxfrontError):
    """Raised when the external inference engine fails for one utterance."""


class UtteranceCancelled(VoxfrontError):
    """Raised when an utterance is cancelled between stages."""


class RecoverableKind(str, Enum):
    """Conditions that are logged but never abort an utterance."""

    LANGUAGE_UNRESOLVED = "LanguageUnresolved"
    NORMALIZATION_PATTERN_UNMATCHED = "NormalizationPatternUnmatched"
    PHONEMIZATION_MISS = "PhonemizationMiss"
    ENCODING_UNKNOWN_SYMBOL = "EncodingUnknownSymbol"


_RECOVERABLE_LEVELS = {
    RecoverableKind.LANGUAGE_UNRESOLVED: logging.WARNING,
    RecoverableKind.NORMALIZATION_PATTERN_UNMATCHED: logging.INFO,
    RecoverableKind.PHONEMIZATION_MISS: logging.DEBUG,
    RecoverableKind.ENCODING_UNKNOWN_SYMBOL: logging.DEBUG,
}


def report_recoverable(logger: logging.Logger, kind: RecoverableKind, message: str) -> None:
    """Log a recoverable condition with its kind attached to the record."""
    logger.log(
        _RECOVERABLE_LEVELS[kind],
        "%s: %s",
        kind.value,
        message,
        extra={"recoverable_kind": kind.value},
    )


FailureStage = Literal["select", "normalize", "phonemize", "encode", "synthesize", "resample"]


@dataclass(frozen=True)
class UtteranceFailure:
    """Typed per-utterance failure returned from batch calls."""

    text: str
    stage: FailureStage
    kind: str
    message: str

    @classmethod
    def from_exception(cls, text: str, stage: FailureStage, exc: BaseException) -> UtteranceFailure:
        return cls(text=text, stage=stage, kind=type(exc).__name__, message=str(exc))
