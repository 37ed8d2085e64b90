"""Language selection: explicit override, detector result, or configured default."""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from typing import Literal, Protocol

from voxfront.errors import RecoverableKind, report_recoverable
from voxfront.languages.registry import canonical_language, is_supported

logger = logging.getLogger(__name__)

SelectionSource = Literal["override", "detected", "default"]


@dataclass(frozen=True)
class Detection:
    language: str
    confidence: float


@dataclass(frozen=True)
class LanguageSelection:
    language: str
    source: SelectionSource
    confidence: float


class LanguageDetector(Protocol):
    """Anything that can guess the language of a text."""

    def detect(self, text: str) -> Detection: ...


class ScriptDetector:
    """Guess the language from the share of letters in each script.

    Kana anywhere means Japanese; otherwise the dominant script among Han,
    Hangul and Latin letters wins, with the share as confidence.
    """

    def detect(self, text: str) -> Detection:
        counts = {"han": 0, "kana": 0, "hangul": 0, "latin": 0}
        letters = 0
        for char in text:
            if not char.isalpha():
                continue
            letters += 1
            script = _script_of(char)
            if script is not None:
                counts[script] += 1

        if letters == 0:
            return Detection(language="und", confidence=0.0)
        if counts["kana"]:
            return Detection(language="ja", confidence=(counts["kana"] + counts["han"]) / letters)

        script, count = max(
            ((name, counts[name]) for name in ("han", "hangul", "latin")), key=lambda item: item[1]
        )
        language = {"han": "zh", "hangul": "ko", "latin": "en"}[script]
        return Detection(language=language, confidence=count / letters)


def _script_of(char: str) -> str | None:
    code_point = ord(char)
    if 0x4E00 <= code_point <= 0x9FFF or 0x3400 <= code_point <= 0x4DBF:
        return "han"
    if 0x3040 <= code_point <= 0x30FF:
        return "kana"
    if 0xAC00 <= code_point <= 0xD7AF or 0x1100 <= code_point <= 0x11FF:
        return "hangul"
    if unicodedata.name(char, "").startswith("LATIN"):
        return "latin"
    return None


def select_language(
    text: str,
    override: str | None = None,
    *,
    detector: LanguageDetector,
    default_language: str,
    threshold: float,
) -> LanguageSelection:
    """Pick the language for an utterance.

    A supported override wins. Otherwise the detector's answer is used when
    its confidence reaches `threshold` and the language is supported; anything
    else falls back to `default_language`.
    """
    if override and canonical_language(override) != "und":
        language = canonical_language(override)
        if is_supported(language):
            return LanguageSelection(language=language, source="override", confidence=1.0)
        report_recoverable(
            logger,
            RecoverableKind.LANGUAGE_UNRESOLVED,
            f"override {override!r} is not supported; running detection",
        )

    detection = detector.detect(text)
    language = canonical_language(detection.language)
    if detection.confidence >= threshold and is_supported(language) and language != "und":
        return LanguageSelection(language=language, source="detected", confidence=detection.confidence)

    if text.strip():
        report_recoverable(
            logger,
            RecoverableKind.LANGUAGE_UNRESOLVED,
            f"detected {detection.language!r} at confidence {detection.confidence:.2f} "
            f"(threshold {threshold:.2f}); using default {default_language!r}",
        )
    return LanguageSelection(
        language=canonical_language(default_language),
        source="default",
        confidence=detection.confidence,
    )
