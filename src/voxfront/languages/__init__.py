"""Language packs: normalization and phonemization per language."""

from voxfront.languages.base import BaseLanguagePack, NormalizedText
from voxfront.languages.registry import (
    canonical_language,
    is_supported,
    normalize,
    phonemize,
    resolve_language_pack,
    supported_languages,
)

__all__ = [
    "BaseLanguagePack",
    "NormalizedText",
    "canonical_language",
    "is_supported",
    "normalize",
    "phonemize",
    "resolve_language_pack",
    "supported_languages",
]
