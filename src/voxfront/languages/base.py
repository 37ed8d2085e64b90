"""Language pack base types."""

from __future__ import annotations

import re
import unicodedata
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from voxfront.resources import Resources
from voxfront.symbols import PUNCTUATION, Symbol, boundary, grapheme, punctuation
from voxfront.text.normalizer import normalize_text

# Words and single punctuation marks, in reading order.
CHUNK_RE = re.compile(r"[^\s,.!?…\-]+|[,.!?…\-]")


@dataclass(frozen=True)
class NormalizedText:
    """Normalized text together with the rule set that produced it."""

    original: str
    normalized: str
    normalizer_id: str


class BaseLanguagePack(ABC):
    """Normalization and phonemization for one language."""

    code: str
    name: str
    rule_set: str

    def normalize(self, text: str, resources: Resources) -> NormalizedText:
        rule_set = resources.rule_set(self.rule_set)
        return NormalizedText(
            original=text,
            normalized=normalize_text(text, rule_set),
            normalizer_id=rule_set.normalizer_id,
        )

    @abstractmethod
    def phonemize(self, normalized: str, resources: Resources) -> tuple[Symbol, ...]:
        """Convert normalized text to symbols with a boundary after each word."""


def grapheme_symbols(word: str, language: str) -> list[Symbol]:
    """One lower-cased symbol per character, skipping format and control characters."""
    return [
        grapheme(char, language)
        for char in word
        if unicodedata.category(char) not in {"Cf", "Cc"} and not char.isspace()
    ]


def phonemize_chunks(
    text: str, language: str, convert_word: Callable[[str], list[Symbol]]
) -> tuple[Symbol, ...]:
    """Split text into words and punctuation and convert each word.

    `convert_word` maps a word to its symbols; a boundary follows every word
    that produced at least one symbol.
    """
    symbols: list[Symbol] = []
    for chunk in CHUNK_RE.findall(text):
        if chunk in PUNCTUATION:
            symbols.append(punctuation(chunk, language))
            continue
        word_symbols = convert_word(chunk)
        if word_symbols:
            symbols.extend(word_symbols)
            symbols.append(boundary(language))
    return tuple(symbols)
