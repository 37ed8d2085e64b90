"""Grapheme fallback language pack."""

from __future__ import annotations

from voxfront.languages.base import BaseLanguagePack, grapheme_symbols, phonemize_chunks
from voxfront.resources import Resources
from voxfront.symbols import Symbol


class GenericLanguagePack(BaseLanguagePack):
    """Pack reusable for any language without pronunciation resources."""

    rule_set = "generic"

    def __init__(self, *, code: str, name: str) -> None:
        self.code = code
        self.name = name

    def phonemize(self, normalized: str, resources: Resources) -> tuple[Symbol, ...]:
        return phonemize_chunks(
            normalized,
            self.code,
            lambda word: grapheme_symbols(word, self.code),
        )


GENERIC_PACK = GenericLanguagePack(code="und", name="Undetermined")
