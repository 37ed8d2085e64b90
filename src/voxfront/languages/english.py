"""English language pack."""

from __future__ import annotations

import logging
import re

from voxfront.errors import RecoverableKind, report_recoverable
from voxfront.languages.base import BaseLanguagePack, grapheme_symbols, phonemize_chunks
from voxfront.resources import Resources
from voxfront.symbols import Symbol, arpabet
from voxfront.text.g2p_en import letters_to_phones

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z]+(?:'[a-z]+)*'?")
_CHARMAP = str.maketrans({"’": "'", "‘": "'"})


class EnglishLanguagePack(BaseLanguagePack):
    """English lexicon lookup with letter-to-sound rules on a miss."""

    code = "en"
    name = "English"
    rule_set = "en"

    def phonemize(self, normalized: str, resources: Resources) -> tuple[Symbol, ...]:
        return phonemize_chunks(
            normalized,
            self.code,
            lambda word: self.word_symbols(word, resources),
        )

    def word_symbols(self, word: str, resources: Resources) -> list[Symbol]:
        key = word.translate(_CHARMAP).casefold()
        lexicon = resources.dictionary("en")
        if lexicon is not None:
            entry = lexicon.lookup(key)
            if entry is not None:
                return [arpabet(phone, self.code) for phone in entry]

        if _WORD_RE.fullmatch(key):
            phones = letters_to_phones(key)
            if phones:
                report_recoverable(
                    logger,
                    RecoverableKind.PHONEMIZATION_MISS,
                    f"[en] {word!r} not in lexicon; letter rules gave {' '.join(phones)}",
                )
                return [arpabet(phone, self.code) for phone in phones]

        report_recoverable(
            logger,
            RecoverableKind.PHONEMIZATION_MISS,
            f"[en] {word!r} spelled out as graphemes",
        )
        return grapheme_symbols(word, self.code)


ENGLISH_PACK = EnglishLanguagePack()
