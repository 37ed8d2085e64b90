"""Mandarin Chinese language pack.

Han text is segmented by forward maximum matching against the phrase lexicon.
Dictionary words take their phrase readings; other characters are read one by
one from the character lexicon. Tone sandhi runs per word before syllables are
split into initial and tonal final phones. Latin words inside Chinese text are
handed to the English pack.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from voxfront.errors import RecoverableKind, report_recoverable
from voxfront.languages.base import BaseLanguagePack, grapheme_symbols
from voxfront.languages.english import ENGLISH_PACK
from voxfront.resources import PhonemeDictionary, Resources
from voxfront.symbols import Symbol, boundary, grapheme, punctuation
from voxfront.text.pinyin import parse_tone, split_syllable
from voxfront.text.segment import MaxMatchSegmenter
from voxfront.text.tone_sandhi import apply_tone_sandhi

logger = logging.getLogger(__name__)

_RUN_RE = re.compile(
    r"(?P<han>[\u3400-\u4dbf\u4e00-\u9fff]+)"
    r"|(?P<latin>[A-Za-z]+(?:'[A-Za-z]+)*)"
    r"|(?P<punct>[,.!?…\-])"
    r"|(?P<space>\s+)"
    r"|(?P<other>[^\s,.!?…\-A-Za-z\u3400-\u4dbf\u4e00-\u9fff]+)"
)
_SANDHI_PREFIXES = frozenset("不一")


@dataclass(frozen=True)
class _Word:
    text: str
    readings: tuple[str | None, ...]


@lru_cache(maxsize=8)
def _segmenter(phrases: PhonemeDictionary) -> MaxMatchSegmenter:
    return MaxMatchSegmenter(phrases.entries.keys())


class ChineseLanguagePack(BaseLanguagePack):
    """Segmentation-based phonemizer producing opencpop-style phones."""

    code = "zh"
    name = "Chinese"
    rule_set = "zh"

    def phonemize(self, normalized: str, resources: Resources) -> tuple[Symbol, ...]:
        symbols: list[Symbol] = []
        for match in _RUN_RE.finditer(normalized):
            kind = match.lastgroup
            text = match.group(0)
            if kind == "han":
                symbols.extend(self._han_symbols(text, resources))
            elif kind == "latin":
                symbols.extend(ENGLISH_PACK.phonemize(text, resources))
            elif kind == "punct":
                symbols.append(punctuation(text, self.code))
            elif kind == "other":
                graphemes = grapheme_symbols(text, self.code)
                if graphemes:
                    symbols.extend(graphemes)
                    symbols.append(boundary(self.code))
        return tuple(symbols)

    def _han_symbols(self, run: str, resources: Resources) -> list[Symbol]:
        symbols: list[Symbol] = []
        for word in _merge_sandhi_prefixes(self._words(run, resources)):
            symbols.extend(self._word_symbols(word))
            symbols.append(boundary(self.code))
        return symbols

    def _words(self, run: str, resources: Resources) -> list[_Word]:
        phrases = resources.dictionary("zh.phrases")
        chars = resources.dictionary("zh.chars")
        if phrases is None:
            segments = [(run, False)]
        else:
            segments = [
                (segment.text, segment.in_dictionary) for segment in _segmenter(phrases).segment(run)
            ]

        words: list[_Word] = []
        for text, in_dictionary in segments:
            entry = phrases.lookup(text) if phrases is not None and in_dictionary else None
            if entry is not None and len(entry) == len(text):
                words.append(_Word(text, tuple(entry)))
                continue
            report_recoverable(
                logger,
                RecoverableKind.PHONEMIZATION_MISS,
                f"[zh] {text!r} not in phrase lexicon; reading characters one by one",
            )
            words.append(_Word(text, tuple(_char_reading(char, chars) for char in text)))
        return words

    def _word_symbols(self, word: _Word) -> list[Symbol]:
        bases: list[str | None] = []
        tones: list[int] = []
        for reading in word.readings:
            base, tone = _parse(reading)
            bases.append(base)
            tones.append(tone)
        tones = apply_tone_sandhi(word.text, tones)

        symbols: list[Symbol] = []
        for char, base, tone in zip(word.text, bases, tones):
            if base is None:
                report_recoverable(
                    logger,
                    RecoverableKind.PHONEMIZATION_MISS,
                    f"[zh] no reading for {char!r}; using grapheme",
                )
                symbols.append(grapheme(char, self.code))
                continue
            try:
                symbols.extend(split_syllable(base, tone).symbols(self.code))
            except ValueError as exc:
                report_recoverable(logger, RecoverableKind.PHONEMIZATION_MISS, f"[zh] {exc}")
                symbols.append(grapheme(char, self.code))
        return symbols


def _char_reading(char: str, chars: PhonemeDictionary | None) -> str | None:
    if chars is None:
        return None
    entry = chars.lookup(char)
    return entry[0] if entry else None


def _parse(reading: str | None) -> tuple[str | None, int]:
    if reading is None:
        return None, 5
    try:
        return parse_tone(reading)
    except ValueError:
        return None, 5


def _merge_sandhi_prefixes(words: list[_Word]) -> list[_Word]:
    """Attach a lone 不 or 一 to the following word so sandhi can see both."""
    merged: list[_Word] = []
    pending: _Word | None = None
    for word in words:
        if pending is not None:
            word = _Word(pending.text + word.text, pending.readings + word.readings)
            pending = None
        if len(word.text) == 1 and word.text in _SANDHI_PREFIXES:
            pending = word
            continue
        merged.append(word)
    if pending is not None:
        merged.append(pending)
    return merged


CHINESE_PACK = ChineseLanguagePack()
