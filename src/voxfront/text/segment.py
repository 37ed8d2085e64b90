"""Forward maximum-matching word segmentation for Han text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """A dictionary word, or a run of characters no dictionary word covers."""

    text: str
    in_dictionary: bool


class MaxMatchSegmenter:
    """Greedy longest-match segmenter over a fixed word list."""

    def __init__(self, words: Iterable[str]) -> None:
        self._words = frozenset(word for word in words if word)
        self._max_length = max((len(word) for word in self._words), default=1)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def cut(self, text: str) -> list[str]:
        """Split text into dictionary words and single unknown characters."""
        return [segment.text for segment in self._scan(text)]

    def segment(self, text: str) -> list[Segment]:
        """Like `cut`, but adjacent unknown characters are merged into one run."""
        merged: list[Segment] = []
        for segment in self._scan(text):
            if not segment.in_dictionary and merged and not merged[-1].in_dictionary:
                merged[-1] = Segment(merged[-1].text + segment.text, in_dictionary=False)
            else:
                merged.append(segment)
        return merged

    def _scan(self, text: str) -> list[Segment]:
        segments: list[Segment] = []
        position = 0
        while position < len(text):
            longest = min(self._max_length, len(text) - position)
            for length in range(longest, 0, -1):
                candidate = text[position : position + length]
                if length > 1 and candidate in self._words:
                    segments.append(Segment(candidate, in_dictionary=True))
                    position += length
                    break
            else:
                char = text[position]
                segments.append(Segment(char, in_dictionary=char in self._words))
                position += 1
        return segments
