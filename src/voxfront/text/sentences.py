"""Split long input into synthesis-sized pieces."""

from __future__ import annotations

import re

_SENTENCE_END_RE = re.compile(r"(?<=[。！？!?…])|(?<=\.)(?=\s)")
_CLAUSE_END_RE = re.compile(r"(?<=[，,；;、：:])")


def split_sentences(text: str, max_chars: int = 50, min_chars: int = 5) -> list[str]:
    """Split on sentence punctuation, then on commas for overlong sentences.

    Pieces are packed greedily up to `max_chars`; a trailing piece shorter
    than `min_chars` is merged into the one before it.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    text = text.replace("……", "…").replace("——", "，").strip()
    if not text:
        return []

    pieces: list[str] = []
    for sentence in _SENTENCE_END_RE.split(text):
        sentence = sentence.strip()
        if not sentence:
            continue
        if len(sentence) > max_chars:
            pieces.extend(clause.strip() for clause in _CLAUSE_END_RE.split(sentence) if clause.strip())
        else:
            pieces.append(sentence)

    return _merge_short(_pack(pieces, max_chars), min_chars)


def _pack(pieces: list[str], max_chars: int) -> list[str]:
    packed: list[str] = []
    current = ""
    for piece in pieces:
        candidate = f"{current} {piece}" if current and _needs_space(current, piece) else current + piece
        if current and len(candidate) > max_chars:
            packed.append(current)
            current = piece
        else:
            current = candidate
    if current:
        packed.append(current)
    return packed


def _merge_short(pieces: list[str], min_chars: int) -> list[str]:
    merged: list[str] = []
    for piece in pieces:
        if merged and len(piece) < min_chars:
            joiner = " " if _needs_space(merged[-1], piece) else ""
            merged[-1] = merged[-1] + joiner + piece
        else:
            merged.append(piece)
    return merged


def _needs_space(left: str, right: str) -> bool:
    return left[-1].isascii() and right[0].isascii()
