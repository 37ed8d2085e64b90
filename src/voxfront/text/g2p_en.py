"""Deterministic letter-to-sound rules for English words missing from the lexicon.

The rules are a small longest-match table, not a trained model. They always
terminate (each step consumes at least one letter) and return ARPAbet phones
with the first vowel carrying primary stress.
"""

from __future__ import annotations

import re

VOWEL_PHONES = frozenset(
    {"AA", "AE", "AH", "AO", "AW", "AY", "EH", "ER", "EY", "IH", "IY", "OW", "OY", "UH", "UW"}
)

_VOWELS = frozenset("aeiou")
_MAGIC_E_RE = re.compile(r"[aeiou][bcdfgklmnprstvz]e$")
_LETTERS_RE = re.compile(r"[a-z]+")

# Checked longest first at every position.
_GRAPHEMES: dict[str, tuple[str, ...]] = {
    "tion": ("SH", "AH", "N"),
    "sion": ("ZH", "AH", "N"),
    "ough": ("AO",),
    "augh": ("AO",),
    "eigh": ("EY",),
    "igh": ("AY",),
    "tch": ("CH",),
    "dge": ("JH",),
    "ph": ("F",),
    "th": ("TH",),
    "sh": ("SH",),
    "ch": ("CH",),
    "ck": ("K",),
    "ng": ("NG",),
    "qu": ("K", "W"),
    "wh": ("W",),
    "kn": ("N",),
    "wr": ("R",),
    "gh": (),
    "ee": ("IY",),
    "ea": ("IY",),
    "oo": ("UW",),
    "ai": ("EY",),
    "ay": ("EY",),
    "oa": ("OW",),
    "ow": ("OW",),
    "ou": ("AW",),
    "oi": ("OY",),
    "oy": ("OY",),
    "au": ("AO",),
    "aw": ("AO",),
    "ie": ("IY",),
    "ei": ("EY",),
    "ey": ("IY",),
    "ew": ("UW",),
    "ue": ("UW",),
    "ar": ("AA", "R"),
    "er": ("ER",),
    "ir": ("ER",),
    "ur": ("ER",),
    "or": ("AO", "R"),
}
_MAX_GRAPHEME = max(len(grapheme) for grapheme in _GRAPHEMES)

_SHORT_VOWELS = {"a": "AE", "e": "EH", "i": "IH", "o": "AA", "u": "AH"}
_LONG_VOWELS = {"a": "EY", "e": "IY", "i": "AY", "o": "OW", "u": "UW"}
_CONSONANTS: dict[str, tuple[str, ...]] = {
    "b": ("B",),
    "d": ("D",),
    "f": ("F",),
    "g": ("G",),
    "h": ("HH",),
    "j": ("JH",),
    "k": ("K",),
    "l": ("L",),
    "m": ("M",),
    "n": ("N",),
    "p": ("P",),
    "q": ("K",),
    "r": ("R",),
    "s": ("S",),
    "t": ("T",),
    "v": ("V",),
    "w": ("W",),
    "x": ("K", "S"),
    "z": ("Z",),
}


def letters_to_phones(word: str) -> tuple[str, ...]:
    """Convert a word to stressed ARPAbet phones; empty if it has no letters."""
    letters = "".join(_LETTERS_RE.findall(word.lower()))
    if not letters:
        return ()

    long_vowel_at = -1
    if len(letters) > 2 and _MAGIC_E_RE.search(letters):
        long_vowel_at = len(letters) - 3
        letters = letters[:-1]
    elif len(letters) > 2 and letters.endswith("e") and any(char in _VOWELS for char in letters[:-1]):
        letters = letters[:-1]

    phones: list[str] = []
    position = 0
    while position < len(letters):
        char = letters[position]
        following = letters[position + 1] if position + 1 < len(letters) else ""

        if char == following and char not in _VOWELS and char != "c":
            position += 1
            continue

        matched = _match_grapheme(letters, position)
        if matched is not None:
            phones.extend(_GRAPHEMES[matched])
            position += len(matched)
            continue

        if char in _VOWELS:
            table = _LONG_VOWELS if position == long_vowel_at else _SHORT_VOWELS
            phones.append(table[char])
        elif char == "y":
            if position == 0:
                phones.append("Y")
            else:
                phones.append("IY" if position == len(letters) - 1 else "IH")
        elif char == "c":
            phones.append("S" if following in {"e", "i", "y"} else "K")
        else:
            phones.extend(_CONSONANTS[char])
        position += 1

    return _assign_stress(phones)


def _match_grapheme(letters: str, position: int) -> str | None:
    for length in range(min(_MAX_GRAPHEME, len(letters) - position), 1, -1):
        candidate = letters[position : position + length]
        if candidate in _GRAPHEMES:
            return candidate
    return None


def _assign_stress(phones: list[str]) -> tuple[str, ...]:
    stressed: list[str] = []
    seen_vowel = False
    for phone in phones:
        if phone in VOWEL_PHONES:
            stressed.append(f"{phone}{0 if seen_vowel else 1}")
            seen_vowel = True
        else:
            stressed.append(phone)
    return tuple(stressed)
