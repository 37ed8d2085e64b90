"""Split tone-numbered pinyin into initial and tonal final phones."""

from __future__ import annotations

import re
from dataclasses import dataclass

from voxfront.symbols import Symbol

_SYLLABLE_RE = re.compile(r"^([a-zü:]+?)([1-5])?$")
_INITIALS = (
    "zh", "ch", "sh",
    "b", "p", "m", "f", "d", "t", "n", "l", "g", "k", "h", "j", "q", "x", "r", "z", "c", "s",
)  # fmt: skip
_ZERO_INITIALS = {"a": "AA", "e": "EE", "o": "OO"}
_FINALS = frozenset(
    {
        "a", "ai", "an", "ang", "ao",
        "e", "ei", "en", "eng", "er",
        "i", "i0", "ia", "ian", "iang", "iao", "ie", "in", "ing", "iong", "ir", "iu",
        "o", "ong", "ou",
        "u", "ua", "uai", "uan", "uang", "ui", "un", "uo",
        "v", "van", "ve", "vn",
        "E", "En",
    }
)  # fmt: skip
_CONTRACTED = {"iou": "iu", "uei": "ui", "uen": "un"}


@dataclass(frozen=True)
class Syllable:
    initial: str
    final: str
    tone: int

    def symbols(self, language: str = "zh") -> tuple[Symbol, Symbol]:
        return (
            Symbol(text=self.initial, language=language, kind="phone"),
            Symbol(text=f"{self.final}{self.tone}", language=language, kind="phone", tone=self.tone),
        )


def parse_tone(pinyin: str) -> tuple[str, int]:
    """Return the toneless syllable and its tone, defaulting to neutral (5)."""
    match = _SYLLABLE_RE.match(pinyin.strip().lower())
    if match is None:
        raise ValueError(f"Not a pinyin syllable: {pinyin!r}")
    base = match.group(1).replace("ü", "v").replace("u:", "v")
    return base, int(match.group(2) or 5)


def split_syllable(pinyin: str, tone: int | None = None) -> Syllable:
    """Split a syllable such as `"xue2"` into `Syllable("x", "ve", 2)`."""
    base, parsed_tone = parse_tone(pinyin)
    resolved_tone = parsed_tone if tone is None else tone
    initial, final = _split(base)
    final = _CONTRACTED.get(final, final)
    if final not in _FINALS:
        raise ValueError(f"Unknown pinyin final {final!r} in {pinyin!r}")
    return Syllable(initial=initial, final=final, tone=resolved_tone)


def _split(base: str) -> tuple[str, str]:
    if base[0] in _ZERO_INITIALS:
        return _ZERO_INITIALS[base[0]], base

    if base[0] == "y":
        rest = base[1:]
        if rest.startswith(("u", "v")):
            return "y", "v" + rest[1:]
        if rest == "e":
            return "y", "E"
        if rest == "an":
            return "y", "En"
        return "y", rest

    if base[0] == "w":
        rest = base[1:]
        return "w", rest or "u"

    initial = next((candidate for candidate in _INITIALS if base.startswith(candidate)), None)
    if initial is None or len(base) == len(initial):
        raise ValueError(f"Cannot split pinyin syllable {base!r}")
    final = base[len(initial) :]
    if initial in {"j", "q", "x"} and final.startswith("u"):
        final = "v" + final[1:]
    elif initial in {"n", "l"} and final == "ue":
        final = "ve"
    elif final == "i" and initial in {"zh", "ch", "sh", "r"}:
        final = "ir"
    elif final == "i" and initial in {"z", "c", "s"}:
        final = "i0"
    return initial, final
