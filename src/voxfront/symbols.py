"""Symbol value type shared by phonemizers and the token encoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SymbolKind = Literal["phone", "grapheme", "punct", "boundary"]

WORD_BOUNDARY = "|"
PUNCTUATION = frozenset({"!", "?", "…", ",", ".", "-"})


@dataclass(frozen=True)
class Symbol:
    """A pronounceable unit tagged with its language and optional prosody."""

    text: str
    language: str
    kind: SymbolKind = "phone"
    tone: int | None = None
    stress: int | None = None


def boundary(language: str) -> Symbol:
    return Symbol(text=WORD_BOUNDARY, language=language, kind="boundary")


def punctuation(mark: str, language: str) -> Symbol:
    return Symbol(text=mark, language=language, kind="punct")


def grapheme(char: str, language: str) -> Symbol:
    return Symbol(text=char.lower(), language=language, kind="grapheme")


def arpabet(phone: str, language: str = "en") -> Symbol:
    """Build an ARPAbet phone symbol, reading the stress digit if present."""
    stress = int(phone[-1]) if phone[-1:].isdigit() else None
    return Symbol(text=phone, language=language, kind="phone", stress=stress)


def texts(symbols: tuple[Symbol, ...] | list[Symbol]) -> list[str]:
    return [symbol.text for symbol in symbols]
