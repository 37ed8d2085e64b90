"""Vocabulary and token encoding."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from voxfront.errors import RecoverableKind, report_recoverable
from voxfront.symbols import WORD_BOUNDARY, Symbol

logger = logging.getLogger(__name__)

# Start and end markers added around every encoded utterance.
BOUNDARY_TOKEN_COUNT = 2


@dataclass(frozen=True)
class Vocabulary:
    """Ordered symbol table where each symbol's ID is its index."""

    symbols: tuple[str, ...]
    pad: str = "<pad>"
    bos: str = "<bos>"
    eos: str = "<eos>"
    unk: str = "UNK"
    boundary: str = WORD_BOUNDARY
    index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("Vocabulary symbols must be unique")
        missing = [
            name
            for name, token in (
                ("pad", self.pad),
                ("bos", self.bos),
                ("eos", self.eos),
                ("unk", self.unk),
                ("boundary", self.boundary),
            )
            if token not in self.symbols
        ]
        if missing:
            raise ValueError(f"Vocabulary is missing special tokens: {', '.join(missing)}")
        index = {symbol: position for position, symbol in enumerate(self.symbols)}
        object.__setattr__(self, "index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.symbols)

    def size(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.index

    def id_of(self, symbol: str) -> int:
        return self.index.get(symbol, self.unk_id)

    def symbol_of(self, token_id: int) -> str:
        if not 0 <= token_id < len(self.symbols):
            raise IndexError(f"Token ID {token_id} is outside vocabulary of size {len(self.symbols)}")
        return self.symbols[token_id]

    @property
    def pad_id(self) -> int:
        return self.index[self.pad]

    @property
    def bos_id(self) -> int:
        return self.index[self.bos]

    @property
    def eos_id(self) -> int:
        return self.index[self.eos]

    @property
    def unk_id(self) -> int:
        return self.index[self.unk]

    @property
    def boundary_id(self) -> int:
        return self.index[self.boundary]


def encode(symbols: Iterable[Symbol], vocabulary: Vocabulary) -> tuple[int, ...]:
    """Encode symbols as `[bos] + ids + [eos]`.

    Unknown symbols map to the unknown ID. Boundary symbols are copied through
    as the vocabulary's boundary ID.
    """
    ids = [vocabulary.bos_id]
    unknown: list[str] = []
    for symbol in symbols:
        if symbol.kind == "boundary":
            ids.append(vocabulary.boundary_id)
            continue
        token_id = vocabulary.index.get(symbol.text)
        if token_id is None:
            unknown.append(symbol.text)
            token_id = vocabulary.unk_id
        ids.append(token_id)
    ids.append(vocabulary.eos_id)

    if unknown:
        report_recoverable(
            logger,
            RecoverableKind.ENCODING_UNKNOWN_SYMBOL,
            f"{len(unknown)} symbol(s) mapped to {vocabulary.unk}: {sorted(set(unknown))!r}",
        )
    return tuple(ids)


def decode(token_ids: Iterable[int], vocabulary: Vocabulary) -> list[str]:
    """Map IDs back to symbol strings, dropping start, end and padding tokens."""
    skipped = {vocabulary.bos_id, vocabulary.eos_id, vocabulary.pad_id}
    return [vocabulary.symbol_of(token_id) for token_id in token_ids if token_id not in skipped]


def pad_batch(sequences: Sequence[Sequence[int]], vocabulary: Vocabulary) -> list[list[int]]:
    """Right-pad token sequences to a common length."""
    if not sequences:
        return []
    width = max(len(sequence) for sequence in sequences)
    pad_id = vocabulary.pad_id
    return [list(sequence) + [pad_id] * (width - len(sequence)) for sequence in sequences]
