"""Registry of named match expanders referenced by normalization rules."""

from __future__ import annotations

import re
from collections.abc import Callable

Expander = Callable[[re.Match[str]], str]

_EXPANDERS: dict[str, Expander] = {}


class ExpansionError(ValueError):
    """Raised by an expander that cannot verbalize its match."""


def expander(name: str) -> Callable[[Expander], Expander]:
    """Register a function under `name` for use in rule files."""

    def register(func: Expander) -> Expander:
        if name in _EXPANDERS:
            raise ValueError(f"Expander {name!r} is already registered")
        _EXPANDERS[name] = func
        return func

    return register


def has_expander(name: str) -> bool:
    return name in _EXPANDERS


def get_expander(name: str) -> Expander:
    try:
        return _EXPANDERS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown expander: {name}") from exc


def registered_expanders() -> list[str]:
    return sorted(_EXPANDERS)
