"""Language pack registry and resolution."""

from __future__ import annotations

from voxfront.languages.base import BaseLanguagePack, NormalizedText
from voxfront.languages.chinese import CHINESE_PACK
from voxfront.languages.english import ENGLISH_PACK
from voxfront.languages.generic import GENERIC_PACK, GenericLanguagePack
from voxfront.resources import Resources, get_resources
from voxfront.symbols import Symbol

_EUROPEAN_CODES = {
    "bg",
    "ca",
    "cs",
    "cy",
    "da",
    "de",
    "el",
    "es",
    "et",
    "eu",
    "fi",
    "fr",
    "ga",
    "gl",
    "hr",
    "hu",
    "is",
    "it",
    "lt",
    "lv",
    "mk",
    "mt",
    "nl",
    "no",
    "pl",
    "pt",
    "ro",
    "sk",
    "sl",
    "sq",
    "sr",
    "sv",
}

_EXTRA_GENERIC_LANGUAGE_PACKS: dict[str, BaseLanguagePack] = {
    "ja": GenericLanguagePack(code="ja", name="Japanese"),
    "ko": GenericLanguagePack(code="ko", name="Korean"),
}
for code in sorted(_EUROPEAN_CODES):
    _EXTRA_GENERIC_LANGUAGE_PACKS[code] = GenericLanguagePack(code=code, name=code.upper())

_LANGUAGE_PACKS: dict[str, BaseLanguagePack] = {
    "en": ENGLISH_PACK,
    "zh": CHINESE_PACK,
    "und": GENERIC_PACK,
    **_EXTRA_GENERIC_LANGUAGE_PACKS,
}

_ALIASES = {
    "auto": "und",
    "en-us": "en",
    "en-gb": "en",
    "en-ca": "en",
    "en-au": "en",
    "zh-cn": "zh",
    "zh-hans": "zh",
    "zh-sg": "zh",
    "cmn": "zh",
    "ja-jp": "ja",
    "ko-kr": "ko",
}


def canonical_language(language_code: str) -> str:
    """Lower-case a language tag and resolve known aliases."""
    folded = language_code.strip().casefold().replace("_", "-")
    return _ALIASES.get(folded, folded)


def is_supported(language_code: str) -> bool:
    return canonical_language(language_code) in _LANGUAGE_PACKS


def supported_languages() -> list[str]:
    return sorted(_LANGUAGE_PACKS)


def resolve_language_pack(language_code: str) -> BaseLanguagePack:
    """Resolve a language code to the best available language pack."""
    return _LANGUAGE_PACKS.get(canonical_language(language_code), GENERIC_PACK)


def normalize(text: str, language: str, resources: Resources | None = None) -> NormalizedText:
    """Normalize text with the rule set of `language`'s pack.

    Uses the process-wide resources from `voxfront.resources.load()` unless a
    bundle is passed explicitly.
    """
    return resolve_language_pack(language).normalize(text, resources or get_resources())


def phonemize(
    normalized: str, language: str, resources: Resources | None = None
) -> tuple[Symbol, ...]:
    """Convert normalized text to symbols with `language`'s pack."""
    return resolve_language_pack(language).phonemize(normalized, resources or get_resources())
