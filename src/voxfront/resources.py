"""Immutable resource bundle: vocabulary, normalization rules and lexicons.

Resources are read once from an archive, which is either a directory or a zip
file with this layout::

    manifest.json
    vocab.json
    rules/<name>.json
    lexicon/<name>.json

`load()` is the process-wide entry point and may run only once per path.
`load_resources()` is the pure builder behind it.
"""

from __future__ import annotations

import json
import logging
import re
import threading
import zipfile
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

from voxfront.encoding import Vocabulary
from voxfront.errors import ResourceLoadFailure
from voxfront.text import numbers_en, numbers_zh  # noqa: F401  registers rule expanders
from voxfront.text.expanders import has_expander

logger = logging.getLogger(__name__)

Stage = Literal["numerals", "abbreviations", "punctuation", "whitespace"]
STAGES: tuple[Stage, ...] = ("numerals", "abbreviations", "punctuation", "whitespace")

_FLAGS = {
    "IGNORECASE": re.IGNORECASE,
    "MULTILINE": re.MULTILINE,
    "ASCII": re.ASCII,
}


@dataclass(frozen=True)
class NormalizationRule:
    """One regex rewrite: a template replacement or a named expander."""

    name: str
    stage: Stage
    pattern: re.Pattern[str]
    replacement: str | None = None
    expander: str | None = None


@dataclass(frozen=True)
class NormalizationRuleSet:
    language: str
    normalizer_id: str
    rules: tuple[NormalizationRule, ...]

    def for_stage(self, stage: Stage) -> tuple[NormalizationRule, ...]:
        return tuple(rule for rule in self.rules if rule.stage == stage)


@dataclass(frozen=True, eq=False)
class PhonemeDictionary:
    """Read-only pronunciation lexicon with the name of its miss fallback."""

    name: str
    language: str
    entries: Mapping[str, tuple[str, ...]]
    fallback: str

    def lookup(self, word: str) -> tuple[str, ...] | None:
        return self.entries.get(word)

    def __contains__(self, word: object) -> bool:
        return word in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Resources:
    """Everything the front end reads at run time, shared without locking."""

    name: str
    version: str
    vocabulary: Vocabulary
    rule_sets: Mapping[str, NormalizationRuleSet]
    dictionaries: Mapping[str, PhonemeDictionary]

    def rule_set(self, language: str) -> NormalizationRuleSet:
        rule_set = self.rule_sets.get(language) or self.rule_sets.get("generic")
        if rule_set is None:
            raise ResourceLoadFailure(f"No normalization rules for {language!r} and no generic set")
        return rule_set

    def dictionary(self, name: str) -> PhonemeDictionary | None:
        return self.dictionaries.get(name)


def bundled_data_dir() -> Path:
    """Directory holding the resource archive shipped with the package."""
    return Path(__file__).resolve().parent / "data"


def load_resources(path: str | Path) -> Resources:
    """Build a `Resources` bundle from a directory or zip archive."""
    source = Path(path)
    if not source.exists():
        raise ResourceLoadFailure(f"Resource archive not found: {source}")

    if source.is_dir():
        return _build(lambda name: (source / name).read_bytes(), str(source))

    try:
        with zipfile.ZipFile(source) as archive:
            return _build(archive.read, str(source))
    except zipfile.BadZipFile as exc:
        raise ResourceLoadFailure(f"Resource archive is not a zip file: {source}") from exc


_lock = threading.Lock()
_loaded: tuple[Path, Resources] | None = None


def load(path: str | Path | None = None) -> Resources:
    """Load the process-wide resources once.

    Calling again with the same path returns the already loaded bundle.
    Calling with a different path is an error.
    """
    global _loaded

    resolved = Path(path).resolve() if path is not None else bundled_data_dir()
    with _lock:
        if _loaded is not None:
            loaded_path, resources = _loaded
            if loaded_path != resolved:
                raise ResourceLoadFailure(
                    f"Resources already loaded from {loaded_path}; refusing to load {resolved}"
                )
            return resources
        resources = load_resources(resolved)
        _loaded = (resolved, resources)
        logger.info(
            "Loaded resources %s %s from %s (%d symbols, %d rule sets, %d lexicons)",
            resources.name,
            resources.version,
            resolved,
            resources.vocabulary.size(),
            len(resources.rule_sets),
            len(resources.dictionaries),
        )
        return resources


def get_resources() -> Resources:
    """Return the process-wide resources, failing if `load()` has not run."""
    loaded = _loaded
    if loaded is None:
        raise ResourceLoadFailure("Resources have not been loaded; call voxfront.resources.load()")
    return loaded[1]


def write_archive(source_dir: str | Path, output_path: str | Path) -> Path:
    """Pack a resource directory into a zip archive."""
    source = Path(source_dir)
    if not (source / "manifest.json").is_file():
        raise ResourceLoadFailure(f"{source} does not contain manifest.json")

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for file_path in sorted(source.rglob("*.json")):
            archive.write(file_path, file_path.relative_to(source).as_posix())
    return output


def _build(read: Callable[[str], bytes], origin: str) -> Resources:
    manifest = _read_json(read, "manifest.json", origin)
    name = _require_str(manifest, "name", "manifest.json")
    version = _require_str(manifest, "version", "manifest.json")

    vocabulary = _build_vocabulary(_read_json(read, manifest.get("vocab", "vocab.json"), origin))

    rules = manifest.get("rules", {})
    if not isinstance(rules, dict):
        raise ResourceLoadFailure("manifest.json: 'rules' must be an object")
    rule_sets = {
        language: _build_rule_set(language, _read_json(read, member, origin), member)
        for language, member in rules.items()
    }

    lexicons = manifest.get("lexicons", [])
    if not isinstance(lexicons, list):
        raise ResourceLoadFailure("manifest.json: 'lexicons' must be a list")
    dictionaries: dict[str, PhonemeDictionary] = {}
    for spec in lexicons:
        dictionary = _build_dictionary(spec, read, origin)
        dictionaries[dictionary.name] = dictionary

    return Resources(
        name=name,
        version=version,
        vocabulary=vocabulary,
        rule_sets=MappingProxyType(rule_sets),
        dictionaries=MappingProxyType(dictionaries),
    )


def _read_json(read: Callable[[str], bytes], member: str, origin: str) -> Any:
    try:
        raw = read(member)
    except (OSError, KeyError) as exc:
        raise ResourceLoadFailure(f"{origin}: missing {member}") from exc
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ResourceLoadFailure(f"{origin}: {member} is not valid JSON: {exc}") from exc


def _require_str(payload: Any, key: str, member: str) -> str:
    if not isinstance(payload, dict) or not isinstance(payload.get(key), str):
        raise ResourceLoadFailure(f"{member}: '{key}' must be a string")
    return payload[key]


def _build_vocabulary(payload: Any) -> Vocabulary:
    if not isinstance(payload, dict) or not isinstance(payload.get("symbols"), list):
        raise ResourceLoadFailure("vocab.json: 'symbols' must be a list")
    specials = {
        key: payload[key]
        for key in ("pad", "bos", "eos", "unk", "boundary")
        if isinstance(payload.get(key), str)
    }
    try:
        return Vocabulary(symbols=tuple(str(symbol) for symbol in payload["symbols"]), **specials)
    except ValueError as exc:
        raise ResourceLoadFailure(f"vocab.json: {exc}") from exc


def _build_rule_set(language: str, payload: Any, member: str) -> NormalizationRuleSet:
    normalizer_id = _require_str(payload, "normalizer_id", member)
    raw_rules = payload.get("rules")
    if not isinstance(raw_rules, list):
        raise ResourceLoadFailure(f"{member}: 'rules' must be a list")
    return NormalizationRuleSet(
        language=language,
        normalizer_id=normalizer_id,
        rules=tuple(_build_rule(raw, member) for raw in raw_rules),
    )


def _build_rule(raw: Any, member: str) -> NormalizationRule:
    name = _require_str(raw, "name", member)
    stage = raw.get("stage")
    if stage not in STAGES:
        raise ResourceLoadFailure(f"{member}: rule {name!r} has unknown stage {stage!r}")

    flags = 0
    for flag in raw.get("flags", []):
        if flag not in _FLAGS:
            raise ResourceLoadFailure(f"{member}: rule {name!r} has unknown flag {flag!r}")
        flags |= _FLAGS[flag]
    try:
        pattern = re.compile(_require_str(raw, "pattern", member), flags)
    except re.error as exc:
        raise ResourceLoadFailure(f"{member}: rule {name!r} has invalid pattern: {exc}") from exc

    replacement = raw.get("replace")
    expander = raw.get("expand")
    if (replacement is None) == (expander is None):
        raise ResourceLoadFailure(f"{member}: rule {name!r} needs exactly one of 'replace' or 'expand'")
    if expander is not None and not has_expander(expander):
        raise ResourceLoadFailure(f"{member}: rule {name!r} names unknown expander {expander!r}")
    return NormalizationRule(
        name=name,
        stage=stage,
        pattern=pattern,
        replacement=replacement,
        expander=expander,
    )


def _build_dictionary(
    spec: Any, read: Callable[[str], bytes], origin: str
) -> PhonemeDictionary:
    name = _require_str(spec, "name", "manifest.json lexicon")
    member = _require_str(spec, "path", "manifest.json lexicon")
    payload = _read_json(read, member, origin)
    if not isinstance(payload, dict):
        raise ResourceLoadFailure(f"{member}: lexicon must be an object")
    entries: dict[str, tuple[str, ...]] = {}
    for word, pronunciation in payload.items():
        if not isinstance(pronunciation, str) or not pronunciation.strip():
            raise ResourceLoadFailure(f"{member}: entry {word!r} must be a non-empty string")
        entries[word] = tuple(pronunciation.split())
    return PhonemeDictionary(
        name=name,
        language=_require_str(spec, "language", "manifest.json lexicon"),
        entries=MappingProxyType(entries),
        fallback=spec.get("fallback", "grapheme"),
    )
