"""Rule-driven text normalization."""

from __future__ import annotations

import logging
import re

from voxfront.errors import RecoverableKind, report_recoverable
from voxfront.resources import STAGES, NormalizationRule, NormalizationRuleSet
from voxfront.text.expanders import get_expander

logger = logging.getLogger(__name__)

_SPACES_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"\d+")


def normalize_text(text: str, rule_set: NormalizationRuleSet) -> str:
    """Apply `rule_set` stage by stage, then collapse whitespace.

    Stages run in the fixed order numerals, abbreviations, punctuation,
    whitespace; rules inside a stage run in file order. Matches an expander
    cannot verbalize are kept as literal text.
    """
    if not text:
        return ""

    normalized = text
    for stage in STAGES:
        for rule in rule_set.for_stage(stage):
            normalized = _apply_rule(normalized, rule, rule_set.language)
        if stage == "numerals":
            _report_residual_digits(normalized, rule_set.language)
    return _SPACES_RE.sub(" ", normalized).strip()


def _apply_rule(text: str, rule: NormalizationRule, language: str) -> str:
    if rule.replacement is not None:
        return rule.pattern.sub(rule.replacement, text)

    expand = get_expander(rule.expander or "")

    def substitute(match: re.Match[str]) -> str:
        try:
            return expand(match)
        except (ValueError, OverflowError) as exc:
            report_recoverable(
                logger,
                RecoverableKind.NORMALIZATION_PATTERN_UNMATCHED,
                f"[{language}] rule {rule.name!r} left {match.group(0)!r} as-is: {exc}",
            )
            return match.group(0)

    return rule.pattern.sub(substitute, text)


def _report_residual_digits(text: str, language: str) -> None:
    residual = _DIGITS_RE.findall(text)
    if residual:
        report_recoverable(
            logger,
            RecoverableKind.NORMALIZATION_PATTERN_UNMATCHED,
            f"[{language}] digits left after numeral expansion: {residual!r}",
        )
