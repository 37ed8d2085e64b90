"""English numeral verbalizers used by the `en.*` normalization rules."""

from __future__ import annotations

import re

from num2words import num2words

from voxfront.text.expanders import ExpansionError, expander

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_DIGIT_WORDS = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")
_AND_RE = re.compile(r"\band\b")
_SPACES_RE = re.compile(r"\s+")


def _clean(words: str) -> str:
    words = words.replace("-", " ").replace(",", " ")
    words = _AND_RE.sub(" ", words)
    return _SPACES_RE.sub(" ", words).strip()


def cardinal(value: int) -> str:
    """Spell an integer: `105 -> "one hundred five"`."""
    try:
        return _clean(num2words(value))
    except OverflowError as exc:
        raise ExpansionError(f"{value} is too large to verbalize") from exc


def ordinal(value: int) -> str:
    try:
        return _clean(num2words(value, to="ordinal"))
    except OverflowError as exc:
        raise ExpansionError(f"{value} is too large to verbalize") from exc


def year(value: int) -> str:
    """Read numbers between 1000 and 3000 the way years are spoken."""
    if not 1000 < value < 3000:
        return cardinal(value)
    if value == 2000:
        return "two thousand"
    if 2000 < value < 2010:
        return f"two thousand {cardinal(value % 100)}"
    if value % 100 == 0:
        return f"{cardinal(value // 100)} hundred"
    head, tail = divmod(value, 100)
    if tail < 10:
        return f"{cardinal(head)} oh {cardinal(tail)}"
    return f"{cardinal(head)} {cardinal(tail)}"


def digits(value: str) -> str:
    return " ".join(_DIGIT_WORDS[int(char)] for char in value)


def decimal(integer: str, fraction: str) -> str:
    return f"{cardinal(int(integer))} point {digits(fraction)}"


@expander("en.remove_commas")
def expand_remove_commas(match: re.Match[str]) -> str:
    return match.group(1).replace(",", "")


@expander("en.pounds")
def expand_pounds(match: re.Match[str]) -> str:
    amount = int(match.group(1).replace(",", ""))
    unit = "pound" if amount == 1 else "pounds"
    return f"{cardinal(amount)} {unit}"


@expander("en.dollars")
def expand_dollars(match: re.Match[str]) -> str:
    parts = match.group(1).replace(",", "").split(".")
    if len(parts) > 2 or not parts[0] and not parts[-1]:
        raise ExpansionError(f"Unexpected currency format: {match.group(0)!r}")
    dollars = int(parts[0]) if parts[0] else 0
    cents = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    dollar_unit = "dollar" if dollars == 1 else "dollars"
    cent_unit = "cent" if cents == 1 else "cents"
    if dollars and cents:
        return f"{cardinal(dollars)} {dollar_unit}, {cardinal(cents)} {cent_unit}"
    if cents:
        return f"{cardinal(cents)} {cent_unit}"
    return f"{cardinal(dollars)} {dollar_unit}"


@expander("en.percent")
def expand_percent(match: re.Match[str]) -> str:
    integer, _, fraction = match.group(1).partition(".")
    spoken = decimal(integer, fraction) if fraction else cardinal(int(integer))
    return f"{spoken} percent"


@expander("en.iso_date")
def expand_iso_date(match: re.Match[str]) -> str:
    year_value, month, day = (int(group) for group in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise ExpansionError(f"Not a calendar date: {match.group(0)!r}")
    return f"{_MONTHS[month - 1]} {ordinal(day)}, {year(year_value)}"


@expander("en.time")
def expand_time(match: re.Match[str]) -> str:
    hour = cardinal(int(match.group(1)))
    minute = int(match.group(2))
    if minute == 0:
        return f"{hour} o'clock"
    if minute < 10:
        return f"{hour} oh {cardinal(minute)}"
    return f"{hour} {cardinal(minute)}"


@expander("en.decimal")
def expand_decimal(match: re.Match[str]) -> str:
    return decimal(match.group(1), match.group(2))


@expander("en.ordinal")
def expand_ordinal(match: re.Match[str]) -> str:
    return ordinal(int(match.group(1)))


@expander("en.negative")
def expand_negative(match: re.Match[str]) -> str:
    return f"minus {cardinal(int(match.group(1)))}"


@expander("en.cardinal")
def expand_cardinal(match: re.Match[str]) -> str:
    return year(int(match.group(0)))
