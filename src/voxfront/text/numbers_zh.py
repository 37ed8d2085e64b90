"""Chinese numeral verbalizers used by the `zh.*` normalization rules.

Numbers are read the way Mandarin speakers read them: cardinals with the
十/百/千/万/亿 units, phone numbers and long identifiers digit by digit (with
幺 for 1), dates and clock times with their own conventions.
"""

from __future__ import annotations

import re

from voxfront.text.expanders import ExpansionError, expander

DIGITS = dict(zip("0123456789", "零一二三四五六七八九"))
UNITS = {1: "十", 2: "百", 3: "千", 4: "万", 8: "亿"}
MAX_NUMERIC_LENGTH = 13

_MEASURE_UNITS = {
    "km/h": "千米每小时",
    "km/s": "千米每秒",
    "mm/s": "毫米每秒",
    "m/s": "米每秒",
    "cm²": "平方厘米",
    "cm2": "平方厘米",
    "cm³": "立方厘米",
    "cm3": "立方厘米",
    "m²": "平方米",
    "m2": "平方米",
    "m³": "立方米",
    "m3": "立方米",
    "ml": "毫升",
    "mm": "毫米",
    "cm": "厘米",
    "km": "千米",
    "kg": "千克",
    "db": "分贝",
    "ms": "毫秒",
    "m": "米",
    "g": "克",
    "s": "秒",
}

_SYMBOL_NAMES = {
    "①": "一",
    "②": "二",
    "③": "三",
    "④": "四",
    "⑤": "五",
    "⑥": "六",
    "⑦": "七",
    "⑧": "八",
    "⑨": "九",
    "⑩": "十",
    "α": "阿尔法",
    "β": "贝塔",
    "γ": "伽玛",
    "δ": "德尔塔",
    "ε": "艾普西龙",
    "ζ": "截塔",
    "η": "艾塔",
    "θ": "西塔",
    "λ": "兰布达",
    "μ": "缪",
    "π": "派",
    "σ": "西格玛",
    "φ": "佛爱",
    "ω": "欧米伽",
}


def verbalize_digits(value: str, alt_one: bool = False) -> str:
    """Read a digit string one digit at a time."""
    spoken = "".join(DIGITS.get(char, char) for char in value)
    return spoken.replace("一", "幺") if alt_one else spoken


def _get_value(value: str, use_zero: bool = True) -> list[str]:
    stripped = value.lstrip("0")
    if not stripped:
        return []
    if len(stripped) == 1:
        if use_zero and len(stripped) < len(value):
            return [DIGITS["0"], DIGITS[stripped]]
        return [DIGITS[stripped]]

    largest_unit = next(power for power in (8, 4, 3, 2, 1) if power < len(stripped))
    split_point = len(value) - largest_unit
    return [
        *_get_value(value[:split_point]),
        UNITS[largest_unit],
        *_get_value(value[split_point:]),
    ]


def verbalize_cardinal(value: str, with_limit: bool = False) -> str:
    """Read an integer string as a cardinal number.

    With `with_limit`, strings with a leading zero or more than
    `MAX_NUMERIC_LENGTH` digits are read digit by digit instead.
    """
    if not value:
        return ""
    if with_limit and (value.startswith("0") or len(value) > MAX_NUMERIC_LENGTH):
        return verbalize_digits(value, alt_one=True)

    stripped = value.lstrip("0")
    if not stripped:
        return DIGITS["0"]
    if len(stripped) > MAX_NUMERIC_LENGTH + 4:
        raise ExpansionError(f"{value} is too large to verbalize")
    symbols = _get_value(stripped)
    if symbols[:2] == [DIGITS["1"], UNITS[1]]:
        symbols = symbols[1:]
    return "".join(symbols)


def num2str(value: str, with_limit: bool = False) -> str:
    """Read an integer or decimal string."""
    integer, dot, fraction = value.partition(".")
    if not dot:
        return verbalize_cardinal(value, with_limit)

    result = verbalize_cardinal(integer)
    fraction = fraction.rstrip("0")
    if fraction:
        result = (result or DIGITS["0"]) + "点" + verbalize_digits(fraction)
    return result or DIGITS["0"]


def _clock_part(value: str) -> str:
    result = num2str(value.lstrip("0"))
    if value.startswith("0") and result != DIGITS["0"]:
        return DIGITS["0"] + result if result else DIGITS["0"]
    return result or DIGITS["0"]


def _clock(hour: str, minute: str, second: str | None) -> str:
    result = f"{num2str(hour)}点"
    spoken_minute = _clock_part(minute)
    if spoken_minute == "三十":
        result += "半"
    elif spoken_minute != DIGITS["0"]:
        result += f"{spoken_minute}分"
    if second is not None:
        result += f"{_clock_part(second)}秒"
    return result


def _date(year: str, month: str | None, day: str | None, suffix: str | None) -> str:
    result = f"{verbalize_digits(year)}年"
    if month is not None:
        result += f"{verbalize_cardinal(month)}月"
    if day is not None:
        result += f"{verbalize_cardinal(day)}{suffix or '日'}"
    return result


def _signed(sign: str, number: str, with_limit: bool = False) -> str:
    negative = bool(sign) and number.strip("0.") != ""
    spoken = num2str(number, with_limit=with_limit and not negative)
    return f"负{spoken}" if negative else spoken


def _phone(value: str, mobile: bool) -> str:
    if mobile and value.startswith("+"):
        parts = value.lstrip("+").split()
    else:
        parts = value.split("-")
    return "，".join(verbalize_digits(part, alt_one=True) for part in parts)


@expander("zh.halfwidth")
def expand_halfwidth(match: re.Match[str]) -> str:
    return "".join(chr(ord(char) - 0xFEE0) for char in match.group(0))


@expander("zh.date")
def expand_date(match: re.Match[str]) -> str:
    return _date(match.group(1), match.group(3), match.group(5), match.group(6))


@expander("zh.date2")
def expand_numeric_date(match: re.Match[str]) -> str:
    return _date(match.group(1), match.group(2), match.group(3), match.group(4))


@expander("zh.time")
def expand_time(match: re.Match[str]) -> str:
    return _clock(match.group(1), match.group(2), match.group(4))


@expander("zh.time_range")
def expand_time_range(match: re.Match[str]) -> str:
    start = _clock(match.group(1), match.group(2), match.group(4))
    end = _clock(match.group(6), match.group(7), match.group(9))
    return f"{start}至{end}"


@expander("zh.temperature")
def expand_temperature(match: re.Match[str]) -> str:
    sign = "零下" if match.group(1) else ""
    unit = "摄氏度" if match.group(4) == "摄氏度" else "度"
    return f"{sign}{num2str(match.group(2))}{unit}"


@expander("zh.measure")
def expand_measure(match: re.Match[str]) -> str:
    unit = match.group(2)
    try:
        spoken_unit = _MEASURE_UNITS[unit]
    except KeyError as exc:
        raise ExpansionError(f"Unknown measure unit: {unit!r}") from exc
    return f"{num2str(match.group(1))}{spoken_unit}"


@expander("zh.mobile")
def expand_mobile(match: re.Match[str]) -> str:
    return _phone(match.group(0), mobile=True)


@expander("zh.telephone")
def expand_telephone(match: re.Match[str]) -> str:
    return _phone(match.group(0), mobile=False)


@expander("zh.scientific")
def expand_scientific(match: re.Match[str]) -> str:
    sign, base, exponent = match.group(1), match.group(2), int(match.group(4))
    integer, _, fraction = base.partition(".")
    mantissa = integer + fraction
    point = len(integer) + exponent
    if point <= 0:
        number = "0." + "0" * -point + mantissa
    elif point >= len(mantissa):
        number = mantissa + "0" * (point - len(mantissa))
    else:
        number = f"{mantissa[:point]}.{mantissa[point:]}"
    spoken = num2str(number)
    return f"负{spoken}" if sign else spoken


@expander("zh.fraction")
def expand_fraction(match: re.Match[str]) -> str:
    sign, numerator, denominator = match.groups()
    negative = "负" if sign and numerator.strip("0") else ""
    return f"{negative}{num2str(denominator)}分之{num2str(numerator)}"


@expander("zh.percentage")
def expand_percentage(match: re.Match[str]) -> str:
    sign = "负" if match.group(1) else ""
    return f"{sign}百分之{num2str(match.group(2))}"


@expander("zh.range")
def expand_range(match: re.Match[str]) -> str:
    return f"{_range_bound(match.group(1))}到{_range_bound(match.group(2))}"


def _range_bound(value: str) -> str:
    if value.startswith("-"):
        return _signed("-", value[1:])
    return num2str(value)


@expander("zh.quantifier")
def expand_quantifier(match: re.Match[str]) -> str:
    approximate = match.group(2) or ""
    if approximate == "+":
        approximate = "多"
    return f"{num2str(match.group(1))}{approximate}{match.group(3)}"


@expander("zh.number")
def expand_number(match: re.Match[str]) -> str:
    sign, integer, fraction, pure_decimal = match.groups()
    if pure_decimal is not None:
        return num2str(f".{pure_decimal}")
    return _signed(sign or "", integer + (fraction or ""), with_limit=True)


@expander("zh.symbol_names")
def expand_symbol_names(match: re.Match[str]) -> str:
    return "".join(_SYMBOL_NAMES.get(char, char) for char in match.group(0))
