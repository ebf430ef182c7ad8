"""
Number text codec.
Parses free-form user text into numbers and renders numbers with
thousands separators. Malformed input never raises: it reads as zero.
"""

import math
import re

from num2words import num2words

GROUP_SEPARATOR = ","

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_GROUP_POSITIONS = re.compile(r"\B(?=(\d{3})+(?!\d))", re.ASCII)
_DIGITS_ONLY = re.compile(r"\d*", re.ASCII)


def parse_number(text) -> float:
    """
    Parse user text into a float.

    Grouping separators are removed first, then the leading base-10 number
    is read. Anything that does not start with a number gives 0.0.

    Example:
        >>> parse_number("1,500,000")
        1500000.0
        >>> parse_number("abc")
        0.0
    """
    if text is None:
        return 0.0

    match = _LEADING_NUMBER.match(str(text).replace(GROUP_SEPARATOR, ""))
    if match is None:
        return 0.0

    value = float(match.group(1))
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def plain_text(value) -> str:
    """Number as text, without the trailing '.0' of whole floats."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def format_number(value) -> str:
    """
    Render a number (or numeric text) with a comma every three digits.

    Only the integer part is grouped; a fractional part is kept as is.
    Empty values (None, "", 0) render as "".

    Example:
        >>> format_number(1500000)
        '1,500,000'
        >>> format_number("12328.77")
        '12,328.77'
    """
    if not value:
        return ""

    text = plain_text(value).replace(GROUP_SEPARATOR, "")
    integer_part, dot, fraction = text.partition(".")
    return _GROUP_POSITIONS.sub(GROUP_SEPARATOR, integer_part) + dot + fraction


def format_fixed(value: float, places: int = 2) -> str:
    """Round for display only and group the integer part ("0.00" for zero)."""
    return format_number(f"{value:.{places}f}")


def is_digit_edit(text: str) -> bool:
    """True if the edited amount text holds nothing but digits (commas ignored)."""
    return _DIGITS_ONLY.fullmatch(text.replace(GROUP_SEPARATOR, "")) is not None


def spell_amount(value: float, lang: str = "en_GB") -> str:
    """
    Spell a whole amount in words.

    Example:
        >>> spell_amount(1000000)
        'one million'
    """
    return num2words(int(value), lang=lang)
