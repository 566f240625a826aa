"""Scalar coercion: turn one raw JSON value into text, a list of strings, or a number.

LLM output routinely uses the wrong JSON type for a field (a number where
text was asked for, a comma-separated string where a list was expected).
These helpers accept the common variants and fall back to an empty value
plus an issue message for everything else.  None of them raise.
"""

import math

from hzz_plan.validation.issues import Coerced
from hzz_plan.validation.patterns import COMMA_THOUSANDS_RE, DOT_THOUSANDS_RE, LIST_SEPARATOR_RE, NUMBER_TOKEN_RE

CANNOT_CONVERT_TO_TEXT = "cannot convert to text"
EXPECTED_OPTION_LIST = "expected a list of options"
INVALID_LIST_VALUES = "some list values are not valid"


def is_scalar(value) -> bool:
    """True for JSON scalars: string, number, boolean, null."""
    return value is None or isinstance(value, (str, int, float, bool))


def to_text(value) -> str | None:
    """Canonical string form of a JSON scalar, or None for objects and arrays.

    Booleans become ``"true"``/``"false"`` and integral floats lose their
    trailing ``.0`` so ``3.0`` and ``3`` read the same.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return None


def coerce_text(raw) -> Coerced:
    """Coerce a raw value for a plain-text or single-choice field."""
    text = to_text(raw)
    if text is None:
        return Coerced("", (CANNOT_CONVERT_TO_TEXT,))
    return Coerced(text)


def _collect(items: list) -> Coerced:
    values: list[str] = []
    had_invalid = False
    for item in items:
        text = to_text(item)
        if text is None:
            had_invalid = True
            continue
        text = text.strip()
        if text:
            values.append(text)
    return Coerced(values, (INVALID_LIST_VALUES,) if had_invalid else ())


def coerce_options(raw) -> Coerced:
    """Coerce a raw value for a multi-choice field into a list of trimmed strings."""
    if raw is None:
        return Coerced([])
    if isinstance(raw, (list, tuple)):
        return _collect(list(raw))
    if isinstance(raw, str):
        return _collect(LIST_SEPARATOR_RE.split(raw))
    if isinstance(raw, (int, float, bool)):
        return _collect([raw])
    return Coerced([], (EXPECTED_OPTION_LIST,))


def _normalize_number_token(token: str) -> str:
    """Rewrite thousands/decimal separators so ``float()`` can read the token."""
    if "," in token and "." in token:
        # Whichever separator comes last is the decimal point
        if token.rfind(",") > token.rfind("."):
            return token.replace(".", "").replace(",", ".")
        return token.replace(",", "")
    if "," in token:
        return token.replace(",", "") if COMMA_THOUSANDS_RE.match(token) else token.replace(",", ".")
    if DOT_THOUSANDS_RE.match(token):
        return token.replace(".", "")
    return token


def parse_number(raw) -> int | float:
    """Parse a numeric cell leniently, defaulting to 0.

    Accepts numbers as-is and strings such as ``"24000"``, ``"24.000,00"``,
    ``"24,000.50"``, ``"1200 EUR"`` or ``"15%"``.  Integral results are
    returned as ``int``.
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return 0
    elif isinstance(raw, str):
        match = NUMBER_TOKEN_RE.search(raw.replace("\u00a0", "").replace(" ", ""))
        if not match:
            return 0
        try:
            number = float(_normalize_number_token(match.group(0).rstrip(".,")))
        except ValueError:
            return 0
    else:
        return 0

    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number
