"""Resolve raw answers for choice fields to the field's declared option values.

Resolution order for one value (first match wins):

  1. the exact option value
  2. an option label, compared case-insensitively
  3. a yes/no synonym, when the field declares both ``da`` and ``ne``
  4. a "cannot estimate" hint, for single-choice fields that also declare
     ``ne_mogu_procijeniti``

Anything else is unresolved: the value is cleared and reported.
"""

from hzz_plan.schema.models import ChoiceField, CheckboxField
from hzz_plan.validation.issues import Coerced
from hzz_plan.validation.patterns import (
    BARE_ANSWER_TOKENS,
    CANNOT_ESTIMATE_TOKENS,
    CANNOT_ESTIMATE_VALUE,
    FREE_TEXT_WIDGETS,
    NO_TOKENS,
    NO_VALUE,
    YES_TOKENS,
    YES_VALUE,
)


def _unresolved(original: str) -> str:
    return f"unresolved enumerated value: {original}"


def _match(field: ChoiceField | CheckboxField, text: str) -> str | None:
    """Return the option value *text* stands for, or None."""
    clean = text.strip()
    values = field.option_values()
    if clean in values:
        return clean

    folded = clean.casefold()
    for option in field.options:
        if option.label.strip().casefold() == folded:
            return option.value

    if YES_VALUE in values and NO_VALUE in values:
        if folded in YES_TOKENS:
            return YES_VALUE
        if folded in NO_TOKENS:
            return NO_VALUE
        if isinstance(field, ChoiceField) and CANNOT_ESTIMATE_VALUE in values and folded in CANNOT_ESTIMATE_TOKENS:
            return CANNOT_ESTIMATE_VALUE
    return None


def resolve_choice(field: ChoiceField, text: str) -> Coerced:
    """Resolve one single-choice answer; blank stays blank without an issue."""
    if not text.strip():
        return Coerced("")
    value = _match(field, text)
    if value is None:
        return Coerced("", (_unresolved(text),))
    return Coerced(value)


def resolve_choices(field: CheckboxField, values: list[str]) -> Coerced:
    """Resolve each multi-choice element, dropping unresolved ones and duplicates."""
    resolved: list[str] = []
    issues: list[str] = []
    for text in values:
        value = _match(field, text)
        if value is None:
            issues.append(_unresolved(text))
        elif value not in resolved:
            resolved.append(value)
    return Coerced(resolved, tuple(issues))


def check_free_text(widget: str, text: str) -> Coerced:
    """Clear a prose answer that is nothing but a yes/no token."""
    if widget in FREE_TEXT_WIDGETS and text.strip().casefold() in BARE_ANSWER_TOKENS:
        return Coerced("", (f"free-text answer is only a yes/no token: {text}",))
    return Coerced(text)
