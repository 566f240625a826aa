"""Validate a raw LLM document section by section against the field catalog.

Every business section and every declared field is always written to the
output, whatever the input looked like.  Each field is handled by the
validator registered for its kind; a problem in one field never affects its
siblings.  Keys the catalog does not declare are never copied.
"""

from typing import Any, Callable

from hzz_plan.schema.models import CheckboxField, ChoiceField, FieldDefinition, FieldKind, SectionDefinition, TableField, TextField
from hzz_plan.schema.registry import SchemaRegistry
from hzz_plan.validation.coercion import coerce_options, coerce_text
from hzz_plan.validation.enums import check_free_text, resolve_choice, resolve_choices
from hzz_plan.validation.issues import Coerced, Issue, ValidationResult
from hzz_plan.validation.rows import normalize_table

NOT_AN_OBJECT = "generated data is not a JSON object"
SECTION_MISSING = "section is missing or is not an object"


# ─── Field Validators ────────────────────────────────────────────────────────


def _validate_text(field: TextField, raw: Any) -> Coerced:
    text = coerce_text(raw)
    if text.issues:
        return text
    return check_free_text(field.type, text.value)


def _validate_choice(field: ChoiceField, raw: Any) -> Coerced:
    text = coerce_text(raw)
    if text.issues:
        return text
    return resolve_choice(field, text.value)


def _validate_checkbox(field: CheckboxField, raw: Any) -> Coerced:
    options = coerce_options(raw)
    resolved = resolve_choices(field, options.value)
    return Coerced(resolved.value, options.issues + resolved.issues)


def _validate_table(field: TableField, raw: Any) -> Coerced:
    return normalize_table(field.table_type, raw)


def _validate_placeholder(field: FieldDefinition, raw: Any) -> Coerced:  # pylint: disable=unused-argument
    """Decorative and computed fields carry no data of their own."""
    return Coerced("")


_VALIDATORS: dict[FieldKind, Callable[[Any, Any], Coerced]] = {
    FieldKind.PLAIN_TEXT: _validate_text,
    FieldKind.SINGLE_CHOICE: _validate_choice,
    FieldKind.MULTI_CHOICE: _validate_checkbox,
    FieldKind.TABLE: _validate_table,
    FieldKind.COMPUTED_SUMMARY: _validate_placeholder,
    FieldKind.DECORATIVE: _validate_placeholder,
}


# ─── Sections ────────────────────────────────────────────────────────────────


def validate_section(section: SectionDefinition, raw: Any) -> tuple[dict[str, Any], list[Issue]]:
    """Validate one section; returns the sanitized content and its issues."""
    issues: list[Issue] = []
    if not isinstance(raw, dict):
        issues.append(Issue(section_key=section.key, section_id=section.id, message=SECTION_MISSING))
        raw = {}

    content: dict[str, Any] = {}
    for field in section.fields:
        result = _VALIDATORS[field.kind](field, raw.get(field.key))
        content[field.key] = result.value
        for message in result.issues:
            issues.append(
                Issue(
                    section_key=section.key,
                    field_key=field.key,
                    message=message,
                    section_id=section.id,
                    field_label=field.label or None,
                )
            )
    return content, issues


def validate_sections(raw: Any, registry: SchemaRegistry) -> ValidationResult:
    """Coerce *raw* into a fully populated document for every business section.

    Never raises on bad input: every divergence becomes an ``Issue`` and a
    default value.  ``success`` is True iff no issue was found.
    """
    issues: list[Issue] = []
    document_ok = isinstance(raw, dict)
    if not document_ok:
        issues.append(Issue(section_key=None, message=NOT_AN_OBJECT))
        raw = {}

    data: dict[str, dict[str, Any]] = {}
    for section in registry.business_sections():
        # A non-object document is reported once, not once per section
        section_raw = raw.get(section.key, None if document_ok else {})
        data[section.key], section_issues = validate_section(section, section_raw)
        issues.extend(section_issues)

    return ValidationResult(success=not issues, data=data, issues=issues)
