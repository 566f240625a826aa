"""Intake questionnaire data and the user-owned parts of the final document.

The LLM only writes the business sections.  The personal-data section is
prefilled from the intake, and the section-2 fields only the applicant can
know (legal form, seat, requested amount) come from the intake as well;
from the generated section 2 only the NKD activity list is kept.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from hzz_plan.schema.models import FieldKind, SectionDefinition
from hzz_plan.schema.registry import SchemaRegistry

BUSINESS_INFO_SECTION = "2"
NKD_FIELD = "nkd"


class IntakeData(BaseModel):
    """Answers from the intake questionnaire."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    # Personal info
    ime: str = ""
    prezime: str = ""
    oib: str = ""
    kontakt_email: str = ""
    kontakt_tel: str = ""

    # CV / experience
    cv_text: str | None = None
    radno_iskustvo: str | None = None

    # Business idea
    poslovna_ideja: str
    vrsta_djelatnosti: str = ""

    # Business structure
    vrsta_subjekta: str = ""
    lokacija: str = ""

    iznos_trazene_potpore: str = ""
    dodatne_informacije: str | None = None


def empty_value(kind: FieldKind) -> Any:
    """Default value of a field kind: ``[]`` for lists and tables, ``""`` otherwise."""
    return [] if kind in (FieldKind.TABLE, FieldKind.MULTI_CHOICE) else ""


def empty_section(section: SectionDefinition) -> dict[str, Any]:
    return {field.key: empty_value(field.kind) for field in section.fields}


def personal_section(intake: IntakeData, registry: SchemaRegistry) -> dict[str, Any]:
    """Personal-data section prefilled with what the intake collected; everything else empty."""
    section = registry.section(registry.personal_section_key)
    content = empty_section(section) if section else {}
    prefilled = {
        "ime": intake.ime,
        "prezime": intake.prezime,
        "oib": intake.oib,
        "kontakt_tel": intake.kontakt_tel,
        "kontakt_email": intake.kontakt_email,
    }
    for key, value in prefilled.items():
        if section is None or section.field(key) is not None:
            content[key] = value
    return content


def merge_intake(intake: IntakeData, sanitized: dict[str, dict[str, Any]], registry: SchemaRegistry) -> dict[str, dict[str, Any]]:
    """Assemble the final document from the intake and the sanitized business sections."""
    document: dict[str, dict[str, Any]] = {registry.personal_section_key: personal_section(intake, registry)}

    for key, content in sanitized.items():
        if key != BUSINESS_INFO_SECTION:
            document[key] = content
            continue

        section = registry.section(key)
        merged = empty_section(section) if section else {}
        user_owned = {
            "vrsta_subjekta": intake.vrsta_subjekta,
            "sjediste": intake.lokacija,
            "iznos_trazene_potpore": intake.iznos_trazene_potpore,
        }
        for field_key, value in user_owned.items():
            if field_key in merged:
                merged[field_key] = value
        if NKD_FIELD in content:
            merged[NKD_FIELD] = content[NKD_FIELD]
        document[key] = merged

    return document
