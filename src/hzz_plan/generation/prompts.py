"""Prompt templates for generating the business sections of an HZZ application."""

import json
from typing import Any

from hzz_plan.generation.intake import IntakeData, empty_value
from hzz_plan.schema.registry import SchemaRegistry

SYSTEM_PROMPT = """You are an expert Croatian business consultant specializing in HZZ (Hrvatski zavod za \
zapošljavanje) self-employment applications.

Your task:
1. You will receive basic information from an intake questionnaire (business idea, experience, location)
2. You must generate ONLY THE BUSINESS PLAN SECTIONS (sections 3, 4, 5) based on this information
3. For SECTION 2: Only suggest appropriate NKD code(s) and activity names - DO NOT fill other fields \
(legal form, ownership, location, amount)
4. DO NOT generate Section 1 (personal data) - this will be filled separately by the user
5. Be creative but realistic - infer reasonable details that align with the business idea
6. Return data in the EXACT JSON structure format provided
7. Write everything in Croatian language
8. Be professional, specific, and thorough

Guidelines for Section 2:
- ONLY fill the 'nkd' field with appropriate NKD codes and activity names
- Format: Array of objects like [{"nkd_djelatnost": "73.11 - Reklamne agencije"}]
- Use official Croatian NKD 2024 classification
- Include both NKD code AND full activity name in the nkd_djelatnost field
- Leave other Section 2 fields EMPTY (vrsta_subjekta, struktura_vlasnistva_radio, sjediste, iznos_trazene_potpore)

Guidelines for Sections 3-5:
- For missing details, make reasonable assumptions based on the business type
- Use realistic Croatian market data (costs, salaries, prices)
- Follow Croatian business regulations and practices
- Create detailed financial projections (2 years)
- Generate realistic cost breakdowns and revenue projections
- Infer required permits/licenses based on the business type
- Fill ALL business fields with relevant, specific content

IMPORTANT - Radio/Select/Checkbox Values:
- For radio buttons and select fields, use the EXACT lowercase value keys (e.g., "da" not "Da")
- For checkbox arrays, use lowercase value keys (e.g., ["posjetnice", "drustvene_mreze"])
- NEVER use label text as values - always use the value keys from the options
- Free-text fields must never be answered with only "da" or "ne"

CRITICAL - Table Field Structure:
- For table fields, return arrays of objects with correct column keys:
- prihodi tables: [{"naziv": "...", "cijena": 0, "broj_prodaja": 0, "mjesecni_prihod": 0, "godisnji_prihod": 0}]
- trosak_rada tables: [{"vrsta": "...", "mjesecni_iznos": 0, "godisnji_iznos": 0}]
- ostali_troskovi tables: [{"naziv": "...", "mjesecni_iznos": 0, "godisnji_iznos": 0}]
- troskovnik tables: [{"vrsta_troska": "...", "iznos": 0}]
- postojeca_oprema tables: [{"naziv": "..."}]
- ulaganja_drugi_izvori tables: [{"vrsta_ulaganja": "...", "iznos": 0}]
- NEVER return string values for table fields - always use array of objects with these exact keys

JSON Structure:
- Each section is a key (e.g., "2", "3.1", "3.2", etc.)
- Each section contains an object with field keys and values
- Return ONLY valid JSON, no markdown, no explanations
- DO NOT include section "1" in the output"""

INTAKE_PROMPT_TEMPLATE = """
INTAKE QUESTIONNAIRE DATA:

Work Experience & Competencies:
{experience}

Business Idea:
{idea}

Type of Activity:
{activity}

Business Structure:
- Legal form: {legal_form}
- Location: {location}

Financial Support:
- Requested amount: {amount} EUR

Additional Information:
{extra}

---

Based on this intake information, generate ONLY sections 2-5 of the HZZ application (business plan sections).
DO NOT generate Section 1 (personal data) as it will be filled separately by the user.
Infer and expand on all business details that would be necessary for a comprehensive business plan. \
Be creative but realistic.
"""


def build_intake_prompt(intake: IntakeData) -> str:
    """Describe the intake for the model; personal identifiers are never included."""
    experience = intake.radno_iskustvo or intake.cv_text or "Not provided"
    return INTAKE_PROMPT_TEMPLATE.format(
        experience=experience,
        idea=intake.poslovna_ideja,
        activity=intake.vrsta_djelatnosti or "Not specified",
        legal_form=intake.vrsta_subjekta or "obrt",
        location=intake.lokacija or "Not specified",
        amount=intake.iznos_trazene_potpore,
        extra=intake.dodatne_informacije or "None provided",
    )


def build_section_template(registry: SchemaRegistry) -> dict[str, dict[str, Any]]:
    """Empty JSON skeleton of every business section, shown to the model as the answer format."""
    return {section.key: {field.key: empty_value(field.kind) for field in section.fields} for section in registry.business_sections()}


def build_user_message(intake: IntakeData, registry: SchemaRegistry) -> str:
    template = json.dumps(build_section_template(registry), ensure_ascii=False, indent=2)
    return f"{build_intake_prompt(intake)}\nExpected JSON structure template (fill ALL fields):\n{template}\n\nGenerate the complete application now."
