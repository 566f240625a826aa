"""Pydantic models for the HZZ field catalog.

The catalog (``data/hzz_structure.json``) is an ordered list of sections, each
an ordered list of field definitions.  A field's ``type`` names the form
widget; widgets group into six kinds (``FieldKind``), and the union below is
discriminated on ``type`` so every field carries exactly the attributes its
kind needs (options for choices, a row kind for tables).

All models are frozen: the catalog is loaded once and never mutated.
"""

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hzz_plan.config import PERSONAL_SECTION_KEY
from hzz_plan.schema.tables import ROW_SHAPES


class FieldKind(str, Enum):
    """Value shape a field holds in a sanitized document."""

    PLAIN_TEXT = "plain-text"
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    TABLE = "table"
    COMPUTED_SUMMARY = "computed-summary"
    DECORATIVE = "decorative"


class Option(BaseModel):
    """One value/label pair of an enumerated field."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class _FieldBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    label: str = ""
    help_text: str | None = Field(default=None, alias="helpText")


class TextField(_FieldBase):
    """Free text or a typed input (number, date, ...) stored as a string."""

    kind: ClassVar[FieldKind] = FieldKind.PLAIN_TEXT
    type: Literal["text", "textarea", "number", "date", "email", "tel"]


class _ChoiceBase(_FieldBase):
    options: tuple[Option, ...]

    @field_validator("options")
    @classmethod
    def validate_options(cls, options: tuple[Option, ...]) -> tuple[Option, ...]:
        """Require at least one option and unique option values."""
        if not options:
            raise ValueError("choice fields must declare at least one option")
        values = [option.value for option in options]
        if len(set(values)) != len(values):
            raise ValueError(f"duplicate option values: {values}")
        return options

    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)


class ChoiceField(_ChoiceBase):
    """Radio group or select: one option value."""

    kind: ClassVar[FieldKind] = FieldKind.SINGLE_CHOICE
    type: Literal["radio", "select"]


class CheckboxField(_ChoiceBase):
    """Checkbox group: a list of option values."""

    kind: ClassVar[FieldKind] = FieldKind.MULTI_CHOICE
    type: Literal["checkbox"]


class TableField(_FieldBase):
    """Dynamic table whose rows follow a row kind from ``hzz_plan.schema.tables``."""

    kind: ClassVar[FieldKind] = FieldKind.TABLE
    type: Literal["table"]
    table_type: str = Field(alias="tableType")

    @field_validator("table_type")
    @classmethod
    def validate_table_type(cls, table_type: str) -> str:
        if table_type not in ROW_SHAPES:
            raise ValueError(f"unknown table row kind {table_type!r}; known: {sorted(ROW_SHAPES)}")
        return table_type


class SummaryField(_FieldBase):
    """Computed profit summary; rendered from other tables, carries no data of its own."""

    kind: ClassVar[FieldKind] = FieldKind.COMPUTED_SUMMARY
    type: Literal["profit_summary"]


class DecorativeField(_FieldBase):
    """Helper text or sub-heading shown in the form."""

    kind: ClassVar[FieldKind] = FieldKind.DECORATIVE
    type: Literal["helper_text", "section_label"]


FieldDefinition = Annotated[
    Union[TextField, ChoiceField, CheckboxField, TableField, SummaryField, DecorativeField],
    Field(discriminator="type"),
]


class SectionDefinition(BaseModel):
    """A named, ordered group of fields."""

    model_config = ConfigDict(frozen=True)

    key: str
    id: str
    title: str = ""
    fields: tuple[FieldDefinition, ...]

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "SectionDefinition":
        """Field keys must be unique within a section."""
        seen: set[str] = set()
        for field in self.fields:
            if field.key in seen:
                raise ValueError(f"Section {self.key} declares field {field.key!r} more than once")
            seen.add(field.key)
        return self

    def field(self, key: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.key == key:
                return field
        return None


class Catalog(BaseModel):
    """The whole field catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str = "1"
    personal_section_key: str = Field(default=PERSONAL_SECTION_KEY, alias="personalSectionKey")
    sections: tuple[SectionDefinition, ...]

    @model_validator(mode="after")
    def validate_unique_sections(self) -> "Catalog":
        keys = [section.key for section in self.sections]
        if len(set(keys)) != len(keys):
            raise ValueError(f"duplicate section keys: {keys}")
        return self
