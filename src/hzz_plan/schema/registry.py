"""Read-only registry over the HZZ field catalog.

The catalog is loaded once per process from the packaged JSON asset (or the
path in ``HZZ_SCHEMA_PATH``) and cached.  ``SchemaRegistry`` exposes the
business sections (everything except the personal-data section) in catalog
order, plus lookups used by previews and prompts.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from hzz_plan.config import schema_path
from hzz_plan.exceptions import SchemaError
from hzz_plan.schema.models import Catalog, ChoiceField, CheckboxField, FieldDefinition, SectionDefinition

logger = logging.getLogger(__name__)

# Module-level cache for the default registry
_CACHE: dict = {"registry": None}


class SchemaRegistry:
    """Immutable view over a validated Catalog."""

    def __init__(self, catalog: Catalog):
        self._catalog = catalog
        self._by_key: dict[str, SectionDefinition] = {section.key: section for section in catalog.sections}
        self._business = tuple(section for section in catalog.sections if section.key != catalog.personal_section_key)

    @classmethod
    def from_dict(cls, data: dict) -> "SchemaRegistry":
        """Build a registry from a catalog dict (raises SchemaError on an invalid catalog)."""
        try:
            return cls(Catalog.model_validate(data))
        except ValidationError as exc:
            raise SchemaError(f"Invalid field catalog: {exc}", original_error=exc) from exc

    @property
    def version(self) -> str:
        return self._catalog.version

    @property
    def personal_section_key(self) -> str:
        return self._catalog.personal_section_key

    @property
    def sections(self) -> tuple[SectionDefinition, ...]:
        return self._catalog.sections

    def business_sections(self) -> tuple[SectionDefinition, ...]:
        """Sections the LLM generates and the pipeline validates, in catalog order."""
        return self._business

    def section(self, key: str) -> SectionDefinition | None:
        return self._by_key.get(key)

    def field(self, section_key: str, field_key: str) -> FieldDefinition | None:
        section = self._by_key.get(section_key)
        return section.field(field_key) if section else None

    def option_label(self, section_key: str, field_key: str, value: str) -> str:
        """Return the human label for an option value, or the value itself when unknown."""
        field = self.field(section_key, field_key)
        if isinstance(field, (ChoiceField, CheckboxField)):
            for option in field.options:
                if option.value == value:
                    return option.label
        return value


def load_registry_file(path: Path) -> SchemaRegistry:
    """Read and validate a catalog file (uncached)."""
    try:
        with open(path, "r", encoding="utf-8") as fopen:
            data = json.load(fopen)
    except (OSError, json.JSONDecodeError) as exc:
        raise SchemaError(f"Cannot read field catalog {path}: {exc}", original_error=exc) from exc
    registry = SchemaRegistry.from_dict(data)
    logger.info("Loaded field catalog v%s from %s: %d sections", registry.version, path, len(registry.sections))
    return registry


def load_registry() -> SchemaRegistry:
    """Load and cache the configured field catalog.

    Subsequent calls return the cached registry.
    """
    if _CACHE["registry"] is not None:
        return _CACHE["registry"]
    _CACHE["registry"] = load_registry_file(schema_path())
    return _CACHE["registry"]
