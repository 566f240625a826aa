"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from hzz_plan.config import DEFAULT_SCHEMA_PATH
from hzz_plan.schema.registry import SchemaRegistry, load_registry_file

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")

YES_NO_OPTIONS = [{"value": "da", "label": "Da"}, {"value": "ne", "label": "Ne"}]


@pytest.fixture(scope="session")
def registry() -> SchemaRegistry:
    """The packaged HZZ field catalog."""
    return load_registry_file(DEFAULT_SCHEMA_PATH)


@pytest.fixture
def small_registry() -> SchemaRegistry:
    """A two-section catalog: an NKD table in section 2 and one text field in 3.1."""
    return SchemaRegistry.from_dict(
        {
            "version": "test",
            "sections": [
                {"key": "1", "id": "1", "fields": [{"key": "ime", "label": "Ime", "type": "text"}]},
                {"key": "2", "id": "2", "fields": [{"key": "nkd", "label": "NKD", "type": "table", "tableType": "nkd_lista_simple"}]},
                {"key": "3.1", "id": "3.1", "fields": [{"key": "motivacija", "label": "Motivacija", "type": "textarea"}]},
            ],
        }
    )
