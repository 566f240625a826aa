"""Unit tests for the field catalog models and SchemaRegistry."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from hzz_plan.exceptions import SchemaError
from hzz_plan.schema import registry as registry_module
from hzz_plan.schema.models import CheckboxField, ChoiceField, FieldKind, TableField, TextField
from hzz_plan.schema.registry import SchemaRegistry, load_registry, load_registry_file
from hzz_plan.schema.tables import ROW_SHAPES


def _catalog(*fields: dict) -> dict:
    return {"sections": [{"key": "2", "id": "2", "fields": list(fields)}]}


# ===========================================================================
# Packaged catalog
# ===========================================================================


class TestPackagedCatalog:

    def test_business_sections_exclude_personal_data(self, registry):
        keys = [section.key for section in registry.business_sections()]
        assert keys == ["2", "3.1", "3.2", "3.3", "3.4", "3.5", "3.6", "4", "5"]
        assert registry.personal_section_key == "1"

    def test_all_sections_in_catalog_order(self, registry):
        assert [section.key for section in registry.sections][0] == "1"

    def test_every_table_names_a_known_row_kind(self, registry):
        tables = [field for section in registry.sections for field in section.fields if isinstance(field, TableField)]
        assert tables
        assert all(field.table_type in ROW_SHAPES for field in tables)

    def test_field_kinds(self, registry):
        assert registry.field("3.1", "motivacija").kind is FieldKind.PLAIN_TEXT
        assert registry.field("3.2", "potraznja").kind is FieldKind.SINGLE_CHOICE
        assert registry.field("3.3", "promocija").kind is FieldKind.MULTI_CHOICE
        assert registry.field("3.5", "tablica_prihodi_god1_T2_1").kind is FieldKind.TABLE
        assert registry.field("3.6", "izracun_dobiti").kind is FieldKind.COMPUTED_SUMMARY
        assert registry.field("3.5", "prihodi_napomena").kind is FieldKind.DECORATIVE

    def test_option_label(self, registry):
        assert registry.option_label("3.3", "promocija", "drustvene_mreze") == "Društvene mreže"

    def test_option_label_unknown_value_is_returned_as_is(self, registry):
        assert registry.option_label("3.3", "promocija", "radio") == "radio"

    def test_unknown_lookups_return_none(self, registry):
        assert registry.section("9") is None
        assert registry.field("3.1", "nope") is None
        assert registry.field("9", "motivacija") is None


# ===========================================================================
# Catalog validation
# ===========================================================================


class TestCatalogValidation:

    def test_discriminates_on_type(self):
        reg = SchemaRegistry.from_dict(
            _catalog(
                {"key": "a", "type": "textarea"},
                {"key": "b", "type": "radio", "options": [{"value": "da", "label": "Da"}]},
                {"key": "c", "type": "checkbox", "options": [{"value": "x", "label": "X"}]},
                {"key": "d", "type": "table", "tableType": "troskovnik"},
            )
        )
        fields = reg.section("2").fields
        assert [type(field) for field in fields] == [TextField, ChoiceField, CheckboxField, TableField]

    def test_unknown_widget_type_rejected(self):
        with pytest.raises(SchemaError):
            SchemaRegistry.from_dict(_catalog({"key": "a", "type": "slider"}))

    def test_unknown_row_kind_rejected(self):
        with pytest.raises(SchemaError, match="unknown table row kind"):
            SchemaRegistry.from_dict(_catalog({"key": "a", "type": "table", "tableType": "nonsense"}))

    def test_choice_without_options_rejected(self):
        with pytest.raises(SchemaError):
            SchemaRegistry.from_dict(_catalog({"key": "a", "type": "select", "options": []}))

    def test_duplicate_option_values_rejected(self):
        options = [{"value": "da", "label": "Da"}, {"value": "da", "label": "Yes"}]
        with pytest.raises(SchemaError, match="duplicate option values"):
            SchemaRegistry.from_dict(_catalog({"key": "a", "type": "radio", "options": options}))

    def test_duplicate_field_keys_rejected(self):
        with pytest.raises(SchemaError, match="more than once"):
            SchemaRegistry.from_dict(_catalog({"key": "a", "type": "text"}, {"key": "a", "type": "textarea"}))

    def test_duplicate_section_keys_rejected(self):
        section = {"key": "2", "id": "2", "fields": []}
        with pytest.raises(SchemaError, match="duplicate section keys"):
            SchemaRegistry.from_dict({"sections": [section, section]})

    def test_schema_error_keeps_original_error(self):
        with pytest.raises(SchemaError) as exc_info:
            SchemaRegistry.from_dict({"sections": "nope"})
        assert exc_info.value.original_error is not None

    def test_models_are_frozen(self, registry):
        field = registry.field("3.1", "motivacija")
        with pytest.raises(Exception):
            field.key = "changed"


# ===========================================================================
# Loading
# ===========================================================================


class TestLoadRegistry:

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(_catalog({"key": "a", "type": "text"})), encoding="utf-8")
        reg = load_registry_file(path)
        assert reg.field("2", "a") is not None

    def test_missing_file_raises_schema_error(self, tmp_path):
        with pytest.raises(SchemaError, match="Cannot read field catalog"):
            load_registry_file(tmp_path / "missing.json")

    def test_invalid_json_raises_schema_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaError):
            load_registry_file(path)

    def test_env_override_and_cache(self, tmp_path, monkeypatch):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(_catalog({"key": "only", "type": "text"})), encoding="utf-8")
        monkeypatch.setenv("HZZ_SCHEMA_PATH", str(path))
        monkeypatch.setitem(registry_module._CACHE, "registry", None)  # pylint: disable=protected-access

        first = load_registry()
        assert first.field("2", "only") is not None
        assert load_registry() is first
