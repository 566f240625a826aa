"""Unit tests for row kind definitions and table column helpers."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from hzz_plan.schema.columns import column_label, resolve_table_columns
from hzz_plan.schema.tables import ROW_SHAPES, Column, SegmentLayout, WHOLE_LINE, get_row_shape, round_half_up

# ===========================================================================
# Row kinds
# ===========================================================================


class TestRowShapes:

    def test_empty_row_uses_column_defaults(self):
        assert get_row_shape("prihodi").empty_row() == {"naziv": "", "cijena": 0, "broj_prodaja": 0, "mjesecni_prihod": 0, "godisnji_prihod": 0}

    def test_unknown_row_kind_raises_key_error(self):
        with pytest.raises(KeyError):
            get_row_shape("nonsense")

    def test_aliases_point_at_declared_columns(self):
        for shape in ROW_SHAPES.values():
            assert set(shape.aliases.values()) <= set(shape.column_keys), shape.name

    def test_column_default(self):
        assert Column("iznos", numeric=True).default == 0
        assert Column("naziv").default == ""

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.4) == 2


class TestSegmentLayout:

    def test_arity_too_small(self):
        layout = SegmentLayout(arity=2, segments=(("a", 0), ("b", 1)))
        assert layout.extract("x", ["x"]) is None

    def test_exact_arity(self):
        layout = SegmentLayout(arity=2, exact=True, segments=(("a", 0),))
        assert layout.extract("x - y - z", ["x", "y", "z"]) is None
        assert layout.extract("x - y", ["x", "y"]) == {"a": "x"}

    def test_whole_line_and_slice(self):
        layout = SegmentLayout(arity=1, segments=(("line", WHOLE_LINE), ("rest", slice(1, None))))
        assert layout.extract("a - b - c", ["a", "b", "c"]) == {"line": "a - b - c", "rest": "b - c"}


# ===========================================================================
# Column helpers
# ===========================================================================


class TestResolveTableColumns:

    def test_orders_by_declared_columns_and_drops_empty(self):
        rows = [
            {"godisnji_prihod": 24000, "naziv": "Usluge", "cijena": "", "broj_prodaja": None, "mjesecni_prihod": 2000},
            {"godisnji_prihod": 12000, "naziv": "Tečajevi", "cijena": "", "broj_prodaja": None, "mjesecni_prihod": 1000},
        ]
        assert resolve_table_columns("prihodi", rows) == ["naziv", "mjesecni_prihod", "godisnji_prihod"]

    def test_zero_counts_as_data(self):
        assert resolve_table_columns("troskovnik", [{"vrsta_troska": "Laptop", "iznos": 0}]) == ["vrsta_troska", "iznos"]

    def test_unknown_columns_are_appended(self):
        rows = [{"extra": "x", "naziv": "Lopte"}]
        assert resolve_table_columns("postojeca_oprema", rows) == ["naziv", "extra"]

    def test_unknown_row_kind_keeps_first_row_order(self):
        assert resolve_table_columns("custom", [{"b": 1, "a": 2}]) == ["b", "a"]

    def test_no_rows(self):
        assert resolve_table_columns("prihodi", []) == []
        assert resolve_table_columns("prihodi", "not rows") == []


class TestColumnLabel:

    def test_known_and_unknown(self):
        assert column_label("nkd_djelatnost") == "NKD kod i naziv djelatnosti"
        assert column_label("whatever") == "whatever"
