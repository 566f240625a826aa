"""Unit tests for scalar coercion helpers."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from hzz_plan.validation.coercion import (
    CANNOT_CONVERT_TO_TEXT,
    EXPECTED_OPTION_LIST,
    INVALID_LIST_VALUES,
    coerce_options,
    coerce_text,
    is_scalar,
    parse_number,
    to_text,
)

# ===========================================================================
# Text
# ===========================================================================


class TestCoerceText:

    def test_string_unchanged(self):
        assert coerce_text("  Tekst  ") == ("  Tekst  ", ())

    @pytest.mark.parametrize(
        "raw, expected",
        [(42, "42"), (3.0, "3"), (2.5, "2.5"), (True, "true"), (False, "false"), (None, "")],
    )
    def test_scalars_become_canonical_strings(self, raw, expected):
        result = coerce_text(raw)
        assert result.value == expected
        assert result.issue is None

    @pytest.mark.parametrize("raw", [{"a": 1}, ["a", "b"], []])
    def test_containers_cannot_be_text(self, raw):
        result = coerce_text(raw)
        assert result.value == ""
        assert result.issues == (CANNOT_CONVERT_TO_TEXT,)

    def test_to_text_returns_none_for_containers(self):
        assert to_text({"a": 1}) is None

    def test_is_scalar(self):
        assert is_scalar("x") and is_scalar(1) and is_scalar(None) and is_scalar(False)
        assert not is_scalar([]) and not is_scalar({})


# ===========================================================================
# Option lists
# ===========================================================================


class TestCoerceOptions:

    def test_list_is_trimmed_and_blank_elements_dropped(self):
        assert coerce_options([" posjetnice ", "", "  ", "letci"]) == (["posjetnice", "letci"], ())

    def test_bare_string_is_promoted(self):
        assert coerce_options("posjetnice").value == ["posjetnice"]

    def test_string_is_split_on_separators(self):
        assert coerce_options("posjetnice, letci;web_stranica\noglasi").value == ["posjetnice", "letci", "web_stranica", "oglasi"]

    def test_number_is_wrapped(self):
        assert coerce_options(1).value == ["1"]

    def test_none_is_empty_without_issue(self):
        assert coerce_options(None) == ([], ())

    def test_object_is_not_a_list(self):
        assert coerce_options({"posjetnice": True}) == ([], (EXPECTED_OPTION_LIST,))

    def test_container_elements_dropped_and_flagged(self):
        result = coerce_options(["letci", {"x": 1}, ["y"]])
        assert result.value == ["letci"]
        assert result.issues == (INVALID_LIST_VALUES,)


# ===========================================================================
# Numbers
# ===========================================================================


class TestParseNumber:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("24000", 24000),
            ("24.000", 24000),
            ("1.250.000", 1250000),
            ("24,000", 24000),
            ("24.000,50", 24000.5),
            ("24,000.50", 24000.5),
            ("12,5", 12.5),
            ("1200 EUR", 1200),
            ("oko 300 €", 300),
            ("15%", 15),
            ("24 000", 24000),
            ("-150", -150),
            ("3.5", 3.5),
        ],
    )
    def test_strings(self, raw, expected):
        assert parse_number(raw) == expected

    def test_integral_results_are_ints(self):
        assert isinstance(parse_number("24000"), int)
        assert isinstance(parse_number(2000.0), int)

    def test_numbers_pass_through(self):
        assert parse_number(12.75) == 12.75
        assert parse_number(7) == 7

    def test_integer_too_large_for_a_float_is_zero(self):
        assert parse_number(10**400) == 0

    @pytest.mark.parametrize("raw", ["", "n/a", None, [], {}, float("nan"), float("inf")])
    def test_unparseable_is_zero(self, raw):
        assert parse_number(raw) == 0

    def test_bool(self):
        assert parse_number(True) == 1
