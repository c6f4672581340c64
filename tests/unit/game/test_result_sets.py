"""Tests for result-set completeness."""

from types import SimpleNamespace

import pytest

from mtb_fantasy.game.result_sets import (
    ResultSetDefinition,
    missing_final_result_sets,
    normalize_discipline,
    parse_result_sets,
)

REQUIRED = parse_result_sets(["male:elite", "female:elite"])


def import_row(gender, category="elite", is_final=True, discipline="DHI"):
    return SimpleNamespace(gender=gender, category=category, is_final=is_final, discipline=discipline)


class TestParseResultSets:
    def test_parse(self):
        assert REQUIRED == [
            ResultSetDefinition(gender="male", category="elite"),
            ResultSetDefinition(gender="female", category="elite"),
        ]

    def test_labels(self):
        assert [definition.label for definition in REQUIRED] == ["Men Elite", "Women Elite"]

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_result_sets(["elite"])


class TestNormalizeDiscipline:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("downhill", "DHI"),
            ("DH", "DHI"),
            ("dhi", "DHI"),
            ("cross country", "XCO"),
            ("XC", "XCO"),
            ("xco", "XCO"),
        ],
    )
    def test_aliases(self, value, expected):
        assert normalize_discipline(value) == expected

    def test_fallback(self):
        assert normalize_discipline(None, fallback="XCO") == "XCO"
        assert normalize_discipline("  ") == "DHI"


class TestMissingFinalResultSets:
    def test_nothing_imported(self):
        assert missing_final_result_sets([], REQUIRED) == REQUIRED

    def test_provisional_import_does_not_count(self):
        imports = [import_row("male"), import_row("female", is_final=False)]

        missing = missing_final_result_sets(imports, REQUIRED)

        assert [definition.key for definition in missing] == ["female:elite"]

    def test_complete(self):
        imports = [import_row("male"), import_row("female")]

        assert missing_final_result_sets(imports, REQUIRED) == []

    def test_junior_sets_do_not_gate(self):
        imports = [import_row("male"), import_row("female"), import_row("male", "junior", False)]

        assert missing_final_result_sets(imports, REQUIRED) == []

    def test_other_discipline_does_not_count(self):
        imports = [import_row("male"), import_row("female", discipline="XCO")]

        missing = missing_final_result_sets(imports, REQUIRED, discipline="downhill")

        assert [definition.key for definition in missing] == ["female:elite"]
