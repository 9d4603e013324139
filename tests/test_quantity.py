import pytest

from app.services.report.quantity import (
    format_quantity,
    normalize_unit,
    parse_quantity,
    parse_quantity_with_unit,
)


@pytest.mark.parametrize("raw,expected", [
    ("12.5 sq ft", 12.5),
    ("  40 lf", 40.0),
    ("-3 sf", -3.0),
    ("+7", 7.0),
    ("100", 100.0),
])
def test_parse_quantity_leading_number(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", None, "   ", "approx 10 sf", ".5 sf"])
def test_parse_quantity_without_leading_number(raw):
    assert parse_quantity(raw) is None


def test_normalize_unit():
    assert normalize_unit("sq ft") == "SqFt"
    assert normalize_unit("SF") == "SqFt"
    assert normalize_unit("linear feet") == "LF"
    assert normalize_unit("each") == "each"
    assert normalize_unit(None) == ""


def test_format_quantity_uses_unit_field_when_text_has_none():
    assert format_quantity("40", "lf") == "40 LF"
    assert format_quantity("850 sf") == "850 SqFt"
    assert format_quantity("several", "sf") == "several"
    assert format_quantity(None) == ""


def test_parse_quantity_with_unit_normalizes_trailing_text():
    assert parse_quantity_with_unit("40 linear feet") == (40.0, "LF")
    assert parse_quantity_with_unit(" 850 sf ") == (850.0, "SqFt")
    assert parse_quantity_with_unit("12") == (12.0, "")
    assert parse_quantity_with_unit("about 12 sf") is None
