# tests/test_calculator.py
import math

import pytest

from steamcalc.calculator import (
    CONDITION_SATURATED,
    CONDITION_SUPERHEATED,
    CalculationOrchestrator,
    calculate,
    parse_number,
)
from steamcalc.errors import ValidationError


@pytest.fixture
def orchestrator(table):
    return CalculationOrchestrator(table)


@pytest.mark.parametrize("temperature, pressure", [("abc", "50"), ("300", "xyz"), ("", "50"), ("300", "  ")])
def test_non_numeric_input_raises_validation_error(orchestrator, temperature, pressure):
    with pytest.raises(ValidationError):
        orchestrator.calculate(temperature, pressure)


def test_validation_error_names_the_field(orchestrator):
    with pytest.raises(ValidationError) as excinfo:
        orchestrator.calculate("abc", "50")
    assert excinfo.value.field == "temperature"
    assert "valid numbers" in str(excinfo.value)


def test_nan_is_rejected():
    with pytest.raises(ValidationError):
        parse_number("nan", "temperature")
    with pytest.raises(ValidationError):
        parse_number(math.nan, "pressure")


def test_parse_number_accepts_padding_and_numbers():
    assert parse_number(" 12.5 ", "temperature") == 12.5
    assert parse_number(7, "pressure") == 7.0


@pytest.mark.parametrize("text, expected", [
    ("500F", 500.0),
    ("100 psia", 100.0),
    ("5e2abc", 500.0),
    ("5eabc", 5.0),
    (".5 bar", 0.5),
    ("-40.0.1", -40.0),
    ("Infinity", math.inf),
])
def test_parse_number_reads_leading_number(text, expected):
    assert parse_number(text, "temperature") == expected


@pytest.mark.parametrize("text", ["F500", "inf", "e5", ".", "+"])
def test_parse_number_rejects_text_without_leading_number(text):
    with pytest.raises(ValidationError):
        parse_number(text, "pressure")


@pytest.mark.parametrize("temperature, pressure", [("500F", "100"), ("500", "100 psia"), ("5e2abc", "100")])
def test_trailing_text_is_ignored_when_calculating(orchestrator, temperature, pressure):
    result = orchestrator.calculate(temperature, pressure)
    assert result.enthalpy_btu_per_lb == pytest.approx(1281.296)


def test_below_saturation_reports_advisory(orchestrator):
    result = orchestrator.calculate("300", "200")
    assert result.sat_temp_f == 381.8
    assert result.superheat_f == pytest.approx(-81.8)
    assert not result.is_superheated
    assert result.condition == CONDITION_SATURATED
    assert result.warnings == ("BELOW_SATURATION",)
    assert "below saturation point" in result.advisories[0]


def test_superheated_result(orchestrator):
    result = orchestrator.calculate("500", "100")
    assert result.is_superheated
    assert result.condition == CONDITION_SUPERHEATED
    assert result.enthalpy_btu_per_lb == pytest.approx(1281.296)
    assert result.advisories == ()


def test_exactly_saturated_has_no_advisory(orchestrator):
    result = orchestrator.calculate("381.8", "200")
    assert result.superheat_f == 0
    assert result.condition == CONDITION_SATURATED
    assert result.warnings == ()


def test_out_of_range_pressure_is_clamped_silently(orchestrator):
    result = orchestrator.calculate("600", "2000")
    assert result.sat_temp_f == 544.6
    assert result.warnings == ()


def test_rows_render_one_decimal(orchestrator):
    result = orchestrator.calculate("500", "100")
    texts = {row.label: row.text for row in result.rows()}
    assert texts == {
        "Pressure (PSIA)": "100.0 PSIA",
        "Saturation Temperature": "327.8 °F",
        "Steam Condition": "Superheated",
        "Degrees of Superheat": "172.2 °F",
        "Steam Enthalpy": "1281.3 BTU/lb",
    }


def test_negative_superheat_row(orchestrator):
    result = orchestrator.calculate("300", "200")
    texts = {row.label: row.text for row in result.rows()}
    assert texts["Degrees of Superheat"] == "-81.8 °F"
    assert texts["Steam Enthalpy"] == "270.0 BTU/lb"


def test_as_dict_is_json_friendly(orchestrator):
    data = orchestrator.calculate("300", "200").as_dict()
    assert data["condition"] == "Saturated/Wet"
    assert data["is_superheated"] is False
    assert data["warnings"] == ["BELOW_SATURATION"]


def test_module_level_calculate_uses_default_table():
    assert calculate("500", "100").sat_temp_f == 327.8
