# tests/test_saturation_table.py
import pytest

from steamcalc.saturation.saturation_table import SaturationTable, default_table, lookup_saturation_temp


def test_default_table_spans_atmospheric_to_1000_psia(table):
    assert len(table) == 26
    assert table.min_pressure == 14.7
    assert table.max_pressure == 1000.0


@pytest.mark.parametrize("pressure", [14.7, 10.0, 0.0, -5.0])
def test_pressures_at_or_below_table_clamp_to_212(table, pressure):
    assert table.lookup(pressure) == 212.0


@pytest.mark.parametrize("pressure", [1000.0, 1000.5, 5000.0])
def test_pressures_at_or_above_table_clamp_to_544_6(table, pressure):
    assert table.lookup(pressure) == 544.6


def test_tabulated_pressure_returns_exact_value(table):
    assert table.lookup(60) == 292.7
    assert table.lookup(200) == 381.8


def test_interpolates_between_neighbours(table):
    expected = 281.0 + (292.7 - 281.0) * (55 - 50) / (60 - 50)
    assert table.lookup(55) == pytest.approx(expected)
    assert table.lookup(55) == pytest.approx(286.85)


def test_every_tabulated_key_round_trips(table):
    for pressure, temperature in table:
        assert table.lookup(pressure) == temperature


def test_accepts_unsorted_mapping():
    custom = SaturationTable({100.0: 300.0, 10.0: 200.0, 50.0: 250.0})
    assert [pressure for pressure, _ in custom] == [10.0, 50.0, 100.0]
    assert custom.lookup(30.0) == pytest.approx(225.0)


def test_single_entry_table_clamps_everywhere():
    custom = SaturationTable([(50.0, 281.0)])
    assert custom.lookup(0.0) == 281.0
    assert custom.lookup(500.0) == 281.0


def test_rejects_empty_table():
    with pytest.raises(ValueError):
        SaturationTable([])


def test_rejects_duplicate_pressures():
    with pytest.raises(ValueError, match="Duplicate"):
        SaturationTable([(10.0, 200.0), (10.0, 201.0)])


def test_module_lookup_uses_configured_table():
    assert default_table() is default_table()
    assert lookup_saturation_temp(60) == 292.7


def test_module_lookup_accepts_substituted_table():
    custom = SaturationTable([(0.0, 0.0), (10.0, 100.0)])
    assert lookup_saturation_temp(2.5, custom) == pytest.approx(25.0)
