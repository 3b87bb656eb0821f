"""Imperial to SI conversions for reporting, backed by Pint."""

from __future__ import annotations

from .units import ENTHALPY_UNIT, PRESSURE_UNIT, TEMPERATURE_UNIT, Q_, magnitude


def psia_to_kpa(pressure_psia: float) -> float:
    """Convert absolute pressure from psi to kPa."""

    return magnitude(Q_(pressure_psia, PRESSURE_UNIT), "kilopascal")


def degf_to_degc(temperature_f: float) -> float:
    """Convert an absolute temperature from °F to °C."""

    return magnitude(Q_(temperature_f, TEMPERATURE_UNIT), "degC")


def delta_degf_to_delta_degc(delta_f: float) -> float:
    """Convert a temperature difference (e.g. degrees of superheat) from °F to °C."""

    return magnitude(Q_(delta_f, "delta_degF"), "delta_degC")


def btu_per_lb_to_kj_per_kg(enthalpy: float) -> float:
    """Convert specific enthalpy from BTU/lb to kJ/kg."""

    return magnitude(Q_(enthalpy, ENTHALPY_UNIT), "kJ / kg")


__all__ = [
    "btu_per_lb_to_kj_per_kg",
    "degf_to_degc",
    "delta_degf_to_delta_degc",
    "psia_to_kpa",
]
