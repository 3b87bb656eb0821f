"""Approximate steam enthalpy correlations in BTU/lb."""

from __future__ import annotations

LATENT_HEAT_BASE_BTU_PER_LB = 970.3
LATENT_HEAT_PRESSURE_SLOPE = 0.5
LIQUID_ENTHALPY_BASE_BTU_PER_LB = 180.0
LIQUID_ENTHALPY_SLOPE = 0.3
CP_SUPERHEAT_BTU_PER_LB_F = 0.48


def liquid_enthalpy(temp_f: float) -> float:
    """Sensible heat of saturated liquid at *temp_f*."""

    return LIQUID_ENTHALPY_BASE_BTU_PER_LB + LIQUID_ENTHALPY_SLOPE * temp_f


def latent_heat(pressure_psia: float) -> float:
    """Latent heat of vaporization with a linear pressure correction."""

    return LATENT_HEAT_BASE_BTU_PER_LB - LATENT_HEAT_PRESSURE_SLOPE * pressure_psia


def estimate_enthalpy(temp_f: float, pressure_psia: float, sat_temp_f: float) -> float:
    """Return the approximate specific enthalpy for the given state.

    Above saturation the result is the saturated vapor enthalpy plus the
    superheat times :data:`CP_SUPERHEAT_BTU_PER_LB_F`. At or below saturation
    only the liquid sensible heat at *temp_f* is returned; latent heat and
    steam quality are not taken into account.
    """

    if temp_f > sat_temp_f:
        hfg = latent_heat(pressure_psia)
        hf = liquid_enthalpy(sat_temp_f)
        hg = hf + hfg
        superheat = temp_f - sat_temp_f
        return hg + CP_SUPERHEAT_BTU_PER_LB_F * superheat
    return liquid_enthalpy(temp_f)


__all__ = [
    "CP_SUPERHEAT_BTU_PER_LB_F",
    "estimate_enthalpy",
    "latent_heat",
    "liquid_enthalpy",
]
