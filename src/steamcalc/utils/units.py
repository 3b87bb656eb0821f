"""Unit conversion helpers backed by Pint."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pint import Quantity, UnitRegistry

PRESSURE_UNIT = "psi"
TEMPERATURE_UNIT = "degF"
ENTHALPY_UNIT = "Btu / lb"


@lru_cache(maxsize=1)
def _build_registry() -> UnitRegistry:
    return UnitRegistry(auto_reduce_dimensions=True)


ureg = _build_registry()
Q_ = ureg.Quantity


def ensure_quantity(value: Any, unit: str) -> Quantity:
    """Return *value* as a quantity expressed in *unit*."""

    if isinstance(value, Quantity):
        return value.to(unit)
    return Q_(float(value), unit)


def magnitude(value: Any, unit: str) -> float:
    """Return the float magnitude of *value* expressed in *unit*."""

    return float(ensure_quantity(value, unit).magnitude)


__all__ = [
    "ENTHALPY_UNIT",
    "PRESSURE_UNIT",
    "TEMPERATURE_UNIT",
    "Q_",
    "ensure_quantity",
    "magnitude",
    "ureg",
]
