"""Calculation orchestration: parse user input, look up saturation, estimate enthalpy."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict

from .enthalpy.enthalpy_estimator import estimate_enthalpy
from .errors import ValidationError
from .saturation.saturation_table import SaturationTable, default_table
from .utils.warnings import advisory_text

logger = logging.getLogger(__name__)

CONDITION_SUPERHEATED = "Superheated"
CONDITION_SATURATED = "Saturated/Wet"

INVALID_INPUT_MESSAGE = "Please enter valid numbers for both fields."

_LEADING_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ResultRow:
    """One line of the rendered result view."""

    label: str
    value: float | str
    unit: str = ""
    decimals: int = 1

    @property
    def text(self) -> str:
        if isinstance(self.value, str):
            return self.value
        formatted = f"{self.value:.{self.decimals}f}"
        return f"{formatted} {self.unit}" if self.unit else formatted


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of a single temperature/pressure calculation."""

    temperature_f: float
    pressure_psia: float
    sat_temp_f: float
    superheat_f: float
    enthalpy_btu_per_lb: float
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_superheated(self) -> bool:
        return self.superheat_f > 0

    @property
    def condition(self) -> str:
        return CONDITION_SUPERHEATED if self.is_superheated else CONDITION_SATURATED

    @property
    def advisories(self) -> tuple[str, ...]:
        return tuple(advisory_text(code) for code in self.warnings)

    def rows(self) -> tuple[ResultRow, ...]:
        return (
            ResultRow("Pressure (PSIA)", self.pressure_psia, "PSIA"),
            ResultRow("Saturation Temperature", self.sat_temp_f, "°F"),
            ResultRow("Steam Condition", self.condition),
            ResultRow("Degrees of Superheat", self.superheat_f, "°F"),
            ResultRow("Steam Enthalpy", self.enthalpy_btu_per_lb, "BTU/lb"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "temperature_F": self.temperature_f,
            "pressure_psia": self.pressure_psia,
            "saturation_temp_F": self.sat_temp_f,
            "superheat_F": self.superheat_f,
            "is_superheated": self.is_superheated,
            "condition": self.condition,
            "enthalpy_BTU_per_lb": self.enthalpy_btu_per_lb,
            "warnings": list(self.warnings),
        }


def parse_number(text: Any, field_name: str) -> float:
    """Parse a user-entered value, raising :class:`ValidationError` when it is not a number.

    Text is read like a browser number field: the longest leading number is
    used and anything after it is ignored, so ``"500F"`` parses as 500.
    """

    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        match = _LEADING_NUMBER.match(str(text).strip())
        if match is None:
            raise ValidationError(INVALID_INPUT_MESSAGE, field=field_name)
        value = float(match.group(0))
    if math.isnan(value):
        raise ValidationError(INVALID_INPUT_MESSAGE, field=field_name)
    return value


class CalculationOrchestrator:
    """Runs the calculator over a fixed saturation table."""

    def __init__(self, table: SaturationTable | None = None) -> None:
        self.table = table if table is not None else default_table()

    def compute(self, temperature_f: float, pressure_psia: float) -> CalculationResult:
        """Evaluate an already-parsed state."""

        sat_temp = self.table.lookup(pressure_psia)
        superheat = temperature_f - sat_temp
        enthalpy = estimate_enthalpy(temperature_f, pressure_psia, sat_temp)

        warnings: list[str] = []
        if superheat < 0:
            warnings.append("BELOW_SATURATION")

        if not self.table.min_pressure <= pressure_psia <= self.table.max_pressure:
            logger.debug("Pressure %.3f psia outside table range; saturation clamped", pressure_psia)

        return CalculationResult(
            temperature_f=temperature_f,
            pressure_psia=pressure_psia,
            sat_temp_f=sat_temp,
            superheat_f=superheat,
            enthalpy_btu_per_lb=enthalpy,
            warnings=tuple(warnings),
        )

    def calculate(self, temperature_text: Any, pressure_text: Any) -> CalculationResult:
        """Parse both inputs and evaluate them, or raise :class:`ValidationError`."""

        temperature = parse_number(temperature_text, "temperature")
        pressure = parse_number(pressure_text, "pressure")
        result = self.compute(temperature, pressure)
        logger.info(
            "T=%.1f °F, P=%.1f psia -> %s, h=%.1f BTU/lb",
            temperature,
            pressure,
            result.condition,
            result.enthalpy_btu_per_lb,
        )
        return result


def calculate(temperature_text: Any, pressure_text: Any, *, table: SaturationTable | None = None) -> CalculationResult:
    """Convenience wrapper around :class:`CalculationOrchestrator`."""

    return CalculationOrchestrator(table).calculate(temperature_text, pressure_text)


__all__ = [
    "CONDITION_SATURATED",
    "CONDITION_SUPERHEATED",
    "CalculationOrchestrator",
    "CalculationResult",
    "INVALID_INPUT_MESSAGE",
    "ResultRow",
    "calculate",
    "parse_number",
]
