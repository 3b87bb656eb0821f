"""Excel export of the calculation history."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..calculator import CalculationResult
from ..saturation.saturation_table import SaturationTable
from ..utils.unit_helpers import btu_per_lb_to_kj_per_kg, degf_to_degc, psia_to_kpa

RESULT_HEADERS: tuple[str, ...] = (
    "#",
    "Temperature (°F)",
    "Pressure (PSIA)",
    "Saturation Temp (°F)",
    "Superheat (°F)",
    "Condition",
    "Enthalpy (BTU/lb)",
    "Temperature (°C)",
    "Pressure (kPa abs)",
    "Enthalpy (kJ/kg)",
    "Advisory",
)

TABLE_HEADERS: tuple[str, ...] = ("Pressure (PSIA)", "Saturation Temp (°F)", "Pressure (kPa abs)", "Saturation Temp (°C)")


def _write_header(sheet: Worksheet, headers: Iterable[str]) -> None:
    sheet.append(list(headers))
    for cell in sheet[1]:
        cell.font = Font(bold=True)


def _autosize(sheet: Worksheet, columns: int, width: int = 20) -> None:
    for column in range(1, columns + 1):
        sheet.column_dimensions[get_column_letter(column)].width = width


def _number_cell(value: float, digits: int = 1) -> float | str:
    """Round *value* for a cell; Excel has no infinity, so non-finite values are written as text."""

    if math.isfinite(value):
        return round(value, digits)
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def _write_results_sheet(workbook: Workbook, results: Iterable[CalculationResult]) -> None:
    sheet = workbook.active
    sheet.title = "Results"
    _write_header(sheet, RESULT_HEADERS)
    for index, result in enumerate(results, start=1):
        sheet.append(
            [
                index,
                _number_cell(result.temperature_f),
                _number_cell(result.pressure_psia),
                _number_cell(result.sat_temp_f),
                _number_cell(result.superheat_f),
                result.condition,
                _number_cell(result.enthalpy_btu_per_lb),
                _number_cell(degf_to_degc(result.temperature_f)),
                _number_cell(psia_to_kpa(result.pressure_psia)),
                _number_cell(btu_per_lb_to_kj_per_kg(result.enthalpy_btu_per_lb)),
                "; ".join(result.advisories),
            ]
        )
    _autosize(sheet, len(RESULT_HEADERS))
    sheet.column_dimensions[get_column_letter(len(RESULT_HEADERS))].width = 60
    sheet.freeze_panes = "A2"


def _write_table_sheet(workbook: Workbook, table: SaturationTable) -> None:
    sheet = workbook.create_sheet("Saturation Table")
    _write_header(sheet, TABLE_HEADERS)
    for pressure, temperature in table:
        sheet.append(
            [
                _number_cell(pressure, 2),
                _number_cell(temperature, 2),
                _number_cell(psia_to_kpa(pressure), 2),
                _number_cell(degf_to_degc(temperature), 2),
            ]
        )
    _autosize(sheet, len(TABLE_HEADERS))


def export_history_to_excel(
    results: Iterable[CalculationResult],
    output_path: Path,
    *,
    table: SaturationTable | None = None,
) -> Path:
    """Create a workbook with one row per calculation and, optionally, the table in use."""

    workbook = Workbook()
    _write_results_sheet(workbook, results)
    if table is not None:
        _write_table_sheet(workbook, table)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path


__all__ = ["RESULT_HEADERS", "TABLE_HEADERS", "export_history_to_excel"]
