"""Console presentation helpers for calculation results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from ..calculator import CalculationResult
from ..utils.unit_helpers import (
    btu_per_lb_to_kj_per_kg,
    degf_to_degc,
    delta_degf_to_delta_degc,
    psia_to_kpa,
)


def _format_block(title: str, lines: list[str]) -> str:
    divider = "=" * len(title)
    return "\n".join([title, divider, *lines])


def format_result_lines(result: CalculationResult, *, show_si: bool = False) -> list[str]:
    """Return the result view as aligned ``label: value`` lines."""

    rows = result.rows()
    width = max(len(row.label) for row in rows) + 1
    lines = [f"{row.label + ':':<{width}} {row.text}" for row in rows]
    if show_si:
        lines.extend(
            [
                "",
                f"{'Pressure:':<{width}} {psia_to_kpa(result.pressure_psia):.1f} kPa abs",
                f"{'Saturation Temp:':<{width}} {degf_to_degc(result.sat_temp_f):.1f} °C",
                f"{'Superheat:':<{width}} {delta_degf_to_delta_degc(result.superheat_f):.1f} K",
                f"{'Enthalpy:':<{width}} {btu_per_lb_to_kj_per_kg(result.enthalpy_btu_per_lb):.1f} kJ/kg",
            ]
        )
    return lines


def render_console_view(result: CalculationResult, *, show_si: bool = False, stream: TextIO | None = None) -> None:
    """Print the result block followed by any advisories."""

    print(_format_block("Results", format_result_lines(result, show_si=show_si)), file=stream)
    for advisory in result.advisories:
        print(file=stream)
        print(f"Warning: {advisory}", file=stream)


def export_result_json(result: CalculationResult, output_path: Path) -> Path:
    """Persist a single result as JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(result.as_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return output_path


__all__ = ["export_result_json", "format_result_lines", "render_console_view"]
