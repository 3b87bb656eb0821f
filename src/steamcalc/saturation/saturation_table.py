"""Saturation temperature lookup keyed by absolute pressure."""

from __future__ import annotations

from bisect import bisect_right
from functools import lru_cache
from typing import Iterable, Iterator, Mapping, Tuple

from ..config import get_config

TableEntries = Iterable[Tuple[float, float]] | Mapping[float, float]


class SaturationTable:
    """Immutable PSIA -> °F saturation table with clamped linear interpolation."""

    __slots__ = ("_pressures", "_temperatures")

    def __init__(self, entries: TableEntries) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        rows = sorted((float(pressure), float(temperature)) for pressure, temperature in pairs)
        if not rows:
            raise ValueError("Saturation table requires at least one entry")
        for (p1, _), (p2, _) in zip(rows, rows[1:]):
            if p1 == p2:
                raise ValueError(f"Duplicate saturation table pressure: {p1}")
        self._pressures: tuple[float, ...] = tuple(row[0] for row in rows)
        self._temperatures: tuple[float, ...] = tuple(row[1] for row in rows)

    @property
    def min_pressure(self) -> float:
        return self._pressures[0]

    @property
    def max_pressure(self) -> float:
        return self._pressures[-1]

    def __len__(self) -> int:
        return len(self._pressures)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(zip(self._pressures, self._temperatures))

    def __repr__(self) -> str:
        return f"SaturationTable({len(self)} entries, {self.min_pressure}-{self.max_pressure} psia)"

    def lookup(self, pressure: float) -> float:
        """Return the saturation temperature at *pressure*.

        Pressures outside the tabulated range are clamped to the nearest end
        point rather than extrapolated. Tabulated pressures return the stored
        value exactly.
        """

        pressures = self._pressures
        temperatures = self._temperatures
        if pressure <= pressures[0]:
            return temperatures[0]
        if pressure >= pressures[-1]:
            return temperatures[-1]

        index = bisect_right(pressures, pressure)
        p1, p2 = pressures[index - 1], pressures[index]
        t1, t2 = temperatures[index - 1], temperatures[index]
        return t1 + (t2 - t1) * (pressure - p1) / (p2 - p1)


@lru_cache(maxsize=1)
def default_table() -> SaturationTable:
    """Build the saturation table from the application configuration."""

    return SaturationTable(get_config().saturation_table)


def lookup_saturation_temp(pressure: float, table: SaturationTable | None = None) -> float:
    """Return the saturation temperature (°F) for an absolute *pressure* (PSIA)."""

    if table is None:
        table = default_table()
    return table.lookup(pressure)


__all__ = ["SaturationTable", "default_table", "lookup_saturation_temp"]
