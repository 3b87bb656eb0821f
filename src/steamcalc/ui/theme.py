"""Theme tokens for the calculator window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


FontDef = Tuple[str, int] | Tuple[str, int, str]


@dataclass(frozen=True)
class ThemePalette:
    window_bg: str
    panel_bg: str
    text_primary: str
    text_secondary: str
    superheated: str
    saturated: str
    warning_fg: str
    warning_bg: str
    accent: str


@dataclass(frozen=True)
class ThemeFonts:
    title: FontDef
    label: FontDef
    value: FontDef
    condition: FontDef
    status: FontDef

    def as_dict(self) -> Dict[str, FontDef]:
        return {
            "title": self.title,
            "label": self.label,
            "value": self.value,
            "condition": self.condition,
            "status": self.status,
        }


@dataclass(frozen=True)
class ThemeMetrics:
    entry_width: int
    result_wraplength: int
    spacing_small: int
    spacing_medium: int
    spacing_large: int


@dataclass(frozen=True)
class Theme:
    palette: ThemePalette
    fonts: ThemeFonts
    metrics: ThemeMetrics

    def condition_color(self, is_superheated: bool) -> str:
        return self.palette.superheated if is_superheated else self.palette.saturated


_FONTS = ThemeFonts(
    title=("Segoe UI", 14, "bold"),
    label=("Segoe UI", 10),
    value=("Segoe UI", 10, "bold"),
    condition=("Segoe UI", 10, "bold"),
    status=("Segoe UI", 9),
)

_METRICS = ThemeMetrics(
    entry_width=18,
    result_wraplength=320,
    spacing_small=4,
    spacing_medium=8,
    spacing_large=12,
)


DEFAULT_THEME = Theme(
    palette=ThemePalette(
        window_bg="#f4f6fb",
        panel_bg="#ffffff",
        text_primary="#1d3557",
        text_secondary="#415a77",
        superheated="#dc2626",
        saturated="#2563eb",
        warning_fg="#92400e",
        warning_bg="#fef3c7",
        accent="#1d3557",
    ),
    fonts=_FONTS,
    metrics=_METRICS,
)


HIGH_CONTRAST_THEME = Theme(
    palette=ThemePalette(
        window_bg="#1b1b1b",
        panel_bg="#101010",
        text_primary="#f5f5f5",
        text_secondary="#d7d7d7",
        superheated="#ff5f57",
        saturated="#6cb6ff",
        warning_fg="#ffcc00",
        warning_bg="#4d3a00",
        accent="#f1c40f",
    ),
    fonts=_FONTS,
    metrics=_METRICS,
)


def get_theme(high_contrast: bool = False) -> Theme:
    """Return the default or high-contrast theme."""

    return HIGH_CONTRAST_THEME if high_contrast else DEFAULT_THEME


__all__ = ["Theme", "ThemePalette", "ThemeMetrics", "ThemeFonts", "get_theme"]
