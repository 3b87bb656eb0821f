"""Standard advisory message catalogue for calculation results."""

from __future__ import annotations

from typing import Final

WARNING_MESSAGES: Final[dict[str, str]] = {
    "BELOW_SATURATION": (
        "Temperature is below saturation point. This indicates wet steam or subcooled liquid."
    ),
}


def advisory_text(code: str) -> str:
    """Return the catalogue message for *code*, or the code itself when it is unknown."""

    return WARNING_MESSAGES.get(code, code)


__all__ = ["WARNING_MESSAGES", "advisory_text"]
