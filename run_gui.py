"""Desktop GUI launcher for the steam enthalpy calculator."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from steamcalc.logging_config import setup_logging
from steamcalc.ui.gui_app import launch_gui


def main() -> None:
    """Start the interactive GUI."""

    setup_logging()
    launch_gui()


if __name__ == "__main__":
    main()
