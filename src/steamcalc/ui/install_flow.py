"""Install-prompt handling: defer the platform prompt and show our own install control."""

from __future__ import annotations

import logging
import shlex
import sys
from pathlib import Path
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

OUTCOME_ACCEPTED = "accepted"
OUTCOME_DISMISSED = "dismissed"


class InstallPrompt(Protocol):
    """A deferred platform install prompt."""

    def prevent_default(self) -> None:
        ...

    def prompt(self) -> None:
        ...

    def user_choice(self) -> str:
        ...


def running_standalone() -> bool:
    """Return True when running as a bundled, installed application."""

    return bool(getattr(sys, "frozen", False))


class InstallFlow:
    """Owns the deferred install prompt and the visibility of the install control.

    The prompt handle is set when the platform announces that installation is
    available and cleared once the user has answered or the app reports it was
    installed. The control stays hidden while the app runs standalone.
    """

    def __init__(
        self,
        show_control: Callable[[], None],
        hide_control: Callable[[], None],
        is_standalone: Callable[[], bool] = running_standalone,
    ) -> None:
        self._show_control = show_control
        self._hide_control = hide_control
        self._is_standalone = is_standalone
        self._deferred: InstallPrompt | None = None
        self.control_visible = False

    @property
    def can_install(self) -> bool:
        return self._deferred is not None

    def _set_visible(self, visible: bool) -> None:
        self.control_visible = visible
        if visible:
            self._show_control()
        else:
            self._hide_control()

    def on_install_available(self, prompt: InstallPrompt) -> None:
        prompt.prevent_default()
        self._deferred = prompt
        if self._is_standalone():
            self._set_visible(False)
            return
        self._set_visible(True)

    def on_install_clicked(self) -> str | None:
        """Show the deferred prompt and return the user's choice, if a prompt is pending."""

        prompt = self._deferred
        if prompt is None:
            return None

        prompt.prompt()
        outcome = prompt.user_choice()
        if outcome == OUTCOME_ACCEPTED:
            logger.info("User accepted the install prompt")
        else:
            logger.info("User dismissed the install prompt")

        self._deferred = None
        self._set_visible(False)
        return outcome

    def on_installed(self) -> None:
        self._deferred = None
        self._set_visible(False)

    def refresh_display_mode(self) -> bool:
        """Re-check the display mode; hide the control when standalone. Returns the check result.

        Tk reports no display-mode changes, so the window calls this on load and
        again after every install decision.
        """

        standalone = self._is_standalone()
        if standalone:
            self._set_visible(False)
        return standalone


class DesktopEntryPrompt:
    """Offers to add a launcher for the calculator to the desktop applications menu.

    Only meaningful on freedesktop platforms; :meth:`available` reports whether
    the entry is missing and can be written. *on_installed* fires once the
    launcher exists, playing the part of the platform's "installed" signal.
    """

    ENTRY_NAME = "steamcalc.desktop"

    def __init__(
        self,
        ask: Callable[[str, str], bool],
        applications_dir: Path | None = None,
        on_installed: Callable[[], None] | None = None,
    ) -> None:
        self._ask = ask
        self._on_installed = on_installed
        self.applications_dir = applications_dir or Path.home() / ".local" / "share" / "applications"
        self._choice: str | None = None

    @property
    def entry_path(self) -> Path:
        return self.applications_dir / self.ENTRY_NAME

    def available(self) -> bool:
        return sys.platform.startswith("linux") and not self.entry_path.exists()

    def prevent_default(self) -> None:
        """Desktop platforms show no prompt of their own."""

    def prompt(self) -> None:
        accepted = self._ask("Install Steam Calculator", "Add Steam Calculator to your applications menu?")
        if accepted:
            self._write_entry()
        self._choice = OUTCOME_ACCEPTED if accepted else OUTCOME_DISMISSED

    def user_choice(self) -> str:
        return self._choice or OUTCOME_DISMISSED

    def _write_entry(self) -> None:
        command = " ".join(shlex.quote(part) for part in (sys.executable, "-m", "steamcalc", "gui"))
        self.applications_dir.mkdir(parents=True, exist_ok=True)
        self.entry_path.write_text(
            "\n".join(
                [
                    "[Desktop Entry]",
                    "Type=Application",
                    "Name=Steam Calculator",
                    "Comment=Estimate steam enthalpy from temperature and pressure",
                    f"Exec={command}",
                    "Terminal=false",
                    "Categories=Science;Engineering;",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        logger.info("Wrote desktop entry %s", self.entry_path)
        if self._on_installed is not None:
            self._on_installed()


__all__ = [
    "DesktopEntryPrompt",
    "InstallFlow",
    "InstallPrompt",
    "OUTCOME_ACCEPTED",
    "OUTCOME_DISMISSED",
    "running_standalone",
]
