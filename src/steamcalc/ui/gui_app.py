"""Tkinter front end for the steam enthalpy calculator."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from ..asset_cache.runtime import WorkerRuntime, register_worker
from ..calculator import CalculationOrchestrator, CalculationResult
from ..config import AppConfig, get_config
from ..errors import ValidationError
from ..reporter.excel_reporter import export_history_to_excel
from ..saturation.saturation_table import SaturationTable
from .events import HISTORY_CHANGED, RESULT_CLEARED, RESULT_UPDATED, EventBus
from .install_flow import DesktopEntryPrompt, InstallFlow
from .model import CalculatorModel
from .theme import Theme, get_theme

logger = logging.getLogger(__name__)


class SteamCalcApp:
    """Controller for the calculator window."""

    def __init__(self, root: tk.Tk, config: AppConfig | None = None) -> None:
        self.root = root
        self.config = config or get_config()
        self.table = SaturationTable(self.config.saturation_table)

        self.bus = EventBus()
        self.model = CalculatorModel(self.bus, orchestrator=CalculationOrchestrator(self.table))
        self.theme: Theme = get_theme(high_contrast=False)

        self.temperature_var = tk.StringVar()
        self.pressure_var = tk.StringVar()
        self.high_contrast_var = tk.BooleanVar(value=False)
        self.status_var = tk.StringVar(value="Ready.")
        self.advisory_var = tk.StringVar(value="")
        self.row_vars: list[tuple[tk.StringVar, tk.StringVar]] = []
        self.value_labels: list[ttk.Label] = []

        self.executor = ThreadPoolExecutor(max_workers=1)
        self._worker_future: Future[WorkerRuntime] | None = None
        self._subscriptions: list[Callable[[], None]] = []

        self._build_ui()
        self._register_bus_handlers()

        self.install_flow = InstallFlow(self._show_install_button, self._hide_install_button)
        self.install_flow.refresh_display_mode()
        self._offer_desktop_install()
        self._register_asset_worker()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.root.title("Steam Enthalpy Calculator")
        self._apply_theme_to_styles()
        metrics = self.theme.metrics

        header = ttk.Frame(self.root, padding=(metrics.spacing_large, metrics.spacing_medium))
        header.pack(fill="x")
        ttk.Label(header, text="Steam Enthalpy Calculator", style="Title.TLabel").pack(side="left")
        self.install_button = ttk.Button(header, text="Install", command=self.on_install)

        inputs = ttk.Frame(self.root, padding=(metrics.spacing_large, metrics.spacing_small))
        inputs.pack(fill="x")
        inputs.columnconfigure(1, weight=1)

        ttk.Label(inputs, text="Temperature (°F)").grid(row=0, column=0, sticky="w", pady=metrics.spacing_small)
        temperature_entry = ttk.Entry(inputs, textvariable=self.temperature_var, width=metrics.entry_width)
        temperature_entry.grid(row=0, column=1, sticky="ew", pady=metrics.spacing_small)

        ttk.Label(inputs, text="Pressure (PSIA)").grid(row=1, column=0, sticky="w", pady=metrics.spacing_small)
        pressure_entry = ttk.Entry(inputs, textvariable=self.pressure_var, width=metrics.entry_width)
        pressure_entry.grid(row=1, column=1, sticky="ew", pady=metrics.spacing_small)

        toolbar = ttk.Frame(self.root, padding=(metrics.spacing_large, metrics.spacing_small))
        toolbar.pack(fill="x")
        ttk.Button(toolbar, text="Calculate", command=self.on_calculate).pack(side="left", padx=(0, 8))
        ttk.Button(toolbar, text="Reset", command=self.on_reset).pack(side="left", padx=(0, 8))
        ttk.Button(toolbar, text="Export…", command=self.export_history).pack(side="left", padx=(0, 16))
        ttk.Checkbutton(
            toolbar,
            text="High contrast",
            variable=self.high_contrast_var,
            command=self._toggle_contrast,
        ).pack(side="left")

        self.results_frame = ttk.LabelFrame(self.root, text="Results", padding=(metrics.spacing_medium, metrics.spacing_medium))
        self.results_frame.columnconfigure(1, weight=1)
        for index in range(5):
            label_var = tk.StringVar()
            value_var = tk.StringVar()
            ttk.Label(self.results_frame, textvariable=label_var).grid(row=index, column=0, sticky="w")
            value_label = ttk.Label(self.results_frame, textvariable=value_var, style="Value.TLabel")
            value_label.grid(row=index, column=1, sticky="e")
            self.row_vars.append((label_var, value_var))
            self.value_labels.append(value_label)
        self.condition_label = self.value_labels[2]
        self.advisory_label = ttk.Label(
            self.results_frame,
            textvariable=self.advisory_var,
            style="Warning.TLabel",
            wraplength=metrics.result_wraplength,
            justify="left",
        )

        status_frame = ttk.Frame(self.root, padding=(metrics.spacing_large, metrics.spacing_small))
        status_frame.pack(side="bottom", fill="x")
        ttk.Label(status_frame, textvariable=self.status_var, style="Status.TLabel", anchor="w").pack(fill="x")

        self.root.bind("<Return>", self._handle_return)
        self.root.bind("<Escape>", self._handle_escape)
        temperature_entry.focus_set()

    def _apply_theme_to_styles(self) -> None:
        style = ttk.Style()
        style.theme_use("default")
        palette = self.theme.palette
        fonts = self.theme.fonts.as_dict()

        self.root.configure(bg=palette.window_bg)
        style.configure("TFrame", background=palette.window_bg)
        style.configure("TLabelframe", background=palette.panel_bg, foreground=palette.text_primary)
        style.configure("TLabelframe.Label", background=palette.window_bg, foreground=palette.text_primary, font=fonts["label"])
        style.configure("TLabel", background=palette.window_bg, foreground=palette.text_primary, font=fonts["label"])
        style.configure("Title.TLabel", font=fonts["title"])
        style.configure("Value.TLabel", font=fonts["value"])
        style.configure("Status.TLabel", foreground=palette.text_secondary, font=fonts["status"])
        style.configure("Warning.TLabel", foreground=palette.warning_fg, background=palette.warning_bg, font=fonts["label"])
        style.configure("TButton", font=fonts["label"])
        style.configure("TCheckbutton", background=palette.window_bg, foreground=palette.text_primary, font=fonts["label"])

    def _register_bus_handlers(self) -> None:
        self._subscriptions.append(self.bus.subscribe(RESULT_UPDATED, self._on_result_updated))
        self._subscriptions.append(self.bus.subscribe(RESULT_CLEARED, self._on_result_cleared))
        self._subscriptions.append(self.bus.subscribe(HISTORY_CHANGED, self._on_history_changed))

    # ------------------------------------------------------------------
    # Calculator actions
    # ------------------------------------------------------------------
    def on_calculate(self) -> None:
        try:
            self.model.calculate(self.temperature_var.get(), self.pressure_var.get())
        except ValidationError as exc:
            messagebox.showerror("Invalid Input", str(exc), parent=self.root)
            self.update_status("Invalid input.")

    def on_reset(self) -> None:
        self.temperature_var.set("")
        self.pressure_var.set("")
        self.model.reset()

    def _handle_return(self, event: tk.Event) -> str:
        self.on_calculate()
        return "break"

    def _handle_escape(self, event: tk.Event) -> str:
        self.on_reset()
        return "break"

    # ------------------------------------------------------------------
    # Event handlers from model/bus
    # ------------------------------------------------------------------
    def _on_result_updated(self, result: CalculationResult, **_: Any) -> None:
        for (label_var, value_var), row in zip(self.row_vars, result.rows()):
            label_var.set(f"{row.label}:")
            value_var.set(row.text)
        self.condition_label.configure(foreground=self.theme.condition_color(result.is_superheated))

        if result.advisories:
            self.advisory_var.set("\n".join(f"⚠ {message}" for message in result.advisories))
            self.advisory_label.grid(row=5, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        else:
            self.advisory_var.set("")
            self.advisory_label.grid_remove()

        self.results_frame.pack(fill="x", padx=self.theme.metrics.spacing_large, pady=self.theme.metrics.spacing_medium)
        self.update_status(f"{result.condition} steam, {result.enthalpy_btu_per_lb:.1f} BTU/lb.")

    def _on_result_cleared(self, **_: Any) -> None:
        self.results_frame.pack_forget()
        self.advisory_var.set("")
        self.update_status("Ready.")

    def _on_history_changed(self, count: int, **_: Any) -> None:
        logger.debug("History now holds %d results", count)

    # ------------------------------------------------------------------
    # Install control
    # ------------------------------------------------------------------
    def _show_install_button(self) -> None:
        self.install_button.pack(side="right")

    def _hide_install_button(self) -> None:
        self.install_button.pack_forget()

    def _offer_desktop_install(self) -> None:
        prompt = DesktopEntryPrompt(
            lambda title, message: messagebox.askyesno(title, message, parent=self.root),
            on_installed=self.install_flow.on_installed,
        )
        if prompt.available():
            self.install_flow.on_install_available(prompt)

    def on_install(self) -> None:
        outcome = self.install_flow.on_install_clicked()
        self.install_flow.refresh_display_mode()
        if outcome is not None:
            self.update_status(f"Install {outcome}.")

    # ------------------------------------------------------------------
    # Asset cache worker
    # ------------------------------------------------------------------
    def _register_asset_worker(self) -> None:
        asset_config = self.config.asset_cache
        if not asset_config.origin:
            logger.debug("No asset origin configured; offline cache disabled")
            return

        def _register() -> WorkerRuntime:
            async def _run() -> WorkerRuntime:
                runtime = await register_worker(asset_config)
                await runtime.aclose()
                return runtime

            return asyncio.run(_run())

        future = self.executor.submit(_register)
        future.add_done_callback(lambda fut: self.root.after(0, lambda: self._handle_worker_future(fut)))
        self._worker_future = future

    def _handle_worker_future(self, future: Future[WorkerRuntime]) -> None:
        self._worker_future = None
        try:
            runtime = future.result()
        except Exception as exc:
            logger.warning("Asset cache registration failed: %s", exc)
            self.update_status("Offline cache unavailable.")
            return
        if runtime.active is not None:
            self.update_status(f"Offline cache {runtime.active.cache_name} ready.")

    # ------------------------------------------------------------------
    # Export, theme and status helpers
    # ------------------------------------------------------------------
    def export_history(self) -> None:
        if not self.model.history:
            messagebox.showinfo("Export", "Calculate at least one result before exporting.", parent=self.root)
            return
        file_path = filedialog.asksaveasfilename(
            title="Export Results",
            defaultextension=".xlsx",
            initialfile="steam_results.xlsx",
            filetypes=(("Excel Workbook", "*.xlsx"), ("All Files", "*")),
        )
        if not file_path:
            return
        try:
            output = export_history_to_excel(self.model.history, Path(file_path), table=self.table)
        except OSError as exc:
            messagebox.showerror("Export Error", f"Failed to export results:\n{exc}", parent=self.root)
            return
        self.update_status(f"Results saved to {output}")

    def _toggle_contrast(self) -> None:
        self.theme = get_theme(high_contrast=self.high_contrast_var.get())
        self._apply_theme_to_styles()
        if self.model.result is not None:
            self.condition_label.configure(foreground=self.theme.condition_color(self.model.result.is_superheated))

    def update_status(self, message: str) -> None:
        self.status_var.set(message)

    def shutdown(self) -> None:
        if self._worker_future is not None:
            self._worker_future.cancel()
        self.executor.shutdown(wait=False)
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()


def launch_gui(config: AppConfig | None = None) -> None:
    """Entry point for launching the Tkinter GUI."""

    root = tk.Tk()
    app = SteamCalcApp(root, config)

    def _on_close() -> None:
        app.shutdown()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", _on_close)
    root.mainloop()


__all__ = ["SteamCalcApp", "launch_gui"]
