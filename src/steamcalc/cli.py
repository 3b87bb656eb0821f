"""Command-line interface: one-shot calculations, the GUI and asset cache maintenance."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

import httpx

from . import get_version
from .asset_cache.cache_storage import CacheStorage
from .asset_cache.runtime import build_runtime
from .calculator import CalculationOrchestrator
from .config import AppConfig, get_config, load_config
from .errors import ConfigError, InstallError, ValidationError
from .logging_config import setup_logging
from .reporter.console_reporter import export_result_json, render_console_view
from .reporter.excel_reporter import export_history_to_excel
from .saturation.saturation_table import SaturationTable

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all sub-commands."""

    parser = argparse.ArgumentParser(prog="steamcalc", description="Steam enthalpy calculator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("--config", type=Path, help="JSON file merged over the packaged defaults")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    parser.add_argument("--log-file", type=Path, help="Also write log records to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    calc = subparsers.add_parser("calc", help="Estimate enthalpy for one temperature/pressure pair")
    calc.add_argument("--temp", required=True, help="Steam temperature in °F")
    calc.add_argument("--pressure", required=True, help="Absolute pressure in PSIA")
    calc.add_argument("--si", action="store_true", help="Also print SI equivalents")
    calc.add_argument("--json", type=Path, help="Write the result as JSON to this path")
    calc.add_argument("--xlsx", type=Path, help="Write the result as an Excel workbook to this path")

    subparsers.add_parser("gui", help="Launch the desktop calculator")

    assets = subparsers.add_parser("assets", help="Manage the offline asset cache")
    assets_sub = assets.add_subparsers(dest="assets_command", required=True)

    sync = assets_sub.add_parser("sync", help="Install and activate the configured cache version")
    sync.add_argument("--origin", help="Base URL the assets are served from")
    sync.add_argument("--cache-dir", type=Path, help="Directory holding cache stores")

    get = assets_sub.add_parser("get", help="Fetch an asset through the cache")
    get.add_argument("path", help="Asset path relative to the origin, e.g. ./index.html")
    get.add_argument("--origin", help="Base URL the assets are served from")
    get.add_argument("--cache-dir", type=Path, help="Directory holding cache stores")
    get.add_argument("--out", type=Path, help="Write the body here instead of stdout")

    listing = assets_sub.add_parser("list", help="List cache stores and their entries")
    listing.add_argument("--cache-dir", type=Path, help="Directory holding cache stores")

    return parser


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


# ----------------------------------------------------------------------
# Sub-commands
# ----------------------------------------------------------------------
def run_calc(args: argparse.Namespace, config: AppConfig) -> int:
    table = SaturationTable(config.saturation_table)
    try:
        result = CalculationOrchestrator(table).calculate(args.temp, args.pressure)
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    render_console_view(result, show_si=args.si)
    if args.json:
        print(f"\nResult JSON : {export_result_json(result, args.json)}")
    if args.xlsx:
        print(f"Excel report: {export_history_to_excel([result], args.xlsx, table=table)}")
    return 0


def run_gui(config: AppConfig) -> int:
    from .ui.gui_app import launch_gui

    launch_gui(config)
    return 0


async def _sync_assets(args: argparse.Namespace, config: AppConfig) -> int:
    runtime, worker = build_runtime(config.asset_cache, origin=args.origin, cache_dir=args.cache_dir)
    try:
        await runtime.register(worker)
    except InstallError as exc:
        print(f"error: install failed: {exc}", file=sys.stderr)
        return 1
    finally:
        await runtime.aclose()
    store = worker.current_store()
    print(f"Active cache: {worker.cache_name} ({len(store) if store is not None else 0} entries)")
    return 0


async def _get_asset(args: argparse.Namespace, config: AppConfig) -> int:
    runtime, worker = build_runtime(config.asset_cache, origin=args.origin, cache_dir=args.cache_dir)
    try:
        await runtime.register(worker)
    except InstallError as exc:
        logger.warning("Serving without an active cache: %s", exc)

    async with httpx.AsyncClient(transport=runtime.transport) as client:
        try:
            response = await client.get(worker.resolve(args.path))
        except httpx.TransportError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_bytes(response.content)
    else:
        sys.stdout.buffer.write(response.content)
        sys.stdout.flush()
    return 0 if response.is_success else 1


def list_assets(args: argparse.Namespace, config: AppConfig) -> int:
    storage = CacheStorage(args.cache_dir or config.asset_cache.cache_dir)
    names = storage.keys()
    if not names:
        print("No cache stores.")
        return 0
    for store in storage:
        marker = "*" if store.name == config.asset_cache.cache_name else " "
        print(f"{marker} {store.name} ({len(store)} entries)")
        for (method, url), response in store.entries():
            print(f"    {method} {url} [{response.status_code}, {len(response.content)} bytes]")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``steamcalc`` command."""

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(_log_level(args.verbose), args.log_file)

    try:
        config = load_config(args.config) if args.config else get_config()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "calc":
        return run_calc(args, config)
    if args.command == "gui":
        return run_gui(config)
    if args.assets_command == "list":
        return list_assets(args, config)
    if not (args.origin or config.asset_cache.origin):
        print("error: no asset origin; pass --origin or set STEAMCALC_ASSET_ORIGIN", file=sys.stderr)
        return 2
    if args.assets_command == "sync":
        return asyncio.run(_sync_assets(args, config))
    return asyncio.run(_get_asset(args, config))


__all__ = ["build_parser", "main"]
