#!/usr/bin/env python3
"""
Package smoke test for AppLogger and the ETABS API

Checks that the logger works, that ETABSv1.dll and its type library are
installed, then builds the steel deck model (this launches ETABS).
"""

import argparse
import os
import sys
import traceback
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .com_runtime import ComRuntime
from .config import API_DLL_NAME, API_TYPELIB_NAME, INSTALL_DIRECTORY
from .etabs_connect import create_steel_deck_model
from .logger import AppLogger


def run_checks(install_dir: Optional[str] = None, runtime=None, console: Optional[Console] = None) -> int:
    console = console or Console()
    runtime = runtime or ComRuntime()
    install_dir = install_dir or INSTALL_DIRECTORY

    console.print("[bold]=== AppLogger Package Test ===[/bold]")
    console.print()

    # Test 1: logger
    console.print("[Test 1] Checking AppLogger availability...", markup=False)
    try:
        app_logger = AppLogger()
        app_logger.log("Logger created successfully!")
        console.print("[green]✓ AppLogger works correctly[/green]")
    except Exception as e:
        console.print(f"[red]✗ AppLogger failed: {escape(str(e))}[/red]")
        return 1

    console.print()

    # Test 2: ETABSv1.dll
    console.print(f"[Test 2] Checking {API_DLL_NAME} availability...", markup=False)
    dll_path = os.path.join(install_dir, API_DLL_NAME)
    if os.path.isfile(dll_path):
        stat = os.stat(dll_path)
        console.print(f"[green]✓ {API_DLL_NAME} found at: {escape(dll_path)}[/green]")
        console.print(f"  Size: {stat.st_size:,} bytes")
        console.print(f"  Modified: {datetime.fromtimestamp(stat.st_mtime):%Y-%m-%d %H:%M:%S}")
    else:
        console.print(f"[red]✗ {API_DLL_NAME} NOT found at: {escape(dll_path)}[/red]")
        console.print("  This will cause runtime errors when calling ETABS methods.")
        return 1

    console.print()

    # Test 3: type library
    console.print("[Test 3] Attempting to load ETABSv1 type library...", markup=False)
    tlb_path = os.path.join(install_dir, API_TYPELIB_NAME)
    try:
        type_names = runtime.type_library_names(tlb_path)
        console.print(f"[green]✓ Successfully loaded: {escape(tlb_path)} ({len(type_names)} types)[/green]")
        if "Helper" in type_names:
            console.print("[green]✓ ETABSv1.Helper type found[/green]")
    except Exception as e:
        console.print(f"[red]✗ Failed to load ETABSv1: {escape(str(e))}[/red]")
        return 1

    console.print()

    # Test 4: full model run
    console.print("[Test 4] Testing ETABS API functionality...", markup=False)
    console.print("Creating steel deck model (this will launch ETABS)...")
    console.print()

    try:
        create_steel_deck_model(runtime=runtime)
        console.print()
        console.print("[green]✓ ETABS model created successfully![/green]")
    except Exception as e:
        console.print(f"[red]✗ ETABS operation failed: {escape(str(e))}[/red]")
        console.print(f"  Type: {type(e).__name__}", markup=False)
        inner = e.__cause__ or e.__context__
        if inner is not None:
            console.print(f"  Inner: {inner}", markup=False)
        console.print()
        console.print("Stack trace:")
        console.print("".join(traceback.format_tb(e.__traceback__)), markup=False)
        return 1

    console.print()
    console.print("[bold green]=== All Tests Passed! ===[/bold green]")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Smoke test AppLogger and the ETABS API")
    parser.add_argument(
        "--install-dir",
        default=INSTALL_DIRECTORY,
        help="ETABS install directory holding ETABSv1.dll and ETABSv1.tlb"
    )
    args = parser.parse_args(argv)
    return run_checks(install_dir=args.install_dir)


if __name__ == "__main__":
    sys.exit(main())
