"""``liveroot doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the running system can assemble a layered live root.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path

from liveroot.cli import exit_codes
from liveroot.cli.console import console
from liveroot.core.models import MountSettings
from liveroot.infra.tool_detector import detect_tool, filesystem_supported
from liveroot.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _tool_check(name: str) -> tuple[str, str, str]:
    """Return (label, value, status) for a required binary."""
    status_obj = detect_tool(name)
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return name, path_str, _OK
    return name, "not found", _FAIL


def _filesystem_check(fstype: str) -> tuple[str, str, str]:
    """Return (label, value, status) for a kernel filesystem type."""
    if filesystem_supported(fstype):
        return fstype, "supported by kernel", _OK
    # may still be provided by a module that is not loaded yet
    return fstype, "not listed in /proc/filesystems", _WARN


def _privileges_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the effective user row."""
    if os.geteuid() == 0:
        return "Privileges", "root", _OK
    return "Privileges", f"uid {os.geteuid()}", _WARN


def _scratch_root_check(scratch_root: Path) -> tuple[str, str, str]:
    """Return (label, value, status) for the scratch root row."""
    if not scratch_root.is_dir():
        return "Scratch root", f"{scratch_root} missing", _FAIL
    if not os.access(scratch_root, os.W_OK):
        return "Scratch root", f"{scratch_root} not writable", _WARN
    return "Scratch root", str(scratch_root), _OK


def _liveroot_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the liveroot version row."""
    return "liveroot", __version__, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nliveroot doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<34} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<34} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def collect_checks(settings: MountSettings | None = None) -> list[tuple[str, str, str]]:
    """Run every diagnostic and return the table rows."""
    settings = settings or MountSettings()
    return [
        _liveroot_version_check(),
        _python_version_check(),
        _tool_check("mount"),
        _tool_check("umount"),
        _filesystem_check("squashfs"),
        _filesystem_check(settings.union_type),
        _privileges_check(),
        _scratch_root_check(settings.scratch_root),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: MountSettings | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not
        fail the run.
    """
    checks = collect_checks(settings)
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="liveroot doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
