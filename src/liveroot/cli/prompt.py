"""Interactive confirmation UI for destructive CLI commands.

This module is responsible for:

* Rendering a Rich table describing what is about to be deleted.
* Asking the user for confirmation via questionary.
* Returning the answer as a ``bool``.

All display-related logic lives here — no deletion, no mounting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from liveroot.cli.console import console
from liveroot.exceptions import EnvironmentError
from liveroot.utils.units import format_data_volume


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for the deletion summary."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

def _describe_scope(keep_root: bool) -> str:
    """Human-readable description of what a clean removes."""
    if keep_root:
        return "contents only"
    return "directory and contents"


def _build_question(path: Path, keep_root: bool) -> str:
    if keep_root:
        return f"Delete everything inside {path}?"
    return f"Delete {path}?"


def _display_summary(path: Path, size: int | None, keep_root: bool) -> None:
    """Print a Rich table summarising the pending deletion."""
    table_class = _import_rich_table()

    table = table_class(
        title="Pending deletion",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Path", justify="left", min_width=20)
    table.add_column("Scope", justify="left", min_width=10)
    table.add_column("Size", justify="right", min_width=10)
    table.add_row(
        str(path),
        _describe_scope(keep_root),
        format_data_volume(size) if size is not None else "Unknown",
    )

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def confirm_deletion(path: Path, size: int | None, *, keep_root: bool = False) -> bool:
    """Show what would be deleted and ask the user to confirm.

    Returns
    -------
    bool
        ``True`` only when the user explicitly answered yes.  Ctrl+C or
        Esc (questionary returns ``None``) count as "no".
    """
    questionary = _import_questionary()

    _display_summary(path, size, keep_root)

    answer: bool | None = questionary.confirm(
        _build_question(path, keep_root),
        default=False,
    ).ask()
    return bool(answer)
