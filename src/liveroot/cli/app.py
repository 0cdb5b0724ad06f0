"""CLI application entry point and command routing for liveroot.

This module is the **sole error boundary** for the entire application.
It catches :class:`~liveroot.exceptions.LiveRootError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Results meant for scripts (the union root, sizes) go to stdout; all
  decoration goes to the stderr console.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from liveroot.cli import exit_codes
from liveroot.cli.console import configure_logging, console
from liveroot.core.models import MountSettings
from liveroot.exceptions import LiveRootError
from liveroot.version import __version__

if TYPE_CHECKING:
    from liveroot.core.mount_service import MountService


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands:
    * ``liveroot mount <system-path> --writable <dir>``
    * ``liveroot umount <target>...``
    * ``liveroot clean <path>``
    * ``liveroot usage <path>``
    * ``liveroot doctor``
    """
    defaults = MountSettings()

    union_options = argparse.ArgumentParser(add_help=False)
    union_options.add_argument(
        "--scratch-root",
        type=Path,
        default=defaults.scratch_root,
        help="In-memory directory for copy-on-write and index files "
        "(default: %(default)s).",
    )
    union_options.add_argument(
        "--union-type",
        default=defaults.union_type,
        help="Union filesystem type passed to mount -t (default: %(default)s).",
    )
    union_options.add_argument(
        "--index-option",
        default=defaults.index_option,
        help="Mount option naming the union index file (default: %(default)s).",
    )

    parser = argparse.ArgumentParser(
        prog="liveroot",
        description="Assemble a layered root filesystem for a live system image.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every executed command.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    mount = subparsers.add_parser(
        "mount",
        parents=[union_options],
        help="Mount all squashfs layers and the union on top of them.",
    )
    mount.add_argument("system_path", type=Path, help="Root of the live system medium.")
    mount.add_argument(
        "-w",
        "--writable",
        type=Path,
        required=True,
        help="Mount point of the writable branch.",
    )
    mount.add_argument(
        "--archive-extension",
        default=defaults.archive_extension,
        help="Suffix of the layer archives (default: %(default)s).",
    )

    umount = subparsers.add_parser("umount", help="Unmount devices or mount points.")
    umount.add_argument("targets", nargs="+", help="Device or mount point.")

    clean = subparsers.add_parser(
        "clean",
        help="Delete a scratch directory without following symlinks.",
    )
    clean.add_argument("path", type=Path)
    clean.add_argument(
        "--keep-root",
        action="store_true",
        help="Only delete the contents of PATH.",
    )
    clean.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    usage = subparsers.add_parser("usage", help="Show the data volume below a path.")
    usage.add_argument("path", type=Path)
    usage.add_argument(
        "--digits",
        type=int,
        default=1,
        help="Maximum number of fraction digits (default: %(default)s).",
    )

    subparsers.add_parser(
        "doctor",
        parents=[union_options],
        help="Check whether this system can mount a live root.",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> MountSettings:
    """Overlay the parsed command-line options onto the default settings."""
    overrides = {
        field.name: getattr(args, field.name)
        for field in dataclasses.fields(MountSettings)
        if getattr(args, field.name, None) is not None
    }
    return MountSettings(**overrides)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _mount_service(settings: MountSettings) -> MountService:
    """Wire the service to the real subprocess runner."""
    from liveroot.core.mount_service import MountService
    from liveroot.infra.process_runner import SubprocessRunner

    return MountService(SubprocessRunner(), settings)


def _handle_mount(args: argparse.Namespace) -> int:
    """Mount the layers of a live system and print the union root."""
    service = _mount_service(_settings_from_args(args))
    union = service.mount_live_system(args.system_path, args.writable)

    layers = union.layers.mount_points if union.layers is not None else ()
    if not layers:
        console.print("[yellow]No read-only layers found.[/yellow]")
    for number, mount_point in enumerate(layers, start=1):
        console.print(f"[dim]layer {number}:[/dim] {mount_point}")
    console.print(f"[bold green]Union mounted.[/bold green]  {union.branch_definition}")

    print(union.mount_point)
    return exit_codes.SUCCESS


def _handle_umount(args: argparse.Namespace) -> int:
    """Unmount every target in order, stopping at the first failure."""
    service = _mount_service(MountSettings())
    for target in args.targets:
        service.unmount(target)
        console.print(f"[green]Unmounted[/green] {target}")
    return exit_codes.SUCCESS


def _handle_clean(args: argparse.Namespace) -> int:
    """Delete a scratch directory after confirmation."""
    from liveroot.cli.prompt import confirm_deletion
    from liveroot.utils.pathutils import recursive_delete
    from liveroot.utils.units import tree_size

    path: Path = args.path
    if not path.exists() and not path.is_symlink():
        raise LiveRootError(f"{path} does not exist.")

    if not args.yes:
        try:
            size: int | None = tree_size(path)
        except OSError:
            size = None
        if not confirm_deletion(path, size, keep_root=args.keep_root):
            console.print("[yellow]Nothing deleted.[/yellow]")
            return exit_codes.CANCELLED

    if not recursive_delete(path, remove_self=not args.keep_root):
        console.print(f"[bold red]Could not delete[/bold red] {path}")
        return exit_codes.GENERAL_ERROR
    console.print(f"[green]Deleted[/green] {path}")
    return exit_codes.SUCCESS


def _handle_usage(args: argparse.Namespace) -> int:
    """Print the formatted data volume below a path."""
    from liveroot.utils.units import format_data_volume, tree_size

    try:
        size = tree_size(args.path)
    except OSError as exc:
        raise LiveRootError(f"Can not measure {args.path}: {exc}") from exc
    print(format_data_volume(size, args.digits))
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from liveroot.cli.doctor import run_doctor

    return run_doctor(_settings_from_args(args))


_HANDLERS = {
    "mount": _handle_mount,
    "umount": _handle_umount,
    "clean": _handle_clean,
    "usage": _handle_usage,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the liveroot CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except LiveRootError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
