"""Infrastructure: detection of the system tools a live mount needs.

This module locates ``mount``/``umount`` on the system PATH, checks
whether the running kernel knows a filesystem type, and provides
distribution-specific installation guidance when something is missing.

Rules
-----
* Binary detection via :func:`shutil.which` only — no subprocess.
* Kernel support is read from ``/proc/filesystems``.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from liveroot.exceptions import ToolNotFoundError

PROC_FILESYSTEMS: Path = Path("/proc/filesystems")

_PACKAGES: dict[str, str] = {
    "mount": "mount",
    "umount": "mount",
    "mksquashfs": "squashfs-tools",
    "unsquashfs": "squashfs-tools",
}


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a binary detection probe.

    Attributes
    ----------
    name : str
        Name of the probed binary.
    found : bool
        Whether the binary was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the binary.  Empty when
        it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system PATH for *name*.

    Returns a :class:`ToolStatus` regardless of whether the binary is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)
    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=install_commands_for(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines = [f"Install {name} using one of:"]
        hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines),
        )
    return status.path


def supported_filesystems(proc_filesystems: Path = PROC_FILESYSTEMS) -> frozenset[str]:
    """Return the filesystem types registered with the running kernel.

    Each line of ``/proc/filesystems`` holds an optional ``nodev`` flag
    followed by the type name.  An unreadable file yields an empty set.
    """
    try:
        lines = proc_filesystems.read_text(encoding="ascii").splitlines()
    except OSError:
        return frozenset()

    names: set[str] = set()
    for line in lines:
        fields = line.split()
        if fields:
            names.add(fields[-1])
    return frozenset(names)


def filesystem_supported(fstype: str, proc_filesystems: Path = PROC_FILESYSTEMS) -> bool:
    """Return ``True`` when the kernel lists *fstype*."""
    return fstype in supported_filesystems(proc_filesystems)


# ---------------------------------------------------------------------------
# Install guidance
# ---------------------------------------------------------------------------

def install_commands_for(name: str) -> tuple[str, ...]:
    """Return install commands for the package shipping *name*."""
    package = _PACKAGES.get(name, name)
    return (
        f"sudo apt install {package}",
        f"sudo dnf install {package}",
        f"sudo pacman -S {package}",
    )
