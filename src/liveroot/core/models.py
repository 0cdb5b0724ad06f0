"""Domain models for liveroot.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and must remain pure
across the entire lifecycle.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Process execution result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a single external command invocation."""

    returncode: int
    """Exit status reported by the command."""

    stdout: str = ""
    """Captured standard output."""

    stderr: str = ""
    """Captured standard error."""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Read-only layers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ReadOnlyLayerSet:
    """Ordered, immutable collection of read-only mount points.

    The order is the discovery order of the archives and decides the
    precedence of the layers inside the union.
    """

    mount_points: tuple[Path, ...]

    temp_root: Path | None = None
    """Shared directory holding the per-archive mount points."""

    def __len__(self) -> int:
        return len(self.mount_points)

    def __bool__(self) -> bool:
        return len(self.mount_points) > 0

    def __iter__(self) -> Iterator[Path]:
        return iter(self.mount_points)


# ---------------------------------------------------------------------------
# Union mount
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UnionMount:
    """A completed union mount and the scratch state backing it."""

    mount_point: Path
    """Copy-on-write directory the union is mounted on (the union root)."""

    index_path: Path
    """Path handed to the union driver for its inode index file."""

    branch_definition: str
    """Branch string passed to the mount call."""

    layers: ReadOnlyLayerSet | None = None
    """Read-only layers mounted for this union, when mounted together."""


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MountSettings:
    """Tunable names and locations used by :class:`MountService`."""

    scratch_root: Path = Path("/run")
    """In-memory directory that is never part of a union itself."""

    union_type: str = "aufs"
    index_option: str = "xino"
    archive_extension: str = ".squashfs"
    live_directory: str = "live"
    index_prefix: str = ".aufs.xino"
    cow_basename: str = "cow"
    layer_prefix: str = "ro"

    temp_root: Path | None = None
    """Parent of the read-only batch directory; ``None`` uses the system default."""
