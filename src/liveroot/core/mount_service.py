"""Core mount service — assembles and tears down the layered root.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~liveroot.core.protocols.ProcessRunner` injected
at construction time (dependency inversion), so every ``mount`` and
``umount`` call can be recorded by a stub instead of touching the real
kernel mount table.

Guarantees
----------
* External commands only through the injected runner.
* Only :class:`~liveroot.exceptions.LiveRootError` subclasses escape.
* No rollback: layers mounted before a failure stay mounted and the
  caller decides how to clean up.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from liveroot.core.branch import build_branch_definition
from liveroot.core.models import CommandResult, MountSettings, ReadOnlyLayerSet, UnionMount
from liveroot.core.protocols import ProcessRunner
from liveroot.exceptions import (
    LiveRootError,
    MountError,
    UnmountError,
    append_root_privileges_suggestion,
)
from liveroot.utils.messages import MOUNT_FAILED, UMOUNT_FAILED
from liveroot.utils.pathutils import create_temp_directory

log = logging.getLogger(__name__)


class MountService:
    """Mounts read-only layers and the union on top of them.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    settings:
        Names and locations to use; defaults to :class:`MountSettings`.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        settings: MountSettings | None = None,
    ) -> None:
        self._runner: ProcessRunner = runner
        self._settings: MountSettings = settings or MountSettings()

    @property
    def settings(self) -> MountSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Read-only layers
    # ------------------------------------------------------------------

    def find_archives(self, system_path: str | os.PathLike[str]) -> list[Path]:
        """Return the archives directly below ``<system_path>/live``, sorted by name."""
        live_dir = Path(system_path) / self._settings.live_directory
        try:
            entries = sorted(os.scandir(live_dir), key=lambda entry: entry.name)
        except FileNotFoundError:
            log.warning("no %s directory below %s", self._settings.live_directory, system_path)
            return []
        except OSError as exc:
            raise MountError(f"Can not list {live_dir}: {exc}") from exc

        return [
            Path(entry.path)
            for entry in entries
            if entry.name.endswith(self._settings.archive_extension) and entry.is_file()
        ]

    def mount_read_only_layers(
        self,
        system_path: str | os.PathLike[str],
    ) -> ReadOnlyLayerSet:
        """Loop-mount every archive of *system_path* read-only.

        All mount points live in one fresh temporary directory and are
        named ``ro1``, ``ro2`` … in discovery order.

        Raises
        ------
        MountError
            If a mount point cannot be created or a ``mount`` call fails.
            Archives mounted before the failure remain mounted.
        """
        archives = self.find_archives(system_path)

        try:
            temp_root = Path(
                tempfile.mkdtemp(prefix="liveroot-", dir=self._settings.temp_root),
            )
        except OSError as exc:
            raise MountError(f"Can not create a temporary directory: {exc}") from exc

        mount_points: list[Path] = []
        for number, archive in enumerate(archives, start=1):
            mount_point = temp_root / f"{self._settings.layer_prefix}{number}"
            try:
                mount_point.mkdir()
            except OSError as exc:
                raise MountError(f"Can not create {mount_point}: {exc}") from exc

            result = self._execute("mount", "-o", "loop", str(archive), str(mount_point))
            if not result.ok:
                self._raise_mount_failed(archive, mount_point, result)
            log.info("mounted %s read-only on %s", archive, mount_point)
            mount_points.append(mount_point)

        return ReadOnlyLayerSet(mount_points=tuple(mount_points), temp_root=temp_root)

    def mount_all_squashfs(self, system_path: str | os.PathLike[str]) -> list[Path]:
        """Same as :meth:`mount_read_only_layers` but returns a plain list."""
        return list(self.mount_read_only_layers(system_path))

    # ------------------------------------------------------------------
    # Union
    # ------------------------------------------------------------------

    @staticmethod
    def build_branch_definition(
        read_write_mount_point: str | os.PathLike[str],
        read_only_mount_points: Iterable[str | os.PathLike[str]],
    ) -> str:
        """See :func:`liveroot.core.branch.build_branch_definition`."""
        return build_branch_definition(read_write_mount_point, read_only_mount_points)

    def mount_union_detailed(self, branch_definition: str) -> UnionMount:
        """Mount a union described by *branch_definition*.

        The copy-on-write directory and the index file are placed below
        the scratch root, which must not be part of a union itself.  The
        index file is created to reserve a unique name and unlinked
        right away; the union driver creates its own file at that path.

        Raises
        ------
        MountError
            If the scratch state cannot be prepared or ``mount`` fails.
        """
        scratch_root = self._settings.scratch_root
        try:
            fd, index_name = tempfile.mkstemp(
                prefix=self._settings.index_prefix,
                dir=scratch_root,
            )
            os.close(fd)
            os.unlink(index_name)
        except OSError as exc:
            raise MountError(
                f"Can not create an index file in {scratch_root}: {exc}",
            ) from exc
        index_path = Path(index_name)

        cow_dir = create_temp_directory(scratch_root, self._settings.cow_basename)
        result = self._execute(
            "mount",
            "-t",
            self._settings.union_type,
            "-o",
            f"{self._settings.index_option}={index_path}",
            "-o",
            branch_definition,
            "none",
            str(cow_dir),
        )
        if not result.ok:
            self._raise_mount_failed(f"{self._settings.union_type} union", cow_dir, result)
        log.info("mounted %s union on %s", self._settings.union_type, cow_dir)

        return UnionMount(
            mount_point=cow_dir,
            index_path=index_path,
            branch_definition=branch_definition,
        )

    def mount_union(self, branch_definition: str) -> Path:
        """Mount the union and return its root (the copy-on-write directory)."""
        return self.mount_union_detailed(branch_definition).mount_point

    def mount_aufs(self, branch_definition: str) -> Path:
        """Alias of :meth:`mount_union`."""
        return self.mount_union(branch_definition)

    def mount_live_system(
        self,
        system_path: str | os.PathLike[str],
        read_write_mount_point: str | os.PathLike[str],
    ) -> UnionMount:
        """Mount all layers of *system_path* and union them with *read_write_mount_point*."""
        layers = self.mount_read_only_layers(system_path)
        branch_definition = build_branch_definition(read_write_mount_point, layers)
        union = self.mount_union_detailed(branch_definition)
        return UnionMount(
            mount_point=union.mount_point,
            index_path=union.index_path,
            branch_definition=union.branch_definition,
            layers=layers,
        )

    # ------------------------------------------------------------------
    # Unmount
    # ------------------------------------------------------------------

    def unmount(self, device_or_mount_point: str | os.PathLike[str]) -> None:
        """Unmount a device or mount point.

        Raises
        ------
        UnmountError
            If ``umount`` exits with a non-zero status.  Not retried.
        """
        target = os.fspath(device_or_mount_point)
        result = self._execute("umount", target)
        if not result.ok:
            message = UMOUNT_FAILED.format(target=target)
            log.error(message)
            raise UnmountError(message, hint=result.stderr.strip() or None)
        log.info("unmounted %s", target)

    def umount(self, device_or_mount_point: str | os.PathLike[str]) -> None:
        """Alias of :meth:`unmount`."""
        self.unmount(device_or_mount_point)

    def unmount_layers(self, layers: ReadOnlyLayerSet) -> None:
        """Unmount every layer of *layers*, last mounted first.

        Stops at the first failure.
        """
        for mount_point in reversed(layers.mount_points):
            self.unmount(mount_point)

    # ------------------------------------------------------------------
    # Runner delegation (safe boundary)
    # ------------------------------------------------------------------

    def _execute(self, command: str, *args: str) -> CommandResult:
        """Call the runner and ensure only our exceptions escape."""
        try:
            return self._runner.execute(command, *args)
        except LiveRootError:
            raise
        except Exception as exc:
            raise MountError(
                f"Unexpected error while running {command}: {exc}",
            ) from exc

    @staticmethod
    def _raise_mount_failed(
        source: str | os.PathLike[str],
        target: Path,
        result: CommandResult,
    ) -> None:
        message = MOUNT_FAILED.format(
            source=os.fspath(source),
            target=target,
            status=result.returncode,
        )
        log.error(message)
        raise MountError(
            message,
            hint=append_root_privileges_suggestion(
                result.stderr.strip() or "mount reported no further details.",
            ),
        )
