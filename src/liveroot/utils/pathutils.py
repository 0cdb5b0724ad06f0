"""Symlink-aware path helpers.

These helpers tear down scratch directories that may contain symlinks
pointing anywhere on the system.  Deletion therefore never descends
through a symlink: only the link entry itself is removed.

Rules
-----
* Only :mod:`os` level primitives — no ``shutil.rmtree``.
* Failures to delete are logged and reported through the return value.
* Canonicalization failures are raised as
  :class:`~liveroot.exceptions.PathResolutionError`.
"""

from __future__ import annotations

import itertools
import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from liveroot.exceptions import PathResolutionError
from liveroot.utils.messages import CREATE_DIR_FAILED

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Symlink detection
# ---------------------------------------------------------------------------

def is_symlink(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` when the final segment of *path* is a symlink.

    Only the parent directory is canonicalized; the final segment is
    appended as-is and compared with the canonical form of the whole
    path.  The two differ exactly when the last segment is a link.

    Raises
    ------
    PathResolutionError
        When the parent directory cannot be canonicalized.
    """
    absolute = Path(os.path.abspath(path))
    if absolute.parent == absolute:
        # filesystem root
        return False

    try:
        expected = absolute.parent.resolve(strict=True) / absolute.name
        actual = Path(os.path.realpath(absolute))
    except (OSError, RuntimeError) as exc:
        raise PathResolutionError(
            f"Can not canonicalize {absolute}: {exc}",
        ) from exc
    return expected != actual


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------

def remove_entry(path: str | os.PathLike[str]) -> bool:
    """Remove a single directory entry without following symlinks.

    Files and symlinks are unlinked, directories must already be empty.
    Returns ``False`` (and logs) when the removal fails.
    """
    try:
        st = os.lstat(path)
        if stat.S_ISDIR(st.st_mode):
            os.rmdir(path)
        else:
            os.unlink(path)
    except OSError as exc:
        log.warning("can not delete %s: %s", path, exc)
        return False
    return True


def recursive_delete(path: str | os.PathLike[str], remove_self: bool = True) -> bool:
    """Recursively delete *path*.

    Parameters
    ----------
    path:
        File, directory or symlink to delete.
    remove_self:
        When ``False`` only the contents of the directory are removed
        and *path* itself is kept.  Nested entries are always removed.

    Returns
    -------
    bool
        ``True`` if *path* was deleted or its deletion was skipped,
        ``False`` if the final deletion failed.
    """
    target = Path(path)
    # never descend into a symlinked directory
    if target.is_dir() and not is_symlink(target):
        try:
            entries = [entry.path for entry in os.scandir(target)]
        except OSError as exc:
            log.warning("can not list %s: %s", target, exc)
            entries = []
        for entry in entries:
            recursive_delete(entry, True)

    if not remove_self:
        return True
    return remove_entry(target)


# ---------------------------------------------------------------------------
# Temporary directories
# ---------------------------------------------------------------------------

def _candidate_names(parent: Path, base_name: str) -> Iterator[Path]:
    yield parent / base_name
    for i in itertools.count(1):
        yield parent / f"{base_name}{i}"


def create_temp_directory(parent: str | os.PathLike[str], base_name: str) -> Path:
    """Create and return the first free directory ``parent/base_name[N]``.

    Candidates are ``base_name``, ``base_name1``, ``base_name2`` … and
    each one is claimed with an exclusive :func:`os.mkdir`, so two
    concurrent callers never receive the same directory.  Missing
    parents are created.

    A hard I/O failure is logged and the attempted path is returned
    anyway; the caller will notice when it tries to use it.
    """
    parent_dir = Path(parent)
    try:
        parent_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        candidate = parent_dir / base_name
        log.warning(CREATE_DIR_FAILED.format(path=candidate, reason=exc))
        return candidate

    for candidate in _candidate_names(parent_dir, base_name):
        try:
            candidate.mkdir()
        except FileExistsError:
            continue
        except OSError as exc:
            log.warning(CREATE_DIR_FAILED.format(path=candidate, reason=exc))
        return candidate

    raise AssertionError("unreachable")  # pragma: no cover
