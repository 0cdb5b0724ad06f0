"""Branch definition builder for union mounts.

The result is handed verbatim to the union driver as a mount option,
e.g. ``br=/run/cow:/tmp/liveroot-x/ro1:/tmp/liveroot-x/ro2``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

BRANCH_PREFIX: str = "br="
BRANCH_DELIMITER: str = ":"


def build_branch_definition(
    read_write_mount_point: str | os.PathLike[str],
    read_only_mount_points: Iterable[str | os.PathLike[str]],
) -> str:
    """Return the branch definition for one writable and N read-only branches.

    The writable branch always comes first; the read-only branches keep
    the order of *read_only_mount_points*.
    """
    parts = [BRANCH_PREFIX + os.fspath(read_write_mount_point)]
    parts.extend(os.fspath(mount_point) for mount_point in read_only_mount_points)
    return BRANCH_DELIMITER.join(parts)
