"""Core / service layer — mount orchestration and pure data transformations.

Rules
-----
* No ``print()`` calls.
* No process spawning — external commands go through
  :class:`~liveroot.core.protocols.ProcessRunner`.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed.
"""

from liveroot.core.branch import build_branch_definition
from liveroot.core.models import CommandResult, MountSettings, ReadOnlyLayerSet, UnionMount
from liveroot.core.mount_service import MountService
from liveroot.core.protocols import ProcessRunner

__all__: list[str] = [
    "CommandResult",
    "MountService",
    "MountSettings",
    "ProcessRunner",
    "ReadOnlyLayerSet",
    "UnionMount",
    "build_branch_definition",
]
