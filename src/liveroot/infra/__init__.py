"""Infrastructure layer — external system integration.

This layer wraps all interaction with external processes and the
running kernel.  Every raw OS-level exception must be caught here and
re-raised as a :class:`~liveroot.exceptions.LiveRootError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from liveroot.infra.process_runner import SubprocessRunner
from liveroot.infra.tool_detector import (
    ToolStatus,
    detect_tool,
    filesystem_supported,
    require_tool,
)

__all__: list[str] = [
    "SubprocessRunner",
    "ToolStatus",
    "detect_tool",
    "filesystem_supported",
    "require_tool",
]
