"""Custom exception hierarchy for liveroot.

All exceptions that cross layer boundaries must inherit from
:class:`LiveRootError`.  Raw ``OSError`` and ``subprocess`` failures
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
LiveRootError
├── CommandLaunchError
├── MountError
├── UnmountError
├── PathResolutionError
├── ToolNotFoundError
└── EnvironmentError
    └── EnvironmentCheckError
"""

from __future__ import annotations


class LiveRootError(Exception):
    """Base exception for all liveroot errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- External commands -----------------------------------------------------

class CommandLaunchError(LiveRootError):
    """Raised when an external command cannot be started at all."""


class MountError(LiveRootError):
    """Raised when a ``mount`` invocation exits with a non-zero status."""


class UnmountError(LiveRootError):
    """Raised when an ``umount`` invocation exits with a non-zero status."""


# --- Filesystem ------------------------------------------------------------

class PathResolutionError(LiveRootError):
    """Raised when a path cannot be canonicalized."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(LiveRootError):
    """Raised when a required runtime dependency is not available."""


class ToolNotFoundError(LiveRootError):
    """Raised when a required system binary cannot be located on PATH."""


class EnvironmentCheckError(EnvironmentError):
    """Raised when a required environment precondition is not met."""


def append_root_privileges_suggestion(hint: str) -> str:
    """Append guidance about root privileges to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Mounting usually requires root:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    sudo liveroot ...",
        )
    )
