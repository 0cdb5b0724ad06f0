"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute a recording stub for the
real ``mount``/``umount`` binaries.
"""

from __future__ import annotations

from typing import Protocol

from liveroot.core.models import CommandResult


class ProcessRunner(Protocol):
    """Contract for external command execution backends.

    Any object that implements :meth:`execute` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def execute(self, command: str, *args: str) -> CommandResult:
        """Run *command* with *args*, wait for it and return its result.

        A non-zero exit status is NOT an error at this level; callers
        inspect :attr:`CommandResult.returncode` themselves.

        Raises
        ------
        CommandLaunchError
            When the command cannot be started at all (not found,
            permission denied).
        """
        ...  # pragma: no cover
