"""``subprocess`` backed implementation of :class:`~liveroot.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that starts external
processes.  Launch failures are caught here and re-raised as
:class:`~liveroot.exceptions.CommandLaunchError` — nothing raw escapes
the infrastructure boundary.
"""

from __future__ import annotations

import logging
import shlex
import subprocess

from liveroot.core.models import CommandResult
from liveroot.exceptions import CommandLaunchError

log = logging.getLogger(__name__)


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` that blocks until the command exits.

    Usage::

        runner = SubprocessRunner()
        result = runner.execute("umount", "/run/cow")

    This class satisfies the :class:`~liveroot.core.protocols.ProcessRunner`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._timeout: float | None = timeout

    def execute(self, command: str, *args: str) -> CommandResult:
        """Run *command* with *args* and capture its output.

        Raises
        ------
        CommandLaunchError
            When the binary is missing, not executable, or does not
            finish within the configured timeout.
        """
        argv = [command, *args]
        log.debug("executing: %s", shlex.join(argv))

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise CommandLaunchError(
                f"Command not found: {command}",
                hint=f"Make sure '{command}' is installed and on PATH.",
            ) from exc
        except PermissionError as exc:
            raise CommandLaunchError(
                f"Permission denied when starting {command}",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandLaunchError(
                f"{command} did not finish within {self._timeout} seconds",
            ) from exc
        except OSError as exc:
            raise CommandLaunchError(f"Can not start {command}: {exc}") from exc

        result = CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if not result.ok:
            log.debug(
                "%s exited with status %d: %s",
                command,
                result.returncode,
                result.stderr.strip(),
            )
        return result
