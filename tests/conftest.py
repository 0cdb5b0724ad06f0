"""Shared pytest fixtures and configuration for the liveroot test suite.

Guidelines
----------
* No test touches the real kernel mount table.
* ``mount``/``umount`` are replaced by :class:`RecordingRunner`.
* Filesystem tests work inside ``tmp_path`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from liveroot.core.models import CommandResult, MountSettings


class RecordingRunner:
    """:class:`ProcessRunner` stub that records every argv.

    *returncodes* maps a command name to the exit status it reports;
    unknown commands succeed.  *fail_on_call* makes the N-th call
    (1-based) fail with status 32 regardless of the command.
    """

    def __init__(
        self,
        returncodes: dict[str, int] | None = None,
        *,
        fail_on_call: int | None = None,
        stderr: str = "",
    ) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._returncodes = returncodes or {}
        self._fail_on_call = fail_on_call
        self._stderr = stderr

    def execute(self, command: str, *args: str) -> CommandResult:
        self.calls.append((command, *args))
        if self._fail_on_call is not None and len(self.calls) == self._fail_on_call:
            return CommandResult(returncode=32, stderr=self._stderr)
        code = self._returncodes.get(command, 0)
        return CommandResult(returncode=code, stderr=self._stderr if code else "")


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def settings(tmp_path: Path) -> MountSettings:
    """Settings whose scratch and temp roots live inside ``tmp_path``."""
    scratch_root = tmp_path / "run"
    scratch_root.mkdir()
    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    return MountSettings(scratch_root=scratch_root, temp_root=temp_root)


@pytest.fixture()
def live_system(tmp_path: Path) -> Path:
    """A fake live medium with two squashfs layers and unrelated files."""
    system = tmp_path / "medium"
    live = system / "live"
    live.mkdir(parents=True)
    (live / "a.squashfs").write_bytes(b"hsqs")
    (live / "b.squashfs").write_bytes(b"hsqs")
    (live / "vmlinuz").write_bytes(b"kernel")
    (live / "filesystem.packages").write_text("bash\n")
    return system


@pytest.fixture(autouse=True)
def _reset_liveroot_logger() -> Iterator[None]:
    """Undo :func:`configure_logging` side effects between tests."""
    logger = logging.getLogger("liveroot")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
