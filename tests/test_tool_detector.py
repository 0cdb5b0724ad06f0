"""Tests for system tool detection (infra/tool_detector.py).

All tests mock :func:`shutil.which` and use a fake
``/proc/filesystems`` in ``tmp_path`` — no system dependency.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from liveroot.exceptions import ToolNotFoundError
from liveroot.infra.tool_detector import (
    ToolStatus,
    detect_tool,
    filesystem_supported,
    install_commands_for,
    require_tool,
    supported_filesystems,
)

_PROC_FILESYSTEMS = """\
nodev\tsysfs
nodev\ttmpfs
nodev\tproc
\text4
\tsquashfs
nodev\taufs
"""


@pytest.fixture()
def proc_filesystems(tmp_path: Path) -> Path:
    path = tmp_path / "filesystems"
    path.write_text(_PROC_FILESYSTEMS, encoding="ascii")
    return path


# ---------------------------------------------------------------------------
# detect_tool / require_tool
# ---------------------------------------------------------------------------

class TestDetectTool:
    @patch("liveroot.infra.tool_detector.shutil.which", return_value="/usr/bin/mount")
    def test_found(self, _mock_which: object) -> None:
        status = detect_tool("mount")
        assert status.found is True
        assert status.name == "mount"
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch("liveroot.infra.tool_detector.shutil.which", return_value=None)
    def test_not_found(self, _mock_which: object) -> None:
        status = detect_tool("umount")
        assert status.found is False
        assert status.path is None
        assert any("mount" in cmd for cmd in status.install_commands)


class TestRequireTool:
    @patch("liveroot.infra.tool_detector.shutil.which", return_value="/usr/bin/mount")
    def test_found_returns_path(self, _mock_which: object) -> None:
        assert isinstance(require_tool("mount"), Path)

    @patch("liveroot.infra.tool_detector.shutil.which", return_value=None)
    def test_missing_raises_with_hint(self, _mock_which: object) -> None:
        with pytest.raises(ToolNotFoundError, match="not installed") as exc_info:
            require_tool("unsquashfs")
        assert exc_info.value.hint is not None
        assert "squashfs-tools" in exc_info.value.hint


class TestInstallCommands:
    def test_package_mapping(self) -> None:
        assert "sudo apt install squashfs-tools" in install_commands_for("mksquashfs")

    def test_unknown_tool_uses_own_name(self) -> None:
        assert "sudo pacman -S losetup" in install_commands_for("losetup")


# ---------------------------------------------------------------------------
# Kernel filesystem support
# ---------------------------------------------------------------------------

class TestFilesystemSupport:
    def test_parses_nodev_and_plain_lines(self, proc_filesystems: Path) -> None:
        names = supported_filesystems(proc_filesystems)
        assert {"sysfs", "tmpfs", "proc", "ext4", "squashfs", "aufs"} == names

    def test_supported(self, proc_filesystems: Path) -> None:
        assert filesystem_supported("squashfs", proc_filesystems) is True
        assert filesystem_supported("aufs", proc_filesystems) is True

    def test_not_supported(self, proc_filesystems: Path) -> None:
        assert filesystem_supported("overlay", proc_filesystems) is False

    def test_nodev_is_not_a_filesystem(self, proc_filesystems: Path) -> None:
        assert filesystem_supported("nodev", proc_filesystems) is False

    def test_unreadable_file(self, tmp_path: Path) -> None:
        assert supported_filesystems(tmp_path / "missing") == frozenset()


class TestToolStatus:
    def test_frozen(self) -> None:
        status = ToolStatus(name="mount", found=True, path=None, install_commands=())
        with pytest.raises(AttributeError):
            status.found = False  # type: ignore[misc]
