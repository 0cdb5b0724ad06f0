"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
defaults, and collection behaviour.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from liveroot.core.models import CommandResult, MountSettings, ReadOnlyLayerSet, UnionMount


class TestCommandResult:
    def test_ok(self) -> None:
        assert CommandResult(returncode=0).ok is True
        assert CommandResult(returncode=1).ok is False

    def test_output_defaults_empty(self) -> None:
        result = CommandResult(returncode=0)
        assert result.stdout == ""
        assert result.stderr == ""

    def test_frozen(self) -> None:
        result = CommandResult(returncode=0)
        with pytest.raises(AttributeError):
            result.returncode = 1  # type: ignore[misc]


class TestReadOnlyLayerSet:
    def test_empty_is_falsy(self) -> None:
        layers = ReadOnlyLayerSet(mount_points=())
        assert not layers
        assert len(layers) == 0
        assert list(layers) == []

    def test_iteration_keeps_order(self) -> None:
        points = (Path("/t/ro2"), Path("/t/ro1"), Path("/t/ro3"))
        layers = ReadOnlyLayerSet(mount_points=points)
        assert bool(layers) is True
        assert tuple(layers) == points

    def test_frozen(self) -> None:
        layers = ReadOnlyLayerSet(mount_points=(Path("/t/ro1"),))
        with pytest.raises(AttributeError):
            layers.mount_points = ()  # type: ignore[misc]

    def test_equality(self) -> None:
        a = ReadOnlyLayerSet(mount_points=(Path("/t/ro1"),), temp_root=Path("/t"))
        b = ReadOnlyLayerSet(mount_points=(Path("/t/ro1"),), temp_root=Path("/t"))
        assert a == b


class TestUnionMount:
    def test_layers_optional(self) -> None:
        union = UnionMount(
            mount_point=Path("/run/cow"),
            index_path=Path("/run/.aufs.xino123"),
            branch_definition="br=/rw",
        )
        assert union.layers is None


class TestMountSettings:
    def test_defaults(self) -> None:
        settings = MountSettings()
        assert settings.scratch_root == Path("/run")
        assert settings.union_type == "aufs"
        assert settings.index_option == "xino"
        assert settings.archive_extension == ".squashfs"
        assert settings.live_directory == "live"
        assert settings.cow_basename == "cow"
        assert settings.layer_prefix == "ro"
        assert settings.temp_root is None

    def test_frozen(self) -> None:
        settings = MountSettings()
        with pytest.raises(AttributeError):
            settings.union_type = "overlay"  # type: ignore[misc]
