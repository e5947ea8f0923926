"""Tests for the install pipeline against an in-memory release index."""

import os
import subprocess
from pathlib import Path

import pytest

from conftest import PLATFORM, FakeReleaseIndex, make_tarball, vere_tarball
from uvm_builtin.errors import (
    AssetNotFoundError,
    DownloadError,
    ExtractionError,
    InstallError,
    NetworkError,
    PlatformUnsupportedError,
)
from uvm_builtin.install import Installer, detect_platform, select_asset
from uvm_builtin.install import installer as installer_module
from uvm_builtin.release_index import ReleaseAsset
from uvm_builtin.versions import VersionManager


def _installer(manager: VersionManager, index: FakeReleaseIndex, **kwargs) -> Installer:
    kwargs.setdefault("platform_id", PLATFORM)
    return Installer(manager, index, repo="urbit/vere", **kwargs)


def _versions_entries(manager: VersionManager) -> list[str]:
    return sorted(p.name for p in manager.layout.versions_dir.iterdir())


def test_install_publishes_version_with_entry_points(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", vere_tarball("vere-v3.4"))

    result = _installer(manager, index).install("vere-v3.4")

    assert not result.already_installed
    assert result.warnings == []
    assert result.asset is not None and result.asset.name == f"{PLATFORM}.tgz"
    assert manager.registry.list() == ["vere-v3.4"]
    version_dir = manager.layout.version_dir("vere-v3.4")
    for name in ("urbit", "vere"):
        link = version_dir / name
        assert link.is_symlink()
        assert not os.path.isabs(os.readlink(link))
        assert os.access(link, os.X_OK)
    assert _versions_entries(manager) == ["vere-v3.4"]


def test_install_is_idempotent_without_network(
    manager: VersionManager, index: FakeReleaseIndex, installed
) -> None:
    installed("vere-v3.4")

    result = _installer(manager, index).install("vere-v3.4")

    assert result.already_installed
    assert index.network_calls == 0


def test_unknown_tag_is_asset_not_found(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", vere_tarball())
    with pytest.raises(AssetNotFoundError):
        _installer(manager, index).install("vere-v9.9")
    assert index.download_calls == 0
    assert _versions_entries(manager) == []


def test_missing_platform_asset_is_asset_not_found(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", vere_tarball(), platforms=("macos-aarch64",))
    with pytest.raises(AssetNotFoundError):
        _installer(manager, index).install("vere-v3.4")
    assert _versions_entries(manager) == []


def test_unsupported_platform_fails_before_network(
    manager: VersionManager, index: FakeReleaseIndex, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _unsupported() -> str:
        return detect_platform("windows", "x86_64")

    monkeypatch.setattr(installer_module, "detect_platform", _unsupported)
    index.publish("vere-v3.4", vere_tarball())

    with pytest.raises(PlatformUnsupportedError):
        _installer(manager, index, platform_id=None).install("vere-v3.4")
    assert index.network_calls == 0


def test_network_error_propagates(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.fetch_error = NetworkError("offline")
    with pytest.raises(NetworkError):
        _installer(manager, index).install("vere-v3.4")
    assert _versions_entries(manager) == []


def test_empty_download_is_rejected(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", b"")
    with pytest.raises(DownloadError):
        _installer(manager, index).install("vere-v3.4")
    assert _versions_entries(manager) == []


def test_corrupt_archive_leaves_no_trace(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", b"this is not a tarball")
    with pytest.raises(ExtractionError):
        _installer(manager, index).install("vere-v3.4")
    assert _versions_entries(manager) == []
    assert not manager.registry.is_installed("vere-v3.4")


def test_archive_without_runtime_binary(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", make_tarball({"README": (b"hello\n", 0o644)}))
    with pytest.raises(InstallError) as excinfo:
        _installer(manager, index).install("vere-v3.4")
    assert excinfo.value.kind == InstallError.BINARY_MISSING
    assert _versions_entries(manager) == []


def test_non_executable_binary_is_marked_executable(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", make_tarball({f"vere-v3.4-{PLATFORM}": (b"#!/bin/sh\nexit 0\n", 0o644)}))

    result = _installer(manager, index).install("vere-v3.4")

    assert result.warnings == []
    assert os.access(manager.which("vere-v3.4"), os.X_OK)


def test_failing_smoke_check_only_warns(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", vere_tarball(script=b"#!/bin/sh\nexit 3\n"))

    result = _installer(manager, index).install("vere-v3.4")

    assert manager.registry.is_installed("vere-v3.4")
    assert len(result.warnings) == 1
    assert "may not be functional" in result.warnings[0]


def test_smoke_check_can_be_disabled(manager: VersionManager, index: FakeReleaseIndex) -> None:
    index.publish("vere-v3.4", vere_tarball(script=b"#!/bin/sh\nexit 3\n"))
    result = _installer(manager, index, smoke_check=False).install("vere-v3.4")
    assert result.warnings == []


def test_concurrent_publish_keeps_first_install(
    manager: VersionManager, index: FakeReleaseIndex, installed
) -> None:
    index.publish("vere-v3.4", vere_tarball())
    original_download = index.download

    def _racing_download(url: str, out_path: Path) -> Path:
        # another process finishes first while this one is downloading
        installed("vere-v3.4")
        (manager.layout.version_dir("vere-v3.4") / "first").write_text("winner")
        return original_download(url, out_path)

    index.download = _racing_download

    result = _installer(manager, index).install("vere-v3.4")

    assert result.already_installed
    assert (manager.layout.version_dir("vere-v3.4") / "first").read_text() == "winner"
    assert _versions_entries(manager) == ["vere-v3.4"]


def test_first_matching_asset_wins() -> None:
    assets = [
        ReleaseAsset(name="linux-x86_64.tgz", url="https://example.invalid/a"),
        ReleaseAsset(name="linux-x86_64-debug.tgz", url="https://example.invalid/b"),
    ]
    assert select_asset(assets, "linux-x86_64").url == "https://example.invalid/a"
    assert select_asset(assets, "macos-aarch64") is None


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Linux", "x86_64", "linux-x86_64"),
        ("Linux", "aarch64", "linux-aarch64"),
        ("Darwin", "arm64", "macos-aarch64"),
        ("Darwin", "x86_64", "macos-x86_64"),
    ],
)
def test_detect_platform_known_pairs(system: str, machine: str, expected: str) -> None:
    assert detect_platform(system, machine) == expected


@pytest.mark.parametrize(("system", "machine"), [("Windows", "AMD64"), ("Linux", "riscv64")])
def test_detect_platform_rejects_others(system: str, machine: str) -> None:
    with pytest.raises(PlatformUnsupportedError):
        detect_platform(system, machine)


def test_install_sweeps_orphaned_staging(manager: VersionManager, index: FakeReleaseIndex) -> None:
    proc = subprocess.Popen(["true"])
    proc.wait()
    orphan = manager.layout.versions_dir / f".staging-vere-v3.4-{proc.pid}-dead"
    orphan.mkdir()
    index.publish("vere-v3.4", vere_tarball("vere-v3.4"))

    _installer(manager, index).install("vere-v3.4")

    assert _versions_entries(manager) == ["vere-v3.4"]
