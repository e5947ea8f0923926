"""Shared fixtures: a throwaway store, fake installs and a fake release index."""

from __future__ import annotations

import io
import os
import tarfile
from pathlib import Path
from typing import Callable

import pytest

from uvm_builtin.errors import NetworkError
from uvm_builtin.release_index import Release, ReleaseAsset, ReleaseIndex
from uvm_builtin.versions import VersionManager

PLATFORM = "linux-x86_64"
OK_SCRIPT = b"#!/bin/sh\nexit 0\n"


def make_tarball(files: dict[str, tuple[bytes, int]]) -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
        for name, (data, mode) in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = mode
            tf.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


def vere_tarball(tag: str = "vere-v3.4", script: bytes = OK_SCRIPT) -> bytes:
    return make_tarball({f"vere-{tag[len('vere-'):]}-{PLATFORM}": (script, 0o755)})


class FakeReleaseIndex(ReleaseIndex):
    """In-memory catalog that counts every network-shaped call."""

    def __init__(self) -> None:
        self.releases: list[Release] = []
        self.payloads: dict[str, bytes] = {}
        self.fetch_calls = 0
        self.download_calls = 0
        self.fetch_error: Exception | None = None

    def publish(self, tag: str, data: bytes, *, platforms: tuple[str, ...] = (PLATFORM,)) -> None:
        assets = []
        for platform_id in platforms:
            url = f"https://example.invalid/{tag}/{platform_id}.tgz"
            assets.append(ReleaseAsset(name=f"{platform_id}.tgz", url=url))
            self.payloads[url] = data
        self.releases.append(Release(tag=tag, assets=tuple(assets)))

    def fetch_releases(self, repo: str) -> list[Release]:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.releases)

    def download(self, url: str, out_path: Path) -> Path:
        self.download_calls += 1
        if url not in self.payloads:
            raise NetworkError(f"unexpected url {url}")
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(self.payloads[url])
        return out_path

    @property
    def network_calls(self) -> int:
        return self.fetch_calls + self.download_calls


def fake_install(manager: VersionManager, tag: str) -> Path:
    """Lay out ``versions/<tag>`` the way the installer would."""
    version_dir = manager.layout.version_dir(tag)
    version_dir.mkdir(parents=True)
    binary = version_dir / f"{tag}-{PLATFORM}"
    binary.write_bytes(OK_SCRIPT)
    binary.chmod(0o755)
    for name in ("urbit", "vere"):
        os.symlink(binary.name, version_dir / name)
    return version_dir


@pytest.fixture
def home(tmp_path: Path) -> Path:
    return tmp_path / ".uvm"


@pytest.fixture
def manager(home: Path) -> VersionManager:
    return VersionManager(home)


@pytest.fixture
def installed(manager: VersionManager) -> Callable[..., None]:
    def _install(*tags: str) -> None:
        for tag in tags:
            fake_install(manager, tag)

    return _install


@pytest.fixture
def index() -> FakeReleaseIndex:
    return FakeReleaseIndex()
