"""Download, verify and publish a runtime version into the store."""

from __future__ import annotations

import logging
import os
import secrets
import shutil
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ..errors import AssetNotFoundError, DownloadError, InstallError
from ..release_index import Release, ReleaseAsset, ReleaseIndex
from ..versions.layout import STAGING_PREFIX
from ..versions.locking import store_lock
from ..versions.manager import VersionManager
from ..versions.registry import ENTRY_POINT_NAMES
from ..versions.sweep import sweep_orphans
from .archive import extract_archive, find_runtime_binary, mark_executable
from .platform import detect_platform

logger = logging.getLogger(__name__)

__all__ = ["InstallResult", "Installer", "select_asset"]

SMOKE_TIMEOUT_SECONDS = 15.0


@dataclass
class InstallResult:
    tag: str
    path: Path
    already_installed: bool = False
    asset: Optional[ReleaseAsset] = None
    warnings: list[str] = field(default_factory=list)


def select_asset(assets: Sequence[ReleaseAsset], platform_id: str) -> Optional[ReleaseAsset]:
    """First asset whose name mentions ``platform_id``."""
    for asset in assets:
        if platform_id in asset.name and asset.url:
            return asset
    return None


class Installer:
    """Installs one version per call.

    Nothing becomes visible under ``versions/<tag>`` until the staging
    directory is renamed into place; every failure path removes the staging
    directory and the temporary download.
    """

    def __init__(
        self,
        manager: VersionManager,
        index: ReleaseIndex,
        *,
        repo: str,
        platform_id: str | None = None,
        smoke_check: bool = True,
    ) -> None:
        self.manager = manager
        self.index = index
        self.repo = repo
        self._platform_id = platform_id
        self.smoke_check = smoke_check

    @property
    def platform_id(self) -> str:
        if self._platform_id is None:
            self._platform_id = detect_platform()
        return self._platform_id

    def install(self, tag: str) -> InstallResult:
        platform_id = self.platform_id
        registry = self.manager.registry
        final_dir = registry.path(tag)

        if registry.is_installed(tag):
            logger.debug("%s already installed, skipping network", tag)
            return InstallResult(tag=tag, path=final_dir, already_installed=True)

        asset = self._locate_asset(tag, platform_id)
        layout = self.manager.layout
        layout.ensure()
        staging = layout.versions_dir / f"{STAGING_PREFIX}{tag}-{os.getpid()}-{secrets.token_hex(4)}"

        try:
            with tempfile.TemporaryDirectory(prefix="uvm-install-") as tmp:
                archive = self._download(asset, Path(tmp))
                extract_archive(archive, staging)
            binary = self._validate(staging, tag)
            _write_entry_points(staging, binary)
            published = self._publish(staging, final_dir)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        result = InstallResult(tag=tag, path=final_dir, already_installed=not published, asset=asset)
        if published and self.smoke_check:
            warning = _smoke_check(final_dir / binary.relative_to(staging))
            if warning:
                logger.warning(warning)
                result.warnings.append(warning)
        return result

    # ------------------------ stages ------------------------

    def _locate_asset(self, tag: str, platform_id: str) -> ReleaseAsset:
        releases = self.index.fetch_releases(self.repo)
        release = _find_release(releases, tag)
        if release is None:
            raise AssetNotFoundError(f"{tag} not found in {self.repo} releases")
        asset = select_asset(release.assets, platform_id)
        if asset is None:
            raise AssetNotFoundError(f"no binary found for {tag} on {platform_id}")
        logger.debug("selected asset %s for %s", asset.name, tag)
        return asset

    def _download(self, asset: ReleaseAsset, tmp: Path) -> Path:
        name = Path(asset.name).name or "vere.tgz"
        archive = self.index.download(asset.url, tmp / name)
        if not archive.is_file() or archive.stat().st_size == 0:
            raise DownloadError(f"downloaded file {name} is empty or missing")
        return archive

    def _validate(self, staging: Path, tag: str) -> Path:
        mark_executable(staging)
        binary = find_runtime_binary(staging)
        if binary is None:
            raise InstallError(InstallError.BINARY_MISSING, f"vere binary not found in {tag} release")
        return binary

    def _publish(self, staging: Path, final_dir: Path) -> bool:
        with store_lock(self.manager.layout.lock_file):
            sweep_orphans(self.manager.layout)
            if final_dir.exists():
                logger.debug("%s published concurrently, discarding staging", final_dir.name)
                shutil.rmtree(staging, ignore_errors=True)
                return False
            os.rename(staging, final_dir)
        return True


def _find_release(releases: Sequence[Release], tag: str) -> Optional[Release]:
    for release in releases:
        if release.tag == tag:
            return release
    return None


def _write_entry_points(staging: Path, binary: Path) -> None:
    relative = os.path.relpath(binary, staging)
    for name in ENTRY_POINT_NAMES:
        link = staging / name
        if link == binary:
            continue
        if link.is_symlink() or link.is_file():
            link.unlink()
        elif link.exists():
            shutil.rmtree(link)
        os.symlink(relative, link)


def _smoke_check(binary: Path) -> Optional[str]:
    try:
        proc = subprocess.run(
            [str(binary), "--help"],
            check=False,
            capture_output=True,
            timeout=SMOKE_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        return f"vere binary may not be functional: {exc}"
    if proc.returncode != 0:
        return f"vere binary may not be functional (exit={proc.returncode})"
    return None
