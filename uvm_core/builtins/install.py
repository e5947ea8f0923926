"""Install and remote listing commands."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace

from uvm_builtin.release_index import remote_tags
from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand


@uvmcommand(name="install")
class InstallCommand(_StoreAwareCommand):
    """Install a specific version (or the one named in .uvmrc)."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", nargs="?", help="Version, tag or alias; defaults to .uvmrc")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        tag = manager.resolve(getattr(args, "version", None), cwd=self.app.cwd)
        installer = self.app.installer()

        if manager.registry.is_installed(tag):
            print(f"{tag} is already installed")
            return 0

        print(f"Installing {tag} for {installer.platform_id}...")
        result = installer.install(tag)
        if result.already_installed:
            print(f"{tag} is already installed")
            return 0
        for warning in result.warnings:
            self.warn(warning)
        if result.asset is not None:
            self.say(f"asset={result.asset.name}")
        print(f"Successfully installed {tag}")
        return 0


@uvmcommand(name="ls-remote")
class ListRemoteCommand(_StoreAwareCommand):
    """List available remote versions, newest first."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        print("Fetching available versions...")
        for tag in remote_tags(self.app.release_index, self.app.settings.repo):
            print(tag)
        return 0
