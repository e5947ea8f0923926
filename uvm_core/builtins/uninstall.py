"""Version removal command."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace

from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand


@uvmcommand(name="uninstall")
class UninstallCommand(_StoreAwareCommand):
    """Remove an installed version."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Version, tag or alias to remove")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        tag = manager.resolve(args.version, cwd=self.app.cwd)
        if manager.activator.current_pointer() == tag:
            self.warn(f"{tag} is currently in use")
        result = manager.uninstall(tag)
        if result.cleared_default:
            self.say(f"default version {tag} cleared")
        print(f"Uninstalled {tag}")
        return 0
