"""Read-only commands over the installed versions."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace

from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand


@uvmcommand(name="ls")
class ListCommand(_StoreAwareCommand):
    """List installed versions; the active one is marked with '*'."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        installed = self.app.manager.list_installed()
        if not installed:
            print("No versions installed")
            return 0
        for summary in installed:
            marker = "*" if summary.active else " "
            print(f"{marker} {summary.tag}")
        return 0


@uvmcommand(name="which")
class WhichCommand(_StoreAwareCommand):
    """Show the path to a version's urbit entry point."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", help="Version, tag or alias")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        tag = manager.resolve(args.version, cwd=self.app.cwd)
        print(manager.which(tag))
        return 0
