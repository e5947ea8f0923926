"""Alias management commands."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace

from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand


@uvmcommand(name="alias")
class AliasCommand(_StoreAwareCommand):
    """Create or update an alias pointing at an installed version."""

    install_hint = True

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("name", help="Alias name")
        parser.add_argument("version", help="Version, tag or alias to point at")

    def execute(self, args: Namespace) -> int:
        tag = self.app.manager.alias(args.name, args.version)
        print(f"Alias '{args.name}' -> '{tag}' created")
        return 0


@uvmcommand(name="unalias")
class UnaliasCommand(_StoreAwareCommand):
    """Remove an alias."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("name", help="Alias name")

    def execute(self, args: Namespace) -> int:
        self.app.manager.unalias(args.name)
        print(f"Alias '{args.name}' removed")
        return 0
