"""Commands that read or move the active version."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace

from uvm_core.api import uvmcommand

from .commands import _StoreAwareCommand


@uvmcommand(name="use")
class UseCommand(_StoreAwareCommand):
    """Switch to a version (or the one named in .uvmrc).

    Only the on-disk ``current`` pointer changes; shells pick it up through
    ``<home>/current`` on their PATH.
    """

    install_hint = True

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", nargs="?", help="Version, tag or alias; defaults to .uvmrc")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        tag = manager.resolve(getattr(args, "version", None), cwd=self.app.cwd)
        manager.use(tag)
        print(f"Now using {tag}")
        return 0


@uvmcommand(name="current")
class CurrentCommand(_StoreAwareCommand):
    """Show the active version."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        pass

    def execute(self, args: Namespace) -> int:
        current = self.app.manager.current()
        print(current if current else "No version currently in use")
        return 0


@uvmcommand(name="default")
class DefaultCommand(_StoreAwareCommand):
    """Show or set the global default version."""

    install_hint = True

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        parser.add_argument("version", nargs="?", help="Version to make the default")

    def execute(self, args: Namespace) -> int:
        manager = self.app.manager
        raw = getattr(args, "version", None)
        if not raw:
            default = manager.get_default()
            print(default if default else "No default version set")
            return 0
        tag = manager.resolve(raw)
        manager.set_default(tag)
        print(f"Default version set to {tag}")
        return 0
