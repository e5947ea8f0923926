"""Convenience imports for UVM API helpers."""

from .abc import UVMAbstractCommand
from .decorators import uvmcommand

__all__ = ["UVMAbstractCommand", "uvmcommand"]
