"""Command line interface for UVM."""

from .main import main

__all__ = ["main"]
