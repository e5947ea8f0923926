"""Core runtime pieces for the UVM command line."""

from .app import UVMApp
from .config import ConfigStore, Settings
from .paths import UserDirs

__all__ = [
    "ConfigStore",
    "Settings",
    "UVMApp",
    "UserDirs",
]
