"""Install pipeline for runtime releases."""

from .installer import InstallResult, Installer, select_asset
from .platform import detect_platform

__all__ = ["InstallResult", "Installer", "detect_platform", "select_asset"]
