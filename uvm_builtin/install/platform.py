"""Host platform detection for asset selection."""

from __future__ import annotations

import platform as _platform

from ..errors import PlatformUnsupportedError

__all__ = ["detect_platform"]

_OS_MAP = {
    "linux": "linux",
    "darwin": "macos",
}
_ARCH_MAP = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


def detect_platform(system: str | None = None, machine: str | None = None) -> str:
    """Return the ``<os>-<arch>`` string used in release asset names."""
    os_name = (system if system is not None else _platform.system()).lower()
    arch = (machine if machine is not None else _platform.machine()).lower()

    platform_id = next((value for key, value in _OS_MAP.items() if os_name.startswith(key)), None)
    if platform_id is None:
        raise PlatformUnsupportedError(f"unsupported platform: {os_name}")
    arch_id = _ARCH_MAP.get(arch)
    if arch_id is None:
        raise PlatformUnsupportedError(f"unsupported architecture: {arch}")
    return f"{platform_id}-{arch_id}"
