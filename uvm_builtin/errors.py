"""Typed errors raised by the version manager."""

from __future__ import annotations


class UVMError(RuntimeError):
    """Base error for every failure reported to the user."""


class ResolutionError(UVMError):
    """A raw version argument could not be turned into a tag."""

    CYCLE = "cycle"
    UNKNOWN_ALIAS = "unknown_alias"
    EMPTY_INPUT = "empty_input"
    INVALID_ALIAS = "invalid_alias"
    INVALID_PIN = "invalid_pin"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class PlatformUnsupportedError(UVMError):
    """The host OS/architecture pair has no published builds."""


class NetworkError(UVMError):
    """The release index was unreachable or answered with garbage."""


class RateLimitedError(NetworkError):
    """The release index refused the request because of rate limiting."""


class AssetNotFoundError(UVMError):
    """No release or no platform asset exists for the requested tag."""


class DownloadError(UVMError):
    """The asset transfer failed or produced an empty file."""


class ExtractionError(UVMError):
    """The downloaded archive could not be unpacked."""


class InstallError(UVMError):
    """The extracted release is not a usable installation."""

    BINARY_MISSING = "binary_missing"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class NotInstalledError(UVMError):
    """The resolved version has no directory in the store."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"{tag} is not installed")
        self.tag = tag
