"""Remote release catalog access."""

from .client import (
    DEFAULT_API_URL,
    DEFAULT_REPO,
    GitHubReleaseIndex,
    ReleaseIndex,
    parse_releases,
    remote_tags,
)
from .types import Release, ReleaseAsset

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_REPO",
    "GitHubReleaseIndex",
    "Release",
    "ReleaseAsset",
    "ReleaseIndex",
    "parse_releases",
    "remote_tags",
]
