"""Release catalog records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple


@dataclass(frozen=True)
class ReleaseAsset:
    name: str
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReleaseAsset":
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("browser_download_url") or data.get("url") or ""),
        )


@dataclass(frozen=True)
class Release:
    tag: str
    assets: Tuple[ReleaseAsset, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Release":
        raw_assets = data.get("assets") or []
        assets = tuple(
            ReleaseAsset.from_dict(item) for item in raw_assets if isinstance(item, Mapping)
        )
        return cls(tag=str(data.get("tag_name", "")), assets=assets)
