"""Release index interface and its GitHub releases implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence, Tuple

import requests
from requests import RequestException, Response

from ..errors import DownloadError, NetworkError, RateLimitedError
from ..versions.tags import sort_tags
from .types import Release

log = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REPO = "urbit/vere"


class ReleaseIndex(ABC):
    """Source of truth mapping release tags to downloadable assets."""

    @abstractmethod
    def fetch_releases(self, repo: str) -> list[Release]:
        """Return every release published for ``repo``."""

    @abstractmethod
    def download(self, url: str, out_path: Path) -> Path:
        """Stream the asset at ``url`` into ``out_path``."""


@dataclass
class GitHubReleaseIndex(ReleaseIndex):
    """HTTP client for ``GET /repos/<repo>/releases``.

    No retries happen here; a failed call is reported once and the caller
    decides whether to try again.
    """

    base_url: str = DEFAULT_API_URL
    timeout: float | Tuple[float, float] = 30.0
    token: str | None = None
    session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.setdefault("Accept", "application/vnd.github+json")
        if self.token:
            self.session.headers.setdefault("Authorization", f"Bearer {self.token}")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Response:
        url = self._url(path)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        if _is_rate_limited(resp):
            raise RateLimitedError(
                f"GitHub API rate limit exceeded ({resp.status_code}); "
                "set UVM_GITHUB_TOKEN or retry later"
            )
        if not 200 <= resp.status_code < 300:
            raise NetworkError(f"{method} {url} returned {resp.status_code}: {resp.text[:200]}")
        return resp

    def fetch_releases(self, repo: str) -> list[Release]:
        resp = self._request("GET", f"/repos/{repo}/releases", params={"per_page": 100})
        try:
            payload = resp.json()
        except ValueError as exc:
            raise NetworkError("invalid response from GitHub API: not JSON") from exc
        return parse_releases(payload)

    def download(self, url: str, out_path: Path, *, chunk_size: int = 1024 * 1024) -> Path:
        log.info("Downloading %s", url)
        try:
            resp = self.session.get(url, stream=True, timeout=self.timeout, allow_redirects=True)
        except RequestException as exc:
            raise DownloadError(f"download {url} failed: {exc}") from exc

        with resp:
            if resp.status_code >= 400:
                raise DownloadError(f"download failed: {resp.status_code} {url}")
            target = Path(out_path)
            target.parent.mkdir(parents=True, exist_ok=True)
            try:
                with target.open("wb") as f:
                    for chunk in resp.iter_content(chunk_size=chunk_size):
                        if chunk:
                            f.write(chunk)
            except RequestException as exc:
                raise DownloadError(f"download {url} interrupted: {exc}") from exc
        return target


def parse_releases(payload: Any) -> list[Release]:
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        raise NetworkError("invalid response from GitHub API: expected a list of releases")
    releases: list[Release] = []
    for item in payload:
        if not isinstance(item, dict) or not item.get("tag_name"):
            raise NetworkError("invalid response from GitHub API: release without tag_name")
        releases.append(Release.from_dict(item))
    return releases


def _is_rate_limited(resp: Response) -> bool:
    if resp.status_code == 429:
        return True
    if resp.status_code != 403:
        return False
    if resp.headers.get("X-RateLimit-Remaining") == "0":
        return True
    return "rate limit" in (resp.text or "").lower()


def remote_tags(index: ReleaseIndex, repo: str) -> list[str]:
    """Published tags, newest first."""
    return sort_tags({release.tag for release in index.fetch_releases(repo)}, descending=True)
