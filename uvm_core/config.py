"""Layered settings: CLI overrides, environment, user config.toml, defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import tomllib

from uvm_builtin.release_index import DEFAULT_API_URL, DEFAULT_REPO

from .paths import UserDirs, default_home

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"
DEFAULT_TIMEOUT_SECONDS = 30.0

_ENV_KEY_MAP: dict[str, str] = {
    "home": "UVM_HOME",
    "repo": "UVM_REPO",
    "api_url": "UVM_API_URL",
    "token": "UVM_GITHUB_TOKEN",
    "timeout": "UVM_TIMEOUT",
}


def _load_config_from_file(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    section = data.get("uvm", data)
    if not isinstance(section, dict):
        return {}
    return {key: str(value) for key, value in section.items() if not isinstance(value, dict)}


@dataclass(frozen=True)
class Settings:
    home: Path
    repo: str = DEFAULT_REPO
    api_url: str = DEFAULT_API_URL
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS


class ConfigStore:
    """Resolve each setting from CLI, env, user config, then defaults."""

    def __init__(
        self,
        *,
        user_dirs: UserDirs | None = None,
        cli_overrides: Mapping[str, str] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.user_dirs = user_dirs or UserDirs()
        self.cli_overrides = {k: v for k, v in dict(cli_overrides or {}).items() if v}
        self.env = os.environ if env is None else env
        self._file_layer: dict[str, str] | None = None

    @property
    def config_path(self) -> Path:
        return self.user_dirs.config_dir() / CONFIG_FILE_NAME

    def get(self, key: str, default: Any | None = None) -> Any | None:
        if value := self.cli_overrides.get(key):
            return value
        alias = _ENV_KEY_MAP.get(key)
        if alias and (value := self.env.get(alias)):
            return value
        if value := self._user_layer().get(key):
            return value
        return default

    def settings(self) -> Settings:
        timeout_raw = self.get("timeout")
        try:
            timeout = float(timeout_raw) if timeout_raw is not None else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            logger.warning("invalid timeout %r, using %s", timeout_raw, DEFAULT_TIMEOUT_SECONDS)
            timeout = DEFAULT_TIMEOUT_SECONDS
        home = self.get("home")
        return Settings(
            home=Path(home).expanduser() if home else default_home(),
            repo=str(self.get("repo", DEFAULT_REPO)),
            api_url=str(self.get("api_url", DEFAULT_API_URL)),
            token=self.get("token"),
            timeout=max(timeout, 1.0),
        )

    def _user_layer(self) -> dict[str, str]:
        if self._file_layer is None:
            self._file_layer = _load_config_from_file(self.config_path)
        return self._file_layer
