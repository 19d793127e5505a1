"""Optional project configuration for draftbb.

This module is intentionally small and deterministic: it only reads
`draftbb.toml` and performs light validation.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from draftbb.errors import DraftBBConfigError
from draftbb.sections import DEFAULT_SEPARATOR, DEFAULT_TRIGGER, HashtagConfig

CONFIG_FILENAME = "draftbb.toml"


@dataclass(frozen=True)
class HashtagSettings:
    enabled: bool = False
    trigger: str = DEFAULT_TRIGGER
    separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True)
class RenderSettings:
    directional: bool = False


@dataclass(frozen=True)
class DraftBBConfig:
    version: int = 1
    hashtag: HashtagSettings = field(default_factory=HashtagSettings)
    render: RenderSettings = field(default_factory=RenderSettings)

    def hashtag_config(self) -> HashtagConfig | None:
        if not self.hashtag.enabled:
            return None
        return HashtagConfig(trigger=self.hashtag.trigger, separator=self.hashtag.separator)


def find_config_root(start: Path) -> Path | None:
    """Walk upward from `start` (file or directory) looking for `draftbb.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            return None
        cur = cur.parent


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DraftBBConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_bool(value: Any, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise DraftBBConfigError(f"Expected {name} to be a boolean.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise DraftBBConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise DraftBBConfigError(f"Expected {name} to be a string.")
    return value


def parse_config(data: dict[str, Any]) -> DraftBBConfig:
    """Validate an already-decoded TOML document."""

    version = _as_int(data.get("version", 1), name="version")
    if version != 1:
        raise DraftBBConfigError(f"Unsupported config version: {version} (expected 1).")

    hashtag_tbl = _as_table(data.get("hashtag"), name="hashtag")
    render_tbl = _as_table(data.get("render"), name="render")

    defaults = HashtagSettings()
    if "enabled" in hashtag_tbl:
        enabled = _as_bool(hashtag_tbl["enabled"], name="hashtag.enabled")
    else:
        enabled = defaults.enabled

    if "trigger" in hashtag_tbl:
        trigger = _as_str(hashtag_tbl["trigger"], name="hashtag.trigger")
    else:
        trigger = defaults.trigger

    if "separator" in hashtag_tbl:
        separator = _as_str(hashtag_tbl["separator"], name="hashtag.separator")
    else:
        separator = defaults.separator

    if "directional" in render_tbl:
        directional = _as_bool(render_tbl["directional"], name="render.directional")
    else:
        directional = False

    if not trigger or not separator:
        raise DraftBBConfigError(
            "Invalid config: hashtag.trigger and hashtag.separator must be non-empty."
        )

    return DraftBBConfig(
        version=version,
        hashtag=HashtagSettings(enabled=enabled, trigger=trigger, separator=separator),
        render=RenderSettings(directional=directional),
    )


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> DraftBBConfig:
    """Load and validate `draftbb.toml`.

    An explicit `config_path` must exist. Otherwise the file is searched for
    upward from `root` (or the current directory), and defaults are returned
    when none is found.
    """

    if config_path is None:
        found = find_config_root(root if root is not None else Path.cwd())
        if found is None:
            return DraftBBConfig()
        config_path = found / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise DraftBBConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise DraftBBConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DraftBBConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise DraftBBConfigError(f"Invalid TOML in {config_path}: {e}") from e

    return parse_config(data)
