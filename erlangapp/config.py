"""
config.py

Responsibility: load the settings that adapt cargo-erlangapp to a project.

Sources, later ones winning:
1) Defaults on `Settings`
2) `<project>/erlangapp.yaml` (optional, a YAML mapping)
3) Environment: `CARGO`, `ERLANGAPP_PLATFORM`, `ERLANGAPP_LOG_LEVEL`

`CARGO` is the variable cargo exports to its subcommands, so running under
`cargo` picks the same toolchain binary automatically.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from erlangapp.errors import InvalidConfig
from erlangapp.targets import Platform, host_platform, parse_platform

CONFIG_FILENAME = "erlangapp.yaml"

_ENV_KEYS = {
    "CARGO": "toolchain",
    "ERLANGAPP_PLATFORM": "platform",
    "ERLANGAPP_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class Settings:
    """Project layout and toolchain settings."""

    toolchain: str = "cargo"
    manifest_filename: str = "Cargo.toml"
    crates_dir: str = "crates"
    output_dir: str = "priv/crates"
    platform: Platform | None = None
    log_level: str = "INFO"

    def resolved_platform(self) -> Platform:
        return self.platform if self.platform is not None else host_platform()


def _coerce(key: str, raw: Any) -> Any:
    if key == "platform":
        if raw is None:
            return None
        if isinstance(raw, Platform):
            return raw
        if not isinstance(raw, str):
            raise InvalidConfig(f"`platform` must be a string, got {type(raw).__name__}")
        try:
            return parse_platform(raw)
        except ValueError as e:
            raise InvalidConfig(str(e)) from e

    if not isinstance(raw, str) or not raw.strip():
        raise InvalidConfig(f"`{key}` must be a non-empty string")
    value = raw.strip()

    if key == "log_level":
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise InvalidConfig(f"Unknown log level: {raw!r}")
    return value


def _apply(settings: Settings, data: Mapping[str, Any], *, source: str) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise InvalidConfig(f"Unknown setting(s) in {source}: {', '.join(unknown)}")
    return replace(settings, **{k: _coerce(k, v) for k, v in data.items()})


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidConfig(f"Cannot read {path}", e) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise InvalidConfig(f"Cannot parse {path}", e) from e
    if not isinstance(data, dict):
        raise InvalidConfig(f"{path} must be a mapping/object at the top level.")
    return data


def load_settings(project_dir: str | Path, env: Mapping[str, str] | None = None) -> Settings:
    """
    Build `Settings` for the project rooted at project_dir.

    A missing `erlangapp.yaml` is fine; a malformed one raises InvalidConfig.
    """
    environ = os.environ if env is None else env
    settings = Settings()

    path = Path(project_dir) / CONFIG_FILENAME
    if path.is_file():
        settings = _apply(settings, _read_config_file(path), source=str(path))

    overrides = {field: environ[var] for var, field in _ENV_KEYS.items() if environ.get(var)}
    if overrides:
        settings = _apply(settings, overrides, source="environment")
    return settings
