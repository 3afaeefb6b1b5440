# SPDX-License-Identifier: Apache-2.0
"""Runtime configuration for globe rendering, picking and country lookup.

Values are layered: built-in defaults, then ``~/.treatyglobe.yaml`` when
present, then ``TREATYGLOBE_*`` environment variables, then explicit keyword
overrides (usually CLI flags).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

CONFIG_PATH = "~/.treatyglobe.yaml"
ENV_PREFIX = "TREATYGLOBE_"
DEFAULT_API_BASE = "https://restcountries.com/v3.1/name/"


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class GlobeConfig:
    globe_radius: float = 5.0
    marker_offset: float = 0.1
    marker_size: float = 0.1
    hit_radius: float = 0.1
    fov: float = 75.0
    near: float = 0.1
    far: float = 1000.0
    camera_distance: float = 10.0
    rotation_speed: float = 0.001
    width: int = 1280
    height: int = 720
    api_base: str = DEFAULT_API_BASE
    timeout: float = 10.0
    max_retries: int = 2

    def validate(self) -> GlobeConfig:
        positive = (
            "globe_radius",
            "marker_size",
            "hit_radius",
            "fov",
            "near",
            "far",
            "width",
            "height",
            "timeout",
        )
        for name in positive:
            if not getattr(self, name) > 0:
                raise ConfigError(f"{name} must be positive: {getattr(self, name)!r}")
        if self.marker_offset < 0:
            raise ConfigError(f"marker_offset must be >= 0: {self.marker_offset!r}")
        if self.max_retries < 0:
            raise ConfigError(f"max_retries must be >= 0: {self.max_retries!r}")
        if self.near >= self.far:
            raise ConfigError("near plane must be closer than far plane")
        if self.camera_distance <= self.globe_radius + self.marker_offset:
            raise ConfigError("camera_distance must place the camera outside the globe")
        return self

    def with_overrides(self, **overrides: Any) -> GlobeConfig:
        """Return a copy with non-``None`` ``overrides`` applied and coerced."""

        known = {f.name: f for f in fields(self)}
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                raise ConfigError(f"unknown config key: {key}")
            changes[key] = _coerce(key, getattr(self, key), value)
        return replace(self, **changes).validate()


def _coerce(key: str, current: Any, value: Any) -> Any:
    try:
        if isinstance(current, int):
            return int(value)
        if isinstance(current, float):
            return float(value)
        return str(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid value for {key}: {value!r}") from exc


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    return {str(k): v for k, v in data.items()}


def _load_env(environ: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    names = {f.name for f in fields(GlobeConfig)}
    for name in names:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw not in (None, ""):
            out[name] = raw
    return out


def load_config(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> GlobeConfig:
    """Build a validated :class:`GlobeConfig` from file, environment and overrides."""

    env = os.environ if environ is None else environ
    cfg_path = Path(path or env.get(ENV_PREFIX + "CONFIG") or CONFIG_PATH)
    file_values = _load_file(cfg_path.expanduser())
    if file_values:
        logging.getLogger(__name__).debug("Loaded config from %s", cfg_path)
    env_values = _load_env(env)
    cfg = GlobeConfig().with_overrides(**file_values)
    cfg = cfg.with_overrides(**env_values)
    return cfg.with_overrides(**overrides)


__all__ = ["ConfigError", "GlobeConfig", "load_config"]
