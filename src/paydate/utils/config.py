"""Config loader: optional YAML file with due-date, holiday and logging sections."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from paydate.utils.errors import ConfigError

CONFIG_ENV = "PAYDATE_CONFIG"


def resolve_config_path(path: str | Path | None = None) -> Path | None:
    """Explicit path wins, then $PAYDATE_CONFIG. None when neither is set."""
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else None


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the config mapping from `path` (or $PAYDATE_CONFIG).

    Returns {} when no config is configured or the file is empty. A missing
    file raises FileNotFoundError; bad YAML or a non-mapping document raises
    ConfigError.
    """
    resolved = resolve_config_path(path)
    if resolved is None:
        return {}
    if not resolved.exists():
        raise FileNotFoundError(f"Config not found: {resolved}")
    try:
        with open(resolved) as f:
            cfg = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {resolved}: {exc}") from exc
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config {resolved} must be a mapping, got {type(cfg).__name__}")
    return cfg


def holidays_path(cfg: dict[str, Any], base: Path | None = None) -> Path | None:
    """Return the configured holiday file, resolved against `base` when relative."""
    raw = (cfg.get("holidays") or {}).get("path")
    if not raw:
        return None
    p = Path(raw)
    if not p.is_absolute() and base is not None:
        p = base / p
    return p
