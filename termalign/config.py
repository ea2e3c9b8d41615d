"""Configuration loading: defaults, then JSON file, then environment."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Optional

from .align import Alignment, check_fill
from .errors import ConfigError, FillError
from .models import AlignConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "TERMALIGN_"
CONFIG_KEYS = ("fill", "align", "width", "skip_right_fill", "separator", "crlf")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def get_config_dir() -> Path:
    """Get XDG config directory for termalign.

    Returns path to ~/.config/termalign/
    Respects XDG_CONFIG_HOME if set and absolute.
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config and os.path.isabs(xdg_config):
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / "termalign"


def default_config_path() -> Path:
    return get_config_dir() / "config.json"


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for '{key}': {value!r}", key=key)


def _apply(config: AlignConfig, key: str, value: Any) -> AlignConfig:
    """Return a copy of *config* with *key* set from a raw file/env value."""
    if key == "fill":
        try:
            return replace(config, fill=check_fill(str(value)))
        except FillError as exc:
            raise ConfigError(str(exc), key=key) from exc
    if key == "align":
        try:
            return replace(config, alignment=Alignment.parse(value))
        except ValueError as exc:
            raise ConfigError(str(exc), key=key) from exc
    if key == "width":
        if isinstance(value, bool):
            raise ConfigError(f"Invalid width: {value!r}", key=key)
        try:
            width = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid width: {value!r}", key=key) from exc
        return replace(config, width=width)
    if key == "separator":
        return replace(config, separator=str(value))
    if key in ("skip_right_fill", "crlf"):
        return replace(config, **{key: _parse_bool(key, value)})
    raise KeyError(key)


def _load_file(path: Path) -> dict[str, Any]:
    """Read the JSON config file. Returns empty dict if file missing."""
    if not path.exists():
        logger.debug("No config file at %s", path)
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Corrupt config file: {e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file is not valid UTF-8: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", path=str(path)) from e
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a JSON object", path=str(path))
    return raw


def load_config(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AlignConfig:
    """Build an AlignConfig from defaults, the config file and the environment.

    Later sources win. Unknown file keys are ignored.

    Raises:
        ConfigError: on unreadable files or invalid values.
    """
    if env is None:
        env = os.environ
    if path is None:
        path = default_config_path()

    config = AlignConfig()
    for key, value in _load_file(path).items():
        if key not in CONFIG_KEYS:
            logger.debug("Ignoring unknown config key %r in %s", key, path)
            continue
        try:
            config = _apply(config, key, value)
        except ConfigError as e:
            e.path = str(path)
            raise

    for key in CONFIG_KEYS:
        env_name = ENV_PREFIX + key.upper()
        if env_name in env:
            logger.debug("Using %s from environment", env_name)
            config = _apply(config, key, env[env_name])

    return config
