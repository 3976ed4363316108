"""Config loading and override resolution.

Precedence for every connection field (highest first):

1. Explicit CLI flag (``--host``, ``--port``, ``--user``, ``--password``)
2. ``AMBARI_HOST`` / ``AMBARI_PORT`` / ``AMBARI_USER`` / ``AMBARI_PASSWORD``
3. The YAML config file
4. Model defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ambari_shell.config.models import ConfigError, ShellConfig

logger = logging.getLogger(__name__)

_APP_DIR = "ambari-shell"
_CONFIG_FILE = "config.yaml"

#: Connection field → environment variable.
ENV_OVERRIDES: Dict[str, str] = {
    "host": "AMBARI_HOST",
    "port": "AMBARI_PORT",
    "user": "AMBARI_USER",
    "password": "AMBARI_PASSWORD",
}


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def config_dir() -> Path:
    """Return the XDG config directory for ambari-shell.

    Uses ``XDG_CONFIG_HOME`` if set, otherwise ``~/.config``.
    """
    base = os.environ.get("XDG_CONFIG_HOME", "")
    if not base:
        base = str(Path.home() / ".config")
    return Path(base) / _APP_DIR


def default_config_path() -> Path:
    return config_dir() / _CONFIG_FILE


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    return raw


def resolve_overrides(
    cli_values: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Merge env-var and CLI connection overrides (CLI wins)."""
    env = os.environ if environ is None else environ
    merged: Dict[str, Any] = {}
    for key, var in ENV_OVERRIDES.items():
        if env.get(var):
            merged[key] = env[var]
    for key, value in (cli_values or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def load_config(
    path: Optional[str | Path] = None,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ShellConfig:
    """Load the shell config, applying env and CLI overrides.

    A missing file (default or explicit) yields the defaults; an explicit
    path is logged when absent.
    """
    cfg_path = Path(path) if path else default_config_path()
    raw: Dict[str, Any] = {}
    if cfg_path.is_file():
        raw = _read_yaml(cfg_path)
        logger.debug("Loaded config from %s", cfg_path)
    elif path:
        logger.warning("Config file %s not found; using defaults", cfg_path)

    ambari_raw = dict(raw.get("ambari") or {})
    ambari_raw.update(resolve_overrides(overrides, environ))
    data = {"ambari": ambari_raw, "shell": raw.get("shell") or {}}

    try:
        return ShellConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
