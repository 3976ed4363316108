"""Configuration loading and validation."""

from ambari_shell.config.loader import (
    ENV_OVERRIDES,
    config_dir,
    default_config_path,
    load_config,
    resolve_overrides,
)
from ambari_shell.config.models import (
    AmbariConnection,
    ConfigError,
    ShellConfig,
    ShellSettings,
)

__all__ = [
    "ENV_OVERRIDES",
    "AmbariConnection",
    "ConfigError",
    "ShellConfig",
    "ShellSettings",
    "config_dir",
    "default_config_path",
    "load_config",
    "resolve_overrides",
]
