"""Pydantic models for ambari-shell configuration.

Structure of the YAML file::

    ambari:
      host: ambari.example.com
      port: 8080
      user: admin
      password: admin
      use_ssl: false
      timeout: 30
    shell:
      prompt_name: ambari-shell
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ConfigError(ValueError):
    """Raised when the configuration file or overrides are invalid."""


class AmbariConnection(BaseModel):
    """Where and how to reach the Ambari server."""

    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    user: str = "admin"
    password: str = Field(default="admin", repr=False)
    use_ssl: bool = False
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("host")
    @classmethod
    def _host_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("host must not be empty")
        return value

    @property
    def url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ShellSettings(BaseModel):
    """Interactive shell presentation settings."""

    prompt_name: str = "ambari-shell"


class ShellConfig(BaseModel):
    """Root model of the config file."""

    ambari: AmbariConnection = Field(default_factory=AmbariConnection)
    shell: ShellSettings = Field(default_factory=ShellSettings)
