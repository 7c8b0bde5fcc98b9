"""Configuration management for glissue."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATHS = (
    Path(".glissue/config.yaml"),
    Path.home() / ".config" / "glissue" / "config.yaml",
)


class Config(BaseModel):
    """glissue configuration.

    Environment overrides (applied after the config file):
        GITLAB_HOST: Base URL of the GitLab instance
        GITLAB_TOKEN / GITLAB_PRIVATE_TOKEN: Personal access token
        BROWSER: Command used by --web
    """

    host: str = Field(default="https://gitlab.com", description="Base URL of the GitLab instance")
    token: str | None = Field(default=None, description="Personal access token (read_api scope)")
    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    browser: str | None = Field(default=None, description="Browser command for --web (default: system opener)")

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        if "://" not in value:
            value = f"https://{value}"
        return value.rstrip("/")

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file or use defaults, then apply env overrides."""
        if config_path is not None and not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        candidates = [config_path] if config_path is not None else list(DEFAULT_CONFIG_PATHS)

        data: dict = {}
        for path in candidates:
            if path.exists():
                with path.open() as f:
                    data = yaml.safe_load(f) or {}
                break

        config = cls.model_validate(data)
        return config.with_env_overrides()

    def with_env_overrides(self) -> Config:
        """Return a copy with GITLAB_* and BROWSER environment variables applied."""
        updates: dict[str, str] = {}
        if host := os.getenv("GITLAB_HOST"):
            updates["host"] = host
        if token := os.getenv("GITLAB_TOKEN") or os.getenv("GITLAB_PRIVATE_TOKEN"):
            updates["token"] = token
        if browser := os.getenv("BROWSER"):
            updates["browser"] = browser
        return type(self).model_validate({**self.model_dump(), **updates})
