"""Configuration system for gcreds using pydantic-settings.

Supports layered configuration:
1. Built-in defaults (lowest priority)
2. pyproject.toml [tool.gcreds] section (project-level)
3. ./gcreds.toml (project-level, explicit)
4. The file named by GCREDS_CONFIG_FILE
5. Environment variables (highest priority)

Environment variables use GCREDS_ prefix with nested delimiter __.
Example: GCREDS_GOOGLE__CLIENT_ID, GCREDS_LOG__LEVEL
"""

from __future__ import annotations

import logging
import os
import sys

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


logger = logging.getLogger("gcreds.config")


def _find_config_files() -> list[Path]:
    """Find all configuration files in order of precedence (lowest first)."""
    files = []

    pyproject = Path("pyproject.toml")
    if pyproject.exists():
        files.append(pyproject)

    gcreds_toml = Path("gcreds.toml")
    if gcreds_toml.exists():
        files.append(gcreds_toml)

    env_config = os.environ.get("GCREDS_CONFIG_FILE")
    if env_config:
        env_path = Path(env_config)
        if env_path.exists():
            files.append(env_path)

    return files


def _load_toml_config() -> dict[str, Any]:
    """Load and merge all TOML configuration files."""
    merged: dict[str, Any] = {}

    for config_file in _find_config_files():
        try:
            data = tomllib.loads(config_file.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", config_file, exc)
            continue

        if config_file.name == "pyproject.toml":
            data = data.get("tool", {}).get("gcreds", {})

        merged = _deep_merge(merged, data)

    return merged


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


# Field names that contain sensitive data and must be redacted in output.
_SENSITIVE_FIELDS: set[str] = {
    "client_secret",
}

_REDACTED = "********"


class GoogleSettings(BaseSettings):
    """Google OAuth2 credentials configuration.

    Environment prefix: GCREDS_GOOGLE__
    Example: GCREDS_GOOGLE__CLIENT_ID=your-client-id
    Example: GCREDS_GOOGLE__CACHE_SIZE=1000

    TOML section: [tool.gcreds.google]
    """

    model_config = SettingsConfigDict(
        env_prefix="GCREDS_GOOGLE__",
        extra="ignore",
    )

    # Client credentials (redirect flow)
    client_id: str = Field(
        default="",
        description="OAuth2 client ID from the Google developer console",
    )
    client_secret: str = Field(
        default="",
        description="OAuth2 client secret from the Google developer console",
    )
    callback_url: str = Field(
        default="",
        description="URL Google redirects back to after the user signs in",
    )
    scope: str = Field(
        default="profile",
        description="Space-separated OAuth2 scopes to request",
    )

    # Token flow
    cache_size: int = Field(
        default=0,
        ge=0,
        description="Maximum cached profiles per profile type (0 = unlimited)",
    )
    token_type: str = Field(
        default="GoogleToken",
        description="Value of the X-token-type header that selects the Google token flow",
    )

    # Endpoints
    authorize_url: str = "https://accounts.google.com/o/oauth2/auth"
    token_url: str = "https://accounts.google.com/o/oauth2/token"  # noqa: S105
    userinfo_url: str = "https://www.googleapis.com/oauth2/v3/userinfo"
    token_userinfo_url: str = "https://www.googleapis.com/oauth2/v2/userinfo"

    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for requests to Google",
    )


class LogSettings(BaseSettings):
    """Logging settings.

    Environment prefix: GCREDS_LOG__
    Example: GCREDS_LOG__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="GCREDS_LOG__",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = "%(name)s - %(levelname)s - %(message)s"


class GCredsSettings(BaseSettings):
    """Main settings aggregating all configuration sections.

    Environment prefix: GCREDS__

    Configuration sources (in order of precedence):
    1. Built-in defaults
    2. pyproject.toml [tool.gcreds] section
    3. ./gcreds.toml (project-level)
    4. GCREDS_CONFIG_FILE
    5. Environment variables (highest priority)
    """

    model_config = SettingsConfigDict(
        env_prefix="GCREDS__",
        env_nested_delimiter="__",
        extra="ignore",
    )

    google: GoogleSettings = Field(default_factory=GoogleSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    def __init__(self, **data: Any) -> None:
        toml_config = _load_toml_config()
        # Only fields actually read from GCREDS_<SECTION>__* are set.
        env_config = {
            "google": GoogleSettings().model_dump(exclude_unset=True),
            "log": LogSettings().model_dump(exclude_unset=True),
        }
        # TOML < environment < explicit keyword arguments.
        merged = _deep_merge(_deep_merge(toml_config, env_config), data)
        super().__init__(**merged)

    def redacted(self) -> dict[str, Any]:
        """Dump all sections with sensitive values masked."""
        data = self.model_dump()
        for section in data.values():
            if not isinstance(section, dict):
                continue
            for field_name in _SENSITIVE_FIELDS & section.keys():
                if section[field_name]:
                    section[field_name] = _REDACTED
        return data


@lru_cache(maxsize=1)
def get_settings() -> GCredsSettings:
    """Get the global settings instance (cached).

    Call clear_settings() to reload configuration.
    """
    return GCredsSettings()


def clear_settings() -> None:
    """Clear the cached settings to force reload."""
    get_settings.cache_clear()


def reload_settings() -> GCredsSettings:
    """Reload settings from all sources."""
    clear_settings()
    return get_settings()
