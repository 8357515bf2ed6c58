"""Configuration loading from YAML and environment.

The config file lives in the user's home directory (``~/.ghprs``) and holds
the organization to list and the GitHub token. Secrets may instead come from
environment variables or from files (GITHUB_TOKEN, GITHUB_TOKEN_FILE).
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "~/.ghprs"


class ConfigError(Exception):
    """Raised when the configuration cannot be used to start a run."""

    pass


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).expanduser().read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub organization, credentials and API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    organization: str | None = Field(default=None, description="Organization whose repositories are listed")
    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    per_page: int = Field(default=30, ge=1, le=100, description="Items per listing page")
    timeout: int = Field(default=30, ge=1, description="HTTP timeout per request in seconds")


class ListerConfig(BaseSettings):
    """Pull request listing behaviour."""

    model_config = SettingsConfigDict(env_prefix="LISTER_", extra="ignore")

    stale_days: int = Field(default=30, ge=0, description="Days without update before a PR is very old")
    # abort: first error ends the run; continue: log it and keep listing
    on_error: Literal["abort", "continue"] = Field(default="abort", description="Error policy")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    lister: ListerConfig = Field(default_factory=ListerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    @property
    def organization_resolved(self) -> str | None:
        """Resolve organization from config or env."""
        org = self.github.organization
        if org and not org.startswith("${"):
            return org
        value = _current_env.get("GITHUB_ORGANIZATION")
        return value.strip() if value else None


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def resolve_config_path(config_path: Path | str | None = None) -> Path:
    """Return the config path with ``~`` expanded (default ~/.ghprs)."""
    return Path(config_path or DEFAULT_CONFIG_PATH).expanduser()


def load_config(config_path: Path | str | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Top-level ``organization`` and ``token`` keys are accepted as shorthand
    for ``github.organization`` and ``github.token``.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = resolve_config_path(config_path)
    if not path.is_file():
        return AppConfig()

    try:
        raw = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Error parsing {path}: expected a mapping")
    raw = _substitute_env(raw)

    github_raw = dict(raw.get("github") or {})
    for key in ("organization", "token"):
        if raw.get(key) and not github_raw.get(key):
            github_raw[key] = raw[key]

    github = GitHubConfig(**github_raw)
    lister = ListerConfig(**(raw.get("lister") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(github=github, lister=lister, logging=logging)


def require_credentials(config: AppConfig) -> tuple[str, str]:
    """Return (organization, token) or raise ConfigError naming what is
    missing."""
    organization = config.organization_resolved
    if not organization:
        raise ConfigError("Configuration file is missing organization")
    token = config.github_token_resolved
    if not token:
        raise ConfigError("Configuration file is missing token")
    return organization, token
