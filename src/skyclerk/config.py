"""
Configuration management.

All configuration keys for the client live here. Values come from a YAML file
and can be overridden with environment variables:

- SKYCLERK_URL
- SKYCLERK_CLIENT_ID
- SKYCLERK_TIMEOUT (request timeout in seconds)
- SKYCLERK_PING_ENABLED (true/false)
- SKYCLERK_PING_INTERVAL (health-ping interval in seconds)
- SKYCLERK_STATE_DB (path of the local credential database)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_BASE_URL = "https://app.skyclerk.com"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class ServerConfig:
    """Skyclerk server configuration.

    base_url is the single origin used for every request; client_id identifies
    this client to the OAuth endpoints (login and registration).
    """

    base_url: str = DEFAULT_BASE_URL
    client_id: str = ""
    # Matches the default request timeout of the mobile HTTP stack
    timeout_seconds: int = 60


@dataclass
class PingConfig:
    """Subscription health-ping settings."""

    enabled: bool = True
    interval_seconds: float = 10.0


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    ping: PingConfig = field(default_factory=PingConfig)
    state_db_path: Path = field(default_factory=lambda: Path("data/state.db"))

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.server.base_url:
            errors.append("server.base_url is required")
        elif not self.server.base_url.startswith(("http://", "https://")):
            errors.append("server.base_url must start with http:// or https://")

        if self.server.timeout_seconds <= 0:
            errors.append("server.timeout_seconds must be positive")

        if self.ping.interval_seconds <= 0:
            errors.append("ping.interval_seconds must be positive")

        return errors

    def require_valid(self) -> None:
        """Raise ConfigValidationError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    A missing file is not an error: defaults plus environment overrides are
    used instead.
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{config_path}: top level must be a mapping")

    server_data = data.get("server", {}) or {}
    server = ServerConfig(
        base_url=os.environ.get(
            "SKYCLERK_URL", server_data.get("base_url", DEFAULT_BASE_URL)
        ).rstrip("/"),
        client_id=os.environ.get("SKYCLERK_CLIENT_ID", server_data.get("client_id", "")),
        timeout_seconds=_int_setting(
            "SKYCLERK_TIMEOUT", server_data.get("timeout_seconds", 60)
        ),
    )

    ping_data = data.get("ping", {}) or {}
    ping = PingConfig(
        enabled=_bool_setting("SKYCLERK_PING_ENABLED", ping_data.get("enabled", True)),
        interval_seconds=_float_setting(
            "SKYCLERK_PING_INTERVAL", ping_data.get("interval_seconds", 10.0)
        ),
    )

    state_db = os.environ.get("SKYCLERK_STATE_DB", data.get("state_db_path", "data/state.db"))

    return Config(
        server=server,
        ping=ping,
        state_db_path=Path(state_db),
    )


def _int_setting(env_name: str, default) -> int:
    raw = os.environ.get(env_name, "")
    try:
        return int(raw) if raw else int(default)
    except ValueError as e:
        raise ConfigValidationError(f"{env_name} must be an integer, got {raw!r}") from e


def _float_setting(env_name: str, default) -> float:
    raw = os.environ.get(env_name, "")
    try:
        return float(raw) if raw else float(default)
    except ValueError as e:
        raise ConfigValidationError(f"{env_name} must be a number, got {raw!r}") from e


def _bool_setting(env_name: str, default) -> bool:
    raw = os.environ.get(env_name, "")
    value = raw if raw else default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    source = env_name if raw else "ping.enabled"
    raise ConfigValidationError(f"{source} must be true or false, got {value!r}")


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Skyclerk client configuration
#
# Environment variables override these values:
#   SKYCLERK_URL, SKYCLERK_CLIENT_ID, SKYCLERK_TIMEOUT,
#   SKYCLERK_PING_ENABLED, SKYCLERK_PING_INTERVAL, SKYCLERK_STATE_DB

server:
  base_url: "https://app.skyclerk.com"   # Single origin for all API calls
  client_id: "YOUR_CLIENT_ID_HERE"       # OAuth client id (login/register)
  timeout_seconds: 60

# Subscription health-ping (forces logout / paywall)
ping:
  enabled: true
  interval_seconds: 10

# Local credential database (token, user, active workspace)
state_db_path: "data/state.db"
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
