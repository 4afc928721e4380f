"""Process-wide relay settings, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0"

RELAY_MODES = ("html", "redirect")
SCHEMES = ("http", "https")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class RelayConfig:
    origin_host: str = "seesaawiki.jp"
    origin_scheme: str = "https"
    relay_host: str = "seesaawiki.gaato.net"
    display_scheme: str = "http"
    relay_mode: str = "html"
    fetch_timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    listen_host: str = "0.0.0.0"
    listen_port: int = 1323
    log_level: str = "INFO"

    def __post_init__(self):
        if self.relay_mode not in RELAY_MODES:
            raise ConfigError(f"relay_mode must be one of {', '.join(RELAY_MODES)}")
        if self.origin_scheme not in SCHEMES:
            raise ConfigError("origin_scheme must be 'http' or 'https'")
        if self.display_scheme not in SCHEMES:
            raise ConfigError("display_scheme must be 'http' or 'https'")
        if not self.origin_host or not self.relay_host:
            raise ConfigError("origin_host and relay_host must be non-empty")
        if self.fetch_timeout <= 0:
            raise ConfigError("fetch_timeout must be positive")
        if not (1 <= self.listen_port <= 65535):
            raise ConfigError("listen_port must be between 1 and 65535")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    @property
    def origin_base(self) -> str:
        return f"{self.origin_scheme}://{self.origin_host}/"

    @classmethod
    def from_env(cls, environ=None) -> "RelayConfig":
        env = os.environ if environ is None else environ
        return cls(
            origin_host=_env_str(env, "SEESAA_RELAY_ORIGIN_HOST", "seesaawiki.jp"),
            origin_scheme=_env_str(env, "SEESAA_RELAY_ORIGIN_SCHEME", "https").lower(),
            relay_host=_env_str(env, "SEESAA_RELAY_HOST_ALIAS", "seesaawiki.gaato.net"),
            display_scheme=_env_str(env, "SEESAA_RELAY_DISPLAY_SCHEME", "http").lower(),
            relay_mode=_env_str(env, "SEESAA_RELAY_MODE", "html").lower(),
            fetch_timeout=_env_float(env, "SEESAA_RELAY_FETCH_TIMEOUT", 15.0),
            user_agent=_env_str(env, "USER_AGENT", DEFAULT_USER_AGENT),
            listen_host=_env_str(env, "SEESAA_RELAY_LISTEN_HOST", "0.0.0.0"),
            listen_port=_env_int(env, "SEESAA_RELAY_LISTEN_PORT", 1323),
            log_level=_env_str(env, "SEESAA_RELAY_LOG_LEVEL", "INFO").upper(),
        )


def _env_str(env, key: str, default: str) -> str:
    value = env.get(key, "").strip()
    return value or default


def _env_float(env, key: str, default: float) -> float:
    value = env.get(key, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number") from exc


def _env_int(env, key: str, default: int) -> int:
    value = env.get(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer") from exc
