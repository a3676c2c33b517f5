"""Environment-driven configuration objects for the storefront client."""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import API_PATH, API_TIMEOUT_SECONDS, BROKER_MAX_DEPTH, CDN_PATH, MAX_SESSIONS
from .exceptions import ConfigurationException


@dataclass(slots=True)
class ApiConfig:
    origin: str
    timeout: float

    @property
    def api_url(self) -> str:
        return f"{self.origin}{API_PATH}"

    @property
    def cdn_url(self) -> str:
        return f"{self.origin}{CDN_PATH}"


@dataclass(slots=True)
class Settings:
    bot_token: str
    api: ApiConfig
    log_level: str
    broker_max_depth: int
    max_sessions: int = MAX_SESSIONS


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from e


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationException(f"{name} must be a number, got {raw!r}") from e


def load_settings(require_token: bool = True) -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    token = os.getenv("TELEGRAM_BOT_TOKEN", "")
    if require_token and not token:
        raise ConfigurationException("TELEGRAM_BOT_TOKEN environment variable is not set")

    origin = os.getenv("API_ORIGIN", "").strip().rstrip("/")
    if not origin:
        raise ConfigurationException("API_ORIGIN environment variable is not set")

    max_depth = _int_env("BROKER_MAX_DEPTH", BROKER_MAX_DEPTH)
    if max_depth < 1:
        raise ConfigurationException("BROKER_MAX_DEPTH must be positive")

    max_sessions = _int_env("MAX_SESSIONS", MAX_SESSIONS)
    if max_sessions < 1:
        raise ConfigurationException("MAX_SESSIONS must be positive")

    return Settings(
        bot_token=token,
        api=ApiConfig(
            origin=origin,
            timeout=_float_env("API_TIMEOUT", float(API_TIMEOUT_SECONDS)),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        broker_max_depth=max_depth,
        max_sessions=max_sessions,
    )
