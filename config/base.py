"""
Environment-driven configuration.

Values come from a ``.env`` file (python-dotenv) overlaid by the process
environment. A missing Answer Engine key is not a configuration error: it
surfaces as a ServiceError on the first engine call.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOCATION_MODES = ("ip", "fixed", "off", "none")
BATTERY_SOURCES = ("system", "mqtt", "none")


class ConfigurationError(Exception):
    """Raised when a configuration value is present but malformed."""


def _get_float(env: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _get_choice(env: Mapping[str, str], name: str, default: str, choices: tuple) -> str:
    value = (env.get(name) or default).strip().lower()
    if value not in choices:
        raise ConfigurationError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


@dataclass
class BaseConfiguration:
    """Settings shared by every platform."""

    api_key: Optional[str] = None
    model: str = "gemini-2.5-flash"
    api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout: float = 30.0

    location_mode: str = "ip"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    geoip_url: str = "https://ipapi.co/json/"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, *, dotenv: bool = True):
        """
        Build a configuration from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``
            dotenv: If True and ``env`` is None, load ``.env`` first

        Raises:
            ConfigurationError: If a value is present but malformed
        """
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ
        return cls(**cls._fields_from_env(env))

    @classmethod
    def _fields_from_env(cls, env: Mapping[str, str]) -> dict:
        location_mode = _get_choice(env, "HUD_LOCATION_MODE", "ip", LOCATION_MODES)
        latitude = _get_float(env, "HUD_LATITUDE", None)
        longitude = _get_float(env, "HUD_LONGITUDE", None)
        if location_mode == "fixed" and (latitude is None or longitude is None):
            raise ConfigurationError("HUD_LOCATION_MODE=fixed needs HUD_LATITUDE and HUD_LONGITUDE")

        timeout = _get_float(env, "HUD_REQUEST_TIMEOUT", 30.0)
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("HUD_REQUEST_TIMEOUT must be positive")

        return {
            "api_key": env.get("API_KEY") or env.get("GEMINI_API_KEY") or None,
            "model": env.get("HUD_MODEL") or cls.model,
            "api_base_url": env.get("HUD_API_BASE_URL") or cls.api_base_url,
            "request_timeout": timeout,
            "location_mode": location_mode,
            "latitude": latitude,
            "longitude": longitude,
            "geoip_url": env.get("HUD_GEOIP_URL") or cls.geoip_url,
            "log_level": (env.get("HUD_LOG_LEVEL") or cls.log_level).upper(),
        }

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)
