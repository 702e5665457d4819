"""Desktop configuration: adds the battery source and the timer periods."""
from dataclasses import dataclass
from typing import Mapping, Optional

from .base import BATTERY_SOURCES, BaseConfiguration, ConfigurationError, _get_choice, _get_float, _get_int


@dataclass
class DesktopConfiguration(BaseConfiguration):
    battery_source: str = "system"
    battery_poll_interval: float = 30.0

    mqtt_host: Optional[str] = None
    mqtt_port: int = 1883
    mqtt_topic: str = "hud/battery"

    tick_interval: float = 1.0

    @classmethod
    def _fields_from_env(cls, env: Mapping[str, str]) -> dict:
        fields = super()._fields_from_env(env)
        poll_interval = _get_float(env, "HUD_BATTERY_POLL_INTERVAL", 30.0)
        if poll_interval <= 0:
            raise ConfigurationError("HUD_BATTERY_POLL_INTERVAL must be positive")
        mqtt_host = env.get("HUD_MQTT_HOST") or None
        # An MQTT host implies the MQTT battery source unless told otherwise.
        default_source = "mqtt" if mqtt_host else "system"
        fields.update(
            battery_source=_get_choice(env, "HUD_BATTERY_SOURCE", default_source, BATTERY_SOURCES),
            battery_poll_interval=poll_interval,
            mqtt_host=mqtt_host,
            mqtt_port=_get_int(env, "HUD_MQTT_PORT", 1883),
            mqtt_topic=env.get("HUD_MQTT_TOPIC") or cls.mqtt_topic,
        )
        return fields
