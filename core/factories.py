"""
Factory functions for wiring the HUD from configuration.

Pure functions returning fresh instances; lifecycle stays with the caller.
"""
import logging

from config.base import BaseConfiguration
from config.desktop import DesktopConfiguration

from .api_client import AnswerEngineClient
from .data_models import Coordinates
from .hud_coordinator import HudCoordinator
from .sensors import (
    BatterySensor,
    DeniedLocationSensor,
    FixedLocationSensor,
    IpLocationSensor,
    LocationSensor,
    MqttBatterySensor,
    NullBatterySensor,
    NullLocationSensor,
    SystemBatterySensor,
)

logger = logging.getLogger(__name__)


def make_engine(config: BaseConfiguration) -> AnswerEngineClient:
    if not config.has_api_key:
        logger.warning("No Answer Engine key configured; engine calls will fail")
    return AnswerEngineClient(
        config.api_key,
        model=config.model,
        base_url=config.api_base_url,
        timeout=config.request_timeout,
    )


def make_location_sensor(config: BaseConfiguration) -> LocationSensor:
    if config.location_mode == "fixed":
        return FixedLocationSensor(Coordinates(config.latitude, config.longitude))
    if config.location_mode == "off":
        return DeniedLocationSensor()
    if config.location_mode == "none":
        return NullLocationSensor()
    return IpLocationSensor(config.geoip_url, timeout=config.request_timeout)


def make_battery_sensor(config: DesktopConfiguration) -> BatterySensor:
    if config.battery_source == "mqtt":
        return MqttBatterySensor(config.mqtt_host, config.mqtt_port, config.mqtt_topic)
    if config.battery_source == "system":
        return SystemBatterySensor(config.battery_poll_interval)
    return NullBatterySensor()


def make_coordinator(config: DesktopConfiguration) -> HudCoordinator:
    """Build a coordinator with the engine and sensors the config selects."""
    return HudCoordinator(
        make_engine(config),
        battery_sensor=make_battery_sensor(config),
        location_sensor=make_location_sensor(config),
        tick_interval=config.tick_interval,
    )


__all__ = ["make_engine", "make_location_sensor", "make_battery_sensor", "make_coordinator"]
