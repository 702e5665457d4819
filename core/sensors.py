"""
Device capability providers.

Battery and location sources behind small polymorphic interfaces. A missing
capability is modelled as a null provider that always reports
``SensorUnavailable`` instead of ad hoc ``None`` checks at the call sites.
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import paho.mqtt.client as mqtt
import psutil
import requests

from .data_models import BatteryStatus, Coordinates
from .errors import SensorDenied, SensorUnavailable
from .timers import RecurringTimer, SleepFunc

logger = logging.getLogger(__name__)

BatteryCallback = Callable[[BatteryStatus], None]


class Subscription(ABC):
    """Registration handle returned by ``BatterySensor.observe``."""

    @abstractmethod
    def close(self) -> None:
        """Release the registration; no callbacks fire afterwards."""


class BatterySensor(ABC):

    @abstractmethod
    def observe(self, callback: BatteryCallback) -> Subscription:
        """
        Register for battery change notifications.

        Must be called from the event loop thread; callbacks are always
        delivered on that loop.

        Raises:
            SensorUnavailable: If the battery capability is absent
        """


class LocationSensor(ABC):

    @abstractmethod
    async def get_position(self) -> Coordinates:
        """
        One-shot position lookup.

        Raises:
            SensorDenied: If the user refused location access
            SensorUnavailable: If no position can be obtained
        """


# ---------------------------------------------------------------------------
# Battery providers
# ---------------------------------------------------------------------------
class NullBatterySensor(BatterySensor):
    def observe(self, callback: BatteryCallback) -> Subscription:
        raise SensorUnavailable("battery capability not present")


class _TimerSubscription(Subscription):
    def __init__(self, timer: RecurringTimer) -> None:
        self._timer = timer

    def close(self) -> None:
        self._timer.stop()


class SystemBatterySensor(BatterySensor):
    """Polls the host battery through psutil and reports changes only."""

    def __init__(self, poll_interval: float = 30.0, *, sleep: Optional[SleepFunc] = None) -> None:
        self.poll_interval = poll_interval
        self._sleep = sleep

    def _read(self) -> Optional[BatteryStatus]:
        try:
            battery = psutil.sensors_battery()
        except (AttributeError, NotImplementedError, OSError) as exc:
            logger.debug("psutil battery read failed: %s", exc)
            return None
        if battery is None:
            return None
        return BatteryStatus(level=battery.percent, charging=bool(battery.power_plugged))

    def observe(self, callback: BatteryCallback) -> Subscription:
        initial = self._read()
        if initial is None:
            raise SensorUnavailable("no system battery reported")
        callback(initial)
        last = [initial]

        def poll() -> None:
            status = self._read()
            if status is not None and status != last[0]:
                last[0] = status
                callback(status)

        timer = RecurringTimer(self.poll_interval, poll, name="battery-poll", sleep=self._sleep)
        timer.start()
        return _TimerSubscription(timer)


def parse_battery_payload(payload: bytes | str) -> Optional[BatteryStatus]:
    """
    Decode a device status message into a BatteryStatus.

    Accepts ``level``/``batteryLevel`` (percent) and ``charging``/``isCharging``.

    Returns:
        BatteryStatus, or None if the payload carries no battery level
    """
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8", errors="replace")
    if not payload:
        return None
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    level = data.get("level", data.get("batteryLevel"))
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        return None
    charging = data.get("charging", data.get("isCharging", False))
    return BatteryStatus(level=level, charging=bool(charging))


class _MqttSubscription(Subscription):
    def __init__(self, client: mqtt.Client) -> None:
        self._client: Optional[mqtt.Client] = client

    def close(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            client.loop_stop()
            client.disconnect()
        except Exception as e:
            logger.error("Error during MQTT disconnect: %s", e)


class MqttBatterySensor(BatterySensor):
    """Battery updates published by a device on an MQTT status topic."""

    def __init__(
        self,
        host: Optional[str],
        port: int = 1883,
        topic: str = "hud/battery",
        *,
        client_id: str = "hud-core",
    ) -> None:
        self.host = host
        self.port = port
        self.topic = topic
        self.client_id = client_id

    def _create_client(self) -> mqtt.Client:
        return mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=self.client_id)

    def observe(self, callback: BatteryCallback) -> Subscription:
        if not self.host:
            raise SensorUnavailable("no MQTT broker configured for battery updates")

        loop = asyncio.get_running_loop()
        client = self._create_client()
        topic = self.topic

        def on_connect(client, userdata, connect_flags, reason_code, properties=None):
            rc = reason_code.value if hasattr(reason_code, "value") else reason_code
            if rc != 0:
                logger.error("MQTT connection failed with code %s", rc)
                return
            result = client.subscribe(topic)
            if result[0] != mqtt.MQTT_ERR_SUCCESS:
                logger.error("Failed to subscribe to %s: %s", topic, result[0])

        def on_message(client, userdata, message, properties=None):
            status = parse_battery_payload(message.payload)
            if status is None:
                logger.debug("Ignoring MQTT payload on %s", message.topic)
                return
            # paho runs callbacks on its network thread
            loop.call_soon_threadsafe(callback, status)

        client.on_connect = on_connect
        client.on_message = on_message

        try:
            client.connect_async(host=self.host, port=self.port, keepalive=60)
            client.loop_start()
        except (OSError, ValueError) as e:
            raise SensorUnavailable(f"MQTT connect error: {e}") from e

        logger.info("Observing battery on mqtt://%s:%s/%s", self.host, self.port, topic)
        return _MqttSubscription(client)


# ---------------------------------------------------------------------------
# Location providers
# ---------------------------------------------------------------------------
class NullLocationSensor(LocationSensor):
    async def get_position(self) -> Coordinates:
        raise SensorUnavailable("geolocation capability not present")


class DeniedLocationSensor(LocationSensor):
    """Location sharing switched off by the user."""

    async def get_position(self) -> Coordinates:
        raise SensorDenied("location permission denied")


class FixedLocationSensor(LocationSensor):
    def __init__(self, coordinates: Coordinates) -> None:
        self.coordinates = coordinates

    async def get_position(self) -> Coordinates:
        return self.coordinates


class IpLocationSensor(LocationSensor):
    """Approximate position from an IP geolocation service."""

    def __init__(
        self,
        url: str = "https://ipapi.co/json/",
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    async def get_position(self) -> Coordinates:
        return await asyncio.to_thread(self._lookup)

    def _lookup(self) -> Coordinates:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SensorUnavailable(f"geolocation lookup failed: {e}") from e

        if response.status_code != 200:
            raise SensorUnavailable(f"geolocation lookup returned HTTP {response.status_code}")

        try:
            data: Any = response.json()
        except ValueError as e:
            raise SensorUnavailable("geolocation lookup returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise SensorUnavailable("geolocation lookup returned no coordinates")

        latitude = data.get("latitude", data.get("lat"))
        longitude = data.get("longitude", data.get("lon"))
        try:
            return Coordinates(latitude=float(latitude), longitude=float(longitude))
        except (TypeError, ValueError) as e:
            raise SensorUnavailable("geolocation lookup returned no coordinates") from e
