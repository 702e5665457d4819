"""Device Sensor Bridge: battery observation and one-shot geolocation."""
import logging
from typing import Optional

from .data_models import BatteryStatus, Coordinates
from .errors import SensorUnavailable
from .hud_state import HudState, Slot
from .sensors import BatterySensor, LocationSensor, NullBatterySensor, NullLocationSensor, Subscription

logger = logging.getLogger(__name__)


class DeviceSensorBridge:
    """Sole writer of the battery slot."""

    def __init__(
        self,
        state: HudState,
        battery_sensor: Optional[BatterySensor] = None,
        location_sensor: Optional[LocationSensor] = None,
    ) -> None:
        self._battery = state.claim(Slot.BATTERY, "device_bridge")
        self.battery_sensor = battery_sensor or NullBatterySensor()
        self.location_sensor = location_sensor or NullLocationSensor()
        self._subscription: Optional[Subscription] = None
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def battery_available(self) -> bool:
        return self._subscription is not None

    def activate(self) -> None:
        if self._active:
            return
        self._active = True
        try:
            self._subscription = self.battery_sensor.observe(self._on_battery)
        except SensorUnavailable as exc:
            # Battery stays at its optimistic default for the whole session.
            logger.info("Battery capability unavailable: %s", exc)
            self._subscription = None

    def deactivate(self) -> None:
        self._active = False
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.close()

    def _on_battery(self, status: BatteryStatus) -> None:
        if not self._active:
            logger.debug("Dropping battery update after teardown")
            return
        self._battery.set(status)

    async def get_position(self) -> Coordinates:
        """Delegate to the location sensor; errors propagate to the caller."""
        return await self.location_sensor.get_position()
