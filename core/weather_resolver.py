"""
Weather Resolver.

Combines a one-shot position lookup with a grounded Answer Engine prompt and
writes a WeatherReading. Every failure mode maps to a fixed reading, so the
weather widget always shows something.

Concurrent resolutions are allowed to race; whichever completes last wins.
"""
import logging
from typing import List

from .api_client import AnswerEngineClient
from .data_models import Coordinates, WeatherReading, WeatherStatus
from .device_bridge import DeviceSensorBridge
from .errors import MalformedResponse, SensorDenied, SensorUnavailable, ServiceError
from .hud_state import HudState, Slot

logger = logging.getLogger(__name__)

WEATHER_PROMPT = (
    "What is the current weather at latitude {latitude}, longitude {longitude}? "
    'Return a string strictly in this format: "LocationName | Temperature | Condition". '
    'Example: "Tokyo | 15°C | Rainy". Keep it brief.'
)

GPS_ERROR_READING = WeatherReading(
    temperature="--",
    condition="NO SIGNAL",
    location="GPS ERROR",
    status=WeatherStatus.ERROR,
)
OFFLINE_READING = WeatherReading(
    temperature="ERR",
    condition="OFFLINE",
    location="UNKNOWN",
    status=WeatherStatus.ERROR,
)
DEGRADED_CONDITION = "DATA RECEIVED"
DEGRADED_LOCATION = "LOCAL"


def build_weather_prompt(position: Coordinates) -> str:
    return WEATHER_PROMPT.format(latitude=position.latitude, longitude=position.longitude)


def parse_weather_text(text: str) -> WeatherReading:
    """
    Parse ``location | temperature | condition``.

    Extra segments are ignored.

    Raises:
        MalformedResponse: If fewer than three segments are present
    """
    parts: List[str] = [segment.strip() for segment in text.split("|")]
    if len(parts) < 3:
        raise MalformedResponse("expected 'location | temperature | condition'", text=text)
    return WeatherReading(
        location=parts[0],
        temperature=parts[1],
        condition=parts[2],
        status=WeatherStatus.RESOLVED,
    )


class WeatherResolver:
    """Sole writer of the weather slot."""

    def __init__(
        self,
        state: HudState,
        sensors: DeviceSensorBridge,
        engine: AnswerEngineClient,
    ) -> None:
        self._weather = state.claim(Slot.WEATHER, "weather_resolver")
        self.sensors = sensors
        self.engine = engine

    async def resolve(self) -> WeatherReading:
        """Run one resolution attempt and return the reading it committed."""
        try:
            position = await self.sensors.get_position()
        except (SensorDenied, SensorUnavailable) as exc:
            logger.warning("Geolocation failed: %s", exc)
            return self._commit(GPS_ERROR_READING)

        try:
            answer = await self.engine.ask(build_weather_prompt(position), grounding_enabled=True)
        except ServiceError as exc:
            logger.error("Weather fetch failed: %s", exc)
            return self._commit(OFFLINE_READING)

        try:
            reading = parse_weather_text(answer.text)
        except MalformedResponse as exc:
            logger.warning("Unparseable weather answer %r: %s", exc.text[:80], exc)
            # Temperature survives from whatever the slot held before.
            previous = self._weather.get()
            reading = WeatherReading(
                temperature=previous.temperature,
                condition=DEGRADED_CONDITION,
                location=DEGRADED_LOCATION,
                status=WeatherStatus.DEGRADED,
            )

        logger.info("Weather: %s %s %s", reading.location, reading.temperature, reading.condition)
        return self._commit(reading)

    def _commit(self, reading: WeatherReading) -> WeatherReading:
        self._weather.set(reading)
        return reading
