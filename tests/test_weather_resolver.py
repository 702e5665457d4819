import asyncio

import pytest

from conftest import FakeEngine, FakeLocationSensor, settle
from core.data_models import Coordinates, WeatherReading, WeatherStatus
from core.device_bridge import DeviceSensorBridge
from core.errors import MalformedResponse, SensorDenied, SensorUnavailable, ServiceError
from core.hud_state import HudState
from core.weather_resolver import WeatherResolver, build_weather_prompt, parse_weather_text


def make_resolver(engine, location=None):
    state = HudState()
    bridge = DeviceSensorBridge(state, location_sensor=location or FakeLocationSensor())
    return state, WeatherResolver(state, bridge, engine)


@pytest.mark.asyncio
async def test_resolves_pipe_delimited_answer(engine):
    engine.queue("Tokyo | 15°C | Rainy")
    state, resolver = make_resolver(engine)

    await resolver.resolve()

    assert state.weather.location == "Tokyo"
    assert state.weather.temperature == "15°C"
    assert state.weather.condition == "Rainy"
    assert state.weather.status is WeatherStatus.RESOLVED


@pytest.mark.asyncio
async def test_prompt_embeds_coordinates_and_uses_grounding(engine):
    engine.queue("Oslo | -2°C | Snow")
    _, resolver = make_resolver(engine, FakeLocationSensor(Coordinates(59.91, 10.75)))

    await resolver.resolve()

    prompt, grounded = engine.calls[0]
    assert "latitude 59.91" in prompt
    assert "longitude 10.75" in prompt
    assert grounded is True


@pytest.mark.asyncio
async def test_extra_segments_are_ignored(engine):
    engine.queue("  Paris|  20°C |Sunny | humid | windy ")
    state, resolver = make_resolver(engine)

    await resolver.resolve()

    assert (state.weather.location, state.weather.temperature, state.weather.condition) == (
        "Paris", "20°C", "Sunny",
    )


@pytest.mark.asyncio
async def test_malformed_answer_degrades_but_keeps_temperature(engine):
    engine.queue("Tokyo | 15°C | Rainy", "sunny today")
    state, resolver = make_resolver(engine)

    await resolver.resolve()
    await resolver.resolve()

    assert state.weather.temperature == "15°C"
    assert state.weather.condition == "DATA RECEIVED"
    assert state.weather.location == "LOCAL"
    assert state.weather.status is WeatherStatus.DEGRADED


@pytest.mark.asyncio
async def test_malformed_first_answer_keeps_initial_placeholder(engine):
    engine.queue("Tokyo | 15°C")
    state, resolver = make_resolver(engine)

    await resolver.resolve()

    assert state.weather.temperature == "--"
    assert state.weather.condition == "DATA RECEIVED"


@pytest.mark.asyncio
async def test_permission_denied_gives_gps_error(engine):
    state, resolver = make_resolver(engine, FakeLocationSensor(SensorDenied("no")))

    await resolver.resolve()

    assert state.weather == WeatherReading(
        temperature="--", condition="NO SIGNAL", location="GPS ERROR", status=WeatherStatus.ERROR,
    )
    assert engine.calls == []


@pytest.mark.asyncio
async def test_missing_geolocation_gives_gps_error(engine):
    state, resolver = make_resolver(engine, FakeLocationSensor(SensorUnavailable("none")))

    await resolver.resolve()

    assert state.weather.location == "GPS ERROR"


@pytest.mark.asyncio
async def test_service_error_gives_offline(engine):
    engine.queue(ServiceError("down"))
    state, resolver = make_resolver(engine)

    await resolver.resolve()

    assert (state.weather.temperature, state.weather.condition, state.weather.location) == (
        "ERR", "OFFLINE", "UNKNOWN",
    )


@pytest.mark.asyncio
async def test_concurrent_rescans_last_completion_wins():
    loop = asyncio.get_running_loop()
    slow, fast = loop.create_future(), loop.create_future()
    engine = FakeEngine()
    engine.queue(slow, fast)
    state, resolver = make_resolver(engine)

    first = asyncio.create_task(resolver.resolve())
    second = asyncio.create_task(resolver.resolve())
    await settle()
    fast.set_result("Lima | 18°C | Cloudy")
    await second
    slow.set_result("Quito | 12°C | Fog")
    await first

    assert state.weather.location == "Quito"


def test_parse_rejects_short_text():
    with pytest.raises(MalformedResponse):
        parse_weather_text("sunny today")


def test_build_prompt_format():
    prompt = build_weather_prompt(Coordinates(1.5, -2.25))
    assert prompt.startswith("What is the current weather at latitude 1.5, longitude -2.25?")
    assert '"LocationName | Temperature | Condition"' in prompt


class ListBodyResponse:
    status_code = 200

    def json(self):
        return []


class ListBodySession:
    def get(self, url, timeout=None):
        return ListBodyResponse()


@pytest.mark.asyncio
async def test_geolocation_body_without_coordinates_shows_gps_error(engine):
    from core.sensors import IpLocationSensor

    state, resolver = make_resolver(engine, IpLocationSensor(session=ListBodySession()))

    await resolver.resolve()

    assert state.weather.location == "GPS ERROR"
    assert state.weather.status is WeatherStatus.ERROR
    assert engine.calls == []
