#!/usr/bin/env python3
"""Headless HUD monitor: runs the core without Qt and logs every state change.

Usage: python hud_console.py [SECONDS] [SEARCH QUERY...]
"""

import asyncio
import logging
import sys

from config import ConfigurationError, DesktopConfiguration
from core.factories import make_coordinator
from core.hud_state import Slot
from core.ui_logic.formatting import format_battery, format_progress, format_time

logger = logging.getLogger("hud_console")


async def monitor(config: DesktopConfiguration, seconds: int, query: str) -> None:
    coordinator = make_coordinator(config)

    def on_change(slot: Slot) -> None:
        state = coordinator.state
        if slot is Slot.CLOCK:
            logger.debug("Clock %s", format_time(state.clock.timestamp))
        elif slot is Slot.BATTERY:
            logger.info("Battery %s charging=%s", format_battery(state.battery), state.battery.charging)
        elif slot is Slot.WEATHER:
            weather = state.weather
            logger.info("Weather [%s] %s | %s | %s", weather.status.value,
                        weather.location, weather.temperature, weather.condition)
        elif slot is Slot.PLAYBACK:
            logger.debug("Playback %s %s", coordinator.current_track.title,
                         format_progress(state.playback.progress))
        else:
            view = coordinator.feed_view()
            logger.info("Feed [%s] %s", view.mode.value, view.header)
            for line in view.lines:
                logger.info("  %s", line)
            for citation in view.citations:
                logger.info("  -> %s <%s>", citation.title, citation.uri)

    coordinator.add_listener(on_change)
    await coordinator.start()
    try:
        if query:
            coordinator.submit_search(query)
        await asyncio.sleep(seconds)
    finally:
        coordinator.remove_listener(on_change)
        await coordinator.stop()


def main() -> int:
    try:
        config = DesktopConfiguration.from_env()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 1

    logging.basicConfig(level=config.log_level,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    args = sys.argv[1:]
    seconds = 30
    if args and args[0].isdigit():
        seconds = int(args.pop(0))
    query = " ".join(args)

    print(f"=== HUD monitor for {seconds} seconds ===")
    try:
        asyncio.run(monitor(config, seconds, query))
    except KeyboardInterrupt:
        pass
    print("Monitor complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
