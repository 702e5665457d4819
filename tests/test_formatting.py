from datetime import datetime

from core.data_models import BatteryStatus
from core.ui_logic.formatting import (
    format_battery,
    format_date,
    format_progress,
    format_temperature,
    format_time,
)


def test_time_is_twelve_hour_uppercase():
    assert format_time(datetime(2024, 3, 10, 21, 5, 3)) == "09:05:03 PM"
    assert format_time(datetime(2024, 3, 10, 0, 0, 0)) == "12:00:00 AM"


def test_date_is_weekday_and_padded_day():
    assert format_date(datetime(2024, 3, 10)) == "SUNDAY 10"
    assert format_date(datetime(2024, 3, 4)) == "MONDAY 04"


def test_battery_rounds_to_whole_percent():
    assert format_battery(BatteryStatus(level=57.6, charging=False)) == "58%"
    assert format_battery(BatteryStatus()) == "100%"


def test_temperature_badge():
    assert format_temperature("15°C") == "15°"
    assert format_temperature("--") == "--°"


def test_progress_label():
    assert format_progress(7) == "00:07"
    assert format_progress(99) == "00:99"
