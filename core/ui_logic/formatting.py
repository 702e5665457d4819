"""Display string helpers for the HUD widgets."""
from datetime import datetime

from ..data_models import BatteryStatus

_WEEKDAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")


def format_time(moment: datetime) -> str:
    """12-hour clock with seconds, e.g. ``09:05:03 PM``."""
    return moment.strftime("%I:%M:%S %p").upper()


def format_date(moment: datetime) -> str:
    """Weekday and zero-padded day of month, e.g. ``SUNDAY 05``."""
    return f"{_WEEKDAYS[moment.weekday()]} {moment.day:02d}"


def format_battery(battery: BatteryStatus) -> str:
    return f"{int(battery.level + 0.5)}%"


def format_temperature(temperature: str) -> str:
    """Temperature badge: unit letter and degree sign collapse to a single ``°``."""
    value = temperature.replace("C", "").replace("°", "").strip()
    return f"{value}°"


def format_progress(progress: int) -> str:
    return f"00:{progress:02d}"
