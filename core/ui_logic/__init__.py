"""
UI logic package - portable across platforms.

Feed pane mode selection and display string formatting. No UI framework
dependencies.
"""
from .feed_display import FeedMode, FeedView, select_feed_view
from .formatting import (
    format_battery,
    format_date,
    format_progress,
    format_temperature,
    format_time,
)

__all__ = [
    'FeedMode',
    'FeedView',
    'select_feed_view',
    'format_battery',
    'format_date',
    'format_progress',
    'format_temperature',
    'format_time',
]
