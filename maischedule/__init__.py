"""
maischedule: MAI class schedule scraper.

Fetches the published schedule for a student group and returns it as
structured records (days, periods, academic weeks).
"""

from maischedule.config import ScheduleConfig
from maischedule.errors import ScheduleError
from maischedule.model import Day, Period, Schedule, Week
from maischedule.schedule import (
    ScheduleClient,
    get_day_schedule,
    get_session_schedule,
    get_week_schedule,
    validate_group,
)

__all__ = [
    "Day",
    "Period",
    "Schedule",
    "ScheduleClient",
    "ScheduleConfig",
    "ScheduleError",
    "Week",
    "get_day_schedule",
    "get_session_schedule",
    "get_week_schedule",
    "validate_group",
]
