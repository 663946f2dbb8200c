"""
Schedule assembly.

Ties validation, fetching and parsing together for the three request kinds:

- day      ("today", "tomorrow")
- week     ("thisweeknum", "thisweek", "nextweek", "<N>week")
- session  (exam period)

Every request validates the group first and makes its fetches one after
another; nothing is cached between calls.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

from maischedule.config import ScheduleConfig
from maischedule.errors import (
    DayNotFoundError,
    InvalidModeError,
    ScheduleError,
    UnresolvedWeekError,
)
from maischedule.fetch import DocumentFetcher
from maischedule.model import Schedule
from maischedule.parse import parse_days, parse_weeks
from maischedule import validate as validation

logger = logging.getLogger(__name__)

DAY_DATE_FORMAT = "%d.%m"

# mode -> (days ahead of today, day containers to scan)
DAY_MODES = {
    "today": (0, 1),
    "tomorrow": (1, 2),
}

WEEK_MODES = ("thisweeknum", "thisweek", "nextweek")
NUMBERED_WEEK_RE = re.compile(r"(\d{1,2})week")


def _check_week_mode(mode: str) -> None:
    if mode not in WEEK_MODES and not NUMBERED_WEEK_RE.fullmatch(mode):
        raise InvalidModeError(f"wrong mode '{mode}'")


def target_week(mode: str, current_week: int) -> int:
    """
    Resolve a week mode to the week number to display.
    """
    if mode == "thisweek":
        return current_week
    if mode == "nextweek":
        return current_week + 1
    m = NUMBERED_WEEK_RE.fullmatch(mode)
    if m:
        return int(m.group(1))
    raise InvalidModeError(f"wrong mode '{mode}'")


class ScheduleClient:
    """
    Entry point for schedule requests.

    `fetcher` needs a `fetch(url, params=None)` method returning a
    BeautifulSoup document; `clock` returns the current datetime.
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        fetcher=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or ScheduleConfig()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or DocumentFetcher(self.config)
        self.clock = clock

    def close(self) -> None:
        """
        Release the HTTP session of a fetcher this client created. An
        injected fetcher is left to its owner.
        """
        if self._owns_fetcher:
            self.fetcher.close()

    def __enter__(self) -> "ScheduleClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -----------------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------------

    def validate_group(self, group: str) -> Tuple[int, Optional[ScheduleError]]:
        return validation.validate_group(group, self.fetcher, self.config)

    def _ensure_group(self, group: str) -> None:
        validation.ensure_group(group, self.fetcher, self.config)

    # -----------------------------------------------------------------------
    # Requests
    # -----------------------------------------------------------------------

    def get_day_schedule(self, mode: str, group: str) -> Schedule:
        """
        Schedule of a single day ("today" or "tomorrow").

        Raises DayNotFoundError if the page has no entry for that date.
        """
        self._ensure_group(group)

        if mode not in DAY_MODES:
            raise InvalidModeError(f"wrong mode '{mode}'")
        offset, max_count = DAY_MODES[mode]
        date = (self.clock() + timedelta(days=offset)).strftime(DAY_DATE_FORMAT)

        page = self.fetcher.fetch(self.config.detail_url(), params={"group": group})
        for day in parse_days(page, max_count):
            if day.date == date:
                logger.info("found %s (%s) for %s", date, mode, group)
                return Schedule(group=group, days=(day,))

        raise DayNotFoundError(f"no schedule for {date} ({mode}) for group '{group}'")

    def get_week_schedule(self, mode: str, group: str) -> Schedule:
        """
        Week list plus, except for "thisweeknum", the days of the requested
        week.

        Raises UnresolvedWeekError (carrying the parsed weeks) if today is
        outside every listed week.
        """
        self._ensure_group(group)
        _check_week_mode(mode)

        url = self.config.detail_url()
        page = self.fetcher.fetch(url, params={"group": group})
        weeks, current = parse_weeks(page, self.clock())
        schedule = Schedule(group=group, current_week=current, weeks=tuple(weeks))

        if current == 0:
            raise UnresolvedWeekError(
                "current week doesn't correspond to any schedule week", schedule
            )
        if mode == "thisweeknum":
            return schedule

        week = target_week(mode, current)
        logger.info("fetching week %d for %s", week, group)
        page = self.fetcher.fetch(url, params={"group": group, "week": week})
        return Schedule(
            group=group,
            current_week=current,
            days=tuple(parse_days(page, 0)),
            weeks=schedule.weeks,
        )

    def get_session_schedule(self, group: str) -> Schedule:
        """
        Exam session schedule (all days on the session page).
        """
        self._ensure_group(group)

        page = self.fetcher.fetch(self.config.session_url(), params={"group": group})
        return Schedule(group=group, days=tuple(parse_days(page, 0)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_group(group: str) -> Tuple[int, Optional[ScheduleError]]:
    with ScheduleClient(ScheduleConfig.from_env()) as client:
        return client.validate_group(group)


def get_day_schedule(mode: str, group: str) -> Schedule:
    with ScheduleClient(ScheduleConfig.from_env()) as client:
        return client.get_day_schedule(mode, group)


def get_week_schedule(mode: str, group: str) -> Schedule:
    with ScheduleClient(ScheduleConfig.from_env()) as client:
        return client.get_week_schedule(mode, group)


def get_session_schedule(group: str) -> Schedule:
    with ScheduleClient(ScheduleConfig.from_env()) as client:
        return client.get_session_schedule(group)
