"""
Central data model definitions used across the project.

All records are frozen dataclasses: they are built once while parsing a
page and handed to the caller as immutable values. Sequences are tuples for
the same reason.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple

WEEK_DATE_FORMAT = "%d.%m.%y"


@dataclass(frozen=True)
class Period:
    """
    One class session ("pair") within a day. Any field may be empty when the
    page leaves it out.
    """

    time: str = ""
    kind: str = ""
    title: str = ""
    instructor: str = ""
    location: str = ""


@dataclass(frozen=True)
class Day:
    """
    One day of the schedule grid, e.g. date="01.09", weekday="Пн".
    """

    date: str
    weekday: str
    periods: Tuple[Period, ...] = ()

    @property
    def period_count(self) -> int:
        return len(self.periods)


@dataclass(frozen=True)
class Week:
    """
    An academic week number and its date range label ("01.09.24-07.09.24").
    """

    number: int
    label: str

    def bounds(self) -> Optional[Tuple[datetime, datetime]]:
        """
        Parse the label into (start, end). Returns None if the label is not
        exactly two valid dates joined by "-".
        """
        parts = self.label.split("-")
        if len(parts) != 2:
            return None
        try:
            start = datetime.strptime(parts[0].strip(), WEEK_DATE_FORMAT)
            end = datetime.strptime(parts[1].strip(), WEEK_DATE_FORMAT)
        except ValueError:
            return None
        return start, end


@dataclass(frozen=True)
class Schedule:
    """
    Result of one schedule request.

    current_week is 0 when it was not resolved (day and session requests
    never resolve it).
    """

    group: str
    current_week: int = 0
    days: Tuple[Day, ...] = field(default_factory=tuple)
    weeks: Tuple[Week, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """
        Plain dict form, suitable for json.dumps.
        """
        return asdict(self)
