"""
Error types.

Every failure the package reports is a ScheduleError carrying a numeric
code, so callers can tell the kinds apart without matching on messages:

    1   group string does not match the group pattern
    2   group is not in the site's group listing
    3   no parsed day matches the requested date
    10  page could not be fetched
    11  page could not be parsed
    20  unknown request mode
    21  current date is outside every listed week
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from maischedule.model import Schedule


class ScheduleError(Exception):
    """
    Root schedule error.
    """

    code = 99

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"error code {self.code}: {self.message}"


class GroupShapeError(ScheduleError):
    code = 1


class GroupNotFoundError(ScheduleError):
    code = 2


class DayNotFoundError(ScheduleError):
    code = 3


class FetchError(ScheduleError):
    code = 10


class ParseError(ScheduleError):
    code = 11


class InvalidModeError(ScheduleError):
    code = 20


class UnresolvedWeekError(ScheduleError):
    """
    Raised when no week range contains the current date. The weeks that were
    parsed are still available on `schedule`.
    """

    code = 21

    def __init__(self, message: str, schedule: "Schedule") -> None:
        super().__init__(message)
        self.schedule = schedule
