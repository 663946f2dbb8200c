"""
Parsing (schedule HTML -> structured records).

The site renders one fixed markup schema:

    div#schedule-content
        div.sc-container                      one per day
            div.sc-table-col.sc-day-header    "01.09Пн"
            div.sc-table.sc-table-detail
                div.sc-table-row              one per period
        table.table tr td                     week number / date range cells

Parsing is a pure function of the document: no network, no clock unless the
caller passes one in.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from maischedule.errors import ParseError
from maischedule.model import Day, Period, Week

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

CONTENT_SELECTOR = "div#schedule-content"
DAY_SELECTOR = "div.sc-container"
DAY_HEADER_SELECTOR = "div.sc-table-col.sc-day-header"
PERIOD_ROW_SELECTOR = "div.sc-table.sc-table-detail div.sc-table-row"
WEEK_CELL_SELECTOR = "table.table tr td"

PERIOD_FIELD_SELECTORS = {
    "time": "div.sc-table-col.sc-item-time",
    "kind": "div.sc-table-col.sc-item-type",
    "title": "span.sc-title",
    "instructor": "span.sc-lecturer",
    "location": "div.sc-table-col.sc-item-location",
}

# date = leading run of digits and dots, weekday = following run of letters
_HEADER_RE = re.compile(r"^\s*([\d.]*)\s*([^\W\d_]*)")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _content_regions(document: BeautifulSoup) -> List[Tag]:
    regions = document.select(CONTENT_SELECTOR)
    if not regions:
        raise ParseError(f"schedule page has no {CONTENT_SELECTOR} region")
    return regions


def _text(parent: Tag, selector: str) -> str:
    """
    Trimmed text of all elements matching `selector`, "" if none match.
    """
    return "".join(el.get_text(strip=True) for el in parent.select(selector))


def split_day_header(header: str) -> Tuple[str, str]:
    """
    Split a day header such as "01.09Пн" (or "01.09 Пн") into
    (date, weekday).
    """
    m = _HEADER_RE.match(header)
    if not m:
        return "", ""
    return m.group(1), m.group(2)


# ---------------------------------------------------------------------------
# Days
# ---------------------------------------------------------------------------


def parse_period(row: Tag) -> Period:
    """
    Extract one period from a `div.sc-table-row`. Missing columns give "".
    """
    return Period(**{name: _text(row, sel) for name, sel in PERIOD_FIELD_SELECTORS.items()})


def parse_day(container: Tag) -> Day:
    date, weekday = split_day_header(_text(container, DAY_HEADER_SELECTOR))
    periods = tuple(parse_period(row) for row in container.select(PERIOD_ROW_SELECTOR))
    return Day(date=date, weekday=weekday, periods=periods)


def parse_days(document: BeautifulSoup, max_count: int = 0) -> List[Day]:
    """
    Parse day containers in document order.

    max_count == 0 parses every container, otherwise at most max_count.
    """
    days: List[Day] = []
    for region in _content_regions(document):
        for container in region.select(DAY_SELECTOR):
            if max_count and len(days) >= max_count:
                break
            days.append(parse_day(container))

    logger.debug("parsed %d day(s)", len(days))
    return days


# ---------------------------------------------------------------------------
# Weeks
# ---------------------------------------------------------------------------


def normalize_week_label(label: str, year: int) -> str:
    """
    "01.09.2024 - 07.09.2024" -> "01.09.24-07.09.24" (for year=2024).

    Labels already in short form are returned unchanged.
    """
    label = label.replace(" - ", "-")
    full_year = f"{year:04d}"
    return label.replace(full_year, full_year[-2:])


def _week_number(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def pair_week_cells(cells: Iterable[str], year: int) -> List[Week]:
    """
    Fold a flat cell sequence [num, label, num, label, ...] into weeks.

    A trailing number without its label is dropped.
    """
    weeks: List[Week] = []
    pending: Optional[int] = None
    for index, text in enumerate(cells):
        if index % 2 == 0:
            pending = _week_number(text)
        else:
            weeks.append(Week(number=pending or 0, label=normalize_week_label(text, year)))
            pending = None
    return weeks


def find_current_week(weeks: Iterable[Week], now: datetime) -> int:
    """
    Return the number of the first week whose range strictly contains `now`,
    or 0 when none does. Weeks with malformed labels are skipped.
    """
    for week in weeks:
        bounds = week.bounds()
        if bounds is None:
            logger.debug("skipping week %d with malformed label %r", week.number, week.label)
            continue
        start, end = bounds
        if start < now < end:
            return week.number
    return 0


def parse_weeks(document: BeautifulSoup, now: Optional[datetime] = None) -> Tuple[List[Week], int]:
    """
    Parse the week table and determine which week contains `now`.

    Returns:
        (weeks, current_week) where current_week is 0 if unresolved.
    """
    now = now or datetime.now()
    cells = [
        cell.get_text(strip=True)
        for region in _content_regions(document)
        for cell in region.select(WEEK_CELL_SELECTOR)
    ]
    weeks = pair_week_cells(cells, now.year)
    current = find_current_week(weeks, now)

    logger.debug("parsed %d week(s), current week %d", len(weeks), current)
    return weeks, current
