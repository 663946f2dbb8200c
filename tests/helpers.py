"""
Shared fixtures for the tests: inline HTML pages and a fetcher stub that
records every request instead of touching the network.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from bs4 import BeautifulSoup

from maischedule.config import ScheduleConfig
from maischedule.errors import FetchError

CONFIG = ScheduleConfig(base_url="http://schedule.test/")

GROUP = "М8О-406Б-19"


def listing_html(groups: list[str]) -> str:
    items = "".join(f'<a class="sc-group-item" href="#">{g}</a>' for g in groups)
    return f'<html><body><div id="schedule-content"><div class="sc-groups">{items}</div></div></body></html>'


def period_html(
    time: str = "",
    kind: str = "",
    title: str = "",
    lecturer: str = "",
    location: str = "",
) -> str:
    cols = []
    if time:
        cols.append(f'<div class="sc-table-col sc-item-time">{time}</div>')
    if kind:
        cols.append(f'<div class="sc-table-col sc-item-type">{kind}</div>')
    if title or lecturer:
        cols.append(
            '<div class="sc-table-col sc-item-title">'
            f'<span class="sc-title">{title}</span>'
            f'<span class="sc-lecturer">{lecturer}</span>'
            "</div>"
        )
    if location:
        cols.append(f'<div class="sc-table-col sc-item-location">{location}</div>')
    return f'<div class="sc-table-row">{"".join(cols)}</div>'


def day_html(header: str, periods: list[str]) -> str:
    return (
        '<div class="sc-container">'
        f'<div class="sc-table-col sc-day-header">{header}</div>'
        f'<div class="sc-table sc-table-detail">{"".join(periods)}</div>'
        "</div>"
    )


def weeks_html(cells: list[str]) -> str:
    rows = []
    for i in range(0, len(cells), 2):
        rows.append("<tr>" + "".join(f"<td>{c}</td>" for c in cells[i : i + 2]) + "</tr>")
    return f'<table class="table">{"".join(rows)}</table>'


def page_html(days: list[str], weeks: Optional[list[str]] = None) -> str:
    table = weeks_html(weeks) if weeks else ""
    return f'<html><body><div id="schedule-content">{table}{"".join(days)}</div></body></html>'


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class StubFetcher:
    """
    Serves canned pages.

    `pages` maps a URL to HTML; a page for a specific week is keyed by
    (url, week). Every call is recorded in `calls` as (url, params).
    """

    def __init__(self, pages: Mapping[Any, str]) -> None:
        self.pages = dict(pages)
        self.calls: list[tuple[str, dict]] = []

    def fetch(self, url: str, params: Optional[Mapping[str, Any]] = None) -> BeautifulSoup:
        params = dict(params or {})
        self.calls.append((url, params))
        key: Any = (url, params["week"]) if "week" in params else url
        if key not in self.pages:
            raise FetchError(f"failed to fetch {url}: 404 Not Found")
        return soup(self.pages[key])
