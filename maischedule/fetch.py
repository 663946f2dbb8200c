"""
Page fetching (URL -> parsed HTML document).

Thin wrapper around requests + BeautifulSoup. Each call makes exactly one
GET request, no retries; the response is closed before returning, also
when parsing fails.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests
from bs4 import BeautifulSoup

from maischedule.config import ScheduleConfig
from maischedule.errors import FetchError

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """
    Fetch a URL and return it as a BeautifulSoup document.

    Anything with a compatible `fetch(url, params=None)` method can stand in
    for this class (the tests use a stub serving inline HTML).
    """

    def __init__(
        self,
        config: Optional[ScheduleConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ScheduleConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = self.config.user_agent

    def fetch(self, url: str, params: Optional[Mapping[str, Any]] = None) -> BeautifulSoup:
        """
        GET `url` with optional query `params` and parse the body as HTML.

        Raises:
            FetchError: network failure or non-2xx status

        A body that is not a schedule page still parses; the parsers raise
        ParseError when the schedule region is missing.
        """
        logger.info("GET %s %s", url, dict(params) if params else "")
        try:
            with self.session.get(url, params=params, timeout=self.config.timeout) as resp:
                resp.raise_for_status()
                return BeautifulSoup(resp.text, "html.parser")
        except requests.RequestException as exc:
            raise FetchError(f"failed to fetch {url}: {exc}") from exc

    def close(self) -> None:
        """
        Close the session if this fetcher created it.
        """
        if self._owns_session:
            self.session.close()
