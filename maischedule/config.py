"""
Runtime configuration.

The schedule site lives under one base URL with three pages below it:

    <base>                         group listing (used to validate groups)
    <base>detail.php?group=...     daily / weekly schedule
    <base>session.php?group=...    exam session schedule

Values can be overridden through environment variables:

    MAISCHEDULE_BASE_URL
    MAISCHEDULE_TIMEOUT
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urljoin


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://mai.ru/education/schedule/"
DEFAULT_DETAIL_PATH = "detail.php"
DEFAULT_SESSION_PATH = "session.php"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "maischedule/0.1 (+https://mai.ru/education/schedule/)"


@dataclass(frozen=True)
class ScheduleConfig:
    """
    Where to find the schedule pages and how to request them.
    """

    base_url: str = DEFAULT_BASE_URL
    detail_path: str = DEFAULT_DETAIL_PATH
    session_path: str = DEFAULT_SESSION_PATH
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, base_url: str | None = None) -> "ScheduleConfig":
        """
        Build a config from the environment. An explicit base_url wins over
        MAISCHEDULE_BASE_URL.
        """
        env_base = os.getenv("MAISCHEDULE_BASE_URL", DEFAULT_BASE_URL)
        try:
            timeout = float(os.getenv("MAISCHEDULE_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError:
            timeout = DEFAULT_TIMEOUT
        return cls(base_url=base_url or env_base, timeout=timeout)

    def _base(self) -> str:
        # urljoin drops the last path segment unless the base ends with "/"
        return self.base_url if self.base_url.endswith("/") else self.base_url + "/"

    def listing_url(self) -> str:
        return self._base()

    def detail_url(self) -> str:
        return urljoin(self._base(), self.detail_path)

    def session_url(self) -> str:
        return urljoin(self._base(), self.session_path)
