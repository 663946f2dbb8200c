"""
Group validation.

A group is accepted when it
1. looks like a group code (e.g. "М8О-406Б-19"), checked locally, and
2. appears in the group listing published on the schedule landing page.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from maischedule.config import ScheduleConfig
from maischedule.errors import GroupNotFoundError, GroupShapeError, ScheduleError
from maischedule.parse import CONTENT_SELECTOR

logger = logging.getLogger(__name__)

# "-", 1-3 ASCII digits, optional space, 1-3 letters of any script, "-", digits.
# [^\W\d_] also admits numeric letters such as "Ⅻ"; isalpha() rules them out.
GROUP_RE = re.compile(r"-[0-9]{1,3}[ \t\n\f\r]?([^\W\d_]{1,3})-[0-9]+")

GROUP_ITEM_SELECTOR = "a.sc-group-item"


def check_group_shape(group: str) -> None:
    """
    Raise GroupShapeError if `group` does not look like a group code.
    """
    if not any(m.group(1).isalpha() for m in GROUP_RE.finditer(group)):
        raise GroupShapeError(f"group '{group}' doesn't match the group pattern")


def ensure_group(group: str, fetcher, config: Optional[ScheduleConfig] = None) -> None:
    """
    Raising form of validate_group.

    Makes no request if the shape check fails, exactly one otherwise.
    """
    config = config or ScheduleConfig()
    check_group_shape(group)

    page = fetcher.fetch(config.listing_url())

    for region in page.select(CONTENT_SELECTOR):
        for item in region.select(GROUP_ITEM_SELECTOR):
            if group in item.get_text(strip=True):
                logger.info("group %s found in listing", group)
                return

    raise GroupNotFoundError(f"group '{group}' not found in the schedule listing")


def validate_group(
    group: str, fetcher, config: Optional[ScheduleConfig] = None
) -> Tuple[int, Optional[ScheduleError]]:
    """
    Check that `group` is well-formed and published.

    Returns:
        (0, None) on success, otherwise (error.code, error):
        1 bad shape, 2 not listed, 10/11 listing page fetch/parse failure.
    """
    try:
        ensure_group(group, fetcher, config)
    except ScheduleError as exc:
        logger.warning("group validation failed: %s", exc)
        return exc.code, exc
    return 0, None
