"""
Schedule export: JSON and iCalendar (.ics).

The .ics file can be imported into Google Calendar, Outlook or Apple
Calendar. Day dates on the site carry no year ("01.09"), so the caller
supplies the year of the first day; it advances whenever the month goes
backwards (a December-January session).
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from maischedule.model import Schedule

_TIME_RANGE_RE = re.compile(r"(\d{1,2}:\d{2})\s*[-–—]\s*(\d{1,2}:\d{2})")


def schedule_to_json(schedule: Schedule, indent: Optional[int] = 2) -> str:
    return json.dumps(schedule.to_dict(), ensure_ascii=False, indent=indent)


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _time_range(text: str) -> Optional[Tuple[str, str]]:
    m = _TIME_RANGE_RE.search(text)
    if not m:
        return None
    return m.group(1), m.group(2)


def _day_month(day_dd_mm: str) -> Optional[int]:
    parts = day_dd_mm.split(".")
    if len(parts) != 2 or not parts[1].isdigit():
        return None
    return int(parts[1])


def _dt_local(day_dd_mm: str, year: int, time_hh_mm: str) -> str:
    """
    Convert "DD.MM" + year + "HH:MM" to ICS local datetime 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{day_dd_mm}.{year} {time_hh_mm}", "%d.%m.%Y %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def export_schedule_to_ics(schedule: Schedule, year: int, out_path: str | Path) -> int:
    """
    Export every period with a readable date and time range to an .ics file.
    Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//maischedule//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    prev_month: Optional[int] = None
    for day in schedule.days:
        month = _day_month(day.date)
        if month is not None:
            if prev_month is not None and month < prev_month:
                year += 1
            prev_month = month

        for period in day.periods:
            times = _time_range(period.time)
            if times is None:
                continue
            try:
                dtstart = _dt_local(day.date, year, times[0])
                dtend = _dt_local(day.date, year, times[1])
            except ValueError:
                continue

            uid = f"{schedule.group}-{dtstart}"
            summary = " ".join(x for x in (period.kind, period.title) if x) or "Class"

            lines.append("BEGIN:VEVENT")
            lines.append(f"UID:{_ics_escape(uid)}")
            lines.append(f"DTSTAMP:{dtstamp}")
            lines.append(f"DTSTART:{dtstart}")
            lines.append(f"DTEND:{dtend}")
            lines.append(f"SUMMARY:{_ics_escape(summary)}")
            if period.location:
                lines.append(f"LOCATION:{_ics_escape(period.location)}")
            if period.instructor:
                lines.append(f"DESCRIPTION:{_ics_escape(period.instructor)}")
            lines.append("END:VEVENT")
            count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
