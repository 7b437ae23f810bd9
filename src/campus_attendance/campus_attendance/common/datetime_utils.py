from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Optional, Union

from ..core.constants import MINUTES_PER_DAY, TIME_PLACEHOLDER

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ClockValue = Union[str, time, datetime, None]
DateValue = Union[str, date, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_minutes(value: ClockValue) -> Optional[int]:
    """Minutes since midnight for "HH:MM" (or "HH:MM:SS"), None if malformed.

    Seconds are dropped. Never raises.
    """
    if isinstance(value, datetime):
        return value.hour * 60 + value.minute
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        return None

    m = _CLOCK_RE.match(value.strip())
    if not m:
        return None
    hours, minutes = int(m.group(1)), int(m.group(2))
    seconds = int(m.group(3)) if m.group(3) else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return hours * 60 + minutes


def format_clock(value: ClockValue) -> str:
    """Render a clock value as HH:MM, or the placeholder when unknown."""
    minutes = to_minutes(value)
    if minutes is None:
        return TIME_PLACEHOLDER
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def worked_minutes(clock_in: ClockValue, clock_out: ClockValue) -> int:
    """Duration between two punches, wrapping past midnight at most once."""
    start = to_minutes(clock_in)
    end = to_minutes(clock_out)
    if start is None or end is None:
        return 0
    if end >= start:
        return end - start
    return (MINUTES_PER_DAY - start) + end


def iso_date_key(value: DateValue) -> Optional[str]:
    """Normalise a date to its zero-padded ISO string, None if malformed.

    ISO strings compare lexicographically in calendar order, so range checks
    work on the returned keys directly.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    candidate = value.strip()[:10]
    if not _ISO_DATE_RE.match(candidate):
        return None
    try:
        parse_iso_date(candidate)
    except ValueError:
        return None
    return candidate


def is_date_covered(
    work_date: DateValue,
    *,
    assigned_date: DateValue = None,
    start_date: DateValue = None,
    end_date: DateValue = None,
) -> bool:
    """True when work_date equals assigned_date or falls in [start, end]."""
    day = iso_date_key(work_date)
    if day is None:
        return False

    single = iso_date_key(assigned_date)
    if single is not None and day == single:
        return True

    start = iso_date_key(start_date)
    end = iso_date_key(end_date)
    if start is None or end is None:
        return False
    return start <= day <= end


def span_days(start_date: DateValue, end_date: DateValue) -> Optional[int]:
    """Inclusive number of days in a range, None if either bound is unusable."""
    start = iso_date_key(start_date)
    end = iso_date_key(end_date)
    if start is None or end is None or end < start:
        return None
    return (parse_iso_date(end) - parse_iso_date(start)).days + 1
