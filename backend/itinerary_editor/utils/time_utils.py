# backend/itinerary_editor/utils/time_utils.py

from datetime import date, datetime, timedelta
from typing import List, Optional

import pytz


MORNING = "Morning"
AFTERNOON = "Afternoon"
EVENING = "Evening"

# Order matters: a block's index in this tuple is its slot index within a day.
BLOCK_NAMES = (MORNING, AFTERNOON, EVENING)

BLOCK_RANGES = {
    MORNING: "4:00 AM - 12:00 PM",
    AFTERNOON: "12:00 PM - 6:00 PM",
    EVENING: "6:00 PM - 4:00 AM",
}


# -------------------------------------------------------------------
# PARSING
# -------------------------------------------------------------------
def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp, keeping whatever offset it carries.
    Accepts a trailing 'Z' and a space instead of 'T'.
    Returns None for anything unparsable.
    """
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


# -------------------------------------------------------------------
# CLASSIFICATION (used for hard_start constraints only)
# -------------------------------------------------------------------
def block_of(timestamp) -> Optional[str]:
    """Time block for the timestamp's own wall-clock hour; Evening wraps past midnight."""
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return None

    hour = parsed.hour
    if 4 <= hour < 12:
        return MORNING
    if 12 <= hour < 18:
        return AFTERNOON
    return EVENING


def date_of(timestamp) -> str:
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return ""
    return parsed.date().isoformat()


def dates_between(start_date: str, end_date: str) -> List[str]:
    """Inclusive list of YYYY-MM-DD dates; empty when either bound is invalid."""
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except (TypeError, ValueError):
        return []

    days = []
    current = start
    while current <= end:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


# -------------------------------------------------------------------
# DISPLAY
# -------------------------------------------------------------------
def time_range_label(block_name: str) -> str:
    return BLOCK_RANGES.get(block_name, "")


def _clock(moment: datetime) -> str:
    hours = moment.hour % 12 or 12
    suffix = "PM" if moment.hour >= 12 else "AM"
    return f"{hours}:{moment.minute:02d} {suffix}"


def format_event_time(hard_start: Optional[str], block_name: str, timezone: Optional[str] = None) -> str:
    """
    Label shown on an event card.

    - hard_start with an offset + a known timezone hint -> converted to that zone
    - hard_start without offset -> shown as written (destination-local)
    - no / unreadable hard_start -> the block's range
    """
    parsed = parse_timestamp(hard_start)
    if parsed is None:
        return time_range_label(block_name)

    if timezone and parsed.tzinfo is not None:
        try:
            zone = pytz.timezone(timezone)
        except pytz.UnknownTimeZoneError:
            return _clock(parsed)
        local = parsed.astimezone(zone)
        return f"{_clock(local)} {local.strftime('%Z')}"

    return _clock(parsed)


def format_address(street_address: Optional[str] = None,
                   city: Optional[str] = None,
                   country: Optional[str] = None,
                   postal_code: Optional[int] = None) -> str:
    parts = [street_address, city, country, str(postal_code) if postal_code else None]
    return ", ".join(p for p in parts if p)
