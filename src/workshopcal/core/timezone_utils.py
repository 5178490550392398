"""Timezone resolution and calendar date formatting."""

import logging
from datetime import datetime, tzinfo
from functools import lru_cache
from typing import Optional, Union

import pytz
import tzlocal
from dateutil import parser
from dateutil import tz as du_tz

from workshopcal.config.constants import ABBR_TO_TZ, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

TimezoneLike = Union[tzinfo, str, None]

FLOATING_FORMAT = "%Y%m%dT%H%M%S"


@lru_cache(maxsize=32)
def resolve_timezone(tz_str: str) -> tzinfo:
    """Resolve a timezone string to a timezone object.

    Args:
        tz_str: The timezone string (e.g., "PST", "America/Los_Angeles", "local").

    Returns:
        A pytz zone where possible, a dateutil zone otherwise, UTC as last resort.
    """
    tz_str_raw = tz_str or DEFAULT_TIMEZONE
    tz_upper = tz_str_raw.upper()

    if tz_upper == "LOCAL":
        local_tz_obj = tzlocal.get_localzone()
        tz_name = getattr(local_tz_obj, "zone", str(local_tz_obj))
    else:
        tz_name = ABBR_TO_TZ.get(tz_upper, tz_str_raw)

    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        fallback = du_tz.gettz(tz_name)
        if fallback is not None:
            return fallback
        logger.warning("Couldn't resolve timezone '%s', using UTC", tz_str_raw)
        return pytz.utc


def coerce_timezone(tz: TimezoneLike = None) -> tzinfo:
    """Accept a tzinfo, a zone name or None (system local zone)."""
    if tz is None:
        return resolve_timezone(DEFAULT_TIMEZONE)
    if isinstance(tz, str):
        return resolve_timezone(tz)
    return tz


def attach_timezone(tzobj: tzinfo, naive_dt: datetime) -> datetime:
    """Return timezone-aware datetime, using proper DST rules where possible.

    Args:
        tzobj: The timezone object (pytz or dateutil).
        naive_dt: A naive datetime to attach the timezone to.

    Returns:
        A timezone-aware datetime.
    """
    if hasattr(tzobj, "localize"):
        try:
            return tzobj.localize(naive_dt, is_dst=None)
        except pytz.exceptions.InvalidTimeError:
            # Ambiguous or skipped wall time: take the DST reading
            return tzobj.localize(naive_dt, is_dst=True)
    return naive_dt.replace(tzinfo=tzobj)


def to_local(t: datetime, tz: TimezoneLike = None) -> datetime:
    """Wall-clock view of ``t``. Naive values are already local."""
    if t.tzinfo is None:
        return t
    return t.astimezone(coerce_timezone(tz))


def to_utc(t: datetime, tz: TimezoneLike = None) -> datetime:
    """Convert ``t`` to UTC, reading naive values as wall time in ``tz``."""
    if t.tzinfo is None:
        t = attach_timezone(coerce_timezone(tz), t)
    return t.astimezone(pytz.utc)


def format_floating_local(t: datetime, tz: TimezoneLike = None) -> str:
    """Format as iCalendar floating time: ``YYYYMMDDTHHMMSS``."""
    return to_local(t, tz).strftime(FLOATING_FORMAT)


def format_utc(t: datetime, tz: TimezoneLike = None) -> str:
    """Format as UTC basic time: ``YYYYMMDDTHHMMSSZ``."""
    return to_utc(t, tz).strftime(FLOATING_FORMAT) + "Z"


def format_iso_utc(t: datetime, tz: TimezoneLike = None) -> str:
    """Format as extended ISO-8601 UTC with milliseconds, e.g. ``2025-03-10T17:00:00.000Z``."""
    u = to_utc(t, tz)
    return f"{u.strftime('%Y-%m-%dT%H:%M:%S')}.{u.microsecond // 1000:03d}Z"


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a dataset timestamp.

    Args:
        value: ISO-8601 style string, datetime, or None.

    Returns:
        The parsed datetime (naive when the input carries no offset), or None.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return parser.isoparse(value)
    except ValueError:
        return parser.parse(value)
