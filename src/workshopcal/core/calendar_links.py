"""Calendar provider "add event" links.

Each function here takes one EventRecord and returns one string. None of
them share state, so links for many events can be built independently.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from workshopcal.config.constants import (
    GOOGLE_CALENDAR_URL,
    OFFICE365_COMPOSE_URL,
    OUTLOOK_COMPOSE_PATH,
    OUTLOOK_COMPOSE_URL,
    YAHOO_API_VERSION,
    YAHOO_CALENDAR_URL,
)
from workshopcal.config.settings import DEFAULT_CONFIG, CalendarConfig
from workshopcal.core.ics_builder import render_document
from workshopcal.core.models import EventRecord
from workshopcal.core.timezone_utils import TimezoneLike, format_iso_utc, format_utc


@dataclass(frozen=True)
class CalendarLinks:
    """The five per-event calendar artifacts."""

    google: str
    outlook: str
    office365: str
    yahoo: str
    # Single-event ICS text for Apple Calendar and other ICS clients
    ics: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def format_duration(minutes: int) -> str:
    """Format a duration in minutes as Yahoo's ``HHMM``.

    Raises:
        ValueError: If ``minutes`` is negative.
    """
    if minutes < 0:
        raise ValueError(f"Duration cannot be negative: {minutes} minutes")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}{mins:02d}"


def _build_url(base: str, params: Mapping[str, str]) -> str:
    return f"{base}?{urlencode(params)}"


def google_calendar_url(event: EventRecord, tz: TimezoneLike = None) -> str:
    """Google Calendar template link.

    Google template links cannot carry reminders; the user's defaults apply.
    """
    details = event.description or ""
    if event.url:
        details = f"{details}\n\nMore info: {event.url}"
    return _build_url(GOOGLE_CALENDAR_URL, {
        "action": "TEMPLATE",
        "text": event.title,
        "details": details,
        "location": event.location or "",
        "dates": f"{format_utc(event.start, tz)}/{format_utc(event.end, tz)}",
    })


def _outlook_params(event: EventRecord, tz: TimezoneLike) -> Dict[str, str]:
    return {
        "path": OUTLOOK_COMPOSE_PATH,
        "rru": "addevent",
        "subject": event.title,
        "body": event.description or "",
        "location": event.location or "",
        "startdt": format_iso_utc(event.start, tz),
        "enddt": format_iso_utc(event.end, tz),
    }


def outlook_url(event: EventRecord, tz: TimezoneLike = None) -> str:
    """Outlook.com compose deep link."""
    return _build_url(OUTLOOK_COMPOSE_URL, _outlook_params(event, tz))


def office365_url(event: EventRecord, tz: TimezoneLike = None) -> str:
    """Office 365 compose deep link."""
    return _build_url(OFFICE365_COMPOSE_URL, _outlook_params(event, tz))


def yahoo_url(event: EventRecord, tz: TimezoneLike = None) -> str:
    """Yahoo Calendar link with start time and ``HHMM`` duration."""
    return _build_url(YAHOO_CALENDAR_URL, {
        "v": YAHOO_API_VERSION,
        "title": event.title,
        "desc": event.description or "",
        "in_loc": event.location or "",
        "st": format_utc(event.start, tz),
        "dur": format_duration(event.duration_minutes),
    })


def ics_content(
    event: EventRecord,
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
    tz: TimezoneLike = None,
) -> str:
    """Single-event ICS document. Delivering it as a file is up to the caller."""
    return render_document([event], generated_at=generated_at, config=config, tz=tz)


def generate_links(
    event: EventRecord,
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
    tz: TimezoneLike = None,
) -> CalendarLinks:
    """All five calendar artifacts for one event.

    Args:
        event: The event to link.
        generated_at: DTSTAMP for the ICS artifact (default: now).
        config: Calendar settings.
        tz: Zone naive timestamps are read in (default: ``config.timezone``).
    """
    if tz is None:
        tz = config.timezone
    return CalendarLinks(
        google=google_calendar_url(event, tz),
        outlook=outlook_url(event, tz),
        office365=office365_url(event, tz),
        yahoo=yahoo_url(event, tz),
        ics=ics_content(event, generated_at=generated_at, config=config, tz=tz),
    )


def webcal_url(base_url: str, filters: Optional[Mapping[str, Optional[str]]] = None) -> str:
    """Subscription URL for a hosted calendar.

    Non-empty filters are appended as query parameters and the http(s)
    scheme is swapped for ``webcal``.

    Raises:
        ValueError: If ``base_url`` is not an absolute http(s) URL.
    """
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"Expected an absolute http(s) URL, got {base_url!r}")

    params = [(key, value) for key, value in (filters or {}).items() if value]
    query = "&".join(part for part in (parts.query, urlencode(params)) if part)
    return urlunsplit(("webcal", parts.netloc, parts.path, query, parts.fragment))
