"""ICS document generation.

Documents are assembled from ordered (property, value) pairs so the field
order of every VCALENDAR, VEVENT and VALARM block is fixed in one place and
can be checked without parsing text.
"""

import hashlib
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

import pytz
from icalendar import Calendar
from icalendar.parser import foldline

from workshopcal.config.constants import (
    EVENT_SEQUENCE,
    EVENT_STATUS,
    ICS_CALSCALE,
    ICS_LINE_ENDING,
    ICS_METHOD,
    ICS_VERSION,
    REMINDERS,
)
from workshopcal.config.settings import DEFAULT_CONFIG, CalendarConfig
from workshopcal.core.escaping import escape_text
from workshopcal.core.event_builder import events_for_workshops
from workshopcal.core.models import Dataset, EventRecord, Workshop
from workshopcal.core.timezone_utils import TimezoneLike, format_floating_local
from workshopcal.exceptions.errors import CalendarRenderError

logger = logging.getLogger(__name__)

Property = Tuple[str, str]


def _single_line(value: str) -> str:
    return value.replace("\r", "").replace("\n", "")


def make_uid(record: EventRecord, config: CalendarConfig = DEFAULT_CONFIG) -> str:
    """Stable UID for an event.

    Derived from the offering id; records built without one get a digest of
    their scheduling fields so the UID still survives regeneration.
    """
    seed = record.uid_seed
    if not seed:
        digest_source = "|".join(
            [record.title, record.start.isoformat(), record.end.isoformat(), record.location]
        )
        seed = hashlib.sha1(digest_source.encode("utf-8")).hexdigest()[:16]
    return _single_line(f"{seed}@{config.uid_domain}")


def alarm_fields(escaped_title: str, trigger: str, suffix: str) -> List[Property]:
    """Properties of one DISPLAY reminder."""
    return [
        ("BEGIN", "VALARM"),
        ("TRIGGER", trigger),
        ("ACTION", "DISPLAY"),
        ("DESCRIPTION", f"Reminder: {escaped_title} {suffix}"),
        ("END", "VALARM"),
    ]


def event_fields(
    record: EventRecord,
    uid: str,
    generated_at: datetime,
    tz: TimezoneLike = None,
) -> List[Property]:
    """Ordered properties of one VEVENT, including both reminders.

    Args:
        record: The event to render.
        uid: UID for the event.
        generated_at: Generation instant written to DTSTAMP.
        tz: Zone aware timestamps are shown in (default: system local).

    Returns:
        List of (name, value) pairs from BEGIN:VEVENT to END:VEVENT.
    """
    title = escape_text(record.title)
    props: List[Property] = [
        ("BEGIN", "VEVENT"),
        ("UID", _single_line(uid)),
        ("DTSTAMP", format_floating_local(generated_at, tz)),
        ("DTSTART", format_floating_local(record.start, tz)),
        ("DTEND", format_floating_local(record.end, tz)),
        ("SUMMARY", title),
        ("DESCRIPTION", escape_text(record.description)),
        ("LOCATION", escape_text(record.location)),
    ]
    if record.url:
        # URI values are not TEXT-escaped
        props.append(("URL", _single_line(record.url)))
    props.append(("STATUS", EVENT_STATUS))
    props.append(("SEQUENCE", EVENT_SEQUENCE))
    for trigger, suffix in REMINDERS:
        props.extend(alarm_fields(title, trigger, suffix))
    props.append(("END", "VEVENT"))
    return props


def calendar_header_fields(config: CalendarConfig = DEFAULT_CONFIG) -> List[Property]:
    """Properties opening a VCALENDAR, up to the first component."""
    return [
        ("BEGIN", "VCALENDAR"),
        ("VERSION", ICS_VERSION),
        ("PRODID", _single_line(config.prodid)),
        ("CALSCALE", ICS_CALSCALE),
        ("METHOD", ICS_METHOD),
        ("X-WR-CALNAME", escape_text(config.calendar_name)),
        ("X-WR-TIMEZONE", _single_line(config.calendar_timezone)),
        ("X-WR-CALDESC", escape_text(config.calendar_description)),
    ]


def render_properties(props: Iterable[Property]) -> str:
    """Serialize properties as CRLF-terminated content lines.

    Lines longer than 75 octets are folded with a CRLF and a single space.
    """
    return "".join(foldline(f"{name}:{value}") + ICS_LINE_ENDING for name, value in props)


def render_event(
    record: EventRecord,
    uid: str,
    generated_at: datetime,
    tz: TimezoneLike = None,
) -> str:
    """Render one VEVENT block."""
    return render_properties(event_fields(record, uid, generated_at, tz))


def document_fields(
    records: Sequence[EventRecord],
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
    tz: TimezoneLike = None,
) -> List[Property]:
    """Ordered properties of a whole VCALENDAR holding ``records``.

    Records are emitted in input order. A record whose UID was already
    emitted is skipped so UIDs stay unique within the document.
    """
    if generated_at is None:
        generated_at = datetime.now(pytz.utc)
    if tz is None:
        tz = config.timezone

    props = calendar_header_fields(config)
    seen_uids = set()
    for record in records:
        uid = make_uid(record, config)
        if uid in seen_uids:
            logger.warning("Skipping duplicate event UID %s (%s)", uid, record.title)
            continue
        seen_uids.add(uid)
        props.extend(event_fields(record, uid, generated_at, tz))
    props.append(("END", "VCALENDAR"))
    return props


def render_document(
    records: Sequence[EventRecord],
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
    tz: TimezoneLike = None,
) -> str:
    """Render a VCALENDAR document with one VEVENT per record.

    Args:
        records: Events to include; may be empty.
        generated_at: Generation instant for DTSTAMP (default: now).
        config: Calendar settings (PRODID, UID domain, display hints).
        tz: Zone for floating times (default: ``config.timezone``).

    Returns:
        ICS text with CRLF line endings.
    """
    return render_properties(document_fields(records, generated_at, config, tz))


def build_ics_for_workshops(
    workshops: Iterable[Workshop],
    dataset: Dataset,
    generated_at: Optional[datetime] = None,
    config: CalendarConfig = DEFAULT_CONFIG,
) -> str:
    """Render one combined document for every offering of ``workshops``."""
    records = events_for_workshops(workshops, dataset)
    logger.debug("Rendering %d event(s)", len(records))
    return render_document(records, generated_at=generated_at, config=config)


def count_events(ics_text: str) -> int:
    """Parse a document and return its VEVENT count.

    Raises:
        CalendarRenderError: If the text is not a parseable VCALENDAR.
    """
    try:
        calendar = Calendar.from_ical(ics_text.encode("utf-8"))
    except ValueError as exc:
        raise CalendarRenderError(f"Generated calendar failed to parse: {exc}") from exc
    if calendar.name != "VCALENDAR":
        raise CalendarRenderError(f"Expected VCALENDAR, got {calendar.name}")
    return len(list(calendar.walk("VEVENT")))
