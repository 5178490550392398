"""Turning workshops and their offerings into EventRecords."""

import logging
from typing import Iterable, List

from workshopcal.config.constants import DEFAULT_LOCATION, DESCRIPTION_SEPARATOR
from workshopcal.core.models import Dataset, EventRecord, Lookups, Offering, Workshop

logger = logging.getLogger(__name__)


def build_description(workshop: Workshop, offering: Offering, lookups: Lookups) -> str:
    """Compose the event description with a metadata appendix.

    The body is the workshop description, else its summary, else empty. After
    a ``---`` separator come Format, Instructor(s), Research Area(s) and
    Quarter lines, each only when it resolves to something, then the
    registration link. Unresolvable lookup ids are dropped silently.

    Args:
        workshop: The workshop being scheduled.
        offering: The offering the event is for.
        lookups: Lookup collections to resolve ids against.

    Returns:
        The description text, unescaped.
    """
    parts = [workshop.description or workshop.summary or "", DESCRIPTION_SEPARATOR]

    format_label = lookups.label("formats", workshop.format_id)
    if format_label:
        parts.append(f"Format: {format_label}\n")

    instructors = ", ".join(lookups.labels("instructors", workshop.instructor_ids))
    if instructors:
        parts.append(f"Instructor(s): {instructors}\n")

    areas = ", ".join(lookups.labels("areas", workshop.area_ids))
    if areas:
        parts.append(f"Research Area(s): {areas}\n")

    if offering.quarter:
        quarter = f"{offering.quarter} {offering.year}" if offering.year is not None else offering.quarter
        parts.append(f"Quarter: {quarter}\n")

    if offering.registration_url:
        parts.append(f"\nRegister: {offering.registration_url}")

    return "".join(parts)


def event_from_offering(workshop: Workshop, offering: Offering, lookups: Lookups) -> EventRecord:
    """Build the EventRecord for one (workshop, offering) pair."""
    return EventRecord(
        title=workshop.title,
        description=build_description(workshop, offering, lookups),
        location=offering.location or DEFAULT_LOCATION,
        start=offering.start,
        end=offering.end,
        url=offering.registration_url or "",
        uid_seed=offering.id,
    )


def events_for_workshops(workshops: Iterable[Workshop], dataset: Dataset) -> List[EventRecord]:
    """One EventRecord per offering of each workshop, in input order.

    Workshops without offerings contribute no events.
    """
    records = []
    for workshop in workshops:
        offerings = dataset.offerings_for(workshop)
        if not offerings:
            logger.debug("Workshop '%s' has no offerings, skipping", workshop.id)
            continue
        records.extend(event_from_offering(workshop, o, dataset.lookups) for o in offerings)
    return records
